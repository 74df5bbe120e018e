"""DB engine and ORM records for the Student Bank Dashboard."""

from sqlalchemy import Column, DateTime, Integer, Numeric, String, Text, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from bankdash.core.models import Notification, Severity, Transaction, TransactionCategory, TransactionType
from bankdash.core.utils import as_utc

Base = declarative_base()


class TransactionRecord(Base):
    """A persisted ledger entry. `seq` preserves insertion order for same-instant entries."""

    __tablename__ = "transactions"
    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String, unique=True, index=True, nullable=False)
    user_id = Column(String, nullable=True)
    amount = Column(Numeric(18, 2), nullable=False)  # amounts are capped at models.MAX_AMOUNT
    type = Column(String, nullable=False)
    category = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)

    @classmethod
    def from_model(cls, tx: Transaction) -> "TransactionRecord":
        """Build a row from a Transaction."""
        return cls(
            id=tx.id,
            amount=tx.amount,
            type=tx.type.value,
            category=tx.category.value,
            description=tx.description,
            created_at=as_utc(tx.timestamp),
        )

    def to_model(self) -> Transaction:
        """Convert the row back to a Transaction."""
        return Transaction(
            id=self.id,
            amount=self.amount,
            type=TransactionType(self.type),
            category=TransactionCategory(self.category),
            description=self.description,
            timestamp=as_utc(self.created_at),
        )


class NotificationRecord(Base):
    """A persisted notification."""

    __tablename__ = "notifications"
    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String, unique=True, index=True, nullable=False)
    user_id = Column(String, nullable=True)
    title = Column(String, nullable=False, default="")
    message = Column(Text, nullable=False)
    type = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)

    @classmethod
    def from_model(cls, notification: Notification) -> "NotificationRecord":
        """Build a row from a Notification."""
        return cls(
            id=notification.id,
            title=notification.title,
            message=notification.message,
            type=notification.severity.value,
            created_at=as_utc(notification.timestamp),
        )

    def to_model(self) -> Notification:
        """Convert the row back to a Notification."""
        return Notification(
            id=self.id,
            title=self.title,
            message=self.message,
            severity=Severity(self.type),
            timestamp=as_utc(self.created_at),
        )


def get_engine(url: str) -> Engine:
    """Create a SQLAlchemy engine; SQLite connections are shared across threadpool workers."""
    if not url.startswith("sqlite"):
        return create_engine(url)
    if url in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(url, connect_args={"check_same_thread": False}, poolclass=StaticPool)
    return create_engine(url, connect_args={"check_same_thread": False})
