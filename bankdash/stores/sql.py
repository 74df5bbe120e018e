"""SQLAlchemy-backed transaction store.

The balance is not stored: every snapshot replays the persisted log from the configured opening balance inside one session, and every write (transaction plus its notification) commits in one DB transaction.
"""

import threading
from collections.abc import Iterable
from decimal import Decimal
from typing import Self

from sqlalchemy import delete, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from bankdash.analytics.engine import replay_balance
from bankdash.core.db import Base, NotificationRecord, TransactionRecord, get_engine
from bankdash.core.models import AddTransactionResult, LedgerSnapshot, Notification, Transaction
from bankdash.core.settings import Settings
from bankdash.core.utils import get_logger
from bankdash.stores.base import RecordBuilder, TransactionStore

logger = get_logger("bankdash.store.sql")


class SqlTransactionStore(TransactionStore):
    """Store persisting transactions and notifications through SQLAlchemy."""

    def __init__(self, engine: Engine, opening_balance: Decimal = Decimal("0")) -> None:
        """Initialize the store with an engine and the balance before the first transaction."""
        self.engine = engine
        self.opening_balance = opening_balance
        self.Session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> Self:
        """Build a store on the configured database URL and make sure its tables exist."""
        store = cls(get_engine(settings.database_url), opening_balance=settings.opening_balance)
        store.init_schema()
        return store

    def init_schema(self) -> None:
        """Create the transactions and notifications tables if missing."""
        Base.metadata.create_all(self.engine)

    def _read(self, session: Session) -> LedgerSnapshot:
        stmt = select(TransactionRecord).order_by(TransactionRecord.created_at, TransactionRecord.seq)
        transactions = tuple(row.to_model() for row in session.scalars(stmt))
        return LedgerSnapshot(transactions, replay_balance(transactions, self.opening_balance), self.opening_balance)

    def snapshot(self) -> LedgerSnapshot:
        """Read the full log in one session and replay its balance."""
        with self.Session() as session, session.begin():
            return self._read(session)

    def record(self, build: RecordBuilder) -> AddTransactionResult:
        """Build the new entry from a fresh snapshot and commit it with its notification."""
        with self._lock, self.Session() as session, session.begin():
            result = build(self._read(session))
            session.add(TransactionRecord.from_model(result.transaction))
            session.add(NotificationRecord.from_model(result.notification))
        logger.debug(f"Committed transaction {result.transaction.id}")
        return result

    def load(self, transactions: Iterable[Transaction]) -> int:
        """Insert pre-built transactions in one commit."""
        rows = [TransactionRecord.from_model(tx) for tx in transactions]
        with self._lock, self.Session() as session, session.begin():
            session.add_all(rows)
        return len(rows)

    def list_notifications(self) -> list[Notification]:
        """Return notifications, newest first."""
        stmt = select(NotificationRecord).order_by(NotificationRecord.created_at.desc(), NotificationRecord.seq.desc())
        with self.Session() as session:
            return [row.to_model() for row in session.scalars(stmt)]

    def add_notification(self, notification: Notification) -> None:
        """Persist a notification."""
        with self._lock, self.Session() as session, session.begin():
            session.add(NotificationRecord.from_model(notification))

    def dismiss_notification(self, notification_id: str) -> bool:
        """Delete a notification by id."""
        with self._lock, self.Session() as session, session.begin():
            result = session.execute(delete(NotificationRecord).where(NotificationRecord.id == notification_id))
            return result.rowcount > 0
