"""Base store abstraction for transaction logs.

This module defines the abstract base class every transaction store implements. A store owns the ledger state (transactions, balance, notifications) and guarantees consistent snapshot reads and serialized writes; all derived views are computed by the stateless aggregation engine from a snapshot.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from typing import Self

from bankdash.core.models import AddTransactionResult, LedgerSnapshot, Notification, Transaction
from bankdash.core.settings import Settings

RecordBuilder = Callable[[LedgerSnapshot], AddTransactionResult]


class TransactionStore(ABC):
    """Abstract base class for all transaction stores."""

    @classmethod
    @abstractmethod
    def from_settings(cls, settings: Settings) -> Self:
        """Build a store from application settings."""

    @abstractmethod
    def snapshot(self) -> LedgerSnapshot:
        """Return the chronological log and balances as one consistent read."""

    @abstractmethod
    def record(self, build: RecordBuilder) -> AddTransactionResult:
        """Run `build` against a fresh snapshot under the write lock and persist its result.

        Nothing is persisted when `build` raises.
        """

    @abstractmethod
    def load(self, transactions: Iterable[Transaction]) -> int:
        """Bulk-import pre-built transactions without emitting notifications. Returns the count loaded."""

    @abstractmethod
    def list_notifications(self) -> list[Notification]:
        """Return notifications, newest first."""

    @abstractmethod
    def add_notification(self, notification: Notification) -> None:
        """Store a notification."""

    @abstractmethod
    def dismiss_notification(self, notification_id: str) -> bool:
        """Remove a notification. Returns False when the id is unknown."""

    def is_empty(self) -> bool:
        """True when the log holds no transactions."""
        return not self.snapshot().transactions
