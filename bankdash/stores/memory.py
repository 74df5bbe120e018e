"""In-memory transaction store with an incrementally maintained balance."""

import threading
from collections.abc import Iterable
from decimal import Decimal
from typing import Self

from bankdash.analytics.engine import net_effect
from bankdash.core.models import AddTransactionResult, LedgerSnapshot, Notification, Transaction
from bankdash.core.settings import Settings
from bankdash.stores.base import RecordBuilder, TransactionStore


def _by_time(transactions: Iterable[Transaction]) -> tuple[Transaction, ...]:
    return tuple(sorted(transactions, key=lambda tx: tx.timestamp))


class InMemoryTransactionStore(TransactionStore):
    """Process-local store; one lock serializes writes and snapshot reads."""

    def __init__(self, opening_balance: Decimal = Decimal("0")) -> None:
        """Start with an empty log at the given opening balance."""
        self._lock = threading.Lock()
        self._opening_balance = opening_balance
        self._balance = opening_balance
        self._transactions: tuple[Transaction, ...] = ()
        self._notifications: list[Notification] = []

    @classmethod
    def from_settings(cls, settings: Settings) -> Self:
        """Build an empty store at the configured opening balance."""
        return cls(opening_balance=settings.opening_balance)

    def snapshot(self) -> LedgerSnapshot:
        """Return the chronological log and balances as one consistent read."""
        with self._lock:
            return LedgerSnapshot(self._transactions, self._balance, self._opening_balance)

    def record(self, build: RecordBuilder) -> AddTransactionResult:
        """Build the new entry from a fresh snapshot and commit it, all under the lock."""
        with self._lock:
            result = build(LedgerSnapshot(self._transactions, self._balance, self._opening_balance))
            self._transactions = _by_time(result.log)
            self._balance = result.balance
            self._notifications.insert(0, result.notification)
            return result

    def load(self, transactions: Iterable[Transaction]) -> int:
        """Merge pre-built transactions into the log and apply them to the balance."""
        incoming = list(transactions)
        with self._lock:
            self._transactions = _by_time((*self._transactions, *incoming))
            self._balance += net_effect(incoming)
        return len(incoming)

    def list_notifications(self) -> list[Notification]:
        """Return notifications, newest first."""
        with self._lock:
            return list(self._notifications)

    def add_notification(self, notification: Notification) -> None:
        """Store a notification at the head of the list."""
        with self._lock:
            self._notifications.insert(0, notification)

    def dismiss_notification(self, notification_id: str) -> bool:
        """Remove a notification by id."""
        with self._lock:
            remaining = [n for n in self._notifications if n.id != notification_id]
            removed = len(remaining) != len(self._notifications)
            self._notifications = remaining
            return removed
