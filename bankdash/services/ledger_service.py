"""LedgerService: connects a transaction store to the aggregation engine.

Each read takes one snapshot of the store and hands it to the pure engine functions, so a single view never mixes a stale log with a fresh balance. Writes go through the store's `record`, which serializes them.
"""

from datetime import datetime
from decimal import Decimal

from bankdash.analytics import engine
from bankdash.core.errors import NotificationNotFoundError
from bankdash.core.models import (
    BalancePoint,
    BalanceReport,
    CategorySpending,
    DayGroup,
    FinancialSummary,
    MonthlyRollup,
    Notification,
    RollingWindow,
    Transaction,
    TransactionRecorded,
    TrendReport,
)
from bankdash.core.settings import Settings
from bankdash.core.utils import get_logger, utcnow
from bankdash.stores.base import TransactionStore

logger = get_logger("bankdash.ledger")


class LedgerService:
    """Records transactions and derives dashboard views from store snapshots."""

    def __init__(self, store: TransactionStore, settings: Settings) -> None:
        """Initialize the service with a store and settings."""
        self.store = store
        self.settings = settings

    # --- Writes ---

    def record_transaction(
        self,
        amount: object,
        type_: str,
        category: str,
        description: str,
        now: datetime | None = None,
    ) -> TransactionRecorded:
        """Validate and record a transaction, returning it with the new balance and its notification."""
        moment = now or utcnow()

        def build(snapshot):
            return engine.add_transaction(
                snapshot.transactions,
                amount,
                type_,
                category,
                description,
                moment,
                balance=snapshot.balance,
            )

        result = self.store.record(build)
        tx = result.transaction
        logger.info(f"Recorded {tx.type.value} {tx.id}: {tx.amount} ({tx.category.value}), balance={result.balance}")
        return TransactionRecorded(transaction=tx, balance=result.balance, notification=result.notification)

    def notify(self, message: str, severity: str, title: str = "", now: datetime | None = None) -> Notification:
        """Add a notification directly."""
        notification = engine.build_notification(message, severity, now or utcnow(), title=title)
        self.store.add_notification(notification)
        logger.info(f"Added {notification.severity.value} notification {notification.id}")
        return notification

    def dismiss(self, notification_id: str) -> None:
        """Dismiss a notification; unknown ids raise NotificationNotFoundError."""
        if not self.store.dismiss_notification(notification_id):
            logger.warning(f"Dismiss requested for unknown notification {notification_id}")
            raise NotificationNotFoundError(notification_id)
        logger.info(f"Dismissed notification {notification_id}")

    def seed(self, transactions: list[Transaction]) -> int:
        """Load fixture transactions into an empty store. Returns the number loaded."""
        if not self.store.is_empty():
            logger.info("Store already holds transactions; skipping sample data")
            return 0
        count = self.store.load(transactions)
        logger.info(f"Seeded store with {count} sample transactions")
        return count

    # --- Reads ---

    def transactions(self, newest_first: bool = True) -> list[Transaction]:
        """The full log, newest first by default."""
        log = list(self.store.snapshot().transactions)
        return log[::-1] if newest_first else log

    def notifications(self) -> list[Notification]:
        """Notifications, newest first."""
        return self.store.list_notifications()

    def history(self, limit_days: int | None = None) -> list[DayGroup]:
        """Transactions grouped per day, newest first."""
        return engine.group_by_day(self.store.snapshot().transactions, limit_days)

    def balance(self) -> Decimal:
        """Current tracked balance."""
        return self.store.snapshot().balance

    def reconcile(self) -> BalanceReport:
        """Compare the tracked balance with a replay of the full log from the opening balance."""
        snapshot = self.store.snapshot()
        replayed = engine.replay_balance(snapshot.transactions, snapshot.opening_balance)
        reconciled = replayed == snapshot.balance
        if not reconciled:
            logger.warning(f"Balance mismatch: tracked={snapshot.balance} replayed={replayed}")
        return BalanceReport(
            balance=snapshot.balance,
            opening_balance=snapshot.opening_balance,
            replayed_balance=replayed,
            reconciled=reconciled,
        )

    def balance_series(self) -> list[BalancePoint]:
        """Running balance after each transaction, starting from the balance before the earliest one."""
        snapshot = self.store.snapshot()
        opening = engine.opening_balance_for(snapshot.balance, snapshot.transactions)
        return engine.compute_balance_series(snapshot.transactions, opening)

    def category_spending(self) -> list[CategorySpending]:
        """Withdrawal totals and shares per category."""
        return engine.compute_category_spending(self.store.snapshot().transactions)

    def monthly_rollup(self, include_year: bool = False) -> list[MonthlyRollup]:
        """Income and spending per month, oldest first."""
        return engine.compute_monthly_rollup(self.store.snapshot().transactions, include_year)

    def trend(self, include_year: bool = False) -> TrendReport:
        """Net change, savings rate and month-over-month change."""
        return engine.compute_trend(self.monthly_rollup(include_year))

    def rolling_window(self, now: datetime | None = None, window_days: int | None = None) -> RollingWindow:
        """Income and spending over the trailing window."""
        days = self.settings.rolling_window_days if window_days is None else window_days
        return engine.compute_rolling_window(self.store.snapshot().transactions, now or utcnow(), days)

    def summary(self, now: datetime | None = None) -> FinancialSummary:
        """Balance plus trailing-window totals from one snapshot."""
        snapshot = self.store.snapshot()
        return engine.compute_summary(
            snapshot.transactions, snapshot.balance, now or utcnow(), self.settings.rolling_window_days
        )
