"""Pydantic models for the Student Bank Dashboard.

This module defines the ledger records (Transaction, Notification), the closed enumerations they use, the views produced by the aggregation engine, and the request/response bodies of the HTTP API. Money is carried as Decimal internally and rendered as a JSON number.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import StrEnum
from typing import Annotated, NamedTuple

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, PlainSerializer, field_validator

from bankdash.core.utils import as_utc

# JSON numbers are IEEE-754 doubles: 15 significant digits round-trip exactly, so a single
# amount is capped at 13 integer digits plus cents.
MAX_AMOUNT = Decimal("9999999999999.99")

Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]
Amount = Annotated[Money, Field(gt=0, le=MAX_AMOUNT, decimal_places=2)]
Timestamp = Annotated[AwareDatetime, Field(description="Timezone-aware instant, stored in UTC")]


class TransactionType(StrEnum):
    """Direction of a transaction."""

    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"


class TransactionCategory(StrEnum):
    """Closed set of transaction categories; declaration order breaks ties in analytics."""

    SALARY = "salary"
    SHOPPING = "shopping"
    FOOD = "food"
    TRANSPORT = "transport"
    ENTERTAINMENT = "entertainment"
    UTILITIES = "utilities"
    OTHER = "other"


class Severity(StrEnum):
    """Notification severity."""

    INFO = "info"
    WARNING = "warning"
    SUCCESS = "success"


CATEGORY_ORDER = {category: index for index, category in enumerate(TransactionCategory)}


class Transaction(BaseModel):
    """An immutable ledger entry."""

    model_config = ConfigDict(frozen=True)

    id: str
    amount: Amount
    type: TransactionType
    category: TransactionCategory
    description: str = Field(min_length=1)
    timestamp: Timestamp

    @field_validator("timestamp")
    @classmethod
    def _to_utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    @property
    def signed_amount(self) -> Decimal:
        """Amount with the direction applied: positive for deposits, negative for withdrawals."""
        return self.amount if self.type is TransactionType.DEPOSIT else -self.amount


class Notification(BaseModel):
    """A dismissible alert derived from ledger activity."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str = ""
    message: str
    severity: Severity
    timestamp: Timestamp

    @field_validator("timestamp")
    @classmethod
    def _to_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class LedgerSnapshot(NamedTuple):
    """One consistent read of a store: chronological log plus balances."""

    transactions: tuple[Transaction, ...]
    balance: Decimal
    opening_balance: Decimal


class AddTransactionResult(NamedTuple):
    """Outcome of adding a transaction to a log."""

    log: tuple[Transaction, ...]
    balance: Decimal
    notification: Notification
    transaction: Transaction


# --- Engine views ---


class BalancePoint(BaseModel):
    """Balance after one transaction, labelled with its short date."""

    label: str
    balance: Money
    amount: Money


class CategorySpending(BaseModel):
    """Withdrawal total for one category and its share of all withdrawals."""

    category: TransactionCategory
    amount: Money
    percentage: float


class MonthlyRollup(BaseModel):
    """Income and spending for one calendar month."""

    month: str
    income: Money
    spending: Money


class MonthlyTrend(BaseModel):
    """Net change and savings rate for one month."""

    month: str
    net_change: Money
    savings_rate: float


class TrendReport(BaseModel):
    """Per-month trend rows plus the change between the last two months."""

    months: list[MonthlyTrend]
    month_over_month_change: float


class RollingWindow(BaseModel):
    """Income and spending inside a trailing window ending at `end`."""

    income: Money
    spending: Money
    start: datetime
    end: datetime


class DayGroup(BaseModel):
    """Transactions of one calendar day, newest first."""

    day: date
    label: str
    transactions: list[Transaction]


class FinancialSummary(BaseModel):
    """Headline figures for the dashboard summary card."""

    balance: Money
    window_days: int
    income: Money
    spending: Money
    transaction_count: int


class BalanceReport(BaseModel):
    """Tracked balance compared against a replay of the full log."""

    balance: Money
    opening_balance: Money
    replayed_balance: Money
    reconciled: bool


# --- API bodies ---


class TransactionCreate(BaseModel):
    """Request body for adding a transaction. Values are validated by the engine."""

    amount: Decimal
    type: str
    category: str = TransactionCategory.OTHER.value
    description: str


class TransactionRecorded(BaseModel):
    """Response body after a transaction is recorded."""

    transaction: Transaction
    balance: Money
    notification: Notification


class NotificationCreate(BaseModel):
    """Request body for adding a notification directly."""

    message: str
    severity: str = Severity.INFO.value
    title: str = ""
