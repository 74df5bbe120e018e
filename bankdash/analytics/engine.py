"""Aggregation engine: pure transformations of a transaction log into dashboard views.

Every function here takes the full chronological log (oldest first), never mutates it, and returns the same output for the same inputs. Money is summed as Decimal so replaying the log reproduces a tracked balance exactly. Division guards resolve to 0 instead of raising.
"""

from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation

from bankdash.core.errors import ValidationError
from bankdash.core.models import (
    CATEGORY_ORDER,
    MAX_AMOUNT,
    AddTransactionResult,
    BalancePoint,
    CategorySpending,
    DayGroup,
    FinancialSummary,
    MonthlyRollup,
    MonthlyTrend,
    Notification,
    RollingWindow,
    Severity,
    Transaction,
    TransactionCategory,
    TransactionType,
    TrendReport,
)
from bankdash.core.utils import new_id

ZERO = Decimal("0")
HUNDRED = Decimal("100")
CENTS = Decimal("0.01")


def chronological(transactions: Sequence[Transaction]) -> list[Transaction]:
    """Return a newest-first view as oldest-first."""
    return list(reversed(transactions))


def short_date(moment: datetime) -> str:
    """Format a timestamp as a short chart label, e.g. 'Mar 5'."""
    return f"{moment:%b} {moment.day}"


def long_date(day: date) -> str:
    """Format a calendar day as a history heading, e.g. 'Thursday, March 5, 2026'."""
    return f"{day:%A}, {day:%B} {day.day}, {day.year}"


def net_effect(transactions: Iterable[Transaction]) -> Decimal:
    """Sum of signed amounts."""
    return sum((tx.signed_amount for tx in transactions), ZERO)


def replay_balance(transactions: Iterable[Transaction], opening_balance: Decimal = ZERO) -> Decimal:
    """Balance after applying every transaction to the opening balance."""
    return opening_balance + net_effect(transactions)


def opening_balance_for(current_balance: Decimal, transactions: Iterable[Transaction]) -> Decimal:
    """Balance before the earliest of `transactions`, given the balance after the latest."""
    return current_balance - net_effect(transactions)


def compute_balance_series(transactions: Sequence[Transaction], opening_balance: Decimal = ZERO) -> list[BalancePoint]:
    """Running balance after each transaction, folding forward from the opening balance."""
    series: list[BalancePoint] = []
    running = opening_balance
    for tx in transactions:
        running += tx.signed_amount
        series.append(BalancePoint(label=short_date(tx.timestamp), balance=running, amount=tx.amount))
    return series


def _percentage(part: Decimal, total: Decimal) -> float:
    if total == ZERO:
        return 0.0
    return float(HUNDRED * part / total)


def compute_category_spending(transactions: Iterable[Transaction]) -> list[CategorySpending]:
    """Withdrawal totals per category with their share of all withdrawals."""
    totals: dict[TransactionCategory, Decimal] = defaultdict(lambda: ZERO)
    for tx in transactions:
        if tx.type is TransactionType.WITHDRAWAL:
            totals[tx.category] += tx.amount
    total_spending = sum(totals.values(), ZERO)
    ranked = sorted(totals.items(), key=lambda item: (-item[1], CATEGORY_ORDER[item[0]]))
    return [
        CategorySpending(category=category, amount=amount, percentage=_percentage(amount, total_spending))
        for category, amount in ranked
    ]


def month_label(moment: datetime, include_year: bool = False) -> str:
    """Month grouping key. Without the year, the same month of different years shares a key."""
    if include_year:
        return f"{moment:%B} {moment.year}"
    return f"{moment:%B}"


def compute_monthly_rollup(transactions: Iterable[Transaction], include_year: bool = False) -> list[MonthlyRollup]:
    """Income and spending per month, oldest month first."""
    months: dict[str, dict[TransactionType, Decimal]] = {}
    for tx in transactions:
        key = month_label(tx.timestamp, include_year)
        bucket = months.setdefault(key, {TransactionType.DEPOSIT: ZERO, TransactionType.WITHDRAWAL: ZERO})
        bucket[tx.type] += tx.amount
    return [
        MonthlyRollup(
            month=month,
            income=bucket[TransactionType.DEPOSIT],
            spending=bucket[TransactionType.WITHDRAWAL],
        )
        for month, bucket in months.items()
    ]


def compute_trend(monthly_rollup: Sequence[MonthlyRollup]) -> TrendReport:
    """Net change and savings rate per month, plus the change from the previous month to the last one."""
    rows = []
    for month in monthly_rollup:
        net = month.income - month.spending
        rows.append(MonthlyTrend(month=month.month, net_change=net, savings_rate=_percentage(net, month.income)))

    change = 0.0
    if len(rows) >= 2:
        previous, last = rows[-2].net_change, rows[-1].net_change
        change = _percentage(last - previous, abs(previous))
    return TrendReport(months=rows, month_over_month_change=change)


def window_start(now: datetime, window_days: int) -> datetime:
    """Midnight of the calendar day `window_days` days before `now`, in `now`'s timezone."""
    return (now - timedelta(days=window_days)).replace(hour=0, minute=0, second=0, microsecond=0)


def compute_rolling_window(transactions: Iterable[Transaction], now: datetime, window_days: int) -> RollingWindow:
    """Income and spending for transactions between the window start and `now`, both inclusive."""
    start = window_start(now, window_days)
    income = spending = ZERO
    for tx in transactions:
        if not start <= tx.timestamp <= now:
            continue
        if tx.type is TransactionType.DEPOSIT:
            income += tx.amount
        else:
            spending += tx.amount
    return RollingWindow(income=income, spending=spending, start=start, end=now)


def compute_summary(
    transactions: Sequence[Transaction], balance: Decimal, now: datetime, window_days: int
) -> FinancialSummary:
    """Current balance and trailing-window totals."""
    window = compute_rolling_window(transactions, now, window_days)
    return FinancialSummary(
        balance=balance,
        window_days=window_days,
        income=window.income,
        spending=window.spending,
        transaction_count=len(transactions),
    )


def group_by_day(transactions: Sequence[Transaction], limit_days: int | None = None) -> list[DayGroup]:
    """Transactions grouped per calendar day, newest day first and newest transaction first within a day."""
    days: dict[date, list[Transaction]] = {}
    for tx in reversed(transactions):
        days.setdefault(tx.timestamp.date(), []).append(tx)
    ordered = sorted(days.items(), key=lambda item: item[0], reverse=True)
    if limit_days is not None:
        ordered = ordered[: max(limit_days, 0)]
    return [DayGroup(day=day, label=long_date(day), transactions=txs) for day, txs in ordered]


# --- Validation and record creation ---


def validate_amount(amount: object) -> Decimal:
    """Coerce to Decimal and require a finite, strictly positive amount in whole cents, at most MAX_AMOUNT."""
    if isinstance(amount, bool):
        raise ValidationError("amount", f"Amount must be a number, got {amount!r}")
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationError("amount", f"Amount must be a number, got {amount!r}") from None
    if not value.is_finite():
        raise ValidationError("amount", f"Amount must be finite, got {amount!r}")
    if value <= ZERO:
        raise ValidationError("amount", f"Amount must be greater than zero, got {amount!r}")
    if value > MAX_AMOUNT:
        raise ValidationError("amount", f"Amount must not exceed {MAX_AMOUNT}, got {amount!r}")
    cents = value.quantize(CENTS)
    if cents != value:
        raise ValidationError("amount", f"Amount must have at most two decimal places, got {amount!r}")
    return cents


def _parse_choice(field: str, value: object, enum_cls: type) -> object:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(field, f"Invalid {field} {value!r}; expected one of: {allowed}") from None


def validate_description(description: object) -> str:
    """Require a non-empty, non-blank string."""
    if not isinstance(description, str) or not description.strip():
        raise ValidationError("description", "Description must not be empty")
    return description.strip()


def build_notification(message: str, severity: str | Severity, now: datetime, title: str = "") -> Notification:
    """Create a notification with a fresh id."""
    if not isinstance(message, str) or not message.strip():
        raise ValidationError("message", "Notification message must not be empty")
    level = _parse_choice("severity", severity, Severity)
    return Notification(id=new_id("notif"), title=title, message=message.strip(), severity=level, timestamp=now)


def transaction_notification(tx: Transaction, now: datetime) -> Notification:
    """The alert emitted for every recorded transaction."""
    if tx.type is TransactionType.DEPOSIT:
        message = f"Success: ${tx.amount:.2f} deposited to your account"
        severity = Severity.SUCCESS
    else:
        message = f"Alert: ${tx.amount:.2f} spent on {tx.category.value}"
        severity = Severity.WARNING
    return build_notification(message, severity, now, title=f"New {tx.type.value}")


def add_transaction(
    log: Sequence[Transaction],
    amount: object,
    type_: str | TransactionType,
    category: str | TransactionCategory,
    description: str,
    now: datetime,
    balance: Decimal | None = None,
) -> AddTransactionResult:
    """Validate and append a new transaction, returning the new log, balance and notification.

    `balance` is the tracked balance before this transaction; when omitted it is replayed from zero.
    Overdrawing is allowed.
    """
    value = validate_amount(amount)
    tx_type = _parse_choice("type", type_, TransactionType)
    tx_category = _parse_choice("category", category, TransactionCategory)
    text = validate_description(description)

    tx = Transaction(
        id=new_id("tx"),
        amount=value,
        type=tx_type,
        category=tx_category,
        description=text,
        timestamp=now,
    )
    current = replay_balance(log) if balance is None else balance
    return AddTransactionResult(
        log=(*log, tx),
        balance=current + tx.signed_amount,
        notification=transaction_notification(tx, now),
        transaction=tx,
    )
