"""Analytics package: the pure aggregation engine over transaction logs."""

from .engine import (  # noqa: F401
    add_transaction,
    build_notification,
    chronological,
    compute_balance_series,
    compute_category_spending,
    compute_monthly_rollup,
    compute_rolling_window,
    compute_summary,
    compute_trend,
    group_by_day,
    opening_balance_for,
    replay_balance,
    transaction_notification,
    validate_amount,
)
