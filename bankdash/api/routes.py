"""FastAPI endpoints for the Student Bank Dashboard API.

This module defines the routes for recording and listing transactions, the balance and analytics views consumed by the dashboard charts, CSV export, notifications, and health checks. Every analytics route reads one store snapshot through the LedgerService.
"""

import io

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from fastapi.responses import StreamingResponse

from bankdash.api.dependencies import get_ledger_service
from bankdash.core.errors import NotificationNotFoundError
from bankdash.core.models import (
    BalancePoint,
    BalanceReport,
    CategorySpending,
    DayGroup,
    FinancialSummary,
    MonthlyRollup,
    Notification,
    NotificationCreate,
    RollingWindow,
    Transaction,
    TransactionCreate,
    TransactionRecorded,
    TrendReport,
)
from bankdash.core.utils import get_logger
from bankdash.services.export_service import transactions_to_csv
from bankdash.services.ledger_service import LedgerService

router = APIRouter()
logger = get_logger("bankdash.api")

VALIDATION_EXAMPLE = {"detail": "Amount must be greater than zero, got Decimal('-5')", "field": "amount"}


@router.post(
    "/transactions",
    status_code=201,
    response_model=TransactionRecorded,
    summary="Record a deposit or withdrawal",
    description=(
        "Validate and append a transaction to the ledger. "
        "The response carries the stored transaction, the balance after it, and the notification it produced.\n\n"
        "**Request body:**\n"
        "- `amount`: positive number with at most two decimal places\n"
        "- `type`: `deposit` or `withdrawal`\n"
        "- `category`: one of `salary, shopping, food, transport, entertainment, utilities, other`\n"
        "- `description`: non-empty text\n\n"
        "**Response:**\n"
        "- 201 Created: transaction recorded.\n"
        "- 422 Unprocessable Entity: a field failed validation; nothing was recorded."
    ),
    responses={
        422: {
            "description": "Validation failed.",
            "content": {"application/json": {"example": VALIDATION_EXAMPLE}},
        },
    },
)
def create_transaction(
    body: TransactionCreate, service: LedgerService = Depends(get_ledger_service)
) -> TransactionRecorded:
    """Record a transaction."""
    logger.info(f"Received transaction request: type={body.type}, category={body.category}, amount={body.amount}")
    return service.record_transaction(body.amount, body.type, body.category, body.description)


@router.get(
    "/transactions",
    response_model=list[Transaction],
    summary="List transactions, newest first",
)
def list_transactions(service: LedgerService = Depends(get_ledger_service)) -> list[Transaction]:
    """Return the full transaction log, newest first."""
    return service.transactions()


@router.get(
    "/transactions/history",
    response_model=list[DayGroup],
    summary="Transaction history grouped by day",
    description=(
        "Transactions grouped per calendar day, newest day first. "
        "`days` limits the response to the most recent N days that have activity; "
        "`all=true` returns every day."
    ),
)
def transaction_history(
    days: int | None = Query(None, ge=1),
    all_days: bool = Query(False, alias="all"),
    service: LedgerService = Depends(get_ledger_service),
) -> list[DayGroup]:
    """Return day-grouped history."""
    if all_days:
        return service.history()
    return service.history(days or service.settings.history_visible_days)


@router.get(
    "/transactions/export",
    response_class=StreamingResponse,
    summary="Download the transaction log as CSV",
    responses={200: {"description": "CSV file download."}},
)
def export_transactions(service: LedgerService = Depends(get_ledger_service)) -> StreamingResponse:
    """Stream the log (newest first) as a CSV attachment."""
    data = transactions_to_csv(service.transactions())
    return StreamingResponse(
        io.BytesIO(data.encode("utf-8")),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=transactions.csv"},
    )


@router.get(
    "/balance",
    response_model=BalanceReport,
    summary="Current balance with reconciliation check",
    description="Returns the tracked balance and the balance obtained by replaying the full log from the opening balance.",
)
def get_balance(service: LedgerService = Depends(get_ledger_service)) -> BalanceReport:
    """Return the balance report."""
    return service.reconcile()


@router.get("/analytics/balance-series", response_model=list[BalancePoint], summary="Balance history series")
def balance_series(service: LedgerService = Depends(get_ledger_service)) -> list[BalancePoint]:
    """Return the running balance after each transaction, oldest first."""
    return service.balance_series()


@router.get("/analytics/categories", response_model=list[CategorySpending], summary="Spending by category")
def category_spending(service: LedgerService = Depends(get_ledger_service)) -> list[CategorySpending]:
    """Return withdrawal totals and percentages per category."""
    return service.category_spending()


@router.get(
    "/analytics/monthly",
    response_model=list[MonthlyRollup],
    summary="Monthly income vs spending",
    description=(
        "Income and spending per month, oldest month first. Months are keyed by name only, so the same month "
        "of different years is combined unless `include_year=true`."
    ),
)
def monthly_rollup(
    include_year: bool = False, service: LedgerService = Depends(get_ledger_service)
) -> list[MonthlyRollup]:
    """Return the monthly rollup."""
    return service.monthly_rollup(include_year)


@router.get("/analytics/trend", response_model=TrendReport, summary="Monthly net change and savings rate")
def trend(include_year: bool = False, service: LedgerService = Depends(get_ledger_service)) -> TrendReport:
    """Return the trend report."""
    return service.trend(include_year)


@router.get("/analytics/rolling", response_model=RollingWindow, summary="Trailing-window income and spending")
def rolling_window(
    days: int | None = Query(None, ge=0), service: LedgerService = Depends(get_ledger_service)
) -> RollingWindow:
    """Return income and spending for the last `days` days (default from settings)."""
    return service.rolling_window(window_days=days)


@router.get("/analytics/summary", response_model=FinancialSummary, summary="Financial summary card")
def summary(service: LedgerService = Depends(get_ledger_service)) -> FinancialSummary:
    """Return the balance and trailing-window totals."""
    return service.summary()


@router.get("/notifications", response_model=list[Notification], summary="List notifications, newest first")
def list_notifications(service: LedgerService = Depends(get_ledger_service)) -> list[Notification]:
    """Return notifications."""
    return service.notifications()


@router.post("/notifications", status_code=201, response_model=Notification, summary="Add a notification")
def create_notification(
    body: NotificationCreate, service: LedgerService = Depends(get_ledger_service)
) -> Notification:
    """Add a notification directly."""
    return service.notify(body.message, body.severity, title=body.title)


@router.delete(
    "/notifications/{notification_id}",
    status_code=204,
    summary="Dismiss a notification",
    responses={
        404: {
            "description": "Notification not found.",
            "content": {"application/json": {"example": {"detail": "Notification not found"}}},
        },
    },
)
def dismiss_notification(notification_id: str, service: LedgerService = Depends(get_ledger_service)) -> Response:
    """Dismiss a notification by id."""
    try:
        service.dismiss(notification_id)
    except NotificationNotFoundError as exc:
        raise HTTPException(404, "Notification not found") from exc
    return Response(status_code=204)


@router.get(
    "/health",
    summary="Health check",
    description="Simple health check endpoint. Returns status ok.",
    response_description="Status ok.",
    responses={200: {"description": "API is healthy.", "content": {"application/json": {"example": {"status": "ok"}}}}},
)
async def health() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}
