"""Tests for the ledger record models."""

from datetime import UTC, datetime, timedelta, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError as ModelValidationError

from bankdash.core.models import MAX_AMOUNT, Notification, Severity, Transaction

STAMP = datetime(2026, 3, 1, 9, 0, tzinfo=UTC)


def _tx(**overrides) -> Transaction:
    fields = {
        "id": "tx-model-1",
        "amount": Decimal("12.50"),
        "type": "withdrawal",
        "category": "food",
        "description": "Lunch",
        "timestamp": STAMP,
    }
    fields.update(overrides)
    return Transaction(**fields)


@pytest.mark.parametrize(
    "overrides",
    [
        {"amount": Decimal("-5")},
        {"amount": Decimal("0")},
        {"amount": Decimal("1.005")},
        {"amount": MAX_AMOUNT + Decimal("0.01")},
        {"description": ""},
        {"timestamp": datetime(2026, 3, 1, 9, 0)},
    ],
)
def test_transaction_rejects_broken_records(overrides) -> None:
    """Direct construction enforces positive cent amounts, a description and an aware timestamp."""
    with pytest.raises(ModelValidationError):
        _tx(**overrides)


def test_transaction_normalises_timestamp_to_utc() -> None:
    """An offset timestamp is kept as the same instant with a UTC offset."""
    tx = _tx(timestamp=datetime(2026, 3, 1, 14, 0, tzinfo=timezone(timedelta(hours=5))))
    if tx.timestamp != STAMP or tx.timestamp.tzinfo is not UTC:
        msg = f"Expected {STAMP}, got {tx.timestamp!r}"
        raise AssertionError(msg)
    if _tx(amount=MAX_AMOUNT).amount != MAX_AMOUNT:
        msg = "MAX_AMOUNT should be a valid amount"
        raise AssertionError(msg)


def test_notification_requires_aware_timestamp() -> None:
    """Notifications share the timestamp rules of transactions."""
    with pytest.raises(ModelValidationError):
        Notification(id="notif-1", message="Hi", severity=Severity.INFO, timestamp=datetime(2026, 3, 1))
    note = Notification(
        id="notif-2",
        message="Hi",
        severity=Severity.INFO,
        timestamp=datetime(2026, 3, 1, 4, 0, tzinfo=timezone(timedelta(hours=-5))),
    )
    if note.timestamp != STAMP or note.timestamp.utcoffset() != timedelta(0):
        msg = f"Expected {STAMP}, got {note.timestamp!r}"
        raise AssertionError(msg)
