"""CSV export of the transaction log."""

from collections.abc import Sequence

import pandas as pd

from bankdash.core.models import Transaction

EXPORT_COLUMNS = ["id", "timestamp", "type", "category", "description", "amount"]


def transactions_to_csv(transactions: Sequence[Transaction]) -> str:
    """Render transactions (in the given order) as CSV text with a header row."""
    rows = [
        {
            "id": tx.id,
            "timestamp": tx.timestamp.isoformat(),
            "type": tx.type.value,
            "category": tx.category.value,
            "description": tx.description,
            "amount": f"{tx.amount:.2f}",
        }
        for tx in transactions
    ]
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS).to_csv(index=False)
