"""Services package: ledger orchestration and CSV export."""

from .export_service import transactions_to_csv  # noqa: F401
from .ledger_service import LedgerService  # noqa: F401
