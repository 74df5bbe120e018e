"""FastAPI dependencies for DI (settings, store, ledger service).

This module provides dependency injection helpers so endpoints receive a LedgerService bound to the configured store backend; tests override `get_ledger_service` to run against an isolated store.
"""

from functools import lru_cache

from bankdash.core.settings import get_settings
from bankdash.services.ledger_service import LedgerService
from bankdash.stores import StoreRegistry, TransactionStore


@lru_cache
def get_store() -> TransactionStore:
    """Provide the process-wide store for the configured backend."""
    return StoreRegistry.create(get_settings())


def get_ledger_service() -> LedgerService:
    """Provide a LedgerService bound to the shared store."""
    return LedgerService(get_store(), get_settings())
