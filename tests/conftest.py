"""Shared fixtures: transaction factory, isolated stores, and an API client bound to a fresh ledger."""

from collections.abc import Callable, Iterator
from datetime import UTC, datetime
from decimal import Decimal
from itertools import count
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from bankdash.api.dependencies import get_ledger_service
from bankdash.core.db import get_engine
from bankdash.core.models import Transaction, TransactionCategory, TransactionType
from bankdash.core.settings import Settings
from bankdash.services.ledger_service import LedgerService
from bankdash.stores.memory import InMemoryTransactionStore
from bankdash.stores.sql import SqlTransactionStore
from main import app

TxFactory = Callable[..., Transaction]


@pytest.fixture
def make_tx() -> TxFactory:
    """Build transactions with sequential ids; `when` defaults to 1 March 2026, 09:00 UTC."""
    ids = count(1)

    def factory(
        amount: str | int,
        type_: str = "withdrawal",
        category: str = "other",
        when: datetime | None = None,
        description: str = "Test entry",
    ) -> Transaction:
        return Transaction(
            id=f"tx-test-{next(ids)}",
            amount=Decimal(str(amount)),
            type=TransactionType(type_),
            category=TransactionCategory(category),
            description=description,
            timestamp=when or datetime(2026, 3, 1, 9, 0, tzinfo=UTC),
        )

    return factory


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(_env_file=None, database_url=f"sqlite:///{tmp_path / 'ledger.db'}")


@pytest.fixture
def memory_store() -> InMemoryTransactionStore:
    """An empty in-memory store at a zero opening balance."""
    return InMemoryTransactionStore()


@pytest.fixture
def sql_store(tmp_path: Path) -> SqlTransactionStore:
    """An empty SQLite-file store with its schema created."""
    store = SqlTransactionStore(get_engine(f"sqlite:///{tmp_path / 'store.db'}"))
    store.init_schema()
    return store


@pytest.fixture
def service(memory_store: InMemoryTransactionStore, settings: Settings) -> LedgerService:
    """A ledger service over the in-memory store."""
    return LedgerService(memory_store, settings)


@pytest.fixture
def client(service: LedgerService) -> Iterator[TestClient]:
    """A TestClient whose routes use the isolated ledger service."""
    app.dependency_overrides[get_ledger_service] = lambda: service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
