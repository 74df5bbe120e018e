"""Stores package: the transaction store contract, its backends, and the backend registry."""

from .base import TransactionStore  # noqa: F401
from .memory import InMemoryTransactionStore
from .registry import StoreRegistry
from .sql import SqlTransactionStore

StoreRegistry.register("memory", InMemoryTransactionStore)
StoreRegistry.register("sql", SqlTransactionStore)
