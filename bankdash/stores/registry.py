"""Store registry for selecting a transaction store backend by name.

The configured `store_backend` setting is resolved here, so the API and startup code never import a concrete store class directly.
"""

from typing import ClassVar

from bankdash.core.settings import Settings
from bankdash.stores.base import TransactionStore


class StoreRegistry:
    """Registry for store classes."""

    _registry: ClassVar[dict[str, type[TransactionStore]]] = {}

    @classmethod
    def register(cls, name: str, store_cls: type[TransactionStore]) -> None:
        """Register a store class with a given name."""
        cls._registry[name] = store_cls

    @classmethod
    def get(cls, name: str) -> type[TransactionStore]:
        """Retrieve a store class by name."""
        try:
            return cls._registry[name]
        except KeyError:
            msg = f"Unknown store backend '{name}'; available: {', '.join(cls.available())}"
            raise KeyError(msg) from None

    @classmethod
    def available(cls) -> list[str]:
        """List all available store names."""
        return list(cls._registry.keys())

    @classmethod
    def create(cls, settings: Settings) -> TransactionStore:
        """Instantiate the store named by `settings.store_backend`."""
        return cls.get(settings.store_backend).from_settings(settings)
