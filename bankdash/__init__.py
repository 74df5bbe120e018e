"""Student Bank Dashboard: transaction ledger and analytics API."""

__version__ = "1.0.0"
