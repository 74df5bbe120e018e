"""Fixtures package: offline generators of valid transaction logs."""

from .sample_data import generate_sample_transactions  # noqa: F401
