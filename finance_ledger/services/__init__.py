"""Services package."""

from finance_ledger.services.storage import (
    FlatFileStorage,
    InMemoryStorage,
    LineStorageInterface,
    SourceNotFoundError,
    StorageError,
)

__all__ = [
    "FlatFileStorage",
    "InMemoryStorage",
    "LineStorageInterface",
    "SourceNotFoundError",
    "StorageError",
]
