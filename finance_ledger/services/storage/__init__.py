"""
Storage Services Package

Provides the abstract line-storage interface and its implementations.
The flat file is the default backend; in-memory storage is for tests.
"""

from finance_ledger.services.storage.interface import (
    LineStorageInterface,
    SourceNotFoundError,
    StorageError,
)
from finance_ledger.services.storage.flat_file import FlatFileStorage
from finance_ledger.services.storage.memory import InMemoryStorage

__all__ = [
    # Interface
    "LineStorageInterface",
    # Exceptions
    "SourceNotFoundError",
    "StorageError",
    # Implementations
    "FlatFileStorage",
    "InMemoryStorage",
]
