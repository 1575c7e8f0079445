"""
Abstract Storage Interface

DESIGN DECISION: Serialization never opens files itself. It talks to a
line-oriented storage object handed in by the caller. This allows us to:
1. Use in-memory storage for testing
2. Point the same ledger at different files without global state
3. Swap the flat file for another backend later

The interface is intentionally tiny: the ledger format is just lines of text.
"""

from abc import ABC, abstractmethod


class LineStorageInterface(ABC):
    """
    Abstract interface for line-oriented storage.

    Implementations must release any handle before each method returns.
    """

    @abstractmethod
    def exists(self) -> bool:
        """
        Check whether the source currently holds any stored content.

        Returns:
            True if read_lines() would succeed
        """
        pass

    @abstractmethod
    def read_lines(self) -> list[str]:
        """
        Read all stored lines.

        Returns:
            Lines in stored order, without line terminators

        Raises:
            SourceNotFoundError: If nothing has been stored yet
            StorageError: If the read fails
        """
        pass

    @abstractmethod
    def write_lines(self, lines: list[str]) -> None:
        """
        Replace the stored content with the given lines.

        Args:
            lines: Lines to store, without line terminators

        Raises:
            StorageError: If the write fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class SourceNotFoundError(StorageError):
    """The storage source does not exist."""
    pass
