"""In-memory storage, used by tests and throwaway sessions."""

from typing import Optional

from finance_ledger.services.storage.interface import (
    LineStorageInterface,
    SourceNotFoundError,
)


class InMemoryStorage(LineStorageInterface):
    """
    List-backed storage.

    Constructed with lines=None it behaves like a file that does not exist
    yet; the first write_lines() creates it.
    """

    def __init__(self, lines: Optional[list[str]] = None):
        self._lines = list(lines) if lines is not None else None

    @property
    def lines(self) -> list[str]:
        return list(self._lines or [])

    def exists(self) -> bool:
        return self._lines is not None

    def read_lines(self) -> list[str]:
        if self._lines is None:
            raise SourceNotFoundError("Nothing has been stored yet")
        return list(self._lines)

    def write_lines(self, lines: list[str]) -> None:
        self._lines = list(lines)
