"""
Flat File Storage Implementation

Stores ledger lines in a plain text file, one record per line.

TRADEOFFS:
- Whole-file rewrite on every save (fine for a personal ledger)
- No locking; a single process is assumed
"""

import os
from pathlib import Path
from typing import Union

import structlog

from finance_ledger.services.storage.interface import (
    LineStorageInterface,
    SourceNotFoundError,
    StorageError,
)


logger = structlog.get_logger(__name__)


class FlatFileStorage(LineStorageInterface):
    """
    Text file backend.

    Every call opens and closes the file itself; no handle is kept
    between calls.
    """

    def __init__(self, path: Union[str, Path], encoding: str = "utf-8"):
        self._path = Path(path)
        self._encoding = encoding

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def read_lines(self) -> list[str]:
        """
        Read every line, stripping \\n and \\r\\n terminators.

        Bytes invalid in the encoding come back as lone surrogates
        (surrogateescape), so one bad line does not fail the whole read.
        """
        try:
            with self._path.open(
                "r", encoding=self._encoding, errors="surrogateescape", newline=""
            ) as f:
                lines = [line.rstrip("\r\n") for line in f]
        except FileNotFoundError:
            raise SourceNotFoundError(f"Ledger file not found: {self._path}")
        except OSError as e:
            raise StorageError(f"Failed to read {self._path}: {e}")

        logger.debug("file_read", path=str(self._path), line_count=len(lines))
        return lines

    def write_lines(self, lines: list[str]) -> None:
        """Overwrite the file, terminating each line with os.linesep."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("w", encoding=self._encoding, newline="") as f:
                for line in lines:
                    f.write(line + os.linesep)
        except (OSError, UnicodeEncodeError) as e:
            raise StorageError(f"Failed to write {self._path}: {e}")

        logger.debug("file_written", path=str(self._path), line_count=len(lines))
