"""Ledger serialization package."""

from finance_ledger.serialization.codec import (
    FIELD_DELIMITER,
    ParseError,
    breaks_line_format,
    decode_line,
    encode_line,
)
from finance_ledger.serialization.persistence import (
    LoadReport,
    SaveReport,
    SkippedLine,
    load_all,
    save_all,
)

__all__ = [
    "FIELD_DELIMITER",
    "LoadReport",
    "ParseError",
    "SaveReport",
    "SkippedLine",
    "breaks_line_format",
    "decode_line",
    "encode_line",
    "load_all",
    "save_all",
]
