"""
Bulk Save / Load

save_all() and load_all() move a whole ledger to and from line storage.

DESIGN DECISION: A bad line never aborts a load. Each malformed line is
recorded in the LoadReport and the loader moves on. A missing source is
reported as "nothing to load", not raised.
"""

from pydantic import BaseModel, Field

import structlog

from finance_ledger.ledger.ledger import Ledger
from finance_ledger.serialization.codec import (
    ParseError,
    breaks_line_format,
    decode_line,
    encode_line,
    printable,
)
from finance_ledger.services.storage.interface import (
    LineStorageInterface,
    SourceNotFoundError,
)


logger = structlog.get_logger(__name__)


class SkippedLine(BaseModel):
    """A stored line that was not loaded."""

    line_number: int = Field(
        ...,
        ge=1,
        description="1-based line number in the source"
    )
    line: str = Field(
        ...,
        description="Line text, undecodable bytes shown as \\xNN"
    )
    reason: str = Field(
        ...,
        description="Why the line was rejected"
    )


class LoadReport(BaseModel):
    """Result of load_all()."""

    loaded_count: int = Field(default=0, ge=0)
    skipped: list[SkippedLine] = Field(default_factory=list)
    source_missing: bool = False

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    @property
    def nothing_to_load(self) -> bool:
        return self.source_missing or self.loaded_count == 0


class SaveReport(BaseModel):
    """Result of save_all()."""

    written_count: int = Field(default=0, ge=0)
    unsafe_line_numbers: list[int] = Field(
        default_factory=list,
        description="Lines whose free-text fields contain the delimiter or a "
                    "line break and will not load back correctly"
    )

    @property
    def has_unsafe_lines(self) -> bool:
        return bool(self.unsafe_line_numbers)


def save_all(ledger: Ledger, destination: LineStorageInterface) -> SaveReport:
    """
    Write every transaction, in ledger order, replacing the destination.

    Fields are written verbatim. Records with a delimiter or line break in
    description or category are flagged in the report rather than altered.
    """
    lines = []
    unsafe = []
    for line_number, transaction in enumerate(ledger.transactions, start=1):
        if breaks_line_format(transaction):
            unsafe.append(line_number)
        lines.append(encode_line(transaction))

    destination.write_lines(lines)

    if unsafe:
        logger.warning(
            "unsafe_lines_saved",
            line_numbers=unsafe,
            hint="description/category contain the delimiter or a line break",
        )
    logger.info("ledger_saved", written_count=len(lines))

    return SaveReport(written_count=len(lines), unsafe_line_numbers=unsafe)


def load_all(ledger: Ledger, source: LineStorageInterface) -> LoadReport:
    """
    Append every well-formed stored transaction to the ledger.

    Blank lines are ignored. Malformed lines are skipped and listed in the
    returned report.
    """
    try:
        lines = source.read_lines()
    except SourceNotFoundError as e:
        logger.info("ledger_source_missing", error=str(e))
        return LoadReport(source_missing=True)

    report = LoadReport()
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            transaction = decode_line(line)
        except ParseError as e:
            logger.warning(
                "line_skipped",
                line_number=line_number,
                reason=e.reason,
            )
            report.skipped.append(
                SkippedLine(
                    line_number=line_number,
                    line=printable(line),
                    reason=e.reason,
                )
            )
            continue

        ledger.add(transaction)
        report.loaded_count += 1

    logger.info(
        "ledger_loaded",
        loaded_count=report.loaded_count,
        skipped_count=report.skipped_count,
    )
    return report
