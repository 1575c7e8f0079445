"""
Line Codec

One transaction per line:

    description,amount,kind,category,date

- amount: plain decimal string, exactly str(Decimal)
- kind: "Income" or "Expense"
- date: ISO-8601 YYYY-MM-DD, independent of locale

KNOWN LIMITATION: there is no quoting or escaping. A description or category
containing the delimiter or a line break cannot be read back correctly. The
encoder writes it anyway; callers are told through breaks_line_format() /
SaveReport.

Bytes that do not decode in the file encoding arrive as lone surrogates
(surrogateescape) and fail decode_line() for that line only.
"""

from datetime import date
from decimal import Decimal, InvalidOperation

from finance_ledger.models.transaction import LedgerError, Transaction


FIELD_DELIMITER = ","

LINE_BREAKS = ("\n", "\r")

FIELD_ORDER = ["description", "amount", "kind", "category", "date"]


class ParseError(LedgerError):
    """A stored line could not be turned into a Transaction."""

    def __init__(self, reason: str, line: str):
        self.reason = reason
        self.line = line
        super().__init__(f"{reason}: {line!r}")


def breaks_line_format(transaction: Transaction) -> bool:
    """True if description or category holds the delimiter or a line break."""
    unsafe = (FIELD_DELIMITER,) + LINE_BREAKS
    return any(
        token in text
        for text in (transaction.description, transaction.category)
        for token in unsafe
    )


def has_undecodable_bytes(line: str) -> bool:
    """True if the line carries bytes escaped by surrogateescape."""
    return any("\udc80" <= char <= "\udcff" for char in line)


def printable(line: str) -> str:
    """Render escaped bytes as \\xNN so the line can be stored and logged."""
    return line.encode("utf-8", "surrogateescape").decode("utf-8", "backslashreplace")


def encode_line(transaction: Transaction) -> str:
    """Render a transaction as one stored line (no terminator)."""
    return FIELD_DELIMITER.join([
        transaction.description,
        str(transaction.amount),
        transaction.kind.value,
        transaction.category,
        transaction.date.isoformat(),
    ])


def decode_line(line: str) -> Transaction:
    """
    Parse one stored line.

    Raises:
        ParseError: wrong field count, bad amount, bad date, or a value the
            Transaction model rejects (e.g. unknown kind, negative amount),
            or bytes that did not decode in the file encoding
    """
    if has_undecodable_bytes(line):
        raise ParseError("Line is not valid text in the file encoding", line)

    fields = line.split(FIELD_DELIMITER)
    if len(fields) != len(FIELD_ORDER):
        raise ParseError(
            f"Expected {len(FIELD_ORDER)} fields, found {len(fields)}", line
        )

    description, raw_amount, kind, category, raw_date = fields

    try:
        amount = Decimal(raw_amount.strip())
    except InvalidOperation:
        raise ParseError(f"Invalid amount {raw_amount!r}", line)

    try:
        parsed_date = date.fromisoformat(raw_date.strip())
    except ValueError:
        raise ParseError(f"Invalid date {raw_date!r}", line)

    result = Transaction.create(
        description=description,
        amount=amount,
        kind=kind.strip(),
        category=category,
        date=parsed_date,
    )
    if not result.success:
        raise ParseError(f"Invalid transaction ({result.error})", line)

    return result.transaction
