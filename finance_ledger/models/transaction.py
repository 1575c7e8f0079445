"""
Transaction Model

A Transaction is one income or expense entry in the ledger.

DESIGN DECISION: Construction goes through Transaction.create(), which returns
a TransactionResult instead of raising. A rejected input never produces a
Transaction object; the caller gets the reasons instead.

Records are frozen once built. There is no update path.
"""

from datetime import date as Date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError


class TransactionKind(str, Enum):
    """
    Income/Expense discriminator.

    Values are case-sensitive: "income" is not a valid kind.
    """
    INCOME = "Income"
    EXPENSE = "Expense"


class LedgerError(Exception):
    """Base exception for ledger operations."""
    pass


class ValidationIssue(BaseModel):
    """A single reason a transaction was rejected."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )


class ValidationError(LedgerError):
    """
    Transaction input failed validation.

    Carries every issue found, not just the first one.
    """

    def __init__(self, issues: list[ValidationIssue]):
        self.issues = issues
        super().__init__(
            "; ".join(f"{issue.field}: {issue.message}" for issue in issues)
        )


def format_currency(amount: Decimal, symbol: str = "$") -> str:
    """Render an amount like $1,234.50 (negative as -$1,234.50)."""
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


class Transaction(BaseModel):
    """
    One validated ledger entry.

    Amounts are Decimal so sums do not pick up binary float rounding.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    description: str = Field(
        ...,
        description="Free-form description"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        allow_inf_nan=False,
        description="Non-negative amount"
    )
    kind: TransactionKind = Field(
        ...,
        description="Income or Expense"
    )
    category: str = Field(
        ...,
        description="Grouping label used for expense aggregation"
    )
    date: Date = Field(
        ...,
        description="Calendar date of the transaction"
    )

    @classmethod
    def create(
        cls,
        description: str,
        amount: Any,
        kind: Any,
        category: str,
        date: Any,
    ) -> "TransactionResult":
        """
        Validate the inputs and build a Transaction.

        Returns a TransactionResult; never raises for bad input.
        """
        try:
            transaction = cls(
                description=description,
                amount=amount,
                kind=kind,
                category=category,
                date=date,
            )
        except PydanticValidationError as e:
            issues = [
                ValidationIssue(
                    field=".".join(str(part) for part in err["loc"]) or "transaction",
                    message=err["msg"],
                )
                for err in e.errors()
            ]
            return TransactionResult(success=False, error=ValidationError(issues))

        return TransactionResult(success=True, transaction=transaction)

    @property
    def is_expense(self) -> bool:
        return self.kind == TransactionKind.EXPENSE

    def format_line(self, currency_symbol: str = "$") -> str:
        """Single display line: date | kind | category | description | amount."""
        return " | ".join([
            self.date.isoformat(),
            self.kind.value,
            self.category,
            self.description,
            format_currency(self.amount, currency_symbol),
        ])


class TransactionResult(BaseModel):
    """
    Outcome of Transaction.create().

    Exactly one of transaction / error is set.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    success: bool
    transaction: Optional[Transaction] = None
    error: Optional[ValidationError] = None

    def unwrap(self) -> Transaction:
        """Return the transaction, or raise the carried ValidationError."""
        if self.error is not None:
            raise self.error
        return self.transaction
