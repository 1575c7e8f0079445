"""
Ledger: in-memory transaction list and its aggregations.

DESIGN DECISION: Every aggregation is a linear scan over the current
transactions. Nothing is cached or indexed, so results always reflect
the latest add().

The ledger performs no I/O. Persistence lives in finance_ledger.serialization.
"""

from decimal import Decimal
from typing import Iterator

import structlog
from pydantic import BaseModel, Field

from finance_ledger.models.transaction import Transaction, TransactionKind


# Returned by most_spent_category() when there are no expenses
NO_CATEGORY = "N/A"

# Every DEFAULT_GRAPH_SCALE currency units is one bar unit
DEFAULT_GRAPH_SCALE = 10

logger = structlog.get_logger(__name__)


class CategoryBar(BaseModel):
    """One row of the spending text graph."""

    category: str
    amount: Decimal
    bar_length: int = Field(
        ...,
        ge=0,
        description="Number of bar units (never negative)"
    )

    @property
    def bar(self) -> str:
        return "#" * self.bar_length


class LedgerSummary(BaseModel):
    """Snapshot of the headline numbers for display."""

    transaction_count: int = Field(ge=0)
    total_income: Decimal
    total_expenses: Decimal
    net_savings: Decimal
    category_spending: dict[str, Decimal] = Field(default_factory=dict)
    most_spent_category: str = NO_CATEGORY


class Ledger:
    """
    Ordered, append-only collection of transactions.

    Insertion order is the canonical order. The sorted_by_* queries return
    new lists and never reorder the ledger itself.
    """

    def __init__(self):
        self._transactions: list[Transaction] = []

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(tuple(self._transactions))

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        """Read-only view in insertion order."""
        return tuple(self._transactions)

    def add(self, transaction: Transaction) -> None:
        """Append an already-validated transaction."""
        self._transactions.append(transaction)
        logger.debug(
            "transaction_added",
            kind=transaction.kind.value,
            category=transaction.category,
            amount=str(transaction.amount),
            count=len(self._transactions),
        )

    # -------------------------------------------------------------------------
    # Totals
    # -------------------------------------------------------------------------

    def _total(self, kind: TransactionKind) -> Decimal:
        return sum(
            (t.amount for t in self._transactions if t.kind == kind),
            Decimal("0"),
        )

    def total_income(self) -> Decimal:
        return self._total(TransactionKind.INCOME)

    def total_expenses(self) -> Decimal:
        return self._total(TransactionKind.EXPENSE)

    def net_savings(self) -> Decimal:
        """Income minus expenses. Can be negative."""
        return self.total_income() - self.total_expenses()

    # -------------------------------------------------------------------------
    # Grouping
    # -------------------------------------------------------------------------

    def category_spending(self) -> dict[str, Decimal]:
        """
        Sum expense amounts per category.

        Income records are ignored, so a category that only ever saw income
        does not appear. Keys are ordered by each category's first expense.
        """
        spending: dict[str, Decimal] = {}
        for transaction in self._transactions:
            if not transaction.is_expense:
                continue
            spending[transaction.category] = (
                spending.get(transaction.category, Decimal("0")) + transaction.amount
            )
        return spending

    def most_spent_category(self) -> str:
        """
        Category with the largest total expense, or "N/A" if none.

        Ties go to the lexicographically smallest category name.
        """
        spending = self.category_spending()
        if not spending:
            return NO_CATEGORY
        category, _ = min(spending.items(), key=lambda item: (-item[1], item[0]))
        return category

    # -------------------------------------------------------------------------
    # Sorted views (sorted() is stable, so equal keys keep insertion order)
    # -------------------------------------------------------------------------

    def sorted_by_date(self) -> list[Transaction]:
        return sorted(self._transactions, key=lambda t: t.date)

    def sorted_by_amount(self) -> list[Transaction]:
        """Largest amount first."""
        return sorted(self._transactions, key=lambda t: t.amount, reverse=True)

    def sorted_by_category(self) -> list[Transaction]:
        return sorted(self._transactions, key=lambda t: t.category)

    # -------------------------------------------------------------------------
    # Display helpers
    # -------------------------------------------------------------------------

    def text_graph(self, scale: int = DEFAULT_GRAPH_SCALE) -> list[CategoryBar]:
        """
        One bar per expense category, floor(amount / scale) units long.

        Amounts below one unit get an empty bar.
        """
        if scale < 1:
            raise ValueError(f"Graph scale must be at least 1, got {scale}")

        return [
            CategoryBar(
                category=category,
                amount=amount,
                bar_length=max(0, int(amount // scale)),
            )
            for category, amount in self.category_spending().items()
        ]

    def summary(self) -> LedgerSummary:
        return LedgerSummary(
            transaction_count=len(self._transactions),
            total_income=self.total_income(),
            total_expenses=self.total_expenses(),
            net_savings=self.net_savings(),
            category_spending=self.category_spending(),
            most_spent_category=self.most_spent_category(),
        )
