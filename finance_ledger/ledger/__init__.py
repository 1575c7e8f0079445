"""Ledger package."""

from finance_ledger.ledger.ledger import (
    DEFAULT_GRAPH_SCALE,
    NO_CATEGORY,
    CategoryBar,
    Ledger,
    LedgerSummary,
)

__all__ = [
    "DEFAULT_GRAPH_SCALE",
    "NO_CATEGORY",
    "CategoryBar",
    "Ledger",
    "LedgerSummary",
]
