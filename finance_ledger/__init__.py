"""
Finance Ledger - Source Package

A personal finance ledger: record income and expenses, see where the
money went, keep it all in a plain text file.

DESIGN PRINCIPLES:
1. An invalid transaction is never constructed
2. Amounts are Decimal, never float
3. A bad line in the file never loses the good ones
4. Storage is injected, not global
"""

__version__ = "1.0.0"
__author__ = "Finance Ledger Team"
