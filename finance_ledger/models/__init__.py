"""
Data Models Package

This package contains the Pydantic models for ledger records and the
audit trail.
"""

from finance_ledger.models.transaction import (
    LedgerError,
    Transaction,
    TransactionKind,
    TransactionResult,
    ValidationError,
    ValidationIssue,
    format_currency,
)
from finance_ledger.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Transaction models
    "LedgerError",
    "Transaction",
    "TransactionKind",
    "TransactionResult",
    "ValidationError",
    "ValidationIssue",
    "format_currency",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
