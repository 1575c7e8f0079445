"""Audit logging package."""

from finance_ledger.audit.logger import AuditLogger, AuditTrail, configure_logging

__all__ = ["AuditLogger", "AuditTrail", "configure_logging"]
