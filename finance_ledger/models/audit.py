"""
Audit Models for the Finance Ledger

Significant ledger actions are recorded as audit events:
1. Transactions recorded or rejected
2. Saves and loads, with counts
3. Lines skipped during a load

DESIGN DECISION: Audit trails are append-only. Events are never modified.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator


DESCRIPTION_MAX_LENGTH = 500


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Recording
    TRANSACTION_RECORDED = "transaction_recorded"
    TRANSACTION_REJECTED = "transaction_rejected"

    # Persistence
    LEDGER_SAVED = "ledger_saved"
    LEDGER_LOADED = "ledger_loaded"
    LINE_SKIPPED = "line_skipped"
    SOURCE_MISSING = "source_missing"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of the audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Event details
    description: str = Field(
        ...,
        max_length=DESCRIPTION_MAX_LENGTH,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_message: Optional[str] = None

    @field_validator("description", mode="before")
    @classmethod
    def truncate_description(cls, v: Any) -> Any:
        """Clip descriptions longer than DESCRIPTION_MAX_LENGTH."""
        if isinstance(v, str) and len(v) > DESCRIPTION_MAX_LENGTH:
            return v[: DESCRIPTION_MAX_LENGTH - 3] + "..."
        return v

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.transaction_recorded(transaction)
        event = AuditEventBuilder.ledger_loaded(source, loaded, skipped)
    """

    @staticmethod
    def transaction_recorded(
        kind: str,
        category: str,
        amount: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_RECORDED,
            description=f"{kind} recorded: {amount}",
            details={
                "kind": kind,
                "category": category,
                "amount": amount,
            },
        )

    @staticmethod
    def transaction_rejected(issues: list[dict]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_REJECTED,
            severity=AuditSeverity.WARNING,
            description=f"Transaction rejected with {len(issues)} issues",
            details={
                "issues": issues,
            },
        )

    @staticmethod
    def ledger_saved(
        destination: str,
        written_count: int,
        unsafe_line_numbers: list[int],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_SAVED,
            severity=AuditSeverity.WARNING if unsafe_line_numbers else AuditSeverity.INFO,
            description=f"Ledger saved: {written_count} transactions to {destination}",
            details={
                "destination": destination,
                "written_count": written_count,
                "unsafe_line_numbers": unsafe_line_numbers,
            },
        )

    @staticmethod
    def ledger_loaded(
        source: str,
        loaded_count: int,
        skipped_count: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOADED,
            description=(
                f"Ledger loaded: {loaded_count} transactions from {source}, "
                f"{skipped_count} lines skipped"
            ),
            details={
                "source": source,
                "loaded_count": loaded_count,
                "skipped_count": skipped_count,
            },
        )

    @staticmethod
    def line_skipped(
        line_number: int,
        reason: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LINE_SKIPPED,
            severity=AuditSeverity.WARNING,
            description=f"Line {line_number} skipped",
            details={
                "line_number": line_number,
                "reason": reason,
            },
        )

    @staticmethod
    def source_missing(source: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SOURCE_MISSING,
            description=f"Nothing to load: {source} does not exist",
            details={
                "source": source,
            },
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
        )
