"""
Audit Logger

DESIGN DECISION: Every significant ledger action is logged.
This provides:
1. Traceability of what was recorded, saved and loaded
2. Debugging capability when a load skips lines
3. A history the front end can show the user

The audit logger:
- Always emits a structured log line
- Optionally keeps events in an in-memory, append-only trail
"""

import logging
from typing import Any, Callable, Optional

import structlog

from finance_ledger.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from finance_ledger.models.transaction import Transaction, ValidationError


def configure_logging(level: str = "INFO", json_logs: bool = True) -> None:
    """
    Configure stdlib logging and structlog together.

    Safe to call more than once; the last call wins.
    """
    logging.basicConfig(format="%(message)s", level=level.upper(), force=True)

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


class AuditTrail:
    """
    Append-only, in-memory list of audit events.
    """

    def __init__(self):
        self._events: list[AuditEvent] = []

    def append_event(self, event: AuditEvent) -> None:
        self._events.append(event)

    @property
    def events(self) -> tuple[AuditEvent, ...]:
        return tuple(self._events)

    def recent(self, limit: int = 20) -> list[AuditEvent]:
        """Most recent events, newest first."""
        return list(reversed(self._events[-limit:])) if limit > 0 else []


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. The audit trail, if one is attached
    """

    def __init__(self, trail: Optional[AuditTrail] = None):
        """
        Initialize audit logger.

        Args:
            trail: Trail to keep events in.
                   If None, only logs locally.
        """
        self._trail = trail
        self._logger = structlog.get_logger("finance_ledger.audit")

    @property
    def trail(self) -> Optional[AuditTrail]:
        return self._trail

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event locally and append it to the trail.

        Returns True if the trail write succeeded (or no trail is attached).
        """
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._trail is not None:
            try:
                self._trail.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_trail_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def _log_built(self, builder: Callable[..., AuditEvent], **kwargs: Any) -> bool:
        """
        Build an event and log it.

        Audit failures are logged, never raised: the ledger operation that
        triggered the event has already happened.
        """
        try:
            event = builder(**kwargs)
        except Exception as e:
            self._logger.error(
                "audit_event_build_failed",
                builder=builder.__name__,
                error=str(e),
            )
            return False
        return self.log(event)

    def log_transaction_recorded(self, transaction: Transaction) -> bool:
        return self._log_built(
            AuditEventBuilder.transaction_recorded,
            kind=transaction.kind.value,
            category=transaction.category,
            amount=str(transaction.amount),
        )

    def log_transaction_rejected(self, error: ValidationError) -> bool:
        return self._log_built(
            AuditEventBuilder.transaction_rejected,
            issues=[issue.model_dump() for issue in error.issues],
        )

    def log_ledger_saved(
        self,
        destination: str,
        written_count: int,
        unsafe_line_numbers: list[int],
    ) -> bool:
        return self._log_built(
            AuditEventBuilder.ledger_saved,
            destination=destination,
            written_count=written_count,
            unsafe_line_numbers=unsafe_line_numbers,
        )

    def log_ledger_loaded(
        self,
        source: str,
        loaded_count: int,
        skipped_count: int,
    ) -> bool:
        return self._log_built(
            AuditEventBuilder.ledger_loaded,
            source=source,
            loaded_count=loaded_count,
            skipped_count=skipped_count,
        )

    def log_line_skipped(self, line_number: int, reason: str) -> bool:
        return self._log_built(
            AuditEventBuilder.line_skipped,
            line_number=line_number,
            reason=reason,
        )

    def log_source_missing(self, source: str) -> bool:
        return self._log_built(AuditEventBuilder.source_missing, source=source)

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> bool:
        """Log an error."""
        return self._log_built(
            AuditEventBuilder.system_error,
            error_type=error_type,
            error_message=error_message,
            details=details,
        )
