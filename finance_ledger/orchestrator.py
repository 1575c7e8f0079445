"""
Main Orchestrator for the Finance Ledger

This module ties together the ledger, its storage and the audit logger,
and defines the flows a front end drives:
1. Record (inputs -> validate -> add -> audit)
2. Save / Load (ledger <-> storage, audited)
3. Summaries (totals, category spending, text graph)

DESIGN DECISION: The session owns one ledger and receives its storage and
audit logger from the caller. Nothing here touches global state except
create_app_components(), which reads settings.
"""

from typing import Any, Optional

from finance_ledger.audit import AuditLogger, AuditTrail, configure_logging
from finance_ledger.config import get_settings
from finance_ledger.ledger import DEFAULT_GRAPH_SCALE, CategoryBar, Ledger, LedgerSummary
from finance_ledger.models.transaction import Transaction, TransactionResult
from finance_ledger.serialization import LoadReport, SaveReport, load_all, save_all
from finance_ledger.services.storage import (
    FlatFileStorage,
    LineStorageInterface,
    StorageError,
)


def _storage_name(storage: LineStorageInterface) -> str:
    path = getattr(storage, "path", None)
    return str(path) if path is not None else type(storage).__name__


class LedgerSession:
    """
    One user's working session with a ledger.

    Flow:
    1. record() each transaction as it is entered
    2. Query summary(), graph() or the ledger's sorted views
    3. save() before exit; load() at start to resume
    """

    def __init__(
        self,
        ledger: Optional[Ledger] = None,
        storage: Optional[LineStorageInterface] = None,
        audit_logger: Optional[AuditLogger] = None,
        graph_scale: int = DEFAULT_GRAPH_SCALE,
    ):
        self._ledger = ledger if ledger is not None else Ledger()
        self._storage = storage
        self._audit_logger = audit_logger or AuditLogger()
        self._graph_scale = graph_scale

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    @property
    def storage(self) -> Optional[LineStorageInterface]:
        return self._storage

    @property
    def audit_logger(self) -> AuditLogger:
        return self._audit_logger

    def record(
        self,
        description: str,
        amount: Any,
        kind: Any,
        category: str,
        date: Any,
    ) -> TransactionResult:
        """
        Validate and add one transaction.

        A rejected input leaves the ledger unchanged; the result carries
        the reasons.
        """
        result = Transaction.create(
            description=description,
            amount=amount,
            kind=kind,
            category=category,
            date=date,
        )

        if result.success:
            self._ledger.add(result.transaction)
            self._audit_logger.log_transaction_recorded(result.transaction)
        else:
            self._audit_logger.log_transaction_rejected(result.error)

        return result

    def _require_storage(self) -> LineStorageInterface:
        if self._storage is None:
            raise StorageError("No storage configured for this session")
        return self._storage

    def save(self) -> SaveReport:
        """Persist the whole ledger, replacing what the storage held."""
        storage = self._require_storage()
        try:
            report = save_all(self._ledger, storage)
        except StorageError as e:
            self._audit_logger.log_error(
                error_type="save_failed",
                error_message=str(e),
                details={"destination": _storage_name(storage)},
            )
            raise

        self._audit_logger.log_ledger_saved(
            destination=_storage_name(storage),
            written_count=report.written_count,
            unsafe_line_numbers=report.unsafe_line_numbers,
        )
        return report

    def load(self) -> LoadReport:
        """
        Append the stored transactions to this session's ledger.

        Malformed lines are skipped and reported; a missing source is
        reported as nothing to load.
        """
        storage = self._require_storage()
        try:
            report = load_all(self._ledger, storage)
        except StorageError as e:
            self._audit_logger.log_error(
                error_type="load_failed",
                error_message=str(e),
                details={"source": _storage_name(storage)},
            )
            raise

        if report.source_missing:
            self._audit_logger.log_source_missing(_storage_name(storage))
            return report

        for skipped in report.skipped:
            self._audit_logger.log_line_skipped(skipped.line_number, skipped.reason)
        self._audit_logger.log_ledger_loaded(
            source=_storage_name(storage),
            loaded_count=report.loaded_count,
            skipped_count=report.skipped_count,
        )
        return report

    def summary(self) -> LedgerSummary:
        return self._ledger.summary()

    def graph(self) -> list[CategoryBar]:
        return self._ledger.text_graph(scale=self._graph_scale)


def create_app_components(use_storage: bool = True) -> LedgerSession:
    """
    Factory function to create a configured session.

    Args:
        use_storage: Whether to attach the configured ledger file.
                     Set to False for a session that cannot save or load.

    Returns:
        A fresh LedgerSession with an empty ledger
    """
    settings = get_settings()
    configure_logging(settings.log_level, settings.json_logs)

    storage = None
    if use_storage:
        storage = FlatFileStorage(settings.data_file, encoding=settings.file_encoding)

    return LedgerSession(
        storage=storage,
        audit_logger=AuditLogger(AuditTrail()),
        graph_scale=settings.graph_scale,
    )
