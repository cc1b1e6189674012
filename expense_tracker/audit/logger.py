"""
Audit Logger

DESIGN DECISION: Every mutation of the expense collection is logged.
This provides:
1. Traceability of what the user added and removed
2. Visibility into storage degradation (corrupt data, failed saves)

The audit logger:
- Never raises (a logging failure must not break an add or remove)
- Keeps a bounded in-memory history for inspection
"""

import logging
from collections import deque
from typing import Optional

import structlog

from expense_tracker.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


# Configure structlog for local logging
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
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """Route structlog output through the stdlib root logger at `level`."""
    logging.basicConfig(format="%(message)s", level=level.upper())
    logging.getLogger().setLevel(level.upper())


class AuditLogger:
    """
    Central audit logging service.

    Logs events to the structured local log and remembers the most
    recent ones.
    """

    def __init__(self, history_size: int = 100):
        self._logger = structlog.get_logger("expense_tracker.audit")
        self._history: deque[AuditEvent] = deque(maxlen=history_size)

    @property
    def recent_events(self) -> list[AuditEvent]:
        """Most recent events, oldest first."""
        return list(self._history)

    def log(self, event: AuditEvent) -> None:
        """Log an audit event."""
        self._history.append(event)

        log_dict = event.to_log_dict()
        try:
            if event.severity == AuditSeverity.ERROR:
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception as e:
            # Log failure but don't raise
            logging.getLogger(__name__).warning("audit logging failed: %s", e)

    def log_expense_added(
        self,
        expense_id: str,
        category: str,
        amount: float,
        warnings: Optional[list[str]] = None,
    ) -> None:
        self.log(AuditEventBuilder.expense_added(expense_id, category, amount, warnings))

    def log_expense_rejected(self, issues: list[dict]) -> None:
        self.log(AuditEventBuilder.expense_rejected(issues))

    def log_expense_removed(self, expense_id: str) -> None:
        self.log(AuditEventBuilder.expense_removed(expense_id))

    def log_remove_missed(self, expense_id: str) -> None:
        self.log(AuditEventBuilder.remove_missed(expense_id))

    def log_store_loaded(self, status: str, record_count: int, skipped: int = 0) -> None:
        self.log(AuditEventBuilder.store_loaded(status, record_count, skipped))

    def log_load_degraded(self, status: str, error: Optional[str]) -> None:
        """Log a load that fell back to an empty collection."""
        self.log(AuditEventBuilder.load_degraded(status, error))

    def log_save_failed(self, error: Optional[str], record_count: int) -> None:
        """Log a save that did not reach the durable slot."""
        self.log(AuditEventBuilder.save_failed(error, record_count))

    def log_filter_changed(self, month_filter: str) -> None:
        self.log(AuditEventBuilder.filter_changed(month_filter))
