"""
Audit Models for the Expense Tracker

Every mutation of the record store and every degraded storage access is
recorded as an audit event. Events are emitted through structlog; they are
never persisted next to the expenses themselves.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Record store
    EXPENSE_ADDED = "expense_added"
    EXPENSE_REJECTED = "expense_rejected"
    EXPENSE_REMOVED = "expense_removed"
    REMOVE_MISSED = "remove_missed"

    # Persistence
    STORE_LOADED = "store_loaded"
    LOAD_DEGRADED = "load_degraded"
    SAVE_FAILED = "save_failed"

    # Presentation intents
    FILTER_CHANGED = "filter_changed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
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

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'expense', 'store')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user intent?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.expense_added(expense_id, category, amount)
        event = AuditEventBuilder.save_failed(error, record_count)
    """

    @staticmethod
    def expense_added(
        expense_id: str,
        category: str,
        amount: float,
        warnings: Optional[list[str]] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            entity_type="expense",
            entity_id=expense_id,
            description=f"Expense added: {category} {amount:.2f}",
            details={
                "category": category,
                "amount": amount,
                "warnings": warnings or [],
            },
            is_user_action=True,
        )

    @staticmethod
    def expense_rejected(issues: list[dict]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="expense",
            description=f"Expense rejected with {len(issues)} issue(s)",
            details={"issues": issues},
            is_user_action=True,
        )

    @staticmethod
    def expense_removed(expense_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_REMOVED,
            entity_type="expense",
            entity_id=expense_id,
            description="Expense removed",
            is_user_action=True,
        )

    @staticmethod
    def remove_missed(expense_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REMOVE_MISSED,
            severity=AuditSeverity.DEBUG,
            entity_type="expense",
            entity_id=expense_id,
            description="Remove ignored: no expense with this id",
            is_user_action=True,
        )

    @staticmethod
    def store_loaded(status: str, record_count: int, skipped: int = 0) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_LOADED,
            severity=AuditSeverity.WARNING if skipped else AuditSeverity.INFO,
            entity_type="store",
            description=f"Loaded {record_count} expense(s)",
            details={
                "status": status,
                "record_count": record_count,
                "skipped": skipped,
            },
        )

    @staticmethod
    def load_degraded(status: str, error: Optional[str]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOAD_DEGRADED,
            severity=AuditSeverity.WARNING,
            entity_type="store",
            description=f"Stored expenses could not be read ({status}); starting empty",
            details={"status": status},
            error_message=error,
        )

    @staticmethod
    def save_failed(error: Optional[str], record_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="store",
            description="Expenses could not be saved; continuing in memory",
            details={"record_count": record_count},
            error_message=error,
        )

    @staticmethod
    def filter_changed(month_filter: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.FILTER_CHANGED,
            severity=AuditSeverity.DEBUG,
            description=f"Month filter set to {month_filter}",
            details={"month_filter": month_filter},
            is_user_action=True,
        )
