"""
Tests for the Expense Tracker models

Test strategy:
1. Unit tests for individual components (models, validators, view)
2. Integration tests for the tracker wired to in-memory storage
3. No real browser storage in tests (use fake slots)
"""

import pytest
from pydantic import ValidationError

from expense_tracker.models.expense import (
    AddResult,
    Expense,
    LoadResult,
    LoadStatus,
    UnreadableEntry,
    ValidationIssue,
    ValidationResult,
)
from expense_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)


class TestExpenseModel:
    """Tests for the Expense record."""

    def test_expense_creation(self):
        """Test Expense model creation."""
        expense = Expense(id="a1", date="2025-11-01", category="Food", amount=12.5)
        assert expense.amount == 12.5
        assert expense.note is None
        assert expense.month == "2025-11"

    def test_expense_is_frozen(self):
        """Records are never mutated in place."""
        expense = Expense(id="a1", date="2025-11-01", category="Food", amount=12.5)
        with pytest.raises(ValidationError):
            expense.amount = 99.0

    def test_storage_dict_omits_absent_note(self):
        """Test that a missing note is not written to storage."""
        expense = Expense(id="a1", date="2025-11-01", category="Food", amount=12.5)
        assert expense.to_storage_dict() == {
            "id": "a1",
            "date": "2025-11-01",
            "category": "Food",
            "amount": 12.5,
        }

    def test_storage_dict_keeps_unknown_fields(self):
        """Fields written by other versions survive a round trip."""
        expense = Expense.model_validate({
            "id": "a1",
            "date": "2025-11-01",
            "category": "Food",
            "amount": 3,
            "currency": "EUR",
        })
        assert expense.to_storage_dict()["currency"] == "EUR"

    def test_storage_dict_keeps_stored_nulls(self):
        stored = {
            "id": "a1",
            "date": "2025-11-01",
            "category": "Food",
            "amount": 3,
            "note": None,
            "source": None,
        }
        assert Expense.model_validate(stored, strict=True).to_storage_dict() == stored

    def test_amount_is_not_coerced(self):
        with pytest.raises(ValidationError):
            Expense.model_validate(
                {"id": "a1", "date": "2025-11-01", "category": "Food", "amount": "9.99"},
                strict=True,
            )

    def test_missing_required_field_rejected(self):
        """Test that id/date/category/amount are required."""
        with pytest.raises(ValidationError):
            Expense.model_validate({"id": "a1", "date": "2025-11-01", "amount": 3})


class TestResultModels:
    """Tests for operation result models."""

    def test_add_result_added(self):
        validation = ValidationResult(is_valid=True, amount=1.0)
        expense = Expense(id="x", date="2025-01-01", category="Other", amount=1.0)
        assert AddResult(expense=expense, validation=validation).added is True
        assert AddResult(validation=validation).added is False

    def test_load_result_degraded(self):
        """Only corrupt and unavailable loads count as degraded."""
        assert LoadResult(status=LoadStatus.CORRUPT).is_degraded is True
        assert LoadResult(status=LoadStatus.UNAVAILABLE).is_degraded is True
        assert LoadResult(status=LoadStatus.EMPTY).is_degraded is False
        assert LoadResult(status=LoadStatus.LOADED).is_degraded is False

    def test_load_result_counts_unreadable_entries(self):
        expense = Expense(id="x", date="2025-01-01", category="Other", amount=1.0)
        result = LoadResult(
            status=LoadStatus.LOADED,
            entries=[UnreadableEntry(raw=5), expense, UnreadableEntry(raw={"id": "y"})],
        )
        assert result.expenses == [expense]
        assert result.skipped == 2
        assert result.entries[2].stored_id == "y"

    def test_validation_result_warnings_only(self):
        """Test that warnings don't count as errors."""
        result = ValidationResult(
            is_valid=True,
            amount=5.0,
            issues=[
                ValidationIssue(
                    field="date",
                    issue_type="invalid_format",
                    message="Date 'soon' is not in YYYY-MM-DD format",
                    severity="warning",
                ),
            ],
        )
        assert result.has_errors is False
        assert result.error_count == 0
        assert result.warnings == ["Date 'soon' is not in YYYY-MM-DD format"]

    def test_validation_issue_severity_pattern(self):
        with pytest.raises(ValidationError):
            ValidationIssue(field="amount", issue_type="x", message="m", severity="fatal")


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            description="Expense added",
        )
        assert event.event_type == AuditEventType.EXPENSE_ADDED
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEventBuilder.expense_added("abc", "Food", 12.5)
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "expense_added"
        assert log_dict["entity_id"] == "abc"
        assert log_dict["details"]["category"] == "Food"
        assert log_dict["is_user_action"] is True

    def test_audit_event_builder_save_failed(self):
        """Test AuditEventBuilder.save_failed."""
        event = AuditEventBuilder.save_failed("quota exceeded", record_count=3)
        assert event.event_type == AuditEventType.SAVE_FAILED
        assert event.severity == AuditSeverity.ERROR
        assert event.error_message == "quota exceeded"
        assert event.details["record_count"] == 3

    def test_store_loaded_with_skipped_entries_is_warning(self):
        event = AuditEventBuilder.store_loaded("loaded", record_count=2, skipped=1)
        assert event.severity == AuditSeverity.WARNING


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
