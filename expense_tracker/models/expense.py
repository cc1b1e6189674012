"""
Core Data Models for the Expense Tracker

These models define the schemas for everything flowing between the
record store, the persistence adapter and the derived view.

DESIGN DECISION: Expense records are frozen. A record is created once by
an add intent and never mutated afterwards; removal is the only other
lifecycle step.

Persisted data is mirrored, not repaired. Stored entries are read strictly
(no coercion); unknown keys are kept on the model (extra="allow") and only
the keys that were actually present are written back. Entries that do not
read as an expense are carried verbatim as UnreadableEntry.
"""

from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt


DEFAULT_CATEGORY = "Other"

DEFAULT_CATEGORIES = [
    "Food",
    "Transport",
    "Housing",
    "Utilities",
    "Health",
    "Entertainment",
    "Shopping",
    "Travel",
    "Other",
]


# =============================================================================
# EXPENSE RECORD
# =============================================================================

class Expense(BaseModel):
    """
    A single recorded expense.

    `amount` is always > 0 and rounded to 2 decimals for records created
    through the record store. Records read back from storage are mirrored
    as-is.
    """
    model_config = ConfigDict(frozen=True, extra="allow")

    id: str = Field(
        ...,
        description="Opaque unique identifier, stable for the record's lifetime"
    )
    date: str = Field(
        ...,
        description="Calendar date as ISO YYYY-MM-DD"
    )
    category: str = Field(
        ...,
        description="Free-form category label"
    )
    amount: Union[StrictInt, StrictFloat] = Field(
        ...,
        description="Monetary amount (a stored integer stays an integer)"
    )
    note: Optional[str] = Field(
        default=None,
        description="Optional free-form note"
    )

    @property
    def month(self) -> str:
        """The YYYY-MM bucket this expense falls into."""
        return self.date[:7]

    def to_storage_dict(self) -> dict:
        """Convert to the JSON shape kept in the durable slot (only keys that were set)."""
        return self.model_dump(exclude_unset=True)


class UnreadableEntry(BaseModel):
    """
    A stored array element that is not an expense object.

    Kept in its collection position and written back unchanged on every
    save; it never takes part in the derived view.
    """
    model_config = ConfigDict(frozen=True)

    raw: Any = None

    @property
    def stored_id(self) -> Optional[str]:
        """The `id` key of a stored object, if it has a string one."""
        if isinstance(self.raw, dict) and isinstance(self.raw.get("id"), str):
            return self.raw["id"]
        return None


StoredEntry = Union[Expense, UnreadableEntry]


class ExpenseCandidate(BaseModel):
    """
    Raw user input for a new expense, exactly as typed.

    Nothing is validated here; ExpenseValidator decides whether the
    candidate becomes a record.
    """

    amount: str = ""
    category: str = ""
    date: str = ""
    note: str = ""


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_value', 'invalid_format')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """
    Result of validating an expense candidate.

    Only error-level issues block creation. Warnings are reported
    alongside the created record.
    """

    is_valid: bool = Field(
        ...,
        description="Can a record be created from the candidate?"
    )
    amount: Optional[float] = Field(
        default=None,
        description="Parsed amount, rounded to 2 decimals, when valid"
    )
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def warnings(self) -> list[str]:
        return [issue.message for issue in self.issues if issue.severity == "warning"]


# =============================================================================
# OPERATION RESULTS
# =============================================================================

class AddResult(BaseModel):
    """Outcome of an add intent. `expense` is None when the candidate was rejected."""

    expense: Optional[Expense] = None
    validation: ValidationResult

    @property
    def added(self) -> bool:
        return self.expense is not None


class LoadStatus(str, Enum):
    """
    What the persistence adapter found in the durable slot.

    Every status other than LOADED yields an empty collection.
    """
    EMPTY = "empty"              # Nothing stored yet
    LOADED = "loaded"            # Array read back
    CORRUPT = "corrupt"          # Malformed JSON or not an array
    UNAVAILABLE = "unavailable"  # Slot could not be read


class LoadResult(BaseModel):
    """
    Outcome of reading the durable slot.

    `entries` holds every stored array element in stored order; elements
    that are not expense objects stay in place as UnreadableEntry so a
    later save writes them back unchanged.
    """

    status: LoadStatus
    entries: list[StoredEntry] = Field(default_factory=list)
    error: Optional[str] = None

    @property
    def expenses(self) -> list[Expense]:
        return [entry for entry in self.entries if isinstance(entry, Expense)]

    @property
    def skipped(self) -> int:
        """Stored elements that are not expense objects (kept, never shown)."""
        return sum(1 for entry in self.entries if isinstance(entry, UnreadableEntry))

    @property
    def is_degraded(self) -> bool:
        return self.status in (LoadStatus.CORRUPT, LoadStatus.UNAVAILABLE)


class SaveResult(BaseModel):
    """Outcome of writing the durable slot."""

    success: bool
    error: Optional[str] = None
