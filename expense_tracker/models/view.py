"""
Derived View Models

Read-only outputs handed to the presentation layer.
"""

from pydantic import BaseModel, ConfigDict, Field

from expense_tracker.models.expense import Expense


ALL_MONTHS = "all"


class CategoryTotal(BaseModel):
    """Subtotal for one category within the filtered set."""
    model_config = ConfigDict(frozen=True)

    category: str
    amount: float


class ExpenseView(BaseModel):
    """
    Everything the presentation layer renders for one month filter.

    `expenses` is in display order (date descending). `months` is built
    from all records, not just the filtered ones.
    """
    model_config = ConfigDict(frozen=True)

    month_filter: str = Field(
        default=ALL_MONTHS,
        description="'all' or a YYYY-MM month"
    )
    expenses: list[Expense] = Field(default_factory=list)
    total: float = 0.0
    count: int = 0
    category_totals: list[CategoryTotal] = Field(default_factory=list)
    months: list[str] = Field(default_factory=list)
