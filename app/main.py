"""
Streamlit Frontend for the Expense Tracker

Renders the derived view and forwards user intents to the tracker.
All computation lives in expense_tracker; this module only draws.

Run with:
    streamlit run app/main.py
"""

from datetime import date

import streamlit as st

from expense_tracker.config import get_settings
from expense_tracker.models.expense import DEFAULT_CATEGORIES
from expense_tracker.models.view import ALL_MONTHS
from expense_tracker.orchestrator import ExpenseTracker, create_app_components, create_slot
from expense_tracker.queries import format_currency
from expense_tracker.services.storage import KeyValueSlot


# Page configuration
st.set_page_config(
    page_title="Expense Tracker",
    page_icon="💸",
    layout="centered",
)


@st.cache_resource
def get_slot() -> KeyValueSlot:
    """Durable slot shared by every session (cached)."""
    return create_slot(get_settings())


def get_tracker() -> ExpenseTracker:
    """Per-session tracker; loads persisted expenses on the session's first run."""
    if "tracker" not in st.session_state:
        st.session_state.tracker = create_app_components(slot=get_slot())
    return st.session_state.tracker


def render_form(tracker: ExpenseTracker) -> None:
    """Render the add-expense form."""
    with st.form("add_expense", clear_on_submit=True):
        col1, col2 = st.columns(2)
        with col1:
            amount_text = st.text_input("Amount", placeholder="0.00")
            category = st.selectbox("Category", DEFAULT_CATEGORIES, index=0)
        with col2:
            expense_date = st.date_input("Date", value=date.today())
            note = st.text_input("Note", placeholder="Optional")

        if st.form_submit_button("Add expense", type="primary"):
            result = tracker.submit_expense(
                amount_text=amount_text,
                category=category,
                date=expense_date.isoformat() if expense_date else "",
                note=note,
            )
            if not result.added:
                st.warning("Enter an amount greater than zero and a date.")


def render_summary(tracker: ExpenseTracker, currency: str) -> None:
    """Render totals and the per-category ranking."""
    view = tracker.view

    col1, col2 = st.columns(2)
    col1.metric("Total", format_currency(view.total, currency))
    col2.metric("Entries", view.count)

    if view.category_totals:
        st.subheader("By category")
        for item in view.category_totals:
            left, right = st.columns([3, 1])
            left.write(item.category)
            right.write(format_currency(item.amount, currency))


def render_expenses(tracker: ExpenseTracker, currency: str) -> None:
    """Render the filtered expenses with a delete button per row."""
    view = tracker.view

    st.subheader("Expenses")
    if not view.expenses:
        st.info("No expenses yet.")
        return

    for expense in view.expenses:
        col1, col2, col3, col4 = st.columns([2, 2, 2, 1])
        col1.write(expense.date)
        col2.write(expense.category)
        col3.write(format_currency(expense.amount, currency))
        if col4.button("Delete", key=f"delete-{expense.id}"):
            tracker.delete_expense(expense.id)
            st.rerun()
        if expense.note:
            st.caption(expense.note)


def main():
    """Main application entry point."""
    tracker = get_tracker()
    currency = get_settings().app.currency

    st.title("💸 Expense Tracker")
    st.caption("Minimal dashboard to add, view, and summarize expenses.")

    load_result = tracker.load_result
    if load_result is not None and load_result.is_degraded:
        st.warning("Saved expenses could not be read. Starting with an empty list.")
    if tracker.store.last_save is not None and not tracker.store.last_save.success:
        st.warning("Changes could not be saved and will be lost when the app stops.")

    render_form(tracker)

    months = [ALL_MONTHS] + tracker.view.months
    current = tracker.month_filter if tracker.month_filter in months else ALL_MONTHS
    selected = st.selectbox(
        "Month",
        months,
        index=months.index(current),
        format_func=lambda m: "All months" if m == ALL_MONTHS else m,
        key="month_filter",
    )
    tracker.set_month_filter(selected)

    render_summary(tracker, currency)
    render_expenses(tracker, currency)


if __name__ == "__main__":
    main()
