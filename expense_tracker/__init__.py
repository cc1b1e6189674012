"""
Expense Tracker - Source Package

A single-user expense tracker view-model: a record store mirrored into a
local durable slot, and a derived view that filters by month and ranks
category subtotals.

DESIGN PRINCIPLES:
1. The in-memory collection is the source of truth
2. Storage is best-effort; failures degrade to session-only use
3. Derived values are pure functions of (expenses, month filter)
4. Every mutation is auditable
"""

__version__ = "1.0.0"
__author__ = "Expense Tracker Team"
