"""
Data Models Package

This package contains all Pydantic models used by the planner core.
All data flowing through the repository must conform to these schemas.
"""

from taskbudget.models.calendar import Month, current_month_year, js_round
from taskbudget.models.entities import (
    AppData,
    Entity,
    EntityKind,
    Expense,
    ExpenseDraft,
    Goal,
    GoalDraft,
    Income,
    IncomeDraft,
    Priority,
    RecurringFrequency,
    Task,
    TaskDraft,
    TaskStatus,
)
from taskbudget.models.outcomes import (
    GoalCreateResult,
    GoalProgress,
    MonthlySummary,
    MutationOutcome,
    TaskStatusCounts,
)
from taskbudget.models.activity import (
    ActivityEvent,
    ActivityEventBuilder,
    ActivityEventType,
    ActivitySeverity,
)

__all__ = [
    # Calendar
    "Month",
    "current_month_year",
    "js_round",
    # Entities
    "AppData",
    "Entity",
    "EntityKind",
    "Expense",
    "ExpenseDraft",
    "Goal",
    "GoalDraft",
    "Income",
    "IncomeDraft",
    "Priority",
    "RecurringFrequency",
    "Task",
    "TaskDraft",
    "TaskStatus",
    # Outcomes
    "GoalCreateResult",
    "GoalProgress",
    "MonthlySummary",
    "MutationOutcome",
    "TaskStatusCounts",
    # Activity
    "ActivityEvent",
    "ActivityEventBuilder",
    "ActivityEventType",
    "ActivitySeverity",
]
