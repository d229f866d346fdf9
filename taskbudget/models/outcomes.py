"""
Mutation outcomes and derived read models.

DESIGN DECISION: Mutations against an unknown id are not errors. They
report NOT_FOUND so callers can tell "nothing happened" from "done"
without relying on an exception being absent.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from taskbudget.models.calendar import Month, js_round
from taskbudget.models.entities import Goal


class MutationOutcome(str, Enum):
    """What a repository mutation did."""
    CREATED = "created"
    UPDATED = "updated"
    NOT_FOUND = "not_found"
    DUPLICATE = "duplicate"
    INVALID = "invalid"


class GoalCreateResult(BaseModel):
    """
    Result of creating a goal.

    Goal creation is the only mutation with a user-facing rejection:
    a second goal for a month/year that already has one.
    """

    outcome: MutationOutcome
    goal: Optional[Goal] = None
    error_message: Optional[str] = None

    @property
    def created(self) -> bool:
        return self.outcome == MutationOutcome.CREATED

    @property
    def is_duplicate(self) -> bool:
        return self.outcome == MutationOutcome.DUPLICATE


class TaskStatusCounts(BaseModel):
    """Task counts by status."""

    completed: int = Field(default=0, ge=0)
    in_progress: int = Field(default=0, ge=0)
    pending: int = Field(default=0, ge=0)
    total: int = Field(default=0, ge=0)

    @property
    def completion_rate(self) -> int:
        """Percentage of completed tasks, 0 when there are no tasks."""
        if self.total <= 0:
            return 0
        return js_round(Decimal(self.completed) / Decimal(self.total) * 100)


class GoalProgress(BaseModel):
    """A goal with the net balance of its own month and the resulting progress."""

    goal: Goal
    net_balance: Decimal
    progress: int


class MonthlySummary(BaseModel):
    """Everything the dashboard shows for one calendar month."""

    month: Month
    year: int
    total_income: Decimal
    total_expenses: Decimal
    net_balance: Decimal
    goal: Optional[Goal] = None
    goal_progress: int = 0
    task_counts: TaskStatusCounts
