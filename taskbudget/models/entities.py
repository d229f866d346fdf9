"""
Core Data Models for the Task & Budget Planner

These models define the schemas of the four entity kinds and of the
persisted snapshot. They are designed to:
1. Enforce the value domains (priority, status, frequency, month)
2. Be immutable once built, so snapshots handed to readers stay stable
3. Round-trip the camelCase JSON document the data blob is stored as

DESIGN DECISION: Python attributes are snake_case; the JSON document uses
camelCase aliases. Either spelling is accepted on input.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Annotated, Optional, Union

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
)
from pydantic.alias_generators import to_camel

from taskbudget.models.calendar import Month


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class EntityKind(str, Enum):
    """The four independent collections of the data blob."""
    TASK = "task"
    EXPENSE = "expense"
    INCOME = "income"
    GOAL = "goal"


class Priority(str, Enum):
    """Task priority. Declaration order is the display order."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def weight(self) -> int:
        return list(Priority).index(self)


class TaskStatus(str, Enum):
    """Task lifecycle status."""
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class RecurringFrequency(str, Enum):
    """
    How often a recurring task repeats.

    NONE goes with is_recurring=False. The pairing is kept by the input
    forms; the store does not enforce it.
    """
    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


def _exact_decimal(value):
    """Go through str so 45.99 becomes Decimal("45.99"), not its binary expansion."""
    if isinstance(value, float):
        return Decimal(str(value))
    return value


# Currency values are exact in memory and plain JSON numbers on disk.
Money = Annotated[
    Decimal,
    BeforeValidator(_exact_decimal),
    PlainSerializer(float, return_type=float, when_used="json"),
]


# =============================================================================
# ENTITIES
# =============================================================================

class _Entity(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque identifier, unique within its entity kind"
    )


class Task(_Entity):
    """A to-do item."""

    title: str
    description: str = ""
    category: str
    priority: Priority = Priority.MEDIUM
    status: TaskStatus = TaskStatus.PENDING
    due_date: dt.date
    is_pinned: bool = False
    is_recurring: bool = False
    recurring_frequency: RecurringFrequency = RecurringFrequency.NONE
    created_at: dt.datetime


class Expense(_Entity):
    """Money spent on a given day."""

    amount: Annotated[Money, Field(ge=0)]
    category: str
    date: dt.date
    notes: str = ""
    tags: tuple[str, ...] = Field(
        default=(),
        description="Free-form labels, order preserved"
    )


class Income(_Entity):
    """Money received on a given day."""

    amount: Annotated[Money, Field(ge=0)]
    source: str
    date: dt.date
    notes: str = ""


class Goal(_Entity):
    """
    Monthly income goal.

    At most one goal per (month, year); the repository checks this when a
    goal is created, not when one is updated. A target of zero or below is
    allowed and always yields 0% progress.
    """

    target_amount: Money
    month: Month
    year: int


Entity = Union[Task, Expense, Income, Goal]


class AppData(BaseModel):
    """
    The aggregate root: four independent ordered collections.

    This is the unit that gets persisted under the data key.
    """
    model_config = ConfigDict(frozen=True)

    tasks: tuple[Task, ...] = ()
    expenses: tuple[Expense, ...] = ()
    income: tuple[Income, ...] = ()
    goals: tuple[Goal, ...] = ()

    def to_snapshot(self) -> dict:
        """Serialize to the JSON-ready camelCase document."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_snapshot(cls, raw: dict) -> "AppData":
        """
        Parse a persisted document.

        Raises:
            pydantic.ValidationError: If the document does not match the schema
        """
        return cls.model_validate(raw)


# =============================================================================
# DRAFTS - input to the repository's create operations
# =============================================================================

class _Draft(BaseModel):
    """
    Partially filled entity as entered by the user.

    Omitted fields are filled in with defaults by the repository.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class TaskDraft(_Draft):
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    priority: Optional[Priority] = None
    status: Optional[TaskStatus] = None
    due_date: Optional[dt.date] = None
    is_pinned: Optional[bool] = None
    is_recurring: Optional[bool] = None
    recurring_frequency: Optional[RecurringFrequency] = None


class ExpenseDraft(_Draft):
    amount: Optional[Annotated[Money, Field(ge=0)]] = None
    category: Optional[str] = None
    date: Optional[dt.date] = None
    notes: Optional[str] = None
    tags: Optional[list[str]] = None


class IncomeDraft(_Draft):
    amount: Optional[Annotated[Money, Field(ge=0)]] = None
    source: Optional[str] = None
    date: Optional[dt.date] = None
    notes: Optional[str] = None


class GoalDraft(_Draft):
    target_amount: Optional[Money] = None
    month: Optional[Month] = None
    year: Optional[int] = None
