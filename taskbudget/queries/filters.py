"""
Filter/Sort Engine

Builds the filtered, ordered lists the views display. Every function
returns a new list and leaves its input untouched.

DESIGN DECISION: All orderings rely on Python's stable sort, so items
that compare equal keep their collection order.
"""

from typing import Iterable, TypeVar, Union

from pydantic import BaseModel, ConfigDict

from taskbudget.models.entities import (
    Expense,
    Goal,
    Income,
    Task,
    TaskStatus,
)

ALL = "all"

T = TypeVar("T", Expense, Income)


class TaskFilter(BaseModel):
    """
    Task list criteria. Every dimension set to "all" is ignored.

    The search term matches title or description, case-insensitively.
    """
    model_config = ConfigDict(frozen=True)

    search: str = ""
    category: str = ALL
    priority: str = ALL
    status: str = ALL


def _contains(haystack: str, needle: str) -> bool:
    return needle.lower() in (haystack or "").lower()


def _matches(value: str, wanted: str) -> bool:
    return wanted == ALL or value == wanted


def filter_tasks(tasks: Iterable[Task], criteria: TaskFilter = TaskFilter()) -> list[Task]:
    return [
        task for task in tasks
        if (_contains(task.title, criteria.search) or _contains(task.description, criteria.search))
        and _matches(task.category, criteria.category)
        and _matches(task.priority.value, criteria.priority)
        and _matches(task.status.value, criteria.status)
    ]


def sort_tasks(tasks: Iterable[Task]) -> list[Task]:
    """Pinned tasks first, then high, medium, low priority."""
    return sorted(tasks, key=lambda task: (not task.is_pinned, task.priority.weight))


def query_tasks(tasks: Iterable[Task], criteria: TaskFilter = TaskFilter()) -> list[Task]:
    """Filter, then sort for display."""
    return sort_tasks(filter_tasks(tasks, criteria))


def tasks_by_status(tasks: Iterable[Task], criteria: TaskFilter = TaskFilter()) -> dict[str, list[Task]]:
    """
    The tabbed task view: "all" plus one list per status.

    Each list is filtered by the criteria and sorted for display.
    """
    ordered = query_tasks(tasks, criteria)
    tabs = {ALL: ordered}
    for status in TaskStatus:
        tabs[status.value] = [task for task in ordered if task.status == status]
    return tabs


def filter_expenses(
    expenses: Iterable[Expense],
    search: str = "",
    category: str = ALL,
) -> list[Expense]:
    """Search matches category or notes; category is an exact filter."""
    return [
        expense for expense in expenses
        if (_contains(expense.category, search) or _contains(expense.notes, search))
        and _matches(expense.category, category)
    ]


def filter_income(income: Iterable[Income], search: str = "") -> list[Income]:
    """Search matches source or notes."""
    return [
        item for item in income
        if _contains(item.source, search) or _contains(item.notes, search)
    ]


def sort_transactions(items: Iterable[T]) -> list[T]:
    """Most recent date first."""
    return sorted(items, key=lambda item: item.date, reverse=True)


def sort_goals(goals: Iterable[Goal]) -> list[Goal]:
    """Newest period first: year descending, then calendar month descending."""
    return sorted(goals, key=lambda goal: (goal.year, goal.month.number), reverse=True)


def goal_years(goals: Iterable[Goal], current_year: int) -> list[int]:
    """Years offered by the goal year picker, newest first."""
    return sorted({goal.year for goal in goals} | {current_year}, reverse=True)


def categories(items: Iterable[Union[Task, Expense]]) -> list[str]:
    """Distinct categories in first-seen order."""
    seen: dict[str, None] = {}
    for item in items:
        seen.setdefault(item.category, None)
    return list(seen)
