"""
Aggregation Engine

Pure functions that derive totals, balances, goal progress and task
counts from entity collections. Nothing here mutates its inputs or
touches storage.

Months are matched by calendar month and civil year of the entry's date,
not by ISO week or fiscal period.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Union

from taskbudget.models.calendar import Month, js_round
from taskbudget.models.entities import (
    AppData,
    Expense,
    Goal,
    Income,
    Task,
    TaskStatus,
)
from taskbudget.models.outcomes import (
    GoalProgress,
    MonthlySummary,
    TaskStatusCounts,
)
from taskbudget.queries.filters import sort_goals


def is_same_month(day: date, month: Union[Month, str], year: int) -> bool:
    """True if the date falls in the given calendar month and year."""
    return Month.of(day) == Month.of(month) and day.year == year


def _sum_for_month(
    items: Iterable[Union[Income, Expense]],
    month: Union[Month, str],
    year: int,
) -> Decimal:
    return sum(
        (item.amount for item in items if is_same_month(item.date, month, year)),
        Decimal(0),
    )


def total_income(income: Iterable[Income], month: Union[Month, str], year: int) -> Decimal:
    """Sum of income amounts dated in the given month."""
    return _sum_for_month(income, month, year)


def total_expenses(expenses: Iterable[Expense], month: Union[Month, str], year: int) -> Decimal:
    """Sum of expense amounts dated in the given month."""
    return _sum_for_month(expenses, month, year)


def net_balance(income: Decimal, expenses: Decimal) -> Decimal:
    """Income minus expenses. May be negative."""
    return income - expenses


def goal_progress(goal: Union[Goal, Decimal, int, float], balance: Decimal) -> int:
    """
    Percentage of a goal reached by a net balance.

    Capped at 100 but not floored at 0: a large deficit gives a large
    negative percentage. A target of zero or below gives 0.

    Args:
        goal: A goal, or its target amount
        balance: Net balance for the goal's month
    """
    target = goal.target_amount if isinstance(goal, Goal) else Decimal(str(goal))
    if target <= 0:
        return 0
    return min(100, js_round(Decimal(str(balance)) / target * 100))


def task_status_counts(tasks: Iterable[Task]) -> TaskStatusCounts:
    """Completed / in-progress / pending counts and the total."""
    completed = in_progress = pending = total = 0
    for task in tasks:
        total += 1
        if task.status == TaskStatus.COMPLETED:
            completed += 1
        elif task.status == TaskStatus.IN_PROGRESS:
            in_progress += 1
        elif task.status == TaskStatus.PENDING:
            pending += 1
    return TaskStatusCounts(
        completed=completed,
        in_progress=in_progress,
        pending=pending,
        total=total,
    )


def find_goal(goals: Iterable[Goal], month: Union[Month, str], year: int) -> Optional[Goal]:
    """First goal set for the given month and year."""
    month = Month.of(month)
    for goal in goals:
        if goal.month == month and goal.year == year:
            return goal
    return None


def month_net_balance(data: AppData, month: Union[Month, str], year: int) -> Decimal:
    return net_balance(
        total_income(data.income, month, year),
        total_expenses(data.expenses, month, year),
    )


def goals_with_progress(data: AppData, newest_first: bool = False) -> list[GoalProgress]:
    """
    Each goal with the net balance of its own month and its progress.

    Args:
        data: Snapshot to aggregate
        newest_first: Order by period, newest first, as the goals view
                      lists them. Collection order otherwise.
    """
    goals = sort_goals(data.goals) if newest_first else data.goals
    results = []
    for goal in goals:
        balance = month_net_balance(data, goal.month, goal.year)
        results.append(
            GoalProgress(
                goal=goal,
                net_balance=balance,
                progress=goal_progress(goal, balance),
            )
        )
    return results


def monthly_summary(data: AppData, month: Union[Month, str], year: int) -> MonthlySummary:
    """
    Dashboard figures for one month.

    Task counts cover all tasks; they are not filtered by month.
    """
    month = Month.of(month)
    income_total = total_income(data.income, month, year)
    expense_total = total_expenses(data.expenses, month, year)
    balance = net_balance(income_total, expense_total)
    goal = find_goal(data.goals, month, year)

    return MonthlySummary(
        month=month,
        year=year,
        total_income=income_total,
        total_expenses=expense_total,
        net_balance=balance,
        goal=goal,
        goal_progress=goal_progress(goal, balance) if goal else 0,
        task_counts=task_status_counts(data.tasks),
    )
