"""Read-side engines: aggregations and filtered/sorted views."""

from taskbudget.queries.aggregation import (
    find_goal,
    goal_progress,
    goals_with_progress,
    is_same_month,
    month_net_balance,
    monthly_summary,
    net_balance,
    task_status_counts,
    total_expenses,
    total_income,
)
from taskbudget.queries.filters import (
    ALL,
    TaskFilter,
    categories,
    filter_expenses,
    filter_income,
    filter_tasks,
    goal_years,
    query_tasks,
    sort_goals,
    sort_tasks,
    sort_transactions,
    tasks_by_status,
)

__all__ = [
    # Aggregation
    "find_goal",
    "goal_progress",
    "goals_with_progress",
    "is_same_month",
    "month_net_balance",
    "monthly_summary",
    "net_balance",
    "task_status_counts",
    "total_expenses",
    "total_income",
    # Filtering and sorting
    "ALL",
    "TaskFilter",
    "categories",
    "filter_expenses",
    "filter_income",
    "filter_tasks",
    "goal_years",
    "query_tasks",
    "sort_goals",
    "sort_tasks",
    "sort_transactions",
    "tasks_by_status",
]
