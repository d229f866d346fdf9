"""
Tests for the Aggregation Engine

Includes the dashboard scenario: one 45.99 expense and one 2500.00
income this month against a 3000 goal gives 82% progress.
"""

import pytest
from datetime import date, datetime
from decimal import Decimal

from taskbudget.models import (
    AppData,
    Expense,
    ExpenseDraft,
    Goal,
    GoalDraft,
    Income,
    IncomeDraft,
    Month,
    Task,
    TaskStatus,
)
from taskbudget.queries import (
    find_goal,
    goal_progress,
    goals_with_progress,
    is_same_month,
    monthly_summary,
    net_balance,
    task_status_counts,
    total_expenses,
    total_income,
)


def expense(entity_id, amount, day):
    return Expense(id=entity_id, amount=Decimal(amount), category="Food", date=day)


def income(entity_id, amount, day):
    return Income(id=entity_id, amount=Decimal(amount), source="Salary", date=day)


def task(entity_id, status):
    return Task(
        id=entity_id,
        title=entity_id,
        category="Work",
        status=status,
        due_date=date(2024, 6, 1),
        created_at=datetime(2024, 6, 1),
    )


def goal(target, month=Month.JUNE, year=2024, entity_id="g1"):
    return Goal(id=entity_id, target_amount=Decimal(target), month=month, year=year)


class TestMonthlyTotals:
    """Tests for total_income / total_expenses."""

    def test_sums_only_matching_month(self):
        expenses = [
            expense("e1", "10.10", date(2024, 6, 1)),
            expense("e2", "20.20", date(2024, 6, 30)),
            expense("e3", "99", date(2024, 7, 1)),
            expense("e4", "99", date(2024, 5, 31)),
            expense("e5", "99", date(2023, 6, 15)),
        ]
        assert total_expenses(expenses, Month.JUNE, 2024) == Decimal("30.30")

    def test_empty_match_is_zero(self):
        assert total_expenses([], Month.JUNE, 2024) == Decimal(0)
        assert total_income([income("i1", "5", date(2024, 1, 1))], "June", 2024) == Decimal(0)

    def test_income_total(self):
        items = [income("i1", "2500.00", date(2024, 6, 12)), income("i2", "150", date(2024, 6, 11))]
        assert total_income(items, "June", 2024) == Decimal("2650.00")

    def test_is_same_month(self):
        assert is_same_month(date(2024, 2, 29), Month.FEBRUARY, 2024)
        assert not is_same_month(date(2024, 2, 29), Month.FEBRUARY, 2023)
        assert not is_same_month(date(2024, 3, 1), "February", 2024)


class TestNetBalance:
    """Tests for net_balance."""

    def test_positive(self):
        assert net_balance(Decimal("2500.00"), Decimal("45.99")) == Decimal("2454.01")

    def test_negative(self):
        assert net_balance(Decimal("10"), Decimal("25.5")) == Decimal("-15.5")


class TestGoalProgress:
    """Tests for goal_progress."""

    def test_dashboard_scenario(self):
        assert goal_progress(goal("3000"), Decimal("2454.01")) == 82

    def test_capped_at_100(self):
        assert goal_progress(goal("100"), Decimal("250")) == 100

    def test_not_floored_at_zero(self):
        """Test a deficit yields a negative percentage (current behaviour, kept on purpose)."""
        assert goal_progress(goal("100"), Decimal("-250")) == -250

    def test_non_positive_target_is_zero(self):
        assert goal_progress(goal("0"), Decimal("500")) == 0
        assert goal_progress(goal("-100"), Decimal("500")) == 0

    def test_rounds_half_up(self):
        assert goal_progress(Decimal("8"), Decimal("1")) == 13
        assert goal_progress(Decimal("8"), Decimal("-1")) == -12

    def test_accepts_plain_target(self):
        assert goal_progress(200, Decimal("50")) == 25


class TestTaskStatusCounts:
    """Tests for task_status_counts."""

    def test_counts(self):
        tasks = [
            task("a", TaskStatus.COMPLETED),
            task("b", TaskStatus.IN_PROGRESS),
            task("c", TaskStatus.PENDING),
            task("d", TaskStatus.PENDING),
        ]
        counts = task_status_counts(tasks)
        assert (counts.completed, counts.in_progress, counts.pending, counts.total) == (1, 1, 2, 4)
        assert counts.completion_rate == 25

    def test_no_tasks(self):
        counts = task_status_counts([])
        assert counts.total == 0
        assert counts.completion_rate == 0


class TestDerivedViews:
    """Tests for goal lookup, goals with progress and the monthly summary."""

    def test_find_goal(self):
        goals = [goal("1", Month.MAY, entity_id="g0"), goal("2")]
        assert find_goal(goals, "June", 2024).id == "g1"
        assert find_goal(goals, Month.JUNE, 2025) is None

    def test_goals_with_progress_use_their_own_month(self):
        data = AppData(
            income=(income("i1", "100", date(2024, 5, 3)), income("i2", "300", date(2024, 6, 3))),
            goals=(goal("200", Month.MAY, entity_id="may"), goal("600", Month.JUNE, entity_id="jun")),
        )
        progress = {p.goal.id: p for p in goals_with_progress(data)}
        assert progress["may"].net_balance == Decimal("100")
        assert progress["may"].progress == 50
        assert progress["jun"].progress == 50

    def test_goals_with_progress_newest_first(self):
        data = AppData(goals=(
            goal("1", Month.MARCH, 2024, entity_id="mar24"),
            goal("1", Month.DECEMBER, 2023, entity_id="dec23"),
            goal("1", Month.JUNE, 2024, entity_id="jun24"),
        ))
        ordered = [p.goal.id for p in goals_with_progress(data, newest_first=True)]
        assert ordered == ["jun24", "mar24", "dec23"]
        assert [p.goal.id for p in goals_with_progress(data)] == ["mar24", "dec23", "jun24"]

    def test_monthly_summary_without_goal(self):
        summary = monthly_summary(AppData(), Month.JUNE, 2024)
        assert summary.goal is None
        assert summary.goal_progress == 0
        assert summary.net_balance == Decimal(0)

    def test_end_to_end_scenario(self, empty_repo):
        """Test the dashboard scenario through the repository."""
        empty_repo.create_expense(ExpenseDraft(amount=Decimal("45.99")))
        empty_repo.create_income(IncomeDraft(amount=Decimal("2500.00")))
        empty_repo.create_goal(GoalDraft(target_amount=Decimal("3000")))

        summary = monthly_summary(empty_repo.snapshot(), Month.JUNE, 2024)
        assert summary.total_expenses == Decimal("45.99")
        assert summary.total_income == Decimal("2500.00")
        assert summary.net_balance == Decimal("2454.01")
        assert summary.goal_progress == 82

    def test_seed_summary(self, seeded_repo):
        summary = monthly_summary(seeded_repo.snapshot(), "June", 2024)
        assert summary.total_expenses == Decimal("175.98")
        assert summary.total_income == Decimal("2650.00")
        assert summary.goal.id == "goal1"
        assert summary.goal_progress == 82
        assert summary.task_counts.total == 3
        assert summary.task_counts.completion_rate == 33


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
