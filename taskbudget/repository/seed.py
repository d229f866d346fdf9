"""
Seed dataset installed when no saved data can be loaded.

Dates are relative to the clock so the dashboard has something to show
for the current month on first start.
"""

from datetime import datetime, timedelta
from decimal import Decimal

from taskbudget.models.calendar import Clock, current_month_year
from taskbudget.models.entities import (
    AppData,
    Expense,
    Goal,
    Income,
    Priority,
    RecurringFrequency,
    Task,
    TaskStatus,
)


def build_seed_data(clock: Clock = datetime.now) -> AppData:
    now = clock()
    today = now.date()
    month, year = current_month_year(clock)

    def days(n: int):
        return today + timedelta(days=n)

    return AppData(
        tasks=(
            Task(
                id="task1",
                title="Complete project proposal",
                description="Finish the draft and send it to the team for review",
                category="Work",
                priority=Priority.HIGH,
                status=TaskStatus.IN_PROGRESS,
                due_date=today,
                is_pinned=True,
                is_recurring=False,
                recurring_frequency=RecurringFrequency.NONE,
                created_at=now,
            ),
            Task(
                id="task2",
                title="Grocery shopping",
                description="Buy fruits, vegetables, and other essentials",
                category="Personal",
                priority=Priority.MEDIUM,
                status=TaskStatus.PENDING,
                due_date=days(1),
                is_pinned=False,
                is_recurring=True,
                recurring_frequency=RecurringFrequency.WEEKLY,
                created_at=now,
            ),
            Task(
                id="task3",
                title="Morning jog",
                description="30 minutes of jogging in the park",
                category="Health",
                priority=Priority.MEDIUM,
                status=TaskStatus.COMPLETED,
                due_date=today,
                is_pinned=False,
                is_recurring=True,
                recurring_frequency=RecurringFrequency.DAILY,
                created_at=now,
            ),
        ),
        expenses=(
            Expense(
                id="expense1",
                amount=Decimal("45.99"),
                category="Food",
                date=today,
                notes="Grocery shopping at Whole Foods",
                tags=("groceries", "essentials"),
            ),
            Expense(
                id="expense2",
                amount=Decimal("120.00"),
                category="Utilities",
                date=days(-1),
                notes="Electricity bill for the month",
                tags=("bills", "monthly"),
            ),
            Expense(
                id="expense3",
                amount=Decimal("9.99"),
                category="Entertainment",
                date=days(-2),
                notes="Netflix subscription",
                tags=("subscription", "monthly"),
            ),
        ),
        income=(
            Income(
                id="income1",
                amount=Decimal("2500.00"),
                source="Salary",
                date=days(-3),
                notes="Monthly salary",
            ),
            Income(
                id="income2",
                amount=Decimal("150.00"),
                source="Freelance",
                date=days(-4),
                notes="Website design project",
            ),
        ),
        goals=(
            Goal(
                id="goal1",
                target_amount=Decimal("3000.00"),
                month=month,
                year=year,
            ),
        ),
    )
