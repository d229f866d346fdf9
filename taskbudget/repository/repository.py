"""
Repository for the four entity collections.

The repository is the only writer of tasks, expenses, income and goals.
Every mutation:
1. Changes the in-memory collection (one point update, never a rebuild)
2. Writes the whole data blob through to the store before returning
3. Emits an activity event

GUARANTEES:
- Unknown ids never raise. They come back as NOT_FOUND or None.
- Updates that break the schema are refused with INVALID.
- A failing store never raises. The session carries on in memory only.
- Readers get immutable tuples and AppData snapshots.
"""

import threading
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional, Union
from uuid import uuid4

import structlog
from pydantic import ValidationError

from taskbudget.activity import ActivityLogger
from taskbudget.config import AppSettings, get_settings
from taskbudget.models.calendar import Clock, Month, current_month_year
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
from taskbudget.models.outcomes import GoalCreateResult, MutationOutcome
from taskbudget.repository.collection import EntityCollection
from taskbudget.repository.seed import build_seed_data
from taskbudget.repository.undo import UndoBuffer
from taskbudget.services.storage import KeyValueStore, MalformedDataError, StorageError


logger = structlog.get_logger(__name__)

DEFAULT_DATA_KEY = "budget-task-app-data"

_KIND_BY_TYPE: dict[type, EntityKind] = {
    Task: EntityKind.TASK,
    Expense: EntityKind.EXPENSE,
    Income: EntityKind.INCOME,
    Goal: EntityKind.GOAL,
}

# pending <-> completed; in-progress only ever goes forward to completed.
_STATUS_TOGGLE: dict[TaskStatus, TaskStatus] = {
    TaskStatus.PENDING: TaskStatus.COMPLETED,
    TaskStatus.COMPLETED: TaskStatus.PENDING,
    TaskStatus.IN_PROGRESS: TaskStatus.COMPLETED,
}


def kind_of(entity: Entity) -> EntityKind:
    """
    Entity kind of a model instance.

    Raises:
        TypeError: If the object is not one of the four entity models
    """
    try:
        return _KIND_BY_TYPE[type(entity)]
    except KeyError:
        raise TypeError(f"Not an entity: {type(entity).__name__}")


class Repository:
    """
    Owner of the tasks, expenses, income and goals collections.

    Call load_or_seed() once before the first query; create_app_components()
    in the orchestrator does this for you.
    """

    def __init__(
        self,
        store: KeyValueStore,
        settings: Optional[AppSettings] = None,
        data_key: str = DEFAULT_DATA_KEY,
        clock: Clock = datetime.now,
        activity_logger: Optional[ActivityLogger] = None,
        id_factory: Callable[[], str] = lambda: uuid4().hex,
    ):
        """
        Initialize the repository with empty collections.

        Args:
            store: Key/value backend the data blob is written to
            settings: Application settings (undo capacity, draft defaults).
                      Loaded from the environment if None.
            data_key: Storage key of the data blob
            clock: Source of "now" for default dates and timestamps
            activity_logger: Where mutation events go
            id_factory: Generator of fresh entity ids
        """
        self._store = store
        self._settings = settings or get_settings().app
        self._data_key = data_key
        self._clock = clock
        self._activity = activity_logger or ActivityLogger()
        self._new_id = id_factory

        self._collections: dict[EntityKind, EntityCollection] = {
            kind: EntityCollection() for kind in EntityKind
        }
        self._undo = UndoBuffer(self._settings.undo_capacity)
        self._lock = threading.RLock()
        self._persistence_enabled = True

    # -------------------------------------------------------------------------
    # Bootstrap and persistence
    # -------------------------------------------------------------------------

    @property
    def data_key(self) -> str:
        return self._data_key

    @property
    def is_persistent(self) -> bool:
        """False once a save has failed; the session is then memory-only."""
        return self._persistence_enabled

    @property
    def undo_buffer(self) -> UndoBuffer:
        return self._undo

    def load_or_seed(self) -> bool:
        """
        Install the saved data blob, or the seed dataset if there is none.

        A missing key, undecodable content and a document that does not
        match the schema are all treated as "no saved data". Pending
        undos are discarded.

        Returns:
            True if saved data was loaded, False if the seed was installed
        """
        with self._lock:
            self._undo.clear()
            data, reason = self._read_saved_data()
            if data is not None:
                self._install(data)
                self._emit(self._activity.log_data_loaded, self._data_key, self._counts())
                return True

            self._install(build_seed_data(self._clock))
            self._emit(self._activity.log_data_seeded, self._data_key, reason)
            self._persist()
            return False

    def _read_saved_data(self) -> tuple[Optional[AppData], str]:
        try:
            raw = self._store.load(self._data_key)
        except MalformedDataError:
            return None, "malformed"
        except StorageError:
            return None, "unreadable"

        if raw is None:
            return None, "missing"
        if not isinstance(raw, dict):
            return None, "malformed"

        try:
            data = AppData.from_snapshot(raw)
            # Fails on duplicate ids within a kind
            for items in self._items_by_kind(data).values():
                EntityCollection(items)
        except (ValidationError, ValueError):
            return None, "invalid_schema"
        return data, "loaded"

    def _install(self, data: AppData) -> None:
        self._collections = {
            kind: EntityCollection(items)
            for kind, items in self._items_by_kind(data).items()
        }

    @staticmethod
    def _items_by_kind(data: AppData) -> dict[EntityKind, tuple]:
        return {
            EntityKind.TASK: data.tasks,
            EntityKind.EXPENSE: data.expenses,
            EntityKind.INCOME: data.income,
            EntityKind.GOAL: data.goals,
        }

    def _persist(self) -> bool:
        """Write the whole blob through. After the first failure, stop trying."""
        if not self._persistence_enabled:
            return False

        error_message = None
        try:
            saved = self._store.save(self._data_key, self.snapshot().to_snapshot())
        except StorageError as e:
            saved = False
            error_message = str(e)

        if not saved:
            self._persistence_enabled = False
            self._emit(self._activity.log_persistence_disabled, self._data_key, error_message)
        return saved

    def _emit(self, log_method: Callable[..., None], *args) -> None:
        """Report an activity event without letting a logging failure reach the caller."""
        try:
            log_method(*args)
        except Exception as e:
            logger.error("activity_log_failed", method=getattr(log_method, "__name__", repr(log_method)), error=str(e))

    def _counts(self) -> dict[str, int]:
        return {kind.value: len(items) for kind, items in self._collections.items()}

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def snapshot(self) -> AppData:
        """Immutable copy of all four collections."""
        with self._lock:
            return AppData(
                tasks=self._collections[EntityKind.TASK].snapshot(),
                expenses=self._collections[EntityKind.EXPENSE].snapshot(),
                income=self._collections[EntityKind.INCOME].snapshot(),
                goals=self._collections[EntityKind.GOAL].snapshot(),
            )

    def _members(self, kind: EntityKind) -> tuple:
        with self._lock:
            return self._collections[kind].snapshot()

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._members(EntityKind.TASK)

    @property
    def expenses(self) -> tuple[Expense, ...]:
        return self._members(EntityKind.EXPENSE)

    @property
    def income(self) -> tuple[Income, ...]:
        return self._members(EntityKind.INCOME)

    @property
    def goals(self) -> tuple[Goal, ...]:
        return self._members(EntityKind.GOAL)

    def find(self, kind: EntityKind, entity_id: str) -> Optional[Entity]:
        with self._lock:
            return self._collections[kind].get(entity_id)

    def find_task(self, task_id: str) -> Optional[Task]:
        return self.find(EntityKind.TASK, task_id)

    def find_expense(self, expense_id: str) -> Optional[Expense]:
        return self.find(EntityKind.EXPENSE, expense_id)

    def find_income(self, income_id: str) -> Optional[Income]:
        return self.find(EntityKind.INCOME, income_id)

    def find_goal(self, goal_id: str) -> Optional[Goal]:
        return self.find(EntityKind.GOAL, goal_id)

    def goal_for_period(self, month: Union[Month, str], year: int) -> Optional[Goal]:
        """The goal set for a month/year, if any."""
        month = Month.of(month)
        for goal in self._members(EntityKind.GOAL):
            if goal.month == month and goal.year == year:
                return goal
        return None

    def pending_undo(self, kind: EntityKind) -> tuple[Entity, ...]:
        """Deleted entities of one kind that can still be restored."""
        with self._lock:
            return self._undo.pending(kind)

    # -------------------------------------------------------------------------
    # Generic mutations
    # -------------------------------------------------------------------------

    def _fresh_id(self) -> str:
        while True:
            candidate = self._new_id()
            taken = any(
                candidate in collection or self._undo.contains(kind, candidate)
                for kind, collection in self._collections.items()
            )
            if not taken:
                return candidate

    def _add(self, kind: EntityKind, entity: Entity) -> Entity:
        with self._lock:
            self._collections[kind].append(entity)
            self._persist()
        self._emit(self._activity.log_created, kind, entity)
        return entity

    def update(self, entity: Entity) -> MutationOutcome:
        """
        Replace the stored entity that has the same id.

        The entity is validated again first, including copies made with
        model_copy(update=...). An invalid entity is rejected with INVALID and
        nothing changes. An unknown id is a no-op: nothing is created and
        NOT_FOUND is returned.
        """
        kind = kind_of(entity)
        try:
            entity = type(entity).model_validate(entity.model_dump())
        except ValidationError as e:
            self._emit(self._activity.log_rejected, kind, entity.id, "update", str(e))
            return MutationOutcome.INVALID

        with self._lock:
            if not self._collections[kind].replace(entity):
                self._emit(self._activity.log_not_found, kind, entity.id, "update")
                return MutationOutcome.NOT_FOUND
            self._persist()
        self._emit(self._activity.log_updated, kind, entity)
        return MutationOutcome.UPDATED

    def delete(self, kind: EntityKind, entity_id: str) -> Optional[Entity]:
        """
        Remove an entity and hold it in the undo buffer.

        Returns:
            The removed entity, so the caller can offer an undo, or None
            if no entity has this id
        """
        with self._lock:
            removed = self._collections[kind].remove(entity_id)
            if removed is None:
                self._emit(self._activity.log_not_found, kind, entity_id, "delete")
                return None
            evicted = self._undo.push(kind, removed)
            self._persist()
        self._emit(self._activity.log_deleted, kind, removed)
        if evicted is not None:
            self._emit(self._activity.log_undo_evicted, kind, evicted, self._undo.capacity)
        return removed

    def restore(self, kind: EntityKind, entity_id: str) -> Optional[Entity]:
        """
        Move a deleted entity back to the end of its collection.

        Returns:
            The restored entity, or None if it is not in the undo buffer
        """
        with self._lock:
            entity = self._undo.pop(kind, entity_id)
            if entity is None:
                self._emit(self._activity.log_not_found, kind, entity_id, "restore")
                return None
            self._collections[kind].append(entity)
            self._persist()
        self._emit(self._activity.log_restored, kind, entity)
        return entity

    # -------------------------------------------------------------------------
    # Tasks
    # -------------------------------------------------------------------------

    def create_task(self, draft: Optional[TaskDraft] = None) -> Task:
        """Create a task, filling omitted fields with defaults."""
        draft = draft or TaskDraft()
        now = self._clock()
        task = Task(
            id=self._fresh_id(),
            title=draft.title or "New Task",
            description=draft.description or "",
            category=draft.category or self._settings.default_task_category,
            priority=draft.priority or Priority.MEDIUM,
            status=draft.status or TaskStatus.PENDING,
            due_date=draft.due_date or now.date(),
            is_pinned=draft.is_pinned or False,
            is_recurring=draft.is_recurring or False,
            recurring_frequency=draft.recurring_frequency or RecurringFrequency.NONE,
            created_at=now,
        )
        return self._add(EntityKind.TASK, task)

    def update_task(self, task: Task) -> MutationOutcome:
        return self.update(task)

    def delete_task(self, task_id: str) -> Optional[Task]:
        return self.delete(EntityKind.TASK, task_id)

    def restore_task(self, task_id: str) -> Optional[Task]:
        return self.restore(EntityKind.TASK, task_id)

    def toggle_task_pin(self, task_id: str) -> MutationOutcome:
        """Pin an unpinned task or unpin a pinned one."""
        with self._lock:
            task = self.find_task(task_id)
            if task is None:
                self._emit(self._activity.log_not_found, EntityKind.TASK, task_id, "toggle_pin")
                return MutationOutcome.NOT_FOUND
            toggled = task.model_copy(update={"is_pinned": not task.is_pinned})
            self._collections[EntityKind.TASK].replace(toggled)
            self._persist()
        self._emit(self._activity.log_pin_toggled, task_id, toggled.is_pinned)
        return MutationOutcome.UPDATED

    def toggle_task_status(self, task_id: str) -> MutationOutcome:
        """
        Flip a task between pending and completed.

        This is a two-state toggle, not a cycle: an in-progress task goes
        straight to completed, and nothing toggles back to in-progress.
        """
        with self._lock:
            task = self.find_task(task_id)
            if task is None:
                self._emit(self._activity.log_not_found, EntityKind.TASK, task_id, "toggle_status")
                return MutationOutcome.NOT_FOUND
            new_status = _STATUS_TOGGLE[task.status]
            toggled = task.model_copy(update={"status": new_status})
            self._collections[EntityKind.TASK].replace(toggled)
            self._persist()
        self._emit(self._activity.log_status_toggled, task_id, task.status.value, new_status.value)
        return MutationOutcome.UPDATED

    # -------------------------------------------------------------------------
    # Expenses
    # -------------------------------------------------------------------------

    def create_expense(self, draft: Optional[ExpenseDraft] = None) -> Expense:
        """Create an expense, filling omitted fields with defaults."""
        draft = draft or ExpenseDraft()
        expense = Expense(
            id=self._fresh_id(),
            amount=draft.amount if draft.amount is not None else Decimal(0),
            category=draft.category or self._settings.default_expense_category,
            date=draft.date or self._clock().date(),
            notes=draft.notes or "",
            tags=tuple(draft.tags or ()),
        )
        return self._add(EntityKind.EXPENSE, expense)

    def update_expense(self, expense: Expense) -> MutationOutcome:
        return self.update(expense)

    def delete_expense(self, expense_id: str) -> Optional[Expense]:
        return self.delete(EntityKind.EXPENSE, expense_id)

    def restore_expense(self, expense_id: str) -> Optional[Expense]:
        return self.restore(EntityKind.EXPENSE, expense_id)

    # -------------------------------------------------------------------------
    # Income
    # -------------------------------------------------------------------------

    def create_income(self, draft: Optional[IncomeDraft] = None) -> Income:
        """Create an income entry, filling omitted fields with defaults."""
        draft = draft or IncomeDraft()
        income = Income(
            id=self._fresh_id(),
            amount=draft.amount if draft.amount is not None else Decimal(0),
            source=draft.source or self._settings.default_income_source,
            date=draft.date or self._clock().date(),
            notes=draft.notes or "",
        )
        return self._add(EntityKind.INCOME, income)

    def update_income(self, income: Income) -> MutationOutcome:
        return self.update(income)

    def delete_income(self, income_id: str) -> Optional[Income]:
        return self.delete(EntityKind.INCOME, income_id)

    def restore_income(self, income_id: str) -> Optional[Income]:
        return self.restore(EntityKind.INCOME, income_id)

    # -------------------------------------------------------------------------
    # Goals
    # -------------------------------------------------------------------------

    def create_goal(self, draft: Optional[GoalDraft] = None) -> GoalCreateResult:
        """
        Create a monthly income goal.

        Rejected, without any mutation, if a goal already exists for the
        same month and year.
        """
        draft = draft or GoalDraft()
        current_month, current_year = current_month_year(self._clock)
        month = draft.month or current_month
        year = draft.year or current_year

        with self._lock:
            existing = self.goal_for_period(month, year)
            if existing is not None:
                self._emit(self._activity.log_goal_duplicate, month.value, year, existing.id)
                return GoalCreateResult(
                    outcome=MutationOutcome.DUPLICATE,
                    error_message=(
                        f"A goal for {month.value} {year} already exists. "
                        "Please edit the existing goal."
                    ),
                )

            goal = Goal(
                id=self._fresh_id(),
                target_amount=draft.target_amount if draft.target_amount is not None else Decimal(0),
                month=month,
                year=year,
            )
            self._add(EntityKind.GOAL, goal)
        return GoalCreateResult(outcome=MutationOutcome.CREATED, goal=goal)

    def update_goal(self, goal: Goal) -> MutationOutcome:
        """Replace a goal. The one-goal-per-month rule is not re-checked here."""
        return self.update(goal)

    def delete_goal(self, goal_id: str) -> Optional[Goal]:
        return self.delete(EntityKind.GOAL, goal_id)

    def restore_goal(self, goal_id: str) -> Optional[Goal]:
        return self.restore(EntityKind.GOAL, goal_id)
