"""
Activity Models

Every repository mutation produces an ActivityEvent that is written to
the structured log. Events are not stored anywhere; there is no history
beyond the log stream and the in-session undo buffer.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from taskbudget.models.entities import Entity, EntityKind


class ActivityEventType(str, Enum):
    """Types of events we log."""
    # Entity lifecycle
    ENTITY_CREATED = "entity_created"
    ENTITY_UPDATED = "entity_updated"
    ENTITY_DELETED = "entity_deleted"
    ENTITY_RESTORED = "entity_restored"
    MUTATION_NOT_FOUND = "mutation_not_found"
    MUTATION_REJECTED = "mutation_rejected"

    # Task toggles
    TASK_PIN_TOGGLED = "task_pin_toggled"
    TASK_STATUS_TOGGLED = "task_status_toggled"

    # Goals
    GOAL_DUPLICATE_REJECTED = "goal_duplicate_rejected"

    # Undo buffer
    UNDO_EVICTED = "undo_evicted"

    # Persistence
    DATA_LOADED = "data_loaded"
    DATA_SEEDED = "data_seeded"
    PERSISTENCE_DISABLED = "persistence_disabled"


class ActivitySeverity(str, Enum):
    """Severity level for activity events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class ActivityEvent(BaseModel):
    """A single loggable event."""

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the event occurred (local time)"
    )
    event_type: ActivityEventType
    severity: ActivitySeverity = ActivitySeverity.INFO

    entity_kind: Optional[EntityKind] = None
    entity_id: Optional[str] = None

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_kind": self.entity_kind.value if self.entity_kind else None,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class ActivityEventBuilder:
    """
    Helper class to build activity events with common patterns.

    Usage:
        event = ActivityEventBuilder.created(EntityKind.TASK, task)
        event = ActivityEventBuilder.not_found(EntityKind.GOAL, goal_id, "update")
    """

    @staticmethod
    def created(kind: EntityKind, entity: Entity) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.ENTITY_CREATED,
            entity_kind=kind,
            entity_id=entity.id,
            description=f"{kind.value.capitalize()} created",
        )

    @staticmethod
    def updated(kind: EntityKind, entity: Entity) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.ENTITY_UPDATED,
            entity_kind=kind,
            entity_id=entity.id,
            description=f"{kind.value.capitalize()} updated",
        )

    @staticmethod
    def deleted(kind: EntityKind, entity: Entity) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.ENTITY_DELETED,
            entity_kind=kind,
            entity_id=entity.id,
            description=f"{kind.value.capitalize()} deleted, undo available",
        )

    @staticmethod
    def restored(kind: EntityKind, entity: Entity) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.ENTITY_RESTORED,
            entity_kind=kind,
            entity_id=entity.id,
            description=f"{kind.value.capitalize()} restored",
        )

    @staticmethod
    def not_found(kind: EntityKind, entity_id: str, operation: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.MUTATION_NOT_FOUND,
            severity=ActivitySeverity.DEBUG,
            entity_kind=kind,
            entity_id=entity_id,
            description=f"{operation} ignored: no {kind.value} with this id",
            details={"operation": operation},
        )

    @staticmethod
    def rejected(kind: EntityKind, entity_id: str, operation: str, error_message: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.MUTATION_REJECTED,
            severity=ActivitySeverity.WARNING,
            entity_kind=kind,
            entity_id=entity_id,
            description=f"{operation} rejected: {kind.value} failed validation",
            details={"operation": operation},
            error_message=error_message,
        )

    @staticmethod
    def pin_toggled(task_id: str, is_pinned: bool) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.TASK_PIN_TOGGLED,
            entity_kind=EntityKind.TASK,
            entity_id=task_id,
            description="Task pinned" if is_pinned else "Task unpinned",
            details={"is_pinned": is_pinned},
        )

    @staticmethod
    def status_toggled(task_id: str, old_status: str, new_status: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.TASK_STATUS_TOGGLED,
            entity_kind=EntityKind.TASK,
            entity_id=task_id,
            description=f"Task status changed from {old_status} to {new_status}",
            details={"from": old_status, "to": new_status},
        )

    @staticmethod
    def goal_duplicate(month: str, year: int, existing_id: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.GOAL_DUPLICATE_REJECTED,
            severity=ActivitySeverity.WARNING,
            entity_kind=EntityKind.GOAL,
            entity_id=existing_id,
            description=f"Goal for {month} {year} already exists",
            details={"month": month, "year": year},
        )

    @staticmethod
    def undo_evicted(kind: EntityKind, entity: Entity, capacity: int) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.UNDO_EVICTED,
            entity_kind=kind,
            entity_id=entity.id,
            description=f"Undo buffer full, {kind.value} discarded permanently",
            details={"capacity": capacity},
        )

    @staticmethod
    def data_loaded(key: str, counts: dict[str, int]) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.DATA_LOADED,
            description=f"Loaded saved data from '{key}'",
            details=counts,
        )

    @staticmethod
    def data_seeded(key: str, reason: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.DATA_SEEDED,
            severity=ActivitySeverity.WARNING if reason != "missing" else ActivitySeverity.INFO,
            description=f"Installed seed data under '{key}'",
            details={"reason": reason},
        )

    @staticmethod
    def persistence_disabled(key: str, error_message: Optional[str]) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.PERSISTENCE_DISABLED,
            severity=ActivitySeverity.ERROR,
            description="Saving failed, continuing in memory only",
            details={"key": key},
            error_message=error_message,
        )
