"""
Activity Logger

Every repository mutation is written to the structured log:
- what changed (entity kind and id)
- what was ignored (unknown ids, duplicate goal periods)
- when persistence degraded to in-memory only

Nothing here is persisted. The log stream is the only trace.
"""

import logging
from typing import Optional

import structlog

from taskbudget.models.activity import (
    ActivityEvent,
    ActivityEventBuilder,
    ActivitySeverity,
)
from taskbudget.models.entities import Entity, EntityKind


def configure_logging(level: str = "info") -> None:
    """
    Configure structlog on top of the standard logging module.

    Safe to call more than once; the last call wins.
    """
    logging.basicConfig(format="%(message)s")
    logging.getLogger().setLevel(level.upper())

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class ActivityLogger:
    """
    Central activity logging service.

    Keeps the events it has emitted in `history` when `keep_history` is set,
    which tests use to assert on what the repository did.
    """

    def __init__(self, name: str = "taskbudget", keep_history: bool = False):
        self._name = name
        self._logger = structlog.get_logger(name)
        self._keep_history = keep_history
        self.history: list[ActivityEvent] = []

    def log(self, event: ActivityEvent) -> None:
        """
        Write an event at the level matching its severity.

        A failing log sink is reported through the standard logging module
        and otherwise ignored, so callers never see it.
        """
        log_dict = event.to_log_dict()

        try:
            if event.severity == ActivitySeverity.ERROR:
                self._logger.error("activity_event", **log_dict)
            elif event.severity == ActivitySeverity.WARNING:
                self._logger.warning("activity_event", **log_dict)
            elif event.severity == ActivitySeverity.DEBUG:
                self._logger.debug("activity_event", **log_dict)
            else:
                self._logger.info("activity_event", **log_dict)
        except Exception as e:
            # Log failure but don't raise
            logging.getLogger(self._name).error(
                "activity_log_failed: %s (%s)", event.event_type.value, e
            )

        if self._keep_history:
            self.history.append(event)

    def log_created(self, kind: EntityKind, entity: Entity) -> None:
        self.log(ActivityEventBuilder.created(kind, entity))

    def log_updated(self, kind: EntityKind, entity: Entity) -> None:
        self.log(ActivityEventBuilder.updated(kind, entity))

    def log_deleted(self, kind: EntityKind, entity: Entity) -> None:
        self.log(ActivityEventBuilder.deleted(kind, entity))

    def log_restored(self, kind: EntityKind, entity: Entity) -> None:
        self.log(ActivityEventBuilder.restored(kind, entity))

    def log_not_found(self, kind: EntityKind, entity_id: str, operation: str) -> None:
        self.log(ActivityEventBuilder.not_found(kind, entity_id, operation))

    def log_rejected(self, kind: EntityKind, entity_id: str, operation: str, error_message: str) -> None:
        self.log(ActivityEventBuilder.rejected(kind, entity_id, operation, error_message))

    def log_pin_toggled(self, task_id: str, is_pinned: bool) -> None:
        self.log(ActivityEventBuilder.pin_toggled(task_id, is_pinned))

    def log_status_toggled(self, task_id: str, old_status: str, new_status: str) -> None:
        self.log(ActivityEventBuilder.status_toggled(task_id, old_status, new_status))

    def log_goal_duplicate(self, month: str, year: int, existing_id: str) -> None:
        self.log(ActivityEventBuilder.goal_duplicate(month, year, existing_id))

    def log_undo_evicted(self, kind: EntityKind, entity: Entity, capacity: int) -> None:
        self.log(ActivityEventBuilder.undo_evicted(kind, entity, capacity))

    def log_data_loaded(self, key: str, counts: dict[str, int]) -> None:
        self.log(ActivityEventBuilder.data_loaded(key, counts))

    def log_data_seeded(self, key: str, reason: str) -> None:
        self.log(ActivityEventBuilder.data_seeded(key, reason))

    def log_persistence_disabled(self, key: str, error_message: Optional[str] = None) -> None:
        self.log(ActivityEventBuilder.persistence_disabled(key, error_message))
