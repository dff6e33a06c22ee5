import enum
from datetime import datetime, timezone


class TaskStatus(str, enum.Enum):
    DONE = "DONE"
    IN_PROGRESS = "IN_PROGRESS"


def as_utc(value: datetime | None) -> datetime | None:
    """Normalize to aware UTC. Naive values are taken as UTC (SQLite drops tzinfo)."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def task_status(due_date: datetime | None, now: datetime | None = None) -> TaskStatus:
    """
    Derive a task's display status from its due date.

    DONE only when the due date is set and strictly before ``now``;
    a due date equal to ``now`` is still IN_PROGRESS. Never persisted.
    """
    if due_date is None:
        return TaskStatus.IN_PROGRESS
    now = as_utc(now) if now is not None else datetime.now(timezone.utc)
    if as_utc(due_date) < now:
        return TaskStatus.DONE
    return TaskStatus.IN_PROGRESS
