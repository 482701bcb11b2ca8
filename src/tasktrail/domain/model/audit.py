"""Append-only audit records for task mutations."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from tasktrail.domain.model.base import Entity
from tasktrail.domain.model.enums import AuditAction


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(eq=False, kw_only=True)
class TaskAuditLog(Entity):
    """One row per persisted task mutation, carrying the requested patch as JSON."""

    task_id: str
    actor_id: str
    action: str = AuditAction.TASK_UPDATED
    details: str = "{}"
    created_at: datetime = field(default_factory=_utcnow)


@dataclass(eq=False, kw_only=True)
class TaskHistoryEntry(Entity):
    """One row per field whose canonical value changed."""

    task_id: str
    actor_id: str
    field: str
    old_value: str | None = None
    new_value: str | None = None
    created_at: datetime = field(default_factory=_utcnow)
