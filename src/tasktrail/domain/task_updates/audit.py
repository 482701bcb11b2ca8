"""Record an immutable change trail for persisted task patches."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Final

from tasktrail.domain.model import AuditAction, TaskAuditLog, TaskHistoryEntry

from .canonical import canonical_value

if TYPE_CHECKING:
    from collections.abc import Iterable

    from tasktrail.domain.model import TaskSnapshot
    from tasktrail.domain.ports import AuditStore

    from .dto import TaskPatch

# History rows are always emitted in this order, whatever the patch key order.
HISTORY_FIELDS: Final[tuple[tuple[str, str], ...]] = (
    ("title", "title"),
    ("description", "description"),
    ("status", "status"),
    ("priority", "priority"),
    ("type", "type"),
    ("assignee_id", "assignee"),
    ("sprint_id", "sprint"),
    ("due_date", "dueDate"),
    ("story_points", "storyPoints"),
)


def record_task_update(
    *,
    task_id: str,
    actor_id: str,
    before: TaskSnapshot,
    after: TaskSnapshot,
    patch: TaskPatch,
    audit: AuditStore,
    recorded_at: datetime | None = None,
) -> tuple[TaskHistoryEntry, ...]:
    """Append one audit log and one history row per changed, requested field.

    Must only be called once the update has been persisted. Derived changes
    (such as an automatic status transition) are not diffed unless their own
    key was part of ``patch``. Returns the history rows written.
    """

    timestamp = recorded_at or datetime.now(tz=UTC)
    audit.add_audit_log(
        TaskAuditLog(
            task_id=task_id,
            actor_id=actor_id,
            action=AuditAction.TASK_UPDATED,
            details=patch_details(patch),
            created_at=timestamp,
        )
    )
    entries = diff_snapshots(
        before,
        after,
        patch.keys,
        task_id=task_id,
        actor_id=actor_id,
        recorded_at=timestamp,
    )
    if entries:
        audit.add_history_entries(entries)
    return entries


def diff_snapshots(
    before: TaskSnapshot,
    after: TaskSnapshot,
    requested_keys: Iterable[str],
    *,
    task_id: str,
    actor_id: str,
    recorded_at: datetime,
) -> tuple[TaskHistoryEntry, ...]:
    requested = frozenset(requested_keys)
    entries: list[TaskHistoryEntry] = []
    for attribute, history_name in HISTORY_FIELDS:
        if attribute not in requested:
            continue
        old_value = canonical_value(getattr(before, attribute))
        new_value = canonical_value(getattr(after, attribute))
        if old_value == new_value:
            continue
        entries.append(
            TaskHistoryEntry(
                task_id=task_id,
                actor_id=actor_id,
                field=history_name,
                old_value=old_value,
                new_value=new_value,
                created_at=recorded_at,
            )
        )
    return tuple(entries)


def patch_details(patch: TaskPatch) -> str:
    """Serialize the patch as requested by the caller, in its own key order."""

    return json.dumps(dict(patch.values), default=canonical_value)
