"""Validated task patch executor."""

from __future__ import annotations

import logging
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

from tasktrail.domain.errors import InvalidArgument, NoActualChanges, NotFound, PermissionDenied
from tasktrail.domain.model import Capability, TaskStatus

from .audit import record_task_update
from .canonical import as_utc
from .dto import PATCHABLE_FIELDS, TaskPatch, UpdatedTask

if TYPE_CHECKING:
    from collections.abc import Callable

    from tasktrail.domain.model import TaskSnapshot
    from tasktrail.domain.ports import AuditStore, MembershipProvider, TaskStore

log = logging.getLogger(__name__)

_REQUIRED_TEXT_FIELDS = frozenset({"title", "status", "priority", "type"})
_OPTIONAL_REFERENCE_FIELDS = frozenset({"assignee_id", "sprint_id"})


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


def apply_task_patch(  # noqa: PLR0913
    task_id: str,
    patch: TaskPatch,
    actor_id: str,
    *,
    tasks: TaskStore,
    membership: MembershipProvider,
    audit: AuditStore,
    clock: Callable[[], datetime] = _utcnow,
) -> UpdatedTask:
    """Apply ``patch`` to a task on behalf of ``actor_id`` and record the change.

    Nothing is written unless the actor holds the ``edit`` capability in the
    task's workspace and every present field validates. An assignee given
    without an explicit status moves a ``todo`` task to ``in_progress``.

    Raises ``NoActualChanges`` *after* persisting when the requested fields
    already held the submitted values; the write and its audit log are kept, so
    callers owning the transaction should commit before propagating it.
    """

    if not task_id:
        raise InvalidArgument("task id is required")
    if not actor_id:
        raise InvalidArgument("actor id is required")

    before = tasks.get_snapshot(task_id)
    if before is None:
        raise NotFound(f"task {task_id} not found")

    access = membership.membership(actor_id, workspace_id=before.workspace_id)
    if not access.is_member:
        raise PermissionDenied("actor is not a member of the task's workspace")
    if not access.can(Capability.EDIT):
        raise PermissionDenied("actor may not edit tasks in this workspace")

    updates = validated_updates(patch)
    assignee_id = updates.get("assignee_id")
    if isinstance(assignee_id, str) and not membership.is_assignable(
        assignee_id,
        project_id=before.project_id,
        workspace_id=before.workspace_id,
    ):
        raise InvalidArgument(
            f"assignee {assignee_id} is not a member of the task's project or workspace"
        )

    updates = with_derived_status(before, patch, updates)
    if not updates:
        raise InvalidArgument("no changes provided")

    now = clock()
    after = tasks.update(task_id, {**updates, "updated_at": now})
    log.info("Updated task %s fields=%s actor=%s", task_id, sorted(updates), actor_id)

    history = record_task_update(
        task_id=task_id,
        actor_id=actor_id,
        before=before,
        after=after,
        patch=patch,
        audit=audit,
        recorded_at=now,
    )
    if not history:
        log.info("Task %s patch matched its current values", task_id)
        raise NoActualChanges
    return UpdatedTask.from_snapshot(after, history)


def validated_updates(patch: TaskPatch) -> dict[str, object]:
    """Coerce every present field to its storage type, rejecting bad values."""

    updates: dict[str, object] = {}
    for name in PATCHABLE_FIELDS:
        if name in patch:
            updates[name] = _coerce(name, patch.get(name))
    return updates


def with_derived_status(
    current: TaskSnapshot,
    patch: TaskPatch,
    updates: dict[str, object],
) -> dict[str, object]:
    if "status" in patch or updates.get("assignee_id") is None:
        return updates
    if current.status != TaskStatus.TODO:
        return updates
    return {**updates, "status": TaskStatus.IN_PROGRESS.value}


def _coerce(name: str, value: object) -> object:  # noqa: PLR0911
    if name in _REQUIRED_TEXT_FIELDS:
        if not isinstance(value, str) or not value.strip():
            raise InvalidArgument(f"{name} must be a non-empty string")
        return value
    if name == "description":
        if value is not None and not isinstance(value, str):
            raise InvalidArgument("description must be a string or null")
        return value
    if name in _OPTIONAL_REFERENCE_FIELDS:
        if value is None or value == "":
            return None
        if not isinstance(value, str):
            raise InvalidArgument(f"{name} must be a string id or null")
        return value
    if name == "due_date":
        return _coerce_due_date(value)
    if name == "story_points":
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidArgument("story_points must be an integer or null")
        return value
    raise InvalidArgument(f"unknown task field {name}")


def _coerce_due_date(value: object) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=UTC)
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError as exc:
            raise InvalidArgument(f"due_date is not an ISO-8601 date: {value!r}") from exc
        return as_utc(parsed)
    raise InvalidArgument("due_date must be an ISO-8601 date or null")
