"""Read side of the task change trail."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from tasktrail.domain.errors import InvalidArgument, NotFound, PermissionDenied
from tasktrail.domain.model import Capability

from .canonical import canonical_value

if TYPE_CHECKING:
    from tasktrail.domain.model import TaskAuditLog, TaskHistoryEntry
    from tasktrail.domain.ports import AuditStore, MembershipProvider, TaskStore


@dataclass(frozen=True, slots=True)
class TaskActivity:
    task_id: str
    audit_logs: tuple[TaskAuditLog, ...]
    history: tuple[TaskHistoryEntry, ...]

    def to_dict(self) -> dict[str, object]:
        return {
            "taskId": self.task_id,
            "auditLogs": [
                {
                    "id": entry.id,
                    "actorId": entry.actor_id,
                    "action": str(entry.action),
                    "details": entry.details,
                    "createdAt": canonical_value(entry.created_at),
                }
                for entry in self.audit_logs
            ],
            "history": [
                {
                    "id": entry.id,
                    "actorId": entry.actor_id,
                    "field": entry.field,
                    "oldValue": entry.old_value,
                    "newValue": entry.new_value,
                    "createdAt": canonical_value(entry.created_at),
                }
                for entry in self.history
            ],
        }


def task_activity(
    task_id: str,
    actor_id: str,
    *,
    tasks: TaskStore,
    membership: MembershipProvider,
    audit: AuditStore,
) -> TaskActivity:
    """Audit logs and field history of a task, newest first."""

    if not task_id:
        raise InvalidArgument("task id is required")
    snapshot = tasks.get_snapshot(task_id)
    if snapshot is None:
        raise NotFound(f"task {task_id} not found")
    access = membership.membership(actor_id, workspace_id=snapshot.workspace_id)
    if not access.can(Capability.VIEW):
        raise PermissionDenied("actor may not view this task")
    return TaskActivity(
        task_id=task_id,
        audit_logs=tuple(audit.list_audit_logs(task_id)),
        history=tuple(audit.list_history(task_id)),
    )
