"""Ports for persisting tasks and their audit trail."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from tasktrail.domain.model import TaskAuditLog, TaskHistoryEntry, TaskSnapshot


@runtime_checkable
class TaskStore(Protocol):
    """Persistence contract for tasks."""

    def get_snapshot(self, task_id: str) -> TaskSnapshot | None: ...

    def update(self, task_id: str, fields: Mapping[str, object]) -> TaskSnapshot: ...


@runtime_checkable
class AuditStore(Protocol):
    """Append-only persistence contract for audit logs and field history."""

    def add_audit_log(self, entry: TaskAuditLog) -> None: ...

    def add_history_entries(self, entries: Sequence[TaskHistoryEntry]) -> None: ...

    def list_audit_logs(self, task_id: str) -> list[TaskAuditLog]: ...

    def list_history(self, task_id: str) -> list[TaskHistoryEntry]: ...
