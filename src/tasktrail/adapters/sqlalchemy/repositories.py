"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select

from tasktrail.adapters.sqlalchemy.mappings import (
    project_table,
    task_audit_log_table,
    task_history_table,
    task_table,
)
from tasktrail.domain.errors import InvalidArgument, NotFound
from tasktrail.domain.model import Task, TaskAuditLog, TaskHistoryEntry

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from sqlalchemy.orm import Session

    from tasktrail.domain.model import TaskSnapshot

_UPDATABLE_COLUMNS = frozenset(
    {
        "title",
        "description",
        "status",
        "priority",
        "type",
        "assignee_id",
        "sprint_id",
        "due_date",
        "story_points",
        "updated_at",
    }
)


class SqlAlchemyTaskStore:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, task: Task) -> None:
        self.session.add(task)

    def get_snapshot(self, task_id: str) -> TaskSnapshot | None:
        stmt = (
            select(Task, project_table.c.workspace_id)
            .join(project_table, project_table.c.id == task_table.c.project_id)
            .where(task_table.c.id == task_id)
        )
        row = self.session.execute(stmt).one_or_none()
        if row is None:
            return None
        task, workspace_id = row
        return task.snapshot(workspace_id=workspace_id)

    def update(self, task_id: str, fields: Mapping[str, object]) -> TaskSnapshot:
        unknown = set(fields) - _UPDATABLE_COLUMNS
        if unknown:
            raise InvalidArgument(f"cannot update task fields: {sorted(unknown)}")
        task = self.session.get(Task, task_id)
        if task is None:
            raise NotFound(f"task {task_id} not found")
        for name, value in fields.items():
            setattr(task, name, value)
        self.session.flush()
        workspace_id = self.session.execute(
            select(project_table.c.workspace_id).where(project_table.c.id == task.project_id)
        ).scalar_one()
        return task.snapshot(workspace_id=workspace_id)


class SqlAlchemyAuditStore:
    """Append-only trail; listings are newest first."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def add_audit_log(self, entry: TaskAuditLog) -> None:
        self.session.add(entry)

    def add_history_entries(self, entries: Sequence[TaskHistoryEntry]) -> None:
        self.session.add_all(entries)

    def list_audit_logs(self, task_id: str) -> list[TaskAuditLog]:
        stmt = (
            select(TaskAuditLog)
            .where(task_audit_log_table.c.task_id == task_id)
            .order_by(task_audit_log_table.c.created_at.desc())
        )
        return list(self.session.execute(stmt).scalars())

    def list_history(self, task_id: str) -> list[TaskHistoryEntry]:
        stmt = (
            select(TaskHistoryEntry)
            .where(task_history_table.c.task_id == task_id)
            .order_by(task_history_table.c.created_at.desc())
        )
        return list(self.session.execute(stmt).scalars())
