"""Task records and their read-only snapshots."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from tasktrail.domain.model.base import Entity
from tasktrail.domain.model.enums import TaskPriority, TaskStatus


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(eq=False, kw_only=True)
class Task(Entity):
    project_id: str
    title: str
    description: str | None = None
    status: str = TaskStatus.TODO
    priority: str = TaskPriority.MEDIUM
    type: str = "task"
    assignee_id: str | None = None
    sprint_id: str | None = None
    due_date: datetime | None = None
    story_points: int | None = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime | None = None

    def snapshot(self, *, workspace_id: str) -> TaskSnapshot:
        return TaskSnapshot(
            id=self.id,
            project_id=self.project_id,
            workspace_id=workspace_id,
            title=self.title,
            description=self.description,
            status=self.status,
            priority=self.priority,
            type=self.type,
            assignee_id=self.assignee_id,
            sprint_id=self.sprint_id,
            due_date=self.due_date,
            story_points=self.story_points,
            updated_at=self.updated_at,
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class TaskSnapshot:
    """Full state of a task at one point in time, with its ownership linkage."""

    id: str
    project_id: str
    workspace_id: str
    title: str
    description: str | None = None
    status: str = TaskStatus.TODO
    priority: str = TaskPriority.MEDIUM
    type: str = "task"
    assignee_id: str | None = None
    sprint_id: str | None = None
    due_date: datetime | None = None
    story_points: int | None = None
    updated_at: datetime | None = None
