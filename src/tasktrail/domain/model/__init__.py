"""Public domain model surface."""

from __future__ import annotations

from tasktrail.domain.model.audit import TaskAuditLog, TaskHistoryEntry
from tasktrail.domain.model.base import Entity, new_id
from tasktrail.domain.model.enums import (
    AuditAction,
    Capability,
    EntityKind,
    TaskPriority,
    TaskStatus,
    WorkspaceRole,
)
from tasktrail.domain.model.task import Task, TaskSnapshot
from tasktrail.domain.model.workspace import (
    Profile,
    Project,
    ProjectMembership,
    Sprint,
    Workspace,
    WorkspaceMembership,
)

__all__ = [  # noqa: RUF022
    # base
    "Entity",
    "new_id",
    # workspace
    "Workspace",
    "Project",
    "Profile",
    "WorkspaceMembership",
    "ProjectMembership",
    "Sprint",
    # task
    "Task",
    "TaskSnapshot",
    # audit
    "TaskAuditLog",
    "TaskHistoryEntry",
    # enums
    "AuditAction",
    "Capability",
    "EntityKind",
    "TaskPriority",
    "TaskStatus",
    "WorkspaceRole",
]
