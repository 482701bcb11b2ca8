"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class EntityKind(StrEnum):
    """Entity kinds a free-text name can be resolved to."""

    PROJECT = "project"
    TASK = "task"
    USER = "user"


class TaskStatus(StrEnum):
    """Built-in task statuses. Projects may use additional free-form statuses."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    IN_REVIEW = "in_review"
    DONE = "done"


class TaskPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class Capability(StrEnum):
    VIEW = "view"
    CREATE = "create"
    EDIT = "edit"
    DELETE = "delete"
    MANAGE_MEMBERS = "manage_members"
    MANAGE_SETTINGS = "manage_settings"


class WorkspaceRole(StrEnum):
    OWNER = "owner"
    MANAGER = "manager"
    MEMBER = "member"
    VIEWER = "viewer"


class AuditAction(StrEnum):
    TASK_UPDATED = "task_updated"
