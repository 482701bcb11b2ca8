"""SQLAlchemy mapping metadata for the tasktrail domain model."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING, Any, Final, cast

from sqlalchemy import (
    Column,
    DateTime,
    Dialect,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
    orm,
)
from sqlalchemy.orm import configure_mappers

from tasktrail.domain.model import (
    Profile,
    Project,
    ProjectMembership,
    Sprint,
    Task,
    TaskAuditLog,
    TaskHistoryEntry,
    Workspace,
    WorkspaceMembership,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

ID_LENGTH: Final[int] = 36


def _id_column(name: str = "id", *, foreign_key: str | None = None, **kwargs: Any) -> Column[str]:
    if foreign_key is None:
        return Column(name, String(ID_LENGTH), **kwargs)
    return Column(name, String(ID_LENGTH), ForeignKey(foreign_key), **kwargs)


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


class CapabilityListType(TypeDecorator[list[str]]):
    """JSON-encoded capability list; NULL means "use the role defaults"."""

    impl = String
    cache_ok = True

    def process_bind_param(self, value: list[str] | None, dialect: Dialect) -> str | None:
        _ = dialect
        if value is None:
            return None
        return json.dumps(sorted({str(capability) for capability in value}))

    def process_result_value(self, value: str | None, dialect: Dialect) -> list[str] | None:
        _ = dialect
        if value is None:
            return None
        loaded = json.loads(value)
        if not isinstance(loaded, list):
            return []
        items = cast("list[Any]", loaded)
        return [item for item in items if isinstance(item, str)]


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Ownership tables ------------------------------------------------------------

workspace_table = Table(
    "workspace",
    mapper_registry.metadata,
    _id_column(primary_key=True),
    Column("name", String, nullable=False),
    Column("description", Text, nullable=True),
)

project_table = Table(
    "project",
    mapper_registry.metadata,
    _id_column(primary_key=True),
    _id_column("workspace_id", foreign_key="workspace.id", nullable=False, index=True),
    Column("name", String, nullable=False),
    Column("description", Text, nullable=True),
)

profile_table = Table(
    "profile",
    mapper_registry.metadata,
    _id_column(primary_key=True),
    Column("first_name", String, nullable=True),
    Column("last_name", String, nullable=True),
    Column("email", String, nullable=True),
)

workspace_member_table = Table(
    "workspace_member",
    mapper_registry.metadata,
    _id_column(primary_key=True),
    _id_column("workspace_id", foreign_key="workspace.id", nullable=False),
    _id_column("profile_id", foreign_key="profile.id", nullable=False, index=True),
    Column("role", String(32), nullable=False),
    Column("capabilities", CapabilityListType, nullable=True),
    Column("joined_at", UTCDateTime, nullable=False),
    UniqueConstraint("workspace_id", "profile_id"),
)

project_member_table = Table(
    "project_member",
    mapper_registry.metadata,
    _id_column(primary_key=True),
    _id_column("project_id", foreign_key="project.id", nullable=False),
    _id_column("profile_id", foreign_key="profile.id", nullable=False, index=True),
    Column("role", String(32), nullable=False),
    Column("joined_at", UTCDateTime, nullable=False),
    UniqueConstraint("project_id", "profile_id"),
)

sprint_table = Table(
    "sprint",
    mapper_registry.metadata,
    _id_column(primary_key=True),
    _id_column("project_id", foreign_key="project.id", nullable=False, index=True),
    Column("name", String, nullable=False),
)

# Tasks and their trail -------------------------------------------------------

task_table = Table(
    "task",
    mapper_registry.metadata,
    _id_column(primary_key=True),
    _id_column("project_id", foreign_key="project.id", nullable=False, index=True),
    Column("title", String, nullable=False),
    Column("description", Text, nullable=True),
    Column("status", String(32), nullable=False),
    Column("priority", String(32), nullable=False),
    Column("type", String(32), nullable=False),
    _id_column("assignee_id", foreign_key="profile.id", nullable=True),
    _id_column("sprint_id", foreign_key="sprint.id", nullable=True),
    Column("due_date", UTCDateTime, nullable=True),
    Column("story_points", Integer, nullable=True),
    Column("created_at", UTCDateTime, nullable=False),
    Column("updated_at", UTCDateTime, nullable=True),
)

task_audit_log_table = Table(
    "task_audit_log",
    mapper_registry.metadata,
    _id_column(primary_key=True),
    _id_column("task_id", foreign_key="task.id", nullable=False),
    _id_column("actor_id", nullable=False),
    Column("action", String(64), nullable=False),
    Column("details", Text, nullable=False),
    Column("created_at", UTCDateTime, nullable=False),
    Index("ix_task_audit_log_task_created", "task_id", "created_at"),
)

task_history_table = Table(
    "task_history",
    mapper_registry.metadata,
    _id_column(primary_key=True),
    _id_column("task_id", foreign_key="task.id", nullable=False),
    _id_column("actor_id", nullable=False),
    Column("field", String(32), nullable=False),
    Column("old_value", Text, nullable=True),
    Column("new_value", Text, nullable=True),
    Column("created_at", UTCDateTime, nullable=False),
    Index("ix_task_history_task_created", "task_id", "created_at"),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(Workspace, workspace_table)
    mapper_registry.map_imperatively(Project, project_table)
    mapper_registry.map_imperatively(Profile, profile_table)
    mapper_registry.map_imperatively(WorkspaceMembership, workspace_member_table)
    mapper_registry.map_imperatively(ProjectMembership, project_member_table)
    mapper_registry.map_imperatively(Sprint, sprint_table)
    mapper_registry.map_imperatively(Task, task_table)
    mapper_registry.map_imperatively(TaskAuditLog, task_audit_log_table)
    mapper_registry.map_imperatively(TaskHistoryEntry, task_history_table)

    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
