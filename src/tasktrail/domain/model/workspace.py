"""Workspaces, projects, people and their memberships."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from tasktrail.domain.model.base import Entity
from tasktrail.domain.model.enums import WorkspaceRole


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(eq=False, kw_only=True)
class Workspace(Entity):
    name: str
    description: str | None = None


@dataclass(eq=False, kw_only=True)
class Project(Entity):
    workspace_id: str
    name: str
    description: str | None = None


@dataclass(eq=False, kw_only=True)
class Profile(Entity):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()


@dataclass(eq=False, kw_only=True)
class WorkspaceMembership(Entity):
    """Membership of a profile in a workspace.

    ``capabilities`` of ``None`` means "use the role defaults"; owners always
    receive the full owner capability set.
    """

    workspace_id: str
    profile_id: str
    role: str = WorkspaceRole.MEMBER
    capabilities: list[str] | None = None
    joined_at: datetime = field(default_factory=_utcnow)


@dataclass(eq=False, kw_only=True)
class ProjectMembership(Entity):
    project_id: str
    profile_id: str
    role: str = WorkspaceRole.MEMBER
    joined_at: datetime = field(default_factory=_utcnow)


@dataclass(eq=False, kw_only=True)
class Sprint(Entity):
    project_id: str
    name: str
