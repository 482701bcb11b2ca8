"""Ports for workspace membership and capabilities."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class Membership:
    is_member: bool
    capabilities: frozenset[str] = field(default_factory=frozenset)

    def can(self, capability: str) -> bool:
        return self.is_member and capability in self.capabilities


NO_MEMBERSHIP = Membership(is_member=False)


@runtime_checkable
class MembershipProvider(Protocol):
    """Answers who belongs where and what they may do there."""

    def workspace_ids(self, actor_id: str) -> tuple[str, ...]:
        """Workspaces the actor belongs to, oldest membership first."""
        ...

    def membership(
        self,
        actor_id: str,
        *,
        workspace_id: str | None = None,
        project_id: str | None = None,
    ) -> Membership: ...

    def is_assignable(self, profile_id: str, *, project_id: str, workspace_id: str) -> bool:
        """Whether the profile is a member of the project or of its workspace."""
        ...
