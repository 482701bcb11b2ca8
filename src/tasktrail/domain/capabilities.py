"""Role-based default capability sets."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from tasktrail.domain.model import Capability, WorkspaceRole

if TYPE_CHECKING:
    from collections.abc import Iterable

DEFAULT_CAPABILITY_SETS: Final[dict[WorkspaceRole, frozenset[str]]] = {
    WorkspaceRole.OWNER: frozenset(
        {
            Capability.VIEW,
            Capability.CREATE,
            Capability.EDIT,
            Capability.DELETE,
            Capability.MANAGE_MEMBERS,
            Capability.MANAGE_SETTINGS,
        }
    ),
    WorkspaceRole.MANAGER: frozenset(
        {Capability.VIEW, Capability.CREATE, Capability.EDIT, Capability.MANAGE_MEMBERS}
    ),
    WorkspaceRole.MEMBER: frozenset({Capability.VIEW, Capability.CREATE, Capability.EDIT}),
    WorkspaceRole.VIEWER: frozenset({Capability.VIEW}),
}


def capabilities_for(role: str, stored: Iterable[str] | None) -> frozenset[str]:
    """Compute the effective capabilities of a membership.

    Owners always hold the full owner set. Everyone else gets exactly the stored
    capabilities, or the defaults of their role when nothing is stored.
    """

    if role == WorkspaceRole.OWNER:
        return DEFAULT_CAPABILITY_SETS[WorkspaceRole.OWNER]
    if stored is not None:
        return frozenset(str(capability) for capability in stored)
    try:
        return DEFAULT_CAPABILITY_SETS[WorkspaceRole(role)]
    except ValueError:
        return frozenset()
