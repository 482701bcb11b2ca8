"""Workspace membership and capability lookups."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import exists, or_, select

from tasktrail.adapters.sqlalchemy.mappings import (
    project_member_table,
    project_table,
    workspace_member_table,
)
from tasktrail.domain.capabilities import capabilities_for
from tasktrail.domain.ports import NO_MEMBERSHIP, Membership

if TYPE_CHECKING:
    from sqlalchemy.orm import Session


class SqlAlchemyMembershipProvider:
    def __init__(self, session: Session) -> None:
        self.session = session

    def workspace_ids(self, actor_id: str) -> tuple[str, ...]:
        stmt = (
            select(workspace_member_table.c.workspace_id)
            .where(workspace_member_table.c.profile_id == actor_id)
            .order_by(workspace_member_table.c.joined_at, workspace_member_table.c.id)
        )
        return tuple(self.session.execute(stmt).scalars())

    def membership(
        self,
        actor_id: str,
        *,
        workspace_id: str | None = None,
        project_id: str | None = None,
    ) -> Membership:
        if workspace_id is None and project_id is not None:
            workspace_id = self.session.execute(
                select(project_table.c.workspace_id).where(project_table.c.id == project_id)
            ).scalar_one_or_none()
        if workspace_id is None:
            return NO_MEMBERSHIP

        stmt = select(workspace_member_table.c.role, workspace_member_table.c.capabilities).where(
            workspace_member_table.c.workspace_id == workspace_id,
            workspace_member_table.c.profile_id == actor_id,
        )
        row = self.session.execute(stmt).one_or_none()
        if row is None:
            return NO_MEMBERSHIP
        return Membership(
            is_member=True,
            capabilities=capabilities_for(row.role, row.capabilities),
        )

    def is_assignable(self, profile_id: str, *, project_id: str, workspace_id: str) -> bool:
        in_project = exists().where(
            project_member_table.c.project_id == project_id,
            project_member_table.c.profile_id == profile_id,
        )
        in_workspace = exists().where(
            workspace_member_table.c.workspace_id == workspace_id,
            workspace_member_table.c.profile_id == profile_id,
        )
        return bool(self.session.execute(select(or_(in_project, in_workspace))).scalar())
