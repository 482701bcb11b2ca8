"""Initial schema: workspaces, projects, people, tasks and their trail.

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-18 09:00:00

"""

from __future__ import annotations

from typing import TYPE_CHECKING

import sqlalchemy as sa
from alembic import op

if TYPE_CHECKING:
    from collections.abc import Sequence

revision: str = "0001_initial_schema"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

ID = sa.String(length=36)
TIMESTAMP = sa.DateTime(timezone=True)


def upgrade() -> None:
    op.create_table(
        "workspace",
        sa.Column("id", ID, nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_workspace")),
    )
    op.create_table(
        "profile",
        sa.Column("id", ID, nullable=False),
        sa.Column("first_name", sa.String(), nullable=True),
        sa.Column("last_name", sa.String(), nullable=True),
        sa.Column("email", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_profile")),
    )
    op.create_table(
        "project",
        sa.Column("id", ID, nullable=False),
        sa.Column("workspace_id", ID, nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(
            ["workspace_id"],
            ["workspace.id"],
            name=op.f("fk_project_project_workspace_id_workspace"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_project")),
    )
    op.create_index(op.f("ix_project_workspace_id"), "project", ["workspace_id"])
    op.create_table(
        "workspace_member",
        sa.Column("id", ID, nullable=False),
        sa.Column("workspace_id", ID, nullable=False),
        sa.Column("profile_id", ID, nullable=False),
        sa.Column("role", sa.String(length=32), nullable=False),
        sa.Column("capabilities", sa.String(), nullable=True),
        sa.Column("joined_at", TIMESTAMP, nullable=False),
        sa.ForeignKeyConstraint(
            ["profile_id"],
            ["profile.id"],
            name=op.f("fk_workspace_member_workspace_member_profile_id_profile"),
        ),
        sa.ForeignKeyConstraint(
            ["workspace_id"],
            ["workspace.id"],
            name=op.f("fk_workspace_member_workspace_member_workspace_id_workspace"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_workspace_member")),
        sa.UniqueConstraint(
            "workspace_id",
            "profile_id",
            name=op.f("uq_workspace_member_workspace_member_workspace_id"),
        ),
    )
    op.create_index(
        op.f("ix_workspace_member_profile_id"),
        "workspace_member",
        ["profile_id"],
    )
    op.create_table(
        "project_member",
        sa.Column("id", ID, nullable=False),
        sa.Column("project_id", ID, nullable=False),
        sa.Column("profile_id", ID, nullable=False),
        sa.Column("role", sa.String(length=32), nullable=False),
        sa.Column("joined_at", TIMESTAMP, nullable=False),
        sa.ForeignKeyConstraint(
            ["profile_id"],
            ["profile.id"],
            name=op.f("fk_project_member_project_member_profile_id_profile"),
        ),
        sa.ForeignKeyConstraint(
            ["project_id"],
            ["project.id"],
            name=op.f("fk_project_member_project_member_project_id_project"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_project_member")),
        sa.UniqueConstraint(
            "project_id",
            "profile_id",
            name=op.f("uq_project_member_project_member_project_id"),
        ),
    )
    op.create_index(op.f("ix_project_member_profile_id"), "project_member", ["profile_id"])
    op.create_table(
        "sprint",
        sa.Column("id", ID, nullable=False),
        sa.Column("project_id", ID, nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.ForeignKeyConstraint(
            ["project_id"],
            ["project.id"],
            name=op.f("fk_sprint_sprint_project_id_project"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_sprint")),
    )
    op.create_index(op.f("ix_sprint_project_id"), "sprint", ["project_id"])
    op.create_table(
        "task",
        sa.Column("id", ID, nullable=False),
        sa.Column("project_id", ID, nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("priority", sa.String(length=32), nullable=False),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("assignee_id", ID, nullable=True),
        sa.Column("sprint_id", ID, nullable=True),
        sa.Column("due_date", TIMESTAMP, nullable=True),
        sa.Column("story_points", sa.Integer(), nullable=True),
        sa.Column("created_at", TIMESTAMP, nullable=False),
        sa.Column("updated_at", TIMESTAMP, nullable=True),
        sa.ForeignKeyConstraint(
            ["assignee_id"],
            ["profile.id"],
            name=op.f("fk_task_task_assignee_id_profile"),
        ),
        sa.ForeignKeyConstraint(
            ["project_id"],
            ["project.id"],
            name=op.f("fk_task_task_project_id_project"),
        ),
        sa.ForeignKeyConstraint(
            ["sprint_id"],
            ["sprint.id"],
            name=op.f("fk_task_task_sprint_id_sprint"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_task")),
    )
    op.create_index(op.f("ix_task_project_id"), "task", ["project_id"])
    for table_name in ("task_audit_log", "task_history"):
        _create_trail_table(table_name)


def _create_trail_table(table_name: str) -> None:
    if table_name == "task_audit_log":
        payload = [
            sa.Column("action", sa.String(length=64), nullable=False),
            sa.Column("details", sa.Text(), nullable=False),
        ]
    else:
        payload = [
            sa.Column("field", sa.String(length=32), nullable=False),
            sa.Column("old_value", sa.Text(), nullable=True),
            sa.Column("new_value", sa.Text(), nullable=True),
        ]
    op.create_table(
        table_name,
        sa.Column("id", ID, nullable=False),
        sa.Column("task_id", ID, nullable=False),
        sa.Column("actor_id", ID, nullable=False),
        *payload,
        sa.Column("created_at", TIMESTAMP, nullable=False),
        sa.ForeignKeyConstraint(
            ["task_id"],
            ["task.id"],
            name=op.f(f"fk_{table_name}_{table_name}_task_id_task"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f(f"pk_{table_name}")),
    )
    op.create_index(f"ix_{table_name}_task_created", table_name, ["task_id", "created_at"])


def downgrade() -> None:
    op.drop_index("ix_task_history_task_created", table_name="task_history")
    op.drop_table("task_history")
    op.drop_index("ix_task_audit_log_task_created", table_name="task_audit_log")
    op.drop_table("task_audit_log")
    op.drop_index(op.f("ix_task_project_id"), table_name="task")
    op.drop_table("task")
    op.drop_index(op.f("ix_sprint_project_id"), table_name="sprint")
    op.drop_table("sprint")
    op.drop_index(op.f("ix_project_member_profile_id"), table_name="project_member")
    op.drop_table("project_member")
    op.drop_index(op.f("ix_workspace_member_profile_id"), table_name="workspace_member")
    op.drop_table("workspace_member")
    op.drop_index(op.f("ix_project_workspace_id"), table_name="project")
    op.drop_table("project")
    op.drop_table("profile")
    op.drop_table("workspace")
