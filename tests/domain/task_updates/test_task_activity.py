from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from tasktrail.domain.errors import NotFound, PermissionDenied
from tasktrail.domain.model import Capability, TaskAuditLog, TaskHistoryEntry, WorkspaceRole
from tasktrail.domain.task_updates import task_activity
from tests.helpers.fakes import (
    FakeMembershipProvider,
    InMemoryAuditStore,
    InMemoryTaskStore,
    make_snapshot,
)

EARLIER = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)
LATER = EARLIER + timedelta(hours=1)


@pytest.fixture
def membership() -> FakeMembershipProvider:
    provider = FakeMembershipProvider()
    provider.join("carol", "workspace-1", role=WorkspaceRole.VIEWER)
    provider.join("dave", "workspace-1", capabilities=[Capability.CREATE])
    return provider


@pytest.fixture
def audit() -> InMemoryAuditStore:
    store = InMemoryAuditStore()
    store.add_audit_log(TaskAuditLog(task_id="task-1", actor_id="alice", created_at=EARLIER))
    store.add_audit_log(TaskAuditLog(task_id="task-1", actor_id="bob", created_at=LATER))
    store.add_audit_log(TaskAuditLog(task_id="task-2", actor_id="bob", created_at=LATER))
    store.add_history_entries(
        [
            TaskHistoryEntry(
                task_id="task-1",
                actor_id="alice",
                field="title",
                old_value="Old",
                new_value="New",
                created_at=EARLIER,
            ),
        ]
    )
    return store


def test_viewer_sees_trail_newest_first(
    membership: FakeMembershipProvider,
    audit: InMemoryAuditStore,
) -> None:
    activity = task_activity(
        "task-1",
        "carol",
        tasks=InMemoryTaskStore(make_snapshot()),
        membership=membership,
        audit=audit,
    )

    assert [entry.actor_id for entry in activity.audit_logs] == ["bob", "alice"]
    assert len(activity.history) == 1
    payload = activity.to_dict()
    assert payload["taskId"] == "task-1"
    assert payload["history"] == [
        {
            "id": activity.history[0].id,
            "actorId": "alice",
            "field": "title",
            "oldValue": "Old",
            "newValue": "New",
            "createdAt": "2025-06-01T12:00:00+00:00",
        }
    ]


def test_member_without_view_is_denied(
    membership: FakeMembershipProvider,
    audit: InMemoryAuditStore,
) -> None:
    with pytest.raises(PermissionDenied):
        task_activity(
            "task-1",
            "dave",
            tasks=InMemoryTaskStore(make_snapshot()),
            membership=membership,
            audit=audit,
        )


def test_missing_task_is_not_found(
    membership: FakeMembershipProvider,
    audit: InMemoryAuditStore,
) -> None:
    with pytest.raises(NotFound):
        task_activity(
            "task-9",
            "carol",
            tasks=InMemoryTaskStore(),
            membership=membership,
            audit=audit,
        )
