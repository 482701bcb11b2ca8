"""In-memory port implementations for domain and application tests."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

from tasktrail.domain.capabilities import capabilities_for
from tasktrail.domain.model import EntityKind, TaskSnapshot, WorkspaceRole
from tasktrail.domain.ports import NO_MEMBERSHIP, CandidateRow, Membership, TaskTrailRepositories

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence
    from types import TracebackType

    from tasktrail.domain.model import TaskAuditLog, TaskHistoryEntry
    from tasktrail.domain.ports import CandidatePredicate, SearchBoundary


def make_snapshot(**overrides: object) -> TaskSnapshot:
    values: dict[str, object] = {
        "id": "task-1",
        "project_id": "project-1",
        "workspace_id": "workspace-1",
        "title": "Fix login redirect",
    }
    values.update(overrides)
    return TaskSnapshot(**values)  # pyright: ignore[reportArgumentType]


class InMemoryTaskStore:
    def __init__(self, *snapshots: TaskSnapshot) -> None:
        self.snapshots: dict[str, TaskSnapshot] = {snapshot.id: snapshot for snapshot in snapshots}
        self.updates: list[tuple[str, dict[str, object]]] = []
        self.update_error: Exception | None = None

    def add(self, snapshot: TaskSnapshot) -> None:
        self.snapshots[snapshot.id] = snapshot

    def get_snapshot(self, task_id: str) -> TaskSnapshot | None:
        return self.snapshots.get(task_id)

    def update(self, task_id: str, fields: Mapping[str, object]) -> TaskSnapshot:
        self.updates.append((task_id, dict(fields)))
        if self.update_error is not None:
            raise self.update_error
        current = self.snapshots[task_id]
        updated = dataclasses.replace(current, **fields)  # pyright: ignore[reportArgumentType]
        self.snapshots[task_id] = updated
        return updated


class InMemoryAuditStore:
    def __init__(self) -> None:
        self.audit_logs: list[TaskAuditLog] = []
        self.history: list[TaskHistoryEntry] = []

    def add_audit_log(self, entry: TaskAuditLog) -> None:
        self.audit_logs.append(entry)

    def add_history_entries(self, entries: Sequence[TaskHistoryEntry]) -> None:
        self.history.extend(entries)

    def list_audit_logs(self, task_id: str) -> list[TaskAuditLog]:
        return [entry for entry in reversed(self.audit_logs) if entry.task_id == task_id]

    def list_history(self, task_id: str) -> list[TaskHistoryEntry]:
        return [entry for entry in reversed(self.history) if entry.task_id == task_id]


@dataclass(frozen=True, slots=True)
class _StoredCandidate:
    kind: EntityKind
    row: CandidateRow
    workspace_ids: frozenset[str]
    project_ids: frozenset[str] = frozenset()


@dataclass(slots=True)
class InMemoryCandidateStore:
    """Candidate store honouring ``SearchBoundary`` and predicate semantics."""

    entries: list[_StoredCandidate] = field(default_factory=list)
    calls: list[tuple[EntityKind, SearchBoundary, CandidatePredicate, int]] = field(
        default_factory=list
    )

    def add_project(self, project_id: str, name: str, *, workspace_id: str) -> None:
        self.entries.append(
            _StoredCandidate(
                kind=EntityKind.PROJECT,
                row=CandidateRow(id=project_id, label=name),
                workspace_ids=frozenset({workspace_id}),
                project_ids=frozenset({project_id}),
            )
        )

    def add_task(self, task_id: str, title: str, *, workspace_id: str, project_id: str) -> None:
        self.entries.append(
            _StoredCandidate(
                kind=EntityKind.TASK,
                row=CandidateRow(id=task_id, label=title),
                workspace_ids=frozenset({workspace_id}),
                project_ids=frozenset({project_id}),
            )
        )

    def add_person(  # noqa: PLR0913
        self,
        profile_id: str,
        *,
        first_name: str | None,
        last_name: str | None,
        email: str | None = None,
        workspace_ids: Iterable[str] = (),
        project_ids: Iterable[str] = (),
    ) -> None:
        label = f"{first_name or ''} {last_name or ''}".strip() or (email or "")
        self.entries.append(
            _StoredCandidate(
                kind=EntityKind.USER,
                row=CandidateRow(
                    id=profile_id,
                    label=label,
                    given_name=first_name,
                    family_name=last_name,
                    contact=email,
                ),
                workspace_ids=frozenset(workspace_ids),
                project_ids=frozenset(project_ids),
            )
        )

    def find(
        self,
        kind: EntityKind,
        boundary: SearchBoundary,
        predicate: CandidatePredicate,
        limit: int,
    ) -> list[CandidateRow]:
        self.calls.append((kind, boundary, predicate, limit))
        rows = [
            entry.row
            for entry in self.entries
            if entry.kind is kind and _within(entry, boundary) and predicate.matches(entry.row)
        ]
        rows.sort(key=lambda row: (not predicate.is_exact(row), row.label, row.id))
        return rows[:limit]


def _within(entry: _StoredCandidate, boundary: SearchBoundary) -> bool:
    in_workspace = bool(entry.workspace_ids & set(boundary.workspace_ids))
    if entry.kind is EntityKind.USER:
        in_project = bool(boundary.project_ids) and bool(
            entry.project_ids & set(boundary.project_ids or ())
        )
        return in_workspace or in_project
    if boundary.project_ids is None:
        return in_workspace
    return in_workspace and bool(entry.project_ids & set(boundary.project_ids))


class FakeMembershipProvider:
    def __init__(self) -> None:
        self._workspaces: dict[str, list[str]] = {}
        self._capabilities: dict[tuple[str, str], frozenset[str]] = {}
        self._project_workspaces: dict[str, str] = {}
        self._project_members: set[tuple[str, str]] = set()

    def join(
        self,
        actor_id: str,
        workspace_id: str,
        *,
        role: str = WorkspaceRole.MEMBER,
        capabilities: Iterable[str] | None = None,
    ) -> None:
        self._workspaces.setdefault(actor_id, []).append(workspace_id)
        self._capabilities[actor_id, workspace_id] = capabilities_for(role, capabilities)

    def add_project(self, project_id: str, workspace_id: str) -> None:
        self._project_workspaces[project_id] = workspace_id

    def join_project(self, profile_id: str, project_id: str) -> None:
        self._project_members.add((profile_id, project_id))

    def workspace_ids(self, actor_id: str) -> tuple[str, ...]:
        return tuple(self._workspaces.get(actor_id, ()))

    def membership(
        self,
        actor_id: str,
        *,
        workspace_id: str | None = None,
        project_id: str | None = None,
    ) -> Membership:
        if workspace_id is None and project_id is not None:
            workspace_id = self._project_workspaces.get(project_id)
        if workspace_id is None or (actor_id, workspace_id) not in self._capabilities:
            return NO_MEMBERSHIP
        return Membership(is_member=True, capabilities=self._capabilities[actor_id, workspace_id])

    def is_assignable(self, profile_id: str, *, project_id: str, workspace_id: str) -> bool:
        return (profile_id, project_id) in self._project_members or (
            workspace_id in self._workspaces.get(profile_id, [])
        )


class FakeUnitOfWork:
    def __init__(self, repositories: TaskTrailRepositories) -> None:
        self._repositories = repositories
        self.commits = 0
        self.rollbacks = 0
        self.entered = 0

    @property
    def repositories(self) -> TaskTrailRepositories:
        return self._repositories

    def __enter__(self) -> FakeUnitOfWork:
        self.entered += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.rollback()
        return False

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1


def build_repositories(
    *,
    tasks: InMemoryTaskStore | None = None,
    audit: InMemoryAuditStore | None = None,
    candidates: InMemoryCandidateStore | None = None,
    membership: FakeMembershipProvider | None = None,
) -> TaskTrailRepositories:
    return TaskTrailRepositories(
        tasks=tasks or InMemoryTaskStore(),
        audit=audit or InMemoryAuditStore(),
        candidates=candidates or InMemoryCandidateStore(),
        membership=membership or FakeMembershipProvider(),
    )

