"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from logging import getLogger
from typing import TYPE_CHECKING

from tasktrail.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyTaskTrailUnitOfWork,
    is_started,
    startup,
)
from tasktrail.config import get_resolution_config
from tasktrail.domain.errors import Internal, NoActualChanges, TaskTrailError
from tasktrail.domain.ports import TaskTrailUnitOfWork
from tasktrail.domain.resolution import ResolutionQuery, ResolutionResult, ResolutionScope, resolve
from tasktrail.domain.task_updates import (
    TaskActivity,
    TaskPatch,
    UpdatedTask,
    apply_task_patch,
    task_activity,
)

if TYPE_CHECKING:
    from tasktrail.config import ResolutionConfig

UnitOfWorkFactory = Callable[[], TaskTrailUnitOfWork]
type Outcome = UpdatedTask | ResolutionResult | TaskActivity | Exception

SUCCESS_MESSAGE = "Task updated successfully"

log = getLogger(__name__)


def _unit_of_work_factory(factory: UnitOfWorkFactory | None) -> UnitOfWorkFactory:
    if factory is not None:
        return factory
    if not is_started():
        startup()
    return SqlAlchemyTaskTrailUnitOfWork


def resolve_entity(  # noqa: PLR0913
    kind: str,
    text: str | None,
    *,
    actor_id: str,
    workspace_id: str | None = None,
    project_id: str | None = None,
    limit: int | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    config: ResolutionConfig | None = None,
) -> ResolutionResult:
    """Resolve a free-text name to ranked entity candidates visible to ``actor_id``."""

    settings = config or get_resolution_config()
    query = ResolutionQuery.build(
        kind,
        text,
        ResolutionScope(actor_id=actor_id, workspace_id=workspace_id, project_id=project_id),
        limit=limit,
        default_limit=settings.default_limit,
        max_limit=settings.max_limit,
    )
    effective_uow = _unit_of_work_factory(unit_of_work_factory)
    with effective_uow() as uow:
        repositories = uow.repositories
        result = resolve(
            query,
            membership=repositories.membership,
            candidates=repositories.candidates,
            scan_pool_size=settings.scan_pool_size,
        )
    log.info(
        "Resolved %s %r for %s: %d candidate(s), best=%s",
        query.kind,
        query.raw_text,
        actor_id,
        len(result.candidates),
        result.best.id if result.best else None,
    )
    return result


def update_task(
    task_id: str,
    payload: TaskPatch | Mapping[str, object],
    *,
    actor_id: str,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> UpdatedTask:
    """Apply a patch inside one transaction.

    A patch that turns out to change nothing is still committed, together with
    its audit log, before ``NoActualChanges`` reaches the caller.
    """

    patch = payload if isinstance(payload, TaskPatch) else TaskPatch.from_payload(payload)
    effective_uow = _unit_of_work_factory(unit_of_work_factory)
    with effective_uow() as uow:
        repositories = uow.repositories
        try:
            updated = apply_task_patch(
                task_id,
                patch,
                actor_id,
                tasks=repositories.tasks,
                membership=repositories.membership,
                audit=repositories.audit,
            )
        except NoActualChanges:
            uow.commit()
            raise
        uow.commit()
    return updated


def get_task_activity(
    task_id: str,
    *,
    actor_id: str,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> TaskActivity:
    effective_uow = _unit_of_work_factory(unit_of_work_factory)
    with effective_uow() as uow:
        repositories = uow.repositories
        return task_activity(
            task_id,
            actor_id,
            tasks=repositories.tasks,
            membership=repositories.membership,
            audit=repositories.audit,
        )


def to_response(outcome: Outcome) -> dict[str, object]:
    """Convert a result or a raised error into the structured caller payload."""

    if isinstance(outcome, UpdatedTask):
        return {"success": True, "message": SUCCESS_MESSAGE, "task": outcome.to_dict()}
    if isinstance(outcome, ResolutionResult | TaskActivity):
        return {"success": True, **outcome.to_dict()}
    error = outcome if isinstance(outcome, TaskTrailError) else Internal("internal error")
    return {"success": False, "error": error.message, "code": error.code}
