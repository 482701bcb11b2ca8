from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine, inspect

from tasktrail.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyTaskTrailUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)
from tasktrail.domain.model import TaskAuditLog
from tests.helpers.seed import seed_data

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Engine
    from sqlalchemy.orm import Session


@pytest.fixture(autouse=True)
def reset_unit_of_work_state() -> Iterator[None]:
    shutdown()
    yield
    shutdown()


def test_unit_of_work_requires_startup() -> None:
    with pytest.raises(StartupError):
        SqlAlchemyTaskTrailUnitOfWork()


def test_startup_requires_force_for_reconfiguration() -> None:
    engine_a = create_engine("sqlite+pysqlite:///:memory:", future=True)
    engine_b = create_engine("sqlite+pysqlite:///:memory:", future=True)

    startup(engine=engine_a, force=True, migrate=False)

    with pytest.raises(StartupError):
        startup(engine=engine_b)

    startup(engine=engine_b, force=True, migrate=False)
    assert configured_engine() is engine_b
    assert is_started()


def test_startup_runs_migrations_by_default() -> None:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)

    startup(engine=engine)

    tables = set(inspect(engine).get_table_names())
    assert {"task", "task_audit_log", "task_history", "workspace_member"} <= tables


def test_repositories_unavailable_outside_context(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True, migrate=False)
    uow = SqlAlchemyTaskTrailUnitOfWork()

    with pytest.raises(StartupError):
        _ = uow.repositories


def test_commit_persists_and_exception_rolls_back(
    sqlite_engine: Engine,
    sqlite_session: Session,
) -> None:
    seeded = seed_data(sqlite_session)
    startup(engine=sqlite_engine, force=True, migrate=False)
    task_id = seeded.login_task.id

    with SqlAlchemyTaskTrailUnitOfWork() as uow:
        uow.repositories.audit.add_audit_log(TaskAuditLog(task_id=task_id, actor_id="alice"))
        uow.commit()

    with pytest.raises(RuntimeError), SqlAlchemyTaskTrailUnitOfWork() as uow:
        uow.repositories.audit.add_audit_log(TaskAuditLog(task_id=task_id, actor_id="bob"))
        raise RuntimeError("boom")

    with SqlAlchemyTaskTrailUnitOfWork() as uow:
        logs = uow.repositories.audit.list_audit_logs(task_id)

    assert [entry.actor_id for entry in logs] == ["alice"]
