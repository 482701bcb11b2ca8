"""SQLAlchemy-backed unit of work for resolution and task patching."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from tasktrail.adapters.sqlalchemy.candidates import SqlAlchemyCandidateStore
from tasktrail.adapters.sqlalchemy.mappings import create_all_tables, start_mappers
from tasktrail.adapters.sqlalchemy.membership import SqlAlchemyMembershipProvider
from tasktrail.adapters.sqlalchemy.migrations import upgrade_head
from tasktrail.adapters.sqlalchemy.repositories import (
    SqlAlchemyAuditStore,
    SqlAlchemyTaskStore,
)
from tasktrail.config import get_database_config
from tasktrail.domain.ports import RepositoryCollection, TaskTrailRepositories

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when a SQLAlchemy unit of work is used before initialisation."""


@dataclass(slots=True)
class _AdapterState:
    _engine: Engine | None = None
    _session_factory: sessionmaker[Session] | None = None

    @property
    def engine(self) -> Engine | None:
        return self._engine

    @engine.setter
    def engine(self, value: Engine | None) -> None:
        self._session_factory = None
        self._engine = value

    @property
    def session_factory(self) -> sessionmaker[Session]:
        if self._engine is None:
            raise StartupError(
                "SQLAlchemy adapter not initialised. Call tasktrail.adapters.sqlalchemy."
                "unit_of_work.startup() before requesting a unit of work."
            )
        if self._session_factory is None:
            self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)
        return self._session_factory


_STATE = _AdapterState()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
    migrate: bool = True,
) -> None:
    """Initialise the SQLAlchemy engine, schema, and session factory.

    With ``migrate=False`` the schema is created straight from the mapped
    metadata instead of running the Alembic revisions.
    """

    if _STATE.engine is not None and not force:
        raise StartupError(
            "SQLAlchemy adapter already initialised. Pass force=True to reconfigure."
        )

    resolved_engine = engine or create_engine(
        database_uri or get_database_config().uri,
        future=True,
    )
    start_mappers()
    if migrate:
        upgrade_head(engine=resolved_engine)
    else:
        create_all_tables(resolved_engine)

    if _STATE.engine is not None and _STATE.engine is not resolved_engine:
        _STATE.engine.dispose()
    _STATE.engine = resolved_engine
    log.info("SQLAlchemy adapter started")


def configured_engine() -> Engine | None:
    """Return the engine currently managed by the adapter (if any)."""

    return _STATE.engine


def is_started() -> bool:
    """Return whether the adapter has been initialised."""

    return _STATE.engine is not None


def shutdown() -> None:
    """Dispose the managed engine and reset state (primarily for tests)."""

    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.engine = None


class BaseSqlAlchemyUnitOfWork[TRepositories: RepositoryCollection](ABC):
    """Generic SQLAlchemy unit of work with pluggable repository collections."""

    def __init__(self) -> None:
        self.session_factory: sessionmaker[Session] = _STATE.session_factory
        self._session: Session | None = None

    @abstractmethod
    def _build_repositories(self, session: Session) -> TRepositories: ...

    def __enter__(self) -> BaseSqlAlchemyUnitOfWork[TRepositories]:
        self.session = self.session_factory()
        self._repositories = self._build_repositories(self.session)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.rollback()
        self.session.close()
        self.session = None
        return False

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()

    @property
    def repositories(self) -> TRepositories:
        if self._session is None:
            raise StartupError("Unit of work session not initialised")
        return self._repositories

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work session not initialised")
        return self._session

    @session.setter
    def session(self, session: Session | None) -> None:
        if self._session is not None and session is not None:
            raise StartupError("Unit of work session already initialised")
        self._session = session


class SqlAlchemyTaskTrailUnitOfWork(BaseSqlAlchemyUnitOfWork[TaskTrailRepositories]):
    """Unit of work spanning task writes, their trail and the lookups they need."""

    def _build_repositories(self, session: Session) -> TaskTrailRepositories:
        return TaskTrailRepositories(
            tasks=SqlAlchemyTaskStore(session),
            audit=SqlAlchemyAuditStore(session),
            candidates=SqlAlchemyCandidateStore(session),
            membership=SqlAlchemyMembershipProvider(session),
        )


if TYPE_CHECKING:
    from tasktrail.domain.ports import TaskTrailUnitOfWork

    _uow_check: TaskTrailUnitOfWork = SqlAlchemyTaskTrailUnitOfWork()
