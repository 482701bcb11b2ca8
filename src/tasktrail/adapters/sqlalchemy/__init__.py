"""SQLAlchemy adapter package for tasktrail."""

from __future__ import annotations

from .candidates import SqlAlchemyCandidateStore
from .mappings import create_all_tables, mapper_registry, start_mappers
from .membership import SqlAlchemyMembershipProvider
from .repositories import SqlAlchemyAuditStore, SqlAlchemyTaskStore
from .unit_of_work import (
    SqlAlchemyTaskTrailUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyAuditStore",
    "SqlAlchemyCandidateStore",
    "SqlAlchemyMembershipProvider",
    "SqlAlchemyTaskStore",
    "SqlAlchemyTaskTrailUnitOfWork",
    "StartupError",
    "configured_engine",
    "create_all_tables",
    "is_started",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
