"""Domain port definitions for adapters."""

from __future__ import annotations

from .candidates import (
    CandidatePredicate,
    CandidateRow,
    CandidateStore,
    MatchMode,
    SearchBoundary,
)
from .membership import NO_MEMBERSHIP, Membership, MembershipProvider
from .persistence import AuditStore, TaskStore
from .unit_of_work import (
    RepositoryCollection,
    TaskTrailRepositories,
    TaskTrailUnitOfWork,
    UnitOfWork,
)

__all__ = [
    "NO_MEMBERSHIP",
    "AuditStore",
    "CandidatePredicate",
    "CandidateRow",
    "CandidateStore",
    "MatchMode",
    "Membership",
    "MembershipProvider",
    "RepositoryCollection",
    "SearchBoundary",
    "TaskStore",
    "TaskTrailRepositories",
    "TaskTrailUnitOfWork",
    "UnitOfWork",
]
