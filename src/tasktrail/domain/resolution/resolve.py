"""Resolve free-text names to entity ids within the caller's scope.

Search strategy for projects and tasks:
1) label contains the whole query (case-insensitive)
2) only when 1) found nothing and the query has several words: every word
   appears in the label
3) only when both found nothing: score a bounded scan of the whole scope

People are matched on name parts and contact instead, see ``people``.

Every candidate found is listed, but only a positive score can become ``best``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tasktrail.config.resolution import DEFAULT_SCAN_POOL_SIZE
from tasktrail.domain.errors import NotFound, PermissionDenied
from tasktrail.domain.model import EntityKind
from tasktrail.domain.ports import CandidatePredicate, SearchBoundary
from tasktrail.domain.similarity import score

from .dto import Candidate, ResolutionResult
from .people import rank_people

if TYPE_CHECKING:
    from collections.abc import Iterable

    from tasktrail.domain.ports import CandidateRow, CandidateStore, MembershipProvider

    from .dto import ResolutionQuery, ResolutionScope

log = logging.getLogger(__name__)


def resolve(
    query: ResolutionQuery,
    *,
    membership: MembershipProvider,
    candidates: CandidateStore,
    scan_pool_size: int = DEFAULT_SCAN_POOL_SIZE,
) -> ResolutionResult:
    """Resolve ``query`` to ranked candidates; ``best`` is ``None`` without a positive score."""

    boundary = search_boundary(query.kind, query.scope, membership)
    if boundary.is_empty:
        log.debug("Empty search boundary for %s lookup by %s", query.kind, query.scope.actor_id)
        return ResolutionResult(query=query, best=None, candidates=())

    if query.kind is EntityKind.USER:
        ranked = rank_people(query, boundary, candidates)
    else:
        ranked = _rank_labels(query, boundary, candidates, scan_pool_size)

    ranked = ranked[: query.limit]
    best = ranked[0] if ranked and ranked[0].score > 0 else None
    if ranked and best is None:
        log.debug("No candidate for %r earned a positive score", query.raw_text)
    return ResolutionResult(
        query=query,
        best=best,
        candidates=tuple(ranked),
    )


def search_boundary(
    kind: EntityKind,
    scope: ResolutionScope,
    membership: MembershipProvider,
) -> SearchBoundary:
    """Narrow the search to what the actor may see."""

    workspace_ids = membership.workspace_ids(scope.actor_id)
    if kind is EntityKind.USER:
        return _people_boundary(scope, workspace_ids)

    if scope.workspace_id is not None:
        if scope.workspace_id not in workspace_ids:
            if kind is EntityKind.TASK:
                raise PermissionDenied("actor is not a member of the requested workspace")
            return SearchBoundary(workspace_ids=())
        workspace_ids = (scope.workspace_id,)

    if kind is EntityKind.TASK and scope.project_id is not None:
        return SearchBoundary(workspace_ids=workspace_ids, project_ids=(scope.project_id,))
    return SearchBoundary(workspace_ids=workspace_ids)


def _people_boundary(scope: ResolutionScope, workspace_ids: tuple[str, ...]) -> SearchBoundary:
    if not workspace_ids:
        raise NotFound("actor is not a member of any workspace")
    if scope.workspace_id is not None:
        if scope.workspace_id not in workspace_ids:
            raise PermissionDenied("actor is not a member of the requested workspace")
        home = scope.workspace_id
    else:
        home = workspace_ids[0]
    project_ids = (scope.project_id,) if scope.project_id is not None else None
    return SearchBoundary(workspace_ids=(home,), project_ids=project_ids)


def _rank_labels(
    query: ResolutionQuery,
    boundary: SearchBoundary,
    candidates: CandidateStore,
    scan_pool_size: int,
) -> list[Candidate]:
    rows = candidates.find(
        query.kind,
        boundary,
        CandidatePredicate.contains(query.raw_text),
        query.limit,
    )
    if not rows:
        tokens = query.raw_text.split()
        if len(tokens) > 1:
            log.debug("No substring match for %r; retrying per word", query.raw_text)
            rows = candidates.find(
                query.kind,
                boundary,
                CandidatePredicate.all_tokens(tokens),
                query.limit,
            )
    if rows:
        return _rank(_scored(rows, query.raw_text))

    log.debug("No label match for %r; scoring up to %d rows", query.raw_text, scan_pool_size)
    pool = candidates.find(
        query.kind,
        boundary,
        CandidatePredicate.unfiltered(),
        scan_pool_size,
    )
    return _rank(_scored(pool, query.raw_text))


def _scored(rows: Iterable[CandidateRow], text: str) -> list[Candidate]:
    return [
        Candidate(id=row.id, label=row.label, score=score(row.label, text))
        for row in rows
        if row.label and row.label.strip()
    ]


def _rank(candidates: Iterable[Candidate]) -> list[Candidate]:
    return sorted(candidates, key=lambda candidate: candidate.score, reverse=True)
