"""Name heuristics for resolving people."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

from tasktrail.domain.model import EntityKind
from tasktrail.domain.ports import CandidatePredicate

from .dto import Candidate

if TYPE_CHECKING:
    from collections.abc import Iterable

    from tasktrail.domain.ports import CandidateRow, CandidateStore, SearchBoundary

    from .dto import ResolutionQuery

FULL_NAME_BONUS: Final[float] = 0.8
CONTACT_BONUS: Final[float] = 0.6
EXACT_NAME_BONUS: Final[float] = 0.2

log = logging.getLogger(__name__)


def rank_people(
    query: ResolutionQuery,
    boundary: SearchBoundary,
    candidates: CandidateStore,
) -> list[Candidate]:
    """Find people by name or contact and rank them by additive bonuses."""

    rows = candidates.find(
        EntityKind.USER,
        boundary,
        CandidatePredicate.contains(query.raw_text),
        query.limit,
    )
    if not rows:
        tokens = query.raw_text.split()
        if len(tokens) >= 2:
            given_name, *rest = tokens
            log.debug("No direct person match for %r; trying given/family split", query.raw_text)
            rows = candidates.find(
                EntityKind.USER,
                boundary,
                CandidatePredicate.name_parts(given_name, " ".join(rest)),
                query.limit,
            )

    scored = [
        Candidate(
            id=row.id,
            label=row.label,
            score=person_score(row, query.raw_text),
            contact=row.contact,
        )
        for row in _unique(rows)
        if row.label.strip()
    ]
    return sorted(scored, key=lambda candidate: candidate.score, reverse=True)


def person_score(row: CandidateRow, text: str) -> float:
    """Score a person: full-name containment, contact containment, exact name."""

    needle = text.strip().lower()
    full_name = f"{row.given_name or ''} {row.family_name or ''}".strip().lower()
    contact = (row.contact or "").lower()

    total = 0.0
    if needle in full_name:
        total += FULL_NAME_BONUS
    if needle in contact:
        total += CONTACT_BONUS
    if full_name == needle:
        total += EXACT_NAME_BONUS
    return round(total, 6)


def _unique(rows: Iterable[CandidateRow]) -> list[CandidateRow]:
    seen: set[str] = set()
    unique: list[CandidateRow] = []
    for row in rows:
        if row.id in seen:
            continue
        seen.add(row.id)
        unique.append(row)
    return unique
