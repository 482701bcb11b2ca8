"""Resolution queries and results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from tasktrail.config.resolution import DEFAULT_RESOLUTION_LIMIT, MAX_RESOLUTION_LIMIT
from tasktrail.domain.errors import InvalidArgument
from tasktrail.domain.model import EntityKind

DEFAULT_LIMIT: Final[int] = DEFAULT_RESOLUTION_LIMIT
MAX_LIMIT: Final[int] = MAX_RESOLUTION_LIMIT


@dataclass(frozen=True, slots=True)
class ResolutionScope:
    """Who is asking, and optionally which workspace or project to search in."""

    actor_id: str
    workspace_id: str | None = None
    project_id: str | None = None


@dataclass(frozen=True, slots=True)
class ResolutionQuery:
    kind: EntityKind
    raw_text: str
    scope: ResolutionScope
    limit: int = DEFAULT_LIMIT

    @classmethod
    def build(
        cls,
        kind: str,
        raw_text: str | None,
        scope: ResolutionScope,
        *,
        limit: int | None = None,
        default_limit: int = DEFAULT_LIMIT,
        max_limit: int = MAX_LIMIT,
    ) -> ResolutionQuery:
        """Validate loosely-typed input into a query; raises ``InvalidArgument``."""

        try:
            entity_kind = EntityKind(str(kind).strip().lower())
        except ValueError as exc:
            raise InvalidArgument(f"unsupported entity kind: {kind!r}") from exc
        text = (raw_text or "").strip()
        if not text:
            raise InvalidArgument("a name to resolve is required")
        if not scope.actor_id:
            raise InvalidArgument("an actor is required to scope the search")
        effective_limit = default_limit if not limit else limit
        return cls(
            kind=entity_kind,
            raw_text=text,
            scope=scope,
            limit=min(max_limit, max(1, effective_limit)),
        )


@dataclass(frozen=True, slots=True)
class Candidate:
    id: str
    label: str
    score: float
    contact: str | None = None


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    query: ResolutionQuery
    best: Candidate | None
    candidates: tuple[Candidate, ...]

    def to_dict(self) -> dict[str, object]:
        return {
            "entity": str(self.query.kind),
            "query": self.query.raw_text,
            "best": _candidate_dict(self.best) if self.best is not None else None,
            "candidates": [_candidate_dict(candidate) for candidate in self.candidates],
        }


def _candidate_dict(candidate: Candidate) -> dict[str, object]:
    payload: dict[str, object] = {
        "id": candidate.id,
        "label": candidate.label,
        "score": candidate.score,
    }
    if candidate.contact is not None:
        payload["contact"] = candidate.contact
    return payload
