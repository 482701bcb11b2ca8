"""Fuzzy entity resolution."""

from __future__ import annotations

from .dto import (
    DEFAULT_LIMIT,
    MAX_LIMIT,
    Candidate,
    ResolutionQuery,
    ResolutionResult,
    ResolutionScope,
)
from .people import person_score, rank_people
from .resolve import resolve, search_boundary

__all__ = [
    "DEFAULT_LIMIT",
    "MAX_LIMIT",
    "Candidate",
    "ResolutionQuery",
    "ResolutionResult",
    "ResolutionScope",
    "person_score",
    "rank_people",
    "resolve",
    "search_boundary",
]
