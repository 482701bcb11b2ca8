from __future__ import annotations

import pytest

from tasktrail.domain.errors import InvalidArgument
from tasktrail.domain.model import EntityKind
from tasktrail.domain.resolution import (
    DEFAULT_LIMIT,
    MAX_LIMIT,
    ResolutionQuery,
    ResolutionScope,
)

SCOPE = ResolutionScope(actor_id="alice")


def test_build_normalizes_kind_and_trims_text() -> None:
    query = ResolutionQuery.build(" Project ", "  SprintIQ  ", SCOPE)

    assert query.kind is EntityKind.PROJECT
    assert query.raw_text == "SprintIQ"
    assert query.limit == DEFAULT_LIMIT


@pytest.mark.parametrize(
    ("requested", "expected"),
    [(None, 10), (0, 10), (-3, 1), (5, 5), (99, 20)],
)
def test_limit_is_clamped(requested: int | None, expected: int) -> None:
    query = ResolutionQuery.build("task", "login", SCOPE, limit=requested)

    assert query.limit == expected
    assert query.limit <= MAX_LIMIT


def test_unsupported_kind_is_rejected() -> None:
    with pytest.raises(InvalidArgument, match="unsupported entity kind"):
        ResolutionQuery.build("sprint", "Sprint 12", SCOPE)


@pytest.mark.parametrize("text", [None, "", "   "])
def test_empty_text_is_rejected(text: str | None) -> None:
    with pytest.raises(InvalidArgument):
        ResolutionQuery.build("user", text, SCOPE)


def test_missing_actor_is_rejected() -> None:
    with pytest.raises(InvalidArgument, match="actor"):
        ResolutionQuery.build("user", "bob", ResolutionScope(actor_id=""))
