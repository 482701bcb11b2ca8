from __future__ import annotations

import pytest

from tasktrail.domain.similarity import bigrams, normalize, score


def test_normalize_collapses_punctuation_and_case() -> None:
    assert normalize("  SprintIQ -- Web!! ") == "sprintiq web"


def test_bigrams_ignore_whitespace_and_keep_multiplicity() -> None:
    grams = bigrams("aa aa")

    assert grams["aa"] == 3


def test_single_character_counts_as_its_own_gram() -> None:
    assert score("a", "A") == 1.0


@pytest.mark.parametrize(
    ("a", "b"),
    [
        ("SprintIQ Web", "sprnt iq web"),
        ("Billing Platform", "billing"),
        ("x", "Fix login redirect"),
    ],
)
def test_score_is_symmetric_and_bounded(a: str, b: str) -> None:
    forward = score(a, b)

    assert forward == score(b, a)
    assert 0.0 <= forward <= 1.0


def test_identical_labels_score_one() -> None:
    assert score("Fix login redirect", "fix LOGIN redirect") == 1.0


@pytest.mark.parametrize(("a", "b"), [("", "anything"), ("anything", ""), ("!!!", "!!!")])
def test_empty_after_normalization_scores_zero(a: str, b: str) -> None:
    assert score(a, b) == 0.0


def test_misspelled_query_prefers_closer_label() -> None:
    query = "sprnt iq web"

    assert score("SprintIQ Web", query) > 0.5
    assert score("SprintIQ Web", query) > score("SprintIQ Mobile", query)
    assert score("Billing Platform", query) == 0.0
