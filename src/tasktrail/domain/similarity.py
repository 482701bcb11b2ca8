"""Bigram (Dice coefficient) similarity between short labels."""

from __future__ import annotations

import re
from collections import Counter

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def normalize(text: str) -> str:
    """Lowercase, collapse runs of non-alphanumerics into single spaces, trim."""

    return _NON_ALNUM.sub(" ", text.lower()).strip()


def bigrams(text: str) -> Counter[str]:
    """Return the bigram multiset of ``text`` with whitespace removed.

    Strings shorter than two characters count as a single bigram of their own so
    that equal one-letter labels still match.
    """

    compact = normalize(text).replace(" ", "")
    if len(compact) < 2:
        return Counter([compact]) if compact else Counter()
    return Counter(compact[index : index + 2] for index in range(len(compact) - 1))


def score(a: str, b: str) -> float:
    """Dice coefficient over bigram multisets, in ``[0, 1]``."""

    grams_a = bigrams(a)
    grams_b = bigrams(b)
    if not grams_a or not grams_b:
        return 0.0
    shared = (grams_a & grams_b).total()
    return 2 * shared / (grams_a.total() + grams_b.total())
