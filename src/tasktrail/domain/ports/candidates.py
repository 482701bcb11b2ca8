"""Ports for scoped candidate lookup."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from tasktrail.domain.model import EntityKind


class MatchMode(StrEnum):
    CONTAINS = "contains"
    ALL_TOKENS = "all_tokens"
    NAME_PARTS = "name_parts"
    ANY = "any"


@dataclass(frozen=True, slots=True)
class CandidateRow:
    """A raw candidate as returned by a store, before scoring.

    People carry their name parts and contact string so that the user heuristics
    can match them independently of the composed label.
    """

    id: str
    label: str
    given_name: str | None = None
    family_name: str | None = None
    contact: str | None = None

    @property
    def searchable_fields(self) -> tuple[str, ...]:
        person_fields = (self.given_name, self.family_name, self.contact)
        if any(value is not None for value in person_fields):
            return tuple(value for value in person_fields if value is not None)
        return (self.label,)


@dataclass(frozen=True, slots=True)
class CandidatePredicate:
    """Label filter understood by every candidate store.

    ``matches`` is the reference semantics; SQL-backed stores translate the same
    rules into case-insensitive ``LIKE`` clauses. Rows for which ``is_exact``
    holds are ordered ahead of the others before a store applies its limit.
    """

    mode: MatchMode
    terms: tuple[str, ...] = ()

    @classmethod
    def contains(cls, text: str) -> CandidatePredicate:
        return cls(MatchMode.CONTAINS, (text,))

    @classmethod
    def all_tokens(cls, tokens: Sequence[str]) -> CandidatePredicate:
        return cls(MatchMode.ALL_TOKENS, tuple(tokens))

    @classmethod
    def name_parts(cls, given_name: str, family_name: str) -> CandidatePredicate:
        return cls(MatchMode.NAME_PARTS, (given_name, family_name))

    @classmethod
    def unfiltered(cls) -> CandidatePredicate:
        return cls(MatchMode.ANY)

    def matches(self, row: CandidateRow) -> bool:
        fields = [value.lower() for value in row.searchable_fields]
        terms = [term.lower() for term in self.terms]
        if self.mode is MatchMode.ANY:
            return True
        if self.mode is MatchMode.CONTAINS:
            return any(terms[0] in value for value in fields)
        if self.mode is MatchMode.ALL_TOKENS:
            return all(any(term in value for value in fields) for term in terms)
        given, family = terms
        given_name = (row.given_name or "").lower()
        family_name = (row.family_name or "").lower()
        return given in given_name and family in family_name

    def is_exact(self, row: CandidateRow) -> bool:
        """Whether ``row`` equals the whole query, which stores must return first."""

        if self.mode is not MatchMode.CONTAINS:
            return False
        text = self.terms[0].lower()
        return text in {row.label.lower(), (row.contact or "").lower()}


@dataclass(frozen=True, slots=True)
class SearchBoundary:
    """Authorization boundary a candidate search must stay within.

    For projects and tasks ``project_ids`` narrows the search (``None`` means every
    project of the listed workspaces). For people it widens it: members of the
    listed projects are searched alongside the workspace members.
    """

    workspace_ids: tuple[str, ...]
    project_ids: tuple[str, ...] | None = None

    @property
    def is_empty(self) -> bool:
        return not self.workspace_ids


@runtime_checkable
class CandidateStore(Protocol):
    """Scoped candidate search for projects, tasks and people."""

    def find(
        self,
        kind: EntityKind,
        boundary: SearchBoundary,
        predicate: CandidatePredicate,
        limit: int,
    ) -> list[CandidateRow]: ...
