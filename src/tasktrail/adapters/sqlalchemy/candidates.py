"""Candidate lookup translated into case-insensitive ``LIKE`` queries."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import and_, false, func, or_, select

from tasktrail.adapters.sqlalchemy.mappings import (
    profile_table,
    project_member_table,
    project_table,
    task_table,
    workspace_member_table,
)
from tasktrail.domain.model import EntityKind
from tasktrail.domain.ports import CandidatePredicate, CandidateRow, MatchMode

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy import ColumnElement, Select
    from sqlalchemy.orm import Session

    from tasktrail.domain.ports import SearchBoundary


class SqlAlchemyCandidateStore:
    def __init__(self, session: Session) -> None:
        self.session = session

    def find(
        self,
        kind: EntityKind,
        boundary: SearchBoundary,
        predicate: CandidatePredicate,
        limit: int,
    ) -> list[CandidateRow]:
        if boundary.is_empty or limit <= 0:
            return []
        if kind is EntityKind.PROJECT:
            return self._find_projects(boundary, predicate, limit)
        if kind is EntityKind.TASK:
            return self._find_tasks(boundary, predicate, limit)
        return self._find_people(boundary, predicate, limit)

    def _find_projects(
        self,
        boundary: SearchBoundary,
        predicate: CandidatePredicate,
        limit: int,
    ) -> list[CandidateRow]:
        stmt = select(project_table.c.id, project_table.c.name).where(
            project_table.c.workspace_id.in_(boundary.workspace_ids)
        )
        if boundary.project_ids is not None:
            stmt = stmt.where(project_table.c.id.in_(boundary.project_ids))
        stmt = _filtered(stmt, predicate, [project_table.c.name])
        stmt = stmt.order_by(
            *_closest_first(predicate, project_table.c.name),
            project_table.c.name,
            project_table.c.id,
        ).limit(limit)
        return [CandidateRow(id=row.id, label=row.name) for row in self.session.execute(stmt)]

    def _find_tasks(
        self,
        boundary: SearchBoundary,
        predicate: CandidatePredicate,
        limit: int,
    ) -> list[CandidateRow]:
        stmt = (
            select(task_table.c.id, task_table.c.title)
            .join(project_table, project_table.c.id == task_table.c.project_id)
            .where(project_table.c.workspace_id.in_(boundary.workspace_ids))
        )
        if boundary.project_ids is not None:
            stmt = stmt.where(task_table.c.project_id.in_(boundary.project_ids))
        stmt = _filtered(stmt, predicate, [task_table.c.title])
        stmt = stmt.order_by(
            *_closest_first(predicate, task_table.c.title),
            task_table.c.title,
            task_table.c.id,
        ).limit(limit)
        return [CandidateRow(id=row.id, label=row.title) for row in self.session.execute(stmt)]

    def _find_people(
        self,
        boundary: SearchBoundary,
        predicate: CandidatePredicate,
        limit: int,
    ) -> list[CandidateRow]:
        workspace_members = select(workspace_member_table.c.profile_id).where(
            workspace_member_table.c.workspace_id.in_(boundary.workspace_ids)
        )
        membership = profile_table.c.id.in_(workspace_members)
        if boundary.project_ids:
            project_members = select(project_member_table.c.profile_id).where(
                project_member_table.c.project_id.in_(boundary.project_ids)
            )
            membership = or_(membership, profile_table.c.id.in_(project_members))

        stmt = select(
            profile_table.c.id,
            profile_table.c.first_name,
            profile_table.c.last_name,
            profile_table.c.email,
        ).where(membership)
        stmt = _filtered(
            stmt,
            predicate,
            [profile_table.c.first_name, profile_table.c.last_name, profile_table.c.email],
        )
        stmt = stmt.order_by(
            *_closest_person_first(predicate),
            profile_table.c.first_name,
            profile_table.c.last_name,
            profile_table.c.id,
        ).limit(limit)
        return [
            CandidateRow(
                id=row.id,
                label=_person_label(row.first_name, row.last_name, row.email),
                given_name=row.first_name,
                family_name=row.last_name,
                contact=row.email,
            )
            for row in self.session.execute(stmt)
        ]


def _filtered[T: tuple[object, ...]](
    stmt: Select[T],
    predicate: CandidatePredicate,
    columns: Sequence[ColumnElement[str | None]],
) -> Select[T]:
    clause = _predicate_clause(predicate, columns)
    return stmt if clause is None else stmt.where(clause)


def _predicate_clause(
    predicate: CandidatePredicate,
    columns: Sequence[ColumnElement[str | None]],
) -> ColumnElement[bool] | None:
    if predicate.mode is MatchMode.ANY:
        return None
    if predicate.mode is MatchMode.CONTAINS:
        return _any_column_contains(columns, predicate.terms[0])
    if predicate.mode is MatchMode.ALL_TOKENS:
        if not predicate.terms:
            return false()
        return and_(*(_any_column_contains(columns, term) for term in predicate.terms))
    given_name, family_name = predicate.terms
    return and_(
        profile_table.c.first_name.icontains(given_name, autoescape=True),
        profile_table.c.last_name.icontains(family_name, autoescape=True),
    )


def _any_column_contains(
    columns: Sequence[ColumnElement[str | None]],
    term: str,
) -> ColumnElement[bool]:
    return or_(*(column.icontains(term, autoescape=True) for column in columns))


def _person_label(first_name: str | None, last_name: str | None, email: str | None) -> str:
    full_name = f"{first_name or ''} {last_name or ''}".strip()
    return full_name or (email or "")


def _closest_first(
    predicate: CandidatePredicate,
    label: ColumnElement[str],
) -> list[ColumnElement[object]]:
    """Order exact label matches ahead of the rest so ``limit`` never cuts them."""

    if predicate.mode is not MatchMode.CONTAINS:
        return []
    return [(func.lower(label) == predicate.terms[0].lower()).desc()]


def _closest_person_first(predicate: CandidatePredicate) -> list[ColumnElement[object]]:
    if predicate.mode is not MatchMode.CONTAINS:
        return []
    text = predicate.terms[0].lower()
    full_name = func.trim(
        func.coalesce(profile_table.c.first_name, "")
        + " "
        + func.coalesce(profile_table.c.last_name, "")
    )
    return [
        (func.lower(full_name) == text).desc(),
        (func.lower(profile_table.c.email) == text).desc(),
    ]
