"""Task patch and update result types."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime  # noqa: TC003
from typing import TYPE_CHECKING, Final

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from tasktrail.domain.errors import InvalidArgument

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from tasktrail.domain.model import TaskHistoryEntry, TaskSnapshot

PATCHABLE_FIELDS: Final[tuple[str, ...]] = (
    "title",
    "description",
    "status",
    "priority",
    "type",
    "assignee_id",
    "sprint_id",
    "due_date",
    "story_points",
)


class TaskPatchPayload(BaseModel):
    """Loosely-typed patch as sent by callers; accepts camelCase or snake_case keys."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, alias_generator=to_camel)

    title: str | None = None
    description: str | None = None
    status: str | None = None
    priority: str | None = None
    type: str | None = None
    assignee_id: str | None = None
    sprint_id: str | None = None
    due_date: datetime | None = None
    story_points: int | None = None


@dataclass(frozen=True, slots=True)
class TaskPatch:
    """Partial task update.

    Only keys present in ``values`` are part of the patch; a present key mapped to
    ``None`` clears the field, an absent key leaves it untouched.
    """

    values: Mapping[str, object] = field(default_factory=dict)

    @classmethod
    def of(cls, **values: object) -> TaskPatch:
        """Build a patch from keyword arguments, ignoring unrecognized keys."""

        return cls({key: value for key, value in values.items() if key in PATCHABLE_FIELDS})

    @classmethod
    def from_payload(cls, raw: Mapping[str, object]) -> TaskPatch:
        """Parse a raw mapping; type errors become ``InvalidArgument``."""

        try:
            payload = TaskPatchPayload.model_validate(dict(raw))
        except ValidationError as exc:
            raise InvalidArgument(_describe_validation_error(exc)) from exc
        present = payload.model_fields_set
        return cls({name: getattr(payload, name) for name in PATCHABLE_FIELDS if name in present})

    @property
    def keys(self) -> frozenset[str]:
        return frozenset(self.values)

    def __contains__(self, key: object) -> bool:
        return key in self.values

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def get(self, key: str) -> object:
        return self.values.get(key)


@dataclass(frozen=True, slots=True)
class UpdatedTask:
    id: str
    title: str
    status: str
    priority: str
    assignee_id: str | None
    snapshot: TaskSnapshot = field(repr=False)
    history: tuple[TaskHistoryEntry, ...] = field(default=(), repr=False)

    @classmethod
    def from_snapshot(
        cls,
        snapshot: TaskSnapshot,
        history: tuple[TaskHistoryEntry, ...] = (),
    ) -> UpdatedTask:
        return cls(
            id=snapshot.id,
            title=snapshot.title,
            status=snapshot.status,
            priority=snapshot.priority,
            assignee_id=snapshot.assignee_id,
            snapshot=snapshot,
            history=history,
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "title": self.title,
            "status": str(self.status),
            "priority": str(self.priority),
            "assigneeId": self.assignee_id,
        }


def _describe_validation_error(exc: ValidationError) -> str:
    problems: list[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        problems.append(f"{location}: {error['msg']}")
    return "invalid patch: " + "; ".join(problems)
