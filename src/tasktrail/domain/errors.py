"""Error taxonomy surfaced by resolution and task updates."""

from __future__ import annotations

from typing import ClassVar


class TaskTrailError(Exception):
    """Base class for expected, caller-facing failures."""

    code: ClassVar[str] = "internal"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidArgument(TaskTrailError):
    """Malformed input, unsupported entity kind, or a patch that changes nothing."""

    code = "invalid_argument"


class NoActualChanges(InvalidArgument):
    """A persisted patch turned out not to change any field value."""

    def __init__(self, message: str = "no actual changes applied") -> None:
        super().__init__(message)


class NotFound(TaskTrailError):
    code = "not_found"


class PermissionDenied(TaskTrailError):
    code = "permission_denied"


class Conflict(TaskTrailError):
    """Reserved for optimistic concurrency checks."""

    code = "conflict"


class Internal(TaskTrailError):
    code = "internal"
