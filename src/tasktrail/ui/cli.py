# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING, cast

from dotenv import load_dotenv

from tasktrail.app import get_task_activity, resolve_entity, to_response, update_task
from tasktrail.config import configure_logging
from tasktrail.domain.errors import TaskTrailError
from tasktrail.domain.model import EntityKind

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

# (flag, patch key) pairs for values and for explicit clears
_VALUE_FLAGS = (
    ("title", "title"),
    ("description", "description"),
    ("status", "status"),
    ("priority", "priority"),
    ("type", "type"),
    ("assignee", "assignee_id"),
    ("sprint", "sprint_id"),
    ("due_date", "due_date"),
    ("story_points", "story_points"),
)
_CLEAR_FLAGS = (
    ("clear_description", "description"),
    ("unassign", "assignee_id"),
    ("no_sprint", "sprint_id"),
    ("clear_due_date", "due_date"),
    ("clear_story_points", "story_points"),
)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Resolve entities and apply audited task updates")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve = subparsers.add_parser("resolve", help="Resolve a free-text name to entity ids")
    resolve.add_argument("kind", choices=[kind.value for kind in EntityKind])
    resolve.add_argument("text", help="Name to look up")
    resolve.add_argument("--actor", required=True, help="Profile id of the caller")
    resolve.add_argument("--workspace", help="Restrict the search to one workspace")
    resolve.add_argument("--project", help="Restrict tasks to, or add members of, one project")
    resolve.add_argument(
        "--limit",
        type=int,
        help="Maximum number of candidates (clamped to the configured maximum)",
    )

    update = subparsers.add_parser("update-task", help="Apply a partial update to a task")
    update.add_argument("task_id")
    update.add_argument("--actor", required=True, help="Profile id of the caller")
    update.add_argument("--json", dest="json_payload", help="Patch as a JSON object")
    update.add_argument("--title")
    update.add_argument("--status")
    update.add_argument("--priority")
    update.add_argument("--type")
    update.add_argument("--story-points", type=int)
    update.add_argument("--clear-story-points", action="store_true")
    description = update.add_mutually_exclusive_group()
    description.add_argument("--description")
    description.add_argument("--clear-description", action="store_true")
    assignee = update.add_mutually_exclusive_group()
    assignee.add_argument("--assignee", help="Profile id of the new assignee")
    assignee.add_argument("--unassign", action="store_true", help="Remove the assignee")
    sprint = update.add_mutually_exclusive_group()
    sprint.add_argument("--sprint", help="Sprint id")
    sprint.add_argument("--no-sprint", action="store_true", help="Remove the task from its sprint")
    due_date = update.add_mutually_exclusive_group()
    due_date.add_argument("--due-date", help="ISO-8601 date or timestamp")
    due_date.add_argument("--clear-due-date", action="store_true")

    activity = subparsers.add_parser("activity", help="Show the audit trail of a task")
    activity.add_argument("task_id")
    activity.add_argument("--actor", required=True, help="Profile id of the caller")

    return parser.parse_args(list(argv))


def _build_patch_payload(args: argparse.Namespace) -> dict[str, object]:
    payload: dict[str, object] = {}
    for flag, key in _VALUE_FLAGS:
        value = getattr(args, flag)
        if value is not None:
            payload[key] = value
    for flag, key in _CLEAR_FLAGS:
        if getattr(args, flag):
            if key in payload:
                raise ValueError(f"Cannot both set and clear {key}")
            payload[key] = None

    if args.json_payload is None:
        return payload
    if payload:
        raise ValueError("--json cannot be combined with individual field options")
    try:
        loaded = json.loads(args.json_payload)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON payload: {exc}") from exc
    if not isinstance(loaded, dict):
        raise ValueError("JSON payload must be an object")
    return cast("dict[str, object]", loaded)


def _emit(payload: dict[str, object]) -> None:
    print(json.dumps(payload, indent=2, default=str))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        patch_payload = (
            _build_patch_payload(parsed_args) if parsed_args.command == "update-task" else {}
        )
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)

    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        if parsed_args.command == "resolve":
            result = resolve_entity(
                parsed_args.kind,
                parsed_args.text,
                actor_id=parsed_args.actor,
                workspace_id=parsed_args.workspace,
                project_id=parsed_args.project,
                limit=parsed_args.limit,
            )
        elif parsed_args.command == "update-task":
            result = update_task(parsed_args.task_id, patch_payload, actor_id=parsed_args.actor)
        elif parsed_args.command == "activity":
            result = get_task_activity(parsed_args.task_id, actor_id=parsed_args.actor)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except TaskTrailError as exc:
        log.warning("%s failed: %s (%s)", parsed_args.command, exc.message, exc.code)
        _emit(to_response(exc))
        sys.exit(1)
    except Exception as exc:
        log.exception("Fatal error during %s", parsed_args.command)
        _emit(to_response(exc))
        sys.exit(1)

    _emit(to_response(result))


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
