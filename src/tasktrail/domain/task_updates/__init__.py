from .activity import TaskActivity, task_activity
from .apply import apply_task_patch, validated_updates, with_derived_status
from .audit import HISTORY_FIELDS, diff_snapshots, patch_details, record_task_update
from .canonical import as_utc, canonical_value
from .dto import PATCHABLE_FIELDS, TaskPatch, TaskPatchPayload, UpdatedTask

__all__ = [
    "HISTORY_FIELDS",
    "PATCHABLE_FIELDS",
    "TaskActivity",
    "TaskPatch",
    "TaskPatchPayload",
    "UpdatedTask",
    "apply_task_patch",
    "as_utc",
    "canonical_value",
    "diff_snapshots",
    "patch_details",
    "record_task_update",
    "task_activity",
    "validated_updates",
    "with_derived_status",
]
