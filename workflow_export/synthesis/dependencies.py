"""
Task-level columns: prerequisite tasks and executor-lock constraints.

References resolve through the task index in any id encoding. Unresolved
references stay visible with the raw id (and an explicit marker for
prerequisites) so a reader can see that the workflow points nowhere.
"""

from __future__ import annotations

from typing import Any

from workflow_export.constants import PLACEHOLDER
from workflow_export.indexing.task_index import TaskIndex
from workflow_kernel.domain.identifiers import display_value
from workflow_kernel.domain.types import Task

DEPENDENCIES_HEADER = "Tasks that need to be executed before this task:"


def dependencies_text(task: Task, tasks: TaskIndex, *, placeholder: str = PLACEHOLDER) -> str:
    """Prerequisites of ``task``, one entry per id, in source order."""
    if not task.prerequisite_task_ids:
        return placeholder

    lines = [DEPENDENCIES_HEADER]
    for task_id in task.prerequisite_task_ids:
        pos = tasks.lookup(task_id)
        if pos is None:
            lines.append(f"Task ID: {display_value(task_id)} (not found in workflow)")
        else:
            lines.append(f"{pos.stage_label}\n  → {pos.task_label}")
    return "\n".join(lines)


def _locked_task(task_id: Any, tasks: TaskIndex, *, unresolved_prefix: str) -> str:
    pos = tasks.lookup(task_id)
    if pos is None:
        return f"{unresolved_prefix}{display_value(task_id)}"
    return f"{pos.task_label} ({pos.stage_name or ''})"


def executor_lock_text(task: Task, tasks: TaskIndex, *, placeholder: str = PLACEHOLDER) -> str:
    """Same-executor and different-executor constraints of ``task``."""
    lock = task.executor_lock
    if lock is None:
        return placeholder

    blocks: list[str] = []
    if lock.has_to_be_executor_id is not None:
        pos = tasks.lookup(lock.has_to_be_executor_id)
        if pos is None:
            blocks.append(
                f"Must be executed by same person as: Task ID {display_value(lock.has_to_be_executor_id)}"
            )
        else:
            blocks.append(f"Must be executed by same person as:\n  {pos.task_label} ({pos.stage_name or ''})")

    if lock.cannot_be_executor_ids:
        entries = [
            _locked_task(task_id, tasks, unresolved_prefix="Task ID: ")
            for task_id in lock.cannot_be_executor_ids
        ]
        blocks.append("Cannot be executed by same person as:\n  " + "\n  ".join(entries))

    return "\n\n".join(blocks) if blocks else placeholder
