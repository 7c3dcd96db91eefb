"""
Task position index: task id -> stage/task names and 1-based positions.

Prerequisite and executor-lock references may encode a task id as text or
as a number. Keys are stored in canonical form (``canonical_task_id``) and
every lookup canonicalizes its argument, so ``7``, ``7.0``, ``"7"`` and ``"007"``
all reach the same entry. ZERO I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

from workflow_kernel.domain.identifiers import canonical_task_id, display_value
from workflow_kernel.domain.types import WorkflowDefinition


@dataclass(frozen=True)
class TaskPosition:
    """Resolved location of a task inside its workflow."""

    task_name: str | None
    stage_name: str | None
    stage_order: Any  # Explicit orderTree, else 1-based traversal position
    task_order: Any

    @property
    def qualified_order(self) -> str:
        """``<stage>.<task>``, e.g. ``2.3``."""
        return f"{display_value(self.stage_order)}.{display_value(self.task_order)}"

    @property
    def stage_label(self) -> str:
        return f"Stage {display_value(self.stage_order)}: {self.stage_name or ''}"

    @property
    def task_label(self) -> str:
        return f"Task {self.qualified_order}: {self.task_name or ''}"


@dataclass(frozen=True)
class TaskIndex:
    """Immutable task id -> TaskPosition table for one definition."""

    positions: Mapping[str, TaskPosition]

    def lookup(self, task_id: Any) -> TaskPosition | None:
        """Resolve a task reference in any encoding; None if unknown."""
        key = canonical_task_id(task_id)
        if key is None:
            return None
        return self.positions.get(key)

    def __len__(self) -> int:
        return len(self.positions)


def build_task_index(definition: WorkflowDefinition) -> TaskIndex:
    """
    Index every task of the definition by canonical id.

    Stage and task order default to traversal position when the source has
    no ``orderTree``. Tasks without an id are not indexed. A later task with
    the same id overwrites an earlier one.
    """
    positions: dict[str, TaskPosition] = {}
    for stage_idx, stage in enumerate(definition.stages, start=1):
        stage_order = stage.order_tree if stage.order_tree is not None else stage_idx
        for task_idx, task in enumerate(stage.tasks, start=1):
            key = canonical_task_id(task.id)
            if key is None:
                continue
            positions[key] = TaskPosition(
                task_name=task.name,
                stage_name=stage.name,
                stage_order=stage_order,
                task_order=task.order_tree if task.order_tree is not None else task_idx,
            )
    return TaskIndex(positions=MappingProxyType(positions))
