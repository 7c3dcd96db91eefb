"""Lookup tables built once per definition (reference ids, task positions)."""

from workflow_export.indexing.reference_index import ReferenceIndex, build_reference_index
from workflow_export.indexing.task_index import TaskIndex, TaskPosition, build_task_index

__all__ = [
    "ReferenceIndex",
    "TaskIndex",
    "TaskPosition",
    "build_reference_index",
    "build_task_index",
]
