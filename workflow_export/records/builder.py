"""
Record builder: one flat record per (stage, task, parameter).

Task-level text (dependencies, executor lock, automation) is computed once
per task and attached only to the record of the task's last parameter;
every other record of that task carries the placeholder in those columns
(an empty string for automation). Creation-form parameters form a synthetic
task with no task-level text at all.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, TypeVar

from workflow_config.schema import ExportConfig
from workflow_export.indexing.reference_index import ReferenceIndex
from workflow_export.indexing.task_index import TaskIndex
from workflow_export.records import columns as col
from workflow_export.records.columns import FlatRecord
from workflow_export.synthesis.automation import automation_text
from workflow_export.synthesis.dependencies import dependencies_text, executor_lock_text
from workflow_export.synthesis.filters import filters_text
from workflow_export.synthesis.validations import validations_text
from workflow_kernel.domain.types import Parameter, PayloadKind, Stage, Task, WorkflowDefinition

ENABLED = "Enabled"
DISABLED = "Disabled"

_T = TypeVar("_T")


@dataclass(frozen=True)
class TaskFields:
    """Task-level column text, attached to one record per task."""

    dependencies: str
    executor_lock: str
    automation: str

    @classmethod
    def empty(cls, placeholder: str) -> "TaskFields":
        return cls(dependencies=placeholder, executor_lock=placeholder, automation="")


def with_last_flag(items: Iterable[_T]) -> Iterator[tuple[_T, bool]]:
    """Yield ``(item, is_last)`` pairs."""
    items = tuple(items)
    last = len(items) - 1
    for i, item in enumerate(items):
        yield item, i == last


def options_text(param: Parameter, placeholder: str) -> str:
    """Options column: option list, resource marker, or instruction marker."""
    data = param.data
    if data.kind in (PayloadKind.OPTION_LIST, PayloadKind.NESTED_CHOICES, PayloadKind.NESTED_OPTIONS):
        shown = [o.shown_text for o in data.options]
        text = " • ".join(s for s in shown if s)
    elif data.kind is PayloadKind.RESOURCE:
        text = f"[Resource: {data.object_type_display_name or data.collection}]"
    elif data.kind is PayloadKind.TEXT:
        text = "[Instruction Text]"
    else:
        text = ""
    return text or placeholder


def verification_flags(verification_type: str | None) -> tuple[str, str]:
    """``(self, peer)`` Enabled/Disabled for a NONE/SELF/PEER/BOTH tag."""
    tag = (verification_type or "").strip().upper()
    self_check = ENABLED if tag in ("SELF", "BOTH") else DISABLED
    peer_check = ENABLED if tag in ("PEER", "BOTH") else DISABLED
    return self_check, peer_check


def task_fields(
    task: Task,
    definition: WorkflowDefinition,
    index: ReferenceIndex,
    tasks: TaskIndex,
    placeholder: str,
) -> TaskFields:
    return TaskFields(
        dependencies=dependencies_text(task, tasks, placeholder=placeholder),
        executor_lock=executor_lock_text(task, tasks, placeholder=placeholder),
        automation=automation_text(task, definition, index),
    )


def build_record(
    *,
    stage_name: str,
    task_name: str,
    param: Parameter,
    index: ReferenceIndex,
    fields: TaskFields,
    config: ExportConfig,
) -> FlatRecord:
    """Assemble one record. ``fields`` is TaskFields.empty() unless ``param`` is last."""
    placeholder = config.placeholder
    label = param.label or ""
    self_check, peer_check = verification_flags(param.verification_type)
    return {
        col.STAGE_NAME: stage_name,
        col.ACTIVITY_NAME: task_name,
        col.PERFORMER: config.performer_label,
        col.DESCRIPTION: f"Performer provides input for {label}.",
        col.INSTRUCTION_TITLE: label,
        col.OPTIONS: options_text(param, placeholder),
        col.FIELD_TYPE: "Mandatory" if param.mandatory else "Optional",
        col.PARAMETER_TYPE: param.type or placeholder,
        col.DEPENDENCIES: fields.dependencies,
        col.EXECUTOR_LOCK: fields.executor_lock,
        col.BRANCHING: index.branching_for(param.id) or placeholder,
        col.FILTERS: filters_text(param, index, placeholder=placeholder, key_prefix=config.property_key_prefix),
        col.VALIDATIONS: validations_text(param, index, placeholder=placeholder),
        col.AUTOMATION: fields.automation,
        col.FEASIBILITY: "Configurable",
        col.FEASIBILITY_NOTES: placeholder,
        col.STATUS: "Configured",
        col.SELF_VERIFICATION: self_check,
        col.TESTER_COMMENTS: placeholder,
        col.PEER_VERIFICATION: peer_check,
        col.TESTER_COMMENTS_B: placeholder,
    }


def build_task_records(
    stage: Stage,
    task: Task,
    definition: WorkflowDefinition,
    index: ReferenceIndex,
    tasks: TaskIndex,
    config: ExportConfig,
) -> list[FlatRecord]:
    """Records for every parameter of one task, in declared order."""
    if not task.parameters:
        return []
    placeholder = config.placeholder
    last_fields = task_fields(task, definition, index, tasks, placeholder)
    other_fields = TaskFields.empty(placeholder)
    return [
        build_record(
            stage_name=stage.name or "",
            task_name=task.name or "",
            param=param,
            index=index,
            fields=last_fields if is_last else other_fields,
            config=config,
        )
        for param, is_last in with_last_flag(task.parameters)
    ]


def build_creation_form_records(
    definition: WorkflowDefinition,
    index: ReferenceIndex,
    config: ExportConfig,
) -> list[FlatRecord]:
    """Records for the top-level parameters; each row is named after its parameter."""
    fields = TaskFields.empty(config.placeholder)
    return [
        build_record(
            stage_name=config.creation_form_stage,
            task_name=param.label or "",
            param=param,
            index=index,
            fields=fields,
            config=config,
        )
        for param in definition.parameters
    ]
