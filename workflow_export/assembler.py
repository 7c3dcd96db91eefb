"""
Workflow assembler: definitions -> one ordered list of flat records.

Each definition gets fresh indexes (no lookup leaks between definitions of
a batch). Records are appended in definition order, stage/task/parameter
order within a definition, creation-form records after the stages; a final
stable partition moves every creation-form record to the front.

Synchronous and pure apart from DEBUG logging.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping, TypeVar

from workflow_config.schema import ExportConfig
from workflow_export.indexing.reference_index import build_reference_index
from workflow_export.indexing.task_index import build_task_index
from workflow_export.records import columns as col
from workflow_export.records.builder import build_creation_form_records, build_task_records
from workflow_export.records.columns import FlatRecord
from workflow_kernel.domain.identifiers import canonical_task_id
from workflow_kernel.domain.types import WorkflowDefinition, parse_definition
from workflow_kernel.logging_config import LogContext, get_logger

logger = get_logger("export.assembler")

_T = TypeVar("_T")


def stable_partition(items: Iterable[_T], predicate: Callable[[_T], bool]) -> list[_T]:
    """Items matching ``predicate`` first; relative order kept on both sides."""
    head: list[_T] = []
    tail: list[_T] = []
    for item in items:
        (head if predicate(item) else tail).append(item)
    return head + tail


def definition_records(definition: WorkflowDefinition, config: ExportConfig) -> list[FlatRecord]:
    """Records of one definition, before the creation-form partition."""
    index = build_reference_index(definition, property_key_prefix=config.property_key_prefix)
    tasks = build_task_index(definition)
    logger.debug(
        "indexes_built",
        extra={
            "task_count": len(tasks),
            "option_count": len(index.option_names),
            "property_count": len(index.property_names),
            "visibility_rule_count": len(index.visibility),
        },
    )

    records: list[FlatRecord] = []
    for stage, task in definition.iter_tasks():
        with LogContext.bind(stage_name=stage.name, task_id=canonical_task_id(task.id)):
            produced = build_task_records(stage, task, definition, index, tasks, config)
            logger.debug("task_flattened", extra={"record_count": len(produced)})
        records.extend(produced)
    records.extend(build_creation_form_records(definition, index, config))
    return records


def assemble_records(
    definitions: WorkflowDefinition | Mapping[str, Any] | Iterable[WorkflowDefinition | Mapping[str, Any]],
    config: ExportConfig | None = None,
) -> list[FlatRecord]:
    """
    Flatten one definition or a batch of definitions into ordered records.

    Raw mappings are parsed with ``parse_definition``; a raw value that is not
    a mapping raises InvalidDefinitionError before any record is produced
    for it. Callers that need skip-and-continue go through ExportService.
    """
    config = config or ExportConfig()
    if isinstance(definitions, (WorkflowDefinition, Mapping)):
        definitions = [definitions]

    records: list[FlatRecord] = []
    for position, raw in enumerate(definitions, start=1):
        definition = parse_definition(raw)
        with LogContext.bind(workflow_name=definition.name):
            produced = definition_records(definition, config)
            logger.debug(
                "definition_flattened",
                extra={"definition_position": position, "record_count": len(produced)},
            )
        records.extend(produced)

    stage = config.creation_form_stage
    return stable_partition(records, lambda r: r[col.STAGE_NAME] == stage)
