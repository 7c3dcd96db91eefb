"""
Automation column: one block per automation rule of a task.

Unlike the other columns, a task without automations yields an empty
string, not the placeholder.
"""

from __future__ import annotations

from typing import Any

from workflow_export.formatting.formatters import humanize_code
from workflow_export.indexing.reference_index import ReferenceIndex
from workflow_kernel.domain.identifiers import canonical_id
from workflow_kernel.domain.types import AutomationRule, Parameter, Task, WorkflowDefinition

UNNAMED_AUTOMATION = "Unnamed Automation"
UNKNOWN_OBJECT_TYPE = "Unknown Object Type"


def find_parameter(definition: WorkflowDefinition, parameter_id: Any) -> Parameter | None:
    """First parameter with this id: creation form first, then task parameters."""
    key = canonical_id(parameter_id)
    if key is None:
        return None
    for param in definition.iter_parameters():
        if canonical_id(param.id) == key:
            return param
    return None


def automation_object_type(rule: AutomationRule, definition: WorkflowDefinition) -> str:
    """Explicit object type, else the collection of the referenced parameter."""
    if rule.object_type_display_name:
        return rule.object_type_display_name
    if rule.referenced_parameter_id is not None:
        ref = find_parameter(definition, rule.referenced_parameter_id)
        if ref is not None and ref.data.collection:
            return ref.data.collection
    return UNKNOWN_OBJECT_TYPE


def _mapped_parameters(rule: AutomationRule, index: ReferenceIndex) -> list[str]:
    labels = []
    for cfg in rule.configuration:
        label = cfg.parameter_label or cfg.parameter_display_name or index.property_name(cfg.parameter_id)
        if label:
            labels.append(f"• {label}")
    return labels


def automation_block(rule: AutomationRule, definition: WorkflowDefinition, index: ReferenceIndex) -> str:
    lines = [
        f"Automation: {rule.display_name or UNNAMED_AUTOMATION}",
        f"Trigger: {humanize_code(rule.trigger_type)}",
        f"Action: {humanize_code(rule.action_type)}",
        f"Object Type: {automation_object_type(rule, definition)}",
    ]
    mapped = _mapped_parameters(rule, index)
    if mapped:
        lines.append("Parameters to be automated:\n" + "\n".join(mapped))
    return "\n".join(lines)


def automation_text(task: Task, definition: WorkflowDefinition, index: ReferenceIndex) -> str:
    """Automation column text for one task; empty when it has no rules."""
    return "\n\n".join(automation_block(rule, definition, index) for rule in task.automations)
