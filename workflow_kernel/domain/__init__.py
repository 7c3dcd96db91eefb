"""
Pure domain layer.

Frozen views over a parsed workflow definition and identifier helpers.
NO dependencies on file I/O, configuration, or output formats.
"""

from workflow_kernel.domain.identifiers import (
    DEFAULT_PROPERTY_KEY_PREFIX,
    HEX_ID_PATTERN,
    canonical_id,
    canonical_task_id,
    display_value,
    embedded_property_id,
    is_hex_id,
)
from workflow_kernel.domain.types import (
    AutomationMapping,
    AutomationRule,
    ExecutorLock,
    FilterField,
    Option,
    Parameter,
    ParameterData,
    PayloadKind,
    PropertyDef,
    Stage,
    Task,
    ValidationGroup,
    ValidationItem,
    ValidationKind,
    VisibilityRule,
    WorkflowDefinition,
    parse_definition,
)

__all__ = [
    "DEFAULT_PROPERTY_KEY_PREFIX",
    "HEX_ID_PATTERN",
    "canonical_id",
    "canonical_task_id",
    "display_value",
    "embedded_property_id",
    "is_hex_id",
    "AutomationMapping",
    "AutomationRule",
    "ExecutorLock",
    "FilterField",
    "Option",
    "Parameter",
    "ParameterData",
    "PayloadKind",
    "PropertyDef",
    "Stage",
    "Task",
    "ValidationGroup",
    "ValidationItem",
    "ValidationKind",
    "VisibilityRule",
    "WorkflowDefinition",
    "parse_definition",
]
