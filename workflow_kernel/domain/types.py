"""
workflow_kernel.domain.types -- Pure frozen dataclasses over a workflow definition.

A definition arrives as parsed JSON (nested dicts and lists) whose shape is
only loosely guaranteed: any optional field may be missing, null, or of the
wrong type. ``parse_definition`` walks the raw tree once and produces an
immutable typed view. Everything downstream (indexes, synthesizers, record
builder) reads only these views, never the raw dicts.

ZERO I/O. The raw tree is never mutated.

Parsing contract:
    - The root must be a mapping; anything else raises InvalidDefinitionError.
    - Every other shape problem degrades to "absent": a non-list where a list
      is expected becomes ``()``, a non-mapping where an object is expected
      becomes an empty view, JSON null is treated as missing.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, Mapping

from workflow_kernel.exceptions import InvalidDefinitionError


# =============================================================================
# Raw access helpers
# =============================================================================


def _as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _as_items(value: Any) -> tuple[Any, ...]:
    return tuple(value) if isinstance(value, list) else ()


def _as_mappings(value: Any) -> tuple[Mapping[str, Any], ...]:
    return tuple(v for v in _as_items(value) if isinstance(v, Mapping))


def _text(value: Any) -> str | None:
    """String field or None. Numbers are rendered; containers are dropped."""
    if value is None or isinstance(value, (dict, list)):
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


# =============================================================================
# Options and filter descriptors
# =============================================================================


@dataclass(frozen=True)
class Option:
    """A selectable choice of a parameter, property, or automation."""

    id: Any = None  # Raw id as it appears in the source
    name: str | None = None
    label: str | None = None
    display_name: str | None = None
    value: Any = None

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "Option":
        return cls(
            id=raw.get("id"),
            name=_text(raw.get("name")),
            label=_text(raw.get("label")),
            display_name=_text(raw.get("displayName")),
            value=raw.get("value"),
        )

    @property
    def shown_text(self) -> str | None:
        """Text shown in the options column: name, label, display name, value."""
        for candidate in (self.name, self.label, self.display_name):
            if candidate:
                return candidate
        return _text(self.value) or None


def _parse_options(value: Any) -> tuple[Option, ...]:
    return tuple(Option.from_raw(o) for o in _as_mappings(value))


@dataclass(frozen=True)
class FilterField:
    """One field of a resource-filter descriptor (``data.propertyFilters.fields``)."""

    field: str | None = None  # e.g. "searchable.692559bba9de4d179f65af5b"
    display_name: str | None = None
    external_id: str | None = None
    field_type: str | None = None
    op: str | None = None
    selector: str | None = None
    values: tuple[Any, ...] = ()
    referenced_parameter_id: Any = None

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "FilterField":
        return cls(
            field=_text(raw.get("field")),
            display_name=_text(raw.get("displayName")),
            external_id=_text(raw.get("externalId")),
            field_type=_text(raw.get("fieldType")),
            op=_text(raw.get("op")),
            selector=_text(raw.get("selector")),
            values=tuple(v for v in _as_items(raw.get("values")) if v is not None),
            referenced_parameter_id=raw.get("referencedParameterId"),
        )


# =============================================================================
# Parameter data payload (tagged variant)
# =============================================================================


class PayloadKind(str, Enum):
    """Shape of a parameter's ``data`` payload, resolved once at parse time."""

    ABSENT = "absent"  # No data at all
    OPTION_LIST = "option_list"  # data is a list of options
    NESTED_CHOICES = "nested_choices"  # data.choices is a list of options
    NESTED_OPTIONS = "nested_options"  # data.options is a list of options
    RESOURCE = "resource"  # data.collection names an object type
    TEXT = "text"  # data.text carries instruction text
    UNKNOWN = "unknown"  # Some other object


@dataclass(frozen=True)
class ParameterData:
    """
    Typed view of a parameter's data payload.

    ``kind`` decides the options column. The collection and the filter list
    are kept regardless of kind: a resource parameter carries both, and an
    automation may look the collection up later.
    """

    kind: PayloadKind = PayloadKind.ABSENT
    options: tuple[Option, ...] = ()
    collection: str | None = None
    object_type_display_name: str | None = None
    filter_fields: tuple[FilterField, ...] | None = None  # None = no descriptor
    text: str | None = None

    @classmethod
    def from_raw(cls, raw: Any) -> "ParameterData":
        if raw is None:
            return cls()
        if isinstance(raw, list):
            return cls(kind=PayloadKind.OPTION_LIST, options=_parse_options(raw))
        if not isinstance(raw, Mapping):
            return cls(kind=PayloadKind.UNKNOWN)

        filters = raw.get("propertyFilters")
        filter_fields = (
            tuple(FilterField.from_raw(f) for f in _as_mappings(filters.get("fields")))
            if isinstance(filters, Mapping)
            else None
        )
        collection = _text(raw.get("collection")) or None
        common = {
            "collection": collection,
            "object_type_display_name": _text(raw.get("objectTypeDisplayName")) or None,
            "filter_fields": filter_fields,
            "text": _text(raw.get("text")) or None,
        }

        if isinstance(raw.get("choices"), list):
            return cls(kind=PayloadKind.NESTED_CHOICES, options=_parse_options(raw["choices"]), **common)
        if isinstance(raw.get("options"), list):
            return cls(kind=PayloadKind.NESTED_OPTIONS, options=_parse_options(raw["options"]), **common)
        if collection:
            return cls(kind=PayloadKind.RESOURCE, **common)
        if common["text"]:
            return cls(kind=PayloadKind.TEXT, **common)
        return cls(kind=PayloadKind.UNKNOWN, **common)


# =============================================================================
# Validations and visibility rules
# =============================================================================


@dataclass(frozen=True)
class ValidationItem:
    """A single typed validation entry inside a validation group."""

    constraint: str | None = None
    selector: str | None = None
    value: Any = None
    date_unit: str | None = None
    error_message: str | None = None
    referenced_parameter_id: Any = None
    property_id: Any = None
    property_display_name: str | None = None
    property_external_id: str | None = None
    parameter_label: str | None = None
    min_value: Any = None
    max_value: Any = None
    options: tuple[Option, ...] = ()

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "ValidationItem":
        return cls(
            constraint=_text(raw.get("constraint")),
            selector=_text(raw.get("selector")),
            value=raw.get("value"),
            date_unit=_text(raw.get("dateUnit")),
            error_message=_text(raw.get("errorMessage")),
            referenced_parameter_id=raw.get("referencedParameterId"),
            property_id=raw.get("propertyId"),
            property_display_name=_text(raw.get("propertyDisplayName")),
            property_external_id=_text(raw.get("propertyExternalId")),
            parameter_label=_text(raw.get("parameterLabel")),
            min_value=raw.get("minValue"),
            max_value=raw.get("maxValue"),
            options=_parse_options(raw.get("options")),
        )


class ValidationKind(str, Enum):
    """Typed item lists of a validation group, in output order."""

    DATE_TIME = "Date/Time"
    CRITERIA = "Criteria"
    PROPERTY = "Property"
    RESOURCE = "Resource"
    RELATION = "Relation"


_VALIDATION_KEYS: tuple[tuple[ValidationKind, str], ...] = (
    (ValidationKind.DATE_TIME, "dateTimeParameterValidations"),
    (ValidationKind.CRITERIA, "criteriaValidations"),
    (ValidationKind.PROPERTY, "propertyValidations"),
    (ValidationKind.RESOURCE, "resourceParameterValidations"),
    (ValidationKind.RELATION, "relationPropertyValidations"),
)


@dataclass(frozen=True)
class ValidationGroup:
    """One entry of ``parameter.validations``."""

    exception_type: str | None = None
    items: tuple[tuple[ValidationKind, tuple[ValidationItem, ...]], ...] = ()
    custom: Any = None  # Free-form payload; mapping, list or scalar

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "ValidationGroup":
        items = tuple(
            (kind, tuple(ValidationItem.from_raw(v) for v in _as_mappings(raw.get(key))))
            for kind, key in _VALIDATION_KEYS
        )
        custom = raw.get("customValidations")
        return cls(
            exception_type=_text(raw.get("exceptionApprovalType")),
            items=items,
            custom=None if custom in ("", False) else custom,
        )

    def items_of(self, kind: ValidationKind) -> tuple[ValidationItem, ...]:
        for k, entries in self.items:
            if k is kind:
                return entries
        return ()


@dataclass(frozen=True)
class VisibilityRule:
    """Show ``show_parameters`` when the owner's value is one of ``inputs``."""

    inputs: tuple[Any, ...] = ()
    show_parameters: tuple[Any, ...] = ()

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "VisibilityRule":
        return cls(
            inputs=tuple(v for v in _as_items(raw.get("input")) if v is not None),
            show_parameters=tuple(
                v for v in _as_items(_as_mapping(raw.get("show")).get("parameters")) if v is not None
            ),
        )


# =============================================================================
# Parameters, tasks, stages
# =============================================================================


@dataclass(frozen=True)
class Parameter:
    """A single input of a task (or of the creation form)."""

    id: Any = None
    label: str | None = None
    type: str | None = None
    mandatory: bool = False
    verification_type: str | None = None  # NONE / SELF / PEER / BOTH
    data: ParameterData = ParameterData()
    validations: tuple[ValidationGroup, ...] = ()
    rules: tuple[VisibilityRule, ...] = ()

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "Parameter":
        return cls(
            id=raw.get("id"),
            label=_text(raw.get("label")),
            type=_text(raw.get("type")),
            mandatory=bool(raw.get("mandatory")),
            verification_type=_text(raw.get("verificationType")),
            data=ParameterData.from_raw(raw.get("data")),
            validations=tuple(ValidationGroup.from_raw(v) for v in _as_mappings(raw.get("validations"))),
            rules=tuple(VisibilityRule.from_raw(r) for r in _as_mappings(raw.get("rules"))),
        )


@dataclass(frozen=True)
class ExecutorLock:
    """Same-executor / different-executor constraints between tasks."""

    has_to_be_executor_id: Any = None
    cannot_be_executor_ids: tuple[Any, ...] = ()

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "ExecutorLock":
        has_to_be = raw.get("hasToBeExecutorId")
        return cls(
            has_to_be_executor_id=None if has_to_be == "" else has_to_be,
            cannot_be_executor_ids=tuple(
                v for v in _as_items(raw.get("cannotBeExecutorIds")) if v is not None and v != ""
            ),
        )


@dataclass(frozen=True)
class AutomationMapping:
    """One configuration entry of an automation: which parameter it fills."""

    parameter_id: Any = None
    parameter_label: str | None = None
    parameter_display_name: str | None = None

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "AutomationMapping":
        return cls(
            parameter_id=raw.get("parameterId"),
            parameter_label=_text(raw.get("parameterLabel")),
            parameter_display_name=_text(raw.get("parameterDisplayName")),
        )


@dataclass(frozen=True)
class AutomationRule:
    """An automation attached to a task (``automationRequests`` entry)."""

    trigger_type: str | None = None
    action_type: str | None = None
    display_name: str | None = None
    object_type_display_name: str | None = None
    referenced_parameter_id: Any = None
    configuration: tuple[AutomationMapping, ...] = ()
    choices: tuple[Option, ...] = ()

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "AutomationRule":
        details = _as_mapping(raw.get("actionDetails"))
        return cls(
            trigger_type=_text(raw.get("triggerType")),
            action_type=_text(raw.get("actionType")),
            display_name=_text(raw.get("displayName")),
            object_type_display_name=_text(details.get("objectTypeDisplayName")) or None,
            referenced_parameter_id=details.get("referencedParameterId"),
            configuration=tuple(AutomationMapping.from_raw(c) for c in _as_mappings(details.get("configuration"))),
            choices=_parse_options(details.get("choices")),
        )


@dataclass(frozen=True)
class Task:
    """A unit of work inside a stage."""

    id: Any = None
    name: str | None = None
    order_tree: Any = None  # Explicit ordering hint; None = use position
    parameters: tuple[Parameter, ...] = ()
    prerequisite_task_ids: tuple[Any, ...] = ()
    executor_lock: ExecutorLock | None = None
    automations: tuple[AutomationRule, ...] = ()

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "Task":
        lock = raw.get("taskExecutorLock")
        return cls(
            id=raw.get("id"),
            name=_text(raw.get("name")),
            order_tree=raw.get("orderTree"),
            parameters=tuple(Parameter.from_raw(p) for p in _as_mappings(raw.get("parameterRequests"))),
            prerequisite_task_ids=tuple(v for v in _as_items(raw.get("prerequisiteTaskIds")) if v is not None),
            executor_lock=ExecutorLock.from_raw(lock) if isinstance(lock, Mapping) else None,
            automations=tuple(AutomationRule.from_raw(a) for a in _as_mappings(raw.get("automationRequests"))),
        )


@dataclass(frozen=True)
class Stage:
    """An ordered group of tasks."""

    name: str | None = None
    order_tree: Any = None
    tasks: tuple[Task, ...] = ()

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "Stage":
        return cls(
            name=_text(raw.get("name")),
            order_tree=raw.get("orderTree"),
            tasks=tuple(Task.from_raw(t) for t in _as_mappings(raw.get("taskRequests"))),
        )


# =============================================================================
# Objects and properties
# =============================================================================


@dataclass(frozen=True)
class PropertyDef:
    """A property declared on an object type."""

    id: Any = None
    display_name: str | None = None
    name: str | None = None
    label: str | None = None
    choices: tuple[Option, ...] = ()

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "PropertyDef":
        return cls(
            id=raw.get("id"),
            display_name=_text(raw.get("displayName")),
            name=_text(raw.get("name")),
            label=_text(raw.get("label")),
            choices=_parse_options(raw.get("choices")),
        )


# =============================================================================
# Root
# =============================================================================


@dataclass(frozen=True)
class WorkflowDefinition:
    """
    Typed view of one workflow definition.

    ``properties`` holds, in source order, the properties of ``objects``
    followed by the property requests of ``objectRequests``.
    """

    name: str | None = None
    stages: tuple[Stage, ...] = ()
    parameters: tuple[Parameter, ...] = ()  # Creation form
    properties: tuple[PropertyDef, ...] = ()

    def iter_tasks(self) -> Iterator[tuple[Stage, Task]]:
        for stage in self.stages:
            for task in stage.tasks:
                yield stage, task

    def iter_parameters(self) -> Iterator[Parameter]:
        """Top-level parameters first, then every task parameter in order."""
        yield from self.parameters
        for _stage, task in self.iter_tasks():
            yield from task.parameters


def parse_definition(raw: Any) -> WorkflowDefinition:
    """
    Build the typed view of one raw definition.

    Raises:
        InvalidDefinitionError: if ``raw`` is not a JSON object.
    """
    if isinstance(raw, WorkflowDefinition):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidDefinitionError(type(raw).__name__)

    properties: list[PropertyDef] = []
    for obj in _as_mappings(raw.get("objects")):
        properties.extend(PropertyDef.from_raw(p) for p in _as_mappings(obj.get("properties")))
    for obj in _as_mappings(raw.get("objectRequests")):
        properties.extend(PropertyDef.from_raw(p) for p in _as_mappings(obj.get("propertyRequests")))

    return WorkflowDefinition(
        name=_text(raw.get("name")),
        stages=tuple(Stage.from_raw(s) for s in _as_mappings(raw.get("stageRequests"))),
        parameters=tuple(Parameter.from_raw(p) for p in _as_mappings(raw.get("parameterRequests"))),
        properties=tuple(properties),
    )
