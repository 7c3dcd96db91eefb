"""
Reference index: the four lookup tables the text synthesizers resolve ids with.

    parameter_labels   parameter id -> label
    property_names     property id (or parameter id, or full filter key) -> display name
    option_names       option id / name / value -> display text
    visibility         target parameter id -> "Visible when ..." sentence

``build_reference_index`` is a pure fold over one definition. Registration
order is fixed (object properties, object-request properties, creation-form
parameters, task parameters with their automation choices) and a later
registration for the same key overwrites an earlier one. That is the
contract: ids shared between a parameter option, an object property, and a
validation sub-option resolve to whichever was registered last.

Visibility sentences are built in a second pass, after every option has been
registered, so a rule resolves option ids declared anywhere in the
definition. Keys are canonical ids (``canonical_id``). ZERO I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from workflow_kernel.domain.identifiers import (
    DEFAULT_PROPERTY_KEY_PREFIX,
    canonical_id,
    display_value,
    embedded_property_id,
)
from workflow_kernel.domain.types import (
    Option,
    Parameter,
    ValidationKind,
    WorkflowDefinition,
)


@dataclass(frozen=True)
class ReferenceIndex:
    """Immutable lookup tables for one definition."""

    parameter_labels: Mapping[str, str]
    property_names: Mapping[str, str]
    option_names: Mapping[str, str]
    visibility: Mapping[str, str]

    @staticmethod
    def _get(table: Mapping[str, str], key: Any) -> str | None:
        k = canonical_id(key)
        return table.get(k) if k is not None else None

    def parameter_label(self, parameter_id: Any) -> str | None:
        return self._get(self.parameter_labels, parameter_id)

    def property_name(self, property_id: Any) -> str | None:
        return self._get(self.property_names, property_id)

    def option_name(self, key: Any) -> str | None:
        return self._get(self.option_names, key)

    def branching_for(self, parameter_id: Any) -> str | None:
        return self._get(self.visibility, parameter_id)

    def resolve_value(self, value: Any) -> str | None:
        """Option display text first, then property name."""
        return self.option_name(value) or self.property_name(value)


# -----------------------------------------------------------------------------
# Builder
# -----------------------------------------------------------------------------


def _first_present(*candidates: Any) -> Any:
    """First candidate that is not None (an empty string still counts)."""
    for c in candidates:
        if c is not None:
            return c
    return None


def _first_truthy(*candidates: Any) -> Any:
    for c in candidates:
        if c:
            return c
    return None


class _Tables:
    """Mutable scratch tables, private to one build."""

    def __init__(self) -> None:
        self.parameter_labels: dict[str, str] = {}
        self.property_names: dict[str, str] = {}
        self.option_names: dict[str, str] = {}
        self.visibility: dict[str, str] = {}

    @staticmethod
    def _put(table: dict[str, str], key: Any, text: Any) -> None:
        k = canonical_id(key)
        if k is None or text is None:
            return
        table[k] = display_value(text)

    def option(self, key: Any, text: Any) -> None:
        self._put(self.option_names, key, text)

    def prop(self, key: Any, text: Any) -> None:
        self._put(self.property_names, key, text)

    def label(self, key: Any, text: Any) -> None:
        self._put(self.parameter_labels, key, text)

    def visible(self, key: Any, sentence: str) -> None:
        self._put(self.visibility, key, sentence)

    def freeze(self) -> ReferenceIndex:
        return ReferenceIndex(
            parameter_labels=MappingProxyType(self.parameter_labels),
            property_names=MappingProxyType(self.property_names),
            option_names=MappingProxyType(self.option_names),
            visibility=MappingProxyType(self.visibility),
        )


def _register_choices(tables: _Tables, choices: Iterable[Option]) -> None:
    """Property / automation choice lists prefer the display name."""
    for choice in choices:
        if choice.id:
            tables.option(choice.id, _first_truthy(choice.display_name, choice.name, choice.label, choice.id))


def _register_parameter(tables: _Tables, param: Parameter, key_prefix: str) -> None:
    tables.label(param.id, param.label)
    tables.prop(param.id, param.label)

    for opt in param.data.options:
        if opt.id:
            tables.option(opt.id, _first_present(opt.name, opt.label, opt.display_name, opt.id))
        if opt.name:
            tables.option(opt.name, opt.name)
        if opt.value:
            tables.option(opt.value, _first_present(opt.name, opt.label, opt.display_name, opt.value))

    for f in param.data.filter_fields or ():
        prop_id = embedded_property_id(f.field, key_prefix)
        if prop_id is not None:
            tables.prop(prop_id, _first_truthy(f.display_name, f.external_id))
        if f.display_name and f.field:
            tables.prop(f.field, f.display_name)

    for group in param.validations:
        for pv in group.items_of(ValidationKind.PROPERTY):
            _register_choices(tables, pv.options)
            if pv.property_id:
                tables.prop(pv.property_id, _first_truthy(pv.property_display_name, pv.property_external_id))


def _register_rules(tables: _Tables, param: Parameter) -> None:
    for rule in param.rules:
        values = " / ".join(
            tables.option_names.get(canonical_id(raw) or "") or display_value(raw)
            for raw in rule.inputs
        )
        sentence = f'Visible when "{param.label or ""}" is "{values}"'
        for target in rule.show_parameters:
            tables.visible(target, sentence)


def build_reference_index(
    definition: WorkflowDefinition,
    *,
    property_key_prefix: str = DEFAULT_PROPERTY_KEY_PREFIX,
) -> ReferenceIndex:
    """Fold one definition into its four lookup tables."""
    tables = _Tables()

    for prop in definition.properties:
        tables.prop(prop.id, _first_truthy(prop.display_name, prop.name, prop.label, prop.id))
        _register_choices(tables, prop.choices)

    for param in definition.parameters:
        _register_parameter(tables, param, property_key_prefix)
    for _stage, task in definition.iter_tasks():
        for param in task.parameters:
            _register_parameter(tables, param, property_key_prefix)
        for automation in task.automations:
            _register_choices(tables, automation.choices)

    for param in definition.iter_parameters():
        _register_rules(tables, param)

    return tables.freeze()
