"""
Filters column: one text block per resource-filter field of a parameter.

Ids are resolved to display names through the reference index. A filter key
that cannot be resolved gets no ``Field:`` line; a 24-hex value that cannot
be resolved is dropped from ``Values:`` rather than shown raw.
"""

from __future__ import annotations

from workflow_export.constants import PLACEHOLDER
from workflow_export.formatting.formatters import (
    format_constraint,
    format_selector,
    humanize,
    is_selector,
)
from workflow_export.indexing.reference_index import ReferenceIndex
from workflow_kernel.domain.identifiers import (
    DEFAULT_PROPERTY_KEY_PREFIX,
    display_value,
    embedded_property_id,
    is_hex_id,
)
from workflow_kernel.domain.types import FilterField, Parameter


def resolve_filter_field_name(
    f: FilterField,
    index: ReferenceIndex,
    key_prefix: str = DEFAULT_PROPERTY_KEY_PREFIX,
) -> str | None:
    """Readable name of the filtered property, or None if it stays an id."""
    key = f.display_name or f.external_id or f.field
    if not key:
        return None
    prop_id = embedded_property_id(key, key_prefix)
    if prop_id is not None:
        return index.property_name(prop_id)
    if is_hex_id(key):
        return index.property_name(key)
    if "." not in key:
        return key
    return None


def _resolved_values(f: FilterField, index: ReferenceIndex) -> list[str]:
    values: list[str] = []
    for raw in f.values:
        if is_hex_id(raw):
            resolved = index.resolve_value(raw)
            if resolved:
                values.append(resolved)
            continue
        values.append(display_value(raw))
    return values


def _filter_lines(
    f: FilterField,
    index: ReferenceIndex,
    key_prefix: str,
) -> list[str]:
    lines: list[str] = []

    field_name = resolve_filter_field_name(f, index, key_prefix)
    if field_name:
        lines.append(f"Field: {field_name}")
    if f.field_type:
        lines.append(f"Type: {humanize(f.field_type)}")
    if f.op:
        lines.append(f"Condition: {format_constraint(f.op)}")
    if f.selector:
        lines.append(f"Selector: {format_selector(f.selector)}")

    # Parameter-selected filters take their values at run time
    if f.values and f.selector and not is_selector(f.selector, "PARAMETER"):
        values = _resolved_values(f, index)
        if values:
            lines.append(f"Values: {', '.join(values)}")

    if f.referenced_parameter_id is not None:
        ref = index.parameter_label(f.referenced_parameter_id) or display_value(f.referenced_parameter_id)
        lines.append(f"Referenced Parameter: {ref}")
    return lines


def filters_text(
    param: Parameter,
    index: ReferenceIndex,
    *,
    placeholder: str = PLACEHOLDER,
    key_prefix: str = DEFAULT_PROPERTY_KEY_PREFIX,
) -> str:
    """Filters column text for one parameter; ``placeholder`` when it has none."""
    fields = param.data.filter_fields
    if not fields:
        return placeholder

    blocks = []
    for n, f in enumerate(fields, start=1):
        lines = _filter_lines(f, index, key_prefix)
        blocks.append("\n  ".join([f"Filter {n}:", *lines]))
    return "\n\n".join(blocks)
