"""
Validations column: one text block per validation item of a parameter.

Blocks follow the group order, and inside a group the fixed item-list order
date/time, criteria, property, resource, relation; a custom payload closes
its group. Each sub-line appears only when its source field is present.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from workflow_export.constants import PLACEHOLDER
from workflow_export.formatting.formatters import (
    format_constraint,
    format_date_unit,
    format_exception_type,
    format_selector,
    humanize,
    is_selector,
)
from workflow_export.indexing.reference_index import ReferenceIndex
from workflow_kernel.domain.identifiers import display_value, is_hex_id
from workflow_kernel.domain.types import Parameter, ValidationGroup, ValidationItem


def _value_text(item: ValidationItem, index: ReferenceIndex) -> str:
    if is_selector(item.selector, "CONSTANT") and is_hex_id(item.value):
        return index.resolve_value(item.value) or item.value
    return display_value(item.value)


def _property_text(item: ValidationItem, index: ReferenceIndex) -> str | None:
    """Resolved property name; unresolved 24-hex ids are omitted."""
    name = index.property_name(item.property_id)
    if name:
        return name
    if is_hex_id(item.property_id):
        return None
    return display_value(item.property_id)


def _item_block(
    title: str,
    exception_type: str,
    item: ValidationItem,
    index: ReferenceIndex,
) -> str:
    lines = [title, f"  Exception Type: {exception_type}"]

    if item.constraint:
        lines.append(f"  Condition: {format_constraint(item.constraint)}")
    if item.selector:
        lines.append(f"  Selector: {format_selector(item.selector)}")
    if item.value is not None:
        lines.append(f"  Value: {_value_text(item, index)}")
    if item.date_unit:
        lines.append(f"  Unit: {format_date_unit(item.date_unit)}")
    if item.error_message:
        lines.append(f'  Error Message: "{item.error_message}"')
    if item.referenced_parameter_id:
        ref = index.parameter_label(item.referenced_parameter_id) or display_value(item.referenced_parameter_id)
        lines.append(f"  Referenced Parameter: {ref}")
    if item.property_id:
        prop = _property_text(item, index)
        if prop:
            lines.append(f"  Property: {prop}")
    if item.parameter_label:
        lines.append(f"  Parameter: {item.parameter_label}")
    if item.min_value is not None:
        lines.append(f"  Min Value: {display_value(item.min_value)}")
    if item.max_value is not None:
        lines.append(f"  Max Value: {display_value(item.max_value)}")
    return "\n".join(lines)


def _custom_block(exception_type: str, custom: Any) -> str:
    lines = ["Custom Validation:", f"  Exception Type: {exception_type}"]
    if isinstance(custom, Mapping):
        entries = list(custom.items())
    elif isinstance(custom, list):
        entries = [(str(i), v) for i, v in enumerate(custom)]
    else:
        entries = None

    if entries is None:
        lines.append(f"  Details: {display_value(custom)}")
    else:
        for key, value in entries:
            lines.append(f"  {humanize(key)}: {json.dumps(value, default=str, ensure_ascii=False)}")
    return "\n".join(lines)


def _group_blocks(group: ValidationGroup, index: ReferenceIndex) -> list[str]:
    exception_type = format_exception_type(group.exception_type)
    blocks: list[str] = []
    for kind, items in group.items:
        for n, item in enumerate(items, start=1):
            blocks.append(_item_block(f"{kind.value} Validation {n}:", exception_type, item, index))
    if group.custom is not None:
        blocks.append(_custom_block(exception_type, group.custom))
    return blocks


def validations_text(
    param: Parameter,
    index: ReferenceIndex,
    *,
    placeholder: str = PLACEHOLDER,
) -> str:
    """Validations column text for one parameter; ``placeholder`` when it has none."""
    blocks: list[str] = []
    for group in param.validations:
        blocks.extend(_group_blocks(group, index))
    return "\n\n".join(blocks) if blocks else placeholder
