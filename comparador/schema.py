"""Comparison schema inference over heterogeneous product records.

No field list is hard-coded: every key found on any record becomes a
descriptor. A field's type is fixed by the first non-empty value seen while
scanning records in order, unless the category declares the type upfront.
Conflicting values found later still contribute to the distinct value set
but never change the type.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from comparador.config import INTERNAL_FIELDS, NON_COMPARABLE_FIELDS, PINNED_COMPARISON_FIELDS
from comparador.models import (
    ComparisonField,
    FieldDescriptor,
    FieldType,
    ProductRecord,
    ValueKind,
    distinct_key,
    is_empty,
    value_kind,
)
from comparador.presenter import DEFAULT_PRESENTER, FieldPresenter

__all__ = ["classify_field", "infer_schema", "comparison_fields"]

logger = logging.getLogger(__name__)

_KEYED_TYPES = {
    "rating": FieldType.RATING,
    "price": FieldType.PRICE,
    "original_price": FieldType.PRICE,
    "image": FieldType.IMAGE,
}

_NUMERIC_TYPES = {FieldType.NUMBER, FieldType.PRICE, FieldType.RATING}


def classify_field(key: str, value: Any) -> FieldType:
    """Classify a field from its key and one observed value."""
    kind = value_kind(value)
    if kind is ValueKind.LIST:
        return FieldType.ARRAY
    if key in _KEYED_TYPES:
        return _KEYED_TYPES[key]
    if kind is ValueKind.NUMBER:
        return FieldType.NUMBER
    return FieldType.TEXT


def _coerce_declared(key: str, declared: Union[FieldType, str]) -> Optional[FieldType]:
    if isinstance(declared, FieldType):
        return declared
    try:
        return FieldType(declared)
    except ValueError:
        logger.warning(f"Ignoring unknown declared type '{declared}' for field {key}")
        return None


def infer_schema(
    records: Iterable[ProductRecord],
    declared_types: Optional[Mapping[str, Union[FieldType, str]]] = None,
) -> Dict[str, FieldDescriptor]:
    """Infer a per-field descriptor from a record set.

    Args:
        records: Product records of one category.
        declared_types: Optional field -> type declarations that take
            precedence over first-seen inference. Unknown type names are
            logged and ignored.

    Returns:
        Dict mapping field name to FieldDescriptor, in first-seen field
        order. Empty input yields an empty dict.
    """
    declared: Dict[str, FieldType] = {}
    for key, declared_type in (declared_types or {}).items():
        field_type = _coerce_declared(key, declared_type)
        if field_type is not None:
            declared[key] = field_type

    schema: Dict[str, FieldDescriptor] = {}
    seen_values: Dict[str, set] = {}
    typed = set()

    for record in records:
        for key, value in record.items():
            if key in INTERNAL_FIELDS:
                continue

            descriptor = schema.get(key)
            if descriptor is None:
                descriptor = FieldDescriptor(field_type=FieldType.TEXT)
                schema[key] = descriptor
                seen_values[key] = set()
                if key in declared:
                    field_type = declared[key]
                    descriptor.field_type = field_type
                    descriptor.is_numeric = field_type in _NUMERIC_TYPES
                    descriptor.is_array = field_type is FieldType.ARRAY
                    typed.add(key)

            if is_empty(value):
                continue

            # First non-empty value fixes the type
            if key not in typed:
                descriptor.field_type = classify_field(key, value)
                descriptor.is_numeric = value_kind(value) is ValueKind.NUMBER
                descriptor.is_array = value_kind(value) is ValueKind.LIST
                typed.add(key)

            descriptor.has_values = True
            items = value if value_kind(value) is ValueKind.LIST else [value]
            for item in items:
                if is_empty(item):
                    continue
                marker = distinct_key(item)
                if marker not in seen_values[key]:
                    seen_values[key].add(marker)
                    descriptor.values.append(item)

    for descriptor in schema.values():
        descriptor.unique_count = len(descriptor.values)

    return schema


def comparison_fields(
    records: List[ProductRecord],
    schema: Optional[Mapping[str, FieldDescriptor]] = None,
    presenter: Optional[FieldPresenter] = None,
) -> List[ComparisonField]:
    """Build comparison table columns from the inferred schema.

    Hidden fields and fields with fewer than two distinct values are left
    out. Pinned identity columns (name, brand, model, price, rating) only need one value.

    Returns:
        Columns sorted by display order, ties in first-seen order.
    """
    if not records:
        return []
    schema = schema if schema is not None else infer_schema(records)
    presenter = presenter or DEFAULT_PRESENTER

    fields: List[ComparisonField] = []
    for key, descriptor in schema.items():
        if key in NON_COMPARABLE_FIELDS or descriptor.unique_count == 0:
            continue
        if descriptor.unique_count <= 1 and key not in PINNED_COMPARISON_FIELDS:
            logger.debug(f"Skipping comparison column {key}: single value")
            continue
        fields.append(
            ComparisonField(
                key=key,
                label=presenter.label(key),
                field_type=descriptor.field_type,
                suffix=presenter.suffix(key),
                display_order=presenter.display_order(key),
            )
        )

    return sorted(fields, key=lambda f: f.display_order)
