"""Filter derivation from an inferred comparison schema.

Each eligible field gets at most one filter, picked in this order:
numeric fields become ranges, array fields become multiselects, and
low-cardinality scalar fields become selects. Everything else (identity
fields, single-valued fields, high-cardinality text) gets no filter.
"""

import logging
from typing import Dict, List, Mapping, Optional

from comparador.config import DEFAULT_STEP, MAX_SELECT_OPTIONS, NON_FILTERABLE_FIELDS, PRICE_STEP
from comparador.models import (
    FieldDescriptor,
    FieldType,
    FilterSpec,
    MultiselectFilter,
    ProductRecord,
    RangeFilter,
    SelectFilter,
    ValueKind,
    distinct_key,
    is_empty,
    is_number,
    option_sort_key,
    value_kind,
)
from comparador.presenter import DEFAULT_PRESENTER, FieldPresenter

__all__ = ["derive_filters", "range_filter", "multiselect_filter", "select_filter"]

logger = logging.getLogger(__name__)


def range_filter(
    field: str,
    descriptor: FieldDescriptor,
    records: List[ProductRecord],
    presenter: FieldPresenter,
) -> Optional[RangeFilter]:
    """Range over every valid number the field holds in the record set."""
    numbers = sorted(r[field] for r in records if field in r and is_number(r[field]))
    if not numbers:
        return None
    return RangeFilter(
        label=presenter.label(field),
        min=numbers[0],
        max=numbers[-1],
        step=PRICE_STEP if descriptor.field_type is FieldType.PRICE else DEFAULT_STEP,
        suffix=presenter.suffix(field),
    )


def multiselect_filter(
    field: str,
    records: List[ProductRecord],
    presenter: FieldPresenter,
) -> Optional[MultiselectFilter]:
    """Multiselect over array elements, recomputed from the records."""
    options = []
    seen = set()
    for record in records:
        value = record.get(field)
        if value_kind(value) is not ValueKind.LIST:
            continue
        for item in value:
            if is_empty(item) or distinct_key(item) in seen:
                continue
            seen.add(distinct_key(item))
            options.append(item)

    if len(options) <= 1:
        return None
    return MultiselectFilter(
        label=presenter.label(field),
        options=sorted(options, key=option_sort_key),
    )


def select_filter(
    field: str,
    descriptor: FieldDescriptor,
    presenter: FieldPresenter,
) -> Optional[SelectFilter]:
    """Select over a scalar field with 2..MAX_SELECT_OPTIONS values."""
    if not 1 < descriptor.unique_count <= MAX_SELECT_OPTIONS:
        return None
    return SelectFilter(
        label=presenter.label(field),
        options=sorted(descriptor.values, key=option_sort_key),
    )


def derive_filters(
    records: List[ProductRecord],
    schema: Mapping[str, FieldDescriptor],
    presenter: Optional[FieldPresenter] = None,
) -> Dict[str, FilterSpec]:
    """Derive filter specifications for every eligible field.

    Args:
        records: Product records the schema was inferred from.
        schema: Output of ``infer_schema``.
        presenter: Label/suffix lookup (default pt-BR tables).

    Returns:
        Dict mapping field name to RangeFilter, SelectFilter or
        MultiselectFilter. Malformed values are skipped, never raised.
    """
    presenter = presenter or DEFAULT_PRESENTER
    filters: Dict[str, FilterSpec] = {}

    for field, descriptor in schema.items():
        if field in NON_FILTERABLE_FIELDS:
            continue
        if descriptor.unique_count <= 1:
            continue

        spec: Optional[FilterSpec]
        if descriptor.is_numeric and descriptor.has_values:
            spec = range_filter(field, descriptor, records, presenter)
        elif descriptor.is_array:
            spec = multiselect_filter(field, records, presenter)
        else:
            spec = select_filter(field, descriptor, presenter)

        if spec is None:
            logger.debug(f"No filter for {field} ({descriptor.unique_count} values)")
            continue
        filters[field] = spec

    return filters
