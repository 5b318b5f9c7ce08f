"""Query engine: search, then field filters, then a stable sort.

Every stage returns a new list and leaves the records untouched. Malformed
input degrades to over-inclusion: unparseable bounds were already dropped
when the QueryState was built, and values a filter cannot interpret pass
through it.
"""

import logging
from functools import cmp_to_key
from typing import Any, List, Sequence, Tuple

from comparador.config import PRICE_LIKE_FIELDS, SEARCH_ARRAY_FIELDS, SEARCH_FIELDS
from comparador.models import ProductRecord, QueryState, ValueKind, is_empty, is_number, value_kind

__all__ = [
    "query_products",
    "search_records",
    "searchable_text",
    "apply_filters",
    "sort_key",
    "sort_records",
]

logger = logging.getLogger(__name__)


# =============================================================================
# Search
# =============================================================================


def searchable_text(record: ProductRecord) -> str:
    """Lowercased concatenation of the searchable fields of a record."""
    parts: List[str] = []
    for key in SEARCH_FIELDS:
        value = record.get(key)
        if not is_empty(value):
            parts.append(str(value))
    for key in SEARCH_ARRAY_FIELDS:
        value = record.get(key)
        if value_kind(value) is ValueKind.LIST:
            parts.extend(str(item) for item in value if not is_empty(item))
    return " ".join(parts).lower()


def search_records(records: Sequence[ProductRecord], term: str) -> List[ProductRecord]:
    """Keep records whose searchable text contains ``term`` (any case)."""
    if not term:
        return list(records)
    needle = term.lower()
    return [r for r in records if needle in searchable_text(r)]


# =============================================================================
# Filters
# =============================================================================


def _price_or_zero(record: ProductRecord) -> Any:
    price = record.get("price")
    return price if is_number(price) else 0


def _filter_value(record: ProductRecord, key: str) -> Any:
    value = record.get(key)
    # Unpriced records count as 0 rather than passing through a price range
    if value is None and key in PRICE_LIKE_FIELDS:
        return 0
    return value


def apply_filters(records: Sequence[ProductRecord], state: QueryState) -> List[ProductRecord]:
    """Apply the legacy price/brand parameters and every typed selection."""
    result = list(records)

    if state.min_price is not None:
        result = [r for r in result if _price_or_zero(r) >= state.min_price]
    if state.max_price is not None:
        result = [r for r in result if _price_or_zero(r) <= state.max_price]

    if state.brand:
        brand = state.brand.lower()
        result = [
            r for r in result
            if isinstance(r.get("brand"), str) and r["brand"].lower() == brand
        ]

    for key, selection in state.active_filters().items():
        before = len(result)
        result = [r for r in result if selection.matches(_filter_value(r, key))]
        logger.debug(f"Filter {key}: {before} -> {len(result)}")

    return result


# =============================================================================
# Sort
# =============================================================================

# Rank of each value group; lower ranks sort first in ascending order
_EMPTY, _NUMBER, _TEXT, _MISSING_PRICE = range(4)


def sort_key(value: Any, field: str) -> Tuple[int, Any]:
    """Comparable key for one sort-field value.

    Missing prices rank after everything; any other missing or empty value
    behaves as the empty string and ranks first. Numbers rank before text,
    text compares case-insensitively.
    """
    if is_empty(value):
        return (_MISSING_PRICE, 0) if field in PRICE_LIKE_FIELDS and value is None else (_EMPTY, "")
    kind = value_kind(value)
    if kind is ValueKind.BOOL:
        return (_NUMBER, int(value))
    if kind is ValueKind.NUMBER:
        if is_number(value):
            return (_NUMBER, value)
        return (_EMPTY, "")
    if kind is ValueKind.LIST:
        return (_TEXT, " ".join(str(v) for v in value).lower())
    return (_TEXT, str(value).lower())


def _compare(a: Tuple[int, Any], b: Tuple[int, Any]) -> int:
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def sort_records(
    records: Sequence[ProductRecord],
    field: str,
    descending: bool = False,
) -> List[ProductRecord]:
    """Stable sort by ``field``.

    Descending order negates the comparison result; ties always keep their
    input order because every item is tagged with its input index.
    """
    direction = -1 if descending else 1
    tagged = [(index, sort_key(record.get(field), field), record) for index, record in enumerate(records)]

    def compare(left, right) -> int:
        result = direction * _compare(left[1], right[1])
        if result == 0:
            return left[0] - right[0]
        return result

    return [item[2] for item in sorted(tagged, key=cmp_to_key(compare))]


# =============================================================================
# Pipeline
# =============================================================================


def query_products(records: Sequence[ProductRecord], state: QueryState) -> List[ProductRecord]:
    """Run search -> filters -> sort over a record set.

    Args:
        records: Records of one category (or several, for global search).
        state: Query parameters for this request.

    Returns:
        New list with the matching records in display order.
    """
    result = search_records(records, state.search)
    result = apply_filters(result, state)
    result = sort_records(result, state.sort_by, descending=state.descending)
    logger.debug(f"Query matched {len(result)}/{len(records)} records")
    return result
