"""Data models for product records, schema descriptors, filters and queries.

Product records stay plain dicts (field name -> value). Their values are
restricted to a closed set of variants described by ``ValueKind``; every
derived structure below is read-only with respect to the records.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Hashable, List, Mapping, Optional, Tuple, Union

from comparador.config import RESERVED_QUERY_PARAMS

__all__ = [
    "ProductRecord",
    "ValueKind",
    "value_kind",
    "is_number",
    "is_empty",
    "distinct_key",
    "option_sort_key",
    "FieldType",
    "FieldDescriptor",
    "RangeFilter",
    "SelectFilter",
    "MultiselectFilter",
    "FilterSpec",
    "RangeSelection",
    "ValueSelection",
    "SetSelection",
    "Selection",
    "QueryState",
    "CategoryStats",
    "ComparisonField",
]

ProductRecord = Dict[str, Any]


# =============================================================================
# Value Variants
# =============================================================================


class ValueKind(Enum):
    """Closed set of value variants a record field may hold."""

    TEXT = "text"
    NUMBER = "number"
    BOOL = "bool"
    LIST = "list"
    NULL = "null"


def value_kind(value: Any) -> ValueKind:
    """Classify a record value. Booleans are never numbers."""
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, (list, tuple)):
        return ValueKind.LIST
    return ValueKind.TEXT


def is_number(value: Any) -> bool:
    """True for real numbers other than booleans and NaN."""
    return value_kind(value) is ValueKind.NUMBER and not math.isnan(value)


def is_empty(value: Any) -> bool:
    """True for None and the empty string."""
    return value is None or value == ""


def distinct_key(value: Any) -> Hashable:
    """Hashable identity used for distinct-value bookkeeping.

    Tags each value with its kind so ``True`` and ``1`` stay distinct.
    """
    kind = value_kind(value)
    if kind is ValueKind.LIST:
        return (kind, tuple(distinct_key(v) for v in value))
    if kind is ValueKind.TEXT and not isinstance(value, str):
        return (kind, str(value))
    return (kind, value)


def option_sort_key(value: Any) -> str:
    """Lexicographic ordering for filter options."""
    return str(value)


class FieldType(Enum):
    """Display/type classification of an inferred field."""

    TEXT = "text"
    NUMBER = "number"
    ARRAY = "array"
    RATING = "rating"
    PRICE = "price"
    IMAGE = "image"


# =============================================================================
# Schema
# =============================================================================


@dataclass
class FieldDescriptor:
    """Observed shape of one field across a category's records."""

    field_type: FieldType
    values: List[Any] = field(default_factory=list)
    is_numeric: bool = False
    is_array: bool = False
    has_values: bool = False
    unique_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "type": self.field_type.value,
            "values": list(self.values),
            "is_numeric": self.is_numeric,
            "is_array": self.is_array,
            "has_values": self.has_values,
            "unique_count": self.unique_count,
        }


@dataclass
class ComparisonField:
    """A column in the comparison table."""

    key: str
    label: str
    field_type: FieldType
    suffix: str = ""
    display_order: int = 1000

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "label": self.label,
            "type": self.field_type.value,
            "suffix": self.suffix,
            "display_order": self.display_order,
        }


# =============================================================================
# Filter Specifications
# =============================================================================


@dataclass
class RangeFilter:
    """Inclusive numeric range over a field."""

    label: str
    min: float
    max: float
    step: float = 1
    suffix: str = ""
    kind: str = field(default="range", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.kind,
            "label": self.label,
            "min": self.min,
            "max": self.max,
            "step": self.step,
            "suffix": self.suffix,
        }


@dataclass
class SelectFilter:
    """Single choice among a small set of scalar values."""

    label: str
    options: List[Any] = field(default_factory=list)
    kind: str = field(default="select", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.kind, "label": self.label, "options": list(self.options)}


@dataclass
class MultiselectFilter:
    """Any-of choice over the elements of an array-valued field."""

    label: str
    options: List[Any] = field(default_factory=list)
    kind: str = field(default="multiselect", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.kind, "label": self.label, "options": list(self.options)}


FilterSpec = Union[RangeFilter, SelectFilter, MultiselectFilter]


# =============================================================================
# Selections & Query State
# =============================================================================


@dataclass(frozen=True)
class RangeSelection:
    """User-chosen bounds; either side may be open."""

    min: Optional[float] = None
    max: Optional[float] = None

    def is_empty(self) -> bool:
        return self.min is None and self.max is None

    def matches(self, value: Any) -> bool:
        # Non-numeric values pass through a range
        if not is_number(value):
            return True
        if self.min is not None and value < self.min:
            return False
        if self.max is not None and value > self.max:
            return False
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {"min": self.min, "max": self.max}


@dataclass(frozen=True)
class ValueSelection:
    """Exact (case-sensitive) match against a scalar field."""

    value: Any = None

    def is_empty(self) -> bool:
        return is_empty(self.value)

    def matches(self, value: Any) -> bool:
        return distinct_key(value) == distinct_key(self.value)

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value}


@dataclass(frozen=True)
class SetSelection:
    """Any-of match against an array field (or scalar membership)."""

    values: Tuple[Any, ...] = ()
    keys: FrozenSet[Hashable] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "keys", frozenset(distinct_key(v) for v in self.values))

    def is_empty(self) -> bool:
        return len(self.values) == 0

    def matches(self, value: Any) -> bool:
        keys = self.keys
        if value_kind(value) is ValueKind.LIST:
            return any(distinct_key(v) in keys for v in value)
        return distinct_key(value) in keys

    def to_dict(self) -> Dict[str, Any]:
        return {"values": list(self.values)}


Selection = Union[RangeSelection, ValueSelection, SetSelection]


def _parse_number(raw: Any) -> Optional[float]:
    """Parse a URL parameter into a number; unparseable input is absent."""
    if raw is None:
        return None
    text = str(raw).strip()
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    if math.isnan(number):
        return None
    return int(number) if number.is_integer() else number


def _resolve_option(raw: str, options: List[Any]) -> Any:
    """Map a URL string back onto the filter option it names."""
    for option in options:
        if option_sort_key(option) == raw:
            return option
    return raw


@dataclass(frozen=True)
class QueryState:
    """Search, filter and sort parameters for one request."""

    search: str = ""
    sort_by: str = "name"
    sort_order: str = "asc"
    filters: Mapping[str, Selection] = field(default_factory=dict)
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    brand: Optional[str] = None

    @property
    def descending(self) -> bool:
        return self.sort_order == "desc"

    def active_filters(self) -> Dict[str, Selection]:
        """Selections that actually narrow the result."""
        return {key: sel for key, sel in self.filters.items() if not sel.is_empty()}

    @classmethod
    def from_params(
        cls,
        params: Mapping[str, Any],
        filters: Optional[Mapping[str, FilterSpec]] = None,
    ) -> "QueryState":
        """Build a query state from URL query parameters.

        Args:
            params: Query parameters (``sort``, ``order``, ``search``,
                ``min_price``, ``max_price``, ``brand`` and one key per
                derived filter). Range and multiselect values are
                comma-separated.
            filters: Derived filter map; decides how each filter key parses.
                Reserved parameters such as ``brand`` keep their fixed
                meaning even when a derived filter shares the name.

        Returns:
            QueryState. Unparseable values are dropped, never raised.
        """
        selections: Dict[str, Selection] = {}
        for key, spec in (filters or {}).items():
            if key in RESERVED_QUERY_PARAMS:
                continue
            raw = params.get(key)
            if raw is None or str(raw) == "":
                continue
            raw = str(raw)

            if spec.kind == "range":
                parts = raw.split(",")
                low = _parse_number(parts[0])
                high = _parse_number(parts[1]) if len(parts) > 1 else None
                selection: Selection = RangeSelection(low, high)
            elif spec.kind == "select":
                selection = ValueSelection(_resolve_option(raw, spec.options))
            else:
                picked = [p.strip() for p in raw.split(",") if p.strip()]
                selection = SetSelection(tuple(_resolve_option(p, spec.options) for p in picked))

            if not selection.is_empty():
                selections[key] = selection

        order = str(params.get("order") or "asc").lower()
        return cls(
            search=str(params.get("search") or ""),
            sort_by=str(params.get("sort") or "name"),
            sort_order="desc" if order == "desc" else "asc",
            filters=selections,
            min_price=_parse_number(params.get("min_price")),
            max_price=_parse_number(params.get("max_price")),
            brand=params.get("brand") or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "search": self.search,
            "sort_by": self.sort_by,
            "sort_order": self.sort_order,
            "min_price": self.min_price,
            "max_price": self.max_price,
            "brand": self.brand,
            "filters": {key: sel.to_dict() for key, sel in self.filters.items()},
        }


# =============================================================================
# Aggregates
# =============================================================================


@dataclass
class CategoryStats:
    """Category-level summary statistics."""

    count: int = 0
    price_range: Optional[Dict[str, float]] = None
    average_rating: Optional[float] = None
    top_brands: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": self.count,
            "price_range": dict(self.price_range) if self.price_range else None,
            "average_rating": self.average_rating,
            "top_brands": [dict(b) for b in self.top_brands],
        }
