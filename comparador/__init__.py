"""Product comparison catalog: schema inference, filters and queries."""

__version__ = "0.1.0"

# Re-export main components for convenient imports
from comparador.catalog import Catalog, category_display_name
from comparador.errors import CategoryNotFoundError, ProductNotFoundError
from comparador.filters import derive_filters
from comparador.loader import ContentLoader
from comparador.models import (
    CategoryStats,
    ComparisonField,
    FieldDescriptor,
    FieldType,
    MultiselectFilter,
    QueryState,
    RangeFilter,
    RangeSelection,
    SelectFilter,
    SetSelection,
    ValueKind,
    ValueSelection,
)
from comparador.presenter import DEFAULT_PRESENTER, FieldPresenter
from comparador.query import query_products
from comparador.related import related_products
from comparador.schema import comparison_fields, infer_schema
from comparador.stats import summarize

__all__ = [
    # Version
    "__version__",
    # Facade
    "Catalog",
    "ContentLoader",
    "category_display_name",
    # Errors
    "CategoryNotFoundError",
    "ProductNotFoundError",
    # Models
    "CategoryStats",
    "ComparisonField",
    "FieldDescriptor",
    "FieldType",
    "ValueKind",
    "RangeFilter",
    "SelectFilter",
    "MultiselectFilter",
    "RangeSelection",
    "ValueSelection",
    "SetSelection",
    "QueryState",
    # Core functions
    "FieldPresenter",
    "DEFAULT_PRESENTER",
    "infer_schema",
    "comparison_fields",
    "derive_filters",
    "query_products",
    "summarize",
    "related_products",
]
