"""Catalog facade: loads a category and runs the inference/query pipeline.

Record Loader -> {schema, stats} -> filters -> query engine -> result.
Not-found conditions are detected here, before any inference runs.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from comparador.config import RELATED_LIMIT, get_declared_types
from comparador.errors import CategoryNotFoundError, ProductNotFoundError
from comparador.filters import derive_filters
from comparador.loader import ContentLoader
from comparador.logging_config import log_catalog_event
from comparador.models import ProductRecord, QueryState
from comparador.presenter import DEFAULT_PRESENTER, FieldPresenter, humanize_field
from comparador.query import query_products, search_records
from comparador.related import related_products
from comparador.schema import comparison_fields, infer_schema
from comparador.stats import summarize

__all__ = ["Catalog", "category_display_name"]

logger = logging.getLogger(__name__)


def category_display_name(category: str) -> str:
    """'smart-tv' -> 'Smart Tv'."""
    return humanize_field(category.replace("-", " "))


class Catalog:
    """Read-only view over the loader's categories."""

    def __init__(
        self,
        loader: Optional[ContentLoader] = None,
        presenter: Optional[FieldPresenter] = None,
        category_types: Optional[Mapping[str, Mapping[str, str]]] = None,
    ):
        self.loader = loader or ContentLoader()
        self.presenter = presenter or DEFAULT_PRESENTER
        self._category_types = category_types

    def get_categories(self) -> List[str]:
        return self.loader.list_categories()

    def declared_types(self, category: str) -> Optional[Mapping[str, str]]:
        if self._category_types is not None:
            return self._category_types.get(category)
        return get_declared_types(category)

    def load(self, category: str) -> List[ProductRecord]:
        """Load a category's records, raising if it is unknown or empty."""
        available = self.get_categories()
        if category not in available:
            raise CategoryNotFoundError(category, available)
        records = self.loader.load_category(category)
        if not records:
            raise CategoryNotFoundError(category, available)
        return records

    def category_page(self, category: str, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Assemble everything a category listing needs.

        Args:
            category: Category identifier.
            params: URL query parameters (see ``QueryState.from_params``).

        Returns:
            Dict with products, comparison fields/schema, filters, stats,
            the echoed query state and trivial pagination.

        Raises:
            CategoryNotFoundError: Unknown category or no products.
        """
        records = self.load(category)
        schema = infer_schema(records, self.declared_types(category))
        filters = derive_filters(records, schema, self.presenter)
        state = QueryState.from_params(params or {}, filters)
        products = query_products(records, state)

        log_catalog_event(
            "category_page",
            {
                "message": f"Category {category}: {len(products)}/{len(records)} products",
                "category": category,
                "total": len(records),
                "matched": len(products),
                "filters": sorted(state.active_filters()),
            },
        )

        return {
            "category": category,
            "display_name": category_display_name(category),
            "products": products,
            "total_products": len(records),
            "comparison_fields": [f.to_dict() for f in comparison_fields(records, schema, self.presenter)],
            "comparison_schema": {key: d.to_dict() for key, d in schema.items()},
            "filters": {key: spec.to_dict() for key, spec in filters.items()},
            "stats": summarize(records).to_dict(),
            "current_filters": state.to_dict(),
            "pagination": {"total": len(products), "page": 1, "per_page": len(products)},
        }

    def product_page(
        self,
        category: str,
        slug: str,
        related_limit: int = RELATED_LIMIT,
        rng: Optional[Any] = None,
    ) -> Dict[str, Any]:
        """A single product plus a sample of related products.

        Raises:
            CategoryNotFoundError: Unknown category.
            ProductNotFoundError: Unknown slug within the category.
        """
        records = self.load(category)
        product = self.loader.load_product(category, slug)
        if product is None:
            raise ProductNotFoundError(category, slug)
        return {
            "category": category,
            "product": product,
            "related": related_products(records, slug, related_limit, rng=rng),
        }

    def search(self, term: str, category: Optional[str] = None) -> List[ProductRecord]:
        """Search one category, or every category when none is given."""
        if category:
            records = self.load(category)
        else:
            records = []
            for name in self.get_categories():
                records.extend(self.loader.load_category(name))
        results = search_records(records, term)
        logger.info(f"Search '{term}' in {category or 'all categories'}: {len(results)} results")
        return results
