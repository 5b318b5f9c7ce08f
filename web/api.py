"""JSON API endpoints for the comparison catalog.

Query parameters on the category endpoint map 1:1 onto the query state:
``sort``, ``order``, ``search``, ``min_price``, ``max_price``, ``brand`` and
one parameter per derived filter (comma-separated for ranges and
multiselects).
"""

import logging
from typing import Any, Dict, Tuple

from flask import Blueprint, Response, current_app, jsonify, request

from comparador.catalog import Catalog, category_display_name
from comparador.errors import CategoryNotFoundError, ProductNotFoundError
from comparador.loader import ContentLoader

__all__ = ["api", "get_catalog"]

logger = logging.getLogger(__name__)

# Create blueprint for API
api = Blueprint("api", __name__, url_prefix="/api")


def get_catalog() -> Catalog:
    """Catalog over the app's configured content directory."""
    return Catalog(loader=ContentLoader(current_app.config["CONTENT_DIR"]))


@api.errorhandler(CategoryNotFoundError)
def category_not_found(e: CategoryNotFoundError) -> Tuple[Response, int]:
    logger.info(f"Category not found: {e.category}")
    return jsonify({
        "error": "category_not_found",
        "message": f'Categoria "{e.category}" não encontrada.',
        "available": e.available,
    }), 404


@api.errorhandler(ProductNotFoundError)
def product_not_found(e: ProductNotFoundError) -> Tuple[Response, int]:
    logger.info(f"Product not found: {e.category}/{e.slug}")
    return jsonify({
        "error": "product_not_found",
        "message": f'Produto "{e.slug}" não encontrado em "{e.category}".',
    }), 404


@api.route("/categories", methods=["GET"])
def categories() -> Response:
    """List categories that have content."""
    catalog = get_catalog()
    return jsonify({
        "categories": [
            {"key": key, "display_name": category_display_name(key)}
            for key in catalog.get_categories()
        ]
    })


@api.route("/search", methods=["GET"])
def search() -> Tuple[Response, int]:
    """Search one category (``category``) or all of them."""
    term = request.args.get("q", "").strip()
    if not term:
        return jsonify({"error": "missing_query", "message": "Parameter 'q' is required"}), 400

    category = request.args.get("category") or None
    results = get_catalog().search(term, category)
    payload: Dict[str, Any] = {"query": term, "category": category, "total": len(results), "products": results}
    return jsonify(payload), 200


@api.route("/<category>", methods=["GET"])
def category_page(category: str) -> Response:
    """Products, filters, comparison fields and stats for a category."""
    return jsonify(get_catalog().category_page(category, request.args))


@api.route("/<category>/<slug>", methods=["GET"])
def product_page(category: str, slug: str) -> Response:
    """A single product with related products from its category."""
    limit = request.args.get("related", type=int)
    catalog = get_catalog()
    if limit is None:
        return jsonify(catalog.product_page(category, slug))
    return jsonify(catalog.product_page(category, slug, related_limit=limit))
