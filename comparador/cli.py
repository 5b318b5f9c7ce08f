"""Command-line interface for browsing the comparison catalog.

Usage:
    python -m comparador.cli --list
    python -m comparador.cli tv --sort price --order desc
    python -m comparador.cli tv --search oled --filter screen_size=50,65 --stats
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

import pandas as pd

from comparador.catalog import Catalog
from comparador.config import CONTENT_DIR
from comparador.errors import CategoryNotFoundError
from comparador.loader import ContentLoader
from comparador.logging_config import setup_logging

__all__ = ["main", "parse_args", "build_params", "products_table"]


def build_params(args: argparse.Namespace) -> Dict[str, str]:
    """Translate CLI options into URL-style query parameters."""
    params: Dict[str, str] = {}
    if args.search:
        params["search"] = args.search
    if args.sort:
        params["sort"] = args.sort
    if args.order:
        params["order"] = args.order
    if args.min_price is not None:
        params["min_price"] = str(args.min_price)
    if args.max_price is not None:
        params["max_price"] = str(args.max_price)
    if args.brand:
        params["brand"] = args.brand

    for item in args.filter or []:
        key, sep, value = item.partition("=")
        if not sep or not key:
            print(f"Warning: ignoring malformed filter '{item}' (expected key=value)")
            continue
        params[key.strip()] = value.strip()
    return params


def _cell(value: Any) -> Any:
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    return value


def products_table(products: List[Dict[str, Any]], fields: List[Dict[str, Any]]) -> pd.DataFrame:
    """Comparison table: one row per product, one column per field."""
    columns = [f["key"] for f in fields]
    rows = [{key: _cell(p.get(key)) for key in columns} for p in products]
    df = pd.DataFrame(rows, columns=columns)
    df.columns = [f["label"] + (f" ({f['suffix']})" if f.get("suffix") else "") for f in fields]
    return df


def print_page(page: Dict[str, Any], show_stats: bool, show_filters: bool) -> None:
    """Print a category page in a readable format."""
    print("=" * 70)
    print(f"{page['display_name']}: {page['pagination']['total']} of {page['total_products']} products")
    print("=" * 70)

    if page["products"]:
        with pd.option_context("display.max_columns", None, "display.width", 200):
            print(products_table(page["products"], page["comparison_fields"]).to_string(index=False))
    else:
        print("No products match the current filters.")

    if show_filters:
        print("\n" + "-" * 70)
        print("FILTERS")
        print("-" * 70)
        for key, spec in page["filters"].items():
            if spec["type"] == "range":
                detail = f"{spec['min']} .. {spec['max']} step {spec['step']}{spec['suffix']}"
            else:
                detail = ", ".join(str(o) for o in spec["options"])
            print(f"{key:<24} {spec['type']:<12} {detail}")

    if show_stats:
        stats = page["stats"]
        print("\n" + "-" * 70)
        print("STATS")
        print("-" * 70)
        print(f"Products: {stats['count']}")
        if stats["price_range"]:
            pr = stats["price_range"]
            print(f"Price: {pr['min']:.2f} - {pr['max']:.2f} (avg {pr['average']:.2f})")
        if stats["average_rating"] is not None:
            print(f"Average rating: {stats['average_rating']:.2f}")
        for entry in stats["top_brands"]:
            print(f"  {entry['brand']:<20} {entry['count']:>4}")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Browse, filter and compare catalog products",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # List categories with content
    python -m comparador.cli --list

    # Cheapest TVs first, with derived filters and stats
    python -m comparador.cli tv --sort price --filters --stats

    # Range and multiselect filters use comma-separated values
    python -m comparador.cli tv --filter screen_size=50,65 --filter connectivity=HDMI,Wi-Fi
        """,
    )

    parser.add_argument("category", nargs="?", help="Category to show")
    parser.add_argument("--list", action="store_true", help="List available categories")
    parser.add_argument(
        "--content-dir",
        default=CONTENT_DIR,
        help=f"Content directory (default: {CONTENT_DIR})",
    )
    parser.add_argument("--search", help="Free-text search term")
    parser.add_argument("--sort", help="Field to sort by (default: name)")
    parser.add_argument("--order", choices=["asc", "desc"], help="Sort direction")
    parser.add_argument("--min-price", type=float, help="Minimum price")
    parser.add_argument("--max-price", type=float, help="Maximum price")
    parser.add_argument("--brand", help="Brand (case-insensitive)")
    parser.add_argument(
        "--filter",
        action="append",
        metavar="KEY=VALUE",
        help="Derived filter selection; repeat for several filters",
    )
    parser.add_argument("--filters", action="store_true", help="Show derived filters")
    parser.add_argument("--stats", action="store_true", help="Show category statistics")
    parser.add_argument("--json", action="store_true", help="Print the full page as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(level=logging.DEBUG if args.verbose else logging.WARNING)

    catalog = Catalog(loader=ContentLoader(args.content_dir))

    if args.list:
        for name in catalog.get_categories():
            print(name)
        return 0

    if not args.category:
        print("Error: Must specify a category or use --list")
        print(f"Available categories: {catalog.get_categories()}")
        return 1

    try:
        page = catalog.category_page(args.category, build_params(args))
    except CategoryNotFoundError as e:
        print(f"Error: {e}")
        return 1

    if args.json:
        print(json.dumps(page, indent=2, ensure_ascii=False, default=str))
    else:
        print_page(page, show_stats=args.stats, show_filters=args.filters)
    return 0


if __name__ == "__main__":
    sys.exit(main())
