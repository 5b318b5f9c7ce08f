"""Category-level summary statistics."""

from typing import List, Sequence

import pandas as pd

from comparador.config import TOP_BRANDS_LIMIT
from comparador.models import CategoryStats, ProductRecord, is_number

__all__ = ["summarize", "top_brands"]


def top_brands(records: Sequence[ProductRecord], limit: int = TOP_BRANDS_LIMIT) -> List[dict]:
    """Most frequent brands, count descending, ties in first-seen order.

    Grouping is exact and case-sensitive; empty or non-text brands are ignored.
    """
    brands = pd.Series(
        [r.get("brand") for r in records if isinstance(r.get("brand"), str) and r.get("brand")],
        dtype="object",
    )
    if brands.empty:
        return []
    counts = brands.groupby(brands, sort=False).size()
    counts = counts.sort_values(ascending=False, kind="stable").head(limit)
    return [{"brand": brand, "count": int(count)} for brand, count in counts.items()]


def summarize(records: Sequence[ProductRecord]) -> CategoryStats:
    """Compute count, price range, average rating and top brands.

    Args:
        records: Records of one category.

    Returns:
        CategoryStats. ``price_range`` is None unless some price is positive,
        ``average_rating`` is None unless some rating is positive.
    """
    if not records:
        return CategoryStats()

    prices = pd.Series(
        [r.get("price") for r in records if is_number(r.get("price")) and r.get("price") > 0],
        dtype="float64",
    )
    ratings = pd.Series(
        [r.get("rating") for r in records if is_number(r.get("rating")) and r.get("rating") > 0],
        dtype="float64",
    )

    price_range = None
    if not prices.empty:
        price_range = {
            "min": float(prices.min()),
            "max": float(prices.max()),
            "average": float(prices.mean()),
        }

    return CategoryStats(
        count=len(records),
        price_range=price_range,
        average_rating=float(ratings.mean()) if not ratings.empty else None,
        top_brands=top_brands(records),
    )
