"""Related product sampling."""

import random
from typing import Any, List, Optional, Sequence

from comparador.config import RELATED_LIMIT
from comparador.models import ProductRecord

__all__ = ["related_products"]


def related_products(
    records: Sequence[ProductRecord],
    current_slug: str,
    limit: int = RELATED_LIMIT,
    rng: Optional[Any] = None,
) -> List[ProductRecord]:
    """Pick up to ``limit`` other products from the same category.

    Args:
        records: Records of the product's category.
        current_slug: Slug of the product being shown (excluded).
        limit: Maximum number of related products.
        rng: Random source with a ``shuffle`` method (default: the
            ``random`` module). Pass ``random.Random(seed)`` for
            reproducible picks.

    Returns:
        Shuffled, truncated list of records.
    """
    candidates = [r for r in records if r.get("slug") != current_slug]
    (rng or random).shuffle(candidates)
    return candidates[:max(limit, 0)]
