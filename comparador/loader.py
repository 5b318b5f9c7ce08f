"""File-backed record loader.

Reads product records from a content directory laid out as
``<content_dir>/<category>/<slug>.json`` and applies the defaults every
downstream component relies on (price, rating, image, affiliate link).
Values are coerced into the closed set of variants the schema code
understands: text, number, bool, null and lists of those.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from comparador.config import (
    CONTENT_DIR,
    PLACEHOLDER_IMAGE,
    PLACEHOLDER_LINK,
    RESERVED_CATEGORY_NAMES,
)
from comparador.logging_config import log_catalog_event
from comparador.models import ProductRecord, ValueKind, value_kind

__all__ = ["ContentLoader", "normalize_value", "apply_defaults"]

logger = logging.getLogger(__name__)

_SCALARS = {ValueKind.TEXT, ValueKind.NUMBER, ValueKind.BOOL}


def normalize_value(value: Any) -> Any:
    """Coerce a parsed JSON value into a supported variant.

    Nested objects are not supported and return ``None``; lists keep only
    their scalar elements.
    """
    if isinstance(value, dict):
        return None
    if value_kind(value) is ValueKind.LIST:
        return [item for item in value if value_kind(item) in _SCALARS]
    return value


def apply_defaults(data: Dict[str, Any], category: str, slug: str) -> ProductRecord:
    """Build a product record from raw content plus loader defaults."""
    record: ProductRecord = {}
    for key, value in data.items():
        if isinstance(value, dict):
            logger.debug(f"Dropping nested field {key} on {category}/{slug}")
            continue
        record[key] = normalize_value(value)

    record["slug"] = slug
    record["category"] = category
    record["price"] = record.get("price") or 0
    record["rating"] = record.get("rating") or None
    record["image"] = record.get("image") or PLACEHOLDER_IMAGE.format(category=category)
    record["affiliate_link"] = record.get("affiliate_link") or PLACEHOLDER_LINK
    return record


def _valid_category_name(category: str) -> bool:
    # Plain directory names only; reserved names collide with API routes
    if not category or "/" in category or "\\" in category or category.startswith("."):
        return False
    return category not in RESERVED_CATEGORY_NAMES


def _name_key(record: ProductRecord) -> str:
    name = record.get("name")
    return name.lower() if isinstance(name, str) else ""


class ContentLoader:
    """Load per-category product records from JSON content files."""

    def __init__(self, content_dir: Union[str, Path] = CONTENT_DIR):
        self.content_dir = Path(content_dir)

    def _category_dir(self, category: str) -> Optional[Path]:
        if not _valid_category_name(category):
            return None
        path = self.content_dir / category
        return path if path.is_dir() else None

    def _read(self, path: Path, category: str) -> Optional[ProductRecord]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            log_catalog_event(
                "content_skipped",
                {"message": f"Error loading product from {path}: {e}", "path": str(path)},
                level=logging.ERROR,
            )
            return None

        if not isinstance(data, dict):
            log_catalog_event(
                "content_skipped",
                {"message": f"Product file is not an object: {path}", "path": str(path)},
                level=logging.WARNING,
            )
            return None
        return apply_defaults(data, category, path.stem)

    def list_categories(self) -> List[str]:
        """Sorted category names that have at least one content file."""
        if not self.content_dir.is_dir():
            logger.warning(f"Content directory not found: {self.content_dir}")
            return []
        return sorted(
            p.name for p in self.content_dir.iterdir()
            if p.is_dir() and _valid_category_name(p.name) and any(p.glob("*.json"))
        )

    def load_category(self, category: str) -> List[ProductRecord]:
        """Load every record of a category, sorted by name.

        Returns:
            List of records; empty if the category has no content.
        """
        category_dir = self._category_dir(category)
        if category_dir is None:
            return []

        records = []
        for path in sorted(category_dir.glob("*.json")):
            record = self._read(path, category)
            if record is not None:
                records.append(record)

        log_catalog_event(
            "category_loaded",
            {"message": f"Loaded {len(records)} products for category: {category}",
             "category": category, "count": len(records)},
            level=logging.DEBUG,
        )
        return sorted(records, key=_name_key)

    def load_product(self, category: str, slug: str) -> Optional[ProductRecord]:
        """Load a single record, or None if it does not exist."""
        category_dir = self._category_dir(category)
        if category_dir is None or not slug or "/" in slug or slug.startswith("."):
            return None
        path = category_dir / f"{slug}.json"
        if not path.is_file():
            return None
        return self._read(path, category)
