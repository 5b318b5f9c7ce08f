"""Human-readable labels, unit suffixes and display order for fields.

The lookup tables are injected at construction so another locale can be
swapped in without touching schema, filter or query code.
"""

import re
from types import MappingProxyType
from typing import Mapping, Optional

from comparador.config import DEFAULT_DISPLAY_ORDER, FIELD_LABELS, FIELD_ORDER, FIELD_SUFFIXES

__all__ = ["FieldPresenter", "DEFAULT_PRESENTER", "humanize_field"]


def humanize_field(field: str) -> str:
    """Fallback label: underscores become spaces, each word capitalized."""
    return re.sub(r"\b\w", lambda m: m.group().upper(), field.replace("_", " "))


class FieldPresenter:
    """Immutable display metadata lookup for record fields."""

    def __init__(
        self,
        labels: Optional[Mapping[str, str]] = None,
        suffixes: Optional[Mapping[str, str]] = None,
        display_order: Optional[Mapping[str, int]] = None,
    ):
        self._labels = MappingProxyType(dict(FIELD_LABELS if labels is None else labels))
        self._suffixes = MappingProxyType(dict(FIELD_SUFFIXES if suffixes is None else suffixes))
        self._order = MappingProxyType(dict(FIELD_ORDER if display_order is None else display_order))

    @property
    def labels(self) -> Mapping[str, str]:
        return self._labels

    @property
    def suffixes(self) -> Mapping[str, str]:
        return self._suffixes

    def label(self, field: str) -> str:
        return self._labels.get(field) or humanize_field(field)

    def suffix(self, field: str) -> str:
        return self._suffixes.get(field) or ""

    def display_order(self, field: str) -> int:
        return self._order.get(field, DEFAULT_DISPLAY_ORDER)


DEFAULT_PRESENTER = FieldPresenter()
