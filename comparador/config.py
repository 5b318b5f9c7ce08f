"""Configuration and constants for the comparison catalog."""

import os
from pathlib import Path
from typing import Dict, Optional

__all__ = [
    "CONTENT_DIR",
    "LOG_DIR",
    "PLACEHOLDER_IMAGE",
    "PLACEHOLDER_LINK",
    "INTERNAL_FIELDS",
    "NON_FILTERABLE_FIELDS",
    "NON_COMPARABLE_FIELDS",
    "PINNED_COMPARISON_FIELDS",
    "SEARCH_FIELDS",
    "SEARCH_ARRAY_FIELDS",
    "PRICE_LIKE_FIELDS",
    "RESERVED_QUERY_PARAMS",
    "RESERVED_CATEGORY_NAMES",
    "MAX_SELECT_OPTIONS",
    "PRICE_STEP",
    "DEFAULT_STEP",
    "DEFAULT_DISPLAY_ORDER",
    "RELATED_LIMIT",
    "TOP_BRANDS_LIMIT",
    "FIELD_LABELS",
    "FIELD_SUFFIXES",
    "FIELD_ORDER",
    "CATEGORY_FIELD_TYPES",
    "get_declared_types",
]

_PROJECT_ROOT = Path(__file__).parent.parent

# Content layout: <CONTENT_DIR>/<category>/<slug>.json
CONTENT_DIR = os.getenv("COMPARADOR_CONTENT_DIR", str(_PROJECT_ROOT / "content"))
LOG_DIR = Path(os.getenv("COMPARADOR_LOG_DIR", str(_PROJECT_ROOT / "logs")))

# Placeholders applied by the loader when a record omits them
PLACEHOLDER_IMAGE = "/images/{category}/placeholder.jpg"
PLACEHOLDER_LINK = "#"


# =============================================================================
# Field Sets
# =============================================================================

# Bookkeeping fields never described by the inferred schema
INTERNAL_FIELDS = frozenset({"slug", "category", "content"})

# Identity/display-only fields that never become filters
NON_FILTERABLE_FIELDS = frozenset({"name", "slug", "image", "affiliate_link", "link", "content"})

# Fields hidden from the comparison table
NON_COMPARABLE_FIELDS = frozenset({
    "image",
    "affiliate_link",
    "slug",
    "category",
    "content",
    "featured",
    "discount",
    "original_price",
})

# Always shown in the comparison table once they carry a value
PINNED_COMPARISON_FIELDS = frozenset({"name", "brand", "model", "price", "rating"})

SEARCH_FIELDS = ("name", "brand", "model")
SEARCH_ARRAY_FIELDS = ("key_specs", "highlights", "pros", "cons")

# Missing values sort last on these
PRICE_LIKE_FIELDS = frozenset({"price", "original_price"})

# URL parameters with fixed meaning; a derived filter on a field of the same
# name is not parsed from them
RESERVED_QUERY_PARAMS = frozenset({"search", "sort", "order", "min_price", "max_price", "brand"})

# Category names shadowed by literal API routes
RESERVED_CATEGORY_NAMES = frozenset({"categories", "search"})


# =============================================================================
# Filter / Aggregation Settings
# =============================================================================

MAX_SELECT_OPTIONS = int(os.getenv("COMPARADOR_MAX_SELECT_OPTIONS", "10"))
PRICE_STEP = int(os.getenv("COMPARADOR_PRICE_STEP", "50"))
DEFAULT_STEP = 1
DEFAULT_DISPLAY_ORDER = 1000
RELATED_LIMIT = int(os.getenv("COMPARADOR_RELATED_LIMIT", "4"))
TOP_BRANDS_LIMIT = 5


# =============================================================================
# Presentation Tables (pt-BR)
# =============================================================================

FIELD_LABELS: Dict[str, str] = {
    "price": "Preço",
    "rating": "Avaliação",
    "brand": "Marca",
    "model": "Modelo",
    "screen_size": "Tamanho da Tela",
    "resolution": "Resolução",
    "display_type": "Tipo de Display",
    "refresh_rate": "Taxa de Atualização",
    "battery_life": "Duração da Bateria",
    "connectivity": "Conectividade",
    "weight": "Peso",
    "waterproof_rating": "Resistência à Água",
    "smart_platform": "Sistema Smart",
    "hdr_support": "Suporte HDR",
    "gaming_features": "Recursos para Jogos",
    "audio": "Áudio",
    "dimensions": "Dimensões",
    "energy_rating": "Classificação Energética",
    "key_specs": "Especificações Principais",
    "pros": "Pontos Positivos",
    "cons": "Pontos Negativos",
    "name": "Nome",
}

FIELD_SUFFIXES: Dict[str, str] = {
    "price": "",
    "screen_size": '"',
    "refresh_rate": "Hz",
    "battery_life": "h",
    "weight": "kg",
}

FIELD_ORDER: Dict[str, int] = {
    "name": 0,
    "brand": 5,
    "model": 10,
    "price": 15,
    "original_price": 16,
    "rating": 20,
    "screen_size": 25,
    "resolution": 30,
    "display_type": 35,
    "smart_platform": 40,
    "hdr_support": 45,
    "refresh_rate": 50,
    "gaming_features": 55,
    "connectivity": 60,
    "audio": 65,
    "dimensions": 70,
    "weight": 75,
    "energy_rating": 80,
    "key_specs": 85,
    "pros": 90,
    "cons": 95,
    "featured": 100,
    "discount": 105,
}


# =============================================================================
# Declared Field Types
# =============================================================================
# Optional per-category type declarations. Declared fields skip first-seen
# inference; values are FieldType names ("text", "number", "array", ...).

CATEGORY_FIELD_TYPES: Dict[str, Dict[str, str]] = {
    "tv": {
        "screen_size": "number",
        "refresh_rate": "number",
        "resolution": "text",
    },
}


def get_declared_types(category: str) -> Optional[Dict[str, str]]:
    """Get declared field types for a category, if any."""
    return CATEGORY_FIELD_TYPES.get(category)
