"""Shared fixtures for the catalog test suite."""

import json
import logging
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def reset_catalog_logger():
    """Undo handlers installed by setup_logging() during a test."""
    logger = logging.getLogger("comparador")
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


@pytest.fixture
def tv_records():
    """Loader-shaped TV records with heterogeneous category fields."""
    return [
        {
            "name": "LG OLED C3",
            "brand": "LG",
            "model": "OLED65C3",
            "price": 8999,
            "rating": 4.8,
            "screen_size": 65,
            "resolution": "4K",
            "display_type": "OLED",
            "connectivity": ["HDMI 2.1", "Wi-Fi", "AirPlay"],
            "pros": ["Contraste infinito"],
            "image": "/images/tv/lg.jpg",
            "affiliate_link": "#",
            "slug": "lg-oled-c3",
            "category": "tv",
        },
        {
            "name": "Samsung QN90C",
            "brand": "Samsung",
            "model": "QN55QN90C",
            "price": 5499,
            "rating": 4.7,
            "screen_size": 55,
            "resolution": "4K",
            "display_type": "Neo QLED",
            "connectivity": ["HDMI 2.1", "Wi-Fi", "Bluetooth"],
            "pros": ["Ótimo para jogos"],
            "image": "/images/tv/samsung.jpg",
            "affiliate_link": "#",
            "slug": "samsung-qn90c",
            "category": "tv",
        },
        {
            "name": "TCL P635",
            "brand": "TCL",
            "model": "50P635",
            "price": 1899,
            "rating": 4.2,
            "screen_size": 50,
            "resolution": "4K",
            "display_type": "LED",
            "connectivity": ["HDMI", "Wi-Fi"],
            "pros": ["Custo-benefício"],
            "image": "/images/tv/tcl.jpg",
            "affiliate_link": "#",
            "slug": "tcl-p635",
            "category": "tv",
        },
        {
            "name": "Samsung CU7700",
            "brand": "Samsung",
            "model": "UN43CU7700",
            "price": 0,
            "rating": None,
            "screen_size": 43,
            "resolution": "4K",
            "display_type": "LED",
            "connectivity": ["HDMI", "Wi-Fi", "Bluetooth"],
            "pros": ["Preço acessível"],
            "image": "/images/tv/placeholder.jpg",
            "affiliate_link": "#",
            "slug": "samsung-cu7700",
            "category": "tv",
        },
    ]


def write_product(root: Path, category: str, slug: str, data) -> Path:
    """Write one content file and return its path."""
    category_dir = root / category
    category_dir.mkdir(parents=True, exist_ok=True)
    path = category_dir / f"{slug}.json"
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def content_dir(tmp_path):
    """Temporary content directory with two categories."""
    root = tmp_path / "content"
    write_product(root, "tv", "samsung-qn90c", {
        "name": "Samsung QN90C",
        "brand": "Samsung",
        "price": 5499,
        "rating": 4.7,
        "screen_size": 55,
        "connectivity": ["HDMI 2.1", "Wi-Fi"],
        "key_specs": ["Mini LED"],
    })
    write_product(root, "tv", "lg-oled-c3", {
        "name": "LG OLED C3",
        "brand": "LG",
        "price": 8999,
        "rating": 4.8,
        "screen_size": 65,
        "connectivity": ["HDMI 2.1", "AirPlay"],
        "key_specs": ["Dolby Vision"],
    })
    write_product(root, "tv", "tcl-p635", {
        "name": "TCL P635",
        "brand": "TCL",
        "screen_size": 50,
        "connectivity": ["HDMI"],
        "key_specs": ["Google TV"],
    })
    write_product(root, "fones", "sony-xm5", {
        "name": "Sony WH-1000XM5",
        "brand": "Sony",
        "price": 2299,
        "pros": ["Cancelamento de ruído"],
    })
    return root
