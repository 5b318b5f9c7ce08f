"""Shared test fixtures for the web test suite."""

import json
import logging
from pathlib import Path

import pytest


def _write(root: Path, category: str, slug: str, data) -> None:
    category_dir = root / category
    category_dir.mkdir(parents=True, exist_ok=True)
    (category_dir / f"{slug}.json").write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")


@pytest.fixture
def content_dir(tmp_path):
    """Temporary content directory with a few TVs and headphones."""
    root = tmp_path / "content"
    _write(root, "tv", "samsung-qn90c", {
        "name": "Samsung QN90C",
        "brand": "Samsung",
        "price": 5499,
        "rating": 4.7,
        "screen_size": 55,
        "connectivity": ["HDMI 2.1", "Wi-Fi"],
    })
    _write(root, "tv", "lg-oled-c3", {
        "name": "LG OLED C3",
        "brand": "LG",
        "price": 8999,
        "rating": 4.8,
        "screen_size": 65,
        "connectivity": ["HDMI 2.1", "AirPlay"],
    })
    _write(root, "tv", "tcl-p635", {
        "name": "TCL P635",
        "brand": "TCL",
        "price": 1899,
        "screen_size": 50,
        "connectivity": ["HDMI"],
    })
    _write(root, "fones-de-ouvido", "sony-xm5", {
        "name": "Sony WH-1000XM5",
        "brand": "Sony",
        "price": 2299,
        "pros": ["Cancelamento de ruído"],
    })
    return root


@pytest.fixture
def client(content_dir):
    """Create Flask test client over the temporary content."""
    from web.app import create_app

    app = create_app(content_dir=str(content_dir), config={"TESTING": True})

    with app.test_client() as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def reset_catalog_logger():
    """Undo handlers installed when web.app is imported."""
    logger = logging.getLogger("comparador")
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
