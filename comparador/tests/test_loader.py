"""Tests for the JSON content loader."""

import pytest

from comparador.loader import ContentLoader, apply_defaults, normalize_value

from .conftest import write_product


class TestNormalizeValue:
    """Tests for normalize_value()."""

    @pytest.mark.parametrize("value", ["text", 3, 2.5, True, None])
    def test_scalars_unchanged(self, value):
        """Test that supported scalars pass unchanged."""
        assert normalize_value(value) == value

    def test_nested_object_becomes_none(self):
        """Test that nested objects are not supported."""
        assert normalize_value({"w": 10}) is None

    def test_list_keeps_scalars(self):
        """Test that lists keep only scalar elements."""
        assert normalize_value(["a", 1, {"x": 1}, ["y"], None, False]) == ["a", 1, False]


class TestApplyDefaults:
    """Tests for apply_defaults()."""

    def test_defaults_applied(self):
        """Test the defaults of a bare record."""
        record = apply_defaults({"name": "X"}, "tv", "x")
        assert record["slug"] == "x"
        assert record["category"] == "tv"
        assert record["price"] == 0
        assert record["rating"] is None
        assert record["image"] == "/images/tv/placeholder.jpg"
        assert record["affiliate_link"] == "#"

    def test_existing_values_kept(self):
        """Test that present values are not overwritten."""
        record = apply_defaults(
            {"name": "X", "price": 10, "rating": 4.5, "image": "/a.jpg", "affiliate_link": "https://x"},
            "tv",
            "x",
        )
        assert (record["price"], record["rating"], record["image"], record["affiliate_link"]) == (
            10, 4.5, "/a.jpg", "https://x"
        )

    def test_nested_fields_dropped(self):
        """Test that nested object fields are dropped."""
        record = apply_defaults({"name": "X", "dimensions": {"w": 1}}, "tv", "x")
        assert "dimensions" not in record


class TestContentLoader:
    """Tests for ContentLoader."""

    def test_list_categories(self, content_dir):
        """Test that categories are listed sorted."""
        assert ContentLoader(content_dir).list_categories() == ["fones", "tv"]

    def test_empty_directories_not_listed(self, content_dir):
        """Test that empty and hidden directories are skipped."""
        (content_dir / "empty").mkdir()
        (content_dir / ".hidden").mkdir()
        write_product(content_dir, ".hidden", "x", {"name": "X"})
        assert ContentLoader(content_dir).list_categories() == ["fones", "tv"]

    def test_route_names_not_listed(self, content_dir):
        """Test that directories named like API routes are not categories."""
        write_product(content_dir, "search", "x", {"name": "X"})
        write_product(content_dir, "categories", "y", {"name": "Y"})
        loader = ContentLoader(content_dir)
        assert loader.list_categories() == ["fones", "tv"]
        assert loader.load_category("search") == []
        assert loader.load_product("categories", "y") is None

    def test_missing_content_dir(self, tmp_path):
        """Test a content directory that does not exist."""
        assert ContentLoader(tmp_path / "nope").list_categories() == []

    def test_load_category_sorted_by_name(self, content_dir):
        """Test that records are sorted by name."""
        records = ContentLoader(content_dir).load_category("tv")
        assert [r["name"] for r in records] == ["LG OLED C3", "Samsung QN90C", "TCL P635"]

    def test_load_category_applies_defaults(self, content_dir):
        """Test that loaded records carry the defaults."""
        records = {r["slug"]: r for r in ContentLoader(content_dir).load_category("tv")}
        tcl = records["tcl-p635"]
        assert tcl["price"] == 0
        assert tcl["rating"] is None
        assert tcl["category"] == "tv"

    def test_unknown_category_is_empty(self, content_dir):
        """Test that an unknown category has no records."""
        assert ContentLoader(content_dir).load_category("geladeiras") == []

    def test_path_traversal_rejected(self, content_dir):
        """Test that category names cannot leave the content directory."""
        loader = ContentLoader(content_dir / "tv")
        assert loader.load_category("..") == []
        assert loader.load_category("../tv") == []

    def test_malformed_files_skipped(self, content_dir, caplog):
        """Test that unreadable files are logged and skipped."""
        (content_dir / "tv" / "broken.json").write_text("{not json", encoding="utf-8")
        (content_dir / "tv" / "list.json").write_text("[1, 2]", encoding="utf-8")
        records = ContentLoader(content_dir).load_category("tv")
        assert len(records) == 3
        assert any("broken.json" in r.getMessage() for r in caplog.records)

    def test_load_product(self, content_dir):
        """Test loading a single product."""
        product = ContentLoader(content_dir).load_product("fones", "sony-xm5")
        assert product["name"] == "Sony WH-1000XM5"
        assert product["slug"] == "sony-xm5"
        assert product["pros"] == ["Cancelamento de ruído"]

    def test_load_missing_product(self, content_dir):
        """Test that missing products give None."""
        loader = ContentLoader(content_dir)
        assert loader.load_product("fones", "nope") is None
        assert loader.load_product("nope", "sony-xm5") is None
        assert loader.load_product("fones", "../tv/lg-oled-c3") is None
