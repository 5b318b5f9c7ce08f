"""Tests for filter derivation."""

from comparador.filters import derive_filters
from comparador.models import MultiselectFilter, RangeFilter, SelectFilter
from comparador.presenter import FieldPresenter
from comparador.schema import infer_schema


def _derive(records, **kwargs):
    return derive_filters(records, infer_schema(records), **kwargs)


class TestRangeFilters:
    """Numeric fields become range filters."""

    def test_price_range_ignores_missing_price(self):
        """Test that a missing price does not widen the range."""
        records = [
            {"name": "A", "price": 1000},
            {"name": "B", "price": 1500},
            {"name": "C", "price": 2000},
            {"name": "D"},
        ]
        spec = _derive(records)["price"]
        assert isinstance(spec, RangeFilter)
        assert spec.min == 1000
        assert spec.max == 2000

    def test_price_uses_coarse_step(self, tv_records):
        """Test that price ranges step by 50."""
        assert _derive(tv_records)["price"].step == 50

    def test_other_numeric_fields_use_unit_step_and_suffix(self, tv_records):
        """Test step and suffix of a plain numeric field."""
        spec = _derive(tv_records)["screen_size"]
        assert spec.step == 1
        assert spec.suffix == '"'
        assert (spec.min, spec.max) == (43, 65)

    def test_malformed_values_excluded_from_bounds(self):
        """Test that text, NaN and bools are left out of the bounds."""
        records = [
            {"weight": 1.5},
            {"weight": "heavy"},
            {"weight": 0.8},
            {"weight": float("nan")},
            {"weight": True},
        ]
        spec = _derive(records)["weight"]
        assert isinstance(spec, RangeFilter)
        assert (spec.min, spec.max) == (0.8, 1.5)

    def test_numeric_field_with_many_values_is_still_a_range(self):
        """Test that numeric fields have no cardinality ceiling."""
        records = [{"hours": h} for h in range(20)]
        spec = _derive(records)["hours"]
        assert isinstance(spec, RangeFilter)
        assert (spec.min, spec.max) == (0, 19)

    def test_label_comes_from_presenter(self, tv_records):
        """Test that labels and suffixes come from the injected presenter."""
        presenter = FieldPresenter(labels={"screen_size": "Screen size"}, suffixes={})
        spec = _derive(tv_records, presenter=presenter)["screen_size"]
        assert spec.label == "Screen size"
        assert spec.suffix == ""


class TestSelectFilters:
    """Low-cardinality scalar fields become select filters."""

    def test_select_options_sorted(self, tv_records):
        """Test that select options are sorted."""
        spec = _derive(tv_records)["brand"]
        assert isinstance(spec, SelectFilter)
        assert spec.options == ["LG", "Samsung", "TCL"]

    def test_more_than_ten_values_gets_no_filter(self):
        """Test that eleven distinct values get no select."""
        records = [{"finish": f"finish-{i:02d}"} for i in range(11)]
        assert "finish" not in _derive(records)

    def test_exactly_ten_values_is_a_select(self):
        """Test that ten distinct values still get a select."""
        records = [{"finish": f"finish-{i}"} for i in range(10)]
        spec = _derive(records)["finish"]
        assert isinstance(spec, SelectFilter)
        assert len(spec.options) == 10

    def test_mixed_types_sorted_lexicographically(self):
        """Test that mixed options sort by their string form."""
        records = [{"size": "b"}, {"size": 10}, {"size": "a"}]
        assert _derive(records)["size"].options == [10, "a", "b"]

    def test_boolean_field(self):
        """Test that a bool field becomes a two-option select."""
        records = [{"hdr": True}, {"hdr": False}, {"hdr": True}]
        assert _derive(records)["hdr"].options == [False, True]


class TestMultiselectFilters:
    """Array fields become multiselect filters."""

    def test_options_are_union_of_elements(self, tv_records):
        """Test that options are the distinct array elements."""
        spec = _derive(tv_records)["connectivity"]
        assert isinstance(spec, MultiselectFilter)
        assert spec.options == ["AirPlay", "Bluetooth", "HDMI", "HDMI 2.1", "Wi-Fi"]

    def test_options_recomputed_from_records(self):
        """Test that options come from the records, not the schema."""
        records = [{"tags": ["a", "b"]}, {"tags": ["c"]}]
        schema = infer_schema(records)
        records.append({"tags": ["d"]})
        spec = derive_filters(records, schema)["tags"]
        assert spec.options == ["a", "b", "c", "d"]

    def test_scalar_values_in_array_field_ignored(self):
        """Test that scalar values in an array field add no options."""
        records = [{"tags": ["a", "b"]}, {"tags": "z"}]
        assert _derive(records)["tags"].options == ["a", "b"]


class TestSkippedFields:
    """Fields that never produce a filter."""

    def test_identity_fields_skipped(self, tv_records):
        """Test that identity fields get no filter."""
        filters = _derive(tv_records)
        for field in ("name", "slug", "image", "affiliate_link"):
            assert field not in filters

    def test_single_value_field_skipped(self, tv_records):
        """Test that a field with one value gets no filter."""
        assert "resolution" not in _derive(tv_records)

    def test_no_filter_has_unique_count_of_one_or_less(self, tv_records):
        """Test that every filter has at least two distinct values."""
        schema = infer_schema(tv_records)
        filters = derive_filters(tv_records, schema)
        for field in filters:
            assert schema[field].unique_count > 1

    def test_sparse_single_value_field_skipped(self):
        """Test that a field set on one record out of ten gets no filter."""
        records = [{"name": f"P{i}", "price": 100 * (i + 1)} for i in range(10)]
        records[7]["warranty_years"] = 2
        filters = _derive(records)
        assert "warranty_years" not in filters
        assert "price" in filters

    def test_high_cardinality_text_skipped(self):
        """Test that free text gets no filter."""
        records = [{"description": f"text {i}"} for i in range(30)]
        assert _derive(records) == {}

    def test_empty_records(self):
        """Test that no records give no filters."""
        assert derive_filters([], {}) == {}

    def test_to_dict_shapes(self, tv_records):
        """Test the serialized filter shapes."""
        filters = _derive(tv_records)
        assert filters["price"].to_dict() == {
            "type": "range",
            "label": "Preço",
            "min": 0,
            "max": 8999,
            "step": 50,
            "suffix": "",
        }
        assert filters["brand"].to_dict()["type"] == "select"
        assert filters["connectivity"].to_dict()["type"] == "multiselect"
