"""Tests for the jsonshape comparison engine."""

import pytest
from jsonshape import (
    ShapeEngine,
    ShapeConfig,
    ComparisonMode,
    Signature,
    ValueKind,
    UNDEFINED,
    extract_signatures,
    reconcile,
    render_report,
    have_same_schema,
    contains_schema_of,
    InvalidArgumentError,
    UnsupportedValueKindError,
    JsonDocument,
)
from jsonshape.utils import normalize_array_indices


def sig(path, kind):
    return Signature(path, ValueKind(kind) if kind else None)


class TestExtraction:
    """Test flattening of JSON values into signatures."""

    def test_breadth_first_order(self):
        """Test that signatures come out level by level, containers included."""
        doc = {"a": 1, "b": {"c": "x"}, "d": [1, {"e": None}]}

        result = [str(s) for s in extract_signatures(doc)]
        assert result == [
            "$-object",
            "$.a-number",
            "$.b-object",
            "$.d-array",
            "$.b.c-string",
            "$.d[0]-number",
            "$.d[1]-object",
            "$.d[1].e-null",
        ]

    def test_root_array_paths(self):
        """Test that root array elements are addressed as $.[i]."""
        result = list(extract_signatures([1, "x", True]))
        assert result == [
            sig("$", "array"),
            sig("$.[0]", "number"),
            sig("$.[1]", "string"),
            sig("$.[2]", "boolean"),
        ]

    def test_root_scalars_and_empty_containers(self):
        """Test that every root value is reported at $."""
        assert list(extract_signatures(5)) == [sig("$", "number")]
        assert list(extract_signatures([])) == [sig("$", "array")]
        assert list(extract_signatures({})) == [sig("$", "object")]

    def test_nested_arrays(self):
        """Test arrays of arrays."""
        result = [str(s) for s in extract_signatures({"m": [[1]]})]
        assert result == ["$-object", "$.m-array", "$.m[0]-array", "$.m[0][0]-number"]

    def test_date_refinement(self):
        """Test that date strings are tagged as dates."""
        result = list(extract_signatures({"d": "2024-01-01T00:00:00Z"}))
        assert sig("$.d", "date") in result
        assert sig("$.d", "string") not in result

    def test_date_formats(self):
        """Test the date refinement on common date spellings."""
        doc = {
            "iso_date": "2024-01-01",
            "iso_offset": "2024-01-01T10:20:30+02:00",
            "fraction": "2024-01-01T10:20:30.123Z",
            "us": "12/31/2024",
            "plain": "hello",
            "number_text": "42",
            "empty": "",
        }
        kinds = {s.path: s.kind for s in extract_signatures(doc)}
        assert kinds["$.iso_date"] == ValueKind.DATE
        assert kinds["$.iso_offset"] == ValueKind.DATE
        assert kinds["$.fraction"] == ValueKind.DATE
        assert kinds["$.us"] == ValueKind.DATE
        assert kinds["$.plain"] == ValueKind.STRING
        assert kinds["$.number_text"] == ValueKind.STRING
        assert kinds["$.empty"] == ValueKind.STRING

    def test_compact_iso_dates(self):
        """Test ISO 8601 basic-format dates without separators."""
        doc = {"day": "20240101", "stamp": "20240101T102030"}
        kinds = {s.path: s.kind for s in extract_signatures(doc)}
        assert kinds["$.day"] == ValueKind.DATE
        assert kinds["$.stamp"] == ValueKind.DATE

    def test_custom_date_formats(self):
        """Test that configured date formats are honoured."""
        config = ShapeConfig(date_formats=("%d.%m.%Y",))
        result = list(extract_signatures({"d": "31.12.2024"}, config))
        assert sig("$.d", "date") in result

    def test_scalar_kinds(self):
        """Test number, boolean, null and undefined kinds."""
        doc = {"i": 1, "f": 1.5, "t": True, "n": None, "u": UNDEFINED}
        kinds = {s.path: s.kind for s in extract_signatures(doc)}
        assert kinds["$.i"] == ValueKind.NUMBER
        assert kinds["$.f"] == ValueKind.NUMBER
        assert kinds["$.t"] == ValueKind.BOOLEAN
        assert kinds["$.n"] == ValueKind.NULL
        assert kinds["$.u"] == ValueKind.UNDEFINED

    def test_unsupported_value(self):
        """Test that non-JSON values are rejected with their path."""
        with pytest.raises(UnsupportedValueKindError) as exc_info:
            list(extract_signatures({"a": {"b": {1, 2}}}))
        assert exc_info.value.path == "$.a.b"
        assert exc_info.value.value_type == "set"

    def test_input_not_mutated(self):
        """Test that extraction leaves the document untouched."""
        doc = {"a": [1, {"b": None}]}
        list(extract_signatures(doc))
        assert doc == {"a": [1, {"b": None}]}


class TestSignature:
    """Test the signature record and its string form."""

    def test_string_form(self):
        """Test rendering of concrete and coarsened signatures."""
        assert str(sig("$.a", "number")) == "$.a-number"
        assert str(sig("$.a", None)) == "$.a"

    def test_parse_splits_on_last_dash(self):
        """Test that dashes in member names survive parsing."""
        assert Signature.parse("$.foo-bar-number") == sig("$.foo-bar", "number")
        assert Signature.parse("$.a") == sig("$.a", None)
        assert Signature.parse("$.foo-bar") == sig("$.foo-bar", None)


class TestReconciliation:
    """Test null/undefined reconciliation."""

    def test_null_against_value(self):
        """Test that null on one side is coarsened on both."""
        actual, expected = reconcile(
            [sig("$", "object"), sig("$.a", "number")],
            [sig("$", "object"), sig("$.a", "null")],
        )
        assert actual == [sig("$", "object"), sig("$.a", None)]
        assert expected == [sig("$", "object"), sig("$.a", None)]

    def test_unknown_without_counterpart_is_kept(self):
        """Test that a null path absent from the other side stays typed."""
        actual, expected = reconcile(
            [sig("$", "object"), sig("$.a", "null")],
            [sig("$", "object")],
        )
        assert actual == [sig("$", "object"), sig("$.a", "null")]
        assert expected == [sig("$", "object")]

    def test_both_unknown(self):
        """Test that null and undefined on both sides collapse together."""
        actual, expected = reconcile([sig("$.a", "null")], [sig("$.a", "undefined")])
        assert actual == expected == [sig("$.a", None)]

    def test_prefix_paths_are_not_confused(self):
        """Test that a member named 'a-b' is not mistaken for path 'a'."""
        actual, expected = reconcile([sig("$.a", "null")], [sig("$.a-b", "number")])
        assert actual == [sig("$.a", "null")]
        assert expected == [sig("$.a-b", "number")]


class TestSameSchema:
    """Test have_same_schema comparisons."""

    def setup_method(self):
        self.engine = ShapeEngine()

    def test_identical_shapes(self):
        """Test that a document matches itself."""
        doc = {"id": 1, "tags": ["a"], "owner": {"name": "x", "since": "2024-01-01"}}

        result = self.engine.have_same_schema(doc, doc)
        assert result.matched is True
        assert result.message == ""

    def test_different_values_same_shape(self):
        """Test that values do not matter, only kinds."""
        result = self.engine.have_same_schema({"a": 1, "b": "x"}, {"a": 2, "b": "y"})
        assert result.matched is True

    def test_null_tolerance(self):
        """Test that null matches a present value of any kind."""
        assert self.engine.have_same_schema({"a": 1}, {"a": None}).matched is True
        assert self.engine.have_same_schema({"a": None}, {"a": "x"}).matched is True
        assert self.engine.have_same_schema({"a": None}, {"a": None}).matched is True

    def test_undefined_tolerance(self):
        """Test that undefined behaves like null."""
        result = self.engine.have_same_schema({"a": UNDEFINED}, {"a": [1]})
        assert result.matched is True

    def test_null_does_not_hide_children(self):
        """Test that members under an object still count when the other side is null."""
        result = self.engine.have_same_schema({"a": None}, {"a": {"b": 1}})
        assert result.matched is False
        assert result.only_in_expected == [sig("$.a.b", "number")]

    def test_null_against_absent_member(self):
        """Test that a null member does not match a missing member."""
        result = self.engine.have_same_schema({"a": None}, {})
        assert result.matched is False
        assert result.only_in_actual == [sig("$.a", "null")]

    def test_kind_mismatch(self):
        """Test that differing kinds are reported on both sides."""
        result = self.engine.have_same_schema({"a": 1}, {"a": "x"})
        assert result.matched is False
        assert result.only_in_actual == [sig("$.a", "number")]
        assert result.only_in_expected == [sig("$.a", "string")]
        assert "Path: $.a, Type:number" in result.message
        assert "Path: $.a, Type:string" in result.message

    def test_date_against_string(self):
        """Test that a date string and a plain string differ."""
        result = self.engine.have_same_schema({"d": "2024-01-01"}, {"d": "soon"})
        assert result.matched is False

    def test_key_order_irrelevant(self):
        """Test that member order does not matter."""
        result = self.engine.have_same_schema({"a": 1, "b": 2}, {"b": 2, "a": 1})
        assert result.matched is True

    def test_dashed_member_name(self):
        """Test that member names with dashes are reported intact."""
        result = self.engine.have_same_schema({"foo-bar": 1}, {"foo-bar": "x"})
        assert result.only_in_actual[0].path == "$.foo-bar"
        assert result.only_in_actual[0].kind == ValueKind.NUMBER
        assert "Path: $.foo-bar, Type:number" in result.message

    def test_array_length_matters(self):
        """Test that element positions are compared in same-schema mode."""
        result = self.engine.have_same_schema([{"a": 1}], [{"a": 1}, {"a": 2}])
        assert result.matched is False
        assert result.only_in_actual == []
        assert result.only_in_expected == [sig("$.[1]", "object"), sig("$.[1].a", "number")]

    def test_children_reported_under_container(self):
        """Test that a container mismatch also reports its members."""
        result = self.engine.have_same_schema({"a": [1, 2]}, {"a": "x"})
        assert result.only_in_actual == [
            sig("$.a", "array"), sig("$.a[0]", "number"), sig("$.a[1]", "number")
        ]

    def test_missing_document(self):
        """Test that a missing document is rejected before extraction."""
        with pytest.raises(InvalidArgumentError):
            self.engine.have_same_schema(None, {"a": 1})
        with pytest.raises(InvalidArgumentError):
            have_same_schema({"a": 1}, None)

    def test_null_root_document(self):
        """Test that a wrapped null root is compared rather than rejected."""
        assert list(extract_signatures(None)) == [sig("$", "null")]
        assert self.engine.have_same_schema(JsonDocument(None), JsonDocument(None)).matched
        assert self.engine.have_same_schema(JsonDocument(None), 1).matched
        assert self.engine.have_same_schema({"a": 1}, JsonDocument({"a": 2})).matched

    def test_result_to_dict(self):
        """Test serialization of a comparison result."""
        result = self.engine.have_same_schema({"a": 1}, {"a": "x"})
        data = result.to_dict()
        assert data["matched"] is False
        assert data["mode"] == "same"
        assert data["only_in_actual"] == [{"path": "$.a", "type": "number"}]
        assert data["only_in_expected"] == [{"path": "$.a", "type": "string"}]


class TestContainsSchema:
    """Test contains_schema_of comparisons."""

    def setup_method(self):
        self.engine = ShapeEngine()

    def test_array_count_ignored(self):
        """Test that element counts do not matter."""
        result = self.engine.contains_schema_of([{"a": 1}], [{"a": 1}, {"a": 2}])
        assert result.matched is True

    def test_elements_cover_shape_collectively(self):
        """Test that elements together may cover the expected element shape."""
        actual = {"items": [{"a": 1}, {"b": "x"}]}
        expected = {"items": [{"a": 2, "b": "y"}]}

        result = self.engine.contains_schema_of(actual, expected)
        assert result.matched is True

    def test_wildcard_paths_in_report(self):
        """Test that differences are reported with the item wildcard."""
        result = self.engine.contains_schema_of(
            {"items": [{"a": 1}]},
            [{"a": 1}],
        )
        assert sig("$.items.[item].a", "number") in result.only_in_actual
        assert sig("$.[item].a", "number") in result.only_in_expected

    def test_index_normalization(self):
        """Test wildcard rewriting of root, nested and repeated indices."""
        assert normalize_array_indices("$.[0]") == "$.[item]"
        assert normalize_array_indices("$.[0][1]") == "$.[item].[item]"
        assert normalize_array_indices("$.tags[3]") == "$.tags.[item]"
        assert normalize_array_indices("$.[2].tags[10].a") == "$.[item].tags.[item].a"

    def test_member_named_like_an_index(self):
        """Test that a member literally named "[0]" is not an array element."""
        assert normalize_array_indices("$.a.[0]") == "$.a..[item]"

        result = self.engine.contains_schema_of({"a": {"[0]": 1}}, {"a": [1]})
        assert result.matched is False
        assert sig("$.a..[item]", "number") in result.only_in_actual
        assert sig("$.a.[item]", "number") in result.only_in_expected

    def test_differences_are_deduplicated(self):
        """Test that normalized element paths are reported once."""
        result = self.engine.contains_schema_of({"a": [1, 2]}, {"a": "x"})
        assert result.only_in_actual == [sig("$.a", "array"), sig("$.a.[item]", "number")]
        assert result.only_in_expected == [sig("$.a", "string")]

    def test_extra_structure_fails(self):
        """Test that extra members in actual are still reported."""
        result = self.engine.contains_schema_of({"a": 1, "b": 2}, {"a": 1})
        assert result.matched is False
        assert result.only_in_actual == [sig("$.b", "number")]
        assert result.only_in_expected == []

    def test_missing_structure_fails(self):
        """Test that missing members are reported."""
        result = self.engine.contains_schema_of({"a": 1}, {"a": 1, "b": 2})
        assert result.matched is False
        assert result.only_in_expected == [sig("$.b", "number")]

    def test_null_reconciled_before_normalization(self):
        """Test that nulls inside array elements are tolerated."""
        result = self.engine.contains_schema_of(
            {"items": [{"a": None}]},
            {"items": [{"a": 1}]},
        )
        assert result.matched is True

    def test_additional_props_ignored(self):
        """Test that additionalProp placeholders are dropped when asked."""
        actual = {"name": "x", "meta": {"additionalProp1": {"k": 1}}}
        expected = {"name": "y", "meta": {"additionalProp2": "z"}}

        assert self.engine.contains_schema_of(actual, expected, True).matched is True

        result = self.engine.contains_schema_of(actual, expected, False)
        assert result.matched is False
        assert sig("$.meta.additionalProp1", "object") in result.only_in_actual
        assert sig("$.meta.additionalProp2", "string") in result.only_in_expected

    def test_additional_props_on_one_side(self):
        """Test that a placeholder present on only one side is excluded."""
        result = contains_schema_of({"a": 1, "additionalProp1": "x"}, {"a": 2}, True)
        assert result.matched is True

    def test_config_default_and_marker(self):
        """Test the ignore flag default and the marker from config."""
        engine = ShapeEngine(ShapeConfig(ignore_additional_props=True, additional_prop_marker="x-"))
        result = engine.contains_schema_of({"a": 1, "x-trace": "t"}, {"a": 2})
        assert result.matched is True

    def test_same_mode_ignores_flag(self):
        """Test that placeholder filtering only applies to contains mode."""
        result = self.engine.compare(
            {"a": 1, "additionalProp1": "x"},
            {"a": 2},
            mode=ComparisonMode.SAME,
            ignore_additional_props=True,
        )
        assert result.matched is False


class TestReport:
    """Test the rendered difference report."""

    def test_both_sections(self):
        """Test a report with actual and expected sections."""
        report = render_report([sig("$.a", "number")], [sig("$.a", "string")])
        assert report == (
            "The inputs do not match, the differences are as follows:\n"
            "\n"
            "Actual:\n"
            "Path: $.a, Type:number\n"
            "\n"
            "Expected:\n"
            "Path: $.a, Type:string\n"
        )

    def test_expected_only(self):
        """Test that an empty actual section is omitted."""
        report = render_report([], [sig("$.b", "boolean")])
        assert report == (
            "The inputs do not match, the differences are as follows:\n"
            "\n"
            "Expected:\n"
            "Path: $.b, Type:boolean\n"
        )
        assert "Actual:" not in report

    def test_no_differences(self):
        """Test that no differences render as an empty string."""
        assert render_report([], []) == ""
