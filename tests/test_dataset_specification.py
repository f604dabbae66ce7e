import pytest

from dataspec.core.dataset import DatasetProperties, DatasetSpecification
from dataspec.core.errors import PropertyFormatError


def test_root_keeps_its_name():
    spec = DatasetSpecification.builder("R", "table").build()
    assert spec.name == "R"
    assert spec.type == "table"
    assert dict(spec.specifications) == {}


def test_property_lookup_and_default():
    spec = DatasetSpecification.builder("R", "table").property("k", "v").build()
    assert spec.get_property("k") == "v"
    assert spec.get_property("missing") is None
    assert spec.get_property("missing", "dflt") == "dflt"
    assert spec.get_property("k", "dflt") == "v"


def test_last_write_wins_for_properties():
    spec = (
        DatasetSpecification.builder("R", "table")
        .property("k", "v1")
        .property("k", "v2")
        .build()
    )
    assert spec.get_property("k") == "v2"


def test_bulk_properties_overwrite_entry_by_entry():
    spec = (
        DatasetSpecification.builder("R", "table")
        .property("a", "1")
        .properties({"a": "2", "b": "3"})
        .build()
    )
    assert dict(spec.properties) == {"a": "2", "b": "3"}


def test_properties_iterate_in_key_order():
    a = DatasetSpecification.builder("R", "t").properties({"k1": "v1", "k2": "v2"}).build()
    b = DatasetSpecification.builder("R", "t").properties({"k2": "v2", "k1": "v1"}).build()
    assert a == b
    assert hash(a) == hash(b)
    assert list(a.properties) == ["k1", "k2"]
    assert list(b.properties) == ["k1", "k2"]


def test_int_and_long_properties():
    spec = (
        DatasetSpecification.builder("R", "t")
        .property("n", "42")
        .property("neg", "-7")
        .property("big", "9000000000")
        .property("bad", "xx")
        .build()
    )
    assert spec.get_int_property("n", 0) == 42
    assert spec.get_int_property("neg", 0) == -7
    assert spec.get_long_property("big", 0) == 9000000000
    assert spec.get_int_property("missing", 7) == 7
    assert spec.get_long_property("missing", 7) == 7

    with pytest.raises(PropertyFormatError):
        spec.get_int_property("bad", 7)
    with pytest.raises(ValueError):
        spec.get_long_property("bad", 7)


def test_int_property_rejects_out_of_range_and_non_decimal():
    spec = (
        DatasetSpecification.builder("R", "t")
        .property("big", "9000000000")
        .property("hex", "0x10")
        .property("spaced", " 5")
        .property("trailing_newline", "12\n")
        .build()
    )
    with pytest.raises(PropertyFormatError) as ei:
        spec.get_int_property("big", 0)
    assert ei.value.key == "big"
    assert ei.value.raw == "9000000000"
    with pytest.raises(PropertyFormatError):
        spec.get_long_property("hex", 0)
    with pytest.raises(PropertyFormatError):
        spec.get_int_property("spaced", 0)
    with pytest.raises(PropertyFormatError):
        spec.get_int_property("trailing_newline", 0)
    with pytest.raises(PropertyFormatError):
        spec.get_long_property("trailing_newline", 0)


def test_bad_numeric_property_does_not_affect_other_accessors():
    spec = DatasetSpecification.builder("R", "t").property("bad", "xx").property("ok", "1").build()
    with pytest.raises(PropertyFormatError):
        spec.get_int_property("bad", 0)
    assert spec.get_int_property("ok", 0) == 1
    assert spec.get_property("bad") == "xx"


def test_spec_is_immutable():
    spec = DatasetSpecification.builder("R", "t").property("k", "v").build()
    with pytest.raises(AttributeError):
        spec.name = "other"
    with pytest.raises(TypeError):
        spec.properties["k"] = "changed"
    with pytest.raises(TypeError):
        spec.specifications["x"] = spec


def test_original_properties_absent_by_default(indexed_table):
    assert indexed_table.original_properties is None
    for child in indexed_table.specifications.values():
        assert child.original_properties is None


def test_set_original_properties_returns_new_spec(indexed_table):
    updated = indexed_table.set_original_properties(DatasetProperties.of({"columnsToIndex": "customer_id"}))
    assert updated is not indexed_table
    assert indexed_table.original_properties is None
    assert dict(updated.original_properties) == {"columnsToIndex": "customer_id"}
    assert updated.name == indexed_table.name
    assert dict(updated.specifications) == dict(indexed_table.specifications)


def test_set_original_properties_accepts_plain_mapping(indexed_table):
    updated = indexed_table.set_original_properties({"b": "2", "a": "1"})
    assert list(updated.original_properties) == ["a", "b"]


def test_equality_ignores_original_properties(indexed_table):
    a = indexed_table.set_original_properties({"x": "1"})
    b = indexed_table.set_original_properties({"y": "2"})
    assert a == b
    assert a == indexed_table
    assert hash(a) == hash(indexed_table)


def test_equality_is_structural_over_the_tree():
    def make(ttl):
        d = DatasetSpecification.builder("d", "table").property("ttl", ttl).build()
        return DatasetSpecification.builder("R", "composite").datasets(d).build()

    assert make("1") == make("1")
    assert make("1") != make("2")
    assert make("1") != "R"


def test_type_difference_breaks_equality():
    assert DatasetSpecification.builder("R", "a").build() != DatasetSpecification.builder("R", "b").build()


def test_get_specification_is_direct_child_lookup(indexed_table):
    assert indexed_table.get_specification("orders.d").type == "table"
    assert indexed_table.get_specification("orders.i") is not None
    assert indexed_table.get_specification("missing") is None


def test_builder_accepts_collection_of_specs():
    children = [DatasetSpecification.builder(n, "table").build() for n in ("b", "a")]
    spec = DatasetSpecification.builder("R", "composite").datasets(children).build()
    assert list(spec.specifications) == ["R.a", "R.b"]


def test_builder_last_write_wins_for_embedded_names():
    first = DatasetSpecification.builder("d", "table").property("v", "1").build()
    second = DatasetSpecification.builder("d", "table").property("v", "2").build()
    spec = DatasetSpecification.builder("R", "composite").datasets(first).datasets(second).build()
    assert len(spec.specifications) == 1
    assert spec.get_specification("R.d").get_property("v") == "2"


def test_builder_can_be_reused():
    builder = DatasetSpecification.builder("R", "t").property("a", "1")
    first = builder.build()
    second = builder.property("b", "2").build()
    assert dict(first.properties) == {"a": "1"}
    assert dict(second.properties) == {"a": "1", "b": "2"}


def test_repr_is_ordered():
    spec = DatasetSpecification.builder("R", "t").properties({"b": "2", "a": "1"}).build()
    assert "properties={'a': '1', 'b': '2'}" in repr(spec)
