from dataspec.core.dataset import DatasetSpecification


def test_leaf_only_spec_matches_its_own_name():
    spec = DatasetSpecification.builder("X", "table").build()
    assert spec.is_parent("X") is True
    assert spec.is_parent(None) is False
    assert spec.is_parent("Y") is False


def test_embedded_leaves_are_members(indexed_table):
    assert indexed_table.is_parent("orders.d") is True
    assert indexed_table.is_parent("orders.i") is True


def test_composite_root_name_is_not_a_member(indexed_table):
    assert indexed_table.is_parent("orders") is False


def test_unrelated_name_is_not_a_member(indexed_table):
    assert indexed_table.is_parent("customers.d") is False
    assert indexed_table.is_parent("orders.x") is False


def test_prefix_check_is_a_plain_string_prefix():
    # "ordersArchive" starts with "orders", so the composite is searched and the
    # leaf comparison decides. A leaf named like the probe would match.
    archive = DatasetSpecification.builder("Archive", "table").build()
    spec = DatasetSpecification.builder("orders", "composite").datasets(archive).build()
    assert spec.is_parent("ordersArchive") is False
    assert spec.is_parent("orders.Archive") is True


def test_nested_leaf_needs_intermediate_name_as_prefix():
    b = DatasetSpecification.builder("B", "table").build()
    a = DatasetSpecification.builder("A", "composite").datasets(b).build()
    r = DatasetSpecification.builder("R", "composite").datasets(a).build()
    # The leaf is named R.B but sits under R.A; "R.B" does not start with
    # "R.A", so the intermediate composite is never searched.
    assert r.is_parent("R.B") is False
    assert r.is_parent("R.A") is False


def test_empty_named_leaf_matches_root_name():
    leaf = DatasetSpecification.builder("", "table").build()
    spec = DatasetSpecification.builder("R", "composite").datasets(leaf).build()
    assert spec.is_parent("R") is True
