import pytest

from cordlgen.name_components import NameComponents


@pytest.fixture
def full():
    return NameComponents(
        namespace="System.Collections",
        declaring_types=["Outer"],
        name="Inner",
        generics=["T", "U"],
    )


def test_from_name_only_sets_name():
    comps = NameComponents.from_name("Foo")
    assert comps == NameComponents(name="Foo")
    assert comps.namespace is None
    assert comps.generics is None


def test_combine_all_full(full):
    assert full.combine_all() == "System.Collections.Outer/Inner<T,U>"


def test_combine_all_name_only():
    assert NameComponents.from_name("Foo").combine_all() == "Foo"


def test_lists_are_stored_as_tuples(full):
    assert full.declaring_types == ("Outer",)
    assert full.generics == ("T", "U")


def test_into_ref_generics_replaces_each(full):
    ref = full.into_ref_generics()
    assert ref.generics == ("void*", "void*")
    assert ref.name == full.name
    assert ref.namespace == full.namespace


def test_into_ref_generics_without_generics():
    comps = NameComponents.from_name("Foo")
    assert comps.into_ref_generics().generics is None


def test_remove_generics(full):
    removed = full.remove_generics()
    assert removed.generics is None
    assert removed.declaring_types == full.declaring_types
    assert full.generics == ("T", "U")


def test_remove_namespace(full):
    removed = full.remove_namespace()
    assert removed.namespace is None
    assert removed.combine_all() == "Outer/Inner<T,U>"


def test_formatted_name(full):
    assert full.formatted_name(True) == "Inner<T,U>"
    assert full.formatted_name(False) == "Inner"
    assert NameComponents.from_name("Bar").formatted_name(True) == "Bar"


def test_ordering_none_first():
    without = NameComponents(name="Z")
    with_ns = NameComponents(namespace="A", name="A")
    assert sorted([with_ns, without]) == [without, with_ns]


def test_hash_matches_equality(full):
    same = NameComponents(
        namespace="System.Collections",
        declaring_types=("Outer",),
        name="Inner",
        generics=("T", "U"),
    )
    assert len({full, same}) == 1