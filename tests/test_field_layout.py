import pytest

from cordlgen.field_layout import (
    CORDL_ACCESSOR_FIELD_PREFIX,
    accessor_method_names,
    field_into_offset_structs,
    field_offset_asserts,
    fixup_backing_field,
    instance_field_members,
    pack_fields_into_single_union,
    rename_shadowed_fields,
)
from cordlgen.members import CppFieldDecl, CppStaticAssert
from cordlgen.methods import CppNestedStruct, CppNestedUnion


def _field(name, offset=8, instance=True, private=False):
    return CppFieldDecl(
        cpp_name=name,
        field_ty="int32_t",
        offset=offset,
        instance=instance,
        is_private=private,
    )


def test_fixup_backing_field_prefixes():
    result = fixup_backing_field("value")
    assert result == CORDL_ACCESSOR_FIELD_PREFIX + "value"
    assert result.endswith("value")


def test_accessor_method_names():
    getter, setter = accessor_method_names("count")
    assert getter == "__cordl_internal_get_count"
    assert setter == "__cordl_internal_set_count"


def test_offset_structs_shape():
    field = _field("x", offset=0x10, private=True)
    packed, aligned = field_into_offset_structs(0, field)
    assert packed.packing == 1
    assert aligned.packing is None
    pad, packed_field = packed.declarations
    assert pad.cpp_name == "x_padding[0x10]"
    assert pad.field_ty == "uint8_t"
    assert pad.offset == 0x10
    assert packed_field.cpp_name == "x"
    assert packed_field.is_private is False
    align_pad, align_field = aligned.declarations
    assert align_pad.cpp_name.startswith("x_padding_forAlignment[")
    assert align_field.cpp_name == "x_forAlignment"
    assert align_field.field_ty == field.field_ty


def test_offset_structs_require_offset():
    with pytest.raises(ValueError):
        field_into_offset_structs(0, _field("x", offset=None))


def test_pack_into_union():
    fields = [_field("a", offset=24), _field("b", offset=16)]
    union = pack_fields_into_single_union(fields)
    assert isinstance(union, CppNestedUnion)
    assert union.offset == 16
    assert union.is_private is True
    assert union.brief_comment == "Explicitly laid out type with union based offsets"
    assert len(union.declarations) == 2 * len(fields)
    assert all(isinstance(s, CppNestedStruct) for s in union.declarations)


def test_pack_empty_union_has_zero_offset():
    union = pack_fields_into_single_union([])
    assert union.offset == 0
    assert union.declarations == ()


def test_pack_rejects_missing_offset():
    with pytest.raises(ValueError):
        pack_fields_into_single_union([_field("a", offset=None)])


def test_offset_asserts():
    asserts = field_offset_asserts("::Ns::T", [_field("a", offset=255)])
    assert asserts == [
        CppStaticAssert(
            condition="offsetof(::Ns::T, a) == 0xff", message="Offset mismatch!"
        )
    ]


def test_rename_shadowed_fields():
    fields = [_field("a"), _field("b")]
    result = rename_shadowed_fields(fields, {"a"})
    assert result[0].cpp_name == "_cordl_a"
    assert result[0].is_private is True
    assert result[1] == fields[1]


def test_instance_members_plain_layout():
    fields = [_field("a", offset=16), _field("s", instance=False), _field("n", offset=None)]
    members, asserts = instance_field_members("::T", fields, set(), False, False)
    assert [m.cpp_name for m in members] == ["a"]
    assert len(asserts) == 1
    assert "offsetof(::T, a)" in asserts[0].condition


def test_instance_members_template_skips_asserts():
    members, asserts = instance_field_members("::T", [_field("a")], set(), False, True)
    assert len(members) == 1
    assert asserts == []


def test_instance_members_explicit_layout_renames_inside_union():
    members, asserts = instance_field_members(
        "::T", [_field("a", offset=8)], {"a"}, True, False
    )
    assert asserts == []
    assert len(members) == 1
    union = members[0]
    assert isinstance(union, CppNestedUnion)
    assert union.offset == 8
    packed_field = union.declarations[0].declarations[1]
    assert packed_field.cpp_name == "_cordl_a"
    assert packed_field.is_private is False