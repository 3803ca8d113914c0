"""Layout of instance fields: backing names, offset asserts and explicit-layout unions."""

from __future__ import annotations

import dataclasses
from collections.abc import Collection, Iterable, Sequence

from cordlgen.members import CppFieldDecl, CppStaticAssert
from cordlgen.methods import CppNestedStruct, CppNestedUnion

CORDL_ACCESSOR_FIELD_PREFIX = "___"

_NO_OFFSET = 0xFFFFFFFF


def fixup_backing_field(fieldname: str) -> str:
    """Name of the storage field that sits behind a generated accessor property."""
    return f"{CORDL_ACCESSOR_FIELD_PREFIX}{fieldname}"


def accessor_method_names(cpp_name: str) -> tuple[str, str]:
    """Getter and setter names for a field exposed as a property."""
    return (
        f"__cordl_internal_get_{cpp_name}",
        f"__cordl_internal_set_{cpp_name}",
    )


def field_into_offset_structs(
    min_offset: int, field: CppFieldDecl
) -> tuple[CppNestedStruct, CppNestedStruct]:
    """Split a field into a packed struct and an aligned struct, both padded to its offset.

    Each field of an explicitly laid out type becomes two structs inside a union:
    one packed to 1 byte and one laid out as the parent demands, for alignment.
    """
    if field.offset is None:
        raise ValueError(
            f"field {field.cpp_name!r} has no offset; only instance fields can be packed"
        )

    padding = field.offset

    packed_padding_field = CppFieldDecl(
        cpp_name=f"{field.cpp_name}_padding[0x{padding:x}]",
        field_ty="uint8_t",
        offset=field.offset,
        instance=True,
        readonly=False,
        const_expr=False,
        value=None,
        brief_comment=f"Padding field 0x{padding:x}",
        is_private=False,
    )

    alignment_padding_field = CppFieldDecl(
        cpp_name=f"{field.cpp_name}_padding_forAlignment[0x{padding:x}]",
        field_ty="uint8_t",
        offset=field.offset,
        instance=True,
        readonly=False,
        const_expr=False,
        value=None,
        brief_comment=f"Padding field 0x{padding:x} for alignment",
        is_private=False,
    )

    alignment_field = dataclasses.replace(
        field, cpp_name=f"{field.cpp_name}_forAlignment", is_private=False
    )
    packed_field = dataclasses.replace(field, is_private=False)

    packed_struct = CppNestedStruct(
        declaring_name="",
        declarations=(packed_padding_field, packed_field),
        base_type=None,
        is_enum=False,
        is_class=False,
        is_private=False,
        brief_comment=None,
        packing=1,
    )

    alignment_struct = CppNestedStruct(
        declaring_name="",
        declarations=(alignment_padding_field, alignment_field),
        base_type=None,
        is_enum=False,
        is_class=False,
        is_private=False,
        brief_comment=None,
        packing=None,
    )

    return packed_struct, alignment_struct


def pack_fields_into_single_union(fields: Sequence[CppFieldDecl]) -> CppNestedUnion:
    """Place every field of an explicitly laid out type into one private union."""
    offsets = []
    for f in fields:
        if f.offset is None:
            raise ValueError(f"field {f.cpp_name!r} has no offset")
        offsets.append(f.offset)
    min_offset = min(offsets, default=0)

    declarations = [
        struct
        for f in fields
        for struct in field_into_offset_structs(min_offset, f)
    ]

    return CppNestedUnion(
        declarations=tuple(declarations),
        brief_comment="Explicitly laid out type with union based offsets",
        offset=min_offset,
        is_private=True,
    )


def field_offset_asserts(
    cpp_name: str, fields: Iterable[CppFieldDecl]
) -> list[CppStaticAssert]:
    """Static asserts checking each field sits at its recorded offset."""
    return [
        CppStaticAssert(
            condition=(
                f"offsetof({cpp_name}, {f.cpp_name}) == "
                f"0x{(f.offset if f.offset is not None else _NO_OFFSET):x}"
            ),
            message="Offset mismatch!",
        )
        for f in fields
    ]


def rename_shadowed_fields(
    fields: Iterable[CppFieldDecl], property_names: Collection[str]
) -> list[CppFieldDecl]:
    """Prefix and hide fields whose names clash with a declared property."""
    return [
        dataclasses.replace(f, cpp_name=f"_cordl_{f.cpp_name}", is_private=True)
        if f.cpp_name in property_names
        else f
        for f in fields
    ]


def instance_field_members(
    cpp_name: str,
    fields: Iterable[CppFieldDecl],
    property_names: Collection[str],
    explicit_layout: bool,
    is_template: bool,
) -> tuple[list, list[CppStaticAssert]]:
    """Member and non-member declarations for a type's instance fields.

    Only fields with an offset that are instance fields are kept. Explicitly laid
    out types get a single union; others get plain fields plus offset asserts,
    which are left out for templates.
    """
    instance_fields = [f for f in fields if f.offset is not None and f.instance]
    resulting = rename_shadowed_fields(instance_fields, property_names)

    if explicit_layout:
        return [pack_fields_into_single_union(resulting)], []

    asserts = [] if is_template else field_offset_asserts(cpp_name, resulting)
    return list(resulting), asserts