"""Accessor properties, getters and setters generated for managed fields."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from cordlgen.field_layout import accessor_method_names, fixup_backing_field
from cordlgen.members import (
    CppFieldDecl,
    CppFieldImpl,
    CppLine,
    CppParam,
    CppPropertyDecl,
    CppTemplate,
)
from cordlgen.methods import CppMethodDecl, CppMethodImpl

CORDL_METHOD_HELPER_NAMESPACE = "::cordl_internals"

_NO_OFFSET = 0xFFFFFFFF
_SETTER_VAR_NAME = "value"
_NULL_CHECK = "CORDL_FIELD_NULL_CHECK(static_cast<void const*>(this));"


@dataclass(frozen=True)
class FieldInfo:
    """A managed field as read from metadata."""

    name: str
    instance: bool = True
    is_const: bool = False
    readonly: bool = False
    offset: int | None = None
    size: int = 0
    value: str | None = None
    brief_comment: str | None = None


def _useful_template(template: CppTemplate | None) -> CppTemplate | None:
    """A template only if it names any parameters."""
    if template is None or not template.names:
        return None
    return template


def _offset_of(field: FieldInfo) -> int:
    return field.offset if field.offset is not None else _NO_OFFSET


def _debug_str(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _impl_from(
    decl: CppMethodDecl,
    body: tuple,
    declaring_cpp_name: str,
    template: CppTemplate | None,
) -> CppMethodImpl:
    return dataclasses.replace(
        CppMethodImpl.from_decl(decl),
        body=body,
        declaring_cpp_full_name=declaring_cpp_name,
        template=template,
    )


def property_decl_from_field(field: FieldInfo, cpp_field: CppFieldDecl) -> CppPropertyDecl:
    """A ``__declspec(property)`` exposing an instance field through accessors."""
    if not field.instance:
        raise ValueError("Can't turn static fields into declspec properties!")

    getter_name, setter_name = accessor_method_names(cpp_field.cpp_name)
    return CppPropertyDecl(
        cpp_name=cpp_field.cpp_name,
        prop_ty=cpp_field.field_ty,
        instance=field.instance,
        getter=getter_name,
        setter=setter_name,
        indexable=False,
        brief_comment=(
            f"Field {field.name}, offset 0x{_offset_of(field):x}, "
            f"size 0x{field.size:x} "
        ),
    )


def accessor_methods(
    field: FieldInfo,
    cpp_field: CppFieldDecl,
    declaring_cpp_name: str,
    declaring_is_ref: bool,
    field_is_valuetype: bool,
    template: CppTemplate | None,
) -> tuple[list[CppMethodDecl], list[CppMethodImpl]]:
    """Getter, const getter and setter of an instance field, declared and defined."""
    field_ty = cpp_field.field_ty
    field_access = f"this->{fixup_backing_field(cpp_field.cpp_name)}"
    getter_name, setter_name = accessor_method_names(cpp_field.cpp_name)

    getter_call = f"return {field_access};"
    if not field_is_valuetype and declaring_is_ref:
        if _useful_template(template) is not None:
            setter_call = (
                f"::cordl_internals::setInstanceField(this, &{field_access}, "
                f"{_SETTER_VAR_NAME});"
            )
        else:
            setter_call = (
                "il2cpp_functions::gc_wbarrier_set_field(this, "
                f"static_cast<void**>(static_cast<void*>(&{field_access})), "
                f"cordl_internals::convert(std::forward<decltype({_SETTER_VAR_NAME})>"
                f"({_SETTER_VAR_NAME})));"
            )
    else:
        setter_call = f"{field_access} = {_SETTER_VAR_NAME};"

    is_constexpr = field.instance or field.is_const

    getter_decl = CppMethodDecl(
        cpp_name=getter_name,
        return_type=f"{field_ty}&",
        instance=True,
        is_constexpr=is_constexpr,
        is_inline=True,
    )
    const_getter_decl = CppMethodDecl(
        cpp_name=getter_name,
        return_type=f"{field_ty} const&",
        instance=True,
        is_const=True,
        is_constexpr=is_constexpr,
        is_inline=True,
    )
    setter_decl = CppMethodDecl(
        cpp_name=setter_name,
        return_type="void",
        instance=True,
        is_constexpr=is_constexpr,
        is_inline=True,
        parameters=(CppParam(name=_SETTER_VAR_NAME, ty=field_ty),),
    )

    # "this" should never be null, but native callers can get it wrong.
    prelude = (CppLine(_NULL_CHECK),) if declaring_is_ref else ()
    getter_body = prelude + (CppLine(getter_call),)
    setter_body = prelude + (CppLine(setter_call),)

    decls = [getter_decl, const_getter_decl, setter_decl]
    impls = [
        _impl_from(getter_decl, getter_body, declaring_cpp_name, template),
        _impl_from(const_getter_decl, getter_body, declaring_cpp_name, template),
        _impl_from(setter_decl, setter_body, declaring_cpp_name, template),
    ]
    return decls, impls


def static_field_accessors(
    field: FieldInfo,
    cpp_field: CppFieldDecl,
    declaring_cpp_name: str,
    klass_resolver: str,
    template: CppTemplate | None,
) -> tuple[list, list[CppMethodImpl]]:
    """Property plus static getter and setter for a static, non-constant field.

    Returns the declarations (property, setter, getter) and the definitions
    (setter, getter).
    """
    if field.instance or field.is_const:
        raise ValueError(f"field {field.name!r} is not a static non-constant field")

    field_ty = cpp_field.field_ty
    f_name = field.name
    f_cpp_name = cpp_field.cpp_name

    getter_call = (
        f"return {CORDL_METHOD_HELPER_NAMESPACE}::getStaticField<{field_ty}, "
        f'"{f_name}", {klass_resolver}>();'
    )
    setter_call = (
        f"{CORDL_METHOD_HELPER_NAMESPACE}::setStaticField<{field_ty}, "
        f'"{f_name}", {klass_resolver}>'
        f"(std::forward<{field_ty}>({_SETTER_VAR_NAME}));"
    )
    useful_template = _useful_template(template)
    is_constexpr = field.instance or field.is_const

    getter_decl = CppMethodDecl(
        cpp_name=f"getStaticF_{f_cpp_name}",
        return_type=field_ty,
        instance=False,
        is_constexpr=is_constexpr,
        is_inline=True,
    )
    setter_decl = CppMethodDecl(
        cpp_name=f"setStaticF_{f_cpp_name}",
        return_type="void",
        instance=False,
        is_constexpr=is_constexpr,
        is_inline=True,
        parameters=(CppParam(name=_SETTER_VAR_NAME, ty=field_ty),),
    )

    getter_impl = _impl_from(
        getter_decl, (CppLine(getter_call),), declaring_cpp_name, useful_template
    )
    setter_impl = _impl_from(
        setter_decl, (CppLine(setter_call),), declaring_cpp_name, useful_template
    )

    prop_decl = CppPropertyDecl(
        cpp_name=f_cpp_name,
        prop_ty=field_ty,
        instance=field.instance,
        getter=getter_decl.cpp_name,
        setter=setter_decl.cpp_name,
        indexable=False,
        brief_comment=(
            f"Field {f_name}, offset 0x{_offset_of(field):x}, size 0x{field.size:x} "
        ),
    )

    return [prop_decl, setter_decl, getter_decl], [setter_impl, getter_impl]


def const_field_members(
    field: FieldInfo,
    cpp_field: CppFieldDecl,
    declaring_cpp_name: str,
    is_primitive: bool,
    is_string: bool,
    template: CppTemplate | None,
) -> tuple[list[CppFieldDecl], list[CppFieldImpl]]:
    """Declaration, and for non-primitive types a definition, of a constant field."""
    if not field.is_const:
        raise ValueError(f"field {field.name!r} is not a constant")
    if field.value is None:
        raise ValueError("Constant with no default value?")

    def_value = field.value
    if is_string:
        cpp_field = dataclasses.replace(cpp_field, field_ty="::ConstString")

    if is_primitive:
        decl = dataclasses.replace(
            cpp_field,
            instance=False,
            const_expr=True,
            readonly=field.readonly,
            brief_comment=(
                f"Field {field.name} offset 0x{_offset_of(field):x} "
                f"size 0x{field.size:x}"
            ),
            value=def_value,
        )
        return [decl], []

    decl = dataclasses.replace(
        cpp_field,
        instance=False,
        readonly=field.readonly,
        value=None,
        const_expr=False,
        brief_comment=f"Field {field.name} value: {_debug_str(def_value)}",
    )
    impl = dataclasses.replace(
        CppFieldImpl.from_decl(cpp_field),
        value=def_value,
        const_expr=True,
        declaring_type=declaring_cpp_name,
        declaring_type_template=_useful_template(template),
    )
    return [decl], [impl]