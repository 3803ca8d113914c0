"""Rendering of methods, constructors and nested types as C++ source text."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping

from cordlgen.members import (
    CppCommentedString,
    CppFieldDecl,
    CppFieldImpl,
    CppForwardDeclare,
    CppInclude,
    CppLine,
    CppParam,
    CppPropertyDecl,
    CppStaticAssert,
    CppTemplate,
    CppUsingAlias,
    params_as_args,
    params_as_args_no_default,
    params_types,
)
from cordlgen.methods import (
    CppConstructorDecl,
    CppConstructorImpl,
    CppMethodDecl,
    CppMethodImpl,
    CppMethodSizeStruct,
    CppNestedStruct,
    CppNestedUnion,
)
from cordlgen.writer import (
    CodeWriter,
    write_commented_string,
    write_field_decl,
    write_field_impl,
    write_forward_declare,
    write_include,
    write_line,
    write_property_decl,
    write_static_assert,
    write_template,
    write_using_alias,
)


def _debug_str(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _debug_params(params: Iterable[CppParam]) -> str:
    """Parameter list in the notation used by constructor comments."""
    entries = []
    for p in params:
        def_value = "None" if p.def_value is None else f"Some({_debug_str(p.def_value)})"
        entries.append(
            f"CppParam {{ name: {_debug_str(p.name)}, ty: {_debug_str(p.ty)}, "
            f"modifiers: {_debug_str(p.modifiers)}, def_value: {def_value} }}"
        )
    return f"[{', '.join(entries)}]"


def _write_default_param_comments(params: Iterable[CppParam], writer: CodeWriter) -> None:
    for param in params:
        if param.def_value is not None:
            writer.writeln(
                f"/// @param {param.name}: {param.ty} (default: {param.def_value})"
            )


def _initializers(
    initialized_values: Mapping[str, str], base_ctor: tuple[str, str] | None
) -> str:
    if not initialized_values and base_ctor is None:
        return ""
    entries = [f"{name}({value})" for name, value in initialized_values.items()]
    if base_ctor is not None:
        base_name, args = base_ctor
        entries.insert(0, f"{base_name}({args})")
    return f": {','.join(entries)}"


def _write_body(body: Iterable, writer: CodeWriter) -> None:
    for item in body:
        write_member(item, writer)


def write_method_decl(method: CppMethodDecl, writer: CodeWriter) -> None:
    if method.brief is not None:
        writer.writeln(f"/// @brief {method.brief}")

    _write_default_param_comments(method.parameters, writer)

    if method.template is not None:
        write_template(method.template, writer)

    prefix_modifiers = list(method.prefix_modifiers)
    suffix_modifiers = list(method.suffix_modifiers)

    if not method.instance:
        prefix_modifiers.append("static")

    if method.is_constexpr:
        prefix_modifiers.append("constexpr")
    elif method.is_inline:
        prefix_modifiers.append("inline")

    if method.is_virtual:
        prefix_modifiers.append("virtual")
    if method.is_explicit_operator:
        prefix_modifiers.append("explicit operator")
    elif method.is_implicit_operator:
        prefix_modifiers.append("operator")

    if method.is_const and method.instance:
        suffix_modifiers.append("const")
    if method.is_no_except:
        suffix_modifiers.append("noexcept")

    prefixes = " ".join(prefix_modifiers)
    suffixes = " ".join(suffix_modifiers)
    params = ", ".join(params_as_args(method.parameters))
    head = f"{prefixes} {method.return_type} {method.cpp_name}({params}) {suffixes}"

    if method.body is not None:
        writer.writeln(f"{head} {{")
        _write_body(method.body, writer)
        writer.writeln("}")
    else:
        writer.writeln(f"{head};")


def write_method_impl(method: CppMethodImpl, writer: CodeWriter) -> None:
    if method.brief is not None:
        writer.writeln(f"/// @brief {method.brief}")

    _write_default_param_comments(method.parameters, writer)

    if method.declaring_type_template is not None:
        write_template(method.declaring_type_template, writer)
    if method.template is not None:
        write_template(method.template, writer)

    prefix_modifiers = list(method.prefix_modifiers)
    suffix_modifiers = list(method.suffix_modifiers)

    if method.is_constexpr:
        prefix_modifiers.append("constexpr")
    elif method.is_inline:
        prefix_modifiers.append("inline")

    if method.is_virtual:
        prefix_modifiers.append("virtual")

    if method.is_const and method.instance:
        suffix_modifiers.append("const")
    if method.is_no_except:
        suffix_modifiers.append("noexcept")

    prefixes = " ".join(prefix_modifiers)
    suffixes = " ".join(suffix_modifiers)
    declaring_type = method.declaring_cpp_full_name
    if declaring_type.startswith("::"):
        declaring_type = declaring_type[2:]
    params = ", ".join(params_as_args_no_default(method.parameters))
    operator = "operator " if method.is_operator else ""

    writer.writeln(
        f"{prefixes} {method.return_type} {declaring_type}::{operator}"
        f"{method.cpp_method_name}({params}) {suffixes} {{"
    )
    _write_body(method.body, writer)
    writer.writeln("}")


def write_constructor_decl(ctor: CppConstructorDecl, writer: CodeWriter) -> None:
    if ctor.is_protected:
        writer.writeln("protected:")

    writer.writeln(f"// Ctor Parameters {_debug_params(ctor.parameters)}")
    if ctor.brief is not None:
        writer.writeln(f"// @brief {ctor.brief}")

    if ctor.template is not None:
        write_template(ctor.template, writer)

    name = ctor.cpp_name
    params = ", ".join(params_as_args(ctor.parameters))

    if ctor.is_delete:
        writer.writeln(f"{name}({params}) = delete;")
        return

    prefix_modifiers: list[str] = []
    suffix_modifiers: list[str] = []

    if ctor.is_constexpr:
        prefix_modifiers.append("constexpr")
    elif ctor.body is not None:
        prefix_modifiers.append("inline")

    if ctor.is_explicit:
        prefix_modifiers.append("explicit")
    if ctor.is_no_except:
        suffix_modifiers.append("noexcept")

    prefixes = " ".join(prefix_modifiers)
    suffixes = " ".join(suffix_modifiers)

    if ctor.body is not None and not ctor.is_default:
        initializers = _initializers(ctor.initialized_values, ctor.base_ctor)
        writer.writeln(f"{prefixes} {name}({params}) {suffixes} {initializers} {{")
        _write_body(ctor.body, writer)
        writer.writeln("}")
    elif ctor.is_default:
        writer.writeln(f"{prefixes} {name}({params}) {suffixes} = default;")
    else:
        writer.writeln(f"{prefixes} {name}({params}) {suffixes};")

    if ctor.is_protected:
        writer.writeln("public:")


def write_constructor_impl(ctor: CppConstructorImpl, writer: CodeWriter) -> None:
    writer.writeln(f"// Ctor Parameters {_debug_params(ctor.parameters)}")

    if ctor.template is not None:
        write_template(ctor.template, writer)

    initializers = _initializers(ctor.initialized_values, ctor.base_ctor)
    suffixes = "noexcept" if ctor.is_no_except else ""
    prefixes = "constexpr" if ctor.is_constexpr else ""
    params = ", ".join(params_as_args_no_default(ctor.parameters))
    head = (
        f"{prefixes} {ctor.declaring_full_name}::{ctor.declaring_name}"
        f"({params}) {suffixes} {initializers}"
    )

    if ctor.is_default:
        writer.writeln(f"{head} = default;")
    else:
        writer.writeln(f"{head} {{")
        _write_body(ctor.body, writer)
        writer.writeln("}")


def write_method_size_struct(size_struct: CppMethodSizeStruct, writer: CodeWriter) -> None:
    s = size_struct
    writer.writeln(
        f"//  Writing Method size for method: {s.declaring_type_name}.{s.cpp_method_name}"
    )

    template = s.template if s.template is not None else CppTemplate()
    params_format = ", ".join(params_types(s.params))
    method_info_var = s.method_info_var

    # Interfaces have no vtable to resolve against, so final methods use the given lines.
    if s.slot is not None and not s.is_final:
        method_info_lines = (
            "\n"
            f"                            static auto* {method_info_var} = "
            "THROW_UNLESS(::il2cpp_utils::ResolveVtableSlot(\n"
            f"                                {s.declaring_classof_call},\n"
            f"                                 {s.interface_clazz_of}(),\n"
            f"                                  {s.slot}\n"
            "                                ));"
        )
    else:
        method_info_lines = "\n".join(s.method_info_lines)

    f_ptr_prefix = f"{s.declaring_type_name}::" if s.instance else ""

    if s.declaring_template is not None:
        write_template(s.declaring_template, writer)
    write_template(template, writer)

    writer.writeln(
        "\n"
        "struct CORDL_HIDDEN ::il2cpp_utils::il2cpp_type_check::MetadataGetter<"
        f"static_cast<{s.ret_ty} ({f_ptr_prefix}*)({params_format})>"
        f"(&{s.declaring_type_name}::{s.cpp_method_name})> {{\n"
        f"  constexpr static std::size_t size = 0x{s.method_data.estimated_size:x};\n"
        f"  constexpr static std::size_t addrs = 0x{s.method_data.addrs:x};\n"
        "\n"
        "  inline static const ::MethodInfo* methodInfo() {\n"
        f"    {method_info_lines}\n"
        f"    return {method_info_var};\n"
        "  }\n"
        "};"
    )


def write_nested_struct(nested: CppNestedStruct, writer: CodeWriter) -> None:
    if nested.is_private:
        writer.writeln("private:")

    if nested.brief_comment is not None:
        writer.writeln(f"/// @brief {nested.brief_comment}")

    if nested.packing is not None:
        writer.writeln(f"#pragma pack(push, tp, {nested.packing})")

    declaration = "class" if nested.is_class else "struct"
    base_type = None if nested.base_type is None else f"public {nested.base_type}"
    if nested.is_enum:
        base_type = nested.base_type
        declaration = f"enum {declaration}"

    if base_type is not None:
        writer.writeln(f"{declaration} {nested.declaring_name} : {base_type} {{")
    else:
        writer.writeln(f"{declaration} {nested.declaring_name} {{")

    _write_body(nested.declarations, writer)

    writer.writeln("};")
    if nested.packing is not None:
        writer.writeln("#pragma pack(pop, tp)")
    if nested.is_private:
        writer.writeln("public:")


def write_nested_union(union: CppNestedUnion, writer: CodeWriter) -> None:
    if union.is_private:
        writer.writeln("private:")
    if union.brief_comment is not None:
        writer.writeln(f"/// @brief {union.brief_comment}")

    writer.writeln("union {")
    _write_body(union.declarations, writer)
    writer.writeln("};")

    if union.is_private:
        writer.writeln("public:")


_WRITERS: dict[type, Callable[[object, CodeWriter], None]] = {
    CppFieldDecl: write_field_decl,
    CppFieldImpl: write_field_impl,
    CppMethodDecl: write_method_decl,
    CppMethodImpl: write_method_impl,
    CppPropertyDecl: write_property_decl,
    CppCommentedString: write_commented_string,
    CppConstructorDecl: write_constructor_decl,
    CppConstructorImpl: write_constructor_impl,
    CppNestedStruct: write_nested_struct,
    CppNestedUnion: write_nested_union,
    CppUsingAlias: write_using_alias,
    CppLine: write_line,
    CppStaticAssert: write_static_assert,
    CppMethodSizeStruct: write_method_size_struct,
    CppTemplate: write_template,
    CppForwardDeclare: write_forward_declare,
    CppInclude: write_include,
}


def write_member(member: object, writer: CodeWriter) -> None:
    """Write any C++ member description to ``writer``."""
    for cls in type(member).__mro__:
        handler = _WRITERS.get(cls)
        if handler is not None:
            handler(member, writer)
            return
    raise TypeError(f"cannot write a {type(member).__name__} as C++")


def render(member: object) -> str:
    """The C++ text of a single member."""
    writer = CodeWriter()
    write_member(member, writer)
    return writer.getvalue()