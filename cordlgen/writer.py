"""Line-oriented text output and rendering of simple C++ members."""

from __future__ import annotations

import io
from typing import TextIO

from cordlgen.members import (
    CppCommentedString,
    CppFieldDecl,
    CppFieldImpl,
    CppForwardDeclare,
    CppInclude,
    CppLine,
    CppPropertyDecl,
    CppStaticAssert,
    CppTemplate,
    CppUsingAlias,
)


class CodeWriter:
    """Collects generated source text, line by line."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream: TextIO = stream if stream is not None else io.StringIO()

    def writeln(self, text: str = "") -> None:
        """Write ``text`` followed by a line ending."""
        self._stream.write(text)
        self._stream.write("\n")

    def getvalue(self) -> str:
        """Everything written so far; only for in-memory streams."""
        getvalue = getattr(self._stream, "getvalue", None)
        if getvalue is None:
            raise TypeError("the underlying stream does not keep its contents")
        return getvalue()


def write_template(template: CppTemplate, writer: CodeWriter) -> None:
    names = ",".join(f"{constraint} {name}" for constraint, name in template.names)
    writer.writeln(f"template<{names}>")


def write_forward_declare(declare: CppForwardDeclare, writer: CodeWriter) -> None:
    if declare.cpp_namespace is not None:
        writer.writeln(f"namespace {declare.cpp_namespace} {{")

    if declare.templates is not None:
        write_template(declare.templates, writer)

    # An explicit specialisation needs an empty template header, once.
    if declare.literals is not None and declare.templates is None:
        writer.writeln("template<>")

    if declare.literals is not None:
        name = f"{declare.cpp_name}<{','.join(declare.literals)}>"
    else:
        name = declare.cpp_name

    keyword = "struct" if declare.is_struct else "class"
    writer.writeln(f"{keyword} {name};")

    if declare.cpp_namespace is not None:
        writer.writeln("}")


def write_commented_string(commented: CppCommentedString, writer: CodeWriter) -> None:
    writer.writeln(commented.data)
    if commented.comment is not None:
        writer.writeln(f"// {commented.comment}")


def write_include(include: CppInclude, writer: CodeWriter) -> None:
    path = str(include.include).replace("\\", "/")
    if include.system:
        writer.writeln(f"#include <{path}>")
    else:
        writer.writeln(f'#include "{path}"')


def write_using_alias(alias: CppUsingAlias, writer: CodeWriter) -> None:
    if alias.template is not None:
        write_template(alias.template, writer)
    writer.writeln(f"using {alias.alias} = {alias.result};")


def write_field_decl(field: CppFieldDecl, writer: CodeWriter) -> None:
    if field.brief_comment is not None:
        writer.writeln(f"/// @brief {field.brief_comment}")

    if field.is_private:
        writer.writeln("private:")

    prefix_mods: list[str] = []
    suffix_mods: list[str] = []

    if not field.instance:
        prefix_mods.append("static")

    if field.const_expr:
        prefix_mods.append("constexpr")
    elif field.readonly:
        suffix_mods.append("const")

    prefixes = " ".join(prefix_mods)
    suffixes = " ".join(suffix_mods)
    ty = field.field_ty
    name = field.cpp_name

    if field.value is not None:
        writer.writeln(f"{prefixes} {ty} {suffixes} {name}{{{field.value}}};")
    else:
        writer.writeln(f"{prefixes} {ty} {suffixes} {name};")

    if field.is_private:
        writer.writeln("public:")


def write_field_impl(field: CppFieldImpl, writer: CodeWriter) -> None:
    if field.declaring_type_template is not None:
        write_template(field.declaring_type_template, writer)

    declaring_ty = field.declaring_type
    if declaring_ty.startswith("::"):
        declaring_ty = declaring_ty[2:]

    prefix_mods: list[str] = []
    suffix_mods: list[str] = []

    if field.const_expr:
        prefix_mods.append("constexpr")
    elif field.readonly:
        suffix_mods.append("const")

    prefixes = " ".join(prefix_mods)
    suffixes = " ".join(suffix_mods)

    writer.writeln(
        f"{prefixes} {field.field_ty} {suffixes} "
        f"{declaring_ty}::{field.cpp_name}{{{field.value}}};"
    )


def write_property_decl(prop: CppPropertyDecl, writer: CodeWriter) -> None:
    accessors: list[str] = []
    if prop.getter is not None:
        accessors.append(f"get={prop.getter}")
    if prop.setter is not None:
        accessors.append(f"put={prop.setter}")

    prefixes = ""
    suffixes = ""
    brackets = "[]" if prop.indexable else ""

    if prop.brief_comment is not None:
        writer.writeln(f"/// @brief {prop.brief_comment}")

    writer.writeln(
        f"{prefixes} __declspec(property({', '.join(accessors)})) "
        f"{prop.prop_ty} {suffixes} {prop.cpp_name}{brackets};"
    )


def write_static_assert(assertion: CppStaticAssert, writer: CodeWriter) -> None:
    if assertion.message is None:
        writer.writeln(f"static_assert({assertion.condition})")
    else:
        writer.writeln(
            f'static_assert({assertion.condition}, "{assertion.message}");'
        )


def write_line(line: CppLine, writer: CodeWriter) -> None:
    writer.writeln(line.line)