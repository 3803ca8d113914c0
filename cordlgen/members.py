"""Plain C++ member descriptions used by the header generator."""

from __future__ import annotations

import functools
import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import PurePosixPath

CORDL_REFERENCE_TYPE_CONSTRAINT = "::il2cpp_utils::il2cpp_reference_type"


def _optional_key(value):
    return (0,) if value is None else (1, value)


@dataclass(frozen=True, order=True)
class CppTemplate:
    """A ``template<...>`` parameter list of (constraint, name) pairs."""

    names: tuple[tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "names", tuple(tuple(pair) for pair in self.names))

    @classmethod
    def make_typenames(cls, names: Iterable[str]) -> CppTemplate:
        return cls(tuple(("typename", name) for name in names))

    @classmethod
    def make_ref_types(cls, names: Iterable[str]) -> CppTemplate:
        return cls(tuple((CORDL_REFERENCE_TYPE_CONSTRAINT, name) for name in names))

    def just_names(self) -> Iterator[str]:
        return (name for _constraint, name in self.names)


@dataclass(frozen=True)
class CppStaticAssert:
    condition: str
    message: str | None = None


@dataclass(frozen=True, order=True)
class CppLine:
    line: str


@dataclass(frozen=True)
class CppForwardDeclare:
    is_struct: bool
    cpp_name: str
    cpp_namespace: str | None = None
    templates: CppTemplate | None = None
    literals: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        if self.literals is not None:
            object.__setattr__(self, "literals", tuple(self.literals))


@dataclass(frozen=True)
class CppCommentedString:
    data: str
    comment: str | None = None


@dataclass(frozen=True, order=True)
class CppInclude:
    """An ``#include`` of a path, quoted or as a system header."""

    include: PurePosixPath
    system: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "include", PurePosixPath(os.fspath(self.include)))

    @classmethod
    def new_system(cls, path) -> CppInclude:
        return cls(PurePosixPath(os.fspath(path)), True)

    @classmethod
    def new_exact(cls, path) -> CppInclude:
        return cls(PurePosixPath(os.fspath(path)), False)


@functools.total_ordering
@dataclass(frozen=True)
class CppUsingAlias:
    result: str
    alias: str
    template: CppTemplate | None = None

    def _sort_key(self):
        return (self.result, self.alias, _optional_key(self.template))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, CppUsingAlias):
            return NotImplemented
        return self._sort_key() < other._sort_key()


@dataclass(frozen=True)
class CppFieldDecl:
    cpp_name: str
    field_ty: str
    offset: int | None = None
    instance: bool = True
    readonly: bool = False
    const_expr: bool = False
    value: str | None = None
    brief_comment: str | None = None
    is_private: bool = False


@dataclass(frozen=True)
class CppFieldImpl:
    cpp_name: str
    field_ty: str
    declaring_type: str = ""
    declaring_type_template: CppTemplate | None = None
    readonly: bool = False
    const_expr: bool = False
    value: str = ""

    @classmethod
    def from_decl(cls, decl: CppFieldDecl) -> CppFieldImpl:
        """Out-of-class definition for a field declaration."""
        return cls(
            cpp_name=decl.cpp_name,
            field_ty=decl.field_ty,
            readonly=decl.readonly,
            const_expr=decl.const_expr,
            value=decl.value or "",
        )


@dataclass(frozen=True)
class CppPropertyDecl:
    cpp_name: str
    prop_ty: str
    instance: bool = True
    getter: str | None = None
    setter: str | None = None
    indexable: bool = False
    brief_comment: str | None = None


@dataclass(frozen=True)
class CppParam:
    name: str
    ty: str
    modifiers: str = ""
    def_value: str | None = None


def params_as_args(params: Iterable[CppParam]) -> list[str]:
    """Parameter list entries, including default values."""
    return [
        f"{p.ty}{p.modifiers} {p.name} = {p.def_value}"
        if p.def_value is not None
        else f"{p.ty} {p.modifiers} {p.name}"
        for p in params
    ]


def params_as_args_no_default(params: Iterable[CppParam]) -> list[str]:
    return [f"{p.ty} {p.modifiers} {p.name}" for p in params]


def params_names(params: Iterable[CppParam]) -> list[str]:
    return [p.name for p in params]


def params_types(params: Iterable[CppParam]) -> list[str]:
    return [p.ty for p in params]


def params_il2cpp_types(params: Iterable[CppParam]) -> list[str]:
    return [f"::il2cpp_utils::ExtractType({p.name})" for p in params]