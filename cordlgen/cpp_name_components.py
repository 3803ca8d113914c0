"""Name parts of a generated C++ type and their rendering."""

from __future__ import annotations

import dataclasses
import functools
from collections.abc import Iterable
from dataclasses import dataclass

from cordlgen.name_components import NameComponents


def _optional_key(value):
    return (0,) if value is None else (1, value)


def _as_tuple(value: Iterable[str] | None) -> tuple[str, ...] | None:
    return None if value is None else tuple(value)


@functools.total_ordering
@dataclass(frozen=True)
class CppNameComponents:
    """The parts of a C++ type name, joined in C++ notation."""

    namespace: str | None = None
    declaring_types: tuple[str, ...] | None = None
    name: str = ""
    generics: tuple[str, ...] | None = None
    is_pointer: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "declaring_types", _as_tuple(self.declaring_types))
        object.__setattr__(self, "generics", _as_tuple(self.generics))

    def _sort_key(self):
        return (
            _optional_key(self.namespace),
            _optional_key(self.declaring_types),
            self.name,
            _optional_key(self.generics),
            self.is_pointer,
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, CppNameComponents):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    @classmethod
    def from_name(cls, name: str) -> CppNameComponents:
        """Components holding only a bare name."""
        return cls(name=name)

    @classmethod
    def from_name_components(cls, components: NameComponents) -> CppNameComponents:
        """Carry over managed name parts; the result is not a pointer."""
        return cls(
            namespace=components.namespace,
            declaring_types=components.declaring_types,
            name=components.name,
            generics=components.generics,
        )

    def combine_all(self) -> str:
        """Qualified name such as ``::Ns::Name<A,B>*``."""
        if self.declaring_types is not None:
            scope: str | None = "::".join(self.declaring_types)
        else:
            scope = self.namespace

        if scope is None:
            prefix = ""
        elif scope == "":
            prefix = "::"
        else:
            prefix = f"::{scope}::"

        completed = f"{prefix}{self.name}"
        if self.generics is not None:
            completed = f"{completed}<{','.join(self.generics)}>"
        if self.is_pointer:
            completed = f"{completed}*"
        return completed

    def into_ref_generics(self) -> CppNameComponents:
        """Copy with every generic argument replaced by ``void*``."""
        if self.generics is None:
            return self
        return dataclasses.replace(self, generics=tuple("void*" for _ in self.generics))

    def remove_generics(self) -> CppNameComponents:
        return dataclasses.replace(self, generics=None)

    def as_pointer(self) -> CppNameComponents:
        return dataclasses.replace(self, is_pointer=True)

    def remove_pointer(self) -> CppNameComponents:
        return dataclasses.replace(self, is_pointer=False)

    def formatted_name(self, include_generics: bool) -> str:
        """The bare name, with generics appended if requested and present."""
        if self.generics is not None and include_generics:
            return f"{self.name}<{','.join(self.generics)}>"
        return self.name