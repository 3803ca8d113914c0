"""Name parts of a managed type: namespace, declaring types, name and generics."""

from __future__ import annotations

import dataclasses
import functools
from collections.abc import Iterable
from dataclasses import dataclass


def _optional_key(value):
    return (0,) if value is None else (1, value)


def _as_tuple(value: Iterable[str] | None) -> tuple[str, ...] | None:
    return None if value is None else tuple(value)


@functools.total_ordering
@dataclass(frozen=True)
class NameComponents:
    """The parts of a managed type name, joined in managed notation."""

    namespace: str | None = None
    declaring_types: tuple[str, ...] | None = None
    name: str = ""
    generics: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "declaring_types", _as_tuple(self.declaring_types))
        object.__setattr__(self, "generics", _as_tuple(self.generics))

    def _sort_key(self):
        return (
            _optional_key(self.namespace),
            _optional_key(self.declaring_types),
            self.name,
            _optional_key(self.generics),
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, NameComponents):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    @classmethod
    def from_name(cls, name: str) -> NameComponents:
        """Components holding only a bare name."""
        return cls(name=name)

    def combine_all(self) -> str:
        """Full name as ``Namespace.Outer/Inner<A,B>``."""
        completed = self.name
        if self.declaring_types is not None:
            completed = f"{'/'.join(self.declaring_types)}/{completed}"
        if self.namespace is not None:
            completed = f"{self.namespace}.{completed}"
        if self.generics is not None:
            completed = f"{completed}<{','.join(self.generics)}>"
        return completed

    def into_ref_generics(self) -> NameComponents:
        """Copy with every generic argument replaced by ``void*``."""
        if self.generics is None:
            return self
        return dataclasses.replace(self, generics=tuple("void*" for _ in self.generics))

    def remove_generics(self) -> NameComponents:
        return dataclasses.replace(self, generics=None)

    def remove_namespace(self) -> NameComponents:
        return dataclasses.replace(self, namespace=None)

    def formatted_name(self, include_generics: bool) -> str:
        """The bare name, with generics appended if requested and present."""
        if self.generics is not None and include_generics:
            return f"{self.name}<{','.join(self.generics)}>"
        return self.name