"""Method, constructor and nested-type descriptions for generated C++."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from cordlgen.members import CppParam, CppTemplate


def _optional_key(value):
    return (0,) if value is None else (1, value)


def _params_key(params: Iterable[CppParam]):
    return tuple(
        (p.name, p.ty, p.modifiers, _optional_key(p.def_value)) for p in params
    )


def _optional_tuple(value):
    return None if value is None else tuple(value)


class _KeyOrdered:
    """Orders instances of one class by a partial key, as the generator sorts them."""

    __slots__ = ()

    def _order_key(self):
        raise NotImplementedError

    def _comparable(self, other: object) -> bool:
        return type(other) is type(self)

    def __lt__(self, other):
        if not self._comparable(other):
            return NotImplemented
        return self._order_key() < other._order_key()

    def __le__(self, other):
        if not self._comparable(other):
            return NotImplemented
        return self._order_key() <= other._order_key()

    def __gt__(self, other):
        if not self._comparable(other):
            return NotImplemented
        return self._order_key() > other._order_key()

    def __ge__(self, other):
        if not self._comparable(other):
            return NotImplemented
        return self._order_key() >= other._order_key()


@dataclass(frozen=True, eq=False)
class CppMethodDecl(_KeyOrdered):
    """An in-class method declaration, optionally with an inline body."""

    cpp_name: str
    return_type: str
    parameters: tuple[CppParam, ...] = ()
    instance: bool = True
    template: CppTemplate | None = None
    suffix_modifiers: tuple[str, ...] = ()
    prefix_modifiers: tuple[str, ...] = ()
    is_virtual: bool = False
    is_constexpr: bool = False
    is_const: bool = False
    is_no_except: bool = False
    is_implicit_operator: bool = False
    is_explicit_operator: bool = False
    is_inline: bool = False
    brief: str | None = None
    body: tuple | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", tuple(self.parameters))
        object.__setattr__(self, "suffix_modifiers", tuple(self.suffix_modifiers))
        object.__setattr__(self, "prefix_modifiers", tuple(self.prefix_modifiers))
        object.__setattr__(self, "body", _optional_tuple(self.body))

    def _eq_key(self):
        # Bodies cannot be compared; only whether one is present counts.
        return (
            self.cpp_name,
            self.return_type,
            self.parameters,
            self.instance,
            self.template,
            self.suffix_modifiers,
            self.prefix_modifiers,
            self.is_virtual,
            self.is_constexpr,
            self.is_const,
            self.is_no_except,
            self.is_implicit_operator,
            self.is_inline,
            self.brief,
            self.body is not None,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CppMethodDecl):
            return NotImplemented
        return self._eq_key() == other._eq_key()

    __hash__ = None

    def _order_key(self):
        return (
            self.cpp_name,
            self.return_type,
            _params_key(self.parameters),
            self.instance,
            _optional_key(self.template),
        )


@dataclass(frozen=True, eq=False)
class CppMethodImpl(_KeyOrdered):
    """An out-of-class method definition."""

    cpp_method_name: str
    return_type: str
    declaring_cpp_full_name: str = ""
    parameters: tuple[CppParam, ...] = ()
    instance: bool = True
    declaring_type_template: CppTemplate | None = None
    template: CppTemplate | None = None
    is_const: bool = False
    is_virtual: bool = False
    is_constexpr: bool = False
    is_no_except: bool = False
    is_operator: bool = False
    is_inline: bool = False
    suffix_modifiers: tuple[str, ...] = ()
    prefix_modifiers: tuple[str, ...] = ()
    brief: str | None = None
    body: tuple = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", tuple(self.parameters))
        object.__setattr__(self, "suffix_modifiers", tuple(self.suffix_modifiers))
        object.__setattr__(self, "prefix_modifiers", tuple(self.prefix_modifiers))
        object.__setattr__(self, "body", tuple(self.body))

    @classmethod
    def from_decl(cls, decl: CppMethodDecl) -> CppMethodImpl:
        """Definition matching a declaration; the declaring type is left empty."""
        return cls(
            cpp_method_name=decl.cpp_name,
            return_type=decl.return_type,
            declaring_cpp_full_name="",
            parameters=decl.parameters,
            instance=decl.instance,
            declaring_type_template=None,
            template=decl.template,
            is_const=decl.is_const,
            is_virtual=decl.is_virtual,
            is_constexpr=decl.is_constexpr,
            is_no_except=decl.is_no_except,
            is_operator=decl.is_implicit_operator,
            is_inline=decl.is_inline,
            suffix_modifiers=decl.suffix_modifiers,
            prefix_modifiers=decl.prefix_modifiers,
            brief=decl.brief,
            body=decl.body or (),
        )

    def _eq_key(self):
        # Bodies are not compared.
        return (
            self.cpp_method_name,
            self.declaring_cpp_full_name,
            self.return_type,
            self.parameters,
            self.instance,
            self.declaring_type_template,
            self.template,
            self.is_const,
            self.is_virtual,
            self.is_constexpr,
            self.is_no_except,
            self.is_operator,
            self.is_inline,
            self.suffix_modifiers,
            self.prefix_modifiers,
            self.brief,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CppMethodImpl):
            return NotImplemented
        return self._eq_key() == other._eq_key()

    __hash__ = None

    def _order_key(self):
        return (
            self.cpp_method_name,
            self.declaring_cpp_full_name,
            self.return_type,
            _params_key(self.parameters),
            self.instance,
            _optional_key(self.declaring_type_template),
            _optional_key(self.template),
        )


@dataclass(frozen=True, eq=False)
class CppConstructorDecl(_KeyOrdered):
    """An in-class constructor declaration."""

    cpp_name: str
    parameters: tuple[CppParam, ...] = ()
    template: CppTemplate | None = None
    is_constexpr: bool = False
    is_explicit: bool = False
    is_default: bool = False
    is_no_except: bool = False
    is_delete: bool = False
    is_protected: bool = False
    base_ctor: tuple[str, str] | None = None
    initialized_values: Mapping[str, str] = field(default_factory=dict)
    brief: str | None = None
    body: tuple | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", tuple(self.parameters))
        object.__setattr__(self, "initialized_values", dict(self.initialized_values))
        object.__setattr__(self, "base_ctor", _optional_tuple(self.base_ctor))
        object.__setattr__(self, "body", _optional_tuple(self.body))

    def _eq_key(self):
        return (
            self.cpp_name,
            self.parameters,
            self.template,
            self.is_constexpr,
            self.is_explicit,
            self.is_default,
            self.is_no_except,
            self.is_delete,
            self.is_protected,
            self.base_ctor,
            self.initialized_values,
            self.brief,
            self.body is not None,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CppConstructorDecl):
            return NotImplemented
        return self._eq_key() == other._eq_key()

    __hash__ = None

    def _order_key(self):
        return (
            self.cpp_name,
            _params_key(self.parameters),
            _optional_key(self.template),
        )


@dataclass(frozen=True, eq=False)
class CppConstructorImpl(_KeyOrdered):
    """An out-of-class constructor definition."""

    declaring_full_name: str
    declaring_name: str
    parameters: tuple[CppParam, ...] = ()
    base_ctor: tuple[str, str] | None = None
    initialized_values: Mapping[str, str] = field(default_factory=dict)
    is_constexpr: bool = False
    is_no_except: bool = False
    is_default: bool = False
    template: CppTemplate | None = None
    body: tuple = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", tuple(self.parameters))
        object.__setattr__(self, "initialized_values", dict(self.initialized_values))
        object.__setattr__(self, "base_ctor", _optional_tuple(self.base_ctor))
        object.__setattr__(self, "body", tuple(self.body))

    @classmethod
    def from_decl(cls, decl: CppConstructorDecl) -> CppConstructorImpl:
        """Definition matching a declaration; both names are the declared name."""
        return cls(
            declaring_full_name=decl.cpp_name,
            declaring_name=decl.cpp_name,
            parameters=decl.parameters,
            base_ctor=decl.base_ctor,
            initialized_values=decl.initialized_values,
            is_constexpr=decl.is_constexpr,
            is_no_except=decl.is_no_except,
            is_default=decl.is_default,
            template=decl.template,
            body=decl.body or (),
        )

    def _eq_key(self):
        return (
            self.declaring_full_name,
            self.declaring_name,
            self.parameters,
            self.base_ctor,
            self.initialized_values,
            self.is_constexpr,
            self.is_no_except,
            self.is_default,
            self.template,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CppConstructorImpl):
            return NotImplemented
        return self._eq_key() == other._eq_key()

    __hash__ = None

    def _order_key(self):
        return (
            self.declaring_full_name,
            self.declaring_name,
            _params_key(self.parameters),
            _optional_key(self.template),
        )


@dataclass(frozen=True)
class CppNestedStruct:
    """A struct, class or enum declared inside another type."""

    declaring_name: str
    declarations: tuple = ()
    base_type: str | None = None
    is_enum: bool = False
    is_class: bool = False
    is_private: bool = False
    brief_comment: str | None = None
    packing: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "declarations", tuple(self.declarations))


@dataclass(frozen=True)
class CppNestedUnion:
    """An anonymous union of members placed at an offset."""

    declarations: tuple = ()
    brief_comment: str | None = None
    offset: int = 0
    is_private: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "declarations", tuple(self.declarations))


@dataclass(frozen=True, order=True)
class CppMethodData:
    estimated_size: int
    addrs: int


@dataclass(frozen=True)
class CppMethodSizeStruct:
    """Metadata getter specialisation describing one generated method."""

    cpp_method_name: str
    method_name: str
    declaring_type_name: str
    declaring_classof_call: str
    ret_ty: str
    instance: bool
    method_data: CppMethodData
    params: tuple[CppParam, ...] = ()
    method_info_lines: tuple[str, ...] = ()
    method_info_var: str = ""
    declaring_template: CppTemplate | None = None
    template: CppTemplate | None = None
    generic_literals: tuple[str, ...] | None = None
    interface_clazz_of: str = ""
    is_final: bool = False
    slot: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", tuple(self.params))
        object.__setattr__(self, "method_info_lines", tuple(self.method_info_lines))
        object.__setattr__(self, "generic_literals", _optional_tuple(self.generic_literals))