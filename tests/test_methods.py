import pytest

from cordlgen.members import CppLine, CppParam, CppTemplate
from cordlgen.methods import (
    CppConstructorDecl,
    CppConstructorImpl,
    CppMethodData,
    CppMethodDecl,
    CppMethodImpl,
    CppMethodSizeStruct,
    CppNestedStruct,
    CppNestedUnion,
)


def _param(name, ty="int32_t", def_value=None):
    return CppParam(name=name, ty=ty, def_value=def_value)


def test_method_decl_equality_ignores_body_contents():
    a = CppMethodDecl("get_X", "int32_t", body=[CppLine("return 1;")])
    b = CppMethodDecl("get_X", "int32_t", body=[CppLine("return 2;")])
    assert a == b


def test_method_decl_equality_depends_on_body_presence():
    a = CppMethodDecl("get_X", "int32_t", body=[CppLine("return 1;")])
    b = CppMethodDecl("get_X", "int32_t")
    assert not a == b


def test_method_decl_equality_ignores_explicit_operator_flag():
    a = CppMethodDecl("op", "bool", is_explicit_operator=True)
    b = CppMethodDecl("op", "bool", is_explicit_operator=False)
    assert a == b


def test_method_decl_differs_on_constness():
    a = CppMethodDecl("get_X", "int32_t", is_const=True)
    b = CppMethodDecl("get_X", "int32_t", is_const=False)
    assert a != b


def test_method_decl_sorts_by_name_then_return_type():
    decls = [
        CppMethodDecl("b", "int32_t"),
        CppMethodDecl("a", "void"),
        CppMethodDecl("a", "bool"),
    ]
    ordered = sorted(decls)
    assert [(d.cpp_name, d.return_type) for d in ordered] == [
        ("a", "bool"),
        ("a", "void"),
        ("b", "int32_t"),
    ]


def test_method_decl_missing_template_sorts_first():
    plain = CppMethodDecl("f", "void")
    templated = CppMethodDecl("f", "void", template=CppTemplate.make_typenames(["T"]))
    assert plain < templated
    assert templated > plain


def test_method_decl_parameters_stored_as_tuple():
    params = [_param("a"), _param("b")]
    decl = CppMethodDecl("f", "void", parameters=params)
    assert decl.parameters == tuple(params)


def test_method_impl_from_decl_copies_fields():
    body = [CppLine("return this->x;")]
    template = CppTemplate.make_typenames(["T"])
    decl = CppMethodDecl(
        "get_x",
        "int32_t",
        parameters=[_param("i")],
        instance=True,
        template=template,
        is_const=True,
        is_constexpr=True,
        is_inline=True,
        is_implicit_operator=True,
        brief="getter",
        body=body,
    )
    impl = CppMethodImpl.from_decl(decl)
    assert impl.cpp_method_name == "get_x"
    assert impl.return_type == "int32_t"
    assert impl.declaring_cpp_full_name == ""
    assert impl.declaring_type_template is None
    assert impl.template == template
    assert impl.parameters == decl.parameters
    assert impl.is_const and impl.is_constexpr and impl.is_inline
    assert impl.is_operator is True
    assert impl.brief == "getter"
    assert impl.body == tuple(body)


def test_method_impl_from_decl_without_body_is_empty():
    impl = CppMethodImpl.from_decl(CppMethodDecl("f", "void"))
    assert impl.body == ()


def test_method_impl_equality_ignores_body():
    a = CppMethodImpl("f", "void", body=[CppLine("a();")])
    b = CppMethodImpl("f", "void")
    assert a == b


def test_method_impl_orders_by_declaring_name_after_method_name():
    a = CppMethodImpl("f", "void", declaring_cpp_full_name="::A")
    b = CppMethodImpl("f", "void", declaring_cpp_full_name="::B")
    assert sorted([b, a]) == [a, b]


def test_method_impl_orders_by_parameters():
    a = CppMethodImpl("f", "void", parameters=[_param("a")])
    b = CppMethodImpl("f", "void", parameters=[_param("b")])
    assert a < b
    assert a <= b
    assert not b < a


def test_method_types_are_not_hashable():
    with pytest.raises(TypeError):
        hash(CppMethodDecl("f", "void"))


def test_constructor_decl_equality_uses_initialized_values():
    a = CppConstructorDecl("Foo", initialized_values={"x": "1"})
    b = CppConstructorDecl("Foo", initialized_values={"x": "1"})
    c = CppConstructorDecl("Foo", initialized_values={"x": "2"})
    assert a == b
    assert a != c


def test_constructor_decl_equality_body_presence_only():
    a = CppConstructorDecl("Foo", body=[CppLine("a();")])
    b = CppConstructorDecl("Foo", body=[CppLine("b();")])
    c = CppConstructorDecl("Foo")
    assert a == b
    assert a != c


def test_constructor_decl_ordering():
    a = CppConstructorDecl("Foo", parameters=[_param("a")])
    b = CppConstructorDecl("Foo", parameters=[_param("b")])
    assert sorted([b, a]) == [a, b]


def test_constructor_impl_from_decl():
    decl = CppConstructorDecl(
        "Foo",
        parameters=[_param("x")],
        base_ctor=("Base", "x"),
        initialized_values={"y": "x"},
        is_constexpr=True,
        is_default=True,
        is_no_except=True,
        body=[CppLine("init();")],
    )
    impl = CppConstructorImpl.from_decl(decl)
    assert impl.declaring_full_name == "Foo"
    assert impl.declaring_name == "Foo"
    assert impl.parameters == decl.parameters
    assert impl.base_ctor == ("Base", "x")
    assert impl.initialized_values == {"y": "x"}
    assert impl.is_constexpr and impl.is_default and impl.is_no_except
    assert impl.body == decl.body


def test_constructor_impl_from_decl_without_body():
    impl = CppConstructorImpl.from_decl(CppConstructorDecl("Foo"))
    assert impl.body == ()


def test_constructor_impl_equality_ignores_body():
    a = CppConstructorImpl("::Ns::Foo", "Foo", body=[CppLine("a();")])
    b = CppConstructorImpl("::Ns::Foo", "Foo")
    assert a == b
    c = CppConstructorImpl("::Ns::Bar", "Foo")
    assert a != c


def test_nested_struct_declarations_are_tuples():
    decls = [CppLine("int x;")]
    nested = CppNestedStruct("Inner", declarations=decls, packing=1)
    assert nested.declarations == tuple(decls)
    assert nested == CppNestedStruct("Inner", declarations=decls, packing=1)


def test_nested_union_equality():
    a = CppNestedUnion(declarations=[CppLine("int x;")], offset=16, is_private=True)
    b = CppNestedUnion(declarations=[CppLine("int x;")], offset=16, is_private=True)
    c = CppNestedUnion(declarations=[CppLine("int x;")], offset=8, is_private=True)
    assert a == b
    assert a != c


def test_method_data_ordering():
    small = CppMethodData(estimated_size=4, addrs=100)
    large = CppMethodData(estimated_size=8, addrs=50)
    assert sorted([large, small]) == [small, large]
    assert hash(small) == hash(CppMethodData(estimated_size=4, addrs=100))


def test_method_size_struct_normalises_sequences():
    params = [_param("a")]
    ss = CppMethodSizeStruct(
        cpp_method_name="Foo",
        method_name="Foo",
        declaring_type_name="::Ns::Bar",
        declaring_classof_call="classof(::Ns::Bar*)",
        ret_ty="void",
        instance=True,
        method_data=CppMethodData(estimated_size=4, addrs=100),
        params=params,
        method_info_lines=["line"],
        generic_literals=["int32_t"],
        slot=3,
    )
    assert ss.params == tuple(params)
    assert ss.method_info_lines == ("line",)
    assert ss.generic_literals == ("int32_t",)
    assert ss.slot == 3