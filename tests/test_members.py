from pathlib import PurePosixPath

from cordlgen.members import (
    CORDL_REFERENCE_TYPE_CONSTRAINT,
    CppFieldDecl,
    CppFieldImpl,
    CppInclude,
    CppParam,
    CppTemplate,
    CppUsingAlias,
    params_as_args,
    params_as_args_no_default,
    params_il2cpp_types,
    params_names,
    params_types,
)


def test_make_typenames():
    template = CppTemplate.make_typenames(["T", "U"])
    assert template.names == (("typename", "T"), ("typename", "U"))


def test_make_ref_types_uses_constraint():
    template = CppTemplate.make_ref_types(iter(["T"]))
    assert template.names == ((CORDL_REFERENCE_TYPE_CONSTRAINT, "T"),)


def test_just_names_round_trip():
    names = ["TKey", "TValue"]
    assert list(CppTemplate.make_typenames(names).just_names()) == names


def test_template_hashable_and_ordered():
    a = CppTemplate.make_typenames(["A"])
    b = CppTemplate.make_typenames(["B"])
    assert sorted([b, a]) == [a, b]
    assert len({a, CppTemplate.make_typenames(["A"])}) == 1


def test_includes():
    system = CppInclude.new_system("stdint.h")
    exact = CppInclude.new_exact("System/zzzz__Object_def.hpp")
    assert system.system is True
    assert exact.system is False
    assert system.include == PurePosixPath("stdint.h")
    assert len({exact, CppInclude.new_exact(PurePosixPath("System/zzzz__Object_def.hpp"))}) == 1


def test_includes_sort_by_path():
    a = CppInclude.new_exact("a.hpp")
    b = CppInclude.new_exact("b.hpp")
    assert sorted([b, a]) == [a, b]


def test_using_alias_ordering_with_templates():
    plain = CppUsingAlias(result="R", alias="X")
    templated = CppUsingAlias(result="R", alias="X", template=CppTemplate.make_typenames(["T"]))
    assert sorted([templated, plain]) == [plain, templated]


def test_field_impl_from_decl():
    decl = CppFieldDecl(cpp_name="x", field_ty="int32_t", readonly=True, const_expr=True)
    impl = CppFieldImpl.from_decl(decl)
    assert impl.value == ""
    assert impl.declaring_type == ""
    assert impl.declaring_type_template is None
    assert (impl.cpp_name, impl.field_ty, impl.readonly, impl.const_expr) == (
        "x",
        "int32_t",
        True,
        True,
    )


def test_field_impl_from_decl_keeps_value():
    decl = CppFieldDecl(cpp_name="y", field_ty="bool", value="true")
    assert CppFieldImpl.from_decl(decl).value == "true"


def test_params_as_args():
    with_default = CppParam(name="x", ty="int32_t", modifiers="&", def_value="0")
    without = CppParam(name="x", ty="int32_t", modifiers="&")
    assert params_as_args([with_default]) == ["int32_t& x = 0"]
    assert params_as_args([without]) == ["int32_t & x"]


def test_no_default_ignores_default():
    params = [CppParam(name="x", ty="int32_t", modifiers="&", def_value="0")]
    assert params_as_args_no_default(params) == params_as_args([CppParam("x", "int32_t", "&")])


def test_names_types_and_il2cpp():
    params = [CppParam(name="a", ty="bool"), CppParam(name="b", ty="float_t")]
    assert params_names(params) == ["a", "b"]
    assert params_types(params) == ["bool", "float_t"]
    assert params_il2cpp_types(params[:1]) == ["::il2cpp_utils::ExtractType(a)"]
    assert params_names([]) == []