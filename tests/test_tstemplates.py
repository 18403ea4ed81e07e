import pytest

from apireflect.typespace import Representation
from apireflect.tstemplates import (
    Alias,
    ClientImplementationGroup,
    EnumTemplate,
    FieldsKind,
    FileHeader,
    FunctionImplementation,
    Interface,
    Module,
    TsField,
    TsFields,
    TsVariant,
)


def test_file_header_contains_name_and_description():
    text = FileHeader(name="demo", description="Demo schema").render()
    assert text.startswith("// DO NOT MODIFY THIS FILE MANUALLY\n")
    assert "// Schema name: demo\n// Demo schema\n" in text
    assert text.endswith("    return __implementation.__client(base)\n}")


def test_module_empty_checks():
    assert Module("").is_empty()
    nested = Module("a", [], {"b": Module("b")})
    assert nested.is_empty()
    assert not Module("a", [], {"b": Module("b", ["x"])}).is_empty()


def test_empty_named_module_renders_no_namespace():
    text = Module("empty").render()
    assert "export namespace" not in text
    assert text.strip() == ""


def test_module_renders_namespace_types_and_sorted_submodules():
    module = Module(
        "my-mod",
        ["type A = 1;", "type B = 2;"],
        {"zeta": Module("zeta", ["type Z = 3;"]), "alpha": Module("alpha", ["type Q = 4;"])},
    )
    text = module.render()
    assert text.startswith("\nexport namespace my_mod {\ntype A = 1;\ntype B = 2;")
    assert text.endswith("\n\n}")
    assert text.index("export namespace alpha") < text.index("export namespace zeta")
    assert text.index("type A = 1;") < text.index("type B = 2;")


def test_interface_plain():
    text = Interface(
        "Pet",
        fields=[TsField("name", "", "string"), TsField("age", "", "number", True)],
    ).render()
    assert text == "\nexport interface Pet {\n    name: string,\n    age?: number,\n}"


def test_interface_tuple_uses_type_keyword():
    text = Interface("Pair", fields=[TsField("0", "", "string")], is_tuple=True).render()
    assert text.startswith("\nexport type Pair = [")
    assert "\n    string," in text
    assert text.endswith("]\n")


def test_interface_flattened_types():
    text = Interface(
        "Both", fields=[TsField("x", "", "string")], flattened_types=["A", "B"]
    ).render()
    assert text.startswith("\nexport type Both = {")
    assert text.endswith("} & A &\n    B")


def test_field_unnamed_renders_type_only():
    assert TsField("0", "", "string", True).render() == "string"
    assert TsField("0", "", "string").is_unnamed
    assert not TsField("x0", "", "string").is_unnamed


@pytest.mark.parametrize(
    "name, rendered",
    [
        ("my-field", "my_field: T"),
        ("plain_name", "plain_name: T"),
        ("1abc", '"1abc": T'),
        ("a b", '"a b": T'),
    ],
)
def test_field_name_normalization(name, rendered):
    assert TsField(name, "", "T").render() == rendered


def test_field_description_prefix():
    field = TsField("x", "/** doc */\n", "T")
    assert field.render().startswith("/** doc */\n")
    assert field.render().endswith("x: T")


def test_external_unit_variant():
    assert TsVariant("Red").render() == '| "Red"'


def test_external_variant_with_discriminant():
    assert TsVariant("Red", discriminant=3).render() == "| 3 /* Red */"


def test_external_variant_empty_named_and_unnamed():
    assert TsVariant("A", fields=TsFields.named()).render() == "| { A: {} }"
    assert TsVariant("A", fields=TsFields.unnamed()).render() == "| { A: [] }"


def test_external_variant_with_fields_wraps_name():
    variant = TsVariant("A", fields=TsFields.named([TsField("x", "", "T")]))
    text = variant.render()
    assert text.startswith("| {\n        A: {")
    assert "x: T" in text
    assert text.endswith("\n    }")


def test_internal_variants():
    rep = Representation.internal("type")
    assert TsVariant("A", representation=rep).render() == '| { type: "A" }'
    single = TsVariant(
        "B", representation=rep, fields=TsFields.unnamed([TsField("0", "", "Inner")])
    )
    assert single.render().startswith('| { type: "B" } & ')
    named = TsVariant(
        "C", representation=rep, fields=TsFields.named([TsField("x", "", "T")])
    )
    assert 'type: "C"' in named.render()


def test_internal_tuple_variant_without_fields_is_rejected():
    variant = TsVariant(
        "A", representation=Representation.internal("t"), fields=TsFields.unnamed()
    )
    with pytest.raises(ValueError):
        variant.render()


def test_adjacent_variants():
    rep = Representation.adjacent("t", "c")
    assert (
        TsVariant("A", representation=rep, fields=TsFields.unnamed()).render()
        == '| { t: "A", c: [] }'
    )
    assert TsVariant("A", representation=rep).render() == '| { t: "A", c: {} }'


def test_untagged_and_none_representation():
    assert TsVariant("A", untagged=True).render() == "| null"
    variant = TsVariant(
        "A",
        representation=Representation.none(),
        fields=TsFields.unnamed([TsField("0", "", "T"), TsField("1", "", "U")]),
    )
    text = variant.render()
    assert text.startswith("| [")
    assert text.endswith("]")


def test_fields_none_rejects_items():
    with pytest.raises(ValueError):
        TsFields(FieldsKind.NONE, [TsField("x", "", "T")])


def test_enum_template_lists_variants():
    text = EnumTemplate("Color", variants=[TsVariant("Red"), TsVariant("Blue")]).render()
    assert text.startswith("\nexport type Color =")
    assert text.endswith(";")
    assert text.index('| "Red"') < text.index('| "Blue"')


def test_alias():
    text = Alias("Id", "", "string").render()
    assert text.endswith("export type Id = string;")


def test_function_implementation():
    text = FunctionImplementation(
        "pets__list", "/api/pets.list", "In", "Hdr", "Out", "Err"
    ).render()
    assert text.startswith("function pets__list(client: Client) {")
    assert "(input: In, headers: Hdr) => __request<" in text
    assert "In, Hdr, Out, Err" in text
    assert ">(client, '/api/pets.list', input, headers);" in text


def test_client_implementation_group():
    group = ClientImplementationGroup(
        8,
        {"list": "pets__list"},
        {"admin": ClientImplementationGroup(12, {"drop": "pets__admin__drop"})},
    )
    text = group.render()
    lines = text.split("\n")
    assert lines[0] == "{"
    assert '        "list": pets__list(client_instance),' in lines
    assert '            "drop": pets__admin__drop(client_instance),' in lines
    assert lines[-1] == "    },"


def test_client_implementation_group_rejects_small_offset():
    with pytest.raises(ValueError):
        ClientImplementationGroup(2).render()