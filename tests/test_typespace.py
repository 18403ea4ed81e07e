import pytest

from apireflect.typespace import (
    Enum,
    Field,
    Fields,
    Primitive,
    Representation,
    Struct,
    TypeReference,
    Typespace,
    Variant,
    empty_type,
    simple_type,
)


def test_reserve_type_only_once():
    ts = Typespace()
    assert ts.reserve_type("u8") is True
    assert ts.reserve_type("u8") is False
    assert ts.has_type("u8")
    assert ts.get_type("u8") is None


def test_insert_and_get_type():
    ts = Typespace()
    prim = Primitive("u8", "8-bit unsigned integer")
    assert ts.reserve_type("u8")
    ts.insert_type(prim)
    assert ts.get_type("u8") is prim
    assert ts.type_names() == ["u8"]
    assert ts.reserve_type("u8") is False


def test_insert_duplicate_raises():
    ts = Typespace()
    ts.insert_type(Primitive("bool"))
    with pytest.raises(ValueError):
        ts.insert_type(Primitive("bool"))


def test_type_names_follow_insertion_order():
    ts = Typespace()
    ts.reserve_type("outer")
    ts.reserve_type("inner")
    ts.insert_type(Primitive("inner"))
    ts.insert_type(Primitive("outer"))
    assert ts.type_names() == ["inner", "outer"]


def test_empty_type_defines_struct():
    ts = Typespace()
    ref = empty_type(ts, "reflectapi::Empty", "Struct object with no fields")
    assert ref == TypeReference("reflectapi::Empty")
    type_def = ts.get_type("reflectapi::Empty")
    assert isinstance(type_def, Struct)
    assert type_def.description == "Struct object with no fields"
    assert len(type_def.fields) == 0
    assert type_def.fields.is_none


def test_simple_type_is_idempotent():
    ts = Typespace()
    first = simple_type(ts, "u32", "32-bit unsigned integer", None)
    second = simple_type(ts, "u32", "other", None)
    assert first == second == TypeReference("u32")
    assert ts.type_names() == ["u32"]
    assert ts.get_type("u32").description == "32-bit unsigned integer"


def test_simple_type_with_fallback():
    ts = Typespace()
    simple_type(ts, "std::path::PathBuf", "File path type", "std::string::String")
    type_def = ts.get_type("std::path::PathBuf")
    assert type_def.fallback == TypeReference("std::string::String")


def test_type_reference_coerces_string_arguments():
    ref = TypeReference("std::vec::Vec", ["u8"])
    assert ref.arguments == (TypeReference("u8"),)
    assert str(ref) == "std::vec::Vec<u8>"


def test_fallback_once_substitutes_parameters():
    ts = Typespace()
    ts.insert_type(
        Primitive(
            "std::collections::BTreeMap",
            "Ordered key-value map type",
            ["K", "V"],
            TypeReference("std::collections::HashMap", ["K", "V"]),
        )
    )
    ref = TypeReference("std::collections::BTreeMap", ["u8", TypeReference("std::vec::Vec", ["bool"])])
    assert ref.fallback_once(ts) == TypeReference(
        "std::collections::HashMap", ["u8", TypeReference("std::vec::Vec", ["bool"])]
    )


def test_fallback_once_without_fallback_or_definition():
    ts = Typespace()
    ts.insert_type(Primitive("u8"))
    ts.insert_type(Enum("E", variants=[Variant("A")]))
    assert TypeReference("u8").fallback_once(ts) is None
    assert TypeReference("E").fallback_once(ts) is None
    assert TypeReference("missing").fallback_once(ts) is None


def test_fallback_once_transparent_struct():
    ts = Typespace()
    ts.insert_type(
        Struct(
            "Wrapper",
            parameters=["T"],
            fields=Fields.named([Field("inner", TypeReference("std::vec::Vec", ["T"]))]),
            transparent=True,
        )
    )
    ref = TypeReference("Wrapper", ["u8"])
    assert ref.fallback_once(ts) == TypeReference("std::vec::Vec", ["u8"])


def test_struct_alias_and_tuple():
    tuple_struct = Struct("T", fields=Fields.unnamed([Field("0", "u8")]))
    assert tuple_struct.is_alias
    assert tuple_struct.is_tuple
    named = Struct("N", fields=Fields.named([Field("a", "u8"), Field("b", "u8")]))
    assert not named.is_alias
    assert not named.is_tuple


def test_field_and_variant_names():
    f = Field("value", "u8", serde_name="val")
    assert f.wire_name == "val"
    assert not f.is_unnamed
    assert Field("1", "u8").is_unnamed
    v = Variant("Some")
    assert v.wire_name == "Some"


def test_fields_none_rejects_items():
    with pytest.raises(ValueError):
        Fields(Fields.Kind.NONE, [Field("a", "u8")])


def test_representation_constructors():
    rep = Representation.adjacent("type", "content")
    assert rep.kind is Representation.Kind.ADJACENT
    assert (rep.tag, rep.content) == ("type", "content")
    assert Representation.internal("type").tag == "type"
    assert Representation.none().kind is Representation.Kind.NONE
    assert Enum("E").representation == Representation.external()