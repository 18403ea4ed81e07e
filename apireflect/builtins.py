"""Schema definitions for the standard built-in types."""

from __future__ import annotations

from typing import Union

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
    simple_type,
)

TypeLike = Union[TypeReference, str]

MAX_TUPLE_SIZE = 12

_SIMPLE_TYPES: dict[str, str] = {
    "i8": "8-bit signed integer",
    "i16": "16-bit signed integer",
    "i32": "32-bit signed integer",
    "i64": "64-bit signed integer",
    "i128": "128-bit signed integer",
    "u8": "8-bit unsigned integer",
    "u16": "16-bit unsigned integer",
    "u32": "32-bit unsigned integer",
    "u64": "64-bit unsigned integer",
    "u128": "128-bit unsigned integer",
    "f32": "32-bit floating point number",
    "f64": "64-bit floating point number",
    "bool": "Boolean value",
    "char": "Unicode character",
    "std::string::String": "UTF-8 encoded string",
}

_NON_ZERO_TYPES: dict[str, tuple[str, str]] = {
    "std::num::NonZeroU8": ("8-bit non-zero unsigned integer", "u8"),
    "std::num::NonZeroU16": ("16-bit non-zero unsigned integer", "u16"),
    "std::num::NonZeroU32": ("32-bit non-zero unsigned integer", "u32"),
    "std::num::NonZeroU64": ("64-bit non-zero unsigned integer", "u64"),
    "std::num::NonZeroU128": ("128-bit non-zero unsigned integer", "u128"),
}

_MACHINE_SIZED_TYPES: dict[str, tuple[str, str]] = {
    "isize": ("Machine-specific-bit signed integer", "i64"),
    "usize": ("Machine-specific-bit unsigned integer", "u64"),
}

_STRING_ALIASES = frozenset({"str", "&'static str", "&str"})

_UNIT_NAMES = frozenset({"()", "std::tuple::Tuple0"})

_POINTERS: dict[str, bool] = {
    "std::boxed::Box": False,
    "std::rc::Rc": False,
    "std::sync::Arc": False,
    "std::cell::Cell": False,
    "std::cell::RefCell": False,
    "std::sync::Mutex": False,
    "std::sync::RwLock": False,
    "std::sync::Weak": False,
    "std::cell::Ref": True,
    "std::cell::RefMut": True,
    "std::sync::MutexGuard": True,
    "std::sync::RwLockReadGuard": True,
    "std::sync::RwLockWriteGuard": True,
    "*const": False,
    "*mut": False,
    "std::borrow::Cow": True,
}

_PATH_TYPES: dict[str, str] = {
    "std::path::PathBuf": "std::string::String",
    "std::path::Path": "std::path::PathBuf",
}


def _ref(value: TypeLike) -> TypeReference:
    return value if isinstance(value, TypeReference) else TypeReference(value)


def builtin_type(typespace: Typespace, name: str) -> TypeReference:
    """Define a scalar built-in type by name and return a reference to it."""
    if name in _STRING_ALIASES:
        name = "std::string::String"
    if name in _SIMPLE_TYPES:
        return simple_type(typespace, name, _SIMPLE_TYPES[name], None)
    if name in _NON_ZERO_TYPES:
        description, fallback = _NON_ZERO_TYPES[name]
        return simple_type(typespace, name, description, TypeReference(fallback))
    if name in _MACHINE_SIZED_TYPES:
        description, base = _MACHINE_SIZED_TYPES[name]
        fallback = builtin_type(typespace, base)
        return simple_type(typespace, name, description, fallback)
    if name in _UNIT_NAMES:
        return simple_type(typespace, "std::tuple::Tuple0", "Unit type", None)
    raise ValueError(f"unknown built-in type: {name}")


def _define_vec(typespace: Typespace) -> str:
    type_name = "std::vec::Vec"
    if typespace.reserve_type(type_name):
        typespace.insert_type(
            Primitive(type_name, "Expandable array type", ["T"], None)
        )
    return type_name


def _define_option(typespace: Typespace) -> str:
    type_name = "std::option::Option"
    if typespace.reserve_type(type_name):
        typespace.insert_type(
            Enum(
                type_name,
                description="Optional nullable type",
                parameters=["T"],
                representation=Representation.none(),
                variants=[
                    Variant(
                        "None", description="The value is not provided, i.e. null"
                    ),
                    Variant(
                        "Some",
                        description="The value is provided and set to some value",
                        fields=Fields.unnamed([Field("0", TypeReference("T"))]),
                    ),
                ],
            )
        )
    return type_name


def _define_hashmap(typespace: Typespace) -> str:
    type_name = "std::collections::HashMap"
    if typespace.reserve_type(type_name):
        typespace.insert_type(
            Primitive(type_name, "Key-value map type", ["K", "V"], None)
        )
    return type_name


def _define_btreemap(typespace: Typespace) -> str:
    type_name = "std::collections::BTreeMap"
    if typespace.reserve_type(type_name):
        fallback = TypeReference(_define_hashmap(typespace), ("K", "V"))
        typespace.insert_type(
            Primitive(type_name, "Ordered key-value map type", ["K", "V"], fallback)
        )
    return type_name


def _define_hashset(typespace: Typespace) -> str:
    type_name = "std::collections::HashSet"
    if typespace.reserve_type(type_name):
        fallback = TypeReference(_define_vec(typespace), ("V",))
        typespace.insert_type(Primitive(type_name, "Value set type", ["V"], fallback))
    return type_name


def _define_btreeset(typespace: Typespace) -> str:
    type_name = "std::collections::BTreeSet"
    if typespace.reserve_type(type_name):
        fallback = TypeReference(_define_hashset(typespace), ("V",))
        typespace.insert_type(
            Primitive(type_name, "Ordered set type", ["V"], fallback)
        )
    return type_name


def vec_type(typespace: Typespace, item: TypeLike) -> TypeReference:
    """Reference to a growable array of ``item``."""
    return TypeReference(_define_vec(typespace), (_ref(item),))


def option_type(typespace: Typespace, item: TypeLike) -> TypeReference:
    """Reference to a nullable ``item``."""
    return TypeReference(_define_option(typespace), (_ref(item),))


def hashmap_type(typespace: Typespace, key: TypeLike, value: TypeLike) -> TypeReference:
    """Reference to an unordered map from ``key`` to ``value``."""
    return TypeReference(_define_hashmap(typespace), (_ref(key), _ref(value)))


def btreemap_type(
    typespace: Typespace, key: TypeLike, value: TypeLike
) -> TypeReference:
    """Reference to an ordered map from ``key`` to ``value``."""
    return TypeReference(_define_btreemap(typespace), (_ref(key), _ref(value)))


def hashset_type(typespace: Typespace, item: TypeLike) -> TypeReference:
    """Reference to an unordered set of ``item``."""
    return TypeReference(_define_hashset(typespace), (_ref(item),))


def btreeset_type(typespace: Typespace, item: TypeLike) -> TypeReference:
    """Reference to an ordered set of ``item``."""
    return TypeReference(_define_btreeset(typespace), (_ref(item),))


def tuple_type(typespace: Typespace, *args: TypeLike) -> TypeReference:
    """Reference to a tuple of the given element types; no elements is the unit type."""
    count = len(args)
    if count == 0:
        return builtin_type(typespace, "()")
    if count > MAX_TUPLE_SIZE:
        raise ValueError(
            f"tuples of more than {MAX_TUPLE_SIZE} elements are not supported"
        )
    type_name = f"std::tuple::Tuple{count}"
    if typespace.reserve_type(type_name):
        parameters = [f"T{i}" for i in range(1, count + 1)]
        typespace.insert_type(
            Primitive(type_name, f"Tuple holding {count} elements", parameters, None)
        )
    return TypeReference(type_name, tuple(_ref(arg) for arg in args))


def array_type(typespace: Typespace, item: TypeLike, size: int) -> TypeReference:
    """Reference to a fixed-size array of ``size`` elements of ``item``."""
    type_name = "std::array::Array"
    if typespace.reserve_type(type_name):
        fallback = TypeReference(_define_vec(typespace), ("T",))
        typespace.insert_type(
            Primitive(type_name, "Fixed-size Array", ["T", "N"], fallback)
        )
    return TypeReference(type_name, (_ref(item), TypeReference(str(size))))


def pointer_type(typespace: Typespace, pointer: str, item: TypeLike) -> TypeReference:
    """Reference to a smart pointer, guard or raw pointer wrapping ``item``."""
    try:
        with_lifetime = _POINTERS[pointer]
    except KeyError:
        raise ValueError(f"unknown pointer type: {pointer}") from None
    if typespace.reserve_type(pointer):
        parameters = ["'a", "T"] if with_lifetime else ["T"]
        typespace.insert_type(
            Primitive(pointer, f"{pointer} pointer type", parameters, TypeReference("T"))
        )
    return TypeReference(pointer, (_ref(item),))


def phantom_data_type(typespace: Typespace, item: TypeLike) -> TypeReference:
    """Reference to zero-sized phantom data over ``item``."""
    type_name = "std::marker::PhantomData"
    if typespace.reserve_type(type_name):
        typespace.insert_type(
            Primitive(type_name, "Zero-sized phantom data", ["T"], None)
        )
    return TypeReference(type_name, (_ref(item),))


def duration_type(typespace: Typespace) -> TypeReference:
    """Reference to the time duration struct, defining its field types as well."""
    builtin_type(typespace, "u64")
    builtin_type(typespace, "u32")
    type_name = "std::time::Duration"
    if typespace.reserve_type(type_name):
        typespace.insert_type(
            Struct(
                type_name,
                description="Time duration type",
                fields=Fields.named(
                    [
                        Field("secs", TypeReference("u64"), required=True),
                        Field("nanos", TypeReference("u32"), required=True),
                    ]
                ),
            )
        )
    return TypeReference(type_name)


def path_type(typespace: Typespace, name: str) -> TypeReference:
    """Reference to a file path type (owned or borrowed)."""
    try:
        fallback = _PATH_TYPES[name]
    except KeyError:
        raise ValueError(f"unknown path type: {name}") from None
    return simple_type(typespace, name, "File path type", TypeReference(fallback))