"""Schema definitions for widely used third-party value types."""

from __future__ import annotations

from typing import Union

from apireflect.builtins import hashmap_type, hashset_type
from apireflect.typespace import Primitive, TypeReference, Typespace

TypeLike = Union[TypeReference, str]

_STRING = "std::string::String"

_TIMEZONES: dict[str, str] = {
    "Utc": "chrono::Utc",
    "Local": "chrono::Local",
    "FixedOffset": "chrono::FixedOffset",
    "chrono::Utc": "chrono::Utc",
    "chrono::Local": "chrono::Local",
    "chrono::FixedOffset": "chrono::FixedOffset",
}


def _ref(value: TypeLike) -> TypeReference:
    return value if isinstance(value, TypeReference) else TypeReference(value)


def _define_string_backed(
    typespace: Typespace, type_name: str, description: str, parameters=()
) -> str:
    if typespace.reserve_type(type_name):
        typespace.insert_type(
            Primitive(
                type_name, description, list(parameters), TypeReference(_STRING)
            )
        )
    return type_name


def datetime_type(typespace: Typespace, timezone: str) -> TypeReference:
    """Reference to a timezone-aware date-time; ``timezone`` is Utc, Local or FixedOffset."""
    try:
        tz_name = _TIMEZONES[timezone]
    except KeyError:
        raise ValueError(f"unsupported timezone: {timezone}") from None
    type_name = _define_string_backed(
        typespace,
        "chrono::DateTime",
        "DateTime at a given timezone (RFC3339 format)",
        ["Tz"],
    )
    return TypeReference(type_name, (TypeReference(tz_name),))


def naive_datetime_type(typespace: Typespace) -> TypeReference:
    """Reference to a date-time without timezone."""
    return TypeReference(
        _define_string_backed(
            typespace,
            "chrono::NaiveDateTime",
            "Date time without timezone (%Y-%m-%dT%H:%M:%S%.f)",
        )
    )


def naive_date_type(typespace: Typespace) -> TypeReference:
    """Reference to a date without timezone."""
    return TypeReference(
        _define_string_backed(
            typespace, "chrono::NaiveDate", "Date without timezone (%Y-%m-%d)"
        )
    )


def naive_time_type(typespace: Typespace) -> TypeReference:
    """Reference to a time of day without timezone."""
    return TypeReference(
        _define_string_backed(
            typespace, "chrono::NaiveTime", "Time without timezone (%H:%M:%S%.f)"
        )
    )


def indexmap_type(
    typespace: Typespace, key: TypeLike, value: TypeLike
) -> TypeReference:
    """Reference to a map ordered by insertion, falling back to a hash map."""
    type_name = "indexmap::IndexMap"
    if typespace.reserve_type(type_name):
        fallback = hashmap_type(typespace, "K", "V")
        typespace.insert_type(
            Primitive(
                type_name,
                "Key-value map type ordered by insertion",
                ["K", "V"],
                fallback,
            )
        )
    return TypeReference(type_name, (_ref(key), _ref(value)))


def indexset_type(typespace: Typespace, item: TypeLike) -> TypeReference:
    """Reference to a set ordered by insertion, falling back to a hash set."""
    type_name = "indexmap::IndexSet"
    if typespace.reserve_type(type_name):
        fallback = hashset_type(typespace, "V")
        typespace.insert_type(
            Primitive(type_name, "Set type ordered by insertion", ["V"], fallback)
        )
    return TypeReference(type_name, (_ref(item),))


def json_value_type(typespace: Typespace) -> TypeReference:
    """Reference to an arbitrary JSON value."""
    type_name = "serde_json::Value"
    if typespace.reserve_type(type_name):
        typespace.insert_type(Primitive(type_name, "JSON value type", [], None))
    return TypeReference(type_name)


def json_map_type(
    typespace: Typespace, key: TypeLike, value: TypeLike
) -> TypeReference:
    """Reference to a JSON object map, described as an unordered hash map."""
    return hashmap_type(typespace, key, value)


def decimal_type(typespace: Typespace) -> TypeReference:
    """Reference to a decimal number carried as a string."""
    return TypeReference(
        _define_string_backed(typespace, "rust_decimal::Decimal", "Decimal value type")
    )


def url_type(typespace: Typespace) -> TypeReference:
    """Reference to a URL carried as a string."""
    return TypeReference(_define_string_backed(typespace, "url::Url", "URL value type"))


def uuid_type(typespace: Typespace) -> TypeReference:
    """Reference to a UUID value."""
    type_name = "uuid::Uuid"
    if typespace.reserve_type(type_name):
        typespace.insert_type(Primitive(type_name, "UUID value type", [], None))
    return TypeReference(type_name)