"""A three-state optional value: undefined (missing), none (null) or some value."""

from __future__ import annotations

import enum
from collections.abc import Callable, Mapping, MutableMapping
from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar, Union

from apireflect.typespace import (
    Enum,
    Field,
    Fields,
    Representation,
    TypeReference,
    Typespace,
    Variant,
)

T = TypeVar("T")
U = TypeVar("U")

_TYPE_NAME = "reflectapi::Option"

_EXPECTED_NAMES: dict[type, str] = {
    str: "a string",
    bool: "a boolean",
    int: "an integer",
    float: "a floating point number",
    list: "a sequence",
    dict: "a map",
}


class _State(enum.Enum):
    UNDEFINED = "undefined"
    NONE = "none"
    SOME = "some"


def _describe(value: Any) -> str:
    if isinstance(value, bool):
        return f"boolean `{'true' if value else 'false'}`"
    if isinstance(value, int):
        return f"integer `{value}`"
    if isinstance(value, float):
        return f"floating point `{value}`"
    if isinstance(value, str):
        return f'string "{value}"'
    if isinstance(value, (list, tuple)):
        return "sequence"
    if isinstance(value, Mapping):
        return "map"
    return f"value of type {type(value).__name__}"


def _matches(value: Any, expected: Optional[type]) -> bool:
    if expected is None:
        return True
    if expected in (int, float) and isinstance(value, bool):
        return False
    if expected is float:
        return isinstance(value, (int, float))
    return isinstance(value, expected)


@dataclass(frozen=True)
class Undefinable(Generic[T]):
    """An optional value that also distinguishes 'not provided' from 'null'.

    The default instance is undefined.
    """

    _state: _State = _State.UNDEFINED
    _value: Any = field(default=None)

    @classmethod
    def undefined(cls) -> "Undefinable[T]":
        return cls(_State.UNDEFINED)

    @classmethod
    def none(cls) -> "Undefinable[T]":
        return cls(_State.NONE)

    @classmethod
    def some(cls, value: T) -> "Undefinable[T]":
        return cls(_State.SOME, value)

    @classmethod
    def from_optional(cls, value: Optional[T]) -> "Undefinable[T]":
        """None becomes none; anything else becomes some value."""
        return cls.none() if value is None else cls.some(value)

    @classmethod
    def fold(cls, source: Optional[tuple]) -> "Undefinable[T]":
        """Build from a nested optional: None is undefined, (None,) is none, (v,) is some."""
        if source is None:
            return cls.undefined()
        (inner,) = source
        return cls.from_optional(inner)

    def is_undefined(self) -> bool:
        return self._state is _State.UNDEFINED

    def is_none(self) -> bool:
        return self._state is _State.NONE

    def is_none_or_undefined(self) -> bool:
        return self._state is not _State.SOME

    def is_some(self) -> bool:
        return self._state is _State.SOME

    def into_option(self) -> Optional[T]:
        """The value if some, otherwise None."""
        return self._value if self._state is _State.SOME else None

    def unfold(self) -> Optional[tuple]:
        """The inverse of fold: None, (None,) or (value,)."""
        if self._state is _State.UNDEFINED:
            return None
        return (self.into_option(),)

    def map(self, func: Callable[[T], U]) -> "Undefinable[U]":
        if self._state is _State.SOME:
            return Undefinable.some(func(self._value))
        return Undefinable(self._state)

    def store(self, mapping: MutableMapping[str, Any], key: str) -> None:
        """Write into a JSON-like mapping; undefined leaves the key out."""
        if self._state is _State.UNDEFINED:
            return
        mapping[key] = self.into_option()

    @classmethod
    def load(
        cls,
        mapping: Mapping[str, Any],
        key: str,
        expected_type: Optional[type] = None,
    ) -> "Undefinable[Any]":
        """Read from a JSON-like mapping: a missing key is undefined, null is none.

        Raises TypeError when the value is not of ``expected_type``.
        """
        if key not in mapping:
            return cls.undefined()
        value = mapping[key]
        if value is None:
            return cls.none()
        if not _matches(value, expected_type):
            expected = _EXPECTED_NAMES.get(
                expected_type, f"a value of type {getattr(expected_type, '__name__', expected_type)}"
            )
            raise TypeError(f"invalid type: {_describe(value)}, expected {expected}")
        return cls.some(value)

    def __repr__(self) -> str:
        if self._state is _State.SOME:
            return f"Undefinable.some({self._value!r})"
        return f"Undefinable.{self._state.value}()"


def undefinable_type(
    typespace: Typespace, item: Union[TypeReference, str]
) -> TypeReference:
    """Reference to the undefinable option of ``item``, defining the enum if needed."""
    if typespace.reserve_type(_TYPE_NAME):
        typespace.insert_type(
            Enum(
                _TYPE_NAME,
                description="Undefinable Option type",
                parameters=["T"],
                representation=Representation.none(),
                variants=[
                    Variant(
                        "Undefined",
                        description="The value is missing, i.e. undefined in JavaScript",
                    ),
                    Variant(
                        "None",
                        description="The value is provided but set to none, i.e. null in JavaScript",
                    ),
                    Variant(
                        "Some",
                        description="The value is provided and set to some value",
                        fields=Fields.unnamed([Field("0", TypeReference("T"))]),
                    ),
                ],
            )
        )
    ref = item if isinstance(item, TypeReference) else TypeReference(item)
    return TypeReference(_TYPE_NAME, (ref,))