"""Schema model: type references, type definitions and the typespace that holds them."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Optional, Union


def _as_ref(value: Union["TypeReference", str]) -> "TypeReference":
    return value if isinstance(value, TypeReference) else TypeReference(value)


@dataclass(frozen=True)
class TypeReference:
    """A named type applied to zero or more type arguments."""

    name: str
    arguments: tuple = ()

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "arguments", tuple(_as_ref(arg) for arg in self.arguments)
        )

    def __str__(self) -> str:
        if not self.arguments:
            return self.name
        return f"{self.name}<{', '.join(str(arg) for arg in self.arguments)}>"

    def substitute(self, mapping: Mapping[str, "TypeReference"]) -> "TypeReference":
        """Replace bare references to parameter names with the mapped references."""
        if not self.arguments and self.name in mapping:
            return mapping[self.name]
        return TypeReference(
            self.name, tuple(arg.substitute(mapping) for arg in self.arguments)
        )

    def fallback_once(self, typespace: "Typespace") -> Optional["TypeReference"]:
        """Resolve one step of fallback for this reference, or None if there is none."""
        type_def = typespace.get_type(self.name)
        if type_def is None:
            return None
        return type_def.fallback_for(self)


@dataclass(frozen=True)
class Representation:
    """How an enum is tagged on the wire."""

    class Kind(enum.Enum):
        EXTERNAL = "external"
        INTERNAL = "internal"
        ADJACENT = "adjacent"
        NONE = "none"

    kind: "Representation.Kind" = Kind.EXTERNAL
    tag: str = ""
    content: str = ""

    @classmethod
    def external(cls) -> "Representation":
        return cls(cls.Kind.EXTERNAL)

    @classmethod
    def internal(cls, tag: str) -> "Representation":
        return cls(cls.Kind.INTERNAL, tag=tag)

    @classmethod
    def adjacent(cls, tag: str, content: str) -> "Representation":
        return cls(cls.Kind.ADJACENT, tag=tag, content=content)

    @classmethod
    def none(cls) -> "Representation":
        return cls(cls.Kind.NONE)


@dataclass
class Field:
    """A named or positional field of a struct or enum variant."""

    name: str
    type_ref: TypeReference
    description: str = ""
    serde_name: str = ""
    deprecation_note: Optional[str] = None
    required: bool = False
    flattened: bool = False

    def __post_init__(self) -> None:
        self.type_ref = _as_ref(self.type_ref)

    @property
    def wire_name(self) -> str:
        """The name used in serialized form."""
        return self.serde_name or self.name

    @property
    def is_unnamed(self) -> bool:
        return self.name.isdigit()


@dataclass
class Fields:
    """The fields of a struct or variant: named, positional, or absent."""

    class Kind(enum.Enum):
        NAMED = "named"
        UNNAMED = "unnamed"
        NONE = "none"

    kind: "Fields.Kind" = Kind.NONE
    items: list = field(default_factory=list)

    def __post_init__(self) -> None:
        self.items = list(self.items)
        if self.kind is Fields.Kind.NONE and self.items:
            raise ValueError("fields of kind NONE cannot hold items")

    @classmethod
    def named(cls, items: Iterable[Field] = ()) -> "Fields":
        return cls(cls.Kind.NAMED, list(items))

    @classmethod
    def unnamed(cls, items: Iterable[Field] = ()) -> "Fields":
        return cls(cls.Kind.UNNAMED, list(items))

    @classmethod
    def none(cls) -> "Fields":
        return cls(cls.Kind.NONE)

    @property
    def is_named(self) -> bool:
        return self.kind is Fields.Kind.NAMED

    @property
    def is_unnamed(self) -> bool:
        return self.kind is Fields.Kind.UNNAMED

    @property
    def is_none(self) -> bool:
        return self.kind is Fields.Kind.NONE

    def __iter__(self) -> Iterator[Field]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass
class Variant:
    """One variant of an enum."""

    name: str
    description: str = ""
    serde_name: str = ""
    fields: Fields = field(default_factory=Fields)
    discriminant: Optional[int] = None
    untagged: bool = False

    @property
    def wire_name(self) -> str:
        return self.serde_name or self.name


@dataclass
class Primitive:
    """A built-in type, optionally falling back to another type reference."""

    name: str
    description: str = ""
    parameters: list = field(default_factory=list)
    fallback: Optional[TypeReference] = None

    def __post_init__(self) -> None:
        self.parameters = list(self.parameters)
        if self.fallback is not None:
            self.fallback = _as_ref(self.fallback)

    def fallback_for(self, origin: TypeReference) -> Optional[TypeReference]:
        if self.fallback is None:
            return None
        mapping = dict(zip(self.parameters, origin.arguments))
        return self.fallback.substitute(mapping)


@dataclass
class Struct:
    """A record type with named or positional fields."""

    name: str
    description: str = ""
    serde_name: str = ""
    parameters: list = field(default_factory=list)
    fields: Fields = field(default_factory=Fields)
    transparent: bool = False

    def __post_init__(self) -> None:
        self.parameters = list(self.parameters)

    @property
    def is_alias(self) -> bool:
        """A single-field struct that stands for its only field."""
        return len(self.fields) == 1 and (
            self.fields.items[0].name == "0" or self.transparent
        )

    @property
    def is_tuple(self) -> bool:
        return len(self.fields) > 0 and all(f.is_unnamed for f in self.fields)

    def fallback_for(self, origin: TypeReference) -> Optional[TypeReference]:
        if not self.transparent or len(self.fields) != 1:
            return None
        mapping = dict(zip(self.parameters, origin.arguments))
        return self.fields.items[0].type_ref.substitute(mapping)


@dataclass
class Enum:
    """A sum type made of variants."""

    name: str
    description: str = ""
    serde_name: str = ""
    parameters: list = field(default_factory=list)
    variants: list = field(default_factory=list)
    representation: Representation = field(default_factory=Representation.external)

    def __post_init__(self) -> None:
        self.parameters = list(self.parameters)
        self.variants = list(self.variants)

    def fallback_for(self, origin: TypeReference) -> Optional[TypeReference]:
        return None


TypeDef = Union[Primitive, Struct, Enum]


class Typespace:
    """A collection of type definitions, indexed by name, in insertion order."""

    def __init__(self) -> None:
        self._types: dict[str, TypeDef] = {}
        self._reserved: set[str] = set()

    def reserve_type(self, name: str) -> bool:
        """Claim a name; True if it was free and the caller should define it."""
        if name in self._reserved or name in self._types:
            return False
        self._reserved.add(name)
        return True

    def insert_type(self, type_def: TypeDef) -> None:
        if type_def.name in self._types:
            raise ValueError(f"type already defined: {type_def.name}")
        self._reserved.add(type_def.name)
        self._types[type_def.name] = type_def

    def get_type(self, name: str) -> Optional[TypeDef]:
        return self._types.get(name)

    def has_type(self, name: str) -> bool:
        return name in self._reserved or name in self._types

    def type_names(self) -> list[str]:
        return list(self._types)

    def __iter__(self) -> Iterator[TypeDef]:
        return iter(list(self._types.values()))

    def __len__(self) -> int:
        return len(self._types)


def empty_type(typespace: Typespace, type_name: str, description: str) -> TypeReference:
    """Define a struct with no fields and return a reference to it."""
    if typespace.reserve_type(type_name):
        typespace.insert_type(Struct(type_name, description=description))
    return TypeReference(type_name)


def simple_type(
    typespace: Typespace,
    type_name: str,
    description: str,
    fallback: Union[TypeReference, str, None] = None,
) -> TypeReference:
    """Define a parameterless primitive and return a reference to it."""
    if typespace.reserve_type(type_name):
        typespace.insert_type(
            Primitive(type_name, description, [], fallback)
        )
    return TypeReference(type_name)