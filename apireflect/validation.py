"""Schema validation errors and the pointers that locate them."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class PointerKind(enum.Enum):
    FIELD = "field"
    VARIANT = "variant"
    VARIANT_FIELD = "variant_field"
    TYPE = "type"
    FUNCTION = "function"


@dataclass(frozen=True)
class ValidationPointer:
    """Locates a schema item: a field, variant, variant field, type or function."""

    kind: PointerKind
    name: str
    type_name: str = ""
    variant_name: str = ""

    @classmethod
    def field(cls, type_name: str, name: str) -> "ValidationPointer":
        return cls(PointerKind.FIELD, name, type_name=type_name)

    @classmethod
    def variant(cls, type_name: str, name: str) -> "ValidationPointer":
        return cls(PointerKind.VARIANT, name, type_name=type_name)

    @classmethod
    def variant_field(
        cls, type_name: str, variant_name: str, name: str
    ) -> "ValidationPointer":
        return cls(
            PointerKind.VARIANT_FIELD,
            name,
            type_name=type_name,
            variant_name=variant_name,
        )

    @classmethod
    def type(cls, name: str) -> "ValidationPointer":
        return cls(PointerKind.TYPE, name)

    @classmethod
    def function(cls, name: str) -> "ValidationPointer":
        return cls(PointerKind.FUNCTION, name)

    def __str__(self) -> str:
        if self.kind in (PointerKind.FIELD, PointerKind.VARIANT):
            return f"{self.type_name}.{self.name}"
        if self.kind is PointerKind.VARIANT_FIELD:
            return f"{self.type_name}.{self.variant_name}.{self.name}"
        return self.name


class ValidationError(Exception):
    """A problem found in a schema, at the item the pointer names."""

    def __init__(self, pointer: ValidationPointer, message: str) -> None:
        super().__init__(pointer, message)
        self.pointer = pointer
        self.message = message

    def __str__(self) -> str:
        return f"{self.pointer}: {self.message}"