"""Text templates that render pieces of a generated TypeScript client."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Optional

from apireflect.typespace import Representation

_FIELD_INDENT = "\n            "
_CLOSE_INDENT = "\n        "


@dataclass
class FileHeader:
    """Leading comment block and the exported client factory."""

    name: str
    description: str

    def render(self) -> str:
        return (
            "// DO NOT MODIFY THIS FILE MANUALLY\n"
            "// This file was generated by apireflect\n"
            "//\n"
            f"// Schema name: {self.name}\n"
            f"// {self.description}\n"
            "\n"
            "export function client(base: string | Client): __definition.Interface {\n"
            "    return __implementation.__client(base)\n"
            "}"
        )


@dataclass
class Module:
    """A namespace holding rendered types and nested namespaces."""

    name: str
    types: list = field(default_factory=list)
    submodules: dict = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not self.types and all(m.is_empty() for m in self.submodules.values())

    def _is_silent(self) -> bool:
        return not self.name or self.is_empty()

    def _render_start(self) -> str:
        if self._is_silent():
            return ""
        return f"export namespace {self.name.replace('-', '_')} {{"

    def _render_end(self) -> str:
        return "" if self._is_silent() else "}"

    def render(self) -> str:
        submodules = sorted(self.submodules.values(), key=lambda m: m.name)
        types = "".join(f"\n{t}" for t in self.types)
        modules = "".join(f"\n{m.render()}" for m in submodules)
        return f"\n{self._render_start()}{types}{modules}\n\n{self._render_end()}"


@dataclass
class TsField:
    """A property of an interface, or an element of a tuple."""

    name: str
    description: str
    type_: str
    optional: bool = False

    @property
    def is_unnamed(self) -> bool:
        digits = self.name[1:] if self.name.startswith("+") else self.name
        return (
            bool(digits)
            and digits.isascii()
            and digits.isdigit()
            and int(digits) < 2**64
        )

    def _normalized_name(self) -> str:
        allowed = ("_", "-")
        needs_quotes = any(
            (index == 0 and not char.isalpha() and char not in allowed)
            or (not char.isalnum() and char not in allowed)
            for index, char in enumerate(self.name)
        )
        normalized = self.name.replace("-", "_")
        return f'"{normalized}"' if needs_quotes else normalized

    def render(self) -> str:
        if self.is_unnamed:
            return f"{self.description}{self.type_}"
        marker = "?" if self.optional else ""
        return f"{self.description}{self._normalized_name()}{marker}: {self.type_}"


@dataclass
class Interface:
    """An interface, tuple type or intersection with flattened types."""

    name: str
    description: str = ""
    fields: list = field(default_factory=list)
    is_tuple: bool = False
    flattened_types: list = field(default_factory=list)

    def _keyword(self) -> str:
        return "type" if self.is_tuple or self.flattened_types else "interface"

    def _brackets(self) -> tuple[str, str]:
        if self.flattened_types:
            return "= {", "}"
        if self.is_tuple:
            return "= [", "]\n"
        return "{", "}"

    def _flattened(self) -> str:
        if not self.flattened_types:
            return ""
        return " & " + " &\n    ".join(self.flattened_types)

    def render(self) -> str:
        opening, closing = self._brackets()
        body = "".join(f"\n    {f.render()}," for f in self.fields)
        return (
            f"\n{self.description}export {self._keyword()} {self.name} {opening}"
            f"{body}\n{closing}{self._flattened()}"
        )


class FieldsKind(enum.Enum):
    NAMED = "named"
    UNNAMED = "unnamed"
    NONE = "none"


@dataclass
class TsFields:
    """Rendered fields of a variant, keeping whether they are named."""

    kind: FieldsKind = FieldsKind.NONE
    items: list = field(default_factory=list)

    def __post_init__(self) -> None:
        self.items = list(self.items)
        if self.kind is FieldsKind.NONE and self.items:
            raise ValueError("fields of kind NONE cannot hold items")

    @classmethod
    def named(cls, items: Iterable[TsField] = ()) -> "TsFields":
        return cls(FieldsKind.NAMED, list(items))

    @classmethod
    def unnamed(cls, items: Iterable[TsField] = ()) -> "TsFields":
        return cls(FieldsKind.UNNAMED, list(items))

    @classmethod
    def none(cls) -> "TsFields":
        return cls(FieldsKind.NONE)

    @property
    def is_unnamed(self) -> bool:
        return self.kind is FieldsKind.UNNAMED

    def __iter__(self) -> Iterator[TsField]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass
class TsVariant:
    """One member of a union type, shaped by the enum's representation."""

    name: str
    description: str = ""
    representation: Representation = field(default_factory=Representation.external)
    fields: TsFields = field(default_factory=TsFields)
    discriminant: Optional[int] = None
    untagged: bool = False

    def _field_brackets(self) -> tuple[str, str]:
        if not self.fields:
            return "", ""
        if self.fields.is_unnamed:
            return ("", "") if len(self.fields) == 1 else ("[", "]")
        return "{", "}"

    def _normalized_name(self) -> str:
        needs_quotes = any(
            (index == 0 and not char.isalpha() and char != "_")
            or (not char.isalnum() and char != "_")
            for index, char in enumerate(self.name)
        )
        return f'"{self.name}"' if needs_quotes else self.name

    def _empty_value(self) -> str:
        return {
            FieldsKind.NAMED: "{}",
            FieldsKind.UNNAMED: "[]",
            FieldsKind.NONE: "null",
        }[self.fields.kind]

    def _render_fields(self, inner_tag: Optional[str] = None) -> str:
        opening, closing = self._field_brackets()
        if not opening and not self.fields:
            return self._empty_value()
        rendered = []
        if inner_tag is not None:
            rendered.append(f'{inner_tag}: "{self.name}"')
        rendered.extend(f.render() for f in self.fields)
        joined = (",\n            ").join(rendered)
        return f"{opening}{_FIELD_INDENT}{joined}{_CLOSE_INDENT}{closing}"

    def _render_external(self) -> str:
        if not self.fields:
            if self.discriminant is not None:
                return f"{self.discriminant} /* {self.name} */"
            if self.fields.kind is FieldsKind.NAMED:
                return f"{{ {self.name}: {{}} }}"
            if self.fields.kind is FieldsKind.UNNAMED:
                return f"{{ {self.name}: [] }}"
            return f'"{self.name}"'
        return (
            f"{{\n        {self._normalized_name()}: {self._render_fields()}\n    }}"
        )

    def _render_internal(self, tag: str) -> str:
        if not self.fields:
            if self.fields.kind is FieldsKind.UNNAMED:
                raise ValueError("tuple variants cannot be internally tagged")
            return f'{{ {tag}: "{self.name}" }}'
        if len(self.fields) == 1 and self.fields.is_unnamed:
            return f'{{ {tag}: "{self.name}" }} & {self._render_fields()}'
        return self._render_fields(tag)

    def _render_adjacent(self, tag: str, content: str) -> str:
        if not self.fields:
            empty = "[]" if self.fields.kind is FieldsKind.UNNAMED else "{}"
            return f'{{ {tag}: "{self.name}", {content}: {empty} }}'
        return (
            f'{{ {tag}: "{self._normalized_name()}", {content}: '
            f"{self._render_fields()} }}"
        )

    def _render_self(self) -> str:
        if self.untagged:
            return self._render_fields()
        kind = self.representation.kind
        if kind is Representation.Kind.EXTERNAL:
            return self._render_external()
        if kind is Representation.Kind.INTERNAL:
            return self._render_internal(self.representation.tag)
        if kind is Representation.Kind.ADJACENT:
            return self._render_adjacent(
                self.representation.tag, self.representation.content
            )
        return self._render_fields()

    def render(self) -> str:
        """Render the variant; raises ValueError for an internally tagged tuple variant."""
        return f"{self.description}| {self._render_self()}"


@dataclass
class EnumTemplate:
    """A union type made of variants."""

    name: str
    description: str = ""
    variants: list = field(default_factory=list)

    def render(self) -> str:
        body = "".join(f"\n    {v.render()}" for v in self.variants)
        return f"\n{self.description}export type {self.name} ={body};"


@dataclass
class Alias:
    """A type alias."""

    name: str
    description: str
    type_: str

    def render(self) -> str:
        return f"\n{self.description}export type {self.name} = {self.type_};"


@dataclass
class FunctionImplementation:
    """A client function that posts to one endpoint."""

    name: str
    path: str
    input_type: str
    input_headers: str
    output_type: str
    error_type: str

    def render(self) -> str:
        return (
            f"function {self.name}(client: Client) {{\n"
            f"    return (input: {self.input_type}, headers: {self.input_headers})"
            " => __request<\n"
            f"        {self.input_type}, {self.input_headers}, {self.output_type},"
            f" {self.error_type}\n"
            f"    >(client, '{self.path}', input, headers);\n"
            "}"
        )


@dataclass
class ClientImplementationGroup:
    """An object literal wiring function implementations into the client, nested by group."""

    offset: int
    functions: dict = field(default_factory=dict)
    subgroups: dict = field(default_factory=dict)

    def render(self) -> str:
        if self.offset < 4:
            raise ValueError(f"offset must be at least 4, got {self.offset}")
        padding = " " * self.offset
        lines = ["{"]
        lines.extend(
            f'{padding}"{name}": {function}(client_instance),'
            for name, function in self.functions.items()
        )
        lines.extend(
            f'{padding}"{name}": {group.render()}'
            for name, group in self.subgroups.items()
        )
        lines.append(" " * (self.offset - 4) + "},")
        return "\n".join(lines)