"""Generation of TypeScript declarations and client wiring from a typespace."""

from __future__ import annotations

import warnings
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Optional, Union

from apireflect.tstemplates import (
    Alias,
    ClientImplementationGroup,
    EnumTemplate,
    FunctionImplementation,
    Interface,
    Module,
    TsField,
    TsFields,
    TsVariant,
)
from apireflect.typespace import (
    Enum,
    Field,
    Fields,
    Primitive,
    Struct,
    TypeReference,
    Typespace,
)

TypeDef = Union[Primitive, Struct, Enum]


def build_implemented_types() -> dict[str, str]:
    """TypeScript spellings of the types that have a native counterpart."""
    implemented = {
        name: f"number /* {name} */"
        for name in (
            "u8", "u16", "u32", "u64", "u128",
            "i8", "i16", "i32", "i64", "i128",
            "f32", "f64",
        )
    }
    implemented.update(
        {
            "bool": "boolean",
            "char": "string",
            "std::string::String": "string",
            # Generic parameter names must match those of the built-in definitions.
            "std::option::Option": "(T | null)",
            "std::array::Array": "FixedSizeArray<T, N>",
            "reflectapi::Option": "(T | null | undefined)",
            "std::vec::Vec": "Array<T>",
            "std::collections::HashMap": "Record<K, V>",
            # The unit type is serialized as null, not as an empty array.
            "std::tuple::Tuple0": "null",
        }
    )
    for count in range(1, 13):
        elements = ", ".join(f"T{i}" for i in range(1, count + 1))
        implemented[f"std::tuple::Tuple{count}"] = f"[{elements}]"
    implemented["serde_json::Value"] = "any /* serde_json::Value */"
    implemented["uuid::Uuid"] = "string /* uuid::Uuid */"
    implemented["std::marker::PhantomData"] = "undefined | T /* phantom data */"
    return implemented


def doc_to_ts_comments(
    doc: str, deprecation_note: Optional[str] = None, offset: int = 0
) -> str:
    """Render documentation as a JSDoc block indented by ``offset`` spaces."""
    if deprecation_note is not None:
        doc = f"@deprecated {deprecation_note}" + (f"\n{doc}" if doc else "")
    if not doc:
        return ""
    padding = " " * offset
    lines = [f"{padding}/**"]
    lines.extend(f"{padding} * {line}" for line in doc.split("\n"))
    lines.append(f"{padding} */\n")
    return "\n".join(lines)


def camelcase(name: str) -> str:
    """Convert a dashed, underscored or dotted name to CamelCase."""
    result = []
    capitalize = True
    for char in name:
        if char in "-_":
            capitalize = True
        elif char == ".":
            result.append("_")
            capitalize = True
        elif capitalize:
            result.append(char.upper() if char.isascii() else char)
            capitalize = False
        else:
            result.append(char)
    return "".join(result)


@dataclass
class FunctionGroup:
    """Functions sharing a dotted name prefix, with nested groups."""

    functions: list = field(default_factory=list)
    subgroups: dict = field(default_factory=dict)


def function_groups_from_function_names(function_names: Iterable[str]) -> FunctionGroup:
    """Group dotted function names into a tree by their prefixes."""
    root = FunctionGroup()
    for function_name in function_names:
        group = root
        for part in function_name.split(".")[:-1]:
            group = group.subgroups.setdefault(part, FunctionGroup())
        group.functions.append(function_name)
    return root


def client_impl_from_function_group(
    offset: int, group: FunctionGroup
) -> ClientImplementationGroup:
    """Build the client object literal for a function group."""
    return ClientImplementationGroup(
        offset=offset,
        functions={
            name.split(".")[-1].replace("-", "_"): name.replace(".", "__").replace("-", "_")
            for name in group.functions
        },
        subgroups={
            name.replace("-", "_"): client_impl_from_function_group(offset + 4, sub)
            for name, sub in group.subgroups.items()
        },
    )


def modules_from_rendered_types(
    original_type_names: Iterable[str], rendered_types: Mapping[str, str]
) -> Module:
    """Place rendered types into namespaces following their ``::`` paths."""
    remaining = dict(rendered_types)
    root = Module("")
    for type_name in original_type_names:
        module = root
        for part in type_name.split("::")[:-1]:
            if part not in module.submodules:
                module.submodules[part] = Module(part)
            module = module.submodules[part]
        rendered = remaining.pop(type_name, None)
        if rendered is not None:
            module.types.append(rendered)
    return root


def _as_ref(value: Union[TypeReference, str]) -> TypeReference:
    return value if isinstance(value, TypeReference) else TypeReference(value)


def _resolve_type_ref(
    type_ref: TypeReference, typespace: Typespace, implemented_types: Mapping[str, str]
) -> Optional[str]:
    implementation = implemented_types.get(type_ref.name)
    if implementation is None:
        fallback = type_ref.fallback_once(typespace)
        if fallback is None:
            return None
        return type_ref_to_ts_ref(fallback, typespace, implemented_types)

    if not type_ref.arguments:
        return implementation

    type_def = typespace.get_type(type_ref.name)
    if type_def is None:
        return None

    if len(type_def.parameters) != len(type_ref.arguments):
        raise ValueError(
            f"type {type_ref.name} takes {len(type_def.parameters)} parameters, "
            f"got {len(type_ref.arguments)}"
        )
    for parameter, argument in zip(type_def.parameters, type_ref.arguments):
        parameter_name = str(parameter)
        if parameter_name in implementation:
            # Only the first occurrence, so that T1 does not clobber T11.
            implementation = implementation.replace(
                parameter_name,
                type_ref_to_ts_ref(argument, typespace, implemented_types),
                1,
            )
    return implementation


def type_ref_to_ts_ref(
    type_ref: Union[TypeReference, str],
    typespace: Typespace,
    implemented_types: Optional[Mapping[str, str]] = None,
) -> str:
    """Spell a type reference in TypeScript, resolving implementations and fallbacks.

    Raises ValueError when the arguments do not match the definition's parameters.
    """
    if implemented_types is None:
        implemented_types = build_implemented_types()
    type_ref = _as_ref(type_ref)
    resolved = _resolve_type_ref(type_ref, typespace, implemented_types)
    if resolved is not None:
        return resolved
    name = ".".join(type_ref.name.split("::"))
    arguments = ", ".join(
        type_ref_to_ts_ref(arg, typespace, implemented_types)
        for arg in type_ref.arguments
    )
    return f"{name}<{arguments}>" if arguments else name


def type_to_ts_name(type_def: TypeDef) -> str:
    """The declared TypeScript name: last path segment plus type parameters."""
    name = type_def.name.split("::")[-1]
    parameters = ", ".join(str(p) for p in type_def.parameters)
    return f"{name}<{parameters}>" if parameters else name


def _field_to_ts_field(
    source: Field, typespace: Typespace, implemented_types: Mapping[str, str]
) -> TsField:
    return TsField(
        name=source.wire_name,
        description=doc_to_ts_comments(source.description, source.deprecation_note, 4),
        type_=type_ref_to_ts_ref(source.type_ref, typespace, implemented_types),
        optional=not source.required,
    )


def _fields_to_ts_fields(
    fields: Fields, typespace: Typespace, implemented_types: Mapping[str, str]
) -> TsFields:
    converted = [_field_to_ts_field(f, typespace, implemented_types) for f in fields]
    if fields.is_named:
        return TsFields.named(converted)
    if fields.is_unnamed:
        return TsFields.unnamed(converted)
    return TsFields.none()


def _flattened_type(
    source: Field, typespace: Typespace, implemented_types: Mapping[str, str]
) -> str:
    ts_ref = type_ref_to_ts_ref(source.type_ref, typespace, implemented_types)
    if source.required:
        # A unit type renders as null, which does not intersect well; map it to {}.
        return f"NullToEmptyObject<{ts_ref}>"
    return f"Partial<{ts_ref.replace(' | null', '')}>"


def _render_struct(
    struct_def: Struct, typespace: Typespace, implemented_types: Mapping[str, str]
) -> str:
    type_name = type_to_ts_name(struct_def)
    description = doc_to_ts_comments(struct_def.description, None, 0)
    if struct_def.is_alias:
        field_type = struct_def.fields.items[0].type_ref
        return Alias(
            name=type_name,
            description=description,
            type_=type_ref_to_ts_ref(field_type, typespace, implemented_types),
        ).render()
    return Interface(
        name=type_name,
        description=description,
        is_tuple=struct_def.is_tuple,
        fields=[
            _field_to_ts_field(f, typespace, implemented_types)
            for f in struct_def.fields
            if not f.flattened
        ],
        flattened_types=[
            _flattened_type(f, typespace, implemented_types)
            for f in struct_def.fields
            if f.flattened
        ],
    ).render()


def _render_enum(
    enum_def: Enum, typespace: Typespace, implemented_types: Mapping[str, str]
) -> str:
    type_name = type_to_ts_name(enum_def)
    description = doc_to_ts_comments(enum_def.description, None, 0)
    if not enum_def.variants:
        # No value of this type can exist.
        return f"{description}export type {type_name} = never"
    return EnumTemplate(
        name=type_name,
        description=description,
        variants=[
            TsVariant(
                name=variant.wire_name,
                description=doc_to_ts_comments(variant.description, None, 4),
                representation=enum_def.representation,
                fields=_fields_to_ts_fields(variant.fields, typespace, implemented_types),
                discriminant=variant.discriminant,
                untagged=variant.untagged,
            )
            for variant in enum_def.variants
        ],
    ).render()


def render_type(
    type_def: TypeDef,
    typespace: Typespace,
    implemented_types: Optional[Mapping[str, str]] = None,
) -> str:
    """Render one type definition as a TypeScript declaration.

    Primitives with no implementation become ``any`` and emit a UserWarning.
    """
    if implemented_types is None:
        implemented_types = build_implemented_types()
    if isinstance(type_def, Struct):
        return _render_struct(type_def, typespace, implemented_types)
    if isinstance(type_def, Enum):
        return _render_enum(type_def, typespace, implemented_types)
    warnings.warn(
        f"{type_def.name} type is not implemented for Typescript", stacklevel=2
    )
    return Alias(
        name=type_to_ts_name(type_def),
        description=doc_to_ts_comments(type_def.description, None, 0),
        type_=f"any /* fallback to any for unimplemented type: {type_def.name} */",
    ).render()


def render_function(
    name: str,
    path: str,
    input_type: Optional[str] = None,
    input_headers: Optional[str] = None,
    output_type: Optional[str] = None,
    error_type: Optional[str] = None,
) -> str:
    """Render the client function for endpoint ``name`` under ``path``.

    Missing types are rendered as ``{}``.
    """
    return FunctionImplementation(
        name=name.replace("-", "_").replace(".", "__"),
        path=f"{path}/{name}",
        input_type=input_type if input_type is not None else "{}",
        input_headers=input_headers if input_headers is not None else "{}",
        output_type=output_type if output_type is not None else "{}",
        error_type=error_type if error_type is not None else "{}",
    ).render()