# apireflect

`apireflect` describes the types of an API in a shared *typespace* and
renders TypeScript declarations and client wiring from those descriptions.
It has no dependencies outside the standard library.

## Installation

```
pip install apireflect
```

For the test suite, install the `test` extra:

```
pip install "apireflect[test]"
```

## Describing types

A `Typespace` (in `apireflect.typespace`) holds type definitions
(`Primitive`, `Struct`, `Enum`) by name, in insertion order. Each helper
registers its definition the first time it is asked for one and returns a
`TypeReference` to it.

```python
from apireflect.typespace import Typespace
from apireflect.builtins import builtin_type, vec_type, option_type, hashmap_type, duration_type
from apireflect.wellknown import uuid_type, datetime_type

space = Typespace()
names = vec_type(space, builtin_type(space, "std::string::String"))
maybe_id = option_type(space, uuid_type(space))
stamps = hashmap_type(space, builtin_type(space, "u32"), datetime_type(space, "chrono::Utc"))
duration_type(space)

print(space.type_names())
```

`apireflect.builtins` covers scalars, `vec_type`, `option_type`,
`hashmap_type`, `btreemap_type`, `hashset_type`, `btreeset_type`,
`tuple_type` (up to 12 elements; none is the unit type), `array_type`,
`pointer_type`, `phantom_data_type`, `duration_type` and `path_type`.
`apireflect.wellknown` adds date and time types, insertion-ordered maps and
sets, JSON values and maps, decimals, URLs and UUIDs. Unknown names raise
`ValueError`.

Some types carry a fallback. `TypeReference.fallback_once(typespace)`
resolves it one step, for example from `std::collections::BTreeMap<K, V>` to
`std::collections::HashMap<K, V>`.

## Values that may be missing

`Undefinable` (in `apireflect.undefinable`) tells apart a value that is
absent, one that is `null`, and one that holds something:

```python
from apireflect.undefinable import Undefinable

payload = {}
Undefinable.undefined().store(payload, "value")   # nothing is written
Undefinable.none().store(payload, "value")        # payload == {"value": None}

loaded = Undefinable.load({"value": "test"}, "value", str)
assert loaded.is_some()
```

`Undefinable.load` raises `TypeError` when the value is not of the expected
type. `undefinable_type(typespace, item)` describes it in a typespace.

## Generating TypeScript

`apireflect.typescript` turns definitions into TypeScript source:

```python
from apireflect.typescript import build_implemented_types, render_type, render_function

implemented = build_implemented_types()
print(render_type(space.get_type("std::time::Duration"), space, implemented))
print(render_function("users.get", "/api", "{}", "{}", "User", "{}"))
```

It also offers `type_ref_to_ts_ref`, `type_to_ts_name`, `doc_to_ts_comments`,
`camelcase`, `function_groups_from_function_names`,
`client_impl_from_function_group` and `modules_from_rendered_types`.
A primitive with no TypeScript counterpart is rendered as `any` and emits a
`UserWarning`.

Lower-level pieces (`FileHeader`, `Module`, `Interface`, `EnumTemplate`,
`TsVariant`, `TsField`, `Alias`, `FunctionImplementation`,
`ClientImplementationGroup`) live in `apireflect.tstemplates`.

## Validation errors

```python
from apireflect.validation import ValidationError, ValidationPointer

err = ValidationError(ValidationPointer.field("myapi::User", "email"), "must not be empty")
print(err)  # myapi::User.email: must not be empty
```

## What it does not do

- It renders the pieces of a TypeScript client but has no single call that
  assembles a whole client file, and it does not run a formatter or a type
  checker over the output.
- It has no command-line program.
- It does not send requests: there is no HTTP client or request runtime.