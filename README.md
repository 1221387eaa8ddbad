# jsonmodel

`jsonmodel` is an in-memory model of JSON values. It provides:

- typed values for every JSON type
- structural equality
- shallow copying, and deep copying that detects circular references
- strict UTF-8 checking
- compact format strings for building values and for checking values or pulling data out of them

It uses only the standard library.

## Installation

```
pip install jsonmodel
```

To run the test suite, install the `test` extra and run pytest from the
project directory:

```
pip install "jsonmodel[test]"
pytest
```

## Values

The module `jsonmodel.scalars` holds the scalar types and `jsonmodel.containers` holds the containers.

| JSON type       | Class / constructor                           |
|-----------------|-----------------------------------------------|
| object          | `JsonObject`                                  |
| array           | `JsonArray`                                   |
| string          | `JsonString`                                  |
| integer         | `JsonInteger`                                 |
| real            | `JsonReal`                                    |
| true/false/null | `json_true()`, `json_false()`, `json_null()`  |

Every value derives from `JsonValue`. The `type` attribute of a value is a member of `JsonType`.

`true`, `false` and `null` are shared `JsonConstant` instances. `json_boolean(value)` returns the one that matches the truth of a Python value.

```python
from jsonmodel.containers import JsonArray, JsonObject
from jsonmodel.scalars import JsonInteger, JsonReal, JsonString, json_true

config = JsonObject()
config.set("name", JsonString("server"))
config.set("port", JsonInteger(8080))
config.set("ratio", JsonReal(0.5))
config.set("enabled", json_true())

ports = JsonArray([JsonInteger(80), JsonInteger(443)])
ports.append(JsonInteger(8443))
config.set("ports", ports)

print(len(config), list(config.keys()))
```

### Scalar values

- **`JsonString`** accepts `str`, or `bytes` that are valid UTF-8. Anything else raises `JsonError` with `ErrorCode.INVALID_UTF8`. `len()` gives the length of the UTF-8 encoding in bytes.
- **`JsonInteger`** holds a signed 64-bit value. A value outside that range raises `OverflowError`.
- **`JsonReal`** must be finite. NaN and infinities raise `ValueError`.
- **`number_value(value)`** reads an integer or a real as a `float`. For any other value it returns `0.0`.
- **`string_format(fmt, *args)`** builds a `JsonString` with `%`-style formatting.

### Objects

Objects keep their keys in insertion order.

- `set` requires the key to be valid UTF-8. `set_nocheck` skips that check.
- `get` returns `None` for a missing key.
- `delete` raises `KeyError` for a missing key.
- Other operations: `clear`, `items`, `keys`, `in` and iteration over the keys.
- Merge operations: `update`, `update_existing`, `update_missing` and `update_recursive`. `update_recursive` merges nested objects present on both sides.

### Arrays

- Supported operations: `get`, `set`, `append`, `insert`, `remove`, `clear`, `extend`, indexing and iteration.
- `get` returns `None` for an index out of range.
- Indexing, `set`, `insert` and `remove` raise `IndexError` for an index out of range.
- A container cannot be stored in itself directly; trying raises `JsonError`.

## Equality and copying

```python
from jsonmodel.scalars import copy, deep_copy, equal

clone = deep_copy(config)
assert equal(clone, config)
assert clone == config
```

- `equal(first, second)` compares structurally. `None` equals nothing.
- `copy` makes a new container that shares its members with the original.
- `deep_copy` copies all the way down. It raises `CircularReferenceError` when a container contains itself through its members.
- `true`, `false` and `null` are never duplicated: copying them returns the same object.

Each value also has `copy()` and `deep_copy()` methods.

## Packing

`jsonmodel.pack.pack(fmt, *args, flags=0)` builds a value from a format string and arguments. Format characters:

| Char  | Meaning                                                          |
|-------|------------------------------------------------------------------|
| `{}`  | object; each key is an `s` followed by the value's specification |
| `[]`  | array                                                            |
| `s`   | string from `str` or `bytes`                                     |
| `n`   | null (takes no argument)                                         |
| `b`   | true or false by the truth of the argument                       |
| `i`   | integer                                                          |
| `I`   | integer                                                          |
| `f`   | real                                                             |
| `o`   | an existing `JsonValue`, used as it is                           |
| `O`   | an existing `JsonValue`, used as it is                           |

Whitespace, `,` and `:` between format characters are ignored.

Modifiers for `s`:

- `s#` and `s%` take a further length argument and keep only that many bytes.
- `s+s` joins further arguments into one string.

Modifiers for `s`, `o` and `O`:

- A following `?` turns a `None` argument into null.
- A following `*` leaves the item out of its container.

```python
from jsonmodel.pack import pack

value = pack("{s:i, s:[iii], s:s}", "id", 1, "list", 1, 2, 3, "name", "demo")
```

`pack` returns `None` only when the whole value is optional and its argument is `None`.

## Unpacking

`jsonmodel.unpack.unpack(root, fmt, *args, flags=0)` checks a value against a format string. It returns a list of the selected values, in the order their format characters appear. The arguments supply the object keys.

| Char  | Result                                                      |
|-------|-------------------------------------------------------------|
| `s`   | the string as `str`; `s%` also gives its length in bytes    |
| `i`   | the integer, truncated to a signed 32-bit value             |
| `I`   | the integer                                                 |
| `b`   | a `bool`                                                    |
| `f`   | the real as `float`                                         |
| `F`   | a real or an integer as `float`                             |
| `o`   | the `JsonValue` itself                                      |
| `O`   | the `JsonValue` itself                                      |
| `n`   | checks for null, gives no result                            |

Object keys:

- `s?` after a key makes it optional. A missing optional key yields `None` for each of its results.
- `!` before a closing `}` or `]` requires every item to be unpacked.
- `*` before a closing `}` or `]` allows items to be left over.

Flags, from `UnpackFlag`:

- `UnpackFlag.STRICT` makes `!` the default.
- `UnpackFlag.VALIDATE_ONLY` checks the value without extracting anything; the result is empty.

```python
from jsonmodel.unpack import UnpackFlag, unpack

unpack(value, "{s:i, s:[iii], s:s}", "id", "list", "name")
# [1, 1, 2, 3, 'demo']

unpack(value, "{s:i}", "id", flags=UnpackFlag.STRICT)
# raises JsonError: "2 object item(s) left unpacked: list, name"
```

## Errors

Failures raise `jsonmodel.errors.JsonError`. Each error carries:

- its `text`
- an `ErrorCode`
- the `source` of the problem: `<format>`, `<args>`, `<validation>` or `<root>`
- the `line`, `column` and `position` in the format string where it was found

`CircularReferenceError` is a subclass of `JsonError`.

```python
from jsonmodel.errors import JsonError
from jsonmodel.pack import pack

try:
    pack("[i", 1)
except JsonError as exc:
    print(exc.code, exc.text)   # ErrorCode.INVALID_FORMAT Unexpected end of format string
```

## Utilities

### `jsonmodel.utf`

Strict UTF-8 handling:

- `utf8_encode(codepoint)` returns bytes.
- `utf8_check_first(byte)` returns the length a lead byte announces, or 0.
- `utf8_check_full(buffer)` returns the code point, or `None`.
- `utf8_iterate(buffer)` yields code points and raises `ValueError` on bad input.
- `utf8_check_string(data)` returns a `bool`.

### `jsonmodel.strconv`

Conversions that do not depend on the locale:

- `strtod(text)` raises `ValueError` for text that is not a number, and `OverflowError` on overflow.
- `dtostr(value, precision=0)` always writes a `.` or an exponent, so that the text reads back as a real. With precision 0 it writes the shortest exact representation.

### `jsonmodel.version`

- `version_str()` returns `"2.14.1"`.
- `version_cmp(major, minor, micro)` returns a negative, zero or positive number.

## What it does not do

`jsonmodel` works only with values in memory. It has no parser that reads JSON text, and no encoder that writes values out as JSON text or to files. There is no command-line tool.