"""Extract Python values from a JSON value as described by a format string.

The format characters are those understood by ``pack``, with these
differences:

``{`` ... ``}``
    An object. Each key is an ``s`` taking the key name from the arguments,
    followed by the specification of its value. ``s?`` makes the key
    optional: when it is missing, its value specification is skipped and
    yields None for each of its results. A ``!`` before the closing brace
    requires every key of the object to be unpacked; ``*`` allows keys to
    be left over.
``[`` ... ``]``
    An array; ``!`` and ``*`` work as for objects.
``s``
    A string, given as ``str``. ``s%`` also gives its length in UTF-8 bytes.
``i``
    An integer, truncated to a signed 32-bit value.
``I``
    An integer.
``b``
    A boolean.
``f``
    A real number.
``F``
    A real number or an integer, given as ``float``.
``o``, ``O``
    The JSON value itself.
``n``
    Null; checked but gives no result.

Results are returned in the order their format characters appear.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from enum import IntFlag

from jsonmodel.containers import JsonArray, JsonObject
from jsonmodel.errors import ErrorCode, JsonError
from jsonmodel.pack import FormatScanner
from jsonmodel.scalars import (
    JsonInteger,
    JsonReal,
    JsonString,
    JsonType,
    JsonValue,
    number_value,
)

_VALUE_STARTERS = frozenset("{[siIbfFOon")


class UnpackFlag(IntFlag):
    """Options for ``unpack``."""

    STRICT = 0x1
    VALIDATE_ONLY = 0x2


def _int32(value: int) -> int:
    return ((value + 2**31) % 2**32) - 2**31


class _Unpacker:
    def __init__(self, scanner: FormatScanner, args: Iterable[object]) -> None:
        self._scanner = scanner
        self._args: Iterator[object] = iter(args)
        self._validate_only = bool(scanner.flags & UnpackFlag.VALIDATE_ONLY)
        self._strict = bool(scanner.flags & UnpackFlag.STRICT)
        self.results: list[object] = []

    def _fail(self, source: str, code: ErrorCode, text: str) -> None:
        raise self._scanner.error(source, code, text)

    def _emit(self, value: object) -> None:
        if not self._validate_only:
            self.results.append(value)

    def _wrong_type(self, expected: str, root: JsonValue) -> None:
        self._fail(
            "<validation>",
            ErrorCode.WRONG_TYPE,
            f"Expected {expected}, got {root.type.value}",
        )

    def _next_key(self) -> str:
        try:
            key = next(self._args)
        except StopIteration:
            raise self._scanner.error(
                "<args>",
                ErrorCode.INVALID_ARGUMENT,
                "Not enough arguments for format string",
            ) from None
        if key is None:
            self._fail("<args>", ErrorCode.NULL_VALUE, "NULL object key")
        if isinstance(key, (bytes, bytearray)):
            return bytes(key).decode("utf-8", errors="surrogateescape")
        if isinstance(key, str):
            return key
        raise TypeError(f"object keys must be str or bytes, got {type(key).__name__}")

    def _unpack_object(self, root: JsonValue | None) -> None:
        s = self._scanner
        if root is not None and not isinstance(root, JsonObject):
            self._wrong_type("object", root)
        s.advance()

        strict = 0
        seen: set[str] = set()
        while s.token != "}":
            if strict:
                mark = "!" if strict == 1 else "*"
                self._fail(
                    "<format>",
                    ErrorCode.INVALID_FORMAT,
                    f"Expected '}}' after '{mark}', got '{s.token}'",
                )
            if not s.token:
                self._fail(
                    "<format>", ErrorCode.INVALID_FORMAT, "Unexpected end of format string"
                )
            if s.token in ("!", "*"):
                strict = 1 if s.token == "!" else -1
                s.advance()
                continue
            if s.token != "s":
                self._fail(
                    "<format>",
                    ErrorCode.INVALID_FORMAT,
                    f"Expected format 's', got '{s.token}'",
                )

            key = self._next_key()
            s.advance()
            optional = False
            if s.token == "?":
                optional = True
                s.advance()

            value: JsonValue | None = None
            if root is not None:
                value = root.get(key)  # type: ignore[union-attr]
                if value is None and not optional:
                    self._fail(
                        "<validation>",
                        ErrorCode.ITEM_NOT_FOUND,
                        f"Object item not found: {key}",
                    )

            self.unpack_value(value)
            seen.add(key)
            s.advance()

        if strict == 0 and self._strict:
            strict = 1

        if isinstance(root, JsonObject) and strict == 1:
            left = [key for key in root.keys() if key not in seen]
            if left:
                self._fail(
                    "<validation>",
                    ErrorCode.END_OF_INPUT_EXPECTED,
                    f"{len(left)} object item(s) left unpacked: {', '.join(left)}",
                )

    def _unpack_array(self, root: JsonValue | None) -> None:
        s = self._scanner
        if root is not None and not isinstance(root, JsonArray):
            self._wrong_type("array", root)
        s.advance()

        strict = 0
        index = 0
        while s.token != "]":
            if strict:
                mark = "!" if strict == 1 else "*"
                self._fail(
                    "<format>",
                    ErrorCode.INVALID_FORMAT,
                    f"Expected ']' after '{mark}', got '{s.token}'",
                )
            if not s.token:
                self._fail(
                    "<format>", ErrorCode.INVALID_FORMAT, "Unexpected end of format string"
                )
            if s.token in ("!", "*"):
                strict = 1 if s.token == "!" else -1
                s.advance()
                continue
            if s.token not in _VALUE_STARTERS:
                self._fail(
                    "<format>",
                    ErrorCode.INVALID_FORMAT,
                    f"Unexpected format character '{s.token}'",
                )

            value: JsonValue | None = None
            if root is not None:
                value = root.get(index)  # type: ignore[union-attr]
                if value is None:
                    self._fail(
                        "<validation>",
                        ErrorCode.INDEX_OUT_OF_RANGE,
                        f"Array index {index} out of range",
                    )

            self.unpack_value(value)
            s.advance()
            index += 1

        if strict == 0 and self._strict:
            strict = 1

        if isinstance(root, JsonArray) and strict == 1 and index != len(root):
            diff = len(root) - index
            self._fail(
                "<validation>",
                ErrorCode.END_OF_INPUT_EXPECTED,
                f"{diff} array item(s) left unpacked",
            )

    def _unpack_string(self, root: JsonValue | None) -> None:
        s = self._scanner
        if root is not None and not isinstance(root, JsonString):
            self._wrong_type("string", root)
        if self._validate_only:
            return

        s.advance()
        with_length = s.token == "%"
        if not with_length:
            s.back()

        if isinstance(root, JsonString):
            self._emit(root.value)
            if with_length:
                self._emit(len(root))
        else:
            self._emit(None)
            if with_length:
                self._emit(None)

    def unpack_value(self, root: JsonValue | None) -> None:
        token = self._scanner.token
        if token == "{":
            self._unpack_object(root)
        elif token == "[":
            self._unpack_array(root)
        elif token == "s":
            self._unpack_string(root)
        elif token in ("i", "I"):
            if root is not None and not isinstance(root, JsonInteger):
                self._wrong_type("integer", root)
            if isinstance(root, JsonInteger):
                self._emit(_int32(root.value) if token == "i" else root.value)
            else:
                self._emit(None)
        elif token == "b":
            if root is not None and root.type not in (JsonType.TRUE, JsonType.FALSE):
                self._wrong_type("true or false", root)
            self._emit(None if root is None else root.type is JsonType.TRUE)
        elif token == "f":
            if root is not None and not isinstance(root, JsonReal):
                self._wrong_type("real", root)
            self._emit(None if root is None else number_value(root))
        elif token == "F":
            if root is not None and not isinstance(root, (JsonInteger, JsonReal)):
                self._wrong_type("real or integer", root)
            self._emit(None if root is None else number_value(root))
        elif token in ("o", "O"):
            self._emit(root)
        elif token == "n":
            if root is not None and root.type is not JsonType.NULL:
                self._wrong_type("null", root)
        else:
            self._fail(
                "<format>",
                ErrorCode.INVALID_FORMAT,
                f"Unexpected format character '{token}'",
            )


def unpack(
    root: JsonValue | None, fmt: str, *args: object, flags: int = 0
) -> list[object]:
    """Check ``root`` against ``fmt`` and return the values it selects.

    ``args`` supply the object keys named by the format. With
    ``UnpackFlag.VALIDATE_ONLY`` nothing is extracted and the result is
    empty. Raises JsonError when the format is malformed or the value does
    not match it.
    """
    if root is None:
        raise JsonError("NULL root value", ErrorCode.NULL_VALUE, "<root>", -1, -1, 0)
    if not fmt:
        raise JsonError(
            "NULL or empty format string",
            ErrorCode.INVALID_ARGUMENT,
            "<format>",
            -1,
            -1,
            0,
        )

    scanner = FormatScanner(fmt, int(flags))
    scanner.advance()
    unpacker = _Unpacker(scanner, args)
    unpacker.unpack_value(root)

    scanner.advance()
    if scanner.token:
        raise scanner.error(
            "<format>", ErrorCode.INVALID_FORMAT, "Garbage after format string"
        )
    return unpacker.results