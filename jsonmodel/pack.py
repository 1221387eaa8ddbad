"""Build JSON values from a compact format string and Python arguments.

Format characters:

``{`` ... ``}``
    An object; keys are ``s`` specifications, each followed by a value.
``[`` ... ``]``
    An array of values.
``s``
    A string from a ``str`` or ``bytes`` argument. ``s#`` and ``s%`` take a
    further length argument that keeps only that many bytes; ``+`` joins
    further arguments to the same string. ``s?`` gives null for a None
    argument and ``s*`` leaves the value out of its container.
``n``
    Null; takes no argument.
``b``
    True or false according to the truth of the argument.
``i``, ``I``
    An integer.
``f``
    A real number.
``o``, ``O``
    A JSON value, used as it is. ``?`` and ``*`` act as for ``s``.

Whitespace, ``,`` and ``:`` are ignored between format characters.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from jsonmodel.containers import JsonArray, JsonObject
from jsonmodel.errors import ErrorCode, JsonError
from jsonmodel.scalars import (
    JsonInteger,
    JsonReal,
    JsonString,
    JsonValue,
    json_boolean,
    json_null,
)
from jsonmodel.utf import utf8_check_string

_IGNORED = " \t\n,:"


@dataclass(frozen=True)
class _Token:
    char: str = ""
    line: int = 0
    column: int = 0
    pos: int = 0


class FormatScanner:
    """Reads a format string one significant character at a time.

    ``token`` is the current character, or ``""`` at the end. One token can
    be pushed back with ``back``. Errors are recorded in ``failure``; the
    last one recorded is the one reported.
    """

    def __init__(self, fmt: str, flags: int = 0) -> None:
        self.fmt = fmt
        self.flags = flags
        self.has_error = False
        self.failure: JsonError | None = None
        self._index = 0
        self._line = 1
        self._column = 0
        self._pos = 0
        self.current = _Token()
        self._previous = _Token()
        self._pushed: _Token | None = None

    @property
    def token(self) -> str:
        return self.current.char

    @property
    def line(self) -> int:
        return self.current.line

    @property
    def column(self) -> int:
        return self.current.column

    @property
    def position(self) -> int:
        return self.current.pos

    def advance(self) -> None:
        """Move to the next significant character."""
        self._previous = self.current

        if self._pushed is not None:
            self.current = self._pushed
            self._pushed = None
            return

        end = len(self.fmt)
        if not self.current.char and self._index >= end:
            return

        self._column += 1
        self._pos += 1
        while self._index < end and self.fmt[self._index] in _IGNORED:
            if self.fmt[self._index] == "\n":
                self._line += 1
                self._column = 1
            else:
                self._column += 1
            self._pos += 1
            self._index += 1

        char = self.fmt[self._index] if self._index < end else ""
        self.current = _Token(char, self._line, self._column, self._pos)
        if char:
            self._index += 1

    def back(self) -> None:
        """Return to the previous token; the current one comes next again."""
        self._pushed = self.current if self.current.line else None
        self.current = self._previous

    def error(self, source: str, code: ErrorCode, text: str) -> JsonError:
        """Record an error at the current token and return it."""
        tok = self.current
        self.failure = JsonError(text, code, source, tok.line, tok.column, tok.pos)
        return self.failure


def _to_bytes(arg: object) -> bytes:
    if isinstance(arg, (bytes, bytearray)):
        return bytes(arg)
    if isinstance(arg, str):
        return arg.encode("utf-8", "surrogatepass")
    raise TypeError(f"expected str or bytes, got {type(arg).__name__}")


class _Packer:
    def __init__(self, scanner: FormatScanner, args: Iterable[object]) -> None:
        self._scanner = scanner
        self._args: Iterator[object] = iter(args)

    def _next_arg(self) -> object:
        try:
            return next(self._args)
        except StopIteration:
            raise self._scanner.error(
                "<args>",
                ErrorCode.INVALID_ARGUMENT,
                "Not enough arguments for format string",
            ) from None

    def _fail(self, source: str, code: ErrorCode, text: str) -> None:
        self._scanner.error(source, code, text)
        self._scanner.has_error = True

    def _peek(self) -> str:
        s = self._scanner
        s.advance()
        char = s.token
        s.back()
        return char

    def _read_string(self, purpose: str, optional: bool) -> bytes | None:
        s = self._scanner
        following = self._peek()

        if following not in ("#", "%", "+"):
            arg = self._next_arg()
            if arg is None:
                if not optional:
                    self._fail("<args>", ErrorCode.NULL_VALUE, f"NULL {purpose}")
                return None
            data = _to_bytes(arg)
            if not utf8_check_string(data):
                self._fail("<args>", ErrorCode.INVALID_UTF8, f"Invalid UTF-8 {purpose}")
                return None
            return data

        if optional:
            self._fail(
                "<format>",
                ErrorCode.INVALID_FORMAT,
                f"Cannot use '{following}' on optional strings",
            )
            return None

        parts: list[bytes] = []
        while True:
            arg = self._next_arg()
            if arg is None:
                self._fail("<args>", ErrorCode.NULL_VALUE, f"NULL {purpose}")

            s.advance()
            length: int | None = None
            if s.token in ("#", "%"):
                length_arg = self._next_arg()
                if isinstance(length_arg, bool) or not isinstance(length_arg, int):
                    raise TypeError(
                        f"string length must be int, got {type(length_arg).__name__}"
                    )
                length = length_arg
            else:
                s.back()

            if not s.has_error:
                data = _to_bytes(arg)
                if length is not None:
                    if not 0 <= length <= len(data):
                        self._fail(
                            "<args>",
                            ErrorCode.INVALID_ARGUMENT,
                            f"Invalid {purpose} length",
                        )
                    else:
                        data = data[:length]
                if not s.has_error:
                    parts.append(data)

            s.advance()
            if s.token != "+":
                s.back()
                break

        if s.has_error:
            return None

        joined = b"".join(parts)
        if not utf8_check_string(joined):
            self._fail("<args>", ErrorCode.INVALID_UTF8, f"Invalid UTF-8 {purpose}")
            return None
        return joined

    def _pack_object(self) -> JsonObject | None:
        s = self._scanner
        result = JsonObject()
        s.advance()

        while s.token != "}":
            if not s.token:
                s.error(
                    "<format>",
                    ErrorCode.INVALID_FORMAT,
                    "Unexpected end of format string",
                )
                return None
            if s.token != "s":
                s.error(
                    "<format>",
                    ErrorCode.INVALID_FORMAT,
                    f"Expected format 's', got '{s.token}'",
                )
                return None

            key = self._read_string("object key", False)
            s.advance()
            value_optional = self._peek()

            value = self.pack_value()
            if value is None:
                if value_optional != "*":
                    self._fail("<args>", ErrorCode.NULL_VALUE, "NULL object value")
                s.advance()
                continue

            if not s.has_error and key is not None:
                result.set_nocheck(key.decode("utf-8"), value)
            s.advance()

        return None if s.has_error else result

    def _pack_array(self) -> JsonArray | None:
        s = self._scanner
        result = JsonArray()
        s.advance()

        while s.token != "]":
            if not s.token:
                s.error(
                    "<format>",
                    ErrorCode.INVALID_FORMAT,
                    "Unexpected end of format string",
                )
                return None

            value_optional = self._peek()
            value = self.pack_value()
            if value is None:
                if value_optional != "*":
                    s.has_error = True
                s.advance()
                continue

            if not s.has_error:
                result.append(value)
            s.advance()

        return None if s.has_error else result

    def _pack_string(self) -> JsonValue | None:
        s = self._scanner
        s.advance()
        marker = s.token
        optional = marker in ("?", "*")
        if not optional:
            s.back()

        data = self._read_string("string", optional)
        if data is None:
            return json_null() if marker == "?" and not s.has_error else None
        if s.has_error:
            return None
        return JsonString(data)

    def _pack_json(self) -> JsonValue | None:
        s = self._scanner
        s.advance()
        marker = s.token
        if marker not in ("?", "*"):
            s.back()

        value = self._next_arg()
        if value is not None:
            if not isinstance(value, JsonValue):
                raise TypeError(f"expected a JSON value, got {type(value).__name__}")
            return value

        if marker == "?":
            return json_null()
        if marker == "*":
            return None

        self._fail("<args>", ErrorCode.NULL_VALUE, "NULL object")
        return None

    def _pack_integer(self) -> JsonValue | None:
        value = self._next_arg()
        try:
            return JsonInteger(value)  # type: ignore[arg-type]
        except OverflowError:
            self._fail("<args>", ErrorCode.NUMERIC_OVERFLOW, "Integer out of range")
            return None

    def _pack_real(self) -> JsonValue | None:
        value = self._next_arg()
        try:
            return JsonReal(value)  # type: ignore[arg-type]
        except ValueError:
            self._fail(
                "<args>", ErrorCode.NUMERIC_OVERFLOW, "Invalid floating point value"
            )
            return None

    def pack_value(self) -> JsonValue | None:
        token = self._scanner.token
        if token == "{":
            return self._pack_object()
        if token == "[":
            return self._pack_array()
        if token == "s":
            return self._pack_string()
        if token == "n":
            return json_null()
        if token == "b":
            return json_boolean(self._next_arg())
        if token in ("i", "I"):
            return self._pack_integer()
        if token == "f":
            return self._pack_real()
        if token in ("o", "O"):
            return self._pack_json()

        self._fail(
            "<format>",
            ErrorCode.INVALID_FORMAT,
            f"Unexpected format character '{token}'",
        )
        return None


def pack(fmt: str, *args: object, flags: int = 0) -> JsonValue | None:
    """Build a JSON value as described by ``fmt`` from ``args``.

    Returns None only when the whole value is optional (``s*`` or ``o*``)
    and its argument is None. Raises JsonError on format or argument errors.
    """
    if not fmt:
        raise JsonError(
            "NULL or empty format string",
            ErrorCode.INVALID_ARGUMENT,
            "<format>",
            -1,
            -1,
            0,
        )

    scanner = FormatScanner(fmt, flags)
    scanner.advance()
    value = _Packer(scanner, args).pack_value()

    if value is None:
        if scanner.failure is not None:
            raise scanner.failure
        return None

    scanner.advance()
    if scanner.token:
        raise scanner.error(
            "<format>", ErrorCode.INVALID_FORMAT, "Garbage after format string"
        )
    return value