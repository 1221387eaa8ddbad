"""Scalar JSON values and the operations shared by every JSON value."""

from __future__ import annotations

import math
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum

from jsonmodel.errors import CircularReferenceError, ErrorCode, JsonError
from jsonmodel.utf import utf8_check_string

INTEGER_MIN = -(2**63)
INTEGER_MAX = 2**63 - 1


class JsonType(Enum):
    """The kind of a JSON value."""

    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    INTEGER = "integer"
    REAL = "real"
    TRUE = "true"
    FALSE = "false"
    NULL = "null"


class JsonValue:
    """Base of every JSON value.

    Subclasses implement ``copy`` and ``_equal``; containers also override
    ``_deep_copy`` to copy their members and guard against cycles.
    """

    type: JsonType

    __hash__ = None  # type: ignore[assignment]

    def copy(self) -> JsonValue:
        """Return a shallow copy; singletons return themselves."""
        raise NotImplementedError

    def deep_copy(self) -> JsonValue:
        """Return a copy that shares no mutable value with this one.

        Raises CircularReferenceError when the value contains itself.
        """
        return self._deep_copy(set())

    def _deep_copy(self, parents: set[int]) -> JsonValue:
        return self.copy()

    @contextmanager
    def _visit(self, parents: set[int]) -> Iterator[None]:
        """Mark this value as being walked; fail if it already is."""
        key = id(self)
        if key in parents:
            raise CircularReferenceError(
                "circular reference detected", ErrorCode.INVALID_ARGUMENT
            )
        parents.add(key)
        try:
            yield
        finally:
            parents.discard(key)

    def _equal(self, other: JsonValue) -> bool:
        return False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonValue):
            return NotImplemented
        return equal(self, other)


class JsonString(JsonValue):
    """A JSON string holding valid Unicode text.

    Bytes are accepted when they are valid UTF-8. ``len()`` gives the length
    of the UTF-8 encoding in bytes.
    """

    type = JsonType.STRING

    def __init__(self, value: str | bytes) -> None:
        self._value = ""
        self._encoded = b""
        self.value = value

    @property
    def value(self) -> str:
        return self._value

    @value.setter
    def value(self, value: str | bytes) -> None:
        if isinstance(value, (bytes, bytearray)):
            encoded = bytes(value)
            if not utf8_check_string(encoded):
                raise JsonError("Invalid UTF-8 string", ErrorCode.INVALID_UTF8)
            text = encoded.decode("utf-8")
        elif isinstance(value, str):
            try:
                encoded = value.encode("utf-8")
            except UnicodeEncodeError as exc:
                raise JsonError("Invalid UTF-8 string", ErrorCode.INVALID_UTF8) from exc
            text = value
        else:
            raise TypeError(f"expected str or bytes, got {type(value).__name__}")
        self._value = text
        self._encoded = encoded

    def __len__(self) -> int:
        return len(self._encoded)

    def __bytes__(self) -> bytes:
        return self._encoded

    def __str__(self) -> str:
        return self._value

    def copy(self) -> JsonString:
        return JsonString(self._value)

    def _equal(self, other: JsonValue) -> bool:
        return isinstance(other, JsonString) and self._encoded == other._encoded

    def __repr__(self) -> str:
        return f"JsonString({self._value!r})"


class JsonInteger(JsonValue):
    """A JSON integer in the signed 64-bit range."""

    type = JsonType.INTEGER

    def __init__(self, value: int) -> None:
        self._value = 0
        self.value = value

    @property
    def value(self) -> int:
        return self._value

    @value.setter
    def value(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"expected int, got {type(value).__name__}")
        if not INTEGER_MIN <= value <= INTEGER_MAX:
            raise OverflowError(f"integer out of range: {value}")
        self._value = value

    def __int__(self) -> int:
        return self._value

    def copy(self) -> JsonInteger:
        return JsonInteger(self._value)

    def _equal(self, other: JsonValue) -> bool:
        return isinstance(other, JsonInteger) and self._value == other._value

    def __repr__(self) -> str:
        return f"JsonInteger({self._value})"


class JsonReal(JsonValue):
    """A JSON real number; NaN and infinities are rejected."""

    type = JsonType.REAL

    def __init__(self, value: float) -> None:
        self._value = 0.0
        self.value = value

    @property
    def value(self) -> float:
        return self._value

    @value.setter
    def value(self, value: float) -> None:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"expected float, got {type(value).__name__}")
        number = float(value)
        if not math.isfinite(number):
            raise ValueError(f"invalid floating point value: {number!r}")
        self._value = number

    def __float__(self) -> float:
        return self._value

    def copy(self) -> JsonReal:
        return JsonReal(self._value)

    def _equal(self, other: JsonValue) -> bool:
        return isinstance(other, JsonReal) and self._value == other._value

    def __repr__(self) -> str:
        return f"JsonReal({self._value!r})"


class JsonConstant(JsonValue):
    """One of the singletons true, false and null."""

    _instances: dict[JsonType, JsonConstant] = {}
    _VALUES = {JsonType.TRUE: True, JsonType.FALSE: False, JsonType.NULL: None}

    def __new__(cls, json_type: JsonType) -> JsonConstant:
        if json_type not in cls._VALUES:
            raise ValueError(f"not a constant type: {json_type}")
        instance = cls._instances.get(json_type)
        if instance is None:
            instance = super().__new__(cls)
            instance.type = json_type
            cls._instances[json_type] = instance
        return instance

    @property
    def value(self) -> bool | None:
        return self._VALUES[self.type]

    def copy(self) -> JsonConstant:
        return self

    def __repr__(self) -> str:
        return f"JsonConstant({self.type.name})"


def json_true() -> JsonConstant:
    """Return the true singleton."""
    return JsonConstant(JsonType.TRUE)


def json_false() -> JsonConstant:
    """Return the false singleton."""
    return JsonConstant(JsonType.FALSE)


def json_null() -> JsonConstant:
    """Return the null singleton."""
    return JsonConstant(JsonType.NULL)


def json_boolean(value: object) -> JsonConstant:
    """Return true or false according to the truth of ``value``."""
    return json_true() if value else json_false()


def number_value(value: JsonValue | None) -> float:
    """Return the numeric value of an integer or real, else 0.0."""
    if isinstance(value, JsonInteger):
        return float(value.value)
    if isinstance(value, JsonReal):
        return value.value
    return 0.0


def string_format(fmt: str, *args: object) -> JsonString:
    """Build a JSON string from printf-style formatting."""
    return JsonString(fmt % args if args else fmt.replace("%%", "%"))


def equal(first: JsonValue | None, second: JsonValue | None) -> bool:
    """Tell whether two JSON values are equal; None equals nothing."""
    if first is None or second is None:
        return False
    if first.type is not second.type:
        return False
    if first is second:
        return True
    return first._equal(second)


def copy(value: JsonValue | None) -> JsonValue | None:
    """Return a shallow copy of ``value``, or None for None."""
    if value is None:
        return None
    return value.copy()


def deep_copy(value: JsonValue | None) -> JsonValue | None:
    """Return a deep copy of ``value``, or None for None."""
    if value is None:
        return None
    return value.deep_copy()