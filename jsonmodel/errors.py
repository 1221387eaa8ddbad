"""Error types raised by the JSON value model."""

from __future__ import annotations

from enum import Enum, auto


class ErrorCode(Enum):
    """Machine-readable kind of a JSON error."""

    UNKNOWN = auto()
    OUT_OF_MEMORY = auto()
    STACK_OVERFLOW = auto()
    CANNOT_OPEN_FILE = auto()
    INVALID_ARGUMENT = auto()
    INVALID_UTF8 = auto()
    PREMATURE_END_OF_INPUT = auto()
    END_OF_INPUT_EXPECTED = auto()
    INVALID_SYNTAX = auto()
    INVALID_FORMAT = auto()
    WRONG_TYPE = auto()
    NULL_CHARACTER = auto()
    NULL_VALUE = auto()
    NULL_BYTE_IN_KEY = auto()
    DUPLICATE_KEY = auto()
    NUMERIC_OVERFLOW = auto()
    ITEM_NOT_FOUND = auto()
    INDEX_OUT_OF_RANGE = auto()


class JsonError(Exception):
    """An error with a code and the place in the input where it arose.

    ``line`` and ``column`` are -1 when no place applies.
    """

    def __init__(
        self,
        text: str,
        code: ErrorCode = ErrorCode.UNKNOWN,
        source: str = "",
        line: int = -1,
        column: int = -1,
        position: int = 0,
    ) -> None:
        super().__init__(text)
        self.text = text
        self.code = code
        self.source = source
        self.line = line
        self.column = column
        self.position = position

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.text!r}, {self.code}, source={self.source!r}, "
            f"line={self.line}, column={self.column}, position={self.position})"
        )


class CircularReferenceError(JsonError):
    """A value was found to contain itself."""