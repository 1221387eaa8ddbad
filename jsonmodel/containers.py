"""JSON objects and arrays."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, KeysView, ItemsView

from jsonmodel.errors import ErrorCode, JsonError
from jsonmodel.scalars import JsonType, JsonValue, equal
from jsonmodel.utf import utf8_check_string


def _check_member(container: JsonValue, value: object) -> JsonValue:
    """Validate a value about to be stored in ``container``."""
    if not isinstance(value, JsonValue):
        raise TypeError(f"expected a JSON value, got {type(value).__name__}")
    if value is container:
        raise JsonError(
            "a container cannot hold itself directly", ErrorCode.INVALID_ARGUMENT
        )
    return value


def _checked_key(key: str | bytes) -> str:
    """Return ``key`` as text, requiring valid UTF-8."""
    if isinstance(key, (bytes, bytearray)):
        raw = bytes(key)
        if not utf8_check_string(raw):
            raise JsonError("Invalid UTF-8 object key", ErrorCode.INVALID_UTF8)
        return raw.decode("utf-8")
    if isinstance(key, str):
        try:
            key.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise JsonError("Invalid UTF-8 object key", ErrorCode.INVALID_UTF8) from exc
        return key
    raise TypeError(f"object keys must be str or bytes, got {type(key).__name__}")


def _plain_key(key: str | bytes) -> str:
    """Return ``key`` as text without validating its encoding."""
    if isinstance(key, (bytes, bytearray)):
        return bytes(key).decode("utf-8", errors="surrogateescape")
    if isinstance(key, str):
        return key
    raise TypeError(f"object keys must be str or bytes, got {type(key).__name__}")


class JsonObject(JsonValue):
    """A JSON object: string keys mapped to JSON values in insertion order."""

    type = JsonType.OBJECT

    def __init__(self) -> None:
        self._items: dict[str, JsonValue] = {}

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, (str, bytes, bytearray)):
            return False
        return _plain_key(key) in self._items

    def get(self, key: str | bytes | None) -> JsonValue | None:
        """Return the value stored under ``key``, or None when there is none."""
        if key is None:
            return None
        return self._items.get(_plain_key(key))

    def set(self, key: str | bytes, value: JsonValue) -> None:
        """Store ``value`` under ``key``; the key must be valid UTF-8."""
        self.set_nocheck(_checked_key(key), value)

    def set_nocheck(self, key: str | bytes, value: JsonValue) -> None:
        """Store ``value`` under ``key`` without checking the key's encoding."""
        name = _plain_key(key)
        self._items[name] = _check_member(self, value)

    def delete(self, key: str | bytes) -> None:
        """Remove ``key``; raise KeyError when it is absent."""
        name = _plain_key(key)
        try:
            del self._items[name]
        except KeyError:
            raise KeyError(name) from None

    def clear(self) -> None:
        """Remove every item."""
        self._items.clear()

    @staticmethod
    def _require_object(other: object) -> JsonObject:
        if not isinstance(other, JsonObject):
            raise TypeError(f"expected a JSON object, got {type(other).__name__}")
        return other

    def update(self, other: JsonObject) -> None:
        """Set every item of ``other`` in this object."""
        for key, value in list(self._require_object(other).items()):
            self.set_nocheck(key, value)

    def update_existing(self, other: JsonObject) -> None:
        """Set the items of ``other`` whose keys this object already has."""
        for key, value in list(self._require_object(other).items()):
            if key in self._items:
                self.set_nocheck(key, value)

    def update_missing(self, other: JsonObject) -> None:
        """Set the items of ``other`` whose keys this object lacks."""
        for key, value in list(self._require_object(other).items()):
            if key not in self._items:
                self.set_nocheck(key, value)

    def update_recursive(self, other: JsonObject) -> None:
        """Like update, but merge nested objects present on both sides.

        Raises CircularReferenceError when ``other`` contains itself along
        the merged path.
        """
        self._update_recursive(self._require_object(other), set())

    def _update_recursive(self, other: JsonObject, parents: set[int]) -> None:
        with other._visit(parents):
            for key, value in list(other.items()):
                current = self._items.get(key)
                if isinstance(current, JsonObject) and isinstance(value, JsonObject):
                    current._update_recursive(value, parents)
                else:
                    self.set_nocheck(key, value)

    def items(self) -> ItemsView[str, JsonValue]:
        """Return a view of the (key, value) pairs in order."""
        return self._items.items()

    def keys(self) -> KeysView[str]:
        """Return a view of the keys in order."""
        return self._items.keys()

    def copy(self) -> JsonObject:
        result = JsonObject()
        result._items = dict(self._items)
        return result

    def _deep_copy(self, parents: set[int]) -> JsonObject:
        with self._visit(parents):
            result = JsonObject()
            for key, value in self._items.items():
                result._items[key] = value._deep_copy(parents)
            return result

    def _equal(self, other: JsonValue) -> bool:
        if not isinstance(other, JsonObject) or len(self) != len(other):
            return False
        return all(
            equal(value, other._items.get(key)) for key, value in self._items.items()
        )

    def __repr__(self) -> str:
        inner = ", ".join(f"{key!r}: {value!r}" for key, value in self._items.items())
        return f"JsonObject({{{inner}}})"


class JsonArray(JsonValue):
    """A JSON array: an ordered sequence of JSON values."""

    type = JsonType.ARRAY

    def __init__(self, items: Iterable[JsonValue] = ()) -> None:
        self._items: list[JsonValue] = []
        for item in items:
            self.append(item)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[JsonValue]:
        return iter(self._items)

    def _check_index(self, index: int, limit: int) -> int:
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError(f"array index must be int, got {type(index).__name__}")
        if not 0 <= index < limit:
            raise IndexError(f"Array index {index} out of range")
        return index

    def __getitem__(self, index: int) -> JsonValue:
        return self._items[self._check_index(index, len(self._items))]

    def get(self, index: int) -> JsonValue | None:
        """Return the item at ``index``, or None when it is out of range."""
        if isinstance(index, bool) or not isinstance(index, int):
            return None
        if 0 <= index < len(self._items):
            return self._items[index]
        return None

    def set(self, index: int, value: JsonValue) -> None:
        """Replace the item at ``index``."""
        member = _check_member(self, value)
        self._items[self._check_index(index, len(self._items))] = member

    def append(self, value: JsonValue) -> None:
        """Add ``value`` at the end."""
        self._items.append(_check_member(self, value))

    def insert(self, index: int, value: JsonValue) -> None:
        """Insert ``value`` before ``index``; ``index`` may equal the length."""
        member = _check_member(self, value)
        self._items.insert(self._check_index(index, len(self._items) + 1), member)

    def remove(self, index: int) -> None:
        """Remove the item at ``index``."""
        del self._items[self._check_index(index, len(self._items))]

    def clear(self) -> None:
        """Remove every item."""
        self._items.clear()

    def extend(self, other: JsonArray) -> None:
        """Append every item of ``other``."""
        if not isinstance(other, JsonArray):
            raise TypeError(f"expected a JSON array, got {type(other).__name__}")
        self._items.extend(list(other._items))

    def copy(self) -> JsonArray:
        result = JsonArray()
        result._items = list(self._items)
        return result

    def _deep_copy(self, parents: set[int]) -> JsonArray:
        with self._visit(parents):
            result = JsonArray()
            result._items = [item._deep_copy(parents) for item in self._items]
            return result

    def _equal(self, other: JsonValue) -> bool:
        if not isinstance(other, JsonArray) or len(self) != len(other):
            return False
        return all(equal(a, b) for a, b in zip(self._items, other._items))

    def __repr__(self) -> str:
        return f"JsonArray({self._items!r})"