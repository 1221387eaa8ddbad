"""UTF-8 validation, decoding and encoding helpers."""

from __future__ import annotations

from collections.abc import Iterator

MAX_CODEPOINT = 0x10FFFF

_LEAD_MASKS = {2: 0x1F, 3: 0x0F, 4: 0x07}
_MIN_FOR_LENGTH = {2: 0x80, 3: 0x800, 4: 0x10000}


def utf8_encode(codepoint: int) -> bytes:
    """Encode a code point as UTF-8 bytes.

    Surrogate code points are encoded like any other value in range.
    """
    if codepoint < 0 or codepoint > MAX_CODEPOINT:
        raise ValueError(f"code point out of range: {codepoint:#x}")
    if codepoint < 0x80:
        return bytes([codepoint])
    if codepoint < 0x800:
        return bytes([0xC0 | (codepoint >> 6), 0x80 | (codepoint & 0x3F)])
    if codepoint < 0x10000:
        return bytes(
            [
                0xE0 | (codepoint >> 12),
                0x80 | ((codepoint >> 6) & 0x3F),
                0x80 | (codepoint & 0x3F),
            ]
        )
    return bytes(
        [
            0xF0 | (codepoint >> 18),
            0x80 | ((codepoint >> 12) & 0x3F),
            0x80 | ((codepoint >> 6) & 0x3F),
            0x80 | (codepoint & 0x3F),
        ]
    )


def utf8_check_first(byte: int) -> int:
    """Return the sequence length a lead byte announces, or 0 if it cannot lead."""
    if not 0 <= byte <= 0xFF:
        raise ValueError(f"not a byte value: {byte}")
    if byte < 0x80:
        return 1
    if byte <= 0xBF:
        # continuation byte
        return 0
    if byte in (0xC0, 0xC1):
        # overlong encoding of an ASCII byte
        return 0
    if byte <= 0xDF:
        return 2
    if byte <= 0xEF:
        return 3
    if byte <= 0xF4:
        return 4
    return 0


def utf8_check_full(buffer: bytes) -> int | None:
    """Decode one complete multi-byte sequence.

    Returns the code point, or None when the sequence is invalid, overlong,
    a surrogate or outside the Unicode range.
    """
    size = len(buffer)
    mask = _LEAD_MASKS.get(size)
    if mask is None:
        return None

    value = buffer[0] & mask
    for byte in buffer[1:]:
        if not 0x80 <= byte <= 0xBF:
            return None
        value = (value << 6) | (byte & 0x3F)

    if value > MAX_CODEPOINT:
        return None
    if 0xD800 <= value <= 0xDFFF:
        return None
    if value < _MIN_FOR_LENGTH[size]:
        return None
    return value


def utf8_iterate(buffer: bytes) -> Iterator[int]:
    """Yield the code points of a UTF-8 buffer.

    Raises ValueError at the first invalid or truncated sequence.
    """
    pos = 0
    end = len(buffer)
    while pos < end:
        count = utf8_check_first(buffer[pos])
        if count == 0:
            raise ValueError(f"invalid UTF-8 lead byte at offset {pos}")
        if count == 1:
            yield buffer[pos]
        else:
            chunk = bytes(buffer[pos : pos + count])
            codepoint = utf8_check_full(chunk) if len(chunk) == count else None
            if codepoint is None:
                raise ValueError(f"invalid UTF-8 sequence at offset {pos}")
            yield codepoint
        pos += count


def utf8_check_string(data: bytes) -> bool:
    """Tell whether the whole buffer is valid UTF-8."""
    try:
        for _ in utf8_iterate(data):
            pass
    except ValueError:
        return False
    return True