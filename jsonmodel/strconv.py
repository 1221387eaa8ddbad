"""Locale-independent conversions between text and floating-point numbers."""

from __future__ import annotations

import math
import re
from decimal import Decimal

_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?\Z")


def strtod(text: str) -> float:
    """Convert number text to a float.

    Raises ValueError for text that is not a number and OverflowError when
    the value is too large to represent. Underflow quietly yields zero.
    """
    if not _NUMBER.match(text):
        raise ValueError(f"invalid number: {text!r}")
    value = float(text)
    if math.isinf(value):
        raise OverflowError("real number overflow")
    return value


def _digits(value: float, precision: int) -> tuple[str, int]:
    """Significant digits of a non-negative value and its decimal point position."""
    if value == 0:
        return "0", 1
    text = repr(value) if precision == 0 else f"{value:.{precision - 1}e}"
    _, digit_tuple, exponent = Decimal(text).as_tuple()
    decpt = len(digit_tuple) + exponent
    digits = "".join(map(str, digit_tuple)).rstrip("0")
    return digits, decpt


def dtostr(value: float, precision: int = 0) -> str:
    """Format a float for JSON output.

    With precision 0 the shortest text that reads back as the same value is
    produced; otherwise at most ``precision`` significant digits are kept.
    The result always holds a '.' or an exponent so that it reads back as a
    real number.
    """
    if not math.isfinite(value):
        raise ValueError(f"cannot format non-finite value {value!r}")
    if precision < 0:
        raise ValueError(f"negative precision: {precision}")

    negative = math.copysign(1.0, value) < 0
    digits, decpt = _digits(abs(value), precision)

    use_exp = decpt <= -4 or decpt > 16
    exponent = 0
    if use_exp:
        exponent = decpt - 1
        decpt = 1

    count = len(digits)
    if decpt <= 0:
        body = "0." + "0" * -decpt + digits
    elif decpt < count:
        body = digits[:decpt] + "." + digits[decpt:]
    else:
        body = digits + "0" * (decpt - count) + ("" if use_exp else ".0")

    sign = "-" if negative else ""
    suffix = f"e{exponent}" if use_exp else ""
    return f"{sign}{body}{suffix}"