"""Number parsing and formatting with the conventions of command line values.

Integers accept an optional base prefix (0x, 0o, 0b, or a leading 0 for
octal) when the base is 0, and are checked against a bit size.  Floats are
formatted with the shortest representation that reads back exactly.
"""

from __future__ import annotations

import math
import re
import struct
from decimal import Decimal

_INT_SIZE = 64
_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"

_DECIMAL_FLOAT = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_HEX_FLOAT = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?\d+",
    re.ASCII,
)
_SPECIAL_FLOATS = {"inf", "+inf", "-inf", "infinity", "+infinity", "-infinity", "nan"}


class NumberSyntaxError(ValueError):
    """The text is not a number."""

    def __init__(self, text: str):
        super().__init__(f"not a valid number: {text}")
        self.text = text


class NumberRangeError(ValueError):
    """The text is a number that does not fit."""

    def __init__(self, text: str):
        super().__init__(f"value out of range: {text}")
        self.text = text


def _digit_value(char: str) -> int | None:
    if "0" <= char <= "9":
        return ord(char) - ord("0")
    lower = char.lower()
    if "a" <= lower <= "z" and char.isascii():
        return ord(lower) - ord("a") + 10
    return None


def _underscore_ok(text: str) -> bool:
    """Report whether underscores in text only separate digits."""
    saw = "^"
    if text[:1] in ("+", "-"):
        text = text[1:]
    hex_digits = False
    rest = text
    if len(text) >= 2 and text[0] == "0" and text[1].lower() in ("b", "o", "x"):
        rest = text[2:]
        saw = "0"
        hex_digits = text[1].lower() == "x"
    for char in rest:
        if "0" <= char <= "9" or (hex_digits and "a" <= char.lower() <= "f"):
            saw = "0"
            continue
        if char == "_":
            if saw != "0":
                return False
            saw = "_"
            continue
        if saw == "_":
            return False
        saw = "!"
    return saw != "_"


def _check_bits(bits: int) -> int:
    if bits == 0:
        return _INT_SIZE
    if bits < 0 or bits > 64:
        raise ValueError(f"invalid bit size {bits}")
    return bits


def parse_uint(text: str, base: int = 0, bits: int = 0) -> int:
    """Parse an unsigned integer of at most bits bits in the given base."""
    if not text:
        raise NumberSyntaxError(text)
    base_prefixed = base == 0
    digits = text
    if base == 0:
        base = 10
        if text[0] == "0":
            prefix = text[1].lower() if len(text) >= 3 else ""
            if prefix in ("b", "o", "x"):
                base = {"b": 2, "o": 8, "x": 16}[prefix]
                digits = text[2:]
            else:
                base = 8
                digits = text[1:]
    elif not 2 <= base <= 36:
        raise ValueError(f"invalid base {base}")
    bits = _check_bits(bits)
    max_value = (1 << bits) - 1

    number = 0
    underscores = False
    for char in digits:
        if char == "_" and base_prefixed:
            underscores = True
            continue
        digit = _digit_value(char)
        if digit is None or digit >= base:
            raise NumberSyntaxError(text)
        number = number * base + digit
        if number > max_value:
            raise NumberRangeError(text)
    if underscores and not _underscore_ok(text):
        raise NumberSyntaxError(text)
    return number


def parse_int(text: str, base: int = 0, bits: int = 0) -> int:
    """Parse a signed integer of at most bits bits in the given base."""
    if not text:
        raise NumberSyntaxError(text)
    negative = text[0] == "-"
    unsigned_text = text[1:] if text[0] in "+-" else text
    try:
        magnitude = parse_uint(unsigned_text, base, bits)
    except NumberSyntaxError:
        raise NumberSyntaxError(text) from None
    except NumberRangeError:
        raise NumberRangeError(text) from None
    cutoff = 1 << (_check_bits(bits) - 1)
    if (not negative and magnitude >= cutoff) or (negative and magnitude > cutoff):
        raise NumberRangeError(text)
    return -magnitude if negative else magnitude


def _to_float32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def parse_float(text: str, bits: int = 64) -> float:
    """Parse a decimal or hexadecimal float, rounded to 32 or 64 bits."""
    cleaned = text
    if "_" in cleaned:
        if not _underscore_ok(cleaned):
            raise NumberSyntaxError(text)
        cleaned = cleaned.replace("_", "")
    try:
        if cleaned.lower() in _SPECIAL_FLOATS:
            value = float(cleaned)
        elif _HEX_FLOAT.fullmatch(cleaned):
            value = float.fromhex(cleaned)
        elif _DECIMAL_FLOAT.fullmatch(cleaned):
            value = float(cleaned)
            if math.isinf(value):
                raise NumberRangeError(text)
        else:
            raise NumberSyntaxError(text)
        if bits == 32:
            value = _to_float32(value)
    except OverflowError:
        raise NumberRangeError(text) from None
    return value


def format_int(value: int, base: int = 10) -> str:
    """Format an integer in a base from 2 to 36 using lower case digits."""
    if not 2 <= base <= 36:
        raise ValueError(f"invalid base {base}")
    if value == 0:
        return "0"
    magnitude = abs(value)
    digits = []
    while magnitude:
        magnitude, digit = divmod(magnitude, base)
        digits.append(_DIGITS[digit])
    if value < 0:
        digits.append("-")
    return "".join(reversed(digits))


def _shortest_digits(value: float, bits: int) -> tuple[str, int]:
    """Return the shortest significant digits of value and its decimal point position."""
    if bits == 32:
        target = _to_float32(value)
        text = repr(target)
        for width in range(1, 10):
            candidate = f"{target:.{width - 1}e}"
            if _to_float32(float(candidate)) == target:
                text = candidate
                break
    else:
        text = repr(value)
    _, digit_tuple, exponent = Decimal(text).as_tuple()
    digits = "".join(map(str, digit_tuple)).rstrip("0")
    exponent += len(digit_tuple) - len(digits)
    return digits, len(digits) + exponent


def format_float(value: float, bits: int = 64) -> str:
    """Format a float in the shortest general form that reads back exactly."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    sign = "-" if value < 0 else ""
    digits, point = _shortest_digits(abs(value), bits)
    count = len(digits)
    exponent = point - 1
    if exponent < -4 or exponent >= 6:
        mantissa = digits[0]
        if count > 1:
            mantissa += "." + digits[1:]
        exp_sign = "-" if exponent < 0 else "+"
        return f"{sign}{mantissa}e{exp_sign}{abs(exponent):02d}"
    if point > 0:
        whole = digits[:point].ljust(point, "0")
    else:
        whole = "0"
    decimals = max(count - point, 0)
    if decimals:
        fraction = "".join(
            digits[position] if 0 <= position < count else "0"
            for position in range(point, point + decimals)
        )
        return f"{sign}{whole}.{fraction}"
    return f"{sign}{whole}"