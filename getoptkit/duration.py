"""Durations written as signed sequences of decimal numbers with units."""

from __future__ import annotations

_NANOSECOND = 1
_MICROSECOND = 1000 * _NANOSECOND
_MILLISECOND = 1000 * _MICROSECOND
_SECOND = 1000 * _MILLISECOND
_MINUTE = 60 * _SECOND
_HOUR = 60 * _MINUTE

_UNITS = {
    "ns": _NANOSECOND,
    "us": _MICROSECOND,
    "\u00b5s": _MICROSECOND,
    "\u03bcs": _MICROSECOND,
    "ms": _MILLISECOND,
    "s": _SECOND,
    "m": _MINUTE,
    "h": _HOUR,
}

_LIMIT = 1 << 63


class DurationError(ValueError):
    """The text is not a valid duration."""


def _quote(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _leading_int(text: str) -> tuple[int, str] | None:
    number = 0
    consumed = 0
    for char in text:
        if not _is_digit(char):
            break
        number = number * 10 + ord(char) - ord("0")
        if number > _LIMIT:
            return None
        consumed += 1
    return number, text[consumed:]


def _leading_fraction(text: str) -> tuple[int, float, str]:
    number = 0
    scale = 1.0
    overflow = False
    consumed = 0
    for char in text:
        if not _is_digit(char):
            break
        consumed += 1
        if overflow:
            continue
        if number > (_LIMIT - 1) // 10:
            overflow = True
            continue
        candidate = number * 10 + ord(char) - ord("0")
        if candidate > _LIMIT:
            overflow = True
            continue
        number = candidate
        scale *= 10
    return number, scale, text[consumed:]


def parse_duration(text: str) -> int:
    """Parse a duration such as "300ms", "-1.5h" or "2h45m" into nanoseconds."""
    invalid = DurationError(f"time: invalid duration {_quote(text)}")
    rest = text
    negative = False
    if rest[:1] in ("-", "+"):
        negative = rest[0] == "-"
        rest = rest[1:]
    if rest == "0":
        return 0
    if not rest:
        raise invalid

    total = 0
    while rest:
        if not (rest[0] == "." or _is_digit(rest[0])):
            raise invalid
        before = len(rest)
        parsed = _leading_int(rest)
        if parsed is None:
            raise invalid
        whole, rest = parsed
        has_whole = len(rest) != before

        fraction, scale, has_fraction = 0, 1.0, False
        if rest[:1] == ".":
            rest = rest[1:]
            before = len(rest)
            fraction, scale, rest = _leading_fraction(rest)
            has_fraction = len(rest) != before
        if not has_whole and not has_fraction:
            raise invalid

        end = next(
            (index for index, char in enumerate(rest) if char == "." or _is_digit(char)),
            len(rest),
        )
        if end == 0:
            raise DurationError(f"time: missing unit in duration {_quote(text)}")
        unit_text, rest = rest[:end], rest[end:]
        unit = _UNITS.get(unit_text)
        if unit is None:
            raise DurationError(
                f"time: unknown unit {_quote(unit_text)} in duration {_quote(text)}"
            )
        if whole > _LIMIT // unit:
            raise invalid
        whole *= unit
        if fraction > 0:
            whole += int(float(fraction) * (float(unit) / scale))
            if whole > _LIMIT:
                raise invalid
        total += whole
        if total > _LIMIT:
            raise invalid

    if negative:
        return -total
    if total > _LIMIT - 1:
        raise invalid
    return total


def _fraction(value: int, precision: int) -> tuple[str, int]:
    value, remainder = divmod(value, 10**precision)
    if remainder == 0:
        return "", value
    return "." + str(remainder).rjust(precision, "0").rstrip("0"), value


def format_duration(nanoseconds: int) -> str:
    """Format nanoseconds as a duration such as "72h3m0.5s" or "1.2ms"."""
    magnitude = abs(nanoseconds)
    sign = "-" if nanoseconds < 0 else ""
    if magnitude == 0:
        return "0s"
    if magnitude < _SECOND:
        if magnitude < _MICROSECOND:
            precision, unit = 0, "ns"
        elif magnitude < _MILLISECOND:
            precision, unit = 3, "\u00b5s"
        else:
            precision, unit = 6, "ms"
        fraction, whole = _fraction(magnitude, precision)
        return f"{sign}{whole}{fraction}{unit}"

    fraction, seconds = _fraction(magnitude, 9)
    minutes, seconds = divmod(seconds, 60)
    text = f"{seconds}{fraction}s"
    if minutes:
        hours, minutes = divmod(minutes, 60)
        text = f"{minutes}m{text}"
        if hours:
            text = f"{hours}h{text}"
    return sign + text