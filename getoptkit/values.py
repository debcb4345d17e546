"""Values that options store their parameters in."""

from __future__ import annotations

import abc
import json
from dataclasses import dataclass

from .duration import format_duration, parse_duration
from .errors import DeclarationError
from .numbers import format_float, format_int, parse_float, parse_int, parse_uint


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _option_name(option) -> str:
    return option.name if option is not None else ""


class Value(abc.ABC):
    """Something an option's parameter is converted into.

    ``set`` raises ValueError when the text is not acceptable.  The class
    attribute ``flag`` tells whether the value is normally a flag, and
    ``hidden_default`` is the text of a default not worth showing in help.
    """

    flag = False
    hidden_default: str | None = None

    @abc.abstractmethod
    def set(self, text: str, option) -> None:
        """Convert text and store it."""

    @abc.abstractmethod
    def __str__(self) -> str:
        """The current value as text."""


class BoolValue(Value):
    """A boolean; an empty parameter means true."""

    flag = True
    hidden_default = "false"

    def __init__(self, value: bool = False):
        self.value = bool(value)

    def set(self, text: str, option) -> None:
        lowered = text.lower()
        if lowered in ("", "1", "true", "on", "t"):
            self.value = True
        elif lowered in ("0", "false", "off", "f"):
            self.value = False
        else:
            raise ValueError(
                f"invalid value for bool {_option_name(option)}: {_quote(text)}"
            )

    def __str__(self) -> str:
        return "true" if self.value else "false"


class StringValue(Value):
    """A plain string."""

    def __init__(self, value: str = ""):
        self.value = value

    def set(self, text: str, option) -> None:
        self.value = text

    def __str__(self) -> str:
        return self.value


class ListValue(Value):
    """A list of strings given as comma separated parameters.

    The first time the option is seen the default contents are dropped;
    later occurrences append.  The list is updated in place.
    """

    def __init__(self, value: list[str] | None = None):
        self.value = value if value is not None else []

    def set(self, text: str, option) -> None:
        if option is None or option.count <= 1:
            self.value.clear()
        self.value.extend(text.split(","))

    def __str__(self) -> str:
        return ",".join(self.value)


class IntValue(Value):
    """A signed integer of a given bit size (0 means 64)."""

    hidden_default = "0"

    def __init__(self, value: int = 0, bits: int = 0):
        self.value = value
        self.bits = bits

    def set(self, text: str, option) -> None:
        self.value = parse_int(text, 0, self.bits)

    def __str__(self) -> str:
        return format_int(self.value)


class UintValue(Value):
    """An unsigned integer of a given bit size (0 means 64)."""

    hidden_default = "0"

    def __init__(self, value: int = 0, bits: int = 0):
        self.value = value
        self.bits = bits

    def set(self, text: str, option) -> None:
        self.value = parse_uint(text, 0, self.bits)

    def __str__(self) -> str:
        return format_int(self.value)


class FloatValue(Value):
    """A 32 or 64 bit float."""

    hidden_default = "0"

    def __init__(self, value: float = 0.0, bits: int = 64):
        self.value = value
        self.bits = bits

    def set(self, text: str, option) -> None:
        self.value = parse_float(text, self.bits)

    def __str__(self) -> str:
        return format_float(self.value, self.bits)


class DurationValue(Value):
    """A duration held in nanoseconds."""

    hidden_default = "0s"

    def __init__(self, value: int = 0):
        self.value = value

    def set(self, text: str, option) -> None:
        self.value = parse_duration(text)

    def __str__(self) -> str:
        return format_duration(self.value)


class CounterValue(Value):
    """A count increased each time the option is seen, or set explicitly."""

    flag = True

    def __init__(self, value: int = 0):
        self.value = value

    def set(self, text: str, option) -> None:
        if text == "":
            self.value += 1
        else:
            self.value = parse_int(text, 0, 0)

    def __str__(self) -> str:
        return str(self.value)


class EnumValue(Value):
    """A string restricted to a fixed set of choices."""

    def __init__(self, values=(), value: str = ""):
        self.values = frozenset(values or ())
        self.value = ""
        if value:
            try:
                self.set(value, None)
            except ValueError as err:
                raise DeclarationError(f"setting default: {err}") from err

    def set(self, text: str, option) -> None:
        if text not in self.values:
            raise ValueError(f"invalid value: {text}")
        self.value = text

    def __str__(self) -> str:
        return self.value


def _check_limit(limit) -> None:
    if limit.base > 36 or limit.base == 1 or limit.base < 0:
        raise DeclarationError(f"invalid base: {limit.base}")
    if limit.bits < 0 or limit.bits > 64:
        raise DeclarationError(f"invalid bit size: {limit.bits}")
    if limit.min > limit.max:
        raise DeclarationError("min greater than max")


def _check_range(number: int, limit, text: str) -> None:
    if limit.min != 0 or limit.max != 0:
        if number < limit.min:
            raise ValueError(f"value out of range (<{limit.min}): {text}")
        if number > limit.max:
            raise ValueError(f"value out of range (>{limit.max}): {text}")


@dataclass(frozen=True)
class SignedLimit:
    """Base, bit size and range of a signed value; min and max apply unless both are 0."""

    base: int = 0
    bits: int = 0
    min: int = 0
    max: int = 0


class SignedValue(Value):
    """A signed integer constrained by a SignedLimit."""

    def __init__(self, value: int = 0, limit: SignedLimit | None = None):
        self.limit = limit if limit is not None else SignedLimit()
        _check_limit(self.limit)
        self.value = value

    def set(self, text: str, option) -> None:
        number = parse_int(text, self.limit.base, self.limit.bits)
        _check_range(number, self.limit, text)
        self.value = number

    def __str__(self) -> str:
        return format_int(self.value, self.limit.base or 10)


@dataclass(frozen=True)
class UnsignedLimit:
    """Base, bit size and range of an unsigned value; min and max apply unless both are 0."""

    base: int = 0
    bits: int = 0
    min: int = 0
    max: int = 0


class UnsignedValue(Value):
    """An unsigned integer constrained by an UnsignedLimit."""

    def __init__(self, value: int = 0, limit: UnsignedLimit | None = None):
        self.limit = limit if limit is not None else UnsignedLimit()
        _check_limit(self.limit)
        self.value = value

    def set(self, text: str, option) -> None:
        number = parse_uint(text, self.limit.base, self.limit.bits)
        _check_range(number, self.limit, text)
        self.value = number

    def __str__(self) -> str:
        return format_int(self.value, self.limit.base or 10)