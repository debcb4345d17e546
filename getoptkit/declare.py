"""One-line declarations of options of the common types.

Each function declares an option on ``option_set`` (the command line set when
None) and returns the Value it stores into; read the result from its
``value`` attribute after parsing.
"""

from __future__ import annotations

from .commandline import COMMAND_LINE
from .optionset import OptionSet
from .values import (
    BoolValue,
    CounterValue,
    DurationValue,
    EnumValue,
    IntValue,
    ListValue,
    SignedLimit,
    SignedValue,
    StringValue,
    UintValue,
    UnsignedLimit,
    UnsignedValue,
)


def _declare(option_set: OptionSet | None, value, short, long, help, value_name=""):
    target = option_set if option_set is not None else COMMAND_LINE
    target.flag(value, short, long, help, value_name)
    return value


def boolean(short="", long="", help="", option_set=None) -> BoolValue:
    """A flag that is false until seen; ``--name=false`` style values are accepted."""
    return _declare(option_set, BoolValue(False), short, long, help)


def counter(short="", long="", help="", option_set=None) -> CounterValue:
    """A flag counting how often it is seen; ``--name=5`` sets the count."""
    return _declare(option_set, CounterValue(0), short, long, help)


def duration(
    short="", long="", default=0, help="", value_name="", option_set=None
) -> DurationValue:
    """An option holding a duration in nanoseconds, written like "1h30m"."""
    return _declare(option_set, DurationValue(default), short, long, help, value_name)


def enum(
    short="",
    long="",
    values=(),
    default="",
    help="",
    value_name="",
    option_set=None,
) -> EnumValue:
    """An option restricted to one of values; a default not among them is an error."""
    return _declare(
        option_set, EnumValue(values, default), short, long, help, value_name
    )


def integer(
    short="",
    long="",
    default=0,
    help="",
    value_name="",
    bits=0,
    option_set=None,
) -> IntValue:
    """A signed integer of the given bit size (0 meaning 64), base taken from its prefix."""
    return _declare(
        option_set, IntValue(default, bits), short, long, help, value_name
    )


def unsigned_integer(
    short="",
    long="",
    default=0,
    help="",
    value_name="",
    bits=0,
    option_set=None,
) -> UintValue:
    """An unsigned integer of the given bit size (0 meaning 64), base taken from its prefix."""
    return _declare(
        option_set, UintValue(default, bits), short, long, help, value_name
    )


def string(
    short="", long="", default="", help="", value_name="", option_set=None
) -> StringValue:
    """An option holding a string."""
    return _declare(option_set, StringValue(default), short, long, help, value_name)


def string_list(
    short="", long="", help="", value_name="", option_set=None
) -> ListValue:
    """A list of strings from comma separated parameters; repeats append."""
    return _declare(option_set, ListValue([]), short, long, help, value_name)


def signed(
    short="",
    long="",
    default=0,
    limit: SignedLimit | None = None,
    help="",
    value_name="",
    option_set=None,
) -> SignedValue:
    """A signed integer constrained by limit."""
    return _declare(
        option_set, SignedValue(default, limit), short, long, help, value_name
    )


def unsigned(
    short="",
    long="",
    default=0,
    limit: UnsignedLimit | None = None,
    help="",
    value_name="",
    option_set=None,
) -> UnsignedValue:
    """An unsigned integer constrained by limit."""
    return _declare(
        option_set, UnsignedValue(default, limit), short, long, help, value_name
    )