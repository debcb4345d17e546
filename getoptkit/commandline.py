"""The default option set for the program's own command line, and shorthands for it."""

from __future__ import annotations

import sys
from collections.abc import Callable

from .option import Option
from .optionset import OptionSet

COMMAND_LINE = OptionSet()
"""The option set the functions of this module work on."""


def _argv(argv):
    return list(sys.argv) if argv is None else list(argv)


def parse(argv=None) -> None:
    """Parse argv (sys.argv by default); on error print it and the usage and exit with status 1."""
    COMMAND_LINE.parse(_argv(argv))


def getopt(callback=None, argv=None) -> None:
    """Parse argv (sys.argv by default), calling callback for each option; raises GetoptError."""
    COMMAND_LINE.getopt(_argv(argv), callback)


def flag(value, short="", long="", help="", value_name="") -> Option:
    """Declare an option on the command line set and return it."""
    return COMMAND_LINE.flag(value, short, long, help, value_name)


def add_option(option: Option) -> None:
    """Add option to the command line set unless it is already there."""
    COMMAND_LINE.add_option(option)


def lookup(name) -> Option | None:
    """Find a command line option by short or long name."""
    return COMMAND_LINE.lookup(name)


def is_set(name) -> bool:
    """Whether the named option was seen."""
    return COMMAND_LINE.is_set(name)


def get_count(name) -> int:
    """How many times the named option was seen."""
    return COMMAND_LINE.get_count(name)


def get_value(name) -> str:
    """The current value of the named option as text, or "" if there is no such option."""
    return COMMAND_LINE.get_value(name)


def args() -> list[str]:
    """The arguments left after the options."""
    return COMMAND_LINE.args


def arg(n: int) -> str:
    """The n'th remaining argument, or "" if there is none."""
    return COMMAND_LINE.arg(n)


def nargs() -> int:
    """The number of remaining arguments."""
    return COMMAND_LINE.nargs


def reset() -> None:
    """Make every command line option appear unseen and restore its default."""
    COMMAND_LINE.reset()


def print_usage(file=None) -> None:
    """Write the usage line and option listing to file (standard output by default)."""
    COMMAND_LINE.print_usage(file)


def usage() -> None:
    """Show the command line usage."""
    COMMAND_LINE.usage()


def set_parameters(parameters: str) -> None:
    """Set the text shown after the options on the usage line."""
    COMMAND_LINE.parameters = parameters


def set_program(program: str) -> None:
    """Set the program name used in usage and error messages."""
    COMMAND_LINE.program = program


def set_usage(func: Callable[[], None] | None) -> None:
    """Use func to show usage on parse errors; None restores the default."""
    COMMAND_LINE.set_usage(func)


def required_group(group: str) -> None:
    """Require exactly one option of group to be seen."""
    COMMAND_LINE.required_group(group)