"""A set of options and the parser that applies command line arguments to them."""

from __future__ import annotations

import enum
import inspect
import os
import sys
from collections.abc import Callable, Iterable, Iterator

from .errors import (
    DeclarationError,
    ErrorCode,
    GetoptError,
    missing_arg,
    set_error,
    unknown_option,
)
from .option import Option
from .usage import (
    DEFAULT_PARAMETERS,
    DISPLAY_WIDTH,
    HELP_COLUMN,
    format_options,
    format_usage,
    usage_line,
)
from .values import BoolValue, FloatValue, IntValue, ListValue, StringValue

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))


class State(enum.IntEnum):
    """Why the most recent call to getopt returned."""

    IN_PROGRESS = 0
    DASH = 1
    DASH_DASH = 2
    END_OF_OPTIONS = 3
    END_OF_ARGUMENTS = 4
    TERMINATED = 5
    FAILURE = 6
    UNKNOWN = 7


def _called_from() -> str:
    """The file and line of the nearest caller outside this package."""
    frame = inspect.currentframe()
    try:
        frame = frame.f_back if frame is not None else None
        while frame is not None:
            filename = frame.f_code.co_filename
            if os.path.dirname(os.path.abspath(filename)) != _PACKAGE_DIR:
                return f"{filename}:{frame.f_lineno}"
            frame = frame.f_back
    finally:
        del frame
    return ""


def _base_name(path: str) -> str:
    if not path:
        return "."
    stripped = path.rstrip("/")
    if not stripped:
        return "/"
    return stripped.rsplit("/", 1)[-1]


def _as_value(value):
    if isinstance(value, bool):
        return BoolValue(value)
    if isinstance(value, str):
        return StringValue(value)
    if isinstance(value, list):
        return ListValue(value)
    if isinstance(value, int):
        return IntValue(value)
    if isinstance(value, float):
        return FloatValue(value)
    if callable(getattr(value, "set", None)):
        return value
    raise TypeError(f"unsupported flag type: {type(value).__name__}")


class OptionSet:
    """Declared options, the parser for them, and what parsing left over."""

    def __init__(self, program: str = "", parameters: str = DEFAULT_PARAMETERS):
        self.program = program
        self.parameters = parameters
        self.help_column = HELP_COLUMN
        self.display_width = DISPLAY_WIDTH
        self._state = State.IN_PROGRESS
        self._args: list[str] = []
        self._usage_func: Callable[[], None] | None = None
        self._short: dict[str, Option] = {}
        self._long: dict[str, Option] = {}
        self._options: list[Option] = []
        self._required_groups: list[str] = []

    def flag(self, value, short="", long="", help="", value_name="") -> Option:
        """Declare an option storing into value and return it.

        value is a Value, or a bool, str, list, int or float that is wrapped
        in the matching Value.  Values that are flags make flag options.
        """
        value = _as_value(value)
        option = Option(value, short, long, help, value_name)
        option.where = _called_from()
        if getattr(value, "flag", False):
            option.set_flag()
        self.add_option(option)
        return option

    def add_option(self, option: Option) -> None:
        """Add option to the set unless it is already there."""
        if any(existing is option for existing in self._options):
            return
        if not option.where:
            option.where = _called_from()
        if option.short and option.short in self._short:
            other = self._short[option.short]
            raise DeclarationError(
                f"{option.where}: -{option.short} already declared at {other.where}"
            )
        if option.long and option.long in self._long:
            other = self._long[option.long]
            raise DeclarationError(
                f"{option.where}: --{option.long} already declared at {other.where}"
            )
        if option.short:
            self._short[option.short] = option
        if option.long:
            self._long[option.long] = option
        self._options.append(option)

    def getopt(self, args: Iterable[str], callback=None) -> None:
        """Parse args, whose first element names the program.

        callback, if given, is called with each option as it is parsed and
        stops parsing by returning false.  Raises GetoptError on bad input.
        """
        self._state = State.IN_PROGRESS
        try:
            self._parse_args(list(args), callback)
            self._check_options()
        except GetoptError:
            if self._state is State.IN_PROGRESS:
                self._state = State.FAILURE
            raise
        if self._state is State.IN_PROGRESS:
            self._state = State.END_OF_ARGUMENTS if not self._args else State.UNKNOWN

    def _set_value(self, option: Option, value: str) -> None:
        try:
            option.value.set(value, option)
        except ValueError as err:
            raise set_error(option, value, err) from err

    def _parse_args(self, args: list[str], callback) -> None:
        if not args:
            return
        if not self.program:
            self.program = _base_name(args[0])
        remaining = args[1:]
        while remaining:
            arg = remaining[0]
            self._args = remaining
            remaining = remaining[1:]

            if not arg or arg[0] != "-":
                self._state = State.END_OF_OPTIONS
                return
            if arg == "--":
                self._args = remaining
                self._state = State.DASH_DASH
                return

            if arg != "-" and self._long and arg[1] == "-":
                value = ""
                equals = arg.find("=")
                if equals > 0:
                    value = arg[equals + 1:]
                    arg = arg[:equals]
                name = arg[2:]
                option = self._long.get(name)
                if option is None and len(name) == 1:
                    option = self._short.get(name)
                if option is None:
                    raise unknown_option("--" + name)
                option.is_long = True
                if not option.flag and equals < 0 and not option.optional:
                    if not remaining:
                        raise missing_arg(option)
                    value = remaining[0]
                    remaining = remaining[1:]
                option.count += 1
                self._set_value(option, value)
                if callback is not None and not callback(option):
                    self._state = State.TERMINATED
                    return
                continue

            shorts = arg if arg == "-" else arg[1:]
            for index, char in enumerate(shorts):
                option = self._short.get(char)
                if option is None:
                    if shorts == "-":
                        self._state = State.DASH
                        return
                    raise unknown_option("-" if char == "-" else "-" + char)
                option.is_long = False
                option.count += 1
                value = ""
                if not option.flag:
                    value = shorts[index + 1:]
                    if not value and not option.optional:
                        if not remaining:
                            raise missing_arg(option)
                        value = remaining[0]
                        remaining = remaining[1:]
                self._set_value(option, value)
                if callback is not None and not callback(option):
                    self._state = State.TERMINATED
                    return
                if not option.flag:
                    break
        self._args = []

    def _check_options(self) -> None:
        groups: dict[str, Option] = {}
        for option in self:
            if not option.seen:
                if option.mandatory:
                    raise GetoptError(
                        ErrorCode.INVALID,
                        f"option {option.name} is mandatory",
                        name=option.name,
                    )
                continue
            if not option.group:
                continue
            other = groups.get(option.group)
            if other is not None:
                raise GetoptError(
                    ErrorCode.INVALID,
                    f"options {other.name} and {option.name} are mutually exclusive",
                    name=option.name,
                )
            groups[option.group] = option
        for group in self._required_groups:
            if group in groups:
                continue
            names = ", ".join(option.name for option in self if option.group == group)
            raise GetoptError(
                ErrorCode.INVALID,
                f"exactly one of the following options must be specified: {names}",
            )

    def parse(self, args: Iterable[str]) -> None:
        """Parse args; on error print it and the usage to stderr and exit with status 1."""
        try:
            self.getopt(args)
        except GetoptError as err:
            print(err, file=sys.stderr)
            self.usage()
            raise SystemExit(1) from err

    @property
    def state(self) -> State:
        return self._state

    @property
    def args(self) -> list[str]:
        """The arguments left after the options."""
        return self._args

    def arg(self, n: int) -> str:
        """The n'th remaining argument, or "" if there is none."""
        if 0 <= n < len(self._args):
            return self._args[n]
        return ""

    @property
    def nargs(self) -> int:
        return len(self._args)

    def lookup(self, name) -> Option | None:
        """Find an option by short name (a character or its code) or long name."""
        if isinstance(name, int):
            return self._short.get(chr(name))
        if len(name) == 1 and name in self._short:
            return self._short[name]
        return self._long.get(name)

    def is_set(self, name) -> bool:
        option = self.lookup(name)
        return option is not None and option.seen

    def get_count(self, name) -> int:
        option = self.lookup(name)
        return option.count if option is not None else 0

    def get_value(self, name) -> str:
        option = self.lookup(name)
        return str(option) if option is not None else ""

    def __iter__(self) -> Iterator[Option]:
        """All options in sorted order."""
        yield from sorted(self._options, key=lambda option: option.sort_key())

    def iter_seen(self) -> Iterator[Option]:
        """The options that were seen, in sorted order."""
        return (option for option in self if option.seen)

    def reset(self) -> None:
        """Make every option appear unseen and restore its default."""
        for option in self._options:
            option.reset()

    def required_group(self, group: str) -> None:
        """Require exactly one option of group to be seen."""
        self._required_groups.append(group)

    def set_usage(self, func: Callable[[], None] | None) -> None:
        """Use func to show usage on parse errors; None restores the default."""
        self._usage_func = func

    def usage(self) -> None:
        """Show usage, by default on standard error."""
        if self._usage_func is not None:
            self._usage_func()
        else:
            self.print_usage(sys.stderr)

    def usage_line(self) -> str:
        return usage_line(self._options)

    def print_usage(self, file=None) -> None:
        """Write the usage line and option listing to file (standard output by default)."""
        out = file if file is not None else sys.stdout
        out.write(
            format_usage(
                self.program,
                self._options,
                self.parameters,
                self.help_column,
                self.display_width,
            )
        )

    def print_options(self, file=None) -> None:
        """Write the option listing to file (standard output by default)."""
        out = file if file is not None else sys.stdout
        out.write(format_options(self._options, self.help_column, self.display_width))