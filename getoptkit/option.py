"""A single declared command line option."""

from __future__ import annotations

import contextlib

from .errors import DeclarationError


class Option:
    """An option with a short and/or long name whose parameter sets a value.

    The value is any object with ``set(text, option)``, raising ValueError on
    bad text, and ``__str__`` giving its current value as text.
    """

    def __init__(self, value, short="", long="", help="", value_name=""):
        if len(short) > 1:
            raise DeclarationError(f"short option name must be one character: {short!r}")
        if not short and not long:
            raise DeclarationError("no short or long option given")
        self.value = value
        self.short = short
        self.long = long
        self.help = help
        self.value_name = value_name or "value"
        self.default = str(value)
        self.is_long = False
        self.flag = False
        self.optional = False
        self.mandatory = False
        self.group = ""
        self.count = 0
        self.where = ""

    def __repr__(self) -> str:
        return f"Option(short={self.short!r}, long={self.long!r}, count={self.count})"

    @property
    def name(self) -> str:
        """The name as last used, or the short name if never seen as long."""
        if not self.is_long and self.short:
            return "-" + self.short
        return "--" + self.long

    @property
    def short_name(self) -> str:
        return self.short

    @property
    def long_name(self) -> str:
        return self.long

    @property
    def seen(self) -> bool:
        return self.count > 0

    def __str__(self) -> str:
        return str(self.value)

    def set_optional(self) -> Option:
        """Make the parameter optional; it is then only taken from the same argument."""
        self.optional = True
        return self

    def set_flag(self) -> Option:
        """Make the option a flag that takes no parameter."""
        self.flag = True
        return self

    def set_mandatory(self) -> Option:
        """Require the option to be given."""
        self.mandatory = True
        return self

    def set_group(self, group: str) -> Option:
        """Place the option in a mutually exclusive group."""
        self.group = group
        return self

    def reset(self) -> None:
        """Forget that the option was seen and restore its default value."""
        self.is_long = False
        self.count = 0
        with contextlib.suppress(ValueError):
            self.value.set(self.default, self)

    def usage_name(self) -> str:
        """The option as shown in the help listing, or "" when not worth listing."""
        if not self.help and (not self.short or not self.long):
            return ""
        if self.short and self.long:
            text = f"-{self.short}, --{self.long}"
        elif self.short:
            text = f"-{self.short}"
        else:
            text = f"    --{self.long}"
        if self.flag:
            return text
        if self.optional:
            return f"{text}[={self.value_name}]"
        if self.long:
            return f"{text}={self.value_name}"
        return f"{text} {self.value_name}"

    def sort_key(self) -> tuple[str, str]:
        """Key that orders options by short name, or first letter of the long name."""
        name = self.short + self.long if self.short else self.long[:1] + self.long
        return name.lower(), name