"""Usage lines and help listings for a collection of options."""

from __future__ import annotations

from collections.abc import Iterable

HELP_COLUMN = 20
DISPLAY_WIDTH = 80
DEFAULT_PARAMETERS = "[parameters ...]"


def breakup(text: str, width: int) -> list[str]:
    """Split text at spaces into pieces no longer than width where possible.

    A word longer than width is kept whole on a piece of its own.
    """
    pieces: list[str] = []
    while True:
        text = text.lstrip(" ")
        if len(text) <= width:
            if text:
                pieces.append(text)
            return pieces
        cut = text.rfind(" ", 1, width + 1)
        if cut == -1:
            cut = text.find(" ", width)
            if cut == -1:
                cut = len(text)
        pieces.append(text[:cut].rstrip(" "))
        text = text[cut:]


def _sorted(options: Iterable) -> list:
    return sorted(options, key=lambda option: option.sort_key())


def usage_line(options: Iterable) -> str:
    """The bracketed synopsis of the options, without program or parameters."""
    ordered = _sorted(options)
    bundled = "".join(
        option.short
        for option in ordered
        if option.flag and option.short and option.short != "-"
    )

    parts: list[str] = []
    if any(option.short == "-" for option in ordered):
        parts.append("-")
    if bundled:
        parts.append("-" + bundled)

    for option in ordered:
        if option.flag:
            if option.short:
                continue
            parts.append("--" + option.long)
        elif option.short:
            parts.append(f"-{option.short} {option.value_name}")
        else:
            parts.append(f"--{option.long} {option.value_name}")

    if not parts:
        return ""
    return "[" + "] [".join(parts) + "]"


def _shown_default(option) -> str:
    default = option.default
    hidden = getattr(option.value, "hidden_default", None)
    if hidden is not None:
        return "" if default == hidden else default
    if option.flag and default == "false":
        return ""
    return default


def format_options(
    options: Iterable,
    help_column: int = HELP_COLUMN,
    display_width: int = DISPLAY_WIDTH,
) -> str:
    """The help listing of the options, one or more lines per option."""
    ordered = _sorted(options)
    named = [(option, option.usage_name()) for option in ordered]

    column = 4
    for _, uname in named:
        if column < len(uname) <= help_column - 3:
            column = len(uname)

    lines: list[str] = []
    for option, uname in named:
        if not uname:
            continue
        help_text = option.help.strip()
        if not help_text and not option.mandatory and not option.group:
            lines.append(f" {uname}")
            continue

        message = help_text
        default = _shown_default(option)
        if default:
            message += f" [{default}]"
        if option.group:
            message += f" {{{option.group}}}"
        if option.mandatory:
            message += " (required)"

        help_lines = message.split("\n")
        if len(help_lines) == 1:
            help_lines = breakup(help_lines[0], display_width - help_column) or [""]

        if len(uname) <= column:
            lines.append(f" {uname:<{column}}  {help_lines[0]}")
            help_lines = help_lines[1:]
        else:
            lines.append(f" {uname}")
        lines.extend(f" {' ':<{column}}  {line}" for line in help_lines)

    return "".join(line + "\n" for line in lines)


def format_usage(
    program: str,
    options: Iterable,
    parameters: str = DEFAULT_PARAMETERS,
    help_column: int = HELP_COLUMN,
    display_width: int = DISPLAY_WIDTH,
) -> str:
    """The full usage message: the synopsis line followed by the option listing."""
    options = list(options)
    parts = ["Usage:", program]
    synopsis = usage_line(options)
    if synopsis:
        parts.append(synopsis)
    if parameters:
        parts.append(parameters)
    return " ".join(parts) + "\n" + format_options(options, help_column, display_width)