"""Errors reported while declaring and parsing options."""

from __future__ import annotations

import enum


class ErrorCode(enum.IntEnum):
    """The general reason a parse failed."""

    NO_ERROR = 0
    UNKNOWN_OPTION = 1
    MISSING_PARAMETER = 2
    EXTRA_PARAMETER = 3
    INVALID = 4

    def __str__(self) -> str:
        return _CODE_TEXT.get(self, "unknown error")


_CODE_TEXT = {
    ErrorCode.UNKNOWN_OPTION: "unknow option",
    ErrorCode.MISSING_PARAMETER: "missing argument",
    ErrorCode.EXTRA_PARAMETER: "unxpected value",
    ErrorCode.INVALID: "error setting value",
}


class GetoptError(Exception):
    """Raised when the arguments being parsed are not acceptable."""

    def __init__(self, code, message, name="", parameter=""):
        super().__init__(message)
        self.code = ErrorCode(code)
        self.message = message
        self.name = name
        self.parameter = parameter

    def __str__(self) -> str:
        return self.message


class DeclarationError(Exception):
    """Raised when an option is declared incorrectly."""


def _quote(text: str) -> str:
    escapes = {
        '"': '\\"',
        "\\": "\\\\",
        "\a": "\\a",
        "\b": "\\b",
        "\f": "\\f",
        "\n": "\\n",
        "\r": "\\r",
        "\t": "\\t",
        "\v": "\\v",
    }
    parts = []
    for char in text:
        if char in escapes:
            parts.append(escapes[char])
        elif char.isprintable():
            parts.append(char)
        elif ord(char) < 0x100:
            parts.append(f"\\x{ord(char):02x}")
        elif ord(char) < 0x10000:
            parts.append(f"\\u{ord(char):04x}")
        else:
            parts.append(f"\\U{ord(char):08x}")
    return '"' + "".join(parts) + '"'


def unknown_option(name: str) -> GetoptError:
    """Error for an option that is not declared; name is given as written, dashes included."""
    return GetoptError(
        ErrorCode.UNKNOWN_OPTION, f"unknown option: {name}", name=name
    )


def missing_arg(option) -> GetoptError:
    """Error for an option that needed a parameter and got none."""
    return GetoptError(
        ErrorCode.MISSING_PARAMETER,
        f"missing parameter for {option.name}",
        name=option.name,
    )


def extra_arg(option, value: str) -> GetoptError:
    """Error for an option that was handed a parameter it does not take."""
    return GetoptError(
        ErrorCode.EXTRA_PARAMETER,
        f"unexpected parameter passed to {option.name}: {_quote(value)}",
        name=option.name,
        parameter=value,
    )


def set_error(option, value: str, err: BaseException) -> GetoptError:
    """Error for a parameter the option's value refused."""
    error = GetoptError(ErrorCode.INVALID, str(err), name=option.name, parameter=value)
    error.__cause__ = err
    return error