import pytest

from getoptkit.errors import (
    DeclarationError,
    ErrorCode,
    GetoptError,
    extra_arg,
    missing_arg,
    set_error,
    unknown_option,
)


class _Named:
    def __init__(self, name):
        self.name = name


@pytest.mark.parametrize(
    "code,text",
    [
        (ErrorCode.UNKNOWN_OPTION, "unknow option"),
        (ErrorCode.MISSING_PARAMETER, "missing argument"),
        (ErrorCode.EXTRA_PARAMETER, "unxpected value"),
        (ErrorCode.INVALID, "error setting value"),
        (ErrorCode.NO_ERROR, "unknown error"),
    ],
)
def test_error_code_text(code, text):
    assert str(code) == text


def test_unknown_short_option():
    err = unknown_option("-=")
    assert err.code is ErrorCode.UNKNOWN_OPTION
    assert err.name == "-="
    assert str(err) == "unknown option: -="


def test_unknown_long_option():
    err = unknown_option("--foo")
    assert err.name == "--foo"
    assert str(err).endswith("--foo")
    assert str(err).startswith("unknown option: ")


def test_missing_arg():
    err = missing_arg(_Named("-s"))
    assert err.code is ErrorCode.MISSING_PARAMETER
    assert err.name == "-s"
    assert str(err) == "missing parameter for -s"


def test_missing_arg_long():
    err = missing_arg(_Named("--opt"))
    assert str(err) == "missing parameter for --opt"


def test_extra_arg():
    err = extra_arg(_Named("--opt"), "x")
    assert err.code is ErrorCode.EXTRA_PARAMETER
    assert err.parameter == "x"
    assert err.name == "--opt"
    assert str(err) == 'unexpected parameter passed to --opt: "x"'


def test_extra_arg_quotes_special_characters():
    err = extra_arg(_Named("--opt"), 'a"b')
    assert str(err).endswith('"a\\"b"')


def test_set_error_keeps_cause():
    cause = ValueError("invalid value: val3")
    err = set_error(_Named("-e"), "val3", cause)
    assert err.code is ErrorCode.INVALID
    assert err.parameter == "val3"
    assert err.name == "-e"
    assert str(err) == "invalid value: val3"
    assert err.__cause__ is cause


def test_getopt_error_holds_its_fields():
    err = GetoptError(ErrorCode.INVALID, "bad", "-x", "y")
    assert err.code is ErrorCode.INVALID
    assert err.message == "bad"
    assert err.name == "-x"
    assert err.parameter == "y"
    assert str(err) == "bad"


def test_built_errors_are_getopt_errors():
    errors = [
        unknown_option("-q"),
        missing_arg(_Named("-s")),
        extra_arg(_Named("--opt"), "v"),
        set_error(_Named("-e"), "v", ValueError("boom")),
    ]
    assert [isinstance(err, GetoptError) for err in errors] == [True] * 4
    assert [err.code for err in errors] == [
        ErrorCode.UNKNOWN_OPTION,
        ErrorCode.MISSING_PARAMETER,
        ErrorCode.EXTRA_PARAMETER,
        ErrorCode.INVALID,
    ]


def test_declaration_error_message():
    err = DeclarationError("no short or long option given")
    assert str(err) == "no short or long option given"
    assert isinstance(err, Exception)