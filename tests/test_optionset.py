import inspect
import io

import pytest

from getoptkit.errors import DeclarationError, ErrorCode, GetoptError
from getoptkit.option import Option
from getoptkit.optionset import OptionSet, State
from getoptkit.values import (
    CounterValue,
    DurationValue,
    FloatValue,
    IntValue,
    ListValue,
    StringValue,
    UintValue,
)

SECOND = 1_000_000_000


def run(option_set, argv):
    try:
        option_set.getopt(argv)
    except GetoptError as err:
        return f"{option_set.program}: {err}"
    return ""


GENERIC_CASES = [
    ("string short", lambda: "", "short", ["test", "-s", "42"], "42", "42", ""),
    ("string long", lambda: "", "long", ["test", "--long", "42"], "42", "42", ""),
    ("string both long", lambda: "", "both", ["test", "--both", "42"], "42", "42", ""),
    ("string both short", lambda: "", "both", ["test", "-b", "42"], "42", "42", ""),
    ("string default", lambda: "42", "short", ["test"], "42", "42", ""),
    ("string override", lambda: "43", "short", ["test", "-s", "42"], "42", "42", ""),
    ("bool", lambda: False, "short", ["test", "-s"], True, "true", ""),
    ("bool default", lambda: True, "short", ["test"], True, "true", ""),
    ("bool long false", lambda: False, "long", ["test", "--long=false"], False, "false", ""),
    ("bool default true", lambda: True, "long", ["test", "--long=false"], False, "false", ""),
    ("int", lambda: 0, "short", ["test", "-s", "42"], 42, "42", ""),
    ("int8", lambda: IntValue(0, 8), "short", ["test", "-s", "42"], 42, "42", ""),
    ("int16", lambda: IntValue(0, 16), "short", ["test", "-s", "42"], 42, "42", ""),
    ("int32", lambda: IntValue(0, 32), "short", ["test", "-s", "42"], 42, "42", ""),
    ("int64", lambda: IntValue(0, 64), "short", ["test", "-s", "42"], 42, "42", ""),
    ("uint", lambda: UintValue(0, 0), "short", ["test", "-s", "42"], 42, "42", ""),
    ("uint8", lambda: UintValue(0, 8), "short", ["test", "-s", "42"], 42, "42", ""),
    ("uint16", lambda: UintValue(0, 16), "short", ["test", "-s", "42"], 42, "42", ""),
    ("uint32", lambda: UintValue(0, 32), "short", ["test", "-s", "42"], 42, "42", ""),
    ("uint64", lambda: UintValue(0, 64), "short", ["test", "-s", "42"], 42, "42", ""),
    ("float32", lambda: FloatValue(0.0, 32), "short", ["test", "-s", "4.2"],
     pytest.approx(4.2, rel=1e-6), "4.2", ""),
    ("float64", lambda: 0.0, "short", ["test", "-s", "4.2"], 4.2, "4.2", ""),
    ("duration", lambda: DurationValue(2 * SECOND), "short", ["test", "-s", "42s"],
     42 * SECOND, "42s", ""),
    ("duration joined", lambda: DurationValue(2 * SECOND), "short", ["test", "-s42s"],
     42 * SECOND, "42s", ""),
    ("duration bad", lambda: DurationValue(2 * SECOND), "short", ["test", "-s42"],
     2 * SECOND, "2s", "test: time: missing unit in duration"),
    ("list twice", lambda: ListValue(["one", "two", "three"]), "short",
     ["test", "-s42", "-s."], ["42", "."], "42,.", ""),
    ("list commas", lambda: ListValue(["one", "two", "three"]), "short",
     ["test", "-s42,."], ["42", "."], "42,.", ""),
    ("list default", lambda: ListValue(["one", "two", "three"]), "short",
     ["test"], ["one", "two", "three"], "one,two,three", ""),
]


@pytest.mark.parametrize(
    "make, kind, argv, want_value, want_str, want_err",
    [case[1:] for case in GENERIC_CASES],
    ids=[case[0] for case in GENERIC_CASES],
)
def test_generic(make, kind, argv, want_value, want_str, want_err):
    s = OptionSet()
    if kind == "short":
        opt = s.flag(make(), "s")
    elif kind == "long":
        opt = s.flag(make(), long="long")
    else:
        opt = s.flag(make(), "b", "both")
    err = run(s, argv)
    if want_err:
        assert err.startswith(want_err)
    else:
        assert err == ""
    assert opt.value.value == want_value
    assert str(opt) == want_str


def test_duplicate_short_reports_both_places():
    s = OptionSet()
    here = inspect.currentframe()
    line, filename = here.f_lineno + 1, here.f_code.co_filename
    s.flag(StringValue(), "s")
    with pytest.raises(DeclarationError) as info:
        s.flag(StringValue(), "s")
    assert "-s already declared" in str(info.value)
    assert f"{filename}:{line}" in str(info.value)


def test_duplicate_long():
    s = OptionSet()
    s.flag("", long="name")
    with pytest.raises(DeclarationError, match="--name already declared"):
        s.flag("", long="name")


def test_no_name_is_rejected():
    with pytest.raises(DeclarationError):
        OptionSet().flag("")


def test_unsupported_type():
    with pytest.raises(TypeError, match="unsupported flag type"):
        OptionSet().flag(object(), "x")


def test_add_same_option_twice_is_ignored():
    s = OptionSet()
    opt = Option(StringValue(), "x")
    s.add_option(opt)
    s.add_option(opt)
    assert list(s) == [opt]


@pytest.mark.parametrize(
    "argv, err",
    [
        (["test", "-r"], ""),
        (["test", "-o"], "test: option -r is mandatory"),
        (["test"], "test: option -r is mandatory"),
    ],
)
def test_mandatory(argv, err):
    s = OptionSet()
    s.flag(False, "o")
    s.flag(False, "r").set_mandatory()
    assert run(s, argv) == err


@pytest.mark.parametrize(
    "argv, err",
    [
        (["test"], "test: exactly one of the following options must be specified: -A, -B"),
        (["test", "-A", "-C"], ""),
        (["test", "-A", "-B"], "test: options -A and -B are mutually exclusive"),
        (["test", "-A", "-D", "-C"], "test: options -C and -D are mutually exclusive"),
    ],
)
def test_group(argv, err):
    s = OptionSet()
    s.flag(False, "o")
    s.flag(False, "A").set_group("One")
    s.flag(False, "B").set_group("One")
    s.flag(False, "C").set_group("Two")
    s.flag(False, "D").set_group("Two")
    s.required_group("One")
    assert run(s, argv) == err


def _abc_set():
    s = OptionSet()
    a = s.flag(False, "a")
    b = s.flag(False, "b")
    v = s.flag("", "v", "val")
    return s, a, b, v


def test_end_of_options():
    s, a, b, _ = _abc_set()
    s.getopt(["test", "-a", "file", "-b"])
    assert s.state is State.END_OF_OPTIONS
    assert s.args == ["file", "-b"]
    assert a.seen and not b.seen


def test_dash_dash():
    s, _, b, _ = _abc_set()
    s.getopt(["test", "-a", "--", "-b"])
    assert s.state is State.DASH_DASH
    assert s.args == ["-b"]
    assert not b.seen


def test_lone_dash_ends_options():
    s, *_ = _abc_set()
    s.getopt(["test", "-", "x"])
    assert s.state is State.DASH
    assert s.args == ["-", "x"]


def test_dash_as_option():
    s = OptionSet()
    dash = s.flag(False, "-")
    f = s.flag(False, "f")
    s.getopt(["test", "-", "-f-"])
    assert dash.count == 2 and f.seen
    assert s.state is State.END_OF_ARGUMENTS
    assert s.args == []


def test_end_of_arguments_and_program_name():
    s, a, b, _ = _abc_set()
    s.getopt(["/usr/bin/prog", "-ab"])
    assert s.program == "prog"
    assert s.state is State.END_OF_ARGUMENTS
    assert a.seen and b.seen
    assert s.nargs == 0


def test_empty_args():
    s, *_ = _abc_set()
    s.getopt([])
    assert s.state is State.END_OF_ARGUMENTS
    assert s.program == ""


def test_callback_order_and_termination():
    s, *_ = _abc_set()
    names = []
    s.getopt(["test", "-ab", "-a"], lambda opt: names.append(opt.name) or True)
    assert names == ["-a", "-b", "-a"]

    s.reset()
    s.getopt(["test", "-a", "-b"], lambda opt: False)
    assert s.state is State.TERMINATED
    assert s.args == ["-a", "-b"]
    assert s.get_count("a") == 1
    assert not s.is_set("b")


def test_short_value_forms():
    s, a, _, v = _abc_set()
    s.getopt(["test", "-avvalue"])
    assert a.seen and v.value.value == "value"
    s.getopt(["test", "-vf", "value"])
    assert v.value.value == "f"
    assert s.args == ["value"]


def test_long_value_forms():
    s, _, _, v = _abc_set()
    s.getopt(["test", "--val", "one"])
    assert v.value.value == "one"
    assert v.name == "--val"
    s.getopt(["test", "--val=two", "rest"])
    assert v.value.value == "two"
    assert s.args == ["rest"]


def test_long_form_of_short_option():
    s = OptionSet()
    f = s.flag(True, "f")
    s.flag(False, long="opt")
    s.getopt(["test", "--f=false"])
    assert f.value.value is False
    assert f.name == "--"


def test_optional_value():
    s = OptionSet()
    v = s.flag("", "v", "val").set_optional()
    f = s.flag(False, "f")
    s.getopt(["test", "--val", "-f"])
    assert v.count == 1 and f.seen
    s.getopt(["test", "-vvalue", "-f"])
    assert v.value.value == "value" and v.count == 2


def test_counter_flag():
    s = OptionSet()
    c = s.flag(CounterValue(), "c")
    s.getopt(["test", "-ccc"])
    assert c.value.value == 3


def test_unknown_options():
    s, *_ = _abc_set()
    with pytest.raises(GetoptError) as info:
        s.getopt(["test", "-a", "--nope", "x"])
    assert str(info.value) == "unknown option: --nope"
    assert info.value.code is ErrorCode.UNKNOWN_OPTION
    assert s.state is State.FAILURE
    assert s.args == ["--nope", "x"]

    short_only = OptionSet()
    short_only.flag(False, "f")
    with pytest.raises(GetoptError, match="unknown option: -=$"):
        short_only.getopt(["test", "-f=false"])
    with pytest.raises(GetoptError, match="unknown option: -$"):
        short_only.getopt(["test", "--f"])


def test_missing_and_invalid_parameter():
    s = OptionSet()
    s.flag("", "s")
    n = s.flag(0, "n")
    with pytest.raises(GetoptError) as info:
        s.getopt(["test", "-s"])
    assert str(info.value) == "missing parameter for -s"
    assert info.value.code is ErrorCode.MISSING_PARAMETER

    with pytest.raises(GetoptError) as info:
        s.getopt(["test", "-n", "x"])
    assert str(info.value) == "not a valid number: x"
    assert info.value.code is ErrorCode.INVALID
    assert info.value.parameter == "x"
    assert n.value.value == 0


def test_second_parse_amends():
    s = OptionSet()
    a = s.flag(False, "a")
    b = s.flag(False, "b")
    s.parse(["prog", "-a", "cmd", "-b", "arg"])
    assert s.arg(0) == "cmd"
    s.parse(s.args)
    assert a.seen and b.seen
    assert s.program == "prog"
    assert s.args == ["arg"]
    assert s.arg(5) == ""


def test_lookup_and_queries():
    s = OptionSet()
    n = s.flag(5, "n", "number")
    s.getopt(["test", "-n", "0x10"])
    assert s.lookup("n") is n
    assert s.lookup(ord("n")) is n
    assert s.lookup("number") is n
    assert s.lookup("missing") is None
    assert s.get_value("n") == "16"
    assert s.get_value("missing") == ""
    assert s.get_count("number") == 1
    assert s.get_count("missing") == 0
    assert s.is_set("n")
    assert not s.is_set("missing")


def test_reset_restores_defaults():
    s = OptionSet()
    n = s.flag(5, "n")
    items = ["d1", "d2"]
    s.flag(items, "l")
    s.getopt(["test", "-n", "7", "-l", "one"])
    assert n.value.value == 7 and items == ["one"]
    s.reset()
    assert n.value.value == 5 and n.count == 0
    assert items == ["d1", "d2"]


def test_iteration_order_and_seen():
    s = OptionSet()
    s.flag(False, "b")
    s.flag(False, "Z")
    s.flag(False, "a")
    s.getopt(["test", "-Z", "-a"])
    assert [opt.short for opt in s] == ["a", "b", "Z"]
    assert [opt.short for opt in s.iter_seen()] == ["a", "Z"]


def test_usage_output():
    s = OptionSet()
    s.flag(False, "a", help="a flag")
    s.flag("", "o", "output", help="output file")
    assert s.usage_line() == "[-a] [-o value]"
    buf = io.StringIO()
    s.program = "prog"
    s.print_usage(buf)
    text = buf.getvalue()
    assert text.startswith("Usage: prog [-a] [-o value] [parameters ...]\n")
    assert " -o, --output=value\n" in text
    listing = io.StringIO()
    s.print_options(listing)
    assert text.endswith(listing.getvalue())


def test_parse_exits_on_error(capsys):
    s = OptionSet()
    s.flag(False, "a")
    with pytest.raises(SystemExit) as info:
        s.parse(["prog", "-z"])
    assert info.value.code == 1
    err = capsys.readouterr().err
    assert err.startswith("unknown option: -z\n")
    assert "Usage: prog [-a] [parameters ...]" in err


def test_custom_usage_is_called(capsys):
    s = OptionSet()
    calls = []
    s.set_usage(lambda: calls.append("usage"))
    with pytest.raises(SystemExit):
        s.parse(["prog", "-z"])
    assert calls == ["usage"]
    assert "Usage:" not in capsys.readouterr().err