# getoptkit

Command line parsing the way `ls`, `tar` or `ssh` do it: short options that
can be bundled (`-abc`), short options with attached or separate values
(`-ovalue`, `-o value`), and long options (`--output=value`,
`--output value`). Parsing stops at the first non-option argument or at `--`.

## Features

- Short (`-f`) and long (`--flag`) names; an option may have both.
- Flags, options with a required value and options with an optional value.
- Value kinds in `getoptkit.values`: `BoolValue`, `StringValue`,
  `ListValue` (comma separated), `IntValue` and `UintValue` of a chosen bit
  size, `FloatValue` (32 or 64 bit), `DurationValue` (`1h30m`, `250ms`,
  held in nanoseconds), `CounterValue`, `EnumValue`, and `SignedValue` /
  `UnsignedValue` constrained by a `SignedLimit` / `UnsignedLimit` (base,
  bit size, min and max).
- Mandatory options and mutually exclusive groups, including groups of
  which exactly one must be given.
- Usage text with wrapped help messages and shown defaults.
- Errors as `GetoptError`, carrying an `ErrorCode` (`code`), the option
  `name` and the offending `parameter`. Mistakes in declaring options, such
  as declaring the same name twice, raise `DeclarationError`.

## Installation

```
pip install getoptkit
```

## Using an option set

```python
from getoptkit.errors import GetoptError
from getoptkit.optionset import OptionSet
from getoptkit.values import BoolValue, IntValue, StringValue

opts = OptionSet(program="backup", parameters="[files ...]")
opts.flag(BoolValue(False), short="v", long="verbose", help="be verbose")
opts.flag(StringValue("out.tar"), short="o", long="output",
          help="archive to write", value_name="file")
opts.flag(IntValue(3, 64), short="j", long="jobs", help="parallel jobs")

try:
    opts.getopt(["backup", "-v", "--output=today.tar", "-j8", "a.txt", "b.txt"])
except GetoptError as err:
    print(err)

opts.is_set("verbose")    # True
opts.get_value("output")  # "today.tar"
opts.get_value("j")       # "8"
opts.args                 # ["a.txt", "b.txt"]
```

`OptionSet.flag` also accepts a plain `bool`, `str`, `list`, `int` or
`float` and wraps it in the matching value; a `list` is filled in place.
It returns the `Option`, whose methods `set_optional`, `set_flag`,
`set_mandatory` and `set_group` return the option again so they can be
chained.

Options are looked up with `lookup` by their short name (a one-character
string or its code point) or by their long name. `get_count` tells how
often an option was given, `arg(n)` and `nargs` give the remaining
arguments, and iterating over the set yields every option in usage order,
while `iter_seen` yields only those that were given. `reset` makes every
option look unseen again and restores its default.

`getopt` raises `GetoptError` on a bad command line. `parse` does the same
work but, on error, prints the message and the usage text to standard
error and exits with status 1.

`getopt` also takes a callback that is called with each option as it is
parsed; returning a false value stops parsing early. After a call, the
`state` property (a `State`) tells why parsing stopped: a lone `-`, `--`,
the first non-option, the end of the arguments, the callback, or a failure.

### Mandatory and grouped options

```python
opts.lookup("output").set_mandatory()

opts.flag(BoolValue(False), short="A", help="use method A").set_group("method")
opts.flag(BoolValue(False), short="B", help="use method B").set_group("method")
opts.required_group("method")
```

Giving both `-A` and `-B` is an error, and with `required_group` giving
neither is one too.

### Optional values

```python
opts.flag(StringValue(""), short="c", long="color").set_optional()
```

Now `--color` and `-c` are accepted alone, and `--color=always` or
`-calways` set the value.

## Usage text

```python
import sys

opts.print_usage(sys.stderr)
```

prints a `Usage:` line with the program name, the bracketed synopsis of
the options (flags with short names bundled together) and the parameters
text, followed by one line per option with its help text, its default in
brackets, its group in braces and `(required)` for mandatory options.
`usage_line()` returns the bracketed synopsis alone and `print_options`
prints just the option list; both print to standard output when no file is
given. The `help_column` and `display_width` attributes of the set control
the layout. `usage()` shows the usage on standard error, or calls a
function installed with `set_usage`, which is also what `parse` calls on
error. The same formatting is available as plain functions in
`getoptkit.usage`.

## Declaring options in one line

The `getoptkit.declare` module has helpers for the common kinds:
`boolean`, `counter`, `string`, `string_list`, `integer`,
`unsigned_integer`, `duration`, `enum`, `signed` and `unsigned`. Each takes
the short and long names, a default where it makes sense and a help text,
and returns the value object; read its `value` attribute after parsing.
Without an `option_set` argument they register on the process-wide set
`COMMAND_LINE` in `getoptkit.commandline`; pass `option_set=` to use one of
your own.

```python
from getoptkit import commandline, declare

verbosity = declare.counter(short="v", long="verbose", help="more output")
fmt = declare.enum(short="f", long="format", values=["tar", "zip"],
                   default="tar", help="archive format")
timeout = declare.duration(short="t", long="timeout", default=0,
                           help="give up after")

commandline.parse()          # parses sys.argv, exits on error
files = commandline.args()
print(verbosity.value, fmt.value, timeout.value)
```

`getoptkit.commandline` also offers `getopt`, `flag`, `add_option`,
`lookup`, `is_set`, `get_count`, `get_value`, `arg`, `nargs`, `reset`,
`print_usage`, `usage`, `set_parameters`, `set_program`, `set_usage` and
`required_group`, all acting on `COMMAND_LINE`.

## Custom value kinds

Subclass `getoptkit.values.Value`, implementing `set(text, option)`, which
raises `ValueError` on bad input, and `__str__`, and pass an instance to
`OptionSet.flag`. Setting the class attribute `flag = True` makes options
using it flags. The string form taken when the option is declared is its
default, restored by `reset()`.

## Helpers

`getoptkit.numbers` parses and formats integers (with `0x`, `0o`, `0b` and
leading-zero octal prefixes and a bit size) and floats, and
`getoptkit.duration` has `parse_duration` and `format_duration`.

## What it does not do

This is a library only: it installs no command of its own.