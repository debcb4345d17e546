"""Traditional getopt-style parsing of short and long command line options."""

__version__ = "0.1.0"