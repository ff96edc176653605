"""argecho — show how the operating system split a command line.

Ships the argument reporter, a Windows command-line parser and the
tooling that verifies one against the other.
"""

from argecho.version import __version__

__all__: list[str] = ["__version__"]
