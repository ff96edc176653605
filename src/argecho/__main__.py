"""Allow ``python -m argecho`` invocation.

Delegates to the line-mode reporter boundary so that
``python -m argecho`` behaves identically to the ``argecho`` console
script.
"""

from __future__ import annotations

from argecho.cli.app import cli

if __name__ == "__main__":
    cli()
