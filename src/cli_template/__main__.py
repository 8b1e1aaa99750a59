"""Allow ``python -m cli_template`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m cli_template`` behaves identically to the
``cli-template`` console script.
"""

from __future__ import annotations

from cli_template.cli.app import cli

if __name__ == "__main__":
    cli()
