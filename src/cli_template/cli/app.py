"""CLI application entry point for cli-template.

This module is the **sole error boundary** for the entire application.
It catches :class:`~cli_template.exceptions.CliTemplateError`,
``OSError`` from the output sink, ``KeyboardInterrupt`` and any
unexpected ``Exception``, rendering user-friendly messages on stderr
and returning well-defined exit codes.  Every failure exits with
:data:`~cli_template.cli.exit_codes.GENERAL_ERROR`; only an interrupt
differs.

Architecture notes
------------------
* Command logic lives in :mod:`cli_template.cli.commands`; parsing and
  dispatch live in :mod:`cli_template.core.dispatcher`.
* :func:`main` lets errors propagate so tests can assert on them;
  :func:`cli` is the only place that translates between the domain
  world and the OS process exit code.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import TextIO

from cli_template.cli import exit_codes
from cli_template.cli.commands import build_command_tree
from cli_template.cli.console import console
from cli_template.cli.logging_setup import setup_logging
from cli_template.config import Settings, load_settings
from cli_template.core.dispatcher import Dispatcher
from cli_template.exceptions import CliTemplateError


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(
    argv: Sequence[str] | None = None,
    out: TextIO | None = None,
    settings: Settings | None = None,
) -> int:
    """Run the cli-template CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.
    out:
        Output sink for command output.  Defaults to ``sys.stdout``.
    settings:
        Pre-loaded settings.  When ``None`` they are read from the
        environment.

    Returns
    -------
    int
        OS process exit code.
    """
    if settings is None:
        settings = load_settings()

    root = build_command_tree(settings.build_info)
    Dispatcher(root, out=out).execute(argv)
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli(argv: Sequence[str] | None = None) -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        settings = load_settings()
        setup_logging(settings.log_level)
        code = main(argv, settings=settings)
        sys.exit(code)
    except CliTemplateError as exc:
        console.print(("Error:", "bold red"), f" {exc}")
        if exc.hint:
            console.print(("Hint:", "yellow"), f" {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except OSError as exc:
        console.print(("Error:", "bold red"), f" could not write output: {exc}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n", ("Aborted by user.", "yellow"))
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        # Includes ValueError from a closed sink.  Every failure exits 1.
        console.print(
            ("Unexpected error.", "bold red"),
            " Please report this issue.\n",
            f"  {type(exc).__name__}: {exc}",
        )
        sys.exit(exit_codes.GENERAL_ERROR)
