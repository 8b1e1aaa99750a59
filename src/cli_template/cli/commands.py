"""Command callbacks and the factory that assembles the command tree.

The tree is rebuilt for every :func:`~cli_template.cli.app.main` call,
with the :class:`~cli_template.core.models.BuildInfo` passed in
explicitly so that the root callback never reads process-wide state.
"""

from __future__ import annotations

from typing import TextIO

from cli_template.core.models import BuildInfo, Command, ParsedInvocation
from cli_template.core.registry import declare_flag, register

PROG_NAME: str = "cli-template"

DEFAULT_NAME: str = "World"

BANNER: str = "Hello from CLI Template!\nUse --help to see available commands\n"


# ---------------------------------------------------------------------------
# hello
# ---------------------------------------------------------------------------

def hello_action(name: str, out: TextIO) -> None:
    """Write ``Hello, <name>!`` to *out*, greeting ``World`` if *name* is empty.

    Errors raised by *out* (e.g. ``BrokenPipeError``) propagate as-is.
    """
    if not name:
        name = DEFAULT_NAME
    out.write(f"Hello, {name}!\n")


def _run_hello(invocation: ParsedInvocation, out: TextIO) -> None:
    hello_action(str(invocation.get("name")), out)


def build_hello_command() -> Command:
    command = Command(
        name="hello",
        short="Print a greeting message",
        long="Print a greeting message with optional name parameter.",
        callback=_run_hello,
    )
    declare_flag(command, "name", "n", "", "Name to greet")
    return command


# ---------------------------------------------------------------------------
# root
# ---------------------------------------------------------------------------

def root_action(build_info: BuildInfo, show_version: bool, out: TextIO) -> None:
    """Write the version line when *show_version* is set, else the banner."""
    if show_version:
        out.write(f"{PROG_NAME} version {build_info.describe()}\n")
        return
    out.write(BANNER)


def build_command_tree(build_info: BuildInfo | None = None) -> Command:
    """Return the root command with every sub-command registered."""
    info = build_info if build_info is not None else BuildInfo()

    def _run_root(invocation: ParsedInvocation, out: TextIO) -> None:
        root_action(info, bool(invocation.get("version")), out)

    root = Command(
        name=PROG_NAME,
        short="A CLI application template",
        long=(
            "A CLI application template built with Python and argparse "
            "for rapid development."
        ),
        callback=_run_root,
    )
    declare_flag(root, "version", "v", False, "Print version information")

    register(root, build_hello_command())
    return root
