"""Dispatcher — resolves an argument list against the command tree and runs it.

The tree of :class:`~cli_template.core.models.Command` descriptors is
interpreted by :mod:`argparse`: every command becomes a (sub-)parser and
every :class:`~cli_template.core.models.Flag` an option on it.  argparse
owns tokenising, ``--flag=value`` handling and the ``--help`` renderer;
this module owns command selection, default substitution and invoking
the callback.

Guarantees
----------
* Parser errors never call :func:`sys.exit`; they raise
  :class:`~cli_template.exceptions.UsageError` carrying the usage line.
* ``--help`` is written to the dispatcher's output sink and raises
  ``SystemExit(0)`` exactly like argparse does.
* The token after a string flag is always its value, even when it
  starts with ``-`` (``--name -x`` binds ``-x``).
* Exceptions raised by a callback, including ``OSError`` from the sink,
  propagate unchanged.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from typing import Any, TextIO

from cli_template.core.models import Command, Flag, FlagValue, ParsedInvocation
from cli_template.exceptions import UsageError

logger = logging.getLogger(__name__)

_COMMAND_KEY = "_cli_template_command"


class _CommandParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting and writes help to a sink."""

    def __init__(self, *args: Any, output: TextIO | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._output = output

    def print_help(self, file: TextIO | None = None) -> None:  # type: ignore[override]
        super().print_help(file if file is not None else self._output)

    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message, hint=self.format_usage().strip())


def _dest(command: Command, flag: Flag) -> str:
    """Namespace attribute for *flag*, unique across the whole tree."""
    return ".".join(command.path) + ":" + flag.name


def _match_string_flag(command: Command, token: str) -> tuple[Flag, str | None] | None:
    """Return the string flag *token* names on *command*, with any attached value."""
    for flag in command.flags:
        if flag.is_switch:
            continue
        long_name = f"--{flag.name}"
        if token == long_name:
            return flag, None
        if token.startswith(long_name + "="):
            return flag, token[len(long_name) + 1:]
        if flag.short:
            short_name = f"-{flag.short}"
            if token == short_name:
                return flag, None
            if token.startswith(short_name) and not token.startswith("--"):
                value = token[len(short_name):]
                return flag, value[1:] if value.startswith("=") else value
    return None


def _take_string_values(
    root: Command, tokens: list[str],
) -> tuple[list[str], dict[Command, dict[str, str]]]:
    """Bind string flag values ahead of argparse.

    argparse rejects an option value that looks like an option
    (``--name -x``, ``-n --``).  Here the token after a string flag is
    always its value.  Returns the tokens left for argparse and the
    values taken, keyed by the declaring command.  A string flag with
    nothing after it is left in place so argparse reports it.
    """
    command = root
    rest: list[str] = []
    taken: dict[Command, dict[str, str]] = {}
    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1
        if token == "--":
            rest.extend(tokens[index - 1:])
            break
        match = _match_string_flag(command, token)
        if match is None:
            child = command.find_child(token)
            if child is not None:
                command = child
            rest.append(token)
            continue
        flag, value = match
        if value is None:
            if index == len(tokens):
                rest.append(token)
                continue
            value = tokens[index]
            index += 1
        taken.setdefault(command, {})[flag.name] = value
    return rest, taken


class Dispatcher:
    """Turns raw arguments into a :class:`ParsedInvocation` and runs it.

    Parameters
    ----------
    root:
        Root of a fully assembled command tree.  It is only read.
    out:
        Output sink handed to callbacks and used for ``--help``.
        Defaults to :data:`sys.stdout`, looked up at call time so that
        stream redirection (e.g. pytest's ``capsys``) is honoured.
    """

    def __init__(self, root: Command, out: TextIO | None = None) -> None:
        self._root: Command = root
        self._out: TextIO | None = out

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build_parser(self) -> argparse.ArgumentParser:
        """Translate the command tree into an argparse parser."""
        parser = _CommandParser(
            prog=self._root.name,
            description=self._root.long or self._root.short or None,
            output=self.out,
        )
        self._populate(parser, self._root)
        return parser

    def parse(self, argv: Sequence[str] | None = None) -> ParsedInvocation:
        """Resolve *argv* to a command and its bound flag values.

        When *argv* is ``None``, ``sys.argv[1:]`` is used.

        Raises
        ------
        UsageError
            On unknown sub-commands, unknown flags or missing values.
        """
        tokens = list(sys.argv[1:] if argv is None else argv)
        rest, taken = _take_string_values(self._root, tokens)
        namespace = self.build_parser().parse_args(rest)
        command: Command = getattr(namespace, _COMMAND_KEY)

        values: dict[str, FlagValue] = {}
        for flag in command.flags:
            value = taken.get(command, {}).get(
                flag.name, getattr(namespace, _dest(command, flag), None),
            )
            # An explicit empty string counts as "not given".
            if value is None or value == "":
                value = flag.default
            values[flag.name] = value

        return ParsedInvocation(command=command, values=values)

    def execute(self, argv: Sequence[str] | None = None) -> ParsedInvocation:
        """Parse *argv*, run the selected callback and return the invocation.

        Returning normally means success.  Any exception raised while
        parsing or by the callback is left to the caller.
        """
        invocation = self.parse(argv)
        logger.debug(
            "Dispatching '%s' with %s",
            " ".join(invocation.command.path),
            dict(invocation.values),
        )
        invocation.command.callback(invocation, self.out)
        return invocation

    # ------------------------------------------------------------------
    # Parser construction
    # ------------------------------------------------------------------

    def _populate(self, parser: argparse.ArgumentParser, command: Command) -> None:
        parser.set_defaults(**{_COMMAND_KEY: command})

        for flag in command.flags:
            names = [f"--{flag.name}"]
            if flag.short:
                names.insert(0, f"-{flag.short}")
            if flag.is_switch:
                parser.add_argument(
                    *names,
                    dest=_dest(command, flag),
                    action="store_true",
                    default=flag.default,
                    help=flag.description,
                )
            else:
                parser.add_argument(
                    *names,
                    dest=_dest(command, flag),
                    default=flag.default,
                    metavar=flag.name.upper(),
                    help=flag.description,
                )

        if not command.children:
            return

        subparsers = parser.add_subparsers(title="commands", metavar="COMMAND")
        for child in command.children:
            subparser = subparsers.add_parser(
                child.name,
                help=child.short,
                description=child.long or child.short or None,
                output=self.out,
            )
            self._populate(subparser, child)
