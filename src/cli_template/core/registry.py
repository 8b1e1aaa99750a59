"""Command registry — assembles the static tree of commands and flags.

All functions here run at construction time.  They validate the tree
invariants eagerly so that a malformed tree fails before any argument
is parsed:

* child names are unique among siblings;
* flag names and short aliases are unique within a command;
* the tree is acyclic and every command has at most one parent.
"""

from __future__ import annotations

from collections.abc import Iterator

from cli_template.core.models import Command, Flag, FlagValue
from cli_template.exceptions import (
    CommandTreeError,
    DuplicateCommandError,
    DuplicateFlagError,
)

_HELP_FLAG = "help"


def register(parent: Command, child: Command) -> Command:
    """Attach *child* under *parent* and return *child*.

    Raises
    ------
    DuplicateCommandError
        If *parent* already has a child named ``child.name``.
    CommandTreeError
        If *child* already has a parent, or attaching it would create a
        cycle.
    """
    if child.parent is not None:
        raise CommandTreeError(
            f"Command '{child.name}' is already registered under "
            f"'{child.parent.name}'.",
        )

    node: Command | None = parent
    while node is not None:
        if node is child:
            raise CommandTreeError(
                f"Registering '{child.name}' under '{parent.name}' would "
                "create a cycle.",
            )
        node = node.parent

    if parent.find_child(child.name) is not None:
        raise DuplicateCommandError(
            f"Command '{parent.name}' already has a sub-command "
            f"named '{child.name}'.",
        )

    child.parent = parent
    parent.children.append(child)
    return child


def declare_flag(
    command: Command,
    name: str,
    short: str | None = None,
    default: FlagValue = "",
    description: str = "",
) -> Flag:
    """Declare a flag on *command* and return it.

    The flag is a boolean switch when *default* is a ``bool`` and a
    string option otherwise.

    Raises
    ------
    CommandTreeError
        If *name* is empty or reserved, or *short* is not a single
        character.
    DuplicateFlagError
        If *name* or *short* is already used on *command*.
    """
    if not name or name.startswith("-"):
        raise CommandTreeError(f"Invalid flag name {name!r} on '{command.name}'.")
    if short is not None and (len(short) != 1 or short == "-"):
        raise CommandTreeError(
            f"Short alias for --{name} must be a single character, got {short!r}.",
        )

    if name == _HELP_FLAG or short == _HELP_FLAG[0]:
        raise CommandTreeError(
            f"--{_HELP_FLAG} and -{_HELP_FLAG[0]} are reserved for the help renderer.",
        )

    for existing in command.flags:
        if existing.name == name:
            raise DuplicateFlagError(
                f"Command '{command.name}' already declares --{name}.",
            )
        if short is not None and existing.short == short:
            raise DuplicateFlagError(
                f"Command '{command.name}' already uses -{short} "
                f"for --{existing.name}.",
            )

    flag = Flag(name=name, short=short, default=default, description=description)
    command.flags.append(flag)
    return flag


def walk(root: Command) -> Iterator[Command]:
    """Yield *root* and all its descendants, depth-first in declaration order."""
    yield root
    for child in root.children:
        yield from walk(child)
