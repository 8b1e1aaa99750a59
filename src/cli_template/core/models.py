"""Domain models for cli-template.

:class:`Flag`, :class:`ParsedInvocation` and :class:`BuildInfo` are
**frozen** dataclasses.  :class:`Command` is mutable only while the tree
is being assembled through :mod:`cli_template.core.registry`; nothing
mutates it once dispatch begins.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TextIO

FlagValue = str | bool

Callback = Callable[["ParsedInvocation", TextIO], None]
"""Signature of a command callback.  Failure is signalled by raising."""


# ---------------------------------------------------------------------------
# Flag declaration
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Flag:
    """A named option declared on a command."""

    name: str
    """Long name, bound as ``--<name>``."""

    short: str | None = None
    """Optional single-character alias, bound as ``-<short>``."""

    default: FlagValue = ""
    """Value used when the flag is absent (or given as an empty string)."""

    description: str = ""
    """Help text rendered by ``--help``."""

    @property
    def is_switch(self) -> bool:
        """``True`` for boolean flags, which take no value."""
        return isinstance(self.default, bool)


# ---------------------------------------------------------------------------
# Command tree node
# ---------------------------------------------------------------------------

@dataclass(eq=False, slots=True)
class Command:
    """A node of the command tree.

    Children and flags are kept in declaration order so that help output
    is stable.  Use :func:`~cli_template.core.registry.register` and
    :func:`~cli_template.core.registry.declare_flag` rather than mutating
    the lists directly; they enforce the uniqueness invariants.
    """

    name: str
    callback: Callback
    short: str = ""
    long: str = ""
    children: list[Command] = field(default_factory=list)
    flags: list[Flag] = field(default_factory=list)
    parent: Command | None = field(default=None, repr=False)

    def find_child(self, name: str) -> Command | None:
        return next((c for c in self.children if c.name == name), None)

    def find_flag(self, name: str) -> Flag | None:
        return next((f for f in self.flags if f.name == name), None)

    @property
    def path(self) -> tuple[str, ...]:
        """Names from the root down to this command, inclusive."""
        names: list[str] = []
        node: Command | None = self
        while node is not None:
            names.append(node.name)
            node = node.parent
        return tuple(reversed(names))


# ---------------------------------------------------------------------------
# Per-invocation result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ParsedInvocation:
    """A resolved command together with its bound flag values."""

    command: Command
    values: Mapping[str, FlagValue]
    """Flag name → bound value, with defaults already applied."""

    args: tuple[str, ...] = ()
    """Positional arguments.  No built-in command accepts any."""

    def get(self, name: str) -> FlagValue:
        return self.values[name]


# ---------------------------------------------------------------------------
# Build metadata
# ---------------------------------------------------------------------------

DEFAULT_VERSION: str = "dev"
DEFAULT_COMMIT: str = "none"
DEFAULT_DATE: str = "unknown"


@dataclass(frozen=True, slots=True)
class BuildInfo:
    """Version metadata reported by ``--version``."""

    version: str = DEFAULT_VERSION
    commit: str = DEFAULT_COMMIT
    date: str = DEFAULT_DATE

    def describe(self) -> str:
        """Render as ``"<version> (commit: <commit>, built at: <date>)"``."""
        return f"{self.version} (commit: {self.commit}, built at: {self.date})"
