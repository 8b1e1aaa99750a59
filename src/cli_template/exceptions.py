"""Custom exception hierarchy for cli-template.

Every user-visible error condition maps to a subclass of
:class:`CliTemplateError` so that the CLI error boundary can render a
clean message without leaking internal stack traces.  Errors raised by
the output sink (``OSError``) are deliberately *not* wrapped; they
propagate unchanged to the boundary.

Hierarchy
---------
CliTemplateError
├── UsageError
├── CommandTreeError
│   ├── DuplicateCommandError
│   └── DuplicateFlagError
├── ConfigurationError
└── MissingDependencyError
"""

from __future__ import annotations


class CliTemplateError(Exception):
    """Base exception for all cli-template errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Argument parsing ------------------------------------------------------

class UsageError(CliTemplateError):
    """Raised for unknown commands, unknown flags or malformed flag values."""


# --- Command tree construction ---------------------------------------------

class CommandTreeError(CliTemplateError):
    """Raised when the command tree is assembled incorrectly."""


class DuplicateCommandError(CommandTreeError):
    """Raised when a parent already has a child with the same name."""


class DuplicateFlagError(CommandTreeError):
    """Raised when a command already declares a flag name or short alias."""


# --- Environment / configuration -------------------------------------------

class ConfigurationError(CliTemplateError):
    """Raised when a setting read from the environment is invalid."""


class MissingDependencyError(CliTemplateError):
    """Raised when an optional runtime dependency is not available."""
