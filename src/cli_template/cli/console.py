"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.

The console is used for diagnostics on stderr only.  Command output
goes to the dispatcher's sink, never through here.
"""

from __future__ import annotations

import sys
from typing import Any

from cli_template.exceptions import MissingDependencyError


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``MissingDependencyError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise MissingDependencyError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console() -> Any:
	"""Create a Rich console instance targeting stderr."""
	console_class = _load_rich_console_class()
	return console_class(stderr=True)


Part = str | tuple[str, str]
"""Plain text, or a ``(text, style)`` pair such as ``("Error:", "bold red")``."""


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def print(self, *parts: Part) -> None:
		"""Print *parts* as one line on stderr.

		Text is never parsed as console markup, so messages carrying user
		input (``[/x]``, ``--[bold]``) are shown exactly as given.  Styles
		apply only when Rich is available.
		"""
		try:
			rich_console = get_rich_console()
		except MissingDependencyError:
			print("".join(_plain(part) for part in parts), file=sys.stderr)
			return
		from rich.text import Text

		rich_console.print(Text.assemble(*parts), soft_wrap=True)


def _plain(part: Part) -> str:
	return part if isinstance(part, str) else part[0]


console = _ConsoleProxy()
