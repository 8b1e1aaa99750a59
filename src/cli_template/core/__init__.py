"""Core layer — command tree model, registry and dispatcher.

Rules
-----
* No ``print()`` calls; output only through the sink handed to callbacks.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
"""

from cli_template.core.dispatcher import Dispatcher
from cli_template.core.models import (
    BuildInfo,
    Callback,
    Command,
    Flag,
    FlagValue,
    ParsedInvocation,
)
from cli_template.core.registry import declare_flag, register, walk

__all__: list[str] = [
    "BuildInfo",
    "Callback",
    "Command",
    "Dispatcher",
    "Flag",
    "FlagValue",
    "ParsedInvocation",
    "declare_flag",
    "register",
    "walk",
]
