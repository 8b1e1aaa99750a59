"""Logging configuration for cli-template.

Loggers live under the ``cli_template`` namespace (modules simply use
``logging.getLogger(__name__)``).  :func:`setup_logging` attaches a
single stderr handler to that namespace logger: Rich's
:class:`~rich.logging.RichHandler` when Rich is importable, a plain
:class:`logging.StreamHandler` otherwise.  Log records never reach the
command output sink.
"""

from __future__ import annotations

import logging
from contextlib import suppress

LOGGER_NAMESPACE: str = "cli_template"

PLAIN_FORMAT: str = "%(levelname)s %(name)s: %(message)s"


def _build_handler() -> logging.Handler:
    try:
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))
        return handler

    from cli_template.cli.console import get_rich_console

    return RichHandler(
        console=get_rich_console(),
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )


def setup_logging(level: str = "WARNING") -> logging.Logger:
    """Configure the ``cli_template`` logger and return it.

    Calling this again replaces the previously installed handler, so it
    is safe to invoke once per ``cli()`` run.

    Args:
        level: A standard level name such as ``"DEBUG"`` or ``"WARNING"``.
    """
    logger = logging.getLogger(LOGGER_NAMESPACE)
    for handler in list(logger.handlers):
        with suppress(Exception):
            handler.close()
        logger.removeHandler(handler)

    level_value = level.upper()
    handler = _build_handler()
    handler.setLevel(level_value)
    logger.addHandler(handler)
    logger.setLevel(level_value)
    logger.propagate = False

    logger.debug("Logging configured: level=%s", level.upper())
    return logger
