"""Runtime settings, read once at start-up.

:func:`load_settings` collects everything the application needs from
the environment into an immutable :class:`Settings` value, which the
entry point passes down explicitly.  Nothing else reads ``os.environ``
except :mod:`cli_template.infra.build_info`, which this module calls.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from cli_template.core.models import BuildInfo
from cli_template.exceptions import ConfigurationError
from cli_template.infra.build_info import detect_build_info

ENV_LOG_LEVEL: str = "CLI_TEMPLATE_LOG_LEVEL"

DEFAULT_LOG_LEVEL: str = "WARNING"

LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True, slots=True)
class Settings:
    """Immutable application settings."""

    build_info: BuildInfo = field(default_factory=BuildInfo)
    log_level: str = DEFAULT_LOG_LEVEL


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build :class:`Settings` from *environ* (default :data:`os.environ`).

    Raises
    ------
    ConfigurationError
        If ``CLI_TEMPLATE_LOG_LEVEL`` names an unknown level.
    """
    env = os.environ if environ is None else environ

    log_level = env.get(ENV_LOG_LEVEL, "").strip().upper() or DEFAULT_LOG_LEVEL
    if log_level not in LOG_LEVELS:
        raise ConfigurationError(
            f"Invalid {ENV_LOG_LEVEL}: {env[ENV_LOG_LEVEL]!r}",
            hint=f"Use one of: {', '.join(LOG_LEVELS)}",
        )

    return Settings(build_info=detect_build_info(env), log_level=log_level)
