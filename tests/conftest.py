"""Shared pytest fixtures and configuration for the cli-template test suite.

Guidelines
----------
* No internet access in any test.
* Tests must not depend on OS state: ``CLI_TEMPLATE_*`` variables are
  cleared for every test, and the ``cli_template`` logger is reset.
* Command output is captured through an injected ``io.StringIO`` sink
  wherever possible.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Iterator

import pytest

from cli_template.cli.logging_setup import LOGGER_NAMESPACE
from cli_template.config import Settings
from cli_template.core.models import BuildInfo

_ENV_VARS = (
    "CLI_TEMPLATE_VERSION",
    "CLI_TEMPLATE_COMMIT",
    "CLI_TEMPLATE_BUILD_DATE",
    "CLI_TEMPLATE_LOG_LEVEL",
)


def _reset_logger() -> None:
    logger = logging.getLogger(LOGGER_NAMESPACE)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    _reset_logger()
    yield
    _reset_logger()


@pytest.fixture
def sink() -> io.StringIO:
    """In-memory output sink for command output."""
    return io.StringIO()


@pytest.fixture
def build_info() -> BuildInfo:
    return BuildInfo(version="1.2.3", commit="abc1234", date="2026-01-02")


@pytest.fixture
def settings(build_info: BuildInfo) -> Settings:
    """Settings that do not depend on the installed distribution."""
    return Settings(build_info=build_info)


class BrokenSink(io.StringIO):
    """Sink whose writes fail like a closed pipe."""

    def write(self, s: str) -> int:
        raise BrokenPipeError(32, "Broken pipe")


@pytest.fixture
def broken_sink() -> BrokenSink:
    return BrokenSink()
