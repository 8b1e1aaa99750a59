"""Infrastructure: build metadata detection.

Resolves the version, commit and build date reported by ``--version``.
Each field is resolved independently, first match wins:

1. an environment override (``CLI_TEMPLATE_VERSION``,
   ``CLI_TEMPLATE_COMMIT``, ``CLI_TEMPLATE_BUILD_DATE``), which is how
   packaging pipelines stamp a build;
2. installed distribution metadata: the distribution version, and the
   VCS ``commit_id`` recorded in PEP 610 ``direct_url.json`` when the
   package was installed from a VCS URL;
3. the defaults ``dev`` / ``none`` / ``unknown``.

Rules
-----
* No subprocess calls, no network.
* Never raises for missing or malformed metadata — it falls through to
  the next source.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from datetime import datetime
from importlib import metadata

from cli_template.core.models import (
    DEFAULT_COMMIT,
    DEFAULT_DATE,
    DEFAULT_VERSION,
    BuildInfo,
)

DIST_NAME: str = "cli-template"

ENV_VERSION: str = "CLI_TEMPLATE_VERSION"
ENV_COMMIT: str = "CLI_TEMPLATE_COMMIT"
ENV_DATE: str = "CLI_TEMPLATE_BUILD_DATE"

SHORT_COMMIT_LENGTH: int = 7


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def detect_build_info(
    environ: Mapping[str, str] | None = None,
    *,
    dist_name: str = DIST_NAME,
) -> BuildInfo:
    """Return the :class:`BuildInfo` for the running installation.

    Parameters
    ----------
    environ:
        Mapping to read overrides from.  Defaults to :data:`os.environ`.
    dist_name:
        Distribution whose metadata is consulted.
    """
    env = os.environ if environ is None else environ

    version = (
        _clean(env.get(ENV_VERSION))
        or _distribution_version(dist_name)
        or DEFAULT_VERSION
    )
    commit = _clean(env.get(ENV_COMMIT)) or _pep610_commit(dist_name)
    date = _clean(env.get(ENV_DATE))

    return BuildInfo(
        version=version,
        commit=shorten_commit(commit) if commit else DEFAULT_COMMIT,
        date=normalise_date(date) if date else DEFAULT_DATE,
    )


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

def shorten_commit(commit: str) -> str:
    """Truncate a full commit hash to its short form."""
    return commit[:SHORT_COMMIT_LENGTH]


def normalise_date(value: str) -> str:
    """Reduce an ISO-8601 / RFC 3339 timestamp to ``YYYY-MM-DD``.

    Values that do not parse are returned unchanged.
    """
    candidate = value.strip()
    if candidate.endswith(("Z", "z")):
        candidate = candidate[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(candidate).date().isoformat()
    except ValueError:
        return value


# ---------------------------------------------------------------------------
# Metadata sources
# ---------------------------------------------------------------------------

def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def _distribution_version(dist_name: str) -> str | None:
    try:
        return _clean(metadata.version(dist_name))
    except metadata.PackageNotFoundError:
        return None


def _pep610_commit(dist_name: str) -> str | None:
    """Return the VCS commit id from PEP 610 metadata, if available."""
    try:
        direct_url = metadata.distribution(dist_name).read_text("direct_url.json")
    except (metadata.PackageNotFoundError, OSError, UnicodeDecodeError):
        return None

    if not direct_url:
        return None

    try:
        data = json.loads(direct_url)
    except json.JSONDecodeError:
        return None

    vcs_info = data.get("vcs_info") if isinstance(data, dict) else None
    if not isinstance(vcs_info, dict):
        return None

    commit_id = vcs_info.get("commit_id")
    return _clean(commit_id) if isinstance(commit_id, str) else None
