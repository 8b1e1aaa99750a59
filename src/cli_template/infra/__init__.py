"""Infrastructure layer — interaction with the installed environment.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
"""

from cli_template.infra.build_info import detect_build_info, normalise_date, shorten_commit

__all__: list[str] = [
    "detect_build_info",
    "normalise_date",
    "shorten_commit",
]
