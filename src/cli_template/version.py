"""Package version, kept in sync with ``pyproject.toml``."""

__version__: str = "0.1.0"
