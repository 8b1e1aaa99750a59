"""cli-template — a minimal command-line application template.

A root command that prints a banner or version string, and a ``hello``
sub-command that greets a name.
"""

from cli_template.version import __version__

__all__: list[str] = ["__version__"]
