"""covgate command line."""

from covgate.cli.main import cli

__all__ = ["cli"]
