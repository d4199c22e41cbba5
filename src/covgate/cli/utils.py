"""CLI utilities."""

from pathlib import Path

import click

from covgate.config import CovgateConfig, load_config
from covgate.core.errors import ConfigError, CovgateError
from covgate.core.logging import configure_logging

EXIT_PASS = 0
EXIT_BLOCKING = 1
EXIT_WARN = 2
EXIT_INPUT_ERROR = 3


class InputError(click.ClickException):
    """Unreadable report, diff or config file. Exits 3 so 0/1/2 stay verdicts."""

    exit_code = EXIT_INPUT_ERROR

    @classmethod
    def from_error(cls, err: CovgateError) -> "InputError":
        return cls(str(err))


def setup(ctx: click.Context) -> CovgateConfig:
    """Load configuration and configure logging for a command.

    -v on the root group forces DEBUG on every output; otherwise the
    configured logging section applies.

    Raises:
        InputError: If the configuration cannot be loaded.
    """
    obj = ctx.ensure_object(dict)
    try:
        config = load_config(obj.get("repo_root"), config_file=obj.get("config_file"))
    except ConfigError as e:
        raise InputError.from_error(e) from e

    logging_config = config.logging
    if obj.get("verbose"):
        logging_config = logging_config.model_copy(update={"level": "DEBUG"})
    configure_logging(config=logging_config)
    return config


def read_input(path: Path) -> bytes:
    """Read a report file. Decoding is left to the parsers."""
    try:
        return path.read_bytes()
    except OSError as e:
        raise InputError(f"Cannot read {path}: {e.strerror or e}") from e
