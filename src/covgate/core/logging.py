"""Structured logging for covgate runs.

Every module logs through ``structlog.get_logger(__name__)``; this module
routes those events to the outputs named in the ``logging`` config section
and tags each event with the run id of the current CLI invocation.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING
from uuid import uuid4

import structlog

if TYPE_CHECKING:
    from covgate.config.models import LoggingConfig, LogOutputConfig

RUN_ID_KEY = "run_id"


def set_run_id(run_id: str | None = None) -> str:
    """Bind a run id (generated when not given) to every later log event."""
    rid = run_id or uuid4().hex[:12]
    structlog.contextvars.bind_contextvars(**{RUN_ID_KEY: rid})
    return rid


def get_run_id() -> str | None:
    return structlog.contextvars.get_contextvars().get(RUN_ID_KEY)


def clear_run_id() -> None:
    structlog.contextvars.unbind_contextvars(RUN_ID_KEY)


def _level(name: str) -> int:
    return logging.getLevelNamesMapping().get(name.upper(), logging.WARNING)


def _handler(output: LogOutputConfig) -> logging.Handler:
    if output.destination == "stderr":
        return logging.StreamHandler(sys.stderr)
    if output.destination == "stdout":
        return logging.StreamHandler(sys.stdout)
    path = Path(output.destination)
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, mode="a")


def _renderer(output: LogOutputConfig, handler: logging.Handler) -> structlog.types.Processor:
    if output.format == "json":
        return structlog.processors.JSONRenderer()
    colors = isinstance(handler, logging.StreamHandler) and handler.stream.isatty()
    return structlog.dev.ConsoleRenderer(colors=colors, pad_event_to=0, pad_level=False)


def configure_logging(*, config: LoggingConfig) -> None:
    """Route structlog events to the configured outputs.

    Replaces any handlers left by a previous call, so the CLI can configure
    once per invocation. Each output filters at its own level, falling back
    to ``config.level``.
    """
    default_level = _level(config.level)
    shared: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
    ]

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(default_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
        existing.close()
    root.setLevel(default_level)

    for output in config.outputs:
        handler = _handler(output)
        handler.setLevel(_level(output.level or config.level))
        handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processor=_renderer(output, handler),
                foreign_pre_chain=shared,
            )
        )
        root.addHandler(handler)
