"""Core module exports."""

from covgate.core.errors import (
    ConfigError,
    CovgateError,
    ErrorCode,
    InternalError,
    ReportParseError,
    UnrecognizedMutationStatus,
)
from covgate.core.logging import (
    clear_run_id,
    configure_logging,
    get_run_id,
    set_run_id,
)

__all__ = [
    # Errors
    "ConfigError",
    "CovgateError",
    "ErrorCode",
    "InternalError",
    "ReportParseError",
    "UnrecognizedMutationStatus",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_run_id",
    "set_run_id",
]
