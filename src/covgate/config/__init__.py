"""Config module exports."""

from covgate.config.loader import load_config
from covgate.config.models import (
    CovgateConfig,
    GatesConfig,
    LoggingConfig,
    LogOutputConfig,
    ReportsConfig,
    ThresholdSet,
)

__all__ = [
    "load_config",
    "CovgateConfig",
    "GatesConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "ReportsConfig",
    "ThresholdSet",
]
