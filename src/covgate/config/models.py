"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (COVGATE__SECTION__KEY)
3. Repo YAML (.covgate/config.yaml)
4. Global YAML (~/.config/covgate/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    COVGATE__<SECTION>__<KEY>=<VALUE>

Examples:
    COVGATE__LOGGING__LEVEL=DEBUG
    COVGATE__GATES__MAX_REMEDIATION_ITEMS=25
    COVGATE__REPORTS__COVERAGE_FORMAT=jacoco

Thresholds are never defaulted here: an absent threshold is a gate that is
not evaluated.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from covgate.config.constants import (
    GATE_NAMES,
    REMEDIATION_MAX_ITEMS_DEFAULT,
    REMEDIATION_MAX_ITEMS_LIMIT,
)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
CoverageFormat = Literal["lcov", "jacoco"]
MutationFormat = Literal["pit-xml", "pit-text", "stryker-json"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        COVGATE__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. INFO reports parse and gate summaries.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ThresholdSet(BaseModel):
    """Quality-gate thresholds. Every field is optional.

    Accepts snake_case names and the camelCase names used in JSON output
    (``minLineOrBranchPct``, ``minMutationScorePct``, ``minDiffCoveragePct``,
    ``requireCriticalPathsCovered``). Field order is evaluation order.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )

    min_line_or_branch_pct: float | None = Field(default=None, ge=0, le=100)
    min_mutation_score_pct: float | None = Field(default=None, ge=0, le=100)
    min_diff_coverage_pct: float | None = Field(default=None, ge=0, le=100)
    require_critical_paths_covered: bool | None = None

    def is_empty(self) -> bool:
        return (
            self.min_line_or_branch_pct is None
            and self.min_mutation_score_pct is None
            and self.min_diff_coverage_pct is None
            and not self.require_critical_paths_covered
        )


class GatesConfig(BaseModel):
    """Quality-gate configuration.

    Env vars:
        COVGATE__GATES__MAX_REMEDIATION_ITEMS: Remediation entries per violation
        COVGATE__GATES__CRITICAL_MIN_PCT: Coverage a critical path must exceed
    """

    thresholds: ThresholdSet = Field(default_factory=ThresholdSet)
    non_blocking: list[str] = Field(
        default_factory=list,
        description="Gate names whose violations only warn (exit code 2).",
    )
    max_remediation_items: int = Field(
        default=REMEDIATION_MAX_ITEMS_DEFAULT,
        description="Remediation entries listed per violation before truncation.",
    )
    critical_paths: list[str] = Field(
        default_factory=list,
        description="Source paths that must be covered when "
        "require_critical_paths_covered is set.",
    )
    critical_min_pct: float = Field(
        default=0.0,
        ge=0,
        le=100,
        description="Minimum line coverage for a critical path. 0 means any covered line.",
    )

    @field_validator("non_blocking")
    @classmethod
    def validate_non_blocking(cls, v: list[str]) -> list[str]:
        unknown = [name for name in v if name not in GATE_NAMES]
        if unknown:
            raise ValueError(f"Unknown gate name(s) {unknown}; valid: {list(GATE_NAMES)}")
        return v

    @field_validator("max_remediation_items")
    @classmethod
    def validate_max_remediation_items(cls, v: int) -> int:
        if not (1 <= v <= REMEDIATION_MAX_ITEMS_LIMIT):
            raise ValueError(f"Must be 1-{REMEDIATION_MAX_ITEMS_LIMIT}, got {v}")
        return v


class ReportsConfig(BaseModel):
    """Report format configuration.

    Env vars:
        COVGATE__REPORTS__COVERAGE_FORMAT: lcov or jacoco (default: auto-detect)
        COVGATE__REPORTS__MUTATION_FORMAT: pit-xml, pit-text or stryker-json
    """

    coverage_format: CoverageFormat | None = None
    mutation_format: MutationFormat | None = None


class CovgateConfig(BaseModel):
    """Root configuration."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    gates: GatesConfig = Field(default_factory=GatesConfig)
    reports: ReportsConfig = Field(default_factory=ReportsConfig)
