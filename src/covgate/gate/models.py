"""Quality-gate inputs and verdicts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from covgate.coverage.models import CoverageReport
    from covgate.diff.models import DiffCoverageSummary
    from covgate.mutation.models import MutationReport

Severity = Literal["blocking", "non_blocking"]
VerdictStatus = Literal["pass", "warn", "fail"]


@dataclass(frozen=True, slots=True)
class GateMetrics:
    """Measured values fed to the evaluator. None means "not measured".

    The report objects are optional and only used to name concrete
    remediation steps (files, mutants, lines).
    """

    line: float | None = None
    branch: float | None = None
    mutation: float | None = None
    diff_coverage: float | None = None
    critical_paths_uncovered: tuple[str, ...] | None = None

    coverage_report: CoverageReport | None = None
    mutation_report: MutationReport | None = None
    diff_summary: DiffCoverageSummary | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "line": self.line,
            "branch": self.branch,
            "mutation": self.mutation,
            "diffCoverage": self.diff_coverage,
            "criticalPathsUncovered": (
                list(self.critical_paths_uncovered)
                if self.critical_paths_uncovered is not None
                else None
            ),
        }


@dataclass(frozen=True, slots=True)
class GateViolation:
    """One failed gate."""

    gate_name: str
    threshold_value: float | bool
    actual_value: float | bool | None
    message: str
    remediation: tuple[str, ...] = ()
    severity: Severity = "blocking"

    @property
    def blocking(self) -> bool:
        return self.severity == "blocking"

    def to_dict(self) -> dict[str, Any]:
        return {
            "gateName": self.gate_name,
            "thresholdValue": self.threshold_value,
            "actualValue": self.actual_value,
            "message": self.message,
            "remediation": list(self.remediation),
            "severity": self.severity,
        }


@dataclass(frozen=True, slots=True)
class GateVerdict:
    """Outcome of one evaluation. Violations follow threshold declaration order."""

    violations: tuple[GateViolation, ...] = ()
    gates_evaluated: int = 0

    @property
    def passed(self) -> bool:
        """True when no violation is blocking."""
        return not any(v.blocking for v in self.violations)

    @property
    def status(self) -> VerdictStatus:
        if not self.violations:
            return "pass"
        return "warn" if self.passed else "fail"

    @property
    def blocking_violations(self) -> list[GateViolation]:
        return [v for v in self.violations if v.blocking]

    @property
    def non_blocking_violations(self) -> list[GateViolation]:
        return [v for v in self.violations if not v.blocking]

    def to_dict(self) -> dict[str, Any]:
        return {
            "passed": self.passed,
            "status": self.status,
            "violations": [v.to_dict() for v in self.violations],
            "summary": {
                "totalGates": self.gates_evaluated,
                "passedGates": self.gates_evaluated - len(self.violations),
                "failedGates": len(self.violations),
                "blockingViolations": len(self.blocking_violations),
                "nonBlockingViolations": len(self.non_blocking_violations),
            },
        }
