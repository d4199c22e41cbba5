"""Quality-gate evaluation.

Each configured threshold is one gate. Gates run in declaration order
(coverage, mutation, diff coverage, critical paths) and every failed gate
yields exactly one GateViolation. A configured gate whose metric was never
measured fails with a "metric unavailable" violation. Evaluation never
raises.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence
from dataclasses import replace

import structlog

from covgate.config.constants import (
    GATE_COVERAGE,
    GATE_CRITICAL_PATHS,
    GATE_DIFF_COVERAGE,
    GATE_MUTATION,
    REMEDIATION_MAX_ITEMS_DEFAULT,
)
from covgate.config.models import ThresholdSet
from covgate.coverage.report import compress_ranges
from covgate.gate.models import GateMetrics, GateVerdict, GateViolation

log = structlog.get_logger(__name__)


def cap_items(items: Sequence[str], limit: int) -> tuple[str, ...]:
    """First ``limit`` items, plus an "... and N more" entry when truncated."""
    limit = max(limit, 1)
    if len(items) <= limit:
        return tuple(items)
    return (*items[:limit], f"... and {len(items) - limit} more")


def _unavailable(gate_name: str, threshold: float | bool, supply: str) -> GateViolation:
    return GateViolation(
        gate_name=gate_name,
        threshold_value=threshold,
        actual_value=None,
        message=f"Metric unavailable for configured gate '{gate_name}'",
        remediation=(supply,),
    )


# =============================================================================
# Gates
# =============================================================================


def _coverage_gate(metrics: GateMetrics, threshold: float, limit: int) -> GateViolation | None:
    if metrics.line is not None:
        actual, label = metrics.line, "Line coverage"
    elif metrics.branch is not None:
        actual, label = metrics.branch, "Branch coverage"
    else:
        return _unavailable(
            GATE_COVERAGE, threshold, "Supply a line-coverage report (LCOV or JaCoCo)"
        )
    if actual >= threshold:
        return None

    items: list[str] = []
    report = metrics.coverage_report
    if report is not None:
        weakest = sorted(
            (fc for fc in report.files.values() if fc.uncovered_lines),
            key=lambda fc: (fc.coverage_pct, fc.path),
        )
        items = [
            f"Add tests for {fc.path} ({fc.coverage_pct:.1f}% of "
            f"{fc.total_lines} lines covered)"
            for fc in weakest
        ]
    if not items:
        items = [f"Raise {label.lower()} by {threshold - actual:.1f} percentage points"]

    return GateViolation(
        gate_name=GATE_COVERAGE,
        threshold_value=threshold,
        actual_value=actual,
        message=f"{label} {actual:.1f}% is below the {threshold:g}% minimum",
        remediation=cap_items(items, limit),
    )


def _mutation_gate(metrics: GateMetrics, threshold: float, limit: int) -> GateViolation | None:
    actual = metrics.mutation
    if actual is None:
        return _unavailable(
            GATE_MUTATION,
            threshold,
            "Supply a mutation report (PIT XML, PIT transcript or Stryker JSON)",
        )
    if actual >= threshold:
        return None

    items: list[str] = []
    report = metrics.mutation_report
    if report is not None:
        items = [
            f"Kill surviving mutant {m.id} at {m.source_file or '<unknown>'}:{m.line}"
            f" ({m.mutator_kind})"
            for m in report.surviving()
        ]
        uncovered = report.totals.no_coverage
        if uncovered:
            items.append(f"Add tests reaching {uncovered} mutant(s) with no coverage")
    if not items:
        items = [f"Raise mutation score by {threshold - actual:.1f} percentage points"]

    return GateViolation(
        gate_name=GATE_MUTATION,
        threshold_value=threshold,
        actual_value=actual,
        message=f"Mutation score {actual:.1f}% is below the {threshold:g}% minimum",
        remediation=cap_items(items, limit),
    )


def _diff_gate(metrics: GateMetrics, threshold: float, limit: int) -> GateViolation | None:
    actual = metrics.diff_coverage
    if actual is None:
        return _unavailable(
            GATE_DIFF_COVERAGE,
            threshold,
            "Supply the changed lines together with a line-coverage report",
        )
    if actual >= threshold:
        return None

    items: list[str] = []
    summary = metrics.diff_summary
    if summary is not None:
        for result in sorted(summary.files, key=lambda r: r.file):
            if not result.uncovered_lines:
                continue
            ranges = compress_ranges(result.uncovered_lines)
            if result.resolved:
                items.append(f"Cover changed lines {ranges} in {result.file}")
            else:
                items.append(
                    f"{result.file} is missing from the coverage report "
                    f"(changed lines {ranges})"
                )
    if not items:
        items = [f"Raise diff coverage by {threshold - actual:.1f} percentage points"]

    return GateViolation(
        gate_name=GATE_DIFF_COVERAGE,
        threshold_value=threshold,
        actual_value=actual,
        message=f"Diff coverage {actual:.1f}% is below the {threshold:g}% minimum",
        remediation=cap_items(items, limit),
    )


def _critical_gate(metrics: GateMetrics, limit: int) -> GateViolation | None:
    uncovered = metrics.critical_paths_uncovered
    if uncovered is None:
        return _unavailable(
            GATE_CRITICAL_PATHS,
            True,
            "Declare critical paths and supply a line-coverage report",
        )
    if not uncovered:
        return None

    return GateViolation(
        gate_name=GATE_CRITICAL_PATHS,
        threshold_value=True,
        actual_value=False,
        message=f"{len(uncovered)} critical path(s) not covered",
        remediation=cap_items([f"Add tests covering {path}" for path in uncovered], limit),
    )


# =============================================================================
# Evaluation
# =============================================================================


def evaluate(
    metrics: GateMetrics,
    thresholds: ThresholdSet,
    *,
    non_blocking: Collection[str] = (),
    max_remediation_items: int = REMEDIATION_MAX_ITEMS_DEFAULT,
) -> GateVerdict:
    """Apply thresholds to metrics.

    Args:
        metrics: Measured values. Absent values fail any gate configured on them.
        thresholds: Configured gates. Absent fields are not evaluated.
        non_blocking: Gate names whose violations only warn.
        max_remediation_items: Cap on remediation entries per violation.

    Returns:
        GateVerdict with one violation per failed gate, in declaration order.
    """
    limit = max_remediation_items
    outcomes: list[GateViolation | None] = []

    if thresholds.min_line_or_branch_pct is not None:
        outcomes.append(_coverage_gate(metrics, thresholds.min_line_or_branch_pct, limit))
    if thresholds.min_mutation_score_pct is not None:
        outcomes.append(_mutation_gate(metrics, thresholds.min_mutation_score_pct, limit))
    if thresholds.min_diff_coverage_pct is not None:
        outcomes.append(_diff_gate(metrics, thresholds.min_diff_coverage_pct, limit))
    if thresholds.require_critical_paths_covered:
        outcomes.append(_critical_gate(metrics, limit))

    violations = tuple(
        replace(v, severity="non_blocking") if v.gate_name in non_blocking else v
        for v in outcomes
        if v is not None
    )
    verdict = GateVerdict(violations=violations, gates_evaluated=len(outcomes))

    log.info(
        "gate.evaluated",
        status=verdict.status,
        gates=len(outcomes),
        violations=[v.gate_name for v in violations],
    )
    return verdict
