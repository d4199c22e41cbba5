"""Quality gates over coverage, mutation and diff-coverage metrics.

Usage:
    from covgate.gate import ThresholdSet, collect_metrics, evaluate

    metrics = collect_metrics(coverage=report, diff=summary)
    verdict = evaluate(metrics, ThresholdSet(min_diff_coverage_pct=80))
"""

from covgate.config.models import ThresholdSet
from covgate.gate.evaluator import cap_items, evaluate
from covgate.gate.metrics import collect_metrics, find_uncovered_critical_paths
from covgate.gate.models import (
    GateMetrics,
    GateVerdict,
    GateViolation,
    Severity,
    VerdictStatus,
)

__all__ = [
    "GateMetrics",
    "GateVerdict",
    "GateViolation",
    "Severity",
    "ThresholdSet",
    "VerdictStatus",
    "cap_items",
    "collect_metrics",
    "evaluate",
    "find_uncovered_critical_paths",
]
