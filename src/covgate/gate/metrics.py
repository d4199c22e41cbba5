"""Derive gate metrics from parsed reports."""

from collections.abc import Iterable

from covgate.coverage.models import CoverageReport
from covgate.diff.models import DiffCoverageSummary
from covgate.gate.models import GateMetrics
from covgate.mutation.models import MutationReport
from covgate.paths.reconciler import resolve_in_coverage


def find_uncovered_critical_paths(
    report: CoverageReport,
    critical_paths: Iterable[str],
    *,
    min_pct: float = 0.0,
) -> tuple[str, ...]:
    """Critical source paths the coverage report does not cover.

    A path is uncovered when it does not resolve to a report file, when
    none of its lines is covered, or when its line coverage is below
    ``min_pct``.
    """
    uncovered: list[str] = []
    for path in critical_paths:
        match = resolve_in_coverage(report, path)
        if match is None:
            uncovered.append(path)
            continue
        fc = report.files[match.key]
        if fc.covered_lines == 0 or fc.coverage_pct < min_pct:
            uncovered.append(path)
    return tuple(uncovered)


def collect_metrics(
    *,
    coverage: CoverageReport | None = None,
    mutation: MutationReport | None = None,
    diff: DiffCoverageSummary | None = None,
    critical_paths: Iterable[str] | None = None,
    critical_min_pct: float = 0.0,
) -> GateMetrics:
    """Build GateMetrics; every input left out stays an absent metric.

    Branch coverage is only reported when the coverage report holds branch
    data. Critical paths need a coverage report to be measured.
    """
    critical: tuple[str, ...] | None = None
    if coverage is not None and critical_paths is not None:
        critical = find_uncovered_critical_paths(
            coverage, critical_paths, min_pct=critical_min_pct
        )

    return GateMetrics(
        line=coverage.coverage_pct if coverage is not None else None,
        branch=(
            coverage.branch_pct
            if coverage is not None and coverage.branches_total > 0
            else None
        ),
        mutation=mutation.score if mutation is not None else None,
        diff_coverage=diff.pct if diff is not None else None,
        critical_paths_uncovered=critical,
        coverage_report=coverage,
        mutation_report=mutation,
        diff_summary=diff,
    )
