"""Coverage of changed lines.

For each DiffSelection the file is resolved through the path reconciler.
An unresolved file counts as entirely uncovered, and a changed line the
report never instrumented counts as not covered.
"""

from collections.abc import Iterable

import structlog

from covgate.coverage.models import CoverageReport
from covgate.diff.models import DiffCoverageResult, DiffCoverageSummary, DiffSelection
from covgate.paths.reconciler import resolve_in_coverage

log = structlog.get_logger(__name__)


def file_diff_coverage(report: CoverageReport, selection: DiffSelection) -> DiffCoverageResult:
    """Coverage of one file's changed lines."""
    changed = sorted(selection.lines)
    match = resolve_in_coverage(report, selection.file)
    if match is None:
        log.warning("diff.file_unresolved", file=selection.file, lines=len(changed))
        return DiffCoverageResult(
            file=selection.file,
            lines_in_diff=len(changed),
            lines_covered=0,
            uncovered_lines=tuple(changed),
        )

    covered_numbers = report.files[match.key].covered_line_numbers
    uncovered = tuple(n for n in changed if n not in covered_numbers)
    return DiffCoverageResult(
        file=selection.file,
        lines_in_diff=len(changed),
        lines_covered=len(changed) - len(uncovered),
        matched_key=match.key,
        strategy=match.strategy,
        uncovered_lines=uncovered,
    )


def compute_diff_coverage(
    report: CoverageReport, selections: Iterable[DiffSelection]
) -> DiffCoverageSummary:
    """Per-file and aggregate coverage of the changed lines.

    The aggregate percentage is computed from summed line counts, not by
    averaging per-file percentages. No changed lines at all yields 100%.
    """
    summary = DiffCoverageSummary(
        files=tuple(file_diff_coverage(report, selection) for selection in selections)
    )
    log.info(
        "diff.computed",
        files=len(summary.files),
        lines_in_diff=summary.lines_in_diff,
        lines_covered=summary.lines_covered,
        pct=round(summary.pct, 2),
    )
    return summary
