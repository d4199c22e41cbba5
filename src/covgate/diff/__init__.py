"""Diff-scoped coverage."""

from covgate.diff.calculator import compute_diff_coverage, file_diff_coverage
from covgate.diff.models import DiffCoverageResult, DiffCoverageSummary, DiffSelection

__all__ = [
    "DiffCoverageResult",
    "DiffCoverageSummary",
    "DiffSelection",
    "compute_diff_coverage",
    "file_diff_coverage",
]
