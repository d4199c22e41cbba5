"""Structured coverage summaries.

Output schema for build_summary:
{
    "summary": {
        "totalFiles": int,
        "totalLines": int,
        "coveredLines": int,
        "coveragePct": float,
        "branchesTotal": int,          # only when the report has branches
        "branchesCovered": int,
        "branchPct": float
    },
    "files": [
        {
            "path": str,
            "totalLines": int,
            "coveredLines": int,
            "coveragePct": float,
            "missedLines": "1-3,7",     # compressed ranges
            "missedLinesTruncated": bool  # only when truncated
        },
        ...
    ],
    "sourceFormat": str
}
"""

from collections.abc import Iterable
from typing import Any

from covgate.config.constants import SUMMARY_MAX_MISSED_LINES
from covgate.coverage.models import CoverageReport


def compress_ranges(lines: Iterable[int]) -> str:
    """Render sorted line numbers as ranges: [1, 2, 3, 5] -> "1-3,5"."""
    ordered = sorted(set(lines))
    if not ordered:
        return ""

    parts: list[str] = []
    start = prev = ordered[0]
    for line in ordered[1:]:
        if line == prev + 1:
            prev = line
            continue
        parts.append(f"{start}-{prev}" if start != prev else str(start))
        start = prev = line
    parts.append(f"{start}-{prev}" if start != prev else str(start))
    return ",".join(parts)


def compute_file_stats(
    report: CoverageReport,
    *,
    max_missed_lines: int = SUMMARY_MAX_MISSED_LINES,
) -> list[dict[str, Any]]:
    """Per-file statistics, lowest coverage first (ties broken by path)."""
    file_stats = []
    for path, fc in report.files.items():
        missed = fc.uncovered_lines
        stats: dict[str, Any] = {
            "path": path,
            "totalLines": fc.total_lines,
            "coveredLines": fc.covered_lines,
            "coveragePct": round(fc.coverage_pct, 2),
            "missedLines": compress_ranges(missed[:max_missed_lines]),
        }
        if len(missed) > max_missed_lines:
            stats["missedLinesTruncated"] = True
        file_stats.append(stats)

    file_stats.sort(key=lambda f: (f["coveragePct"], f["path"]))
    return file_stats


def build_summary(
    report: CoverageReport,
    *,
    include_files: bool = True,
    max_files: int | None = None,
    max_missed_lines: int = SUMMARY_MAX_MISSED_LINES,
) -> dict[str, Any]:
    """Build a structured coverage summary from a report.

    Args:
        report: The coverage report to summarize.
        include_files: Whether to include per-file details.
        max_files: Limit number of files (lowest coverage first). None = all.
        max_missed_lines: Max missed lines to list per file.

    Returns:
        Structured dict suitable for JSON serialization.
    """
    summary: dict[str, Any] = {
        "totalFiles": report.file_count,
        "totalLines": report.total_lines,
        "coveredLines": report.covered_lines,
        "coveragePct": round(report.coverage_pct, 2),
    }
    if report.branches_total > 0:
        summary["branchesTotal"] = report.branches_total
        summary["branchesCovered"] = report.branches_covered
        summary["branchPct"] = round(report.branch_pct, 2)

    result: dict[str, Any] = {
        "summary": summary,
        "sourceFormat": report.source_format,
    }

    if include_files:
        file_stats = compute_file_stats(report, max_missed_lines=max_missed_lines)
        if max_files is not None:
            file_stats = file_stats[:max_files]
        result["files"] = file_stats

    return result


def build_text_summary(report: CoverageReport) -> str:
    """Concise one-line summary for terminal output."""
    if report.total_lines == 0:
        return "No coverage data"
    return (
        f"Coverage: {report.coverage_pct:.1f}% "
        f"({report.covered_lines}/{report.total_lines} lines, {report.file_count} files)"
    )
