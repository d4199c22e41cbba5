"""Unified line-coverage data model.

File-centric model: downstream components reason about files and lines,
never about the format a report came in. Every parser converts to this
representation and nothing is mutated after a parse returns.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


def percent(part: int, whole: int) -> float:
    """``part / whole * 100``, or 0.0 when ``whole`` is zero."""
    if whole <= 0:
        return 0.0
    return part / whole * 100.0


@dataclass(frozen=True, slots=True)
class LineRecord:
    """Hit count for one instrumented source line (1-based)."""

    line: int
    hits: int

    @property
    def covered(self) -> bool:
        return self.hits > 0

    def to_dict(self) -> dict[str, Any]:
        return {"line": self.line, "hits": self.hits, "covered": self.covered}


@dataclass(frozen=True, slots=True)
class FileCoverage:
    """Coverage data for a single file.

    ``path`` is the key exactly as found in the source report. ``lines`` is
    ordered by line number; records from repeated blocks for the same file
    are kept side by side.
    """

    path: str
    lines: tuple[LineRecord, ...] = ()
    branches_total: int = 0
    branches_covered: int = 0

    @property
    def total_lines(self) -> int:
        """Total number of instrumented line records."""
        return len(self.lines)

    @property
    def covered_lines(self) -> int:
        """Number of line records with at least one hit."""
        return sum(1 for record in self.lines if record.covered)

    @property
    def coverage_pct(self) -> float:
        return percent(self.covered_lines, self.total_lines)

    @property
    def branch_pct(self) -> float:
        return percent(self.branches_covered, self.branches_total)

    @property
    def uncovered_lines(self) -> list[int]:
        """Sorted, de-duplicated line numbers with no covered record."""
        covered = self.covered_line_numbers
        return sorted({r.line for r in self.lines if r.line not in covered})

    @property
    def covered_line_numbers(self) -> frozenset[int]:
        """Line numbers with at least one covered record."""
        return frozenset(r.line for r in self.lines if r.covered)

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "lines": [record.to_dict() for record in self.lines],
            "totalLines": self.total_lines,
            "coveredLines": self.covered_lines,
            "coveragePct": self.coverage_pct,
            "branchesTotal": self.branches_total,
            "branchesCovered": self.branches_covered,
        }


@dataclass(frozen=True, slots=True)
class CoverageReport:
    """Complete line-coverage report from one parse call.

    Files are keyed by the raw path found in the report.
    """

    source_format: str  # format id ("lcov", "jacoco")
    files: Mapping[str, FileCoverage] = field(default_factory=dict)

    @property
    def file_count(self) -> int:
        return len(self.files)

    @property
    def total_lines(self) -> int:
        return sum(f.total_lines for f in self.files.values())

    @property
    def covered_lines(self) -> int:
        return sum(f.covered_lines for f in self.files.values())

    @property
    def coverage_pct(self) -> float:
        return percent(self.covered_lines, self.total_lines)

    @property
    def branches_total(self) -> int:
        return sum(f.branches_total for f in self.files.values())

    @property
    def branches_covered(self) -> int:
        return sum(f.branches_covered for f in self.files.values())

    @property
    def branch_pct(self) -> float:
        return percent(self.branches_covered, self.branches_total)

    def to_dict(self) -> dict[str, Any]:
        return {
            "sourceFormat": self.source_format,
            "filesByPath": {path: fc.to_dict() for path, fc in self.files.items()},
            "totalLines": self.total_lines,
            "coveredLines": self.covered_lines,
            "coveragePct": self.coverage_pct,
            "branchesTotal": self.branches_total,
            "branchesCovered": self.branches_covered,
        }
