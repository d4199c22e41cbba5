"""Diff-coverage data model."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from covgate.coverage.models import percent


@dataclass(frozen=True, slots=True)
class DiffSelection:
    """Changed or added line numbers of one file, as named by a diff."""

    file: str
    lines: frozenset[int] = field(default_factory=frozenset)

    @classmethod
    def of(cls, file: str, lines: Iterable[int]) -> DiffSelection:
        return cls(file=file, lines=frozenset(lines))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DiffSelection:
        """Build from ``{"file": str, "lines": [int, ...]}``."""
        return cls.of(str(data["file"]), (int(n) for n in data.get("lines") or ()))


@dataclass(frozen=True, slots=True)
class DiffCoverageResult:
    """Coverage of the changed lines of one file."""

    file: str
    lines_in_diff: int
    lines_covered: int
    matched_key: str | None = None
    strategy: str | None = None
    uncovered_lines: tuple[int, ...] = ()

    @property
    def pct(self) -> float:
        return percent(self.lines_covered, self.lines_in_diff)

    @property
    def resolved(self) -> bool:
        return self.matched_key is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file,
            "linesInDiff": self.lines_in_diff,
            "linesCovered": self.lines_covered,
            "pct": self.pct,
            "matchedKey": self.matched_key,
            "strategy": self.strategy,
            "uncoveredLines": list(self.uncovered_lines),
        }


@dataclass(frozen=True, slots=True)
class DiffCoverageSummary:
    """Per-file results plus the aggregate over all of them."""

    files: tuple[DiffCoverageResult, ...] = ()

    @property
    def lines_in_diff(self) -> int:
        return sum(r.lines_in_diff for r in self.files)

    @property
    def lines_covered(self) -> int:
        return sum(r.lines_covered for r in self.files)

    @property
    def pct(self) -> float:
        """Aggregate from the sums; 100.0 when no lines changed at all."""
        if self.lines_in_diff == 0:
            return 100.0
        return percent(self.lines_covered, self.lines_in_diff)

    def to_dict(self) -> dict[str, Any]:
        return {
            "files": [r.to_dict() for r in self.files],
            "linesInDiff": self.lines_in_diff,
            "linesCovered": self.lines_covered,
            "pct": self.pct,
        }
