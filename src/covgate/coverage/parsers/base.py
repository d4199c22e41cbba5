"""Coverage parser protocol and shared report assembly."""

from __future__ import annotations

from collections.abc import Callable
from types import MappingProxyType
from typing import Protocol, TypeVar

import structlog

from covgate.core.errors import CovgateError, InternalError
from covgate.coverage.models import CoverageReport, FileCoverage, LineRecord

ReportContent = str | bytes
R = TypeVar("R")

log = structlog.get_logger(__name__)


class CoverageParser(Protocol):
    """Protocol for coverage format parsers.

    Each parser handles one coverage format and converts in-memory report
    content to the unified CoverageReport model. Parsers never touch the
    filesystem.
    """

    @property
    def format_id(self) -> str:
        """Format identifier (e.g., 'lcov', 'jacoco')."""
        ...

    def can_parse(self, content: ReportContent) -> bool:
        """Content sniff used for auto-detection."""
        ...

    def parse(self, content: ReportContent) -> CoverageReport:
        """Parse report content into the unified model.

        Empty or whitespace-only content yields an empty report.

        Raises:
            ReportParseError: If the content is unreadable as a whole.
        """
        ...


def as_text(content: ReportContent) -> str:
    if isinstance(content, bytes):
        return content.decode("utf-8", errors="replace")
    return content


def guarded_parse(
    format_id: str,
    parse: Callable[[ReportContent], R],
    content: ReportContent,
) -> R:
    """Run a parser, surfacing stray Python errors as InternalError.

    Typed covgate errors pass through unchanged.
    """
    try:
        return parse(content)
    except CovgateError:
        raise
    except (AttributeError, IndexError, KeyError, TypeError, ValueError) as e:
        log.error("parser.failed", format=format_id, error=repr(e))
        raise InternalError.unexpected(
            f"{format_id} parser failed: {e!r}", format=format_id
        ) from e


class ReportBuilder:
    """Accumulates line records per file while a parser scans its input.

    A path seen again later in the same input keeps accumulating into the
    entry created the first time; records are concatenated, not merged.
    """

    def __init__(self, source_format: str) -> None:
        self._source_format = source_format
        self._lines: dict[str, list[LineRecord]] = {}
        self._branches: dict[str, list[int]] = {}  # path -> [total, covered]

    def open_file(self, path: str) -> None:
        self._lines.setdefault(path, [])
        self._branches.setdefault(path, [0, 0])

    def add_line(self, path: str, line: int, hits: int) -> None:
        self.open_file(path)
        self._lines[path].append(LineRecord(line=line, hits=hits))

    def add_branches(self, path: str, total: int, covered: int) -> None:
        self.open_file(path)
        counts = self._branches[path]
        counts[0] += total
        counts[1] += covered

    def build(self) -> CoverageReport:
        files: dict[str, FileCoverage] = {}
        for path, records in self._lines.items():
            total, covered = self._branches[path]
            files[path] = FileCoverage(
                path=path,
                # Stable: duplicate line numbers keep their input order
                lines=tuple(sorted(records, key=lambda r: r.line)),
                branches_total=total,
                branches_covered=covered,
            )
        return CoverageReport(source_format=self._source_format, files=MappingProxyType(files))
