"""LCOV format parser.

LCOV format is a plain text format with records like:
- SF:<source file path>
- DA:<line>,<hit count>[,<checksum>]
- BRDA:<line>,<block>,<branch>,<taken>
- end_of_record

All other records (TN, FN, FNDA, LF, LH, BRF, BRH, ...) are ignored.

Used by: Jest/Vitest (istanbul lcov reporter), pytest-cov, cargo-llvm-cov,
gcov, dart test
"""

import structlog

from covgate.coverage.models import CoverageReport

from .base import ReportBuilder, ReportContent, as_text

log = structlog.get_logger(__name__)


def _parse_count(raw: str) -> int | None:
    """Non-negative integer, or None when the field is malformed."""
    try:
        value = int(raw)
    except ValueError:
        return None
    return value if value >= 0 else None


class LcovParser:
    """Parser for LCOV format coverage data.

    Single left-to-right scan keeping the currently open file. Malformed
    records and records outside any file block are skipped.
    """

    @property
    def format_id(self) -> str:
        return "lcov"

    def can_parse(self, content: ReportContent) -> bool:
        """Check if content looks like LCOV: an SF: record before any non-record line."""
        for line in as_text(content).splitlines():
            stripped = line.strip()
            if stripped.startswith("SF:"):
                return True
            if stripped and not stripped.startswith(("#", "TN:")):
                break
        return False

    def parse(self, content: ReportContent) -> CoverageReport:
        """Parse LCOV content into CoverageReport."""
        builder = ReportBuilder(self.format_id)
        current_file: str | None = None
        skipped = 0

        for lineno, line in enumerate(as_text(content).splitlines(), start=1):
            line = line.strip()
            if not line:
                continue

            if line.startswith("SF:"):
                # A new SF: implicitly closes an unterminated block
                current_file = line[3:].strip()
                if not current_file:
                    current_file = None
                    skipped += 1
                    log.debug("lcov.record_skipped", lineno=lineno, reason="empty path")
                    continue
                builder.open_file(current_file)

            elif line.startswith("DA:"):
                if current_file is None:
                    skipped += 1
                    log.debug("lcov.record_skipped", lineno=lineno, reason="outside file block")
                    continue
                parts = line[3:].split(",")
                line_num = _parse_count(parts[0]) if parts else None
                hits = _parse_count(parts[1]) if len(parts) >= 2 else None
                if not line_num or hits is None:
                    skipped += 1
                    log.debug("lcov.record_skipped", lineno=lineno, reason="malformed DA")
                    continue
                builder.add_line(current_file, line_num, hits)

            elif line.startswith("BRDA:"):
                if current_file is None:
                    skipped += 1
                    continue
                parts = line[5:].split(",")
                if len(parts) < 4 or not parts[0].strip().isdigit():
                    skipped += 1
                    log.debug("lcov.record_skipped", lineno=lineno, reason="malformed BRDA")
                    continue
                # '-' means the branch was never evaluated
                taken = 0 if parts[3] == "-" else _parse_count(parts[3])
                if taken is None:
                    skipped += 1
                    log.debug("lcov.record_skipped", lineno=lineno, reason="malformed BRDA")
                    continue
                builder.add_branches(current_file, 1, 1 if taken > 0 else 0)

            elif line == "end_of_record":
                current_file = None

        report = builder.build()
        log.info(
            "coverage.parsed",
            format=self.format_id,
            files=report.file_count,
            lines=report.total_lines,
            skipped=skipped,
        )
        return report
