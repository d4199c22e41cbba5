"""Coverage parser registry and auto-detection.

This module provides:
- PARSER_REGISTRY: All available parsers
- detect_parser: Auto-detect format from report content
- parse_coverage: Parse with a declared format or auto-detection
"""

from collections.abc import Sequence

from covgate.core.errors import ReportParseError
from covgate.coverage.models import CoverageReport

from .base import CoverageParser, ReportBuilder, ReportContent, as_text, guarded_parse
from .jacoco import JacocoParser
from .lcov import LcovParser

# Parser registry - order matters for detection priority
PARSER_REGISTRY: Sequence[CoverageParser] = (
    JacocoParser(),  # <report> XML
    LcovParser(),  # LCOV text (text fallback)
)

# Format ID to parser mapping
PARSER_BY_FORMAT: dict[str, CoverageParser] = {p.format_id: p for p in PARSER_REGISTRY}

__all__ = [
    "PARSER_REGISTRY",
    "PARSER_BY_FORMAT",
    "CoverageParser",
    "JacocoParser",
    "LcovParser",
    "ReportContent",
    "detect_coverage_format",
    "detect_parser",
    "parse_coverage",
]


def detect_parser(content: ReportContent) -> CoverageParser | None:
    """Return the first registered parser that claims the content."""
    for parser in PARSER_REGISTRY:
        if parser.can_parse(content):
            return parser
    return None


def detect_coverage_format(content: ReportContent) -> str | None:
    parser = detect_parser(content)
    return parser.format_id if parser else None


def parse_coverage(content: ReportContent, format_id: str | None = None) -> CoverageReport:
    """Parse coverage report content into a unified CoverageReport.

    Args:
        content: Raw report text or bytes.
        format_id: Declared format ("lcov", "jacoco"). Auto-detected if None.

    Returns:
        Parsed CoverageReport. Empty content yields an empty report.

    Raises:
        ReportParseError: If the format is unknown, cannot be detected, or the
            content is unreadable as a whole.
        InternalError: If a parser fails in a way it does not report itself.
    """
    if format_id:
        parser = PARSER_BY_FORMAT.get(format_id)
        if parser is None:
            raise ReportParseError.unknown_format(format_id, sorted(PARSER_BY_FORMAT))
        return guarded_parse(parser.format_id, parser.parse, content)

    if not as_text(content).strip():
        return ReportBuilder("unknown").build()

    detected = detect_parser(content)
    if detected is None:
        raise ReportParseError.undetectable_format("coverage")
    return guarded_parse(detected.format_id, detected.parse, content)
