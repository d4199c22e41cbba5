"""Unified line-coverage parsing and reporting.

This package provides:
- Multi-format coverage parsing (LCOV text, JaCoCo XML)
- A format-agnostic per-file, per-line hit model
- Structured JSON summaries

Usage:
    from covgate.coverage import parse_coverage, build_summary

    report = parse_coverage(Path("coverage/lcov.info").read_text(), "lcov")
    summary = build_summary(report)

Supported formats:
    - lcov: Jest, Vitest, NYC, pytest-cov, cargo-llvm-cov, gcov
    - jacoco: Java/Kotlin (Maven/Gradle)
"""

from covgate.coverage.models import (
    CoverageReport,
    FileCoverage,
    LineRecord,
    percent,
)
from covgate.coverage.parsers import (
    PARSER_BY_FORMAT,
    PARSER_REGISTRY,
    CoverageParser,
    detect_coverage_format,
    detect_parser,
    parse_coverage,
)
from covgate.coverage.report import (
    build_summary,
    build_text_summary,
    compress_ranges,
    compute_file_stats,
)

__all__ = [
    # Models
    "CoverageReport",
    "FileCoverage",
    "LineRecord",
    "percent",
    # Parsers
    "CoverageParser",
    "PARSER_BY_FORMAT",
    "PARSER_REGISTRY",
    "detect_coverage_format",
    "detect_parser",
    "parse_coverage",
    # Report
    "build_summary",
    "build_text_summary",
    "compress_ranges",
    "compute_file_stats",
]
