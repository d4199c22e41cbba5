"""Tests for coverage models and summaries.

Tests:
- models.py: percent, FileCoverage, CoverageReport properties
- report.py: compress_ranges, build_summary, build_text_summary
"""

from types import MappingProxyType

import pytest

from covgate.coverage import (
    CoverageReport,
    FileCoverage,
    LineRecord,
    build_summary,
    build_text_summary,
    compress_ranges,
    parse_coverage,
    percent,
)


def _fc(path: str, hits: list[int], start: int = 1) -> FileCoverage:
    return FileCoverage(
        path=path,
        lines=tuple(LineRecord(line=n, hits=h) for n, h in enumerate(hits, start=start)),
    )


# =============================================================================
# Models
# =============================================================================


class TestPercent:
    """Tests for percent helper."""

    def test_zero_whole(self) -> None:
        assert percent(0, 0) == 0.0

    def test_half(self) -> None:
        assert percent(1, 2) == 50.0


class TestFileCoverage:
    """Tests for FileCoverage model properties."""

    def test_empty_file(self) -> None:
        fc = FileCoverage(path="empty.py")
        assert fc.total_lines == 0
        assert fc.covered_lines == 0
        assert fc.coverage_pct == 0.0
        assert fc.uncovered_lines == []

    def test_partially_covered(self) -> None:
        fc = _fc("partial.py", [5, 0, 1, 0])
        assert fc.total_lines == 4
        assert fc.covered_lines == 2
        assert fc.coverage_pct == 50.0
        assert fc.uncovered_lines == [2, 4]

    def test_covered_lines_never_exceed_total(self) -> None:
        fc = _fc("a.py", [1, 1, 1])
        assert fc.covered_lines <= fc.total_lines
        assert fc.coverage_pct == 100.0

    def test_to_dict_uses_camel_case(self) -> None:
        data = _fc("a.py", [1, 0]).to_dict()
        assert data["path"] == "a.py"
        assert data["totalLines"] == 2
        assert data["coveredLines"] == 1
        assert data["coveragePct"] == 50.0
        assert data["lines"][0] == {"line": 1, "hits": 1, "covered": True}

    def test_frozen(self) -> None:
        fc = _fc("a.py", [1])
        with pytest.raises(AttributeError):
            fc.path = "b.py"  # type: ignore[misc]


class TestCoverageReport:
    """Tests for CoverageReport aggregates."""

    def test_empty_report(self) -> None:
        report = CoverageReport(source_format="lcov")
        assert report.file_count == 0
        assert report.coverage_pct == 0.0
        assert report.branch_pct == 0.0

    def test_totals_are_sums(self) -> None:
        report = CoverageReport(
            source_format="lcov",
            files={"a.py": _fc("a.py", [1, 0]), "b.py": _fc("b.py", [1, 1, 1, 0])},
        )
        assert report.total_lines == 6
        assert report.covered_lines == 4

    def test_files_read_only_after_parse(self) -> None:
        report = parse_coverage("SF:a.py\nDA:1,1\nend_of_record\n")
        assert isinstance(report.files, MappingProxyType)
        with pytest.raises(TypeError):
            report.files["b.py"] = _fc("b.py", [1])  # type: ignore[index]

    def test_two_parses_share_nothing(self) -> None:
        content = "SF:a.py\nDA:1,1\nend_of_record\n"
        first = parse_coverage(content)
        second = parse_coverage(content)
        assert first.to_dict() == second.to_dict()
        assert first.files["a.py"] is not second.files["a.py"]

    def test_to_dict(self) -> None:
        data = parse_coverage("SF:a.ts\nDA:1,5\nDA:2,0\nend_of_record\n").to_dict()
        assert data["sourceFormat"] == "lcov"
        assert data["filesByPath"]["a.ts"]["coveragePct"] == 50.0
        assert data["totalLines"] == 2


# =============================================================================
# Summaries
# =============================================================================


class TestCompressRanges:
    """Tests for compress_ranges helper."""

    def test_empty_list(self) -> None:
        assert compress_ranges([]) == ""

    def test_single_line(self) -> None:
        assert compress_ranges([5]) == "5"

    def test_mixed_ranges_and_singles(self) -> None:
        assert compress_ranges([1, 2, 3, 5, 7, 8, 9]) == "1-3,5,7-9"

    def test_unsorted_with_duplicates(self) -> None:
        assert compress_ranges([3, 1, 2, 2, 10]) == "1-3,10"


class TestBuildSummary:
    """Tests for build_summary."""

    @pytest.fixture
    def report(self) -> CoverageReport:
        return CoverageReport(
            source_format="lcov",
            files={
                "full.py": _fc("full.py", [1, 1]),
                "half.py": _fc("half.py", [1, 0, 0, 1]),
                "none.py": _fc("none.py", [0, 0, 0]),
            },
        )

    def test_summary_totals(self, report: CoverageReport) -> None:
        summary = build_summary(report)["summary"]
        assert summary["totalFiles"] == 3
        assert summary["totalLines"] == 9
        assert summary["coveredLines"] == 4
        assert "branchesTotal" not in summary

    def test_files_lowest_coverage_first(self, report: CoverageReport) -> None:
        files = build_summary(report)["files"]
        assert [f["path"] for f in files] == ["none.py", "half.py", "full.py"]
        assert files[0]["missedLines"] == "1-3"
        assert files[1]["missedLines"] == "2-3"

    def test_max_files(self, report: CoverageReport) -> None:
        assert len(build_summary(report, max_files=1)["files"]) == 1

    def test_exclude_files(self, report: CoverageReport) -> None:
        assert "files" not in build_summary(report, include_files=False)

    def test_missed_lines_truncated(self) -> None:
        report = CoverageReport(source_format="lcov", files={"a.py": _fc("a.py", [0] * 30)})
        stats = build_summary(report, max_missed_lines=5)["files"][0]
        assert stats["missedLines"] == "1-5"
        assert stats["missedLinesTruncated"] is True

    def test_branches_included_when_present(self) -> None:
        report = parse_coverage("SF:a.py\nDA:1,1\nBRDA:1,0,0,1\nBRDA:1,0,1,0\nend_of_record\n")
        summary = build_summary(report)["summary"]
        assert summary["branchesTotal"] == 2
        assert summary["branchPct"] == 50.0


class TestBuildTextSummary:
    """Tests for build_text_summary."""

    def test_no_data(self) -> None:
        assert build_text_summary(CoverageReport(source_format="lcov")) == "No coverage data"

    def test_one_line(self) -> None:
        report = parse_coverage("SF:a.ts\nDA:1,5\nDA:2,0\nend_of_record\n")
        assert build_text_summary(report) == "Coverage: 50.0% (1/2 lines, 1 files)"
