"""Tests for diff coverage calculation."""

import pytest

from covgate.coverage import CoverageReport, parse_coverage
from covgate.diff import (
    DiffCoverageSummary,
    DiffSelection,
    compute_diff_coverage,
    file_diff_coverage,
)

LCOV = (
    "SF:src/utils/math.ts\nDA:1,1\nDA:2,1\nDA:3,0\nDA:5,0\nend_of_record\n"
    "SF:src/b.ts\nDA:1,1\nDA:2,1\nDA:3,1\nDA:4,1\nDA:5,1\nDA:6,1\nDA:7,1\nDA:8,1\n"
    "DA:9,1\nDA:10,0\nend_of_record\n"
)


@pytest.fixture
def report() -> CoverageReport:
    return parse_coverage(LCOV)


class TestDiffSelection:
    """Tests for DiffSelection construction."""

    def test_of_deduplicates(self) -> None:
        selection = DiffSelection.of("a.ts", [3, 1, 3])
        assert selection.lines == frozenset({1, 3})

    def test_from_dict(self) -> None:
        selection = DiffSelection.from_dict({"file": "a.ts", "lines": [1, "2"]})
        assert selection == DiffSelection(file="a.ts", lines=frozenset({1, 2}))

    def test_from_dict_without_lines(self) -> None:
        assert DiffSelection.from_dict({"file": "a.ts"}).lines == frozenset()


class TestFileDiffCoverage:
    """Tests for file_diff_coverage."""

    def test_half_covered_file(self) -> None:
        single = parse_coverage("SF:a.ts\nDA:1,5\nDA:2,0\nend_of_record\n")
        result = file_diff_coverage(single, DiffSelection.of("a.ts", [1, 2]))

        assert result.lines_in_diff == 2
        assert result.lines_covered == 1
        assert result.pct == 50.0
        assert result.to_dict()["linesInDiff"] == 2

    def test_resolved_through_reconciler(self, report: CoverageReport) -> None:
        result = file_diff_coverage(report, DiffSelection.of("./utils/math.ts", [1, 2, 3]))

        assert result.lines_covered == 2
        assert result.pct == pytest.approx(66.67, abs=0.01)
        assert result.matched_key == "src/utils/math.ts"
        assert result.strategy == "normalized"
        assert result.uncovered_lines == (3,)

    def test_uninstrumented_line_not_covered(self, report: CoverageReport) -> None:
        result = file_diff_coverage(report, DiffSelection.of("src/utils/math.ts", [1, 4]))
        assert result.lines_covered == 1
        assert result.uncovered_lines == (4,)

    def test_unresolved_file_fully_uncovered(self, report: CoverageReport) -> None:
        result = file_diff_coverage(report, DiffSelection.of("missing.ts", [7, 8]))

        assert result.lines_in_diff == 2
        assert result.lines_covered == 0
        assert result.pct == 0.0
        assert not result.resolved
        assert result.uncovered_lines == (7, 8)

    def test_empty_selection(self, report: CoverageReport) -> None:
        result = file_diff_coverage(report, DiffSelection.of("src/b.ts", []))
        assert result.lines_in_diff == 0
        assert result.pct == 0.0

    def test_covered_never_exceeds_diff(self, report: CoverageReport) -> None:
        result = file_diff_coverage(report, DiffSelection.of("src/b.ts", range(1, 20)))
        assert 0 <= result.lines_covered <= result.lines_in_diff


class TestComputeDiffCoverage:
    """Tests for compute_diff_coverage aggregation."""

    def test_aggregate_from_sums(self, report: CoverageReport) -> None:
        summary = compute_diff_coverage(
            report,
            [
                DiffSelection.of("src/utils/math.ts", [3]),  # 0/1
                DiffSelection.of("src/b.ts", range(1, 10)),  # 9/9
            ],
        )
        # Average of per-file percentages would be 50%
        assert summary.lines_in_diff == 10
        assert summary.lines_covered == 9
        assert summary.pct == 90.0

    def test_no_selections_is_100(self, report: CoverageReport) -> None:
        summary = compute_diff_coverage(report, [])
        assert summary.pct == 100.0
        assert summary.files == ()

    def test_zero_length_selections_are_100(self, report: CoverageReport) -> None:
        summary = compute_diff_coverage(
            report, [DiffSelection.of("src/b.ts", []), DiffSelection.of("missing.ts", [])]
        )
        assert summary.pct == 100.0

    def test_unresolved_counts_against_aggregate(self, report: CoverageReport) -> None:
        summary = compute_diff_coverage(
            report,
            [DiffSelection.of("src/b.ts", [1]), DiffSelection.of("missing.ts", [1])],
        )
        assert summary.pct == 50.0

    def test_to_dict(self, report: CoverageReport) -> None:
        data = compute_diff_coverage(report, [DiffSelection.of("math.ts", [1])]).to_dict()

        assert data["linesInDiff"] == 1
        assert data["pct"] == 100.0
        assert data["files"][0]["matchedKey"] == "src/utils/math.ts"
        assert data["files"][0]["strategy"] == "basename"

    def test_empty_summary(self) -> None:
        assert DiffCoverageSummary().pct == 100.0
