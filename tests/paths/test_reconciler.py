"""Tests for report-path reconciliation."""

import pytest

from covgate.coverage import parse_coverage
from covgate.mutation import parse_mutation
from covgate.paths import (
    STRATEGIES,
    match_basename,
    match_exact,
    match_normalized,
    match_suffix,
    normalize_path,
    resolve_in_coverage,
    resolve_in_mutations,
    resolve_path,
    source_roots_for,
    strip_source_root,
)

LCOV = (
    "SF:src/utils/math.ts\nDA:1,1\nDA:2,1\nDA:3,0\nend_of_record\n"
    "SF:src/app/user.ts\nDA:1,0\nend_of_record\n"
)

JACOCO = (
    '<report name="r"><package name="com/example">'
    '<sourcefile name="UserService.java"><line nr="1" mi="0" ci="1"/></sourcefile>'
    "</package></report>"
)


# =============================================================================
# Normalization
# =============================================================================


class TestNormalizePath:
    """Tests for normalize_path."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("src/utils/math.ts", "utils/math.ts"),
            ("lib/x.js", "x.js"),
            ("app/models/user.rb", "models/user.rb"),
            ("./utils/math.ts", "utils/math.ts"),
            ("../shared/a.ts", "shared/a.ts"),
            ("src\\utils\\math.ts", "utils/math.ts"),
            ("utils/math.ts", "utils/math.ts"),
        ],
    )
    def test_single_prefix_stripped(self, raw: str, expected: str) -> None:
        assert normalize_path(raw) == expected

    def test_strips_at_most_one_prefix(self) -> None:
        assert normalize_path("src/lib/a.ts") == "lib/a.ts"
        assert normalize_path("./src/a.ts") == "src/a.ts"

    def test_source_root_stripped_first(self) -> None:
        roots = source_roots_for("jacoco")
        assert normalize_path("src/main/java/com/example/A.java", roots) == "com/example/A.java"

    def test_strip_source_root(self) -> None:
        assert strip_source_root("src/test/kotlin/a/B.kt", source_roots_for("jacoco")) == "a/B.kt"
        assert strip_source_root("src/a.ts", ()) == "src/a.ts"


class TestSourceRootsFor:
    """Tests for source_roots_for."""

    @pytest.mark.parametrize("fmt", ["jacoco", "pit-xml", "pit-text"])
    def test_package_qualified_formats(self, fmt: str) -> None:
        assert "src/main/java/" in source_roots_for(fmt)

    @pytest.mark.parametrize("fmt", ["lcov", "stryker-json", "unknown"])
    def test_other_formats(self, fmt: str) -> None:
        assert source_roots_for(fmt) == ()


# =============================================================================
# Individual strategies
# =============================================================================


class TestStrategies:
    """Tests for the strategy functions and their order."""

    KEYS = ["src/utils/math.ts", "lib/utils/math.ts", "test/math.ts"]

    def test_order_is_fixed(self) -> None:
        assert [name for name, _ in STRATEGIES] == ["exact", "normalized", "basename", "suffix"]

    def test_exact(self) -> None:
        assert match_exact("test/math.ts", self.KEYS) == "test/math.ts"
        assert match_exact("math.ts", self.KEYS) is None

    def test_normalized_first_key_wins(self) -> None:
        assert match_normalized("./utils/math.ts", self.KEYS) == "src/utils/math.ts"

    def test_basename_first_key_wins(self) -> None:
        assert match_basename("other/math.ts", self.KEYS) == "src/utils/math.ts"
        assert match_basename("nothing.ts", self.KEYS) is None

    def test_suffix_needs_two_segments(self) -> None:
        assert match_suffix("math.ts", self.KEYS) is None
        assert match_suffix("x/test/math.ts", self.KEYS) == "test/math.ts"


# =============================================================================
# Resolution
# =============================================================================


class TestResolvePath:
    """Tests for resolve_path and the report helpers."""

    def test_exact_key_always_exact(self) -> None:
        report = parse_coverage(LCOV)
        for key in report.files:
            match = resolve_in_coverage(report, key)
            assert match is not None
            assert match.key == key
            assert match.strategy == "exact"

    def test_normalized_match(self) -> None:
        match = resolve_in_coverage(parse_coverage(LCOV), "./utils/math.ts")
        assert match is not None
        assert (match.key, match.strategy) == ("src/utils/math.ts", "normalized")

    def test_backslash_path(self) -> None:
        match = resolve_in_coverage(parse_coverage(LCOV), "src\\app\\user.ts")
        assert match is not None
        assert (match.key, match.strategy) == ("src/app/user.ts", "normalized")

    def test_basename_match(self) -> None:
        match = resolve_in_coverage(parse_coverage(LCOV), "math.ts")
        assert match is not None
        assert (match.key, match.strategy) == ("src/utils/math.ts", "basename")

    def test_not_found(self) -> None:
        assert resolve_in_coverage(parse_coverage(LCOV), "nonexistent.ts") is None

    def test_empty_target(self) -> None:
        assert resolve_path("", ["a.ts"]) is None

    def test_empty_keys(self) -> None:
        assert resolve_path("a.ts", []) is None

    def test_jacoco_source_root(self) -> None:
        report = parse_coverage(JACOCO)
        match = resolve_in_coverage(report, "src/main/java/com/example/UserService.java")
        assert match is not None
        assert (match.key, match.strategy) == ("com/example/UserService.java", "normalized")

    def test_lcov_has_no_source_roots(self) -> None:
        match = resolve_path("src/main/java/a/B.java", ["a/B.java"])
        assert match is not None
        assert match.strategy == "basename"

    def test_mutation_report_universe(self) -> None:
        report = parse_mutation(
            "<mutations><mutation status='KILLED'><sourceFile>UserService.java</sourceFile>"
            "<mutatedClass>com.example.UserService</mutatedClass><lineNumber>3</lineNumber>"
            "<mutator>M</mutator></mutation></mutations>"
        )
        match = resolve_in_mutations(report, "src/main/java/com/example/UserService.java")
        assert match is not None
        assert match.key == "com/example/UserService.java"
