"""Configuration constants.

This module contains truly constant values that should NOT be user-configurable.
These are report-format facts, gate identifiers, and output caps.

For configurable values, see models.py (GatesConfig, ReportsConfig, etc.).
"""

# =============================================================================
# Gate Names
# =============================================================================
# Stable identifiers used in violations, in the non_blocking list and on the
# command line. Declaration order here is evaluation order.

GATE_COVERAGE = "coverage"
GATE_MUTATION = "mutation"
GATE_DIFF_COVERAGE = "diff_coverage"
GATE_CRITICAL_PATHS = "critical_paths"

GATE_NAMES = (GATE_COVERAGE, GATE_MUTATION, GATE_DIFF_COVERAGE, GATE_CRITICAL_PATHS)
"""All gate names in evaluation order."""

# =============================================================================
# Remediation Output
# =============================================================================

REMEDIATION_MAX_ITEMS_DEFAULT = 10
"""Default number of remediation entries listed per violation."""

REMEDIATION_MAX_ITEMS_LIMIT = 200
"""Hard cap for the configurable remediation list length."""

SUMMARY_MAX_MISSED_LINES = 20
"""Default missed-line entries listed per file in coverage summaries."""

# =============================================================================
# Path Reconciliation
# =============================================================================

NORMALIZABLE_PREFIXES = ("src/", "lib/", "app/", "./", "../")
"""Leading segments stripped (at most one) before comparing paths."""

JACOCO_SOURCE_ROOTS = (
    "src/main/java/",
    "src/test/java/",
    "src/it/java/",
    "src/main/kotlin/",
    "src/test/kotlin/",
    "src/main/scala/",
    "src/test/scala/",
    "src/main/groovy/",
    "src/test/groovy/",
)
"""Build-tool source roots that package-qualified report paths omit."""

SOURCE_ROOT_FORMATS = frozenset({"jacoco", "pit-xml", "pit-text"})
"""Report formats whose paths are package-qualified (source roots stripped)."""
