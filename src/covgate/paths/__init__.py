"""Path reconciliation between caller paths and report keys."""

from covgate.paths.reconciler import (
    STRATEGIES,
    PathMatch,
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

__all__ = [
    "STRATEGIES",
    "PathMatch",
    "match_basename",
    "match_exact",
    "match_normalized",
    "match_suffix",
    "normalize_path",
    "resolve_in_coverage",
    "resolve_in_mutations",
    "resolve_path",
    "source_roots_for",
    "strip_source_root",
]
