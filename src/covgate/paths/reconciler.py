"""Report-path reconciliation.

Toolchains emit paths relative to different roots: the project root
(``src/app/user.ts``), a compiled-output root, or a package root
(``com/example/User.java``). A caller-supplied path is resolved to a report
key by trying each strategy in STRATEGIES order and stopping at the first
match:

1. exact       - the target is a report key
2. normalized  - equal after normalize_path() on both sides
3. basename    - same final path segment; first key in report order wins
4. suffix      - same last two path segments

The order is fixed so callers can rely on which strategy matched.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from covgate.config.constants import (
    JACOCO_SOURCE_ROOTS,
    NORMALIZABLE_PREFIXES,
    SOURCE_ROOT_FORMATS,
)

if TYPE_CHECKING:
    from covgate.coverage.models import CoverageReport
    from covgate.mutation.models import MutationReport

log = structlog.get_logger(__name__)

Strategy = Callable[..., str | None]


@dataclass(frozen=True, slots=True)
class PathMatch:
    """A resolved report key and the strategy that found it."""

    key: str
    strategy: str


def _forward_slashes(path: str) -> str:
    return path.replace("\\", "/")


def strip_source_root(path: str, source_roots: Iterable[str]) -> str:
    for root in source_roots:
        if path.startswith(root):
            return path[len(root) :]
    return path


def normalize_path(path: str, source_roots: Iterable[str] = ()) -> str:
    """Forward slashes, optional source-root strip, then at most one common prefix."""
    normalized = strip_source_root(_forward_slashes(path), source_roots)
    for prefix in NORMALIZABLE_PREFIXES:
        if normalized.startswith(prefix):
            return normalized[len(prefix) :]
    return normalized


def _segments(path: str) -> list[str]:
    return [part for part in _forward_slashes(path).split("/") if part]


def match_exact(
    target: str,
    keys: Sequence[str],
    *,
    source_roots: Iterable[str] = (),  # noqa: ARG001
) -> str | None:
    return target if target in keys else None


def match_normalized(
    target: str, keys: Sequence[str], *, source_roots: Iterable[str] = ()
) -> str | None:
    roots = tuple(source_roots)
    wanted = normalize_path(target, roots)
    for key in keys:
        if normalize_path(key, roots) == wanted:
            return key
    return None


def match_basename(
    target: str,
    keys: Sequence[str],
    *,
    source_roots: Iterable[str] = (),  # noqa: ARG001
) -> str | None:
    parts = _segments(target)
    if not parts:
        return None
    for key in keys:
        key_parts = _segments(key)
        if key_parts and key_parts[-1] == parts[-1]:
            return key
    return None


def match_suffix(
    target: str,
    keys: Sequence[str],
    *,
    source_roots: Iterable[str] = (),  # noqa: ARG001
) -> str | None:
    parts = _segments(target)
    if len(parts) < 2:
        return None
    for key in keys:
        if _segments(key)[-2:] == parts[-2:]:
            return key
    return None


STRATEGIES: tuple[tuple[str, Strategy], ...] = (
    ("exact", match_exact),
    ("normalized", match_normalized),
    ("basename", match_basename),
    ("suffix", match_suffix),
)


def resolve_path(
    target: str,
    keys: Iterable[str],
    *,
    source_roots: Iterable[str] = (),
) -> PathMatch | None:
    """Resolve ``target`` against report keys.

    Args:
        target: Path as named by a diff or caller.
        keys: Report keys in report iteration order.
        source_roots: Build-tool source roots stripped before normalized matching.

    Returns:
        The first match, or None when every strategy fails.
    """
    if not target:
        return None
    key_list = list(keys)
    roots = tuple(source_roots)
    for name, strategy in STRATEGIES:
        key = strategy(target, key_list, source_roots=roots)
        if key is not None:
            return PathMatch(key=key, strategy=name)
    log.debug("paths.unresolved", target=target, candidates=len(key_list))
    return None


def source_roots_for(source_format: str) -> tuple[str, ...]:
    return JACOCO_SOURCE_ROOTS if source_format in SOURCE_ROOT_FORMATS else ()


def resolve_in_coverage(report: CoverageReport, target: str) -> PathMatch | None:
    """Resolve a source path to a key of ``report.files``."""
    return resolve_path(
        target, report.files.keys(), source_roots=source_roots_for(report.source_format)
    )


def resolve_in_mutations(report: MutationReport, target: str) -> PathMatch | None:
    """Resolve a source path against the files a mutation report names."""
    return resolve_path(
        target, report.source_files(), source_roots=source_roots_for(report.source_format)
    )
