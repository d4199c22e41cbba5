"""Mutation parser protocol and status mapping."""

from __future__ import annotations

from typing import Protocol

from covgate.core.errors import UnrecognizedMutationStatus
from covgate.coverage.parsers.base import ReportContent
from covgate.mutation.models import MutantStatus, MutationReport

# Keys are upper-cased with '_' and '-' removed, so PIT's NO_COVERAGE and
# Stryker's NoCoverage land on the same entry.
_STATUS_BY_KEY: dict[str, MutantStatus] = {
    "KILLED": MutantStatus.KILLED,
    "SURVIVED": MutantStatus.SURVIVED,
    "NOCOVERAGE": MutantStatus.NO_COVERAGE,
    "TIMEDOUT": MutantStatus.TIMEOUT,
    "TIMEOUT": MutantStatus.TIMEOUT,
    "MEMORYERROR": MutantStatus.MEMORY_ERROR,
}


def map_status(raw: object, mutant_id: str | None = None) -> MutantStatus:
    """Map a tool status keyword onto MutantStatus.

    Raises:
        UnrecognizedMutationStatus: For anything outside the closed set,
            including a missing status.
    """
    text = raw if isinstance(raw, str) else ("" if raw is None else str(raw))
    key = text.strip().upper().replace("_", "").replace("-", "")
    status = _STATUS_BY_KEY.get(key)
    if status is None:
        raise UnrecognizedMutationStatus.from_status(text, mutant_id)
    return status


def short_mutator_name(mutator: str) -> str:
    """``org.pitest...ReturnValsMutator`` -> ``ReturnValsMutator``."""
    return mutator.rsplit(".", 1)[-1] if mutator else mutator


class MutationParser(Protocol):
    """Protocol for mutation report parsers."""

    @property
    def format_id(self) -> str:
        """Format identifier (e.g., 'pit-xml', 'stryker-json')."""
        ...

    def can_parse(self, content: ReportContent) -> bool:
        """Content sniff used for auto-detection."""
        ...

    def parse(self, content: ReportContent) -> MutationReport:
        """Parse report content into the unified model.

        Raises:
            UnrecognizedMutationStatus: On a status outside the closed set.
            ReportParseError: If the content is unreadable as a whole.
        """
        ...
