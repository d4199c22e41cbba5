"""Unified mutation-testing data model.

Every mutation report format converts to this representation. Totals and
score are always derived from the mutants themselves, never copied from a
summary the tool may have embedded.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from covgate.coverage.models import percent


class MutantStatus(str, Enum):
    """Closed set of mutant outcomes."""

    KILLED = "Killed"
    SURVIVED = "Survived"
    NO_COVERAGE = "NoCoverage"
    TIMEOUT = "Timeout"
    MEMORY_ERROR = "MemoryError"


@dataclass(frozen=True, slots=True)
class Mutant:
    """A single mutant and its outcome."""

    id: str
    source_file: str
    line: int
    mutator_kind: str
    status: MutantStatus
    killed_by: tuple[str, ...] | None = None
    original_text: str | None = None
    mutated_text: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "sourceFile": self.source_file,
            "line": self.line,
            "mutatorKind": self.mutator_kind,
            "status": self.status.value,
            "killedBy": list(self.killed_by) if self.killed_by is not None else None,
            "originalText": self.original_text,
            "mutatedText": self.mutated_text,
        }


@dataclass(frozen=True, slots=True)
class MutationTotals:
    total: int = 0
    killed: int = 0
    survived: int = 0
    no_coverage: int = 0
    timeout: int = 0
    memory_error: int = 0

    @classmethod
    def from_mutants(cls, mutants: tuple[Mutant, ...]) -> MutationTotals:
        counts = dict.fromkeys(MutantStatus, 0)
        for mutant in mutants:
            counts[mutant.status] += 1
        return cls(
            total=len(mutants),
            killed=counts[MutantStatus.KILLED],
            survived=counts[MutantStatus.SURVIVED],
            no_coverage=counts[MutantStatus.NO_COVERAGE],
            timeout=counts[MutantStatus.TIMEOUT],
            memory_error=counts[MutantStatus.MEMORY_ERROR],
        )

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "killed": self.killed,
            "survived": self.survived,
            "noCoverage": self.no_coverage,
            "timeout": self.timeout,
            "memoryError": self.memory_error,
        }


@dataclass(frozen=True, slots=True)
class MutationReport:
    """All mutants from one parse call."""

    source_format: str  # "pit-xml", "pit-text", "stryker-json"
    mutants: tuple[Mutant, ...] = ()

    @property
    def totals(self) -> MutationTotals:
        return MutationTotals.from_mutants(self.mutants)

    @property
    def score(self) -> float:
        """Killed mutants as a percentage of all mutants (0.0 when empty)."""
        totals = self.totals
        return percent(totals.killed, totals.total)

    def surviving(self) -> list[Mutant]:
        """Surviving mutants sorted by file, then line."""
        return sorted(
            (m for m in self.mutants if m.status is MutantStatus.SURVIVED),
            key=lambda m: (m.source_file, m.line, m.id),
        )

    def source_files(self) -> list[str]:
        """Distinct source files in first-seen order."""
        return list(dict.fromkeys(m.source_file for m in self.mutants if m.source_file))

    def to_dict(self) -> dict[str, Any]:
        return {
            "sourceFormat": self.source_format,
            "mutants": [m.to_dict() for m in self.mutants],
            "totals": self.totals.to_dict(),
            "score": self.score,
        }
