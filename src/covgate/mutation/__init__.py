"""Mutation-testing report parsing.

Supported formats:
    - pit-xml: PITest mutations.xml
    - pit-text: PITest console transcript (">> Line N: Mutator STATUS by Test")
    - stryker-json: Stryker mutation.json (mutation-testing-report-schema)

An unrecognized mutant status aborts the parse with
UnrecognizedMutationStatus rather than being coerced.
"""

from covgate.mutation.models import (
    Mutant,
    MutantStatus,
    MutationReport,
    MutationTotals,
)
from covgate.mutation.parsers import (
    MUTATION_PARSER_BY_FORMAT,
    MUTATION_PARSER_REGISTRY,
    MutationParser,
    detect_mutation_format,
    map_status,
    parse_mutation,
)

__all__ = [
    # Models
    "Mutant",
    "MutantStatus",
    "MutationReport",
    "MutationTotals",
    # Parsers
    "MUTATION_PARSER_BY_FORMAT",
    "MUTATION_PARSER_REGISTRY",
    "MutationParser",
    "detect_mutation_format",
    "map_status",
    "parse_mutation",
]
