"""Mutation parser registry and auto-detection."""

from collections.abc import Sequence

from covgate.core.errors import ReportParseError
from covgate.coverage.parsers.base import ReportContent, as_text, guarded_parse
from covgate.mutation.models import MutationReport

from .base import MutationParser, map_status, short_mutator_name
from .pit import TRANSCRIPT_PATTERN, PitTranscriptParser, PitXmlParser
from .stryker import StrykerJsonParser

# Detection order: structured formats first, the transcript pattern last
MUTATION_PARSER_REGISTRY: Sequence[MutationParser] = (
    PitXmlParser(),
    StrykerJsonParser(),
    PitTranscriptParser(),
)

MUTATION_PARSER_BY_FORMAT: dict[str, MutationParser] = {
    p.format_id: p for p in MUTATION_PARSER_REGISTRY
}

__all__ = [
    "MUTATION_PARSER_BY_FORMAT",
    "MUTATION_PARSER_REGISTRY",
    "MutationParser",
    "PitTranscriptParser",
    "PitXmlParser",
    "StrykerJsonParser",
    "TRANSCRIPT_PATTERN",
    "detect_mutation_format",
    "map_status",
    "parse_mutation",
    "short_mutator_name",
]


def detect_mutation_format(content: ReportContent) -> str | None:
    for parser in MUTATION_PARSER_REGISTRY:
        if parser.can_parse(content):
            return parser.format_id
    return None


def parse_mutation(
    content: ReportContent,
    format_id: str | None = None,
    *,
    source_file: str = "",
) -> MutationReport:
    """Parse mutation report content into a unified MutationReport.

    Args:
        content: Raw report text or bytes.
        format_id: "pit-xml", "pit-text" or "stryker-json". Auto-detected if None.
        source_file: File attached to transcript mutants (pit-text only).

    Raises:
        UnrecognizedMutationStatus: On a status outside the closed set.
        ReportParseError: If the format is unknown, cannot be detected, or the
            content is unreadable as a whole.
        InternalError: If a parser fails in a way it does not report itself.
    """
    if not format_id:
        if not as_text(content).strip():
            return MutationReport(source_format="unknown")
        format_id = detect_mutation_format(content)
        if format_id is None:
            raise ReportParseError.undetectable_format("mutation")

    if format_id == "pit-text":
        return guarded_parse(format_id, PitTranscriptParser(source_file).parse, content)

    parser = MUTATION_PARSER_BY_FORMAT.get(format_id)
    if parser is None:
        raise ReportParseError.unknown_format(format_id, sorted(MUTATION_PARSER_BY_FORMAT))
    return guarded_parse(format_id, parser.parse, content)
