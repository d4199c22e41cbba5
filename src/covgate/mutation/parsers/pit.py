"""PIT (PITest) mutation report parsers.

XML report (mutations.xml):
<mutations partial="false">
  <mutation detected="true" status="KILLED" numberOfTestsRun="3">
    <sourceFile>UserService.java</sourceFile>
    <mutatedClass>com.example.UserService</mutatedClass>
    <mutatedMethod>findById</mutatedMethod>
    <lineNumber>42</lineNumber>
    <mutator>org.pitest.mutationtest.engine.gregor.mutators.ReturnValsMutator</mutator>
    <killingTest>com.example.UserServiceTest.testFindById()</killingTest>
    <description>replaced return value with null</description>
  </mutation>
</mutations>

Newer PIT versions emit <killingTests>a|b</killingTests> instead of
<killingTest>; both are read.

Console transcript, one mutant per matching line:
>> Line 42: ReturnValsMutator KILLED by UserServiceTest.testFindById
Lines that do not match are ignored.
"""

import re
import xml.etree.ElementTree as ET

import structlog

from covgate.core.errors import ReportParseError
from covgate.coverage.parsers.base import ReportContent, as_text
from covgate.mutation.models import Mutant, MutationReport

from .base import map_status, short_mutator_name

log = structlog.get_logger(__name__)

TRANSCRIPT_PATTERN = re.compile(r">> Line (\d+): (\w+) (\w+)(?: by (.+))?")


def _child_text(element: ET.Element, tag: str) -> str | None:
    child = element.find(tag)
    if child is None or child.text is None:
        return None
    text = child.text.strip()
    return text or None


def _source_path(source_file: str | None, mutated_class: str | None) -> str:
    """Package-qualified path like JaCoCo keys: com/example/UserService.java."""
    if not source_file:
        return ""
    if mutated_class and "." in mutated_class:
        package = mutated_class.split("$", 1)[0].rsplit(".", 1)[0]
        return f"{package.replace('.', '/')}/{source_file}"
    return source_file


def _killed_by(element: ET.Element) -> tuple[str, ...] | None:
    single = _child_text(element, "killingTest")
    if single:
        return (single,)
    many = _child_text(element, "killingTests")
    if many:
        tests = tuple(t.strip() for t in many.split("|") if t.strip())
        return tests or None
    return None


class PitXmlParser:
    """Parser for PIT mutations.xml."""

    @property
    def format_id(self) -> str:
        return "pit-xml"

    def can_parse(self, content: ReportContent) -> bool:
        return "<mutations" in as_text(content)[:2048]

    def parse(self, content: ReportContent) -> MutationReport:
        if not as_text(content).strip():
            return MutationReport(source_format=self.format_id)

        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            raise ReportParseError.invalid_xml(self.format_id, str(e)) from e

        mutants: list[Mutant] = []
        for ordinal, node in enumerate(root.iter("mutation"), start=1):
            mutated_class = _child_text(node, "mutatedClass")
            source_file = _source_path(_child_text(node, "sourceFile"), mutated_class)
            line_text = _child_text(node, "lineNumber") or ""
            line = int(line_text) if line_text.isdigit() else 0
            mutant_id = f"{mutated_class or source_file or 'mutant'}:{line}:{ordinal}"

            status = map_status(node.get("status"), mutant_id)
            mutator = short_mutator_name(_child_text(node, "mutator") or "")
            mutants.append(
                Mutant(
                    id=mutant_id,
                    source_file=source_file,
                    line=line,
                    mutator_kind=mutator,
                    status=status,
                    killed_by=_killed_by(node),
                    original_text=_child_text(node, "description"),
                )
            )

        report = MutationReport(source_format=self.format_id, mutants=tuple(mutants))
        log.info("mutation.parsed", format=self.format_id, mutants=len(mutants), score=report.score)
        return report


class PitTranscriptParser:
    """Parser for PIT console output.

    The transcript names no source file; ``source_file`` is attached to
    every mutant when the caller knows it.
    """

    def __init__(self, source_file: str = "") -> None:
        self._source_file = source_file

    @property
    def format_id(self) -> str:
        return "pit-text"

    def can_parse(self, content: ReportContent) -> bool:
        return TRANSCRIPT_PATTERN.search(as_text(content)) is not None

    def parse(self, content: ReportContent) -> MutationReport:
        mutants: list[Mutant] = []
        for raw_line in as_text(content).splitlines():
            match = TRANSCRIPT_PATTERN.search(raw_line)
            if not match:
                continue
            line = int(match.group(1))
            mutant_id = f"{self._source_file or 'line'}:{line}:{len(mutants) + 1}"
            killing_test = (match.group(4) or "").strip()
            mutants.append(
                Mutant(
                    id=mutant_id,
                    source_file=self._source_file,
                    line=line,
                    mutator_kind=match.group(2),
                    status=map_status(match.group(3), mutant_id),
                    killed_by=(killing_test,) if killing_test else None,
                )
            )

        report = MutationReport(source_format=self.format_id, mutants=tuple(mutants))
        log.info("mutation.parsed", format=self.format_id, mutants=len(mutants), score=report.score)
        return report
