"""JaCoCo XML format parser.

JaCoCo is the standard JVM coverage tool, used via Maven and Gradle.
Only the per-line tier is read: <sourcefile> elements with <line> children.
Class and method counters carry no line numbers and are ignored.

Structure:
<report name="...">
  <group name="module">            (optional, multi-module builds)
    <package name="com/example">
      <class name="com/example/Foo" sourcefilename="Foo.java">...</class>
      <sourcefile name="Foo.java">
        <line nr="1" mi="0" ci="1" mb="0" cb="0"/>
        <line nr="2" mi="1" ci="0" mb="1" cb="1"/>
      </sourcefile>
    </package>
  </group>
</report>

mi/ci = missed/covered instructions, mb/cb = missed/covered branches.
A line is covered iff ci > 0, whatever its branch counts.
"""

import re
import xml.etree.ElementTree as ET

import structlog

from covgate.core.errors import ReportParseError
from covgate.coverage.models import CoverageReport

from .base import ReportBuilder, ReportContent, as_text

log = structlog.get_logger(__name__)

# Prolog (declaration, comments, DOCTYPE) followed by the <report> root element
ROOT_PATTERN = re.compile(
    r"\A\ufeff?\s*(?:(?:<\?.*?\?>|<!--.*?-->|<!DOCTYPE[^>]*>)\s*)*<report[\s/>]", re.DOTALL
)


def _int_attr(element: ET.Element, name: str, default: int | None = None) -> int | None:
    raw = element.get(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return None
    return value if value >= 0 else None


def source_file_key(package_name: str, file_name: str) -> str:
    """Composite ``<package-path>/<file-name>`` key with forward slashes."""
    package_path = package_name.replace("\\", "/").strip("/")
    file_name = file_name.replace("\\", "/").strip("/")
    return f"{package_path}/{file_name}" if package_path else file_name


class JacocoParser:
    """Parser for JaCoCo XML line data."""

    @property
    def format_id(self) -> str:
        return "jacoco"

    def can_parse(self, content: ReportContent) -> bool:
        """Check if content is a JaCoCo <report> document."""
        return ROOT_PATTERN.match(as_text(content)) is not None

    def parse(self, content: ReportContent) -> CoverageReport:
        """Parse JaCoCo XML into CoverageReport."""
        builder = ReportBuilder(self.format_id)
        if not as_text(content).strip():
            return builder.build()

        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            raise ReportParseError.invalid_xml(self.format_id, str(e)) from e

        skipped = 0
        for package in root.iter("package"):
            package_name = package.get("name", "")

            for sourcefile in package.findall("sourcefile"):
                file_name = sourcefile.get("name", "")
                if not file_name:
                    skipped += 1
                    continue

                file_path = source_file_key(package_name, file_name)
                builder.open_file(file_path)

                for line in sourcefile.findall("line"):
                    nr = _int_attr(line, "nr")
                    ci = _int_attr(line, "ci")
                    if not nr or ci is None:
                        skipped += 1
                        log.debug(
                            "jacoco.record_skipped",
                            file=file_path,
                            nr=line.get("nr"),
                            reason="malformed line",
                        )
                        continue
                    builder.add_line(file_path, nr, ci)

                    mb = _int_attr(line, "mb", 0) or 0
                    cb = _int_attr(line, "cb", 0) or 0
                    if mb + cb > 0:
                        builder.add_branches(file_path, mb + cb, cb)

        report = builder.build()
        log.info(
            "coverage.parsed",
            format=self.format_id,
            files=report.file_count,
            lines=report.total_lines,
            skipped=skipped,
        )
        return report
