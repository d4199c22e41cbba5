"""Stryker mutation report parser (mutation-testing-report-schema JSON).

Structure:
{
  "schemaVersion": "1",
  "files": {
    "src/math.ts": {
      "mutants": [
        {"id": "1", "mutatorName": "ArithmeticOperator", "replacement": "a - b",
         "status": "Killed", "killedBy": ["0"],
         "location": {"start": {"line": 3, "column": 10}, "end": {...}}}
      ]
    }
  },
  "testFiles": {"test/math.spec.ts": {"tests": [{"id": "0", "name": "adds"}]}}
}

Test ids in killedBy are replaced by test names when testFiles lists them.
"""

import json
from typing import Any

import structlog

from covgate.core.errors import ReportParseError
from covgate.coverage.parsers.base import ReportContent, as_text
from covgate.mutation.models import Mutant, MutationReport

from .base import map_status

log = structlog.get_logger(__name__)


def _object(value: Any, where: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ReportParseError.invalid_json("stryker-json", f"{where} must be an object")
    return value


def _test_names(data: dict[str, Any]) -> dict[str, str]:
    names: dict[str, str] = {}
    test_files = data.get("testFiles")
    if test_files is None:
        return names
    for path, test_file in _object(test_files, "testFiles").items():
        tests = _object(test_file, f"testFiles[{path!r}]").get("tests") or []
        if not isinstance(tests, list):
            raise ReportParseError.invalid_json("stryker-json", f"tests of {path!r} must be a list")
        for test in tests:
            if isinstance(test, dict) and "id" in test and test.get("name"):
                names[str(test["id"])] = str(test["name"])
    return names


def _start_line(mutant: dict[str, Any]) -> int:
    location = mutant.get("location")
    start = location.get("start") if isinstance(location, dict) else None
    line = start.get("line", 0) if isinstance(start, dict) else 0
    return line if isinstance(line, int) and line >= 0 else 0


class StrykerJsonParser:
    """Parser for Stryker mutation.json reports.

    Any node of the wrong JSON type raises ReportParseError.
    """

    @property
    def format_id(self) -> str:
        return "stryker-json"

    def can_parse(self, content: ReportContent) -> bool:
        text = as_text(content).lstrip()
        return text.startswith("{") and '"files"' in text

    def parse(self, content: ReportContent) -> MutationReport:
        text = as_text(content)
        if not text.strip():
            return MutationReport(source_format=self.format_id)

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ReportParseError.invalid_json(self.format_id, str(e)) from e
        data = _object(data, "top level")

        names = _test_names(data)
        mutants: list[Mutant] = []
        for path, file_data in _object(data.get("files") or {}, "files").items():
            raw_mutants = _object(file_data, f"files[{path!r}]").get("mutants") or []
            if not isinstance(raw_mutants, list):
                raise ReportParseError.invalid_json(
                    self.format_id, f"mutants of {path!r} must be a list"
                )
            for raw in raw_mutants:
                raw = _object(raw, f"mutant in {path!r}")
                line = _start_line(raw)
                mutant_id = str(raw.get("id") or f"{path}:{line}:{len(mutants) + 1}")
                killed_by = raw.get("killedBy") or None
                if killed_by is not None and not isinstance(killed_by, list):
                    killed_by = [killed_by]
                mutants.append(
                    Mutant(
                        id=mutant_id,
                        source_file=path,
                        line=line,
                        mutator_kind=str(raw.get("mutatorName", "")),
                        status=map_status(raw.get("status"), mutant_id),
                        killed_by=(
                            tuple(names.get(str(t), str(t)) for t in killed_by)
                            if killed_by
                            else None
                        ),
                        original_text=raw.get("description"),
                        mutated_text=raw.get("replacement"),
                    )
                )

        report = MutationReport(source_format=self.format_id, mutants=tuple(mutants))
        log.info("mutation.parsed", format=self.format_id, mutants=len(mutants), score=report.score)
        return report
