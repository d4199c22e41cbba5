"""covgate check command - evaluate quality gates."""

import json
from pathlib import Path
from typing import Any

import click

from covgate.cli.utils import (
    EXIT_BLOCKING,
    EXIT_PASS,
    EXIT_WARN,
    InputError,
    read_input,
    setup,
)
from covgate.config.constants import GATE_NAMES
from covgate.core.errors import CovgateError, ReportParseError
from covgate.coverage import parse_coverage
from covgate.coverage.parsers.base import as_text
from covgate.diff import DiffCoverageSummary, DiffSelection, compute_diff_coverage
from covgate.gate import GateVerdict, collect_metrics, evaluate
from covgate.mutation import parse_mutation


def load_diff_selections(content: bytes) -> list[DiffSelection]:
    """Parse a JSON list of ``{"file": str, "lines": [int, ...]}`` objects.

    Raises:
        ReportParseError: If the document is not such a list.
    """
    try:
        data = json.loads(as_text(content).strip() or "[]")
    except json.JSONDecodeError as e:
        raise ReportParseError.invalid_json("diff", str(e)) from e
    if not isinstance(data, list):
        raise ReportParseError.invalid_json("diff", "expected a list of {file, lines} objects")
    try:
        return [DiffSelection.from_dict(entry) for entry in data]
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise ReportParseError.invalid_json("diff", f"bad diff entry: {e}") from e


def _render_text(verdict: GateVerdict, diff: DiffCoverageSummary | None) -> None:
    if diff is not None:
        click.echo(
            f"Diff coverage: {diff.pct:.1f}% "
            f"({diff.lines_covered}/{diff.lines_in_diff} changed lines)"
        )
    summary = verdict.to_dict()["summary"]
    click.echo(
        f"Gates: {verdict.status.upper()} "
        f"({summary['passedGates']}/{summary['totalGates']} passed)"
    )
    for violation in verdict.violations:
        marker = "FAIL" if violation.blocking else "WARN"
        click.echo(f"  [{marker}] {violation.gate_name}: {violation.message}")
        for item in violation.remediation:
            click.echo(f"      - {item}")


@click.command()
@click.option(
    "--coverage",
    "coverage_path",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Line-coverage report (LCOV or JaCoCo XML)",
)
@click.option(
    "--coverage-format",
    type=click.Choice(["lcov", "jacoco"]),
    help="Coverage report format (default: auto-detect)",
)
@click.option(
    "--mutation",
    "mutation_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Mutation report (PIT XML, PIT transcript or Stryker JSON)",
)
@click.option(
    "--mutation-format",
    type=click.Choice(["pit-xml", "pit-text", "stryker-json"]),
    help="Mutation report format (default: auto-detect)",
)
@click.option(
    "--mutation-source-file",
    default="",
    help="Source file attached to PIT transcript mutants",
)
@click.option(
    "--diff",
    "diff_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help='Changed lines as JSON: [{"file": "a.ts", "lines": [1, 2]}]',
)
@click.option("--min-coverage", type=click.FloatRange(0, 100), help="Minimum line coverage %")
@click.option("--min-mutation", type=click.FloatRange(0, 100), help="Minimum mutation score %")
@click.option("--min-diff", type=click.FloatRange(0, 100), help="Minimum diff coverage %")
@click.option("--require-critical", is_flag=True, help="Fail when a critical path is uncovered")
@click.option(
    "--critical",
    "critical_paths",
    multiple=True,
    help="Critical source path (repeatable; replaces configured paths)",
)
@click.option(
    "--warn-only",
    multiple=True,
    type=click.Choice(GATE_NAMES),
    help="Gate whose violation only warns (repeatable)",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def check_command(
    ctx: click.Context,
    coverage_path: Path,
    coverage_format: str | None,
    mutation_path: Path | None,
    mutation_format: str | None,
    mutation_source_file: str,
    diff_path: Path | None,
    min_coverage: float | None,
    min_mutation: float | None,
    min_diff: float | None,
    require_critical: bool,
    critical_paths: tuple[str, ...],
    warn_only: tuple[str, ...],
    as_json: bool,
) -> None:
    """Evaluate quality gates over coverage, mutation and diff reports.

    Exits 0 when every gate passes, 1 on a blocking violation and 2 when
    only non-blocking violations remain.
    """
    config = setup(ctx)
    gates = config.gates

    overrides: dict[str, Any] = {}
    if min_coverage is not None:
        overrides["min_line_or_branch_pct"] = min_coverage
    if min_mutation is not None:
        overrides["min_mutation_score_pct"] = min_mutation
    if min_diff is not None:
        overrides["min_diff_coverage_pct"] = min_diff
    if require_critical:
        overrides["require_critical_paths_covered"] = True
    thresholds = gates.thresholds.model_copy(update=overrides)

    try:
        coverage = parse_coverage(
            read_input(coverage_path), coverage_format or config.reports.coverage_format
        )
        mutation = None
        if mutation_path is not None:
            mutation = parse_mutation(
                read_input(mutation_path),
                mutation_format or config.reports.mutation_format,
                source_file=mutation_source_file,
            )
        diff = None
        if diff_path is not None:
            diff = compute_diff_coverage(coverage, load_diff_selections(read_input(diff_path)))
    except CovgateError as e:
        raise InputError.from_error(e) from e

    paths = list(critical_paths) or gates.critical_paths
    metrics = collect_metrics(
        coverage=coverage,
        mutation=mutation,
        diff=diff,
        critical_paths=paths or None,
        critical_min_pct=gates.critical_min_pct,
    )
    verdict = evaluate(
        metrics,
        thresholds,
        non_blocking={*gates.non_blocking, *warn_only},
        max_remediation_items=gates.max_remediation_items,
    )

    if as_json:
        output: dict[str, Any] = {
            "verdict": verdict.to_dict(),
            "metrics": metrics.to_dict(),
            "thresholds": thresholds.model_dump(by_alias=True, exclude_none=True),
        }
        if diff is not None:
            output["diffCoverage"] = diff.to_dict()
        click.echo(json.dumps(output, indent=2))
    else:
        _render_text(verdict, diff)

    if verdict.status == "fail":
        ctx.exit(EXIT_BLOCKING)
    ctx.exit(EXIT_WARN if verdict.status == "warn" else EXIT_PASS)
