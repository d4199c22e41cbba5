"""covgate parse commands - print a normalized report."""

import json
from pathlib import Path

import click

from covgate.cli.utils import InputError, read_input, setup
from covgate.core.errors import CovgateError
from covgate.coverage import build_summary, build_text_summary, parse_coverage
from covgate.mutation import parse_mutation


@click.group()
def parse_group() -> None:
    """Parse a report and print it in normalized form."""


@parse_group.command("coverage")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--format", "format_id", type=click.Choice(["lcov", "jacoco"]))
@click.option("--summary", is_flag=True, help="Print a per-file summary instead")
@click.option("--text", "as_text", is_flag=True, help="With --summary: plain text")
@click.pass_context
def coverage_command(
    ctx: click.Context,
    path: Path,
    format_id: str | None,
    summary: bool,
    as_text: bool,
) -> None:
    """Parse an LCOV or JaCoCo report at PATH."""
    config = setup(ctx)
    try:
        report = parse_coverage(read_input(path), format_id or config.reports.coverage_format)
    except CovgateError as e:
        raise InputError.from_error(e) from e

    if summary and as_text:
        click.echo(build_text_summary(report))
    elif summary:
        click.echo(json.dumps(build_summary(report), indent=2))
    else:
        click.echo(json.dumps(report.to_dict(), indent=2))


@parse_group.command("mutation")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--format", "format_id", type=click.Choice(["pit-xml", "pit-text", "stryker-json"])
)
@click.option("--source-file", default="", help="Source file for PIT transcript mutants")
@click.pass_context
def mutation_command(
    ctx: click.Context,
    path: Path,
    format_id: str | None,
    source_file: str,
) -> None:
    """Parse a PIT or Stryker mutation report at PATH."""
    config = setup(ctx)
    try:
        report = parse_mutation(
            read_input(path),
            format_id or config.reports.mutation_format,
            source_file=source_file,
        )
    except CovgateError as e:
        raise InputError.from_error(e) from e

    click.echo(json.dumps(report.to_dict(), indent=2))
