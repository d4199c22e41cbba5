"""covgate CLI - covgate command."""

from pathlib import Path

import click

from covgate import __version__
from covgate.cli.check import check_command
from covgate.cli.parse import parse_group
from covgate.core.logging import set_run_id


@click.group()
@click.version_option(version=__version__, prog_name="covgate")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="YAML config file used instead of .covgate/config.yaml",
)
@click.option(
    "--repo-root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory holding .covgate/config.yaml (default: current directory)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    config_file: Path | None,
    repo_root: Path | None,
) -> None:
    """covgate - coverage and mutation quality gates for code changes."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_file"] = config_file
    ctx.obj["repo_root"] = repo_root
    ctx.obj["run_id"] = set_run_id()


cli.add_command(check_command, name="check")
cli.add_command(parse_group, name="parse")


if __name__ == "__main__":
    cli()
