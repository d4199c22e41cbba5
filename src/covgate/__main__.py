from covgate.cli.main import cli

cli()
