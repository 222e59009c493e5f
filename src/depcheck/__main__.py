from depcheck.cli import cli

cli()
