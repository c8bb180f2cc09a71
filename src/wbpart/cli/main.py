"""wbpart CLI entrypoint.

A small Typer application; every subcommand opens an `.xlsx` package, runs one
workbook-descriptor operation and (for mutating commands) saves it back.
"""

from __future__ import annotations

import typer

from wbpart.utils.log import configure_logging

app = typer.Typer(
    name="wbpart",
    add_completion=False,
    no_args_is_help=True,
    help="Inspect and edit workbook-level properties and protection of .xlsx packages.",
)


@app.callback()
def _callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress to stderr."),
) -> None:
    """wbpart CLI."""
    if verbose:
        configure_logging(verbose=True)


@app.command("version")
def version() -> None:
    """Print the installed wbpart version."""
    from wbpart import __version__

    typer.echo(__version__)


def _register_commands() -> None:
    """Register CLI subcommands."""
    from wbpart.cli.commands import props as props_cmd
    from wbpart.cli.commands import protect as protect_cmd
    from wbpart.cli.commands import sheets as sheets_cmd

    props_cmd.register(app)
    protect_cmd.register(app)
    sheets_cmd.register(app)


_register_commands()
