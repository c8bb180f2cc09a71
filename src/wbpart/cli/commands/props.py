"""`wbpart props` / `wbpart set-props` commands."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Optional

import typer

from wbpart.core.model import WorkbookPropsOptions

from ._common import load, reported_errors, save


def register(app: typer.Typer) -> None:
    @app.command("props")
    def props(
        path: str = typer.Argument(..., help="Path to an .xlsx package."),
    ) -> None:
        """Print workbook properties as JSON (null = not configured)."""
        with reported_errors():
            f = load(path)
            opts = f.get_workbook_props()
        typer.echo(json.dumps(asdict(opts), indent=2, sort_keys=True))

    @app.command("set-props")
    def set_props(
        path: str = typer.Argument(..., help="Path to an .xlsx package."),
        date1904: Optional[bool] = typer.Option(None, "--date1904/--no-date1904", help="Use the 1904 date system."),
        filter_privacy: Optional[bool] = typer.Option(
            None, "--filter-privacy/--no-filter-privacy", help="Strip personal information on save."
        ),
        code_name: Optional[str] = typer.Option(None, "--code-name", help="VBA code name of the workbook."),
        out: Optional[str] = typer.Option(None, "--out", help="Write to this path instead of in place."),
    ) -> None:
        """Set workbook properties; options left out keep their current value."""
        with reported_errors():
            f = load(path)
            f.set_workbook_props(
                WorkbookPropsOptions(date1904=date1904, filter_privacy=filter_privacy, code_name=code_name)
            )
            target = save(f, path, out)
        typer.echo(str(target))
