"""`wbpart sheets` command."""

from __future__ import annotations

import typer

from ._common import load, reported_errors


def register(app: typer.Typer) -> None:
    @app.command("sheets")
    def sheets(
        path: str = typer.Argument(..., help="Path to an .xlsx package."),
    ) -> None:
        """List sheets in tab order: sheetId, relationship id, name."""
        with reported_errors():
            f = load(path)
            refs = list(f.workbook().sheets)
        for ref in refs:
            suffix = f"  ({ref.state})" if ref.state else ""
            typer.echo(f"{ref.sheet_id}\t{ref.rel_id}\t{ref.name}{suffix}")
