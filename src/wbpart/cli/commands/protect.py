"""`wbpart protect` / `wbpart unprotect` commands."""

from __future__ import annotations

from typing import Optional

import typer

from wbpart.core.constants import WORKBOOK_PROTECTION_SPIN_COUNT
from wbpart.core.model import WorkbookProtectionOptions

from ._common import load, reported_errors, save


def register(app: typer.Typer) -> None:
    @app.command("protect")
    def protect(
        path: str = typer.Argument(..., help="Path to an .xlsx package."),
        password: str = typer.Option("", "--password", help="Protection password (empty: locks only)."),
        algorithm: str = typer.Option(
            "", "--algorithm", help="XOR, MD4, MD5, SHA-1, SHA-256, SHA-384 or SHA-512 (default SHA-512)."
        ),
        lock_structure: bool = typer.Option(False, "--lock-structure", help="Lock sheet structure."),
        lock_windows: bool = typer.Option(False, "--lock-windows", help="Lock window layout."),
        spin_count: int = typer.Option(
            WORKBOOK_PROTECTION_SPIN_COUNT, "--spin-count", min=0, help="Hash iterations for the new password."
        ),
        out: Optional[str] = typer.Option(None, "--out", help="Write to this path instead of in place."),
    ) -> None:
        """Protect the workbook structure and/or windows."""
        with reported_errors():
            f = load(path, spin_count=spin_count)
            f.protect_workbook(
                WorkbookProtectionOptions(
                    algorithm_name=algorithm,
                    password=password,
                    lock_structure=lock_structure,
                    lock_windows=lock_windows,
                )
            )
            target = save(f, path, out)
        typer.echo(str(target))

    @app.command("unprotect")
    def unprotect(
        path: str = typer.Argument(..., help="Path to an .xlsx package."),
        password: Optional[str] = typer.Option(
            None, "--password", help="Verify this password first; omit to remove protection unconditionally."
        ),
        out: Optional[str] = typer.Option(None, "--out", help="Write to this path instead of in place."),
    ) -> None:
        """Remove workbook protection."""
        with reported_errors():
            f = load(path)
            f.unprotect_workbook(password)
            target = save(f, path, out)
        typer.echo(str(target))
