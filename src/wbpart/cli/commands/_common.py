"""Helpers shared by CLI subcommands."""

from __future__ import annotations

import zipfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import typer

from wbpart.core.constants import WORKBOOK_PROTECTION_SPIN_COUNT
from wbpart.core.errors import WorkbookPartError
from wbpart.file import SpreadsheetFile, open_file


def load(path: str, *, spin_count: int = WORKBOOK_PROTECTION_SPIN_COUNT) -> SpreadsheetFile:
    p = Path(path)
    if not p.is_file():
        raise typer.BadParameter(f"no such file: {path}")
    try:
        return open_file(p, spin_count=spin_count)
    except zipfile.BadZipFile as e:
        raise typer.BadParameter(f"not a zip package: {path}") from e


@contextmanager
def reported_errors() -> Iterator[None]:
    """Turn library errors into a message on stderr and exit code 1."""
    try:
        yield
    except WorkbookPartError as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(code=1) from e


def save(f: SpreadsheetFile, path: str, out: Optional[str]) -> Path:
    target = Path(out) if out else Path(path)
    f.save(target)
    return target
