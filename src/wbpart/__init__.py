"""wbpart: workbook descriptor core for OOXML spreadsheet packages.

Lazily loads `xl/workbook.xml` from a package, exposes workbook properties,
password-protected structure/window locks and sheet registration, and writes
the descriptor back with namespace and relationship fix-ups on save.
"""

from __future__ import annotations

from wbpart.core import (
    DecodeError,
    NotProtectedError,
    PasswordLengthError,
    UnsupportedAlgorithmError,
    WorkbookPartError,
    WorkbookPropsOptions,
    WorkbookProtectionOptions,
    WrongPasswordError,
)
from wbpart.file import SpreadsheetFile, new_file, open_file

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "DecodeError",
    "NotProtectedError",
    "PasswordLengthError",
    "SpreadsheetFile",
    "UnsupportedAlgorithmError",
    "WorkbookPartError",
    "WorkbookPropsOptions",
    "WorkbookProtectionOptions",
    "WrongPasswordError",
    "new_file",
    "open_file",
]
