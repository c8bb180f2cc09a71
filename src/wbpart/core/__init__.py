"""wbpart core: data model, constants and errors.

This package is intentionally standalone and must not import
codecs/package/workbook/cli to avoid circular dependencies.
"""

from __future__ import annotations

from .constants import (
    DEFAULT_HASH_ALGORITHM,
    DEFAULT_WORKBOOK_PATH,
    MAX_PASSWORD_LENGTH,
    SALT_LENGTH,
    WORKBOOK_PROTECTION_SPIN_COUNT,
)
from .errors import (
    DecodeError,
    NotProtectedError,
    PasswordLengthError,
    UnsupportedAlgorithmError,
    WorkbookPartError,
    WrongPasswordError,
)
from .model import (
    AlternateContent,
    RawElement,
    SheetRef,
    Workbook,
    WorkbookPr,
    WorkbookPropsOptions,
    WorkbookProtection,
    WorkbookProtectionOptions,
)

__all__ = [
    "DEFAULT_HASH_ALGORITHM",
    "DEFAULT_WORKBOOK_PATH",
    "MAX_PASSWORD_LENGTH",
    "SALT_LENGTH",
    "WORKBOOK_PROTECTION_SPIN_COUNT",
    "DecodeError",
    "NotProtectedError",
    "PasswordLengthError",
    "UnsupportedAlgorithmError",
    "WorkbookPartError",
    "WrongPasswordError",
    "AlternateContent",
    "RawElement",
    "SheetRef",
    "Workbook",
    "WorkbookPr",
    "WorkbookPropsOptions",
    "WorkbookProtection",
    "WorkbookProtectionOptions",
]
