"""Exception types raised by the workbook descriptor core.

All errors derive from `WorkbookPartError` so callers can catch the family at
once. Errors that describe bad input data also derive from `ValueError`.
"""

from __future__ import annotations


class WorkbookPartError(Exception):
    """Base error for wbpart."""


class DecodeError(WorkbookPartError, ValueError):
    """The backing part exists but is not a well-formed workbook descriptor."""


class UnsupportedAlgorithmError(WorkbookPartError, ValueError):
    """Unknown (or unavailable) password hash algorithm."""

    def __init__(self, algorithm_name: str, reason: str = "unsupported hash algorithm"):
        super().__init__(f"{reason}: {algorithm_name!r}")
        self.algorithm_name = algorithm_name


class PasswordLengthError(WorkbookPartError, ValueError):
    """Password is empty or longer than the format allows."""


class NotProtectedError(WorkbookPartError):
    """Password verification requested but the workbook carries no protection."""

    def __init__(self) -> None:
        super().__init__("workbook has no protection set")


class WrongPasswordError(WorkbookPartError):
    """Password does not match the stored protection hash."""

    def __init__(self) -> None:
        super().__init__("workbook protection password does not match")
