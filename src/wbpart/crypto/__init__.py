"""Password hashing used by workbook protection."""

from __future__ import annotations

from .hashing import HashAlgorithm, PasswordHash, derive_password_hash, verify_password

__all__ = [
    "HashAlgorithm",
    "PasswordHash",
    "derive_password_hash",
    "verify_password",
]
