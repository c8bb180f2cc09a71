"""Workbook structure/window protection.

State machine over `Workbook.workbook_protection`:

- Unprotected -> Protected: `protect_workbook`
- Protected -> Unprotected: `unprotect_workbook`

`unprotect_workbook()` without a password clears protection without any
verification. This administrative override is intentional and is the weak
point of the scheme: protection is declarative metadata for spreadsheet
applications, not access control.

Both operations compute or verify the hash before touching the workbook, so a
failure leaves the record exactly as it was.
"""

from __future__ import annotations

from typing import Optional

from wbpart.core.constants import DEFAULT_HASH_ALGORITHM, WORKBOOK_PROTECTION_SPIN_COUNT
from wbpart.core.errors import NotProtectedError, WrongPasswordError
from wbpart.core.model import Workbook, WorkbookProtection, WorkbookProtectionOptions
from wbpart.crypto.hashing import derive_password_hash, verify_password
from wbpart.utils.log import get_logger

logger = get_logger("workbook.protection")


def protect_workbook(
    wb: Workbook,
    opts: Optional[WorkbookProtectionOptions] = None,
    *,
    spin_count: int = WORKBOOK_PROTECTION_SPIN_COUNT,
) -> WorkbookProtection:
    """Install protection on `wb` and return the protection record.

    Lock flags are always taken from `opts` (False when `opts` is None). With a
    non-empty password a salted, iterated hash is derived (SHA-512 unless
    `opts.algorithm_name` says otherwise) and replaces any stored hash material.
    With an empty password existing hash material is kept.

    Raises:
        UnsupportedAlgorithmError: unknown algorithm name.
        PasswordLengthError: password longer than 255 characters.
    """
    if opts is None:
        opts = WorkbookProtectionOptions()

    derived = None
    if opts.password:
        derived = derive_password_hash(
            opts.password,
            opts.algorithm_name or DEFAULT_HASH_ALGORITHM,
            spin_count=spin_count,
        )

    protection = wb.workbook_protection if wb.workbook_protection is not None else WorkbookProtection()
    protection.lock_structure = opts.lock_structure
    protection.lock_windows = opts.lock_windows
    if derived is not None:
        protection.algorithm_name = derived.algorithm.value
        protection.salt_value = derived.salt_value
        protection.hash_value = derived.hash_value
        protection.spin_count = derived.spin_count
        # a kept legacy verifier belongs to the old password
        protection.extra_attrs.pop("workbookPassword", None)
    wb.workbook_protection = protection

    logger.info(
        "workbook protected (lock_structure=%s, lock_windows=%s, algorithm=%s)",
        protection.lock_structure,
        protection.lock_windows,
        protection.algorithm_name or "none",
    )
    return protection


def unprotect_workbook(wb: Workbook, password: Optional[str] = None) -> None:
    """Remove protection from `wb`.

    Without a password the record is cleared unconditionally (a no-op when the
    workbook is not protected). With a password the stored hash is verified
    first using the stored algorithm, salt and spin count; records without an
    algorithm name skip verification.

    Raises:
        NotProtectedError: a password was given but the workbook is unprotected.
        WrongPasswordError: the password does not match the stored hash.
        UnsupportedAlgorithmError: the stored algorithm cannot be computed.
    """
    if password is not None:
        protection = wb.workbook_protection
        if protection is None:
            raise NotProtectedError()
        if protection.algorithm_name and not verify_password(password, protection):
            logger.warning("workbook unprotect rejected: password mismatch")
            raise WrongPasswordError()

    wb.workbook_protection = None
    logger.info("workbook protection removed")
