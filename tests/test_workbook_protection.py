from __future__ import annotations

import copy
import hashlib

import pytest

from wbpart.core.constants import WORKBOOK_PROTECTION_SPIN_COUNT
from wbpart.core.errors import NotProtectedError, PasswordLengthError, UnsupportedAlgorithmError, WrongPasswordError
from wbpart.core.model import Workbook, WorkbookProtection, WorkbookProtectionOptions
from wbpart.file import new_file
from wbpart.workbook.protection import protect_workbook, unprotect_workbook

SPIN = 50


def _independent_iso_hash(name: str, password: str, salt: bytes, spin_count: int) -> bytes:
    key = hashlib.new(name, salt + password.encode("utf-16-le")).digest()
    for i in range(spin_count):
        key = hashlib.new(name, key + i.to_bytes(4, "little")).digest()
    return key


def test_protect_without_options_sets_flags_false_and_no_hash() -> None:
    wb = Workbook()
    protect_workbook(wb)
    assert wb.workbook_protection == WorkbookProtection()


def test_protect_with_password_defaults_to_sha512() -> None:
    wb = Workbook()
    protect_workbook(wb, WorkbookProtectionOptions(password="secret", lock_structure=True), spin_count=SPIN)

    p = wb.workbook_protection
    assert p is not None
    assert p.lock_structure is True
    assert p.lock_windows is False
    assert p.algorithm_name == "SHA-512"
    assert len(p.salt_value) == 16
    assert len(p.hash_value) == 64
    assert p.spin_count == SPIN
    assert p.hash_value == _independent_iso_hash("sha512", "secret", p.salt_value, SPIN)


def test_protect_md5_matches_independent_derivation() -> None:
    wb = Workbook()
    protect_workbook(wb, WorkbookProtectionOptions(algorithm_name="MD5", password="pw1"))

    p = wb.workbook_protection
    assert p.algorithm_name == "MD5"
    assert p.spin_count == WORKBOOK_PROTECTION_SPIN_COUNT
    assert p.hash_value == _independent_iso_hash("md5", "pw1", p.salt_value, p.spin_count)


def test_protect_and_unprotect_with_md4() -> None:
    wb = Workbook()
    protect_workbook(wb, WorkbookProtectionOptions(algorithm_name="MD4", password="pw"), spin_count=5)

    p = wb.workbook_protection
    assert p.algorithm_name == "MD4"
    assert len(p.hash_value) == 16
    assert p.spin_count == 5

    with pytest.raises(WrongPasswordError):
        unprotect_workbook(wb, "pW")
    unprotect_workbook(wb, "pw")
    assert wb.workbook_protection is None


def test_protect_rekeys_with_fresh_salt() -> None:
    wb = Workbook()
    protect_workbook(wb, WorkbookProtectionOptions(password="one"), spin_count=SPIN)
    first = copy.deepcopy(wb.workbook_protection)

    protect_workbook(wb, WorkbookProtectionOptions(algorithm_name="SHA-256", password="two"), spin_count=SPIN)

    p = wb.workbook_protection
    assert p.algorithm_name == "SHA-256"
    assert p.salt_value != first.salt_value
    assert p.hash_value == _independent_iso_hash("sha256", "two", p.salt_value, SPIN)


def test_protect_with_empty_password_keeps_hash_material() -> None:
    wb = Workbook()
    protect_workbook(wb, WorkbookProtectionOptions(password="secret"), spin_count=SPIN)
    before = copy.deepcopy(wb.workbook_protection)

    protect_workbook(wb, WorkbookProtectionOptions(lock_windows=True))

    p = wb.workbook_protection
    assert p.lock_windows is True
    assert p.lock_structure is False
    assert (p.algorithm_name, p.salt_value, p.hash_value, p.spin_count) == (
        before.algorithm_name,
        before.salt_value,
        before.hash_value,
        before.spin_count,
    )
    unprotect_workbook(wb, "secret")
    assert wb.workbook_protection is None


def test_protect_unsupported_algorithm_leaves_workbook_untouched() -> None:
    wb = Workbook()
    with pytest.raises(UnsupportedAlgorithmError):
        protect_workbook(wb, WorkbookProtectionOptions(algorithm_name="CRC32", password="x", lock_structure=True))
    assert wb.workbook_protection is None

    protect_workbook(wb, WorkbookProtectionOptions(lock_structure=True))
    before = copy.deepcopy(wb.workbook_protection)
    with pytest.raises(UnsupportedAlgorithmError):
        protect_workbook(wb, WorkbookProtectionOptions(algorithm_name="SHA-3", password="x", lock_windows=True))
    assert wb.workbook_protection == before


def test_protect_overlong_password_fails_atomically() -> None:
    wb = Workbook()
    with pytest.raises(PasswordLengthError):
        protect_workbook(wb, WorkbookProtectionOptions(password="p" * 256, lock_structure=True))
    assert wb.workbook_protection is None


def test_unprotect_with_correct_password_clears_record() -> None:
    wb = Workbook()
    protect_workbook(wb, WorkbookProtectionOptions(algorithm_name="SHA-1", password="pw"), spin_count=SPIN)
    unprotect_workbook(wb, "pw")
    assert wb.workbook_protection is None


def test_unprotect_with_wrong_password_keeps_record() -> None:
    wb = Workbook()
    protect_workbook(wb, WorkbookProtectionOptions(password="pw", lock_structure=True), spin_count=SPIN)
    before = copy.deepcopy(wb.workbook_protection)

    with pytest.raises(WrongPasswordError):
        unprotect_workbook(wb, "PW")
    assert wb.workbook_protection == before


def test_unprotect_without_password_is_administrative_override() -> None:
    wb = Workbook()
    protect_workbook(wb, WorkbookProtectionOptions(password="pw", lock_structure=True), spin_count=SPIN)
    unprotect_workbook(wb)
    assert wb.workbook_protection is None

    # already unprotected: still fine
    unprotect_workbook(wb)
    assert wb.workbook_protection is None


def test_unprotect_with_password_on_unprotected_workbook_fails() -> None:
    wb = Workbook()
    with pytest.raises(NotProtectedError):
        unprotect_workbook(wb, "pw")
    assert wb.workbook_protection is None


def test_unprotect_hashless_protection_accepts_any_password() -> None:
    wb = Workbook()
    protect_workbook(wb, WorkbookProtectionOptions(lock_structure=True))
    unprotect_workbook(wb, "anything")
    assert wb.workbook_protection is None


def test_unprotect_with_unusable_stored_algorithm_fails_without_change() -> None:
    wb = Workbook(workbook_protection=WorkbookProtection(algorithm_name="RIPEMD-160", hash_value=b"x", spin_count=1))
    before = copy.deepcopy(wb.workbook_protection)
    with pytest.raises(UnsupportedAlgorithmError):
        unprotect_workbook(wb, "pw")
    assert wb.workbook_protection == before


def test_xor_protection_roundtrip() -> None:
    wb = Workbook()
    protect_workbook(wb, WorkbookProtectionOptions(algorithm_name="XOR", password="legacy", lock_structure=True))

    p = wb.workbook_protection
    assert p.algorithm_name == "XOR"
    assert len(p.hash_value) == 2
    assert p.salt_value == b""
    assert p.spin_count == 0

    unprotect_workbook(wb, "legacy")
    assert wb.workbook_protection is None


def test_protection_survives_save_and_reopen(tmp_path) -> None:
    from wbpart.file import open_file

    f = new_file(spin_count=SPIN)
    f.protect_workbook(WorkbookProtectionOptions(password="pw", lock_structure=True, lock_windows=True))
    path = tmp_path / "protected.xlsx"
    f.save(path)

    reopened = open_file(path)
    p = reopened.workbook().workbook_protection
    assert p is not None and p.lock_structure and p.lock_windows
    assert p.spin_count == SPIN

    with pytest.raises(WrongPasswordError):
        reopened.unprotect_workbook("nope")
    reopened.unprotect_workbook("pw")
    assert reopened.workbook().workbook_protection is None


def test_new_password_drops_kept_legacy_verifier() -> None:
    wb = Workbook(
        workbook_protection=WorkbookProtection(
            lock_structure=True,
            algorithm_name="SHA-512",
            salt_value=b"s" * 16,
            hash_value=b"h" * 64,
            spin_count=1,
            extra_attrs={"workbookPassword": "CBEB", "lockRevision": "1"},
        )
    )

    protect_workbook(wb, WorkbookProtectionOptions(lock_structure=True))
    assert wb.workbook_protection.extra_attrs["workbookPassword"] == "CBEB"

    protect_workbook(wb, WorkbookProtectionOptions(password="fresh", lock_structure=True), spin_count=SPIN)
    assert wb.workbook_protection.extra_attrs == {"lockRevision": "1"}
