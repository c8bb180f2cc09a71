"""Password hashing for workbook protection.

Two schemes are supported, selected by `HashAlgorithm`:

- ISO/IEC 29500 agile hashing (MD4, MD5, SHA-1, SHA-256, SHA-384, SHA-512):
  `H0 = H(salt + UTF-16LE(password))`, then `H(n+1) = H(Hn + uint32le(n))`
  for `n` in `range(spin_count)`. The salt is 16 random bytes unless the caller
  supplies the stored one for verification. MD4 comes from pycryptodome;
  the others from hashlib.
- Legacy `XOR`: the 16-bit Excel password verifier (openpyxl's
  `hash_password`). It takes neither salt nor spin count; the result is stored
  as two big-endian bytes.

The algorithm name is parsed once into the enum; dispatch happens only in
`derive_password_hash`.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from Crypto.Hash import MD4
from openpyxl.utils.protection import hash_password

from wbpart.core.constants import MAX_PASSWORD_LENGTH, SALT_LENGTH, WORKBOOK_PROTECTION_SPIN_COUNT
from wbpart.core.errors import PasswordLengthError, UnsupportedAlgorithmError
from wbpart.core.model import WorkbookProtection


class HashAlgorithm(Enum):
    XOR = "XOR"
    MD4 = "MD4"
    MD5 = "MD5"
    SHA1 = "SHA-1"
    SHA256 = "SHA-256"
    SHA384 = "SHA-384"
    SHA512 = "SHA-512"

    @classmethod
    def parse(cls, name: str) -> "HashAlgorithm":
        """Parse an algorithm identifier (case-insensitive)."""
        if not isinstance(name, str):
            raise UnsupportedAlgorithmError(repr(name))
        wanted = name.strip().upper()
        for member in cls:
            if member.value == wanted:
                return member
        raise UnsupportedAlgorithmError(name)

    @property
    def hashlib_name(self) -> Optional[str]:
        return _HASHLIB_NAMES.get(self)


_HASHLIB_NAMES = {
    HashAlgorithm.MD5: "md5",
    HashAlgorithm.SHA1: "sha1",
    HashAlgorithm.SHA256: "sha256",
    HashAlgorithm.SHA384: "sha384",
    HashAlgorithm.SHA512: "sha512",
}


@dataclass(frozen=True)
class PasswordHash:
    algorithm: HashAlgorithm
    hash_value: bytes
    salt_value: bytes
    spin_count: int


def _check_password(password: str) -> None:
    if not isinstance(password, str):
        raise TypeError(f"password: expected str, got {type(password).__name__}")
    if not 1 <= len(password) <= MAX_PASSWORD_LENGTH:
        raise PasswordLengthError(
            f"password length must be between 1 and {MAX_PASSWORD_LENGTH} characters, got {len(password)}"
        )


def _new_hash(algorithm: HashAlgorithm):
    # OpenSSL 3 builds of hashlib no longer ship md4.
    if algorithm is HashAlgorithm.MD4:
        return MD4.new()
    return hashlib.new(algorithm.hashlib_name)


def _digest(algorithm: HashAlgorithm, *chunks: bytes) -> bytes:
    h = _new_hash(algorithm)
    for chunk in chunks:
        h.update(chunk)
    return h.digest()


def _legacy_xor_hash(password: str) -> bytes:
    return int(hash_password(password), 16).to_bytes(2, "big")


def derive_password_hash(
    password: str,
    algorithm_name: str,
    salt: Optional[bytes] = None,
    spin_count: int = WORKBOOK_PROTECTION_SPIN_COUNT,
) -> PasswordHash:
    """Derive the protection hash for `password`.

    Args:
        password: Plain-text password, 1..255 characters.
        algorithm_name: One of XOR, MD4, MD5, SHA-1, SHA-256, SHA-384, SHA-512.
        salt: Stored salt for verification; a fresh random salt is generated
            when None or empty.
        spin_count: Number of extra hash iterations (ignored by XOR).

    Raises:
        UnsupportedAlgorithmError: unknown algorithm name.
        PasswordLengthError: empty or over-long password.
    """
    algorithm = HashAlgorithm.parse(algorithm_name)
    _check_password(password)

    if algorithm is HashAlgorithm.XOR:
        return PasswordHash(algorithm, _legacy_xor_hash(password), b"", 0)

    if isinstance(spin_count, bool) or not isinstance(spin_count, int) or spin_count < 0:
        raise ValueError(f"spin_count: expected non-negative int, got {spin_count!r}")

    salt_value = bytes(salt) if salt else secrets.token_bytes(SALT_LENGTH)
    key = _digest(algorithm, salt_value, password.encode("utf-16-le"))
    for i in range(spin_count):
        key = _digest(algorithm, key, i.to_bytes(4, "little"))
    return PasswordHash(algorithm, key, salt_value, spin_count)


def verify_password(password: str, protection: WorkbookProtection) -> bool:
    """Check `password` against the hash material stored on `protection`.

    Uses the stored algorithm, salt and spin count. Raises the same errors as
    `derive_password_hash` when the stored algorithm is unusable.
    """
    derived = derive_password_hash(
        password,
        protection.algorithm_name,
        salt=protection.salt_value,
        spin_count=protection.spin_count,
    )
    return hmac.compare_digest(derived.hash_value, protection.hash_value)
