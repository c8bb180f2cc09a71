"""Module-wide constants for the workbook descriptor core."""

from __future__ import annotations

# Iterations applied when deriving a workbook protection hash.
WORKBOOK_PROTECTION_SPIN_COUNT = 100000

DEFAULT_HASH_ALGORITHM = "SHA-512"

# Random salt length in bytes for the ISO password hash.
SALT_LENGTH = 16

MAX_PASSWORD_LENGTH = 255

# Used when a package carries no officeDocument relationship yet.
DEFAULT_WORKBOOK_PATH = "xl/workbook.xml"

ROOT_RELS_PATH = "_rels/.rels"
CONTENT_TYPES_PATH = "[Content_Types].xml"
