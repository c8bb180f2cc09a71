"""In-memory model of the workbook descriptor (`xl/workbook.xml`).

The model is deliberately small:
- `WorkbookPr` and `WorkbookProtection` are the two records this core reads and
  mutates; both keep unmodelled attributes verbatim in `extra_attrs`.
- `sheets` is the ordered sheet list (tab order).
- Every other child of `<workbook>` is carried as a `RawElement` so that a
  load/flush cycle reproduces content this core does not interpret.

The options types are tri-state on purpose: `None` means "leave untouched",
which is distinct from an explicit `False` or `""`.

This module must not import codecs/package/cli.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class WorkbookPr:
    """`<workbookPr>` attributes. `None` means unset (not emitted)."""

    date1904: Optional[bool] = None
    filter_privacy: Optional[bool] = None
    code_name: Optional[str] = None
    extra_attrs: dict[str, str] = field(default_factory=dict)


@dataclass
class WorkbookProtection:
    """`<workbookProtection>` record; its presence marks the workbook protected.

    `hash_value`/`salt_value` are raw bytes (base64 only on the wire) and are
    meaningful only together with a non-empty `algorithm_name`.
    """

    lock_structure: bool = False
    lock_windows: bool = False
    algorithm_name: str = ""
    salt_value: bytes = b""
    hash_value: bytes = b""
    spin_count: int = 0
    extra_attrs: dict[str, str] = field(default_factory=dict)


@dataclass
class SheetRef:
    name: str
    sheet_id: int
    rel_id: str
    state: Optional[str] = None


@dataclass(frozen=True)
class AlternateContent:
    """Opaque `mc:AlternateContent` block re-emitted on encode."""

    content: str
    xmlns_mc: str


@dataclass(frozen=True)
class RawElement:
    """A `<workbook>` child preserved verbatim.

    `name` is the local name (used for schema ordering on encode), `xml` the
    serialized element including its namespace declarations.
    """

    name: str
    xml: bytes


@dataclass
class Workbook:
    workbook_pr: Optional[WorkbookPr] = None
    workbook_protection: Optional[WorkbookProtection] = None
    sheets: list[SheetRef] = field(default_factory=list)
    alternate_content: Optional[AlternateContent] = None
    # Filled on decode only; moved into `alternate_content` on flush.
    decode_alternate_content: Optional[str] = None
    unknown_elements: list[RawElement] = field(default_factory=list)


# ----------------------------
# Caller-facing options
# ----------------------------


@dataclass
class WorkbookPropsOptions:
    date1904: Optional[bool] = None
    filter_privacy: Optional[bool] = None
    code_name: Optional[str] = None


@dataclass
class WorkbookProtectionOptions:
    """Options for `protect_workbook`.

    An empty `password` toggles the lock flags without touching any stored
    hash material. An empty `algorithm_name` selects SHA-512.
    """

    algorithm_name: str = ""
    password: str = ""
    lock_structure: bool = False
    lock_windows: bool = False
