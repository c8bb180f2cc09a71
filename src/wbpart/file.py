"""Package handle: one `SpreadsheetFile` per opened (or new) `.xlsx` package.

The handle exclusively owns the part store, the relationship table, the
namespace registry and the workbook descriptor cache. Mutating methods assume
a single writer per handle.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import IO, Optional, Union

from wbpart.codecs.namespaces import (
    CONTENT_TYPES_NS,
    CT_RELATIONSHIPS,
    CT_WORKBOOK_MAIN,
    REL_TYPE_OFFICE_DOCUMENT,
    NamespaceRegistry,
)
from wbpart.codecs.rels_xml import encode_relationships
from wbpart.core.constants import (
    CONTENT_TYPES_PATH,
    DEFAULT_WORKBOOK_PATH,
    ROOT_RELS_PATH,
    WORKBOOK_PROTECTION_SPIN_COUNT,
)
from wbpart.core.model import SheetRef, Workbook, WorkbookPropsOptions, WorkbookProtection, WorkbookProtectionOptions
from wbpart.package.paths import resolve_workbook_path, workbook_rels_path
from wbpart.package.rels import RelationshipTable
from wbpart.package.store import PartStore
from wbpart.utils.log import get_logger
from wbpart.workbook.cache import WorkbookCache
from wbpart.workbook.props import get_workbook_props, set_workbook_props
from wbpart.workbook.protection import protect_workbook, unprotect_workbook
from wbpart.workbook.sheets import register_sheet

logger = get_logger("file")

_MINIMAL_CONTENT_TYPES = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'
    f'<Types xmlns="{CONTENT_TYPES_NS}">'
    f'<Default Extension="rels" ContentType="{CT_RELATIONSHIPS}"/>'
    '<Default Extension="xml" ContentType="application/xml"/>'
    f'<Override PartName="/{DEFAULT_WORKBOOK_PATH}" ContentType="{CT_WORKBOOK_MAIN}"/>'
    "</Types>"
).encode("utf-8")


class SpreadsheetFile:
    def __init__(self, store: Optional[PartStore] = None, *, spin_count: int = WORKBOOK_PROTECTION_SPIN_COUNT) -> None:
        self.store = store if store is not None else PartStore()
        self.relationships = RelationshipTable(self.store)
        self.namespaces = NamespaceRegistry()
        self.spin_count = spin_count
        self._workbook_cache = WorkbookCache(self.store, self.relationships, self.namespaces)

    # ---- paths ----

    @property
    def workbook_path(self) -> str:
        return resolve_workbook_path(self.relationships)

    @property
    def workbook_rels_path(self) -> str:
        return workbook_rels_path(self.workbook_path)

    # ---- descriptor cache ----

    def workbook(self) -> Workbook:
        """Return the cached workbook descriptor, loading it on first use."""
        return self._workbook_cache.get_or_load()

    def flush(self) -> None:
        """Write the workbook descriptor and loaded relationship parts to the store."""
        self._workbook_cache.flush()
        self.relationships.flush()

    # ---- properties / protection / sheets ----

    def set_workbook_props(self, opts: Optional[WorkbookPropsOptions]) -> None:
        set_workbook_props(self.workbook(), opts)

    def get_workbook_props(self) -> WorkbookPropsOptions:
        return get_workbook_props(self.workbook())

    def protect_workbook(self, opts: Optional[WorkbookProtectionOptions] = None) -> WorkbookProtection:
        return protect_workbook(self.workbook(), opts, spin_count=self.spin_count)

    def unprotect_workbook(self, password: Optional[str] = None) -> None:
        unprotect_workbook(self.workbook(), password)

    def register_sheet(self, name: str, sheet_id: int, rid: int) -> SheetRef:
        return register_sheet(self.workbook(), name, sheet_id, rid)

    # ---- persistence ----

    def write_to(self, target: Union[str, Path, IO[bytes]]) -> None:
        self.flush()
        self.store.to_zip(target)

    def save(self, path: Union[str, Path]) -> None:
        self.write_to(Path(path))
        logger.info("saved %s", path)

    def to_bytes(self) -> bytes:
        buf = io.BytesIO()
        self.write_to(buf)
        return buf.getvalue()


def open_file(source: Union[str, Path, IO[bytes], bytes], *, spin_count: int = WORKBOOK_PROTECTION_SPIN_COUNT) -> SpreadsheetFile:
    """Open an existing package from a path, a binary stream or raw bytes."""
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(bytes(source))
    return SpreadsheetFile(PartStore.from_zip(source), spin_count=spin_count)


def new_file(*, spin_count: int = WORKBOOK_PROTECTION_SPIN_COUNT) -> SpreadsheetFile:
    """Create a minimal package: content types, root rels, workbook, workbook rels."""
    f = SpreadsheetFile(spin_count=spin_count)
    f.store.write_part(CONTENT_TYPES_PATH, _MINIMAL_CONTENT_TYPES)
    f.relationships.add(ROOT_RELS_PATH, REL_TYPE_OFFICE_DOCUMENT, DEFAULT_WORKBOOK_PATH)
    f.store.write_part(workbook_rels_path(DEFAULT_WORKBOOK_PATH), encode_relationships([]))
    f.workbook()
    return f
