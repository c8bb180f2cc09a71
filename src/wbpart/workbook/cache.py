"""Lazy load / explicit flush of the workbook descriptor.

One `WorkbookCache` belongs to one package handle. After the first successful
`get_or_load()` the cached `Workbook` is the only source of truth: the part is
never decoded again for the lifetime of the handle, and it becomes durable
only through `flush()`.
"""

from __future__ import annotations

from typing import Optional

from wbpart.codecs.namespaces import (
    MC_NS,
    REL_NS,
    REL_TYPE_OFFICE_DOCUMENT,
    NamespaceRegistry,
    read_root_attributes,
    replace_relationship_tokens,
    strict_to_transitional,
)
from wbpart.codecs.workbook_xml import decode_workbook, encode_workbook
from wbpart.core.constants import DEFAULT_WORKBOOK_PATH, ROOT_RELS_PATH
from wbpart.core.model import AlternateContent, Workbook
from wbpart.package.paths import resolve_workbook_path
from wbpart.package.rels import RelationshipTable
from wbpart.package.store import PartStore
from wbpart.utils.log import get_logger

logger = get_logger("workbook.cache")


class WorkbookCache:
    def __init__(self, store: PartStore, relationships: RelationshipTable, namespaces: NamespaceRegistry) -> None:
        self._store = store
        self._relationships = relationships
        self._namespaces = namespaces
        self._workbook: Optional[Workbook] = None

    @property
    def loaded(self) -> bool:
        return self._workbook is not None

    def get_or_load(self) -> Workbook:
        """Return the cached workbook, decoding it from the package on first use.

        A missing or empty part yields an empty `Workbook`.

        Raises:
            DecodeError: the part exists but is not a well-formed workbook.
                Nothing is cached in that case.
        """
        if self._workbook is not None:
            return self._workbook

        path = resolve_workbook_path(self._relationships)
        data = strict_to_transitional(self._store.read_part(path)) if path else b""

        root_attrs = read_root_attributes(data) if path not in self._namespaces else None
        workbook = decode_workbook(data)

        if root_attrs is not None:
            self._namespaces.register(path, root_attrs)
            self._namespaces.add_namespace(path, "r", REL_NS)

        self._workbook = workbook
        logger.debug("loaded workbook from %r (%d sheets)", path, len(workbook.sheets))
        return workbook

    def flush(self) -> None:
        """Encode the cached workbook and write it back. No-op if never loaded."""
        wb = self._workbook
        if wb is None:
            return

        if wb.decode_alternate_content is not None:
            wb.alternate_content = AlternateContent(content=wb.decode_alternate_content, xmlns_mc=MC_NS)
        wb.decode_alternate_content = None

        path = resolve_workbook_path(self._relationships) or self._adopt_default_path()
        output = encode_workbook(wb)
        output = replace_relationship_tokens(self._namespaces.rewrite(path, output))
        self._store.write_part(path, output)
        logger.debug("flushed workbook to %r (%d bytes)", path, len(output))

    def _adopt_default_path(self) -> str:
        # The package declared no workbook: register one so the output is consistent.
        path = DEFAULT_WORKBOOK_PATH
        self._relationships.add(ROOT_RELS_PATH, REL_TYPE_OFFICE_DOCUMENT, path)
        self._namespaces.register(path, self._namespaces.attributes_for(""))
        self._namespaces.add_namespace(path, "r", REL_NS)
        logger.info("package had no workbook relationship; writing %r", path)
        return path

