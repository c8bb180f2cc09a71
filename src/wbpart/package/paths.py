"""Locate the workbook descriptor and its relationship part.

The workbook path is never assumed: it is the target of the `officeDocument`
relationship in the package-level `_rels/.rels`.
"""

from __future__ import annotations

import posixpath

from wbpart.codecs.namespaces import REL_TYPE_OFFICE_DOCUMENT
from wbpart.core.constants import ROOT_RELS_PATH

from .rels import RelationshipTable


def resolve_workbook_path(relationships: RelationshipTable) -> str:
    """Return the workbook part path, or "" when the package declares none."""
    rels = relationships.get(ROOT_RELS_PATH)
    if rels is None:
        return ""
    with rels.lock:
        for rel in rels.items:
            if rel.type == REL_TYPE_OFFICE_DOCUMENT:
                target = rel.target
                return target[1:] if target.startswith("/") else target
    return ""


def workbook_rels_path(workbook_path: str) -> str:
    """`xl/workbook.xml` -> `xl/_rels/workbook.xml.rels`; root parts use `_rels/`.

    An empty workbook path yields "" rather than the package-level
    `_rels/.rels`, so a package without a workbook never aliases its root
    relationships as the workbook's.
    """
    if not workbook_path:
        return ""
    directory, base = posixpath.split(workbook_path)
    if directory in ("", "."):
        return f"_rels/{base}.rels"
    return f"{directory}/_rels/{base}.rels".lstrip("/")


def resolve_workbook_rels_path(relationships: RelationshipTable) -> str:
    return workbook_rels_path(resolve_workbook_path(relationships))
