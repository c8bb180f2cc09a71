"""Package (zip container) collaborators: part store, relationships, paths."""

from __future__ import annotations

from .paths import resolve_workbook_path, resolve_workbook_rels_path, workbook_rels_path
from .rels import Relationships, RelationshipTable
from .store import PartStore

__all__ = [
    "PartStore",
    "RelationshipTable",
    "Relationships",
    "resolve_workbook_path",
    "resolve_workbook_rels_path",
    "workbook_rels_path",
]
