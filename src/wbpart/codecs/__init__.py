"""XML codecs for the package parts this core touches.

- `workbook_xml`: the workbook descriptor (`xl/workbook.xml`)
- `rels_xml`: package relationship parts (`*.rels`)
- `namespaces`: namespace constants and root-tag round-trip helpers
"""

from __future__ import annotations

from .namespaces import NamespaceRegistry, replace_relationship_tokens, strict_to_transitional
from .rels_xml import Relationship, decode_relationships, encode_relationships
from .workbook_xml import decode_workbook, encode_workbook

__all__ = [
    "NamespaceRegistry",
    "Relationship",
    "decode_relationships",
    "decode_workbook",
    "encode_relationships",
    "encode_workbook",
    "replace_relationship_tokens",
    "strict_to_transitional",
]
