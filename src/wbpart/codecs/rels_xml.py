"""Package relationship part (`*.rels`) codec.

Relationships are kept in document order; `Id`, `Type`, `Target` and the
optional `TargetMode` attribute are modelled, nothing else.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from lxml import etree

from wbpart.core.errors import DecodeError

from .namespaces import PKG_REL_NS, make_xml_parser, strict_to_transitional


@dataclass(frozen=True)
class Relationship:
    id: str
    type: str
    target: str
    target_mode: Optional[str] = None


def decode_relationships(data: bytes) -> list[Relationship]:
    """Decode a `.rels` part. Empty input decodes to an empty list."""
    if not data.strip():
        return []
    try:
        root = etree.fromstring(strict_to_transitional(data), parser=make_xml_parser())
    except etree.XMLSyntaxError as e:
        raise DecodeError(f"relationships: malformed XML: {e}") from e
    if root.tag != f"{{{PKG_REL_NS}}}Relationships":
        raise DecodeError(f"relationships: unexpected root element {root.tag!r}")

    out: list[Relationship] = []
    for i, child in enumerate(root.iterchildren(f"{{{PKG_REL_NS}}}Relationship")):
        rid = child.get("Id")
        rel_type = child.get("Type")
        target = child.get("Target")
        if not rid or not rel_type or target is None:
            raise DecodeError(f"relationships[{i}]: Id, Type and Target are required")
        out.append(Relationship(rid, rel_type, target, child.get("TargetMode")))
    return out


def encode_relationships(relationships: Iterable[Relationship]) -> bytes:
    root = etree.Element(f"{{{PKG_REL_NS}}}Relationships", nsmap={None: PKG_REL_NS})
    for rel in relationships:
        el = etree.SubElement(root, f"{{{PKG_REL_NS}}}Relationship")
        el.set("Id", rel.id)
        el.set("Type", rel.type)
        el.set("Target", rel.target)
        if rel.target_mode:
            el.set("TargetMode", rel.target_mode)
    return etree.tostring(root, xml_declaration=True, encoding="UTF-8", standalone=True)
