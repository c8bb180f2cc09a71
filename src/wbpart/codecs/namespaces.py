"""Namespace constants and namespace round-trip helpers.

The encoder only declares the namespaces it needs itself (main + `r`). The
declarations found on the source root element (`xmlns:x15`, `mc:Ignorable`,
...) are captured per part path in a `NamespaceRegistry` on load and merged
back into the encoded root start tag on flush, so that prefixes referenced by
`mc:Ignorable` or by preserved raw elements stay declared at the root.

`replace_relationship_tokens` normalizes any prefix bound to the relationships
namespace (eg `ns0:id`, `relationships:id`) to the persisted `r:` form.
"""

from __future__ import annotations

import io
import re
from typing import Iterable
from xml.sax.saxutils import escape

from lxml import etree

from wbpart.core.errors import DecodeError

MAIN_NS = "http://schemas.openxmlformats.org/spreadsheetml/2006/main"
REL_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
MC_NS = "http://schemas.openxmlformats.org/markup-compatibility/2006"
PKG_REL_NS = "http://schemas.openxmlformats.org/package/2006/relationships"
CONTENT_TYPES_NS = "http://schemas.openxmlformats.org/package/2006/content-types"

REL_TYPE_OFFICE_DOCUMENT = REL_NS + "/officeDocument"
REL_TYPE_WORKSHEET = REL_NS + "/worksheet"

CT_WORKBOOK_MAIN = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet.main+xml"
CT_RELATIONSHIPS = "application/vnd.openxmlformats-package.relationships+xml"

# Strict (ISO) namespaces -> transitional. Longer keys first: they are prefixes
# of one another.
_STRICT_TO_TRANSITIONAL: tuple[tuple[bytes, bytes], ...] = (
    (
        b"http://purl.oclc.org/ooxml/officeDocument/relationships/extendedProperties",
        (REL_NS + "/extended-properties").encode(),
    ),
    (b"http://purl.oclc.org/ooxml/officeDocument/relationships", REL_NS.encode()),
    (
        b"http://purl.oclc.org/ooxml/officeDocument/extendedProperties",
        b"http://schemas.openxmlformats.org/officeDocument/2006/extended-properties",
    ),
    (
        b"http://purl.oclc.org/ooxml/officeDocument/docPropsVTypes",
        b"http://schemas.openxmlformats.org/officeDocument/2006/docPropsVTypes",
    ),
    (b"http://purl.oclc.org/ooxml/spreadsheetml/main", MAIN_NS.encode()),
    (b"http://purl.oclc.org/ooxml/drawingml/main", b"http://schemas.openxmlformats.org/drawingml/2006/main"),
)

_XML_NS = "http://www.w3.org/XML/1998/namespace"

# First element start tag (skips the XML declaration, comments and doctype).
_ROOT_TAG_RE = re.compile(
    rb"<(?![?!])([A-Za-z_][\w.:-]*)((?:\s+[^\s=/>]+\s*=\s*(?:\"[^\"]*\"|'[^']*'))*)\s*(/?)>"
)
_ATTR_RE = re.compile(rb"([^\s=/>]+)\s*=\s*(?:\"[^\"]*\"|'[^']*')")
_REL_DECL_RE = re.compile(rb"\s+xmlns:([A-Za-z_][\w.-]*)\s*=\s*\"" + re.escape(REL_NS.encode()) + rb"\"")
_PROLOG_ONLY_RE = re.compile(rb"(?:\xef\xbb\xbf)?(?:\s|<\?.*?\?>|<!--.*?-->|<!DOCTYPE[^>]*>)*", re.S)


def make_xml_parser() -> etree.XMLParser:
    """Strict parser with DTDs, entities and network access disabled."""
    return etree.XMLParser(
        resolve_entities=False,
        load_dtd=False,
        no_network=True,
        recover=False,
        huge_tree=False,
    )


def is_empty_document(data: bytes) -> bool:
    """True when `data` has no root element: nothing but whitespace, the XML
    declaration, comments or processing instructions."""
    return _PROLOG_ONLY_RE.fullmatch(data) is not None


def strict_to_transitional(data: bytes) -> bytes:
    """Rewrite strict OOXML namespace URIs to their transitional equivalents."""
    for strict, transitional in _STRICT_TO_TRANSITIONAL:
        if strict in data:
            data = data.replace(strict, transitional)
    return data


def _qualify(name: str, prefixes: dict[str, str]) -> str:
    if not name.startswith("{"):
        return name
    uri, local = name[1:].split("}", 1)
    if uri == _XML_NS:
        return f"xml:{local}"
    prefix = prefixes.get(uri)
    return f"{prefix}:{local}" if prefix else local


def read_root_attributes(data: bytes) -> list[tuple[str, str]]:
    """Return the root start tag's namespace declarations and attributes.

    Pairs are `(qualified name, value)` in document order, eg
    `("xmlns", MAIN_NS)`, `("xmlns:mc", MC_NS)`, `("mc:Ignorable", "x15")`.
    Only the root start tag is read.
    """
    if is_empty_document(data):
        return []
    attrs: list[tuple[str, str]] = []
    prefixes: dict[str, str] = {}
    events = etree.iterparse(
        io.BytesIO(data),
        events=("start-ns", "start"),
        resolve_entities=False,
        load_dtd=False,
        no_network=True,
    )
    try:
        for event, item in events:
            if event == "start-ns":
                prefix, uri = item
                attrs.append((f"xmlns:{prefix}" if prefix else "xmlns", uri))
                if prefix:
                    prefixes.setdefault(uri, prefix)
                continue
            attrs.extend((_qualify(k, prefixes), v) for k, v in item.attrib.items())
            break
    except etree.XMLSyntaxError as e:
        raise DecodeError(f"malformed XML: {e}") from e
    return attrs


def merge_root_attributes(data: bytes, attributes: Iterable[tuple[str, str]]) -> bytes:
    """Add `attributes` missing from the root start tag of `data`.

    Attributes already present on the encoded root win.
    """
    m = _ROOT_TAG_RE.search(data)
    if m is None:
        return data
    tag, attr_text, self_closing = m.group(1), m.group(2), m.group(3)
    present = {a.group(1) for a in _ATTR_RE.finditer(attr_text)}

    added = b""
    for name, value in attributes:
        key = name.encode("utf-8")
        if key in present:
            continue
        present.add(key)
        quoted = escape(value, {'"': "&quot;"}).encode("utf-8")
        added += b" " + key + b'="' + quoted + b'"'
    if not added:
        return data

    start_tag = b"<" + tag + attr_text + added + self_closing + b">"
    return data[: m.start()] + start_tag + data[m.end():]


def replace_relationship_tokens(data: bytes) -> bytes:
    """Rewrite non-`r` prefixes bound to the relationships namespace to `r`.

    The caller guarantees `r` is declared on the root element.
    """
    prefixes = {m.group(1) for m in _REL_DECL_RE.finditer(data)} - {b"r"}
    if not prefixes:
        return data
    out = _REL_DECL_RE.sub(lambda m: m.group(0) if m.group(1) == b"r" else b"", data)
    for prefix in sorted(prefixes):
        out = re.sub(rb"(\s)" + re.escape(prefix) + rb":(?=[A-Za-z_][\w.-]*\s*=)", rb"\1r:", out)
    return out


class NamespaceRegistry:
    """Root-element attributes captured per part path for round-trip fidelity."""

    def __init__(self) -> None:
        self._attrs: dict[str, list[tuple[str, str]]] = {}

    def __contains__(self, path: object) -> bool:
        return path in self._attrs

    def register(self, path: str, attributes: Iterable[tuple[str, str]]) -> None:
        entries = self._attrs.setdefault(path, [])
        known = {name for name, _ in entries}
        for name, value in attributes:
            if name not in known:
                entries.append((name, value))
                known.add(name)

    def add_namespace(self, path: str, prefix: str, uri: str) -> None:
        self.register(path, [(f"xmlns:{prefix}" if prefix else "xmlns", uri)])

    def attributes_for(self, path: str) -> list[tuple[str, str]]:
        return list(self._attrs.get(path, []))

    def rewrite(self, path: str, data: bytes) -> bytes:
        """Merge the declarations registered for `path` into the root of `data`."""
        return merge_root_attributes(data, self._attrs.get(path, []))
