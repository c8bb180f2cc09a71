"""Workbook descriptor (`xl/workbook.xml`) codec.

Decode:
- `workbookPr`, `workbookProtection` and `sheets` are parsed into the model.
- the first `mc:AlternateContent` child is captured as opaque inner XML in
  `Workbook.decode_alternate_content`.
- every other element child is preserved verbatim as a `RawElement`, in
  encounter order.

Encode:
- children are emitted in CT_Workbook schema order; raw elements with a local
  name outside the schema table go just before `extLst`.
- `mc:AlternateContent` is emitted from `Workbook.alternate_content` only; the
  descriptor cache moves the decoded block there before encoding.
- only the main and `r` namespaces are declared; see `namespaces` for the
  root-tag fix-up applied afterwards.

Hash and salt values are base64 on the wire and raw bytes in the model. A
legacy `workbookPassword` (16-bit XOR verifier, hex) decodes to
`algorithm_name="XOR"`.
"""

from __future__ import annotations

import base64
import binascii
from typing import Any

from lxml import etree

from wbpart.core.errors import DecodeError
from wbpart.core.model import RawElement, SheetRef, Workbook, WorkbookPr, WorkbookProtection

from .namespaces import MAIN_NS, MC_NS, REL_NS, is_empty_document, make_xml_parser, strict_to_transitional

# CT_Workbook child order.
WORKBOOK_CHILD_ORDER: tuple[str, ...] = (
    "fileVersion",
    "fileSharing",
    "workbookPr",
    "AlternateContent",
    "revisionPtr",
    "workbookProtection",
    "bookViews",
    "sheets",
    "functionGroups",
    "externalReferences",
    "definedNames",
    "calcPr",
    "oleSize",
    "customWorkbookViews",
    "pivotCaches",
    "smartTagPr",
    "smartTagTypes",
    "webPublishing",
    "fileRecoveryPr",
    "webPublishObjects",
    "extLst",
)
_ORDER_INDEX = {name: i for i, name in enumerate(WORKBOOK_CHILD_ORDER)}
_UNKNOWN_INDEX = _ORDER_INDEX["extLst"] - 0.5

_REL_ID = f"{{{REL_NS}}}id"

_PR_ATTRS = {"date1904", "filterPrivacy", "codeName"}
_PROTECTION_ATTRS = {
    "lockStructure",
    "lockWindows",
    "workbookAlgorithmName",
    "workbookHashValue",
    "workbookSaltValue",
    "workbookSpinCount",
    "workbookPassword",
}


def _q(local: str) -> str:
    return f"{{{MAIN_NS}}}{local}"


# ----------------------------
# Attribute value parsing
# ----------------------------


def _parse_bool(value: str, *, where: str) -> bool:
    v = value.strip().lower()
    if v in ("1", "true"):
        return True
    if v in ("0", "false"):
        return False
    raise DecodeError(f"{where}: expected xsd:boolean, got {value!r}")


def _parse_int(value: str, *, where: str) -> int:
    try:
        return int(value.strip())
    except ValueError as e:
        raise DecodeError(f"{where}: expected integer, got {value!r}") from e


def _parse_base64(value: str, *, where: str) -> bytes:
    try:
        return base64.b64decode(value.strip(), validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"{where}: expected base64, got {value!r}") from e


def _parse_legacy_password(value: str, *, where: str) -> bytes:
    try:
        n = int(value.strip(), 16)
    except ValueError as e:
        raise DecodeError(f"{where}: expected hex, got {value!r}") from e
    if not 0 <= n <= 0xFFFF:
        raise DecodeError(f"{where}: legacy password hash out of range: {value!r}")
    return n.to_bytes(2, "big")


def _format_bool(value: bool) -> str:
    return "1" if value else "0"


# ----------------------------
# Decode
# ----------------------------


def _decode_workbook_pr(el: Any) -> WorkbookPr:
    pr = WorkbookPr()
    for name, value in el.attrib.items():
        if name == "date1904":
            pr.date1904 = _parse_bool(value, where="workbookPr.date1904")
        elif name == "filterPrivacy":
            pr.filter_privacy = _parse_bool(value, where="workbookPr.filterPrivacy")
        elif name == "codeName":
            pr.code_name = value
        else:
            pr.extra_attrs[name] = value
    return pr


def _decode_protection(el: Any) -> WorkbookProtection:
    p = WorkbookProtection()
    legacy = None
    legacy_text = ""
    for name, value in el.attrib.items():
        where = f"workbookProtection.{name}"
        if name == "lockStructure":
            p.lock_structure = _parse_bool(value, where=where)
        elif name == "lockWindows":
            p.lock_windows = _parse_bool(value, where=where)
        elif name == "workbookAlgorithmName":
            p.algorithm_name = value
        elif name == "workbookHashValue":
            p.hash_value = _parse_base64(value, where=where)
        elif name == "workbookSaltValue":
            p.salt_value = _parse_base64(value, where=where)
        elif name == "workbookSpinCount":
            p.spin_count = _parse_int(value, where=where)
        elif name == "workbookPassword":
            legacy = _parse_legacy_password(value, where=where)
            legacy_text = value
        else:
            p.extra_attrs[name] = value

    if legacy is not None:
        if p.algorithm_name:
            # both schemes present: the legacy verifier rides along untouched
            p.extra_attrs["workbookPassword"] = legacy_text
        else:
            p.algorithm_name = "XOR"
            p.hash_value = legacy
    return p


def _decode_sheets(el: Any) -> list[SheetRef]:
    out: list[SheetRef] = []
    for i, sheet in enumerate(el.iterchildren(_q("sheet"))):
        where = f"sheets[{i}]"
        name = sheet.get("name")
        if name is None:
            raise DecodeError(f"{where}: missing name")
        out.append(
            SheetRef(
                name=name,
                sheet_id=_parse_int(sheet.get("sheetId", ""), where=f"{where}.sheetId"),
                rel_id=sheet.get(_REL_ID, ""),
                state=sheet.get("state"),
            )
        )
    return out


def _inner_xml(el: Any) -> str:
    return "".join(etree.tostring(child, encoding="unicode", with_tail=False) for child in el)


def decode_workbook(data: bytes) -> Workbook:
    """Decode workbook XML bytes into a `Workbook`.

    Input without a root element (empty, whitespace, or only the XML
    declaration and comments) decodes to an empty `Workbook`.

    Raises:
        DecodeError: malformed XML, a root other than `{main}workbook`, or a
            malformed modelled attribute value.
    """
    if is_empty_document(data):
        return Workbook()
    try:
        root = etree.fromstring(strict_to_transitional(data), parser=make_xml_parser())
    except etree.XMLSyntaxError as e:
        raise DecodeError(f"workbook: malformed XML: {e}") from e
    if root.tag != _q("workbook"):
        raise DecodeError(f"workbook: unexpected root element {root.tag!r}")

    wb = Workbook()
    for child in root:
        if not isinstance(child.tag, str):
            # comments / processing instructions
            continue
        qname = etree.QName(child)
        if qname.namespace == MAIN_NS and qname.localname == "workbookPr":
            wb.workbook_pr = _decode_workbook_pr(child)
        elif qname.namespace == MAIN_NS and qname.localname == "workbookProtection":
            wb.workbook_protection = _decode_protection(child)
        elif qname.namespace == MAIN_NS and qname.localname == "sheets":
            wb.sheets = _decode_sheets(child)
        elif qname.namespace == MC_NS and qname.localname == "AlternateContent" and wb.decode_alternate_content is None:
            wb.decode_alternate_content = _inner_xml(child)
        else:
            wb.unknown_elements.append(RawElement(qname.localname, etree.tostring(child, with_tail=False)))
    return wb


# ----------------------------
# Encode
# ----------------------------


def _encode_workbook_pr(pr: WorkbookPr) -> Any:
    el = etree.Element(_q("workbookPr"))
    if pr.date1904 is not None:
        el.set("date1904", _format_bool(pr.date1904))
    if pr.filter_privacy is not None:
        el.set("filterPrivacy", _format_bool(pr.filter_privacy))
    if pr.code_name:
        el.set("codeName", pr.code_name)
    for name, value in pr.extra_attrs.items():
        if name not in _PR_ATTRS:
            el.set(name, value)
    return el


def _encode_protection(p: WorkbookProtection) -> Any:
    el = etree.Element(_q("workbookProtection"))
    if p.lock_structure:
        el.set("lockStructure", "1")
    if p.lock_windows:
        el.set("lockWindows", "1")
    if p.algorithm_name == "XOR":
        if p.hash_value:
            el.set("workbookPassword", f"{int.from_bytes(p.hash_value, 'big'):04X}")
    elif p.algorithm_name:
        el.set("workbookAlgorithmName", p.algorithm_name)
        el.set("workbookHashValue", base64.b64encode(p.hash_value).decode("ascii"))
        el.set("workbookSaltValue", base64.b64encode(p.salt_value).decode("ascii"))
        el.set("workbookSpinCount", str(p.spin_count))
    for name, value in p.extra_attrs.items():
        if name not in _PROTECTION_ATTRS:
            el.set(name, value)
        elif name == "workbookPassword" and el.get(name) is None:
            el.set(name, value)
    return el


def _encode_sheets(sheets: list[SheetRef]) -> Any:
    el = etree.Element(_q("sheets"))
    for sheet in sheets:
        s = etree.SubElement(el, _q("sheet"))
        s.set("name", sheet.name)
        s.set("sheetId", str(sheet.sheet_id))
        if sheet.state:
            s.set("state", sheet.state)
        s.set(_REL_ID, sheet.rel_id)
    return el


def _encode_alternate_content(content: str, xmlns_mc: str) -> Any:
    text = f'<mc:AlternateContent xmlns:mc="{xmlns_mc}">{content}</mc:AlternateContent>'
    try:
        return etree.fromstring(text.encode("utf-8"), parser=make_xml_parser())
    except etree.XMLSyntaxError as e:
        raise ValueError(f"alternate_content: content is not well-formed XML: {e}") from e


def encode_workbook(wb: Workbook) -> bytes:
    """Encode a `Workbook` to XML bytes (UTF-8, standalone declaration)."""
    children: list[tuple[float, int, Any]] = []

    def add(name: str, el: Any) -> None:
        children.append((_ORDER_INDEX.get(name, _UNKNOWN_INDEX), len(children), el))

    if wb.workbook_pr is not None:
        add("workbookPr", _encode_workbook_pr(wb.workbook_pr))
    if wb.alternate_content is not None:
        ac = wb.alternate_content
        add("AlternateContent", _encode_alternate_content(ac.content, ac.xmlns_mc))
    if wb.workbook_protection is not None:
        add("workbookProtection", _encode_protection(wb.workbook_protection))
    add("sheets", _encode_sheets(wb.sheets))
    for raw in wb.unknown_elements:
        add(raw.name, etree.fromstring(raw.xml, parser=make_xml_parser()))

    root = etree.Element(_q("workbook"), nsmap={None: MAIN_NS, "r": REL_NS})
    for _, _, el in sorted(children, key=lambda c: (c[0], c[1])):
        root.append(el)
    return etree.tostring(root, xml_declaration=True, encoding="UTF-8", standalone=True)
