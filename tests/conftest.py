"""Pytest configuration.

This repo follows the `src/` layout. Some environments may invoke a `pytest`
entrypoint from a different Python install than the one used for
`python -m pip install -e ...`, which can cause `import wbpart` to fail.

To keep the tests robust, we ensure `src/` is on `sys.path` during tests.
"""

from __future__ import annotations

import io
import sys
import zipfile
from pathlib import Path
from typing import Optional


def pytest_configure() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    src_dir = repo_root / "src"
    sys.path.insert(0, str(src_dir))


# =============================================================================
# Shared fixtures for package tests
# =============================================================================

MAIN_NS = "http://schemas.openxmlformats.org/spreadsheetml/2006/main"
REL_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
MC_NS = "http://schemas.openxmlformats.org/markup-compatibility/2006"
OFFICE_DOCUMENT_TYPE = REL_NS + "/officeDocument"

# Shaped like the workbook.xml a current spreadsheet application writes.
SAMPLE_WORKBOOK_XML = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'
    f'<workbook xmlns="{MAIN_NS}" xmlns:r="{REL_NS}" xmlns:mc="{MC_NS}" mc:Ignorable="x15 xr xr6 xr10"'
    ' xmlns:x15="http://schemas.microsoft.com/office/spreadsheetml/2010/11/main"'
    ' xmlns:xr="http://schemas.microsoft.com/office/spreadsheetml/2014/revision"'
    ' xmlns:xr6="http://schemas.microsoft.com/office/spreadsheetml/2016/revision6"'
    ' xmlns:xr10="http://schemas.microsoft.com/office/spreadsheetml/2016/revision10">'
    '<fileVersion appName="xl" lastEdited="7" lowestEdited="7" rupBuild="22228"/>'
    '<workbookPr defaultThemeVersion="166925"/>'
    '<mc:AlternateContent xmlns:mc="http://schemas.openxmlformats.org/markup-compatibility/2006">'
    '<mc:Choice Requires="x15">'
    '<x15ac:absPath xmlns:x15ac="http://schemas.microsoft.com/office/spreadsheetml/2010/11/ac" url="C:/Users/demo/"/>'
    "</mc:Choice></mc:AlternateContent>"
    '<xr:revisionPtr revIDLastSave="0" documentId="8_{00000000-0000-0000-0000-000000000000}"'
    ' xr6:coauthVersionLast="47" xr6:coauthVersionMax="47"'
    ' xr10:uidLastSave="{00000000-0000-0000-0000-000000000000}"/>'
    '<bookViews><workbookView xWindow="-120" yWindow="-120" windowWidth="29040" windowHeight="15840"/></bookViews>'
    '<sheets><sheet name="Sheet1" sheetId="1" r:id="rId1"/>'
    '<sheet name="Hidden" sheetId="2" state="hidden" r:id="rId2"/></sheets>'
    '<definedNames><definedName name="Total">Sheet1!$A$1</definedName></definedNames>'
    '<calcPr calcId="191029"/>'
    "</workbook>"
).encode("utf-8")


def make_root_rels(workbook_target: Optional[str] = "xl/workbook.xml") -> bytes:
    rels = [
        '<Relationship Id="rId2" '
        'Type="http://schemas.openxmlformats.org/package/2006/relationships/metadata/core-properties" '
        'Target="docProps/core.xml"/>'
    ]
    if workbook_target is not None:
        rels.append(f'<Relationship Id="rId1" Type="{OFFICE_DOCUMENT_TYPE}" Target="{workbook_target}"/>')
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'
        '<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">'
        + "".join(rels)
        + "</Relationships>"
    ).encode("utf-8")


def make_parts(
    workbook_xml: Optional[bytes] = SAMPLE_WORKBOOK_XML,
    *,
    workbook_target: Optional[str] = "xl/workbook.xml",
) -> dict[str, bytes]:
    """Build the parts of a small package.

    `workbook_xml=None` leaves the workbook part out; `workbook_target=None`
    leaves out the officeDocument relationship.
    """
    parts = {"_rels/.rels": make_root_rels(workbook_target)}
    if workbook_xml is not None and workbook_target is not None:
        parts[workbook_target.lstrip("/")] = workbook_xml
    return parts


def make_package_bytes(**kwargs) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for name, data in make_parts(**kwargs).items():
            zf.writestr(name, data)
    return buf.getvalue()
