"""Sheet list registration used during sheet creation."""

from __future__ import annotations

from wbpart.core.model import SheetRef, Workbook


def register_sheet(wb: Workbook, name: str, sheet_id: int, rid: int) -> SheetRef:
    """Append a sheet reference with relationship id `rId<rid>`.

    No validation happens here: callers enforce the 31-character name limit
    and id uniqueness.
    """
    ref = SheetRef(name=name, sheet_id=sheet_id, rel_id=f"rId{rid}")
    wb.sheets.append(ref)
    return ref
