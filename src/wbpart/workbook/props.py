"""Workbook-level properties (`<workbookPr>`)."""

from __future__ import annotations

from typing import Optional

from wbpart.core.model import Workbook, WorkbookPr, WorkbookPropsOptions


def set_workbook_props(wb: Workbook, opts: Optional[WorkbookPropsOptions]) -> None:
    """Overwrite the properties whose option is not None.

    `opts=None` changes nothing; fields left as None keep their stored value.
    """
    if opts is None:
        return
    pr = wb.workbook_pr if wb.workbook_pr is not None else WorkbookPr()
    if opts.date1904 is not None:
        pr.date1904 = opts.date1904
    if opts.filter_privacy is not None:
        pr.filter_privacy = opts.filter_privacy
    if opts.code_name is not None:
        pr.code_name = opts.code_name
    wb.workbook_pr = pr


def get_workbook_props(wb: Workbook) -> WorkbookPropsOptions:
    """Return the stored properties.

    All fields are None when the workbook has no `<workbookPr>`; otherwise
    unset record fields are reported as the format defaults.
    """
    pr = wb.workbook_pr
    if pr is None:
        return WorkbookPropsOptions()
    return WorkbookPropsOptions(
        date1904=bool(pr.date1904),
        filter_privacy=bool(pr.filter_privacy),
        code_name=pr.code_name or "",
    )
