"""Operations on the workbook descriptor: cache, properties, protection, sheets."""

from __future__ import annotations

from .cache import WorkbookCache
from .props import get_workbook_props, set_workbook_props
from .protection import protect_workbook, unprotect_workbook
from .sheets import register_sheet

__all__ = [
    "WorkbookCache",
    "get_workbook_props",
    "protect_workbook",
    "register_sheet",
    "set_workbook_props",
    "unprotect_workbook",
]
