"""Quickcheck workspace: new package -> props + protection -> save -> reopen -> compare.

Self-contained: builds a package in memory, writes it to
`workspaces/00_quickcheck_protect_roundtrip/outputs/book.xlsx`, reopens it,
checks the password against the stored hash and writes a JSON report.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

from wbpart import WorkbookPropsOptions, WorkbookProtectionOptions, WrongPasswordError, new_file, open_file


def _write_json(path: Path, obj: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(obj, indent=2, sort_keys=True) + "\n", encoding="utf-8")


def main() -> None:
    here = Path(__file__).resolve().parent
    outputs = here / "outputs"
    outputs.mkdir(parents=True, exist_ok=True)

    props = WorkbookPropsOptions(date1904=True, filter_privacy=False, code_name="ThisWorkbook")
    f = new_file()
    f.register_sheet("Sheet1", 1, 1)
    f.set_workbook_props(props)
    f.protect_workbook(WorkbookProtectionOptions(password="quickcheck", lock_structure=True))

    book = outputs / "book.xlsx"
    f.save(book)

    reopened = open_file(book)
    protection = reopened.workbook().workbook_protection
    try:
        reopened.unprotect_workbook("not-the-password")
        wrong_password_rejected = False
    except WrongPasswordError:
        wrong_password_rejected = True
    reopened.unprotect_workbook("quickcheck")

    report = {
        "props_roundtrip_ok": reopened.get_workbook_props() == props,
        "sheets": [s.name for s in reopened.workbook().sheets],
        "protection": {
            "algorithm": protection.algorithm_name,
            "spin_count": protection.spin_count,
            "salt_len": len(protection.salt_value),
            "hash_len": len(protection.hash_value),
        },
        "wrong_password_rejected": wrong_password_rejected,
        "unprotected": reopened.workbook().workbook_protection is None,
        "props": asdict(reopened.get_workbook_props()),
    }
    _write_json(outputs / "report.json", report)
    print(json.dumps(report, indent=2, sort_keys=True))


if __name__ == "__main__":
    main()
