from __future__ import annotations

import re

from conftest import FakeFile, LINK_COL, NAME_COL, STATUS_COL, TRIGGER_COL
from sheet_renamer.models.cell_value import TextValue
from sheet_renamer.models.edit_event import EditEvent

"""Status / trigger cell contract.

- failures: status starts with "ERROR: ", trigger stays "Yes"
- success: trigger "DONE", status carries a YYYY-MM-DD HH:MM:SS timestamp
"""

TIMESTAMP_RE = re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}")
FILE_ID = "AAAAAAAAAAAAAAAAAAAAAAAAA"


def _row(sheet, link, name):
    sheet.cells[(2, LINK_COL)] = TextValue(link)
    sheet.cells[(2, NAME_COL)] = TextValue(name)
    sheet.cells[(2, TRIGGER_COL)] = TextValue("Yes")
    return EditEvent(sheet_name="Files", row=2, column=TRIGGER_COL, value="Yes")


def test_success_contract(orchestrator, sheet, store):
    store.files[FILE_ID] = FakeFile("draft.docx")
    orchestrator.handle_edit(_row(sheet, f"https://files.example/view?id={FILE_ID}&x=1", "contract"))

    assert store.files[FILE_ID].name == "contract.docx"
    assert sheet.value(2, TRIGGER_COL) == "DONE"
    assert TIMESTAMP_RE.search(sheet.value(2, STATUS_COL))


def test_empty_link_contract(orchestrator, sheet):
    orchestrator.handle_edit(_row(sheet, "", "contract"))
    assert sheet.value(2, STATUS_COL) == "ERROR: Drive Link or New Name is empty."
    assert sheet.value(2, TRIGGER_COL) == "Yes"


def test_invalid_link_contract(orchestrator, sheet):
    orchestrator.handle_edit(_row(sheet, "https://drive.google.com/open?id=tooShort", "contract"))
    assert sheet.value(2, STATUS_COL) == "ERROR: Invalid Google Drive link."
    assert sheet.value(2, TRIGGER_COL) == "Yes"


def test_every_failure_is_prefixed(orchestrator, sheet):
    orchestrator.handle_edit(_row(sheet, f"https://drive.google.com/file/d/{FILE_ID}/view", "contract"))
    assert sheet.value(2, STATUS_COL).startswith("ERROR: ")
