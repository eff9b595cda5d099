from __future__ import annotations

import re

from ..models.cell_value import CellValue, RichTextValue, TextValue

"""Link resolution for the link cell of a row.

resolve_link() picks the single best candidate URL out of a cell:
1. the link of the first rich-text run that carries one (left-to-right order)
2. the whole-cell hyperlink of a rich-text cell
3. the plain text of a text cell

extract_file_id() then pulls the Drive file id out of the URL. Drive ids are
long opaque tokens that show up in several URL shapes (open?id=, /file/d/<id>/view,
/edit, uc?export=download&id=, shortcuts); scanning for the first run of 25+
id characters covers all of them without parsing each shape. When a URL holds
two such runs (e.g. a redirect wrapper) the first one wins.
"""

__all__ = [
    "FILE_ID_PATTERN",
    "resolve_link",
    "extract_file_id",
]

FILE_ID_PATTERN = re.compile(r"[-\w]{25,}", re.ASCII)


def resolve_link(cell: CellValue) -> str:
    """Return the best candidate URL held by a cell, or "" when it has none."""
    if isinstance(cell, RichTextValue):
        for run in cell.runs:
            if run.link:
                return run.link
        if cell.link:
            return cell.link
        return cell.text
    if isinstance(cell, TextValue):
        return cell.text
    return ""


def extract_file_id(url: str) -> str | None:
    """Return the first run of 25+ [A-Za-z0-9_-] characters in url, or None."""
    match = FILE_ID_PATTERN.search(url or "")
    return match.group(0) if match else None
