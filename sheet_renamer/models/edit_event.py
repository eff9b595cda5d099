from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "EditEvent",
]


@dataclass(frozen=True)
class EditEvent:
    """A single-cell edit notification delivered by the hosting sheet.

    row / column are 1-based, as the sheet reports them. value is the new
    scalar content of the edited cell (None when the cell was cleared).
    """
    sheet_name: str
    row: int
    column: int
    value: str | None
