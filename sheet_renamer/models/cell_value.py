from __future__ import annotations

from dataclasses import dataclass
from typing import Union

"""Cell content variants read from the tabular source.

A spreadsheet cell may hold plain text, a number, a boolean, rich text whose
runs each carry an optional hyperlink, or nothing at all. Readers convert the
host's representation into one of the frozen dataclasses below so that the
link resolver can branch on the type instead of probing loosely-typed values.
"""

__all__ = [
    "TextRun",
    "EmptyValue",
    "TextValue",
    "NumberValue",
    "BooleanValue",
    "RichTextValue",
    "CellValue",
]


@dataclass(frozen=True)
class TextRun:
    """One contiguous span of rich text and its own hyperlink target (if any)."""
    text: str
    link: str | None = None


@dataclass(frozen=True)
class EmptyValue:
    pass


@dataclass(frozen=True)
class TextValue:
    text: str


@dataclass(frozen=True)
class NumberValue:
    number: float


@dataclass(frozen=True)
class BooleanValue:
    flag: bool


@dataclass(frozen=True)
class RichTextValue:
    """Rich text content.

    runs are kept in visual (left-to-right) order. link is the hyperlink of the
    cell as a whole, e.g. a =HYPERLINK() formula or "Insert link" on the cell.
    """
    runs: tuple[TextRun, ...] = ()
    link: str | None = None

    @property
    def text(self) -> str:
        return "".join(r.text for r in self.runs)


CellValue = Union[EmptyValue, TextValue, NumberValue, BooleanValue, RichTextValue]
