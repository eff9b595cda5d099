from __future__ import annotations

from dataclasses import dataclass

"""Config dataclasses for the sheet-driven Drive renamer.

These are built by sheet_renamer.config.loader after schema validation and are
passed explicitly into the orchestrator, so several sheets (or spreadsheets)
can be served by separately configured instances.
"""


@dataclass(frozen=True)
class ColumnLayout:
    """1-based column indexes of the cells a row's rename works with."""
    link: int  # Drive link (plain URL, rich text or whole-cell hyperlink)
    new_name: int  # desired base filename, without extension
    trigger: int  # "Yes" arms the row, "DONE" after success
    status: int  # feedback written on every attempt

    def as_dict(self) -> dict[str, int]:
        return {
            "link": self.link,
            "new_name": self.new_name,
            "trigger": self.trigger,
            "status": self.status,
        }


@dataclass(frozen=True)
class RenameConfig:
    """Root configuration object, fixed at deployment."""
    spreadsheet_id: str
    sheet_name: str  # only edits on this sheet are handled
    columns: ColumnLayout
    first_data_row: int = 2  # rows above are headers
    timezone: str = "UTC"  # success timestamp timezone
    credentials_file: str | None = None  # service account JSON (None = default credentials)
    poll_interval_seconds: float = 15.0
    error_log_dir: str = "./logs"
