from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for the diagnostic error log.

Each post-filter failure of a rename attempt becomes one JSON Lines record with
a fixed key set. row=-1 marks failures not tied to a row (e.g. a watcher cycle
that could not read the sheet).
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        sheet: Sheet name the edit happened on
        row: Row number (1-based). Use -1 when the row is unknown
        error_type: FailureKind name in UPPER_SNAKE_CASE format
        file_id: Extracted Drive file id, or None when extraction did not happen
        message: Failure message (the status cell text without the "ERROR: " prefix)
    """
    timestamp: str  # ISO8601 UTC
    sheet: str
    row: int  # 不明な場合 -1
    error_type: str  # UPPER_SNAKE
    file_id: str | None
    message: str

    @staticmethod
    def create(sheet: str, row: int, error_type: str, message: str, file_id: str | None = None) -> ErrorRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            sheet=sheet,
            row=row,
            error_type=error_type,
            file_id=file_id,
            message=message,
        )

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
