from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..models.error_record import ErrorRecord

"""Error log buffering module.

Failed rename attempts are appended as ErrorRecord entries and written out as
JSON Lines to `<error_log_dir>/errors-YYYYMMDD-HHMMSS.log` (UTC). The file name
is fixed on first access, so one process run writes to a single file.
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
]

TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    """In-memory buffer for error records. Flush writes JSON Lines.

    スレッド安全性不要 (ハンドラは逐次実行)
    """
    def __init__(self, log_dir: Path | str = "./logs") -> None:
        self._log_dir = Path(log_dir)
        self._records: list[ErrorRecord] = []
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self._log_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._log_dir / f"errors-{stamp}.log"
        return self._file_path

    def append(self, record: ErrorRecord) -> None:
        self._records.append(record)

    def __len__(self) -> int:  # pragma: no cover (trivial)
        return len(self._records)

    def flush(self) -> Path | None:
        """Append buffered records to the log file.

        Returns the file path, or None when nothing was buffered (no file is
        created in that case).
        """
        if not self._records:
            return None
        fp = self.file_path
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
