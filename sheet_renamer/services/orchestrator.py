from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime, tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo

from ..host.interfaces import (
    CellAccess,
    FileNotFound,
    FileStore,
    PermissionDenied,
    RenameRejected,
)
from ..links.resolver import extract_file_id, resolve_link
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.cell_value import BooleanValue, CellValue, NumberValue, RichTextValue, TextValue
from ..models.config_models import RenameConfig
from ..models.edit_event import EditEvent
from ..models.outcome import Failure, FailureKind, Result, RowOutcome, Success, TriggerState

"""Rename orchestration for a single edited row.

handle_edit() is invoked once per edit notification. Edits that are not a
change of the trigger cell to exactly "Yes" on the configured sheet are
ignored without touching the row. Otherwise the row's link and new name are
read, the Drive file id is extracted, the file is renamed keeping its current
extension, and the outcome is written back:

- success: trigger cell -> "DONE", status -> "SUCCESS: ... <timestamp>"
- failure: trigger cell left at "Yes" (retryable), status -> "ERROR: <message>"

No exception leaves handle_edit(); collaborator errors are converted to
Failure values and reported through the status cell and the error log.
"""

__all__ = [
    "ERROR_PREFIX",
    "EMPTY_INPUT_MESSAGE",
    "INVALID_LINK_MESSAGE",
    "RenameOrchestrator",
    "cell_text",
    "final_file_name",
    "split_extension",
]

logger = logging.getLogger(__name__)

ERROR_PREFIX = "ERROR: "
EMPTY_INPUT_MESSAGE = "Drive Link or New Name is empty."
INVALID_LINK_MESSAGE = "Invalid Google Drive link."
SUCCESS_TEMPLATE = "SUCCESS: Renamed to '{name}' on {timestamp}"
STATUS_TIMESTAMP_FMT = "%Y-%m-%d %H:%M:%S %Z"

# one entry per FailureKind
_FAILURE_LOG_LEVELS: dict[FailureKind, int] = {
    FailureKind.INPUT_VALIDATION: logging.WARNING,
    FailureKind.INVALID_LINK: logging.WARNING,
    FailureKind.FILE_NOT_FOUND: logging.ERROR,
    FailureKind.PERMISSION_DENIED: logging.ERROR,
    FailureKind.RENAME_REJECTED: logging.ERROR,
    FailureKind.EXTERNAL: logging.ERROR,
}


def split_extension(name: str) -> str:
    """Return everything from the last '.' of name onward, or "" if it has none."""
    idx = name.rfind(".")
    return name[idx:] if idx != -1 else ""


def final_file_name(new_name: str, current_name: str) -> str:
    """new_name with the extension of current_name carried forward."""
    return new_name + split_extension(current_name)


def cell_text(cell: CellValue) -> str:
    """Scalar text of a cell as the sheet displays it ("" for empty cells)."""
    if isinstance(cell, (TextValue, RichTextValue)):
        return cell.text
    if isinstance(cell, NumberValue):
        number = cell.number
        return str(int(number)) if float(number).is_integer() else str(number)
    if isinstance(cell, BooleanValue):
        return "TRUE" if cell.flag else "FALSE"
    return ""


def _zone(name: str) -> tzinfo:
    return UTC if name == "UTC" else ZoneInfo(name)


class RenameOrchestrator:
    """Handle trigger-cell edits for one configured sheet.

    Args:
        config: Sheet name, column layout and timezone to work with
        cells: Cell access for the configured sheet
        files: Rename-capable file store
        error_log: Diagnostic sink for failures (default: buffer under config.error_log_dir)
        now: Clock returning an aware datetime (tests inject a fixed one)
    """

    def __init__(
        self,
        config: RenameConfig,
        cells: CellAccess,
        files: FileStore,
        *,
        error_log: ErrorLogBuffer | None = None,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self.config = config
        self.cells = cells
        self.files = files
        self.error_log = error_log if error_log is not None else ErrorLogBuffer(Path(config.error_log_dir))
        self._now = now or (lambda: datetime.now(UTC))
        self._tz = _zone(config.timezone)

    def should_handle(self, event: EditEvent) -> bool:
        return (
            event.sheet_name == self.config.sheet_name
            and event.column == self.config.columns.trigger
            and event.row >= self.config.first_data_row
            and event.value == TriggerState.ARMED.value
        )

    def handle_edit(self, event: EditEvent) -> RowOutcome | None:
        """Process one edit notification.

        Returns:
            None when the edit was filtered out (nothing written), otherwise
            the RowOutcome describing what was written to the row.
        """
        if not self.should_handle(event):
            logger.debug(
                f"ignored edit sheet={event.sheet_name} row={event.row} col={event.column} value={event.value!r}"
            )
            return None

        row = event.row
        logger.info(f"rename requested sheet={event.sheet_name} row={row}")

        inputs = self._read_inputs(row)
        if isinstance(inputs, Failure):
            return self._report_failure(event, inputs)
        url, new_name = inputs.value

        file_id = extract_file_id(url)
        if file_id is None:
            return self._report_failure(event, Failure(FailureKind.INVALID_LINK, INVALID_LINK_MESSAGE))

        renamed = self._rename(file_id, new_name)
        if isinstance(renamed, Failure):
            return self._report_failure(event, renamed, file_id=file_id)
        return self._report_success(row, file_id, renamed.value)

    def _read_inputs(self, row: int) -> Result[tuple[str, str]]:
        columns = self.config.columns
        try:
            link_cell = self.cells.read_cell(row, columns.link)
            name_cell = self.cells.read_cell(row, columns.new_name)
        except Exception as e:
            return Failure(FailureKind.EXTERNAL, str(e) or type(e).__name__)

        url = resolve_link(link_cell).strip()
        new_name = cell_text(name_cell).strip()
        if not url or not new_name:
            return Failure(FailureKind.INPUT_VALIDATION, EMPTY_INPUT_MESSAGE)
        return Success((url, new_name))

    def _rename(self, file_id: str, new_name: str) -> Result[str]:
        try:
            handle = self.files.get_file(file_id)
            final_name = final_file_name(new_name, handle.name)
            handle.rename(final_name)
        except FileNotFound as e:
            return Failure(FailureKind.FILE_NOT_FOUND, str(e))
        except PermissionDenied as e:
            return Failure(FailureKind.PERMISSION_DENIED, str(e))
        except RenameRejected as e:
            return Failure(FailureKind.RENAME_REJECTED, str(e))
        except Exception as e:
            return Failure(FailureKind.EXTERNAL, str(e) or type(e).__name__)
        return Success(final_name)

    def _report_failure(self, event: EditEvent, failure: Failure, file_id: str | None = None) -> RowOutcome:
        status = ERROR_PREFIX + failure.message
        logger.log(
            _FAILURE_LOG_LEVELS[failure.kind],
            f"rename failed row={event.row} kind={failure.kind.error_type} file_id={file_id} message={failure.message}",
        )
        self.error_log.append(
            ErrorRecord.create(
                sheet=event.sheet_name,
                row=event.row,
                error_type=failure.kind.error_type,
                message=failure.message,
                file_id=file_id,
            )
        )
        try:
            self.error_log.flush()
        except OSError as e:
            logger.error(f"error log write failed: {e}")
        self._write_status(event.row, status)
        return RowOutcome(row=event.row, state=TriggerState.ARMED, status=status, file_id=file_id)

    def _report_success(self, row: int, file_id: str, final_name: str) -> RowOutcome:
        timestamp = self._now().astimezone(self._tz).strftime(STATUS_TIMESTAMP_FMT)
        status = SUCCESS_TEMPLATE.format(name=final_name, timestamp=timestamp)
        logger.info(f"renamed row={row} file_id={file_id} name={final_name!r}")
        try:
            self.cells.write_value(row, self.config.columns.trigger, TriggerState.DONE.value)
        except Exception as e:
            # file is already renamed at this point
            logger.error(f"trigger cell write failed row={row}: {e}")
            status = ERROR_PREFIX + f"Renamed to '{final_name}' but the trigger cell could not be updated: {e}"
            self._write_status(row, status)
            return RowOutcome(row=row, state=TriggerState.ARMED, status=status, file_id=file_id, final_name=final_name)
        self._write_status(row, status)
        return RowOutcome(row=row, state=TriggerState.DONE, status=status, file_id=file_id, final_name=final_name)

    def _write_status(self, row: int, text: str) -> None:
        try:
            self.cells.write_value(row, self.config.columns.status, text)
        except Exception as e:
            logger.error(f"status cell write failed row={row}: {e}")
