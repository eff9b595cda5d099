from __future__ import annotations

import logging
import time
from collections.abc import Callable

from ..host.interfaces import CellAccess
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.config_models import RenameConfig
from ..models.edit_event import EditEvent
from .dispatcher import EditDispatcher

"""Trigger column poller.

Acts as the edit notification source when the process is not driven by the
hosting sheet's own edit events. Each poll reads the trigger column and emits
one EditEvent per row whose value changed since the previous poll. The first
poll only records a baseline, so rows already set to "Yes" when the watcher
starts are left alone until a user edits them again.

A poll that fails (e.g. a quota error from the sheet) is logged and recorded
in the error log; the previous snapshot is kept, so edits made meanwhile are
picked up by the next successful poll.
"""

__all__ = [
    "TriggerColumnPoller",
]

logger = logging.getLogger(__name__)


class TriggerColumnPoller:
    def __init__(
        self,
        cells: CellAccess,
        dispatcher: EditDispatcher,
        config: RenameConfig,
        *,
        error_log: ErrorLogBuffer | None = None,
    ) -> None:
        self.cells = cells
        self.dispatcher = dispatcher
        self.config = config
        self.error_log = error_log
        self.failed_polls = 0
        self._snapshot: dict[int, str | None] | None = None

    def _read_snapshot(self) -> dict[int, str | None]:
        first_row = self.config.first_data_row
        values = self.cells.read_column(self.config.columns.trigger, first_row)
        return {first_row + offset: value for offset, value in enumerate(values)}

    def changed_rows(self, current: dict[int, str | None]) -> list[int]:
        previous = self._snapshot or {}
        rows = set(previous) | set(current)
        return sorted(r for r in rows if previous.get(r) != current.get(r))

    def poll(self) -> list[EditEvent]:
        """Read the trigger column once and dispatch an event per changed row.

        Returns the events that were dispatched (empty on the baseline poll).
        """
        current = self._read_snapshot()
        if self._snapshot is None:
            self._snapshot = current
            logger.info(f"baseline taken rows={len(current)} sheet={self.config.sheet_name}")
            return []

        events = [
            EditEvent(
                sheet_name=self.config.sheet_name,
                row=row,
                column=self.config.columns.trigger,
                value=current.get(row),
            )
            for row in self.changed_rows(current)
        ]
        self._snapshot = current
        for event in events:
            self.dispatcher.dispatch(self.config.spreadsheet_id, event)
        return events

    def run(
        self,
        *,
        max_polls: int | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> int:
        """Poll every poll_interval_seconds until max_polls is reached (forever if None).

        Failed polls do not stop the loop. Returns the number of events dispatched.
        """
        dispatched = 0
        polls = 0
        while max_polls is None or polls < max_polls:
            if polls:
                sleep(self.config.poll_interval_seconds)
            try:
                dispatched += len(self.poll())
            except Exception as e:
                self._record_failure(e)
            polls += 1
        return dispatched

    def _record_failure(self, error: Exception) -> None:
        self.failed_polls += 1
        message = str(error) or type(error).__name__
        logger.error(f"poll failed sheet={self.config.sheet_name}: {message}")
        if self.error_log is None:
            return
        self.error_log.append(
            ErrorRecord.create(sheet=self.config.sheet_name, row=-1, error_type="POLL_FAILED", message=message)
        )
        try:
            self.error_log.flush()
        except OSError as e:
            logger.error(f"error log write failed: {e}")
