"""Domain models for the sheet-driven Drive renamer.

Cell content variants, edit notifications, configuration, and the result
types produced while handling one row.
"""

from .cell_value import (
    BooleanValue,
    CellValue,
    EmptyValue,
    NumberValue,
    RichTextValue,
    TextRun,
    TextValue,
)
from .config_models import ColumnLayout, RenameConfig
from .edit_event import EditEvent
from .error_record import ErrorRecord
from .outcome import Failure, FailureKind, Result, RowOutcome, Success, TriggerState

__all__ = [
    # Cell content
    "BooleanValue",
    "CellValue",
    "EmptyValue",
    "NumberValue",
    "RichTextValue",
    "TextRun",
    "TextValue",
    # Configuration
    "ColumnLayout",
    "RenameConfig",
    # Processing
    "EditEvent",
    "ErrorRecord",
    "Failure",
    "FailureKind",
    "Result",
    "RowOutcome",
    "Success",
    "TriggerState",
]
