from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

"""Result and outcome models for a single row's rename attempt.

Success / Failure replace exception-driven reporting inside the orchestrator:
every step returns one of them, and the error path branches on FailureKind.
"""

__all__ = [
    "TriggerState",
    "FailureKind",
    "Success",
    "Failure",
    "Result",
    "RowOutcome",
]

T = TypeVar("T")


class TriggerState(Enum):
    """Values the system itself writes to (or leaves in) the trigger cell.

    State transitions: (empty/other) → ARMED → (ARMED | DONE)
    """
    ARMED = "Yes"
    DONE = "DONE"


class FailureKind(Enum):
    INPUT_VALIDATION = "input_validation"
    INVALID_LINK = "invalid_link"
    FILE_NOT_FOUND = "file_not_found"
    PERMISSION_DENIED = "permission_denied"
    RENAME_REJECTED = "rename_rejected"
    EXTERNAL = "external"

    @property
    def error_type(self) -> str:
        """UPPER_SNAKE label used in the JSON Lines error log."""
        return self.name


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True)
class Failure:
    kind: FailureKind
    message: str


Result = Union[Success[T], Failure]


@dataclass(frozen=True)
class RowOutcome:
    """Terminal state of one handled edit.

    status is the exact text written to the row's status cell.
    """
    row: int
    state: TriggerState
    status: str
    file_id: str | None = None
    final_name: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.state is TriggerState.DONE
