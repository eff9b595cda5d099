from __future__ import annotations

from typing import Protocol

from ..models.cell_value import CellValue

"""Collaborator interfaces the orchestrator works against.

CellAccess is the tabular source (one sheet), FileStore the rename-capable file
store. sheet_renamer.google provides implementations backed by the Sheets and
Drive APIs; tests use in-memory fakes.
"""

__all__ = [
    "CellAccess",
    "FileHandle",
    "FileStore",
    "FileStoreError",
    "FileNotFound",
    "PermissionDenied",
    "RenameRejected",
]


class FileStoreError(Exception):
    """Base exception for file store failures."""


class FileNotFound(FileStoreError):
    """The identifier does not resolve to an accessible file."""


class PermissionDenied(FileStoreError):
    """The caller may see the file but is not allowed to act on it."""


class RenameRejected(FileStoreError):
    """The store refused the new name."""


class CellAccess(Protocol):
    def read_cell(self, row: int, column: int) -> CellValue:
        ...

    def write_value(self, row: int, column: int, value: str) -> None:
        ...

    def read_column(self, column: int, first_row: int) -> list[str | None]:
        """Return the scalar values of a column from first_row down to the last used row."""
        ...


class FileHandle(Protocol):
    @property
    def name(self) -> str:
        ...

    def rename(self, new_name: str) -> None:
        ...


class FileStore(Protocol):
    def get_file(self, file_id: str) -> FileHandle:
        """Resolve an id to a handle. Raises FileNotFound when it does not resolve."""
        ...
