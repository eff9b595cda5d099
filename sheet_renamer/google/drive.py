from __future__ import annotations

import logging
from typing import Any

from googleapiclient.errors import HttpError

from ..host.interfaces import FileNotFound, FileStoreError, PermissionDenied, RenameRejected

"""FileStore backed by the Google Drive v3 API."""

__all__ = [
    "DriveFile",
    "DriveFileStore",
]

logger = logging.getLogger(__name__)


def _status(error: HttpError) -> int:
    return int(getattr(error.resp, "status", 0) or 0)


def _reason(error: HttpError) -> str:
    reason = getattr(error, "reason", "")
    return reason or str(error)


class DriveFile:
    """Handle to one Drive file."""

    def __init__(self, service: Any, file_id: str, name: str) -> None:
        self.service = service
        self.file_id = file_id
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def rename(self, new_name: str) -> None:
        try:
            meta = self.service.files().update(
                fileId=self.file_id,
                body={"name": new_name},
                fields="id,name",
                supportsAllDrives=True,
            ).execute()
        except HttpError as e:
            status = _status(e)
            if status == 404:
                raise FileNotFound(f"File not found: {self.file_id}") from e
            if status == 403:
                raise PermissionDenied(f"Permission denied for file {self.file_id}: {_reason(e)}") from e
            raise RenameRejected(f"Rename rejected for file {self.file_id}: {_reason(e)}") from e
        self._name = meta.get("name", new_name)
        logger.debug(f"drive rename file_id={self.file_id} name={self._name!r}")


class DriveFileStore:
    def __init__(self, service: Any) -> None:
        self.service = service

    def get_file(self, file_id: str) -> DriveFile:
        try:
            meta = self.service.files().get(
                fileId=file_id,
                fields="id,name",
                supportsAllDrives=True,
            ).execute()
        except HttpError as e:
            status = _status(e)
            if status == 404:
                raise FileNotFound(f"File not found: {file_id}") from e
            if status == 403:
                raise PermissionDenied(f"Permission denied for file {file_id}: {_reason(e)}") from e
            raise FileStoreError(f"Drive lookup failed for file {file_id}: {_reason(e)}") from e
        return DriveFile(self.service, meta.get("id", file_id), meta["name"])
