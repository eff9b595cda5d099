from .interfaces import (
    CellAccess,
    FileHandle,
    FileNotFound,
    FileStore,
    FileStoreError,
    PermissionDenied,
    RenameRejected,
)

__all__ = [
    "CellAccess",
    "FileHandle",
    "FileNotFound",
    "FileStore",
    "FileStoreError",
    "PermissionDenied",
    "RenameRejected",
]
