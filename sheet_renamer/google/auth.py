from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import google.auth
from google.oauth2 import service_account
from googleapiclient.discovery import build

__all__ = [
    "SCOPES",
    "GoogleServices",
    "build_services",
]

SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/drive",
]


@dataclass(frozen=True)
class GoogleServices:
    sheets: Any
    drive: Any


def build_services(credentials_file: str | None = None) -> GoogleServices:
    """Build Sheets v4 and Drive v3 clients.

    Uses the service account key at credentials_file when given, otherwise
    application default credentials.
    """
    if credentials_file:
        creds = service_account.Credentials.from_service_account_file(credentials_file, scopes=SCOPES)
    else:
        creds, _project = google.auth.default(scopes=SCOPES)
    return GoogleServices(
        sheets=build("sheets", "v4", credentials=creds, cache_discovery=False),
        drive=build("drive", "v3", credentials=creds, cache_discovery=False),
    )
