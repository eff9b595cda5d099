# Shared pytest fixtures
from __future__ import annotations

import logging
import tempfile
from datetime import UTC, datetime
from pathlib import Path

import pytest

from sheet_renamer.host.interfaces import FileNotFound
from sheet_renamer.logging.error_log import ErrorLogBuffer
from sheet_renamer.logging.init import APP_LOGGER_NAME, reset_logging
from sheet_renamer.models.cell_value import CellValue, EmptyValue, TextValue
from sheet_renamer.models.config_models import ColumnLayout, RenameConfig
from sheet_renamer.services.orchestrator import RenameOrchestrator

LINK_COL, NAME_COL, TRIGGER_COL, STATUS_COL = 1, 2, 3, 4
FIXED_NOW = datetime(2024, 5, 17, 9, 30, 0, tzinfo=UTC)


class FakeSheet:
    """In-memory CellAccess. Cells are keyed by (row, column)."""

    def __init__(self, cells: dict[tuple[int, int], CellValue] | None = None) -> None:
        self.cells: dict[tuple[int, int], CellValue] = dict(cells or {})
        self.writes: list[tuple[int, int, str]] = []

    def read_cell(self, row: int, column: int) -> CellValue:
        return self.cells.get((row, column), EmptyValue())

    def write_value(self, row: int, column: int, value: str) -> None:
        self.writes.append((row, column, value))
        self.cells[(row, column)] = TextValue(value)

    def read_column(self, column: int, first_row: int) -> list[str | None]:
        rows = [r for (r, c) in self.cells if c == column and r >= first_row]
        if not rows:
            return []
        values: list[str | None] = []
        for r in range(first_row, max(rows) + 1):
            cell = self.cells.get((r, column))
            values.append(cell.text if isinstance(cell, TextValue) and cell.text else None)
        return values

    def value(self, row: int, column: int) -> str | None:
        cell = self.cells.get((row, column))
        return cell.text if isinstance(cell, TextValue) else None


class FakeFile:
    def __init__(self, name: str, error: Exception | None = None) -> None:
        self._name = name
        self.error = error
        self.renames: list[str] = []

    @property
    def name(self) -> str:
        return self._name

    def rename(self, new_name: str) -> None:
        if self.error is not None:
            raise self.error
        self.renames.append(new_name)
        self._name = new_name


class FakeFileStore:
    def __init__(self, files: dict[str, FakeFile] | None = None) -> None:
        self.files: dict[str, FakeFile] = dict(files or {})
        self.lookups: list[str] = []

    def get_file(self, file_id: str) -> FakeFile:
        self.lookups.append(file_id)
        if file_id not in self.files:
            raise FileNotFound(f"File not found: {file_id}")
        return self.files[file_id]


@pytest.fixture(autouse=True)
def _reset_app_logging():
    yield
    reset_logging()
    logger = logging.getLogger(APP_LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """spreadsheet_id: sheet-abc
sheet_name: Files
columns:
  link: 1
  new_name: 2
  trigger: 3
  status: 4
first_data_row: 2
timezone: UTC
poll_interval_seconds: 5
error_log_dir: ./logs
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "renamer.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def rename_config(tmp_path: Path) -> RenameConfig:
    return RenameConfig(
        spreadsheet_id="sheet-abc",
        sheet_name="Files",
        columns=ColumnLayout(link=LINK_COL, new_name=NAME_COL, trigger=TRIGGER_COL, status=STATUS_COL),
        first_data_row=2,
        timezone="UTC",
        poll_interval_seconds=5.0,
        error_log_dir=str(tmp_path / "logs"),
    )


@pytest.fixture()
def sheet() -> FakeSheet:
    return FakeSheet()


@pytest.fixture()
def store() -> FakeFileStore:
    return FakeFileStore()


@pytest.fixture()
def error_log(tmp_path: Path) -> ErrorLogBuffer:
    return ErrorLogBuffer(tmp_path / "logs")


@pytest.fixture()
def orchestrator(rename_config, sheet, store, error_log) -> RenameOrchestrator:
    return RenameOrchestrator(rename_config, sheet, store, error_log=error_log, now=lambda: FIXED_NOW)
