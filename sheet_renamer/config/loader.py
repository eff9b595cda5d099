from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import ColumnLayout, RenameConfig

"""Config loader.

Responsibilities:
- Load YAML config (default config/renamer.yml)
- Validate against the bundled JSON schema (config_schema.json)
- Check constraints the schema cannot express (distinct columns, known timezone)
- Apply defaults and environment overrides
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "load_config",
]

DEFAULT_CONFIG_PATH = Path("config/renamer.yml")
SCHEMA_PATH = Path(__file__).parent / "config_schema.json"

ENV_CREDENTIALS = "GOOGLE_APPLICATION_CREDENTIALS"
ENV_SPREADSHEET_ID = "RENAMER_SPREADSHEET_ID"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against JSON schema.

    Raises:
        ConfigError: If the schema file is missing or not valid JSON, or the
            config data fails schema validation.
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _validate_timezone(name: str) -> None:
    if name == "UTC":
        return
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigError(f"config validation failed: unknown timezone '{name}'") from e


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> RenameConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    _validate_config_schema(data)

    columns = ColumnLayout(**data["columns"])
    indexes = list(columns.as_dict().values())
    if len(set(indexes)) != len(indexes):
        raise ConfigError(f"config validation failed: columns must be distinct: {columns.as_dict()}")

    tz = data.get("timezone", "UTC")
    _validate_timezone(tz)

    # 環境変数が設定ファイルより優先
    spreadsheet_id = os.getenv(ENV_SPREADSHEET_ID) or data["spreadsheet_id"]
    credentials_file = os.getenv(ENV_CREDENTIALS) or data.get("credentials_file")

    return RenameConfig(
        spreadsheet_id=spreadsheet_id,
        sheet_name=data["sheet_name"],
        columns=columns,
        first_data_row=data.get("first_data_row", 2),
        timezone=tz,
        credentials_file=credentials_file,
        poll_interval_seconds=float(data.get("poll_interval_seconds", 15)),
        error_log_dir=data.get("error_log_dir", "./logs"),
    )
