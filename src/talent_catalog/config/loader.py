from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from dotenv import load_dotenv
from jsonschema.exceptions import ValidationError

from ..models.config_models import (
    DEFAULT_CONFIG_PATH,
    CatalogConfig,
    Settings,
    WorkbookSheetConfig,
)

"""Config loader.

Responsibilities:
- Load YAML config/catalog.yml and validate it against catalog_schema.json
- Apply defaults for every optional key
- Read environment settings (APPS_SCRIPT_URL, CATALOG_CONFIG, FLASK_SECRET_KEY),
  with .env loaded first through python-dotenv
"""

SCHEMA_PATH = Path(__file__).with_name("catalog_schema.json")

ENV_ENDPOINT_URL = "APPS_SCRIPT_URL"
ENV_CONFIG_PATH = "CATALOG_CONFIG"
ENV_SECRET_KEY = "FLASK_SECRET_KEY"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the bundled JSON schema.

    Raises:
        ConfigError: if the schema file is missing or unreadable, or the data
            fails validation (wrong types, unknown keys, ...)
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


def _workbook_sheets(raw: dict[str, Any]) -> dict[str, WorkbookSheetConfig]:
    return {
        name: WorkbookSheetConfig(sheet_name=name, location=entry["location"], category=entry["category"])
        for name, entry in raw.items()
    }


def load_config(path: Path) -> CatalogConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("config validation failed: top level must be a mapping")

    _validate_config_schema(data)

    defaults = CatalogConfig()
    return CatalogConfig(
        title=data.get("title", defaults.title),
        brand=data.get("brand", defaults.brand),
        page_size=data.get("page_size", defaults.page_size),
        shuffle=data.get("shuffle", defaults.shuffle),
        locations=list(data.get("locations") or defaults.locations),
        categories=list(data.get("categories") or defaults.categories),
        error_log_dir=data.get("error_log_dir"),
        workbook_sheets=_workbook_sheets(data.get("workbook_sheets") or {}),
    )


def load_env_file(path: Path = Path(".env"), override: bool = False) -> None:
    """Load .env into the process environment if the file exists."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def load_settings(env: dict[str, str] | None = None) -> Settings:
    """Read settings from ``env`` (defaults to os.environ).

    A blank endpoint URL counts as missing.
    """
    source = os.environ if env is None else env
    endpoint = (source.get(ENV_ENDPOINT_URL) or "").strip() or None
    return Settings(
        endpoint_url=endpoint,
        config_path=source.get(ENV_CONFIG_PATH) or DEFAULT_CONFIG_PATH,
        secret_key=source.get(ENV_SECRET_KEY) or None,
    )
