from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import HarvesterConfig

"""Config loader.

Responsibilities:
- Load the optional YAML config file (default: config/harvester.yml)
- Validate it against config_schema.json
- Read HARVESTER_* environment variables (.env is loaded by the CLI)
- Merge the layers: command line > environment > config file
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/harvester.yml")

ENV_INPUT_PATH = "HARVESTER_INPUT_PATH"
ENV_GTIN_COLUMN = "HARVESTER_GTIN_COLUMN"
ENV_PHARMACODE_COLUMN = "HARVESTER_PHARMACODE_COLUMN"
ENV_OUTPUT_DIRECTORY = "HARVESTER_OUTPUT_DIRECTORY"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or invalid, or the data
            fails validation (unknown keys, wrong types, negative columns).
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


def load_config(path: Path) -> HarvesterConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)

    return HarvesterConfig(
        input_path=data.get("input_path"),
        gtin_column=data.get("gtin_column"),
        pharmacode_column=data.get("pharmacode_column"),
        output_directory=data.get("output_directory"),
    )


def _env_column(environ: Mapping[str, str], name: str) -> int | None:
    raw = environ.get(name, "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from e
    if value < 0:
        raise ConfigError(f"{name} must be >= 0, got {value}")
    return value


def load_env_config(environ: Mapping[str, str] | None = None) -> HarvesterConfig:
    """Build a config layer from HARVESTER_* environment variables."""
    if environ is None:
        environ = os.environ
    return HarvesterConfig(
        input_path=environ.get(ENV_INPUT_PATH) or None,
        gtin_column=_env_column(environ, ENV_GTIN_COLUMN),
        pharmacode_column=_env_column(environ, ENV_PHARMACODE_COLUMN),
        output_directory=environ.get(ENV_OUTPUT_DIRECTORY) or None,
    )


def resolve_config(
    cli: HarvesterConfig,
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> HarvesterConfig:
    """Merge config file, environment and command line values.

    An explicitly given ``config_path`` must exist. Without one the default
    ``config/harvester.yml`` is read only when present.
    """
    if config_path is not None:
        base = load_config(config_path)
    elif DEFAULT_CONFIG_PATH.exists():
        base = load_config(DEFAULT_CONFIG_PATH)
    else:
        base = HarvesterConfig()
    return base.overlay(load_env_config(environ)).overlay(cli)
