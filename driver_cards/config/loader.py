from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..excel.aliases import DEFAULT_ALIASES, FieldAliasTable
from ..models.field_key import MANDATORY_FIELDS, FieldKey

"""Config loader.

Responsibilities:
- Load the YAML config (config/cards.yml unless told otherwise)
- Validate it against the bundled JSON schema
- Apply defaults and build the alias table / required field list
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/cards.yml")
CONFIG_ENV_VAR = "DRIVER_CARDS_CONFIG"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class AppConfig:
    storage_path: Path
    logs_dir: Path
    required_fields: tuple[FieldKey, ...]
    aliases: FieldAliasTable


def default_config() -> AppConfig:
    return AppConfig(
        storage_path=Path("./data/saved_cards.json"),
        logs_dir=Path("./logs"),
        required_fields=MANDATORY_FIELDS,
        aliases=DEFAULT_ALIASES,
    )


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the bundled JSON schema.

    Raises:
        ConfigError: schema file missing / not JSON, or data violating it
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


def resolve_config_path(explicit: Path | None = None) -> tuple[Path, bool]:
    """Pick the config path: --config, then $DRIVER_CARDS_CONFIG, then the default.

    Returns the path and whether it was explicitly requested (a missing
    explicit file is an error, a missing default file is not).
    """
    if explicit is not None:
        return Path(explicit), True
    env = os.getenv(CONFIG_ENV_VAR)
    if env:
        return Path(env), True
    return DEFAULT_CONFIG_PATH, False


def load_config(path: Path | None = None) -> AppConfig:
    cfg_path, required = resolve_config_path(path)
    if not cfg_path.exists():
        if required:
            raise ConfigError(f"config file not found: {cfg_path}")
        return default_config()
    try:
        data = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("config validation failed: top level must be a mapping")

    _validate_config_schema(data)

    defaults = default_config()
    required_fields = list(MANDATORY_FIELDS)
    for value in data.get("required_fields", []):
        key = FieldKey(value)
        if key not in required_fields:
            required_fields.append(key)

    aliases = defaults.aliases
    extra = data.get("aliases")
    if extra:
        aliases = aliases.with_extra_aliases({FieldKey(k): v for k, v in extra.items()})

    return AppConfig(
        storage_path=Path(data.get("storage_path", defaults.storage_path)),
        logs_dir=Path(data.get("logs_dir", defaults.logs_dir)),
        required_fields=tuple(required_fields),
        aliases=aliases,
    )
