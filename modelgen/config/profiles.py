"""
Dialect profile loading.

A dialect profile is a flat key/value mapping describing one target database:

    conv.tableName:     snake_case
    conv.columnName:    snake_case
    type.string:        varchar(%s)
    type.int:           integer
    type.int.autoincr:  serial

Standard profiles ship with the package under `modelgen/target_db/` and are
selected by database name (`PostgreSQL` -> `target_db/postgresql.yaml`).
A project may point to its own profile file instead. Nested YAML mappings are
flattened with dots, so `type: {int: integer}` is the same as `type.int: integer`.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

import yaml

from ..errors import ConfigurationError
from ..gen_logging import get_logger
from ..naming import NamingStyle

logger = get_logger(__name__)

STANDARD_PROFILES_DIR = Path(__file__).resolve().parent.parent / "target_db"

CONV_TABLE_NAME = "conv.tableName"
CONV_COLUMN_NAME = "conv.columnName"


@dataclass(frozen=True)
class DialectProfile:
    """Immutable, validated dialect configuration."""

    name: str
    source: str
    entries: Mapping[str, str]
    table_style: NamingStyle
    column_style: NamingStyle

    def find(self, key: str) -> Optional[str]:
        """Return the entry for `key`, or None when absent."""
        return self.entries.get(key)

    def get(self, key: str) -> str:
        """Return the entry for `key`; a missing entry is a configuration error."""
        value = self.entries.get(key)
        if value is None:
            raise ConfigurationError(
                f"Cannot get config value for key '{key}' (profile '{self.source}')"
            )
        return value


def _flatten(data: Mapping[str, Any], prefix: str = "") -> dict[str, str]:
    flat: dict[str, str] = {}
    for key, value in data.items():
        full_key = f"{prefix}{key}"
        if isinstance(value, Mapping):
            flat.update(_flatten(value, prefix=f"{full_key}."))
        elif value is not None:
            flat[full_key] = str(value).strip()
    return flat


def _naming_style(entries: Mapping[str, str], key: str, source: str) -> NamingStyle:
    value = entries.get(key)
    if value is None:
        raise ConfigurationError(f"Cannot get config value for key '{key}' (profile '{source}')")
    try:
        return NamingStyle.parse(value)
    except ValueError as exc:
        raise ConfigurationError(f"{exc} for key '{key}' (profile '{source}')") from exc


def profile_from_mapping(name: str, data: Mapping[str, Any], source: str = "<memory>") -> DialectProfile:
    """Build and validate a profile from an in-memory mapping."""
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"Database config '{source}' must contain a mapping")
    entries = _flatten(data)
    return DialectProfile(
        name=name,
        source=source,
        entries=MappingProxyType(entries),
        table_style=_naming_style(entries, CONV_TABLE_NAME, source),
        column_style=_naming_style(entries, CONV_COLUMN_NAME, source),
    )


def standard_profile_path(database_name: str) -> Path:
    return STANDARD_PROFILES_DIR / f"{database_name.strip().lower()}.yaml"


def load_profile(database_name: str, config_file: str | Path | None = None) -> DialectProfile:
    """
    Load the profile of `database_name`.

    Args:
        database_name: Target database name (e.g. "PostgreSQL").
        config_file: Explicit profile file; the standard profile is used when None.

    Raises:
        ConfigurationError: blank name, missing/unreadable file, invalid content.
    """
    if not database_name or not database_name.strip():
        raise ConfigurationError("Target database name undefined, cannot create sql helper")

    path = Path(config_file) if config_file else standard_profile_path(database_name)
    if not path.is_file():
        raise ConfigurationError(f"Database config file '{path}' not found")

    try:
        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Cannot load database config file '{path}': {exc}") from exc

    logger.debug(f"[PROFILE] {database_name} <- {path}")
    return profile_from_mapping(database_name.strip(), data, source=str(path))
