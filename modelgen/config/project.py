"""
Project configuration (`modelgen.yaml`).

    destination: generated        # where generated files are written
    templates: templates          # folder holding the template bundles
    database: PostgreSQL          # optional, publishes `sql` in templates
    database_config_file: null    # optional explicit dialect profile
    embedded_generation: true
    max_embedded_depth: 8
    variables:
      SRC: src/main/java
      ROOT_PKG: org.demo

Relative paths are resolved against the project directory.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

import yaml

from ..errors import ConfigurationError

CONFIG_FILE_NAME = "modelgen.yaml"
DEFAULT_MAX_EMBEDDED_DEPTH = 8

_VARIABLE_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class ProjectConfig:
    project_dir: Path
    destination_folder: Path
    templates_folder: Path
    database: Optional[str] = None
    database_config_file: Optional[Path] = None
    embedded_generation: bool = True
    max_embedded_depth: int = DEFAULT_MAX_EMBEDDED_DEPTH
    variables: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def bundle_folder(self, bundle_name: str) -> Path:
        return self.templates_folder / bundle_name

    def all_variables(self) -> dict[str, str]:
        return dict(self.variables)


def read_yaml_file(path: Path, what: str) -> dict:
    """Load a YAML mapping, turning every failure into a ConfigurationError."""
    if not path.is_file():
        raise ConfigurationError(f"{what} '{path}' not found")
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Cannot load {what} '{path}': {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{what} '{path}' must contain a mapping")
    return data


def _required_str(data: Mapping[str, Any], key: str, source: Path) -> str:
    value = data.get(key)
    if value is None or not str(value).strip():
        raise ConfigurationError(f"Missing required key '{key}' in '{source}'")
    return str(value).strip()


def _variables(data: Mapping[str, Any], source: Path) -> dict[str, str]:
    raw = data.get("variables") or {}
    if not isinstance(raw, dict):
        raise ConfigurationError(f"'variables' must be a mapping in '{source}'")
    variables = {}
    for name, value in raw.items():
        if not _VARIABLE_NAME.match(str(name)):
            raise ConfigurationError(f"Invalid variable name '{name}' in '{source}'")
        variables[str(name)] = "" if value is None else str(value)
    return variables


def load_project_config(project_dir: str | Path, file_name: str = CONFIG_FILE_NAME) -> ProjectConfig:
    """Read and validate `<project_dir>/modelgen.yaml`."""
    project_dir = Path(project_dir).resolve()
    source = project_dir / file_name
    data = read_yaml_file(source, "Project config file")

    embedded = data.get("embedded_generation", True)
    if not isinstance(embedded, bool):
        raise ConfigurationError(f"'embedded_generation' must be true or false in '{source}'")

    depth = data.get("max_embedded_depth", DEFAULT_MAX_EMBEDDED_DEPTH)
    if isinstance(depth, bool) or not isinstance(depth, int) or depth < 1:
        raise ConfigurationError(f"'max_embedded_depth' must be a positive integer in '{source}', got {depth!r}")

    database = data.get("database")
    db_config = data.get("database_config_file")

    return ProjectConfig(
        project_dir=project_dir,
        destination_folder=project_dir / _required_str(data, "destination", source),
        templates_folder=project_dir / _required_str(data, "templates", source),
        database=str(database).strip() if database else None,
        database_config_file=project_dir / str(db_config) if db_config else None,
        embedded_generation=embedded,
        max_embedded_depth=depth,
        variables=MappingProxyType(_variables(data, source)),
    )
