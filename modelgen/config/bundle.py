"""
Template bundles.

A bundle is a folder under the project's templates folder holding the
templates and a `templates.yaml` listing the target definitions:

    targets:
      - name: Entity class
        file: ${BEANNAME}.java
        folder: ${SRC}/${ENTITY_PKG}
        template: entity.java.j2
        scope: "*"            # "*" every selected entity, an entity name, or omitted

A definition without scope is generated once, with no entity bound.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import ConfigurationError
from .project import ProjectConfig, read_yaml_file

BUNDLE_FILE_NAME = "templates.yaml"
WILDCARD = "*"


@dataclass(frozen=True)
class TargetDefinition:
    name: str
    file: str
    folder: str
    template: str
    scope: str = ""

    @property
    def is_wildcard(self) -> bool:
        return self.scope.strip() == WILDCARD

    @property
    def scope_entity_name(self) -> str | None:
        """The entity this definition is restricted to, if any."""
        scope = self.scope.strip()
        if scope and scope != WILDCARD:
            return scope
        return None


def _definition(raw, index: int, source) -> TargetDefinition:
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Target #{index} in '{source}' must be a mapping")
    missing = [k for k in ("name", "file", "template") if not str(raw.get(k) or "").strip()]
    if missing:
        raise ConfigurationError(
            f"Target #{index} in '{source}' is missing: {', '.join(missing)}"
        )
    return TargetDefinition(
        name=str(raw["name"]).strip(),
        file=str(raw["file"]).strip(),
        folder=str(raw.get("folder") or "").strip(),
        template=str(raw["template"]).strip(),
        scope=str(raw.get("scope") or "").strip(),
    )


def load_bundle(config: ProjectConfig, bundle_name: str) -> list[TargetDefinition]:
    """Read the target definitions of `bundle_name`, in declaration order."""
    if not bundle_name or not bundle_name.strip():
        raise ConfigurationError("Bundle name undefined")
    source = config.bundle_folder(bundle_name.strip()) / BUNDLE_FILE_NAME
    data = read_yaml_file(source, "Bundle file")
    targets = data.get("targets") or []
    if not isinstance(targets, list):
        raise ConfigurationError(f"'targets' must be a list in '{source}'")
    return [_definition(raw, i, source) for i, raw in enumerate(targets, start=1)]
