"""
Target resolution.

A Target is a TargetDefinition made concrete for one run: `${VAR}` variables
of its file and folder patterns are replaced and it is optionally bound to an
entity. Variables are the project variables plus, when an entity is bound:

    BEANNAME      Employee
    BEANNAME_LC   employee
    BEANNAME_UC   EMPLOYEE

and MODEL (the model name). In folder patterns, `*_PKG` variables are
expanded as paths: `${ENTITY_PKG}` = `org.demo.bean` gives `org/demo/bean`.
Unknown variables are left as written.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from ..config.bundle import TargetDefinition
from ..config.project import ProjectConfig
from ..model import Entity, Model

_VARIABLE = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


@dataclass(frozen=True)
class Target:
    definition: TargetDefinition
    bundle_name: str
    file: str
    folder: str
    destination: Path
    entity_name: Optional[str] = None

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def template(self) -> str:
        return self.definition.template

    @property
    def is_bound(self) -> bool:
        return self.entity_name is not None

    def __str__(self):
        bound = f" [{self.entity_name}]" if self.entity_name else ""
        return f"{self.name}{bound}: {self.template} -> {self.destination}"


def replace_variables(text: str, variables: Mapping[str, str]) -> str:
    def _sub(match):
        name = match.group(1)
        return variables[name] if name in variables else match.group(0)
    return _VARIABLE.sub(_sub, text)


def entity_variables(entity: Entity | None) -> dict[str, str]:
    if entity is None:
        return {}
    return {
        "BEANNAME": entity.name,
        "BEANNAME_LC": entity.name.lower(),
        "BEANNAME_UC": entity.name.upper(),
    }


def _folder_variables(variables: Mapping[str, str]) -> dict[str, str]:
    return {
        name: value.replace(".", "/") if name.endswith("_PKG") else value
        for name, value in variables.items()
    }


def build_target(config: ProjectConfig, definition: TargetDefinition, bundle_name: str,
                 model: Model, entity: Entity | None = None) -> Target:
    """Resolve `definition` for `entity` (None for an entity-agnostic target)."""
    variables = config.all_variables()
    variables["MODEL"] = model.name if model is not None else ""
    variables.update(entity_variables(entity))

    file = replace_variables(definition.file, variables)
    folder = replace_variables(definition.folder, _folder_variables(variables)).strip("/")
    destination = config.destination_folder / folder / file if folder else config.destination_folder / file

    return Target(
        definition=definition,
        bundle_name=bundle_name,
        file=file,
        folder=folder,
        destination=destination,
        entity_name=entity.name if entity is not None else None,
    )
