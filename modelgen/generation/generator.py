"""
Generation orchestrator.

`Generator.generate_target()` renders one target over its entity scope:

- a target bound to an entity is rendered once for that entity;
- an unbound wildcard target ("*") is rendered once per selected entity, in
  the given order, its definition re-resolved for each entity;
- an unbound target whose scope names an entity is rendered for that entity;
- any other target is rendered once with no entity.

Each render builds the template context, renders the whole text, writes it to
the destination and records the target in the run's ledger. The first error
aborts the render and the rest of the scope and propagates to the caller;
nothing is retried. Templates may call `generator.generate(...)` (see
`embedded.py`) which re-enters `generate_target()` with the same ledger.
"""

from __future__ import annotations

import os
import stat
import tempfile
from datetime import date
from pathlib import Path
from typing import Iterator, Optional, Sequence

from ..config.project import ProjectConfig
from ..context import CsharpHelper, HelperFactory, SqlHelper
from ..errors import EmbeddedGenerationCycleError, EntityNotFoundError, GenerationIOError
from ..gen_logging import depth, get_logger
from ..model import Entity, Model
from .embedded import EmbeddedGenerator
from .ledger import Ledger
from .rendering import TemplateRenderer
from .target import Target, build_target

logger = get_logger(__name__)


def _output_mode(destination: Path) -> int:
    """Mode of the file being replaced, else what a plain write would get under the umask."""
    if destination.is_file():
        return stat.S_IMODE(destination.stat().st_mode)
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_output(destination: Path, text: str) -> None:
    """
    Write `text` to `destination` (UTF-8) through a temporary file in the same
    folder, so a failed write never leaves a partial file behind.
    """
    tmp_name = None
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=destination.parent, prefix=f".{destination.name}.", suffix=".tmp")
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(text)
        os.chmod(tmp_name, _output_mode(destination))
        os.replace(tmp_name, destination)
        tmp_name = None
    except OSError as exc:
        raise GenerationIOError(f"Cannot write '{destination}': {exc}", destination=destination) from exc
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.remove(tmp_name)


def _require_entity(model: Model, name: str) -> Entity:
    entity = model.get_entity_by_class_name(name)
    if entity is None:
        raise EntityNotFoundError(f"Entity '{name}' not found in model '{model.name}'", entity_name=name)
    return entity


class Generator:
    """Renders targets of one bundle for one project configuration."""

    def __init__(self, config: ProjectConfig, bundle_name: str, renderer: Optional[TemplateRenderer] = None):
        self.config = config
        self.bundle_name = bundle_name
        self.renderer = renderer or TemplateRenderer(config.bundle_folder(bundle_name))

    def generate_target(self, target: Target, model: Model, selected_entity_names: Sequence[str],
                        ledger: Optional[Ledger] = None, parents: tuple = ()) -> Ledger:
        """
        Render `target` over its entity scope.

        Args:
            target: Target to render (bound to an entity or not).
            model: The run's model.
            selected_entity_names: Entities a wildcard target iterates over, in order.
            ledger: The run's ledger; a new one is created when None.
            parents: Targets currently being rendered above this call
                (set by embedded generation).

        Returns:
            The ledger, holding the targets generated so far in the run.
        """
        if ledger is None:
            ledger = Ledger()
        selected = list(selected_entity_names or [])
        for resolved, entity in self._scope(target, model, selected):
            self._generate_one(resolved, entity, model, selected, ledger, parents)
        return ledger

    def _scope(self, target: Target, model: Model, selected: list) -> Iterator[tuple]:
        definition = target.definition
        if target.is_bound:
            yield target, _require_entity(model, target.entity_name)
        elif definition.is_wildcard:
            for name in selected:
                entity = _require_entity(model, name)
                yield build_target(self.config, definition, self.bundle_name, model, entity), entity
        elif definition.scope_entity_name:
            entity = _require_entity(model, definition.scope_entity_name)
            yield build_target(self.config, definition, self.bundle_name, model, entity), entity
        else:
            yield target, None

    def _check_reentry(self, target: Target, parents: tuple) -> None:
        if any(parent.destination == target.destination for parent in parents):
            chain = " -> ".join(str(p.destination.name) for p in parents + (target,))
            raise EmbeddedGenerationCycleError(
                f"Embedded generation cycle on '{target.destination}' ({chain})"
            )
        if len(parents) > self.config.max_embedded_depth:
            raise EmbeddedGenerationCycleError(
                f"Embedded generation deeper than {self.config.max_embedded_depth} levels "
                f"while generating '{target.destination}'"
            )

    def _generate_one(self, target: Target, entity: Optional[Entity], model: Model,
                      selected: list, ledger: Ledger, parents: tuple) -> None:
        self._check_reentry(target, parents)
        level = len(parents)
        logger.debug(f"[RENDER] {target}", extra=depth(level))

        slot = ledger.reserve(target)
        try:
            context = self.build_context(target, entity, model, selected, ledger, parents + (target,))
            text = self.renderer.render(target.template, context)
            write_output(target.destination, text)
        except Exception:
            ledger.abandon(slot)
            raise
        ledger.commit(slot)
        logger.info(f"[OK] {target.destination}", extra=depth(level))

    def build_context(self, target: Target, entity: Optional[Entity], model: Model,
                      selected: list, ledger: Ledger, chain: tuple) -> dict:
        """Names published to the template."""
        if self.config.embedded_generation:
            bridge = EmbeddedGenerator(self, model, selected, ledger, chain)
        else:
            bridge = EmbeddedGenerator.disabled()

        context = {
            "generator": bridge,
            "target": target,
            "entity": entity,
            "attributes": entity.attributes if entity is not None else (),
            "model": model,
            "selected_entities": list(selected),
            "bundle_name": self.bundle_name,
            "project": self.config.all_variables(),
            "csharp": CsharpHelper(),
            "factory": HelperFactory(),
            "today": date.today().isoformat(),
        }
        if self.config.database:
            context["sql"] = SqlHelper(self.config.database, self.config.database_config_file)
        return context
