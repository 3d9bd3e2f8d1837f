"""
Build driver: generate every target of a bundle.

The driver decides what happens after a failed target. By default the first
error propagates; with `continue_on_error` failures are collected and the
remaining definitions are still generated. A failed definition never retries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from ..config.bundle import TargetDefinition, load_bundle
from ..config.project import ProjectConfig
from ..errors import GeneratorError
from ..gen_logging import depth, get_logger
from ..model import Model
from .generator import Generator
from .ledger import Ledger
from .target import build_target

logger = get_logger(__name__)


@dataclass
class TargetFailure:
    definition: TargetDefinition
    error: GeneratorError


@dataclass
class GenerationResult:
    ledger: Ledger
    failures: list[TargetFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class GenerationTask:

    def __init__(self, config: ProjectConfig, bundle_name: str, model: Model,
                 selected_entity_names: Optional[Sequence[str]] = None,
                 definitions: Optional[Sequence[TargetDefinition]] = None):
        self.config = config
        self.bundle_name = bundle_name
        self.model = model
        if selected_entity_names is None:
            selected_entity_names = model.entity_names
        self.selected_entity_names = list(selected_entity_names)
        if definitions is None:
            definitions = load_bundle(config, bundle_name)
        self.definitions = list(definitions)

    def run(self, continue_on_error: bool = False) -> GenerationResult:
        generator = Generator(self.config, self.bundle_name)
        result = GenerationResult(ledger=Ledger())

        logger.info(f"[GENERATE] bundle '{self.bundle_name}': {len(self.definitions)} target(s), "
                    f"{len(self.selected_entity_names)} entity(ies)")
        for definition in self.definitions:
            logger.info(f"\n--- {definition.name} ({definition.template}) ---")
            target = build_target(self.config, definition, self.bundle_name, self.model, None)
            try:
                generator.generate_target(target, self.model, self.selected_entity_names, result.ledger)
            except GeneratorError as exc:
                if not continue_on_error:
                    raise
                logger.error(f"[ERROR] {definition.name}: {exc}", extra=depth(1))
                result.failures.append(TargetFailure(definition, exc))

        logger.info(f"\n[DONE] {len(result.ledger)} file(s) generated, {len(result.failures)} failure(s)")
        return result
