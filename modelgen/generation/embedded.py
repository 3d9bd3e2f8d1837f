"""
Embedded generator, published in the template context as `generator`.

A template can generate another target while it is being rendered:

    {% if entity.key_attributes | length > 1 %}
    {{ generator.generate(target.entity_name, entity.name ~ "Key.java", target.folder, "entity_key.java.j2") }}
    {% endif %}

The call is synchronous: the additional target is rendered, written and
recorded in the run's ledger before control returns to the calling template.
It uses the same project configuration, bundle, ledger and entity selection as
the enclosing run.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

from .. import GENERATOR_NAME, __version__
from ..config.bundle import TargetDefinition
from ..errors import ConfigurationError, EntityNotFoundError, InvalidArgumentError
from ..gen_logging import depth, get_logger
from .target import build_target

if TYPE_CHECKING:
    from ..model import Model
    from .generator import Generator
    from .ledger import Ledger

logger = get_logger(__name__)

DYNAMIC_TARGET_NAME = "Dynamic target"
_ERR = "Error in embedded generator"


class EmbeddedGenerator:

    def __init__(self, generator: Optional["Generator"] = None, model: Optional["Model"] = None,
                 selected_entity_names: Optional[Sequence[str]] = None,
                 ledger: Optional["Ledger"] = None, parents: tuple = ()):
        self._generator = generator
        self._model = model
        self._selected = list(selected_entity_names or [])
        self._ledger = ledger
        self._parents = tuple(parents)
        self._can_generate = generator is not None and model is not None and ledger is not None

    @classmethod
    def disabled(cls) -> "EmbeddedGenerator":
        """An embedded generator that refuses to generate anything."""
        return cls()

    @property
    def name(self) -> str:
        return GENERATOR_NAME

    @property
    def version(self) -> str:
        return __version__

    @property
    def can_generate(self) -> bool:
        return self._can_generate

    def generate(self, entity_class_name: str, output_file: str, output_folder: str,
                 template_file: str) -> str:
        """
        Generate another target with the given template.

        Args:
            entity_class_name: Entity bound to the new target.
            output_file: File name to generate.
            output_folder: Folder, relative to the destination folder.
            template_file: Template of the current bundle.

        Returns:
            "" so the call renders nothing in the calling template.
        """
        if not self._can_generate:
            raise ConfigurationError(
                f"{_ERR} (embedded generator is not able to generate, environment is not available)"
            )
        for label, value in (
            ("entity class name", entity_class_name),
            ("output file", output_file),
            ("output folder", output_folder),
            ("template file", template_file),
        ):
            if value is None or not str(value).strip():
                raise InvalidArgumentError(f"{_ERR} ({label} is null or blank)")

        entity = self._model.get_entity_by_class_name(entity_class_name.strip())
        if entity is None:
            raise EntityNotFoundError(
                f"{_ERR} (entity '{entity_class_name}' not found in model)",
                entity_name=entity_class_name,
            )

        definition = TargetDefinition(
            name=DYNAMIC_TARGET_NAME,
            file=output_file,
            folder=output_folder,
            template=template_file,
            scope="",
        )
        generator = self._generator
        target = build_target(generator.config, definition, generator.bundle_name, self._model, entity)
        logger.debug(f"[EMBEDDED] {target}", extra=depth(len(self._parents)))

        generator.generate_target(target, self._model, self._selected, self._ledger, parents=self._parents)
        return ""
