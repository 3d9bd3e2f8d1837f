"""Target resolution, rendering and the generation orchestrator."""

from .embedded import EmbeddedGenerator
from .generator import Generator, write_output
from .ledger import Ledger
from .rendering import TemplateRenderer
from .target import Target, build_target
from .task import GenerationResult, GenerationTask

__all__ = [
    "EmbeddedGenerator",
    "GenerationResult",
    "GenerationTask",
    "Generator",
    "Ledger",
    "Target",
    "TemplateRenderer",
    "build_target",
    "write_output",
]
