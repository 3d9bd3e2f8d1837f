"""
Error taxonomy for the generation pipeline.

Every error raised by modelgen derives from GeneratorError so a build driver
can decide, with a single except clause, whether to continue with the
remaining targets. None of these errors is ever retried.
"""


class GeneratorError(Exception):
    """Base class of all generation errors."""


class InvalidArgumentError(GeneratorError, ValueError):
    """A required parameter is None or blank."""


class EntityNotFoundError(GeneratorError, LookupError):
    """A referenced entity does not exist in the model."""

    def __init__(self, message: str, entity_name: str = None):
        super().__init__(message)
        self.entity_name = entity_name


class ConfigurationError(GeneratorError):
    """Missing/invalid configuration entry, unknown naming style, bad number."""


class EmbeddedGenerationCycleError(ConfigurationError):
    """An embedded generation re-enters a target already being rendered."""


class RenderError(GeneratorError):
    """The template engine failed. The original exception is the __cause__."""

    def __init__(self, message: str, template: str = None):
        super().__init__(message)
        self.template = template


class GenerationIOError(GeneratorError, OSError):
    """The rendered text could not be written to its destination."""

    def __init__(self, message: str, destination=None):
        super().__init__(message)
        self.destination = destination
