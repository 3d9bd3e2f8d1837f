"""
Logging for the modelgen generation pipeline.

Usage in modules:
    from modelgen.gen_logging import get_logger
    logger = get_logger(__name__)
    logger.info(f"[OK] {target.destination}", extra=depth(len(parents)))

The root logger name is "modelgen". Log levels are controlled by the CLI.
Records may carry the embedded generation depth of the target they concern;
the formatter indents them by that depth, so nested generations read as a
tree:

    [OK] out/EmployeeJobs.java
      [OK] out/EmployeeJobsKey.java
"""

import logging
import sys

_LOGGER_NAME = "modelgen"
_DEPTH_INDENT = "  "


def get_logger(name: str = None) -> logging.Logger:
    """
    Return a child logger under the modelgen hierarchy.

    Args:
        name: Module __name__, or None for the root modelgen logger.
    """
    if name is None or name == _LOGGER_NAME:
        return logging.getLogger(_LOGGER_NAME)
    # "modelgen.generation.generator" -> "modelgen.generator"
    return logging.getLogger(f"{_LOGGER_NAME}.{name.rsplit('.', 1)[-1]}")


def depth(level: int) -> dict:
    """`extra` mapping tagging a record with an embedded generation depth."""
    return {"depth": level}


def configure_gen_logging(verbose: bool = False, quiet: bool = False) -> None:
    """
    Configure the modelgen logger hierarchy.

    Levels:
        --verbose / -v  -> DEBUG   (render and target resolution detail)
        (default)       -> INFO    (one line per generated file + summary)
        --quiet / -q    -> WARNING (failed targets only)

    Calling it again only changes the levels.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    root_logger = logging.getLogger(_LOGGER_NAME)
    root_logger.setLevel(level)

    if root_logger.handlers:
        for handler in root_logger.handlers:
            handler.setLevel(level)
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(GenFormatter())
    root_logger.addHandler(handler)
    root_logger.propagate = False


class GenFormatter(logging.Formatter):
    """
    Emits the message indented by the record's generation depth. Warnings and
    errors that do not start with a tag get their level as tag.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.levelno >= logging.WARNING and not message.lstrip().startswith("["):
            message = f"[{record.levelname}] {message}"
        indent = _DEPTH_INDENT * getattr(record, "depth", 0)
        return "\n".join(indent + line if line else line for line in message.split("\n"))
