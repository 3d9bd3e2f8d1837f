"""
Jinja2 rendering service.

One environment per bundle folder. Undefined names are errors (StrictUndefined)
so a typo in a template fails the target instead of silently producing empty
text. Filters exposing the naming conversions are registered on every
environment:

    {{ entity.name | snake_case }}   {{ attribute.name | pascal_case }}
"""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from ..errors import GeneratorError, RenderError
from ..naming import to_camel_case, to_pascal_case, to_screaming_snake_case, to_snake_case


def make_environment(templates_dir: Path) -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(templates_dir)),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["snake_case"] = to_snake_case
    env.filters["screaming_snake_case"] = to_screaming_snake_case
    env.filters["camel_case"] = to_camel_case
    env.filters["pascal_case"] = to_pascal_case
    return env


class TemplateRenderer:
    """`render(template, bindings) -> text` over one templates folder."""

    def __init__(self, templates_dir: Path):
        self.templates_dir = Path(templates_dir)
        self.env = make_environment(self.templates_dir)

    def render(self, template: str, bindings: dict) -> str:
        try:
            return self.env.get_template(template).render(**bindings)
        except GeneratorError:
            # raised by a context helper (sql, generator, ...): keep it as is
            raise
        except TemplateError as exc:
            raise RenderError(f"Template '{template}': {exc}", template=template) from exc
        except Exception as exc:
            raise RenderError(
                f"Template '{template}': {type(exc).__name__}: {exc}", template=template
            ) from exc
