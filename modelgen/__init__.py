"""
modelgen - template-driven source generation from an entity model.

Entities are read from a `.model` file, target definitions from a template
bundle, and every target is rendered with Jinja2 against a context exposing
the model plus SQL / C# helper objects.
"""

__version__ = "0.4.0"
GENERATOR_NAME = "modelgen embedded generator"
