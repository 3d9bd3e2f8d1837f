"""
Metamodel and model builders for the entity model language.

The grammar lives in `grammar/entities.tx`. Parsing yields a textX tree which
is checked by the model processor (unique names, known annotations, well
formed annotation values) and then converted to the immutable `Model` used by
the generator.
"""

import re
from os.path import join, dirname, abspath
from pathlib import Path
from textx import (
    metamodel_from_file,
    get_children_of_type,
    get_location,
    TextXSemanticError,
)

from modelgen.model import Attribute, Entity, Model


# ------------------------------------------------------------------------------
# Constants
THIS_DIR = dirname(abspath(__file__))
GRAMMAR_DIR = join(THIS_DIR, "grammar")

# annotation name -> Attribute field
FLAG_ANNOTATIONS = {
    "Id": "key",
    "NotNull": "not_null",
    "DbNotNull": "database_not_null",
    "AutoIncremented": "auto_incremented",
    "LongText": "long_text",
}
VALUE_ANNOTATIONS = {
    "SizeMax": "max_length",
    "DbSize": "database_size",
    "DbType": "database_type",
    "DbName": "database_name",
    "DefaultValue": "default_value",
    "DbDefaultValue": "database_default_value",
}

_INTEGER = re.compile(r"^\d+$")
_DECIMAL = re.compile(r"^\d+(\.\d+)?$")


# ------------------------------------------------------------------------------
# Public model builders

def build_model(model_path: str) -> Model:
    """Parse, validate and convert a `.model` file."""
    tx_model = get_metamodel().model_from_file(str(model_path))
    return _to_model(tx_model, Path(model_path).stem)


def build_model_str(model_str: str, name: str = "model") -> Model:
    """Parse, validate and convert a model given as a string."""
    tx_model = get_metamodel().model_from_str(model_str)
    return _to_model(tx_model, name)


# ------------------------------------------------------------------------------
# Model-wide validation (runs after all objects are constructed)

def verify_unique_names(model):
    seen = set()
    for entity in get_children_of_type("Entity", model):
        if entity.name in seen:
            raise TextXSemanticError(
                f"Entity with name '{entity.name}' already exists.",
                **get_location(entity),
            )
        seen.add(entity.name)

        attr_names = set()
        for attr in entity.attributes:
            if attr.name in attr_names:
                raise TextXSemanticError(
                    f"Entity '{entity.name}': attribute '{attr.name}' already exists.",
                    **get_location(attr),
                )
            attr_names.add(attr.name)


def verify_annotations(model):
    for attr in get_children_of_type("Attribute", model):
        seen = set()
        for ann in attr.annotations:
            where = f"Attribute '{attr.name}': @{ann.name}"
            if ann.name in seen:
                raise TextXSemanticError(f"{where} is declared twice.", **get_location(ann))
            seen.add(ann.name)

            has_value = ann.value not in (None, "")
            if ann.name in FLAG_ANNOTATIONS:
                if has_value:
                    raise TextXSemanticError(f"{where} does not take a value.", **get_location(ann))
            elif ann.name in VALUE_ANNOTATIONS:
                if not has_value:
                    raise TextXSemanticError(f"{where} requires a value.", **get_location(ann))
                _verify_annotation_value(attr, ann, where)
            else:
                raise TextXSemanticError(f"{where} is not a known annotation.", **get_location(ann))


def _verify_annotation_value(attr, ann, where):
    value = str(ann.value)
    if ann.name == "SizeMax" and not _INTEGER.match(value):
        raise TextXSemanticError(f"{where} expects an integer, got '{value}'.", **get_location(ann))
    if ann.name == "DbSize" and not _DECIMAL.match(value):
        raise TextXSemanticError(
            f"{where} expects a size or precision (e.g. 45 or 10.2), got '{value}'.",
            **get_location(ann),
        )
    if ann.name in ("DbType", "DbName") and not value.strip():
        raise TextXSemanticError(f"{where} cannot be blank.", **get_location(ann))


def model_processor(model, metamodel=None):
    """Cross-object validation. Order matters: names first, then annotations."""
    verify_unique_names(model)
    verify_annotations(model)


# ------------------------------------------------------------------------------
# Conversion to the generator model

def _to_attribute(tx_attr) -> Attribute:
    fields = {}
    for ann in tx_attr.annotations:
        if ann.name in FLAG_ANNOTATIONS:
            fields[FLAG_ANNOTATIONS[ann.name]] = True
        else:
            fields[VALUE_ANNOTATIONS[ann.name]] = str(ann.value)
    if "max_length" in fields:
        fields["max_length"] = int(fields["max_length"])
    return Attribute(name=tx_attr.name, neutral_type=tx_attr.type, **fields)


def _to_model(tx_model, name: str) -> Model:
    entities = tuple(
        Entity(name=e.name, attributes=tuple(_to_attribute(a) for a in e.attributes))
        for e in tx_model.entities
    )
    return Model(name=name, entities=entities)


# ------------------------------------------------------------------------------
# Metamodel

_METAMODEL = None


def get_metamodel():
    """Return the (cached) entity-language metamodel."""
    global _METAMODEL
    if _METAMODEL is None:
        mm = metamodel_from_file(join(GRAMMAR_DIR, "entities.tx"), autokwd=True)
        mm.register_model_processor(model_processor)
        _METAMODEL = mm
    return _METAMODEL
