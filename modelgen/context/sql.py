"""
SQL helper exposed to templates as `sql`.

Converts model names and neutral types to the conventions of one target
database, as described by its dialect profile:

    {{ sql.table_name(entity) }}          EmployeeJobs -> employee_jobs
    {{ sql.column_name(attribute) }}      cityCode     -> city_code
    {{ sql.column_type(attribute) }}      string       -> varchar(40)
    {{ sql.column_constraints(attribute) }}              NOT NULL DEFAULT 'ACTIVE'

Type templates may hold one placeholder family:

    %S  size, mandatory          varchar(%S)
    %s  size, optional           varchar(%s)  -> varchar when no size
    %P  precision, mandatory     numeric(%P)
    %p  precision, optional      numeric(%p)  -> numeric when no precision

The size comes from the attribute's database size, else its max length.
The precision comes from the database size, read as a decimal ("8" or "10.2").
Every error raised here is a ConfigurationError.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from enum import Enum
from pathlib import Path
from typing import Optional

from ..config.profiles import DialectProfile, load_profile
from ..errors import ConfigurationError
from ..model import Attribute, Entity

SIZE_MANDATORY = "%S"
SIZE_OPTIONAL = "%s"
PRECISION_MANDATORY = "%P"
PRECISION_OPTIONAL = "%p"


class IdentifierRole(str, Enum):
    TABLE = "table"
    COLUMN = "column"


def _to_decimal(value) -> Decimal:
    text = str(value).strip()
    try:
        number = Decimal(text)
    except InvalidOperation:
        raise ConfigurationError(f"invalid attribute size/length '{text}'") from None
    if not number.is_finite():
        raise ConfigurationError(f"invalid attribute size/length '{text}'")
    return number


def _has_text(value) -> bool:
    return value is not None and str(value).strip() != ""


def attribute_size(attribute: Attribute) -> Optional[int]:
    """Database size first (integer part of "8.2"), then the generic max length."""
    if _has_text(attribute.database_size):
        return int(_to_decimal(attribute.database_size))
    if _has_text(attribute.max_length):
        return int(_to_decimal(attribute.max_length))
    return None


def attribute_precision(attribute: Attribute) -> Optional[Decimal]:
    if _has_text(attribute.database_size):
        return _to_decimal(attribute.database_size)
    return None


def _check_positive(sql_type: str, label: str, value) -> None:
    # integer part: a precision of 0.5 is invalid
    if value is not None and int(value) <= 0:
        raise ConfigurationError(f"SQL type '{sql_type}' : invalid {label} {value}")


def _remove_optional(sql_type: str, marker: str) -> str:
    """`varchar2(%s CHAR)` -> `varchar2`; a bare marker is dropped on its own."""
    text = re.sub(r"\s*\([^()]*" + re.escape(marker) + r"[^()]*\)", "", sql_type)
    return text.replace(marker, "").strip()


def _replace_family(sql_type: str, mandatory: str, optional: str, label: str, value) -> str:
    if mandatory in sql_type:
        _check_positive(sql_type, label, value)
        if value is None:
            raise ConfigurationError(f"SQL type '{sql_type}' : {label} is mandatory")
        return sql_type.replace(mandatory, str(value))
    _check_positive(sql_type, label, value)
    if value is None:
        return _remove_optional(sql_type, optional)
    return sql_type.replace(optional, str(value))


def substitute_placeholders(sql_type: str, size: Optional[int], precision: Optional[Decimal]) -> str:
    """Replace the size or precision placeholder of a type template."""
    has_size = SIZE_MANDATORY in sql_type or SIZE_OPTIONAL in sql_type
    has_precision = PRECISION_MANDATORY in sql_type or PRECISION_OPTIONAL in sql_type
    if has_size and has_precision:
        raise ConfigurationError(
            f"SQL type '{sql_type}' : size and precision placeholders cannot be combined"
        )
    if has_size:
        return _replace_family(sql_type, SIZE_MANDATORY, SIZE_OPTIONAL, "size", size)
    if has_precision:
        return _replace_family(sql_type, PRECISION_MANDATORY, PRECISION_OPTIONAL, "precision", precision)
    return sql_type


def _sql_literal(value: str) -> str:
    return "'" + str(value).replace("'", "''") + "'"


class SqlHelper:
    """Naming and type conventions of one target database."""

    def __init__(self, database_name: str, config_file: str | Path | None = None,
                 profile: DialectProfile | None = None):
        if not database_name or not str(database_name).strip():
            raise ConfigurationError("Target database name undefined, cannot create sql helper")
        self._profile = profile or load_profile(database_name, config_file)
        self._database_name = str(database_name).strip()
        self._styles = {
            IdentifierRole.TABLE: self._profile.table_style,
            IdentifierRole.COLUMN: self._profile.column_style,
        }

    def __repr__(self):
        return f"SqlHelper({self._database_name!r})"

    @property
    def profile(self) -> DialectProfile:
        return self._profile

    def database_name(self) -> str:
        return self._database_name

    def database_config_file(self) -> str:
        return self._profile.source

    # --- names ---------------------------------------------------------------

    def convert_identifier(self, name: str, role: IdentifierRole | str) -> str:
        """Apply the table or column naming style to an arbitrary identifier."""
        try:
            role = IdentifierRole(role)
        except ValueError:
            raise ConfigurationError(f"Unknown identifier role '{role}' (expected 'table' or 'column')") from None
        return self._styles[role].apply(name)

    def convert_to_table_name(self, name: str) -> str:
        return self.convert_identifier(name, IdentifierRole.TABLE)

    def table_name(self, entity: Entity) -> str:
        return self.convert_to_table_name(entity.name)

    def convert_to_column_name(self, name: str) -> str:
        return self.convert_identifier(name, IdentifierRole.COLUMN)

    def column_name(self, attribute: Attribute) -> str:
        """The database name set in the model wins over the naming convention."""
        if _has_text(attribute.database_name):
            return attribute.database_name
        return self.convert_to_column_name(attribute.name)

    # --- types ---------------------------------------------------------------

    def config_type(self, neutral_type: str, auto_incremented: bool = False) -> str:
        key = f"type.{neutral_type.strip()}"
        if auto_incremented:
            specific = self._profile.find(f"{key}.autoincr")
            if specific is not None:
                return specific
        return self._profile.get(key)

    def convert_to_column_type(self, neutral_type: str, auto_incremented: bool = False,
                               size: Optional[int] = None, precision=None) -> str:
        sql_type = self.config_type(neutral_type, auto_incremented)
        if size is not None and not isinstance(size, int):
            size = int(_to_decimal(size))
        if precision is not None and not isinstance(precision, Decimal):
            precision = _to_decimal(precision)
        if "%" in sql_type:
            return substitute_placeholders(sql_type, size, precision)
        return sql_type

    def column_type(self, attribute: Attribute) -> str:
        """Explicit database type first, otherwise the converted neutral type."""
        if _has_text(attribute.database_type):
            return attribute.database_type
        return self.convert_to_column_type(
            attribute.neutral_type,
            attribute.auto_incremented,
            attribute_size(attribute),
            attribute_precision(attribute),
        )

    def column_constraints(self, attribute: Attribute) -> str:
        parts = []
        if attribute.database_not_null or attribute.not_null:
            parts.append("NOT NULL")

        default = None
        if _has_text(attribute.database_default_value):
            default = attribute.database_default_value
        elif _has_text(attribute.default_value):
            default = attribute.default_value
        if default is not None:
            value = _sql_literal(default) if attribute.is_string_type else str(default)
            parts.append(f"DEFAULT {value}")

        return " ".join(parts)
