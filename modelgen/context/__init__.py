"""Helper objects published in the rendering context."""

from .csharp import CsharpHelper
from .lines import LinesBuilder
from .sql import IdentifierRole, SqlHelper


class HelperFactory:
    """Published as `factory`: creates helpers for another database."""

    def new_sql(self, database_name: str, config_file: str = None) -> SqlHelper:
        return SqlHelper(database_name, config_file)

    def new_csharp(self) -> CsharpHelper:
        return CsharpHelper()

    def new_lines_builder(self, indentation: str = None) -> LinesBuilder:
        return LinesBuilder(indentation)


__all__ = ["CsharpHelper", "HelperFactory", "IdentifierRole", "LinesBuilder", "SqlHelper"]
