"""
C# helper exposed to templates as `csharp`.

    {{ csharp.nullable_type(attribute) }}          int?, string, byte[]?
    {{ csharp.to_string_method(entity, 1) }}       ToString() override
"""

from ..errors import InvalidArgumentError
from .lines import LinesBuilder

CSHARP_TYPES = {
    "string": "string",
    "byte": "sbyte",
    "short": "short",
    "int": "int",
    "long": "long",
    "decimal": "decimal",
    "float": "float",
    "double": "double",
    "boolean": "bool",
    "date": "DateTime",
    "time": "TimeSpan",
    "timestamp": "DateTime",
    "binary": "byte[]",
}


def _usable_in_to_string(attribute) -> bool:
    return not attribute.binary and not attribute.long_text


class CsharpHelper:

    def type(self, attribute) -> str:
        """C# type of the attribute's neutral type ("" when unknown)."""
        return CSHARP_TYPES.get(attribute.neutral_type, "")

    def nullable_type(self, attribute) -> str:
        """The C# type with a trailing '?' unless the attribute is not null."""
        if attribute is None:
            raise InvalidArgumentError("csharp.nullable_type(..) : attribute arg is null")
        cs_type = self.type(attribute)
        if attribute.not_null or not cs_type:
            return cs_type
        return cs_type + "?"

    def to_string_method(self, entity, indentation_level: int, indentation: str = None,
                         attributes=None) -> str:
        """
        Build a `ToString()` override listing the attributes of `entity`
        (or the given subset). Binary and long text attributes are skipped.
        """
        if entity is None:
            raise InvalidArgumentError("csharp.to_string_method(..) : entity arg is null")
        if attributes is None:
            attributes = entity.attributes
        lb = LinesBuilder(indentation)

        indent = indentation_level
        lb.append(indent, "public override string ToString()")
        lb.append(indent, "{")
        indent += 1
        if not attributes:
            lb.append(indent, f'return "{entity.name} [no attribute]" ;')
        else:
            self._string_builder_lines(entity, attributes, indent, lb)
        indent -= 1
        lb.append(indent, "}")
        return str(lb)

    def _string_builder_lines(self, entity, attributes, indent: int, lb: LinesBuilder) -> None:
        lb.append(indent, "System.Text.StringBuilder sb = new System.Text.StringBuilder();")
        lb.append(indent, f'sb.Append("{entity.name}[");')
        count = 0
        for attribute in attributes:
            if not _usable_in_to_string(attribute):
                lb.append(
                    indent,
                    f"// attribute '{attribute.name}' (type {self.type(attribute)}) not usable in ToString()",
                )
                continue
            if count > 0:
                lb.append(indent, 'sb.Append("|");')
            lb.append(indent, f'sb.Append("{attribute.name}=").Append({attribute.name});')
            count += 1
        lb.append(indent, 'sb.Append("]");')
        lb.append(indent, "return sb.ToString();")
