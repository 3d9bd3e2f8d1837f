"""
Unit tests for the lines builder and the C# helper.
"""

import pytest

from modelgen.context import CsharpHelper, HelperFactory, LinesBuilder, SqlHelper
from modelgen.errors import InvalidArgumentError
from modelgen.model import Attribute, Entity


class TestLinesBuilder:

    def test_default_indentation(self):
        lb = LinesBuilder()
        lb.append(0, "class A {").append(1, "int x;").append(0, "}")
        assert str(lb) == "class A {\n    int x;\n}\n"
        assert len(lb) == 3

    def test_custom_indentation(self):
        lb = LinesBuilder("\t")
        lb.append(2, "x")
        assert str(lb) == "\t\tx\n"

    def test_empty(self):
        assert str(LinesBuilder()) == ""

    def test_negative_level_rejected(self):
        with pytest.raises(ValueError):
            LinesBuilder().append(-1, "x")


class TestCsharpHelper:

    def test_nullable_type(self):
        cs = CsharpHelper()
        assert cs.nullable_type(Attribute("age", "int")) == "int?"
        assert cs.nullable_type(Attribute("age", "int", not_null=True)) == "int"
        assert cs.nullable_type(Attribute("name", "string")) == "string?"
        assert cs.nullable_type(Attribute("photo", "binary")) == "byte[]?"

    def test_nullable_type_unknown_neutral_type(self):
        assert CsharpHelper().nullable_type(Attribute("x", "geometry")) == ""

    def test_nullable_type_requires_attribute(self):
        with pytest.raises(InvalidArgumentError):
            CsharpHelper().nullable_type(None)

    def test_to_string_method(self):
        entity = Entity("Employee", (
            Attribute("id", "int"),
            Attribute("name", "string"),
            Attribute("photo", "binary"),
            Attribute("notes", "string", long_text=True),
        ))
        text = CsharpHelper().to_string_method(entity, 1)
        assert text == (
            "    public override string ToString()\n"
            "    {\n"
            "        System.Text.StringBuilder sb = new System.Text.StringBuilder();\n"
            '        sb.Append("Employee[");\n'
            '        sb.Append("id=").Append(id);\n'
            '        sb.Append("|");\n'
            '        sb.Append("name=").Append(name);\n'
            "        // attribute 'photo' (type byte[]) not usable in ToString()\n"
            "        // attribute 'notes' (type string) not usable in ToString()\n"
            '        sb.Append("]");\n'
            "        return sb.ToString();\n"
            "    }\n"
        )

    def test_to_string_method_without_attributes(self):
        text = CsharpHelper().to_string_method(Entity("Empty"), 0, "\t")
        assert text == 'public override string ToString()\n{\n\treturn "Empty [no attribute]" ;\n}\n'

    def test_to_string_method_with_attribute_subset(self):
        entity = Entity("Job", (Attribute("code", "string"), Attribute("title", "string")))
        text = CsharpHelper().to_string_method(entity, 0, attributes=entity.attributes[1:])
        assert 'Append("title=")' in text
        assert 'Append("code=")' not in text

    def test_to_string_method_requires_entity(self):
        with pytest.raises(InvalidArgumentError):
            CsharpHelper().to_string_method(None, 0)


class TestHelperFactory:

    def test_new_sql(self):
        sql = HelperFactory().new_sql("Oracle")
        assert isinstance(sql, SqlHelper)
        assert sql.convert_to_table_name("EmployeeJobs") == "EMPLOYEE_JOBS"

    def test_new_lines_builder(self):
        assert str(HelperFactory().new_lines_builder("  ").append(1, "x")) == "  x\n"
