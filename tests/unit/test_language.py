"""
Unit tests for the entity model language (parsing, validation, conversion).
"""

import pytest
from textx import TextXSemanticError, TextXSyntaxError

from modelgen.language import build_model, build_model_str


class TestModelParsing:

    def test_entities_in_declaration_order(self, hr_model):
        assert hr_model.name == "hr"
        assert hr_model.entity_names == ["Employee", "Job", "EmployeeJobs"]

    def test_attribute_annotations(self, hr_model):
        employee = hr_model.get_entity_by_class_name("Employee")
        id_attr, first_name, status, salary = employee.attributes

        assert id_attr.key and id_attr.auto_incremented
        assert id_attr.neutral_type == "int"
        assert first_name.not_null and first_name.max_length == 40
        assert status.default_value == "ACTIVE"
        assert salary.database_size == "10.2"
        assert salary.neutral_type == "decimal"

    def test_lookup_trims_name(self, hr_model):
        assert hr_model.get_entity_by_class_name("  Job ").name == "Job"
        assert hr_model.get_entity_by_class_name("Nope") is None

    def test_key_attributes(self, hr_model):
        ej = hr_model.get_entity_by_class_name("EmployeeJobs")
        assert [a.name for a in ej.key_attributes] == ["employeeId", "jobCode"]
        assert ej.non_key_attributes == ()

    def test_comments_and_database_annotations(self):
        model = build_model_str("""
// line comment
/* block
   comment */
Person {
  lastName : string { @DbName("SURNAME"), @DbType("varchar2(60)"), @DbNotNull } ;
  active   : boolean { @DbDefaultValue(true) } ;
  notes    : string { @LongText } ;
  photo    : binary ;
}
""")
        last_name, active, notes, photo = model.get_entity_by_class_name("Person").attributes
        assert last_name.database_name == "SURNAME"
        assert last_name.database_type == "varchar2(60)"
        assert last_name.database_not_null
        assert active.database_default_value == "true"
        assert notes.long_text
        assert photo.binary

    def test_time_and_timestamp_are_distinct(self):
        model = build_model_str("E { a : time ; b : timestamp ; }")
        assert [a.neutral_type for a in model.entities[0].attributes] == ["time", "timestamp"]

    def test_build_model_from_file(self, temp_output_dir, hr_model_content):
        path = temp_output_dir / "company.model"
        path.write_text(hr_model_content, encoding="utf-8")
        model = build_model(str(path))
        assert model.name == "company"
        assert len(model.entities) == 3


class TestModelValidation:

    def test_unknown_type_is_syntax_error(self):
        with pytest.raises(TextXSyntaxError):
            build_model_str("E { a : integer ; }")

    def test_duplicate_entity(self):
        with pytest.raises(TextXSemanticError, match="Entity with name 'E' already exists"):
            build_model_str("E { a : int ; } E { b : int ; }")

    def test_duplicate_attribute(self):
        with pytest.raises(TextXSemanticError, match="attribute 'a' already exists"):
            build_model_str("E { a : int ; a : string ; }")

    def test_unknown_annotation(self):
        with pytest.raises(TextXSemanticError, match="not a known annotation"):
            build_model_str("E { a : int { @Primary } ; }")

    def test_flag_with_value(self):
        with pytest.raises(TextXSemanticError, match="does not take a value"):
            build_model_str("E { a : int { @NotNull(1) } ; }")

    def test_valued_annotation_without_value(self):
        with pytest.raises(TextXSemanticError, match="requires a value"):
            build_model_str("E { a : string { @SizeMax } ; }")

    def test_size_max_must_be_integer(self):
        with pytest.raises(TextXSemanticError, match="expects an integer"):
            build_model_str("E { a : string { @SizeMax(4.5) } ; }")

    def test_db_size_must_be_number(self):
        with pytest.raises(TextXSemanticError, match="size or precision"):
            build_model_str('E { a : decimal { @DbSize("big") } ; }')

    def test_duplicate_annotation(self):
        with pytest.raises(TextXSemanticError, match="declared twice"):
            build_model_str("E { a : int { @Id, @Id } ; }")
