"""
End-to-end generation of the bundled `examples/hr` project.
"""

import dataclasses

import pytest

from modelgen.config import load_project_config
from modelgen.generation import GenerationTask
from modelgen.language import build_model


@pytest.fixture
def hr_run(examples_dir, temp_output_dir):
    project = examples_dir / "hr"
    config = dataclasses.replace(load_project_config(project), destination_folder=temp_output_dir)
    model = build_model(str(project / "hr.model"))
    return GenerationTask(config, "java-sql", model).run(), temp_output_dir


def _read(path):
    return path.read_text(encoding="utf-8")


class TestHrExample:

    def test_ledger(self, hr_run):
        result, out = hr_run
        assert result.ok
        bean = "src/main/java/org/demo/hr/bean"
        assert [t.destination.relative_to(out).as_posix() for t in result.ledger] == [
            f"{bean}/Employee.java",
            f"{bean}/Job.java",
            f"{bean}/EmployeeJobs.java",
            f"{bean}/EmployeeJobsKey.java",
            "csharp/Demo.Hr/Employee.cs",
            "csharp/Demo.Hr/Job.cs",
            "csharp/Demo.Hr/EmployeeJobs.cs",
            "src/main/resources/sql/create_tables.sql",
        ]

    def test_java_entity(self, hr_run):
        _, out = hr_run
        text = _read(out / "src/main/java/org/demo/hr/bean/EmployeeJobs.java")
        assert "package org.demo.hr.bean;" in text
        assert "// composite primary key: see EmployeeJobsKey" in text
        assert "    private java.time.LocalDate startDate;" in text
        assert "    public Boolean getActive() {" in text

        key = _read(out / "src/main/java/org/demo/hr/bean/EmployeeJobsKey.java")
        assert "public class EmployeeJobsKey implements java.io.Serializable {" in key
        assert "    private Integer employeeId;" in key
        assert "startDate" not in key

    def test_csharp_entity(self, hr_run):
        _, out = hr_run
        text = _read(out / "csharp/Demo.Hr/Employee.cs")
        assert "namespace Demo.Hr" in text
        assert "        public string FirstName { get; set; }" in text
        assert "        public int? Id { get; set; }" in text
        assert "        public override string ToString()" in text
        assert "            // attribute 'photo' (type byte[]) not usable in ToString()" in text

    def test_sql_schema(self, hr_run):
        _, out = hr_run
        text = _read(out / "src/main/resources/sql/create_tables.sql")
        assert text.startswith("-- Generated by modelgen embedded generator")
        assert "for PostgreSQL" in text.splitlines()[0]
        for line in (
            "CREATE TABLE employee (",
            "  id serial,",
            "  SURNAME varchar(60) NOT NULL,",
            "  status varchar(10) NOT NULL DEFAULT 'ACTIVE',",
            "  salary numeric(10.2),",
            "  notes text,",
            "  PRIMARY KEY (id)",
            "CREATE TABLE employee_jobs (",
            "  active boolean NOT NULL DEFAULT true,",
            "  PRIMARY KEY (employee_id, job_code)",
        ):
            assert line in text.splitlines()
