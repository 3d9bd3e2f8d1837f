"""
Pytest configuration and shared fixtures for the modelgen test suite.
"""

import pytest
import shutil
import tempfile
from pathlib import Path

import yaml

from modelgen.config import load_project_config, profile_from_mapping
from modelgen.context import SqlHelper
from modelgen.language import build_model_str


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="session")
def examples_dir(project_root):
    """Return the examples directory."""
    return project_root / "examples"


@pytest.fixture
def temp_output_dir():
    """Create a temporary directory for generated output."""
    temp_dir = tempfile.mkdtemp(prefix="modelgen_test_")
    yield Path(temp_dir)
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def hr_model_content():
    """A small model: a simple entity, a composite-key entity, a lookup entity."""
    return """
Employee {
  id        : int     { @Id, @AutoIncremented } ;
  firstName : string  { @NotNull, @SizeMax(40) } ;
  status    : string  { @NotNull, @DefaultValue("ACTIVE") } ;
  salary    : decimal { @DbSize(10.2) } ;
}

Job {
  code  : string { @Id, @SizeMax(8) } ;
  title : string { @SizeMax(80) } ;
}

EmployeeJobs {
  employeeId : int    { @Id } ;
  jobCode    : string { @Id, @SizeMax(8) } ;
}
"""


@pytest.fixture
def hr_model(hr_model_content):
    return build_model_str(hr_model_content, name="hr")


@pytest.fixture
def make_project(temp_output_dir):
    """
    Factory fixture writing a project into the temporary directory.

    Args (of the returned function):
        templates: {file name: template text} of the "main" bundle
        targets: list of target definition mappings (templates.yaml)
        **settings: extra modelgen.yaml keys (database, variables, ...)

    Returns the loaded ProjectConfig.
    """
    def _make(templates: dict, targets: list = None, bundle: str = "main", **settings):
        config = {"destination": "out", "templates": "templates"}
        config.update(settings)
        (temp_output_dir / "modelgen.yaml").write_text(yaml.safe_dump(config), encoding="utf-8")

        bundle_dir = temp_output_dir / "templates" / bundle
        bundle_dir.mkdir(parents=True, exist_ok=True)
        for name, text in templates.items():
            (bundle_dir / name).write_text(text, encoding="utf-8")
        (bundle_dir / "templates.yaml").write_text(
            yaml.safe_dump({"targets": targets or []}), encoding="utf-8"
        )
        return load_project_config(temp_output_dir)
    return _make


@pytest.fixture
def make_sql():
    """Factory fixture: SqlHelper over an in-memory profile (snake_case by default)."""
    def _make(types: dict = None, table_style="snake_case", column_style="snake_case"):
        entries = {"conv.tableName": table_style, "conv.columnName": column_style}
        entries.update(types or {})
        return SqlHelper("TestDb", profile=profile_from_mapping("TestDb", entries))
    return _make
