"""Configuration sources: dialect profiles, project configuration, template bundles."""

from .profiles import DialectProfile, load_profile, profile_from_mapping
from .project import ProjectConfig, load_project_config
from .bundle import TargetDefinition, load_bundle

__all__ = [
    "DialectProfile",
    "load_profile",
    "profile_from_mapping",
    "ProjectConfig",
    "load_project_config",
    "TargetDefinition",
    "load_bundle",
]
