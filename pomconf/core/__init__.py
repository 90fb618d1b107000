"""
Core functionality exports for pomconf.

Importing from here keeps user-facing imports clean and stable:

    from pomconf.core import PomModuleDescriptorBuilder, get_dependency_managements
"""

from __future__ import annotations

from pomconf.core.builder import MergeResult, PomModuleDescriptorBuilder
from pomconf.core.locator import ArtifactLocator, ArtifactOrigin, RepositoryArtifactLocator
from pomconf.core.loader import build_descriptor, load_descriptor, load_extra_infos
from pomconf.core.management import (
    ExtraInfoManagementSource,
    ManagementSource,
    StructuredManagementSource,
    extract_pom_properties,
    get_dependency_management_map,
    get_dependency_managements,
    get_plugins,
    management_source,
)
from pomconf.core.scope_mapping import SCOPE_MAPPINGS, apply_scope_mapping

__all__ = [
    "PomModuleDescriptorBuilder",
    "MergeResult",
    "ArtifactLocator",
    "ArtifactOrigin",
    "RepositoryArtifactLocator",
    "build_descriptor",
    "load_descriptor",
    "load_extra_infos",
    "ManagementSource",
    "StructuredManagementSource",
    "ExtraInfoManagementSource",
    "management_source",
    "get_dependency_managements",
    "get_dependency_management_map",
    "get_plugins",
    "extract_pom_properties",
    "SCOPE_MAPPINGS",
    "apply_scope_mapping",
]
