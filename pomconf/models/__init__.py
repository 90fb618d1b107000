"""
Unified data model exports for pomconf.

This module re-exports all core data models to provide a stable and
convenient public API. Users can import models directly from
``pomconf.models`` instead of individual submodules.

Example:
    >>> from pomconf.models import DependencyRecord, ModuleId, PomModuleDescriptor
"""

from __future__ import annotations

from pomconf.models.coordinates import ClassifiedCoordinate, ModuleCoordinate, ModuleId
from pomconf.models.extra_info import ExtraInfo, ExtraInfoStore
from pomconf.models.records import (
    DependencyRecord,
    License,
    ManagementRecord,
    PluginRecord,
    SourceResource,
)
from pomconf.models.descriptor import (
    Artifact,
    Configuration,
    DependencyArtifact,
    DependencyDescriptor,
    ExcludeRule,
    ModuleDescriptor,
    OverrideMediator,
    PomDependencyDescriptor,
    PomModuleDescriptor,
)

__all__ = [
    "ModuleId",
    "ModuleCoordinate",
    "ClassifiedCoordinate",
    "ExtraInfo",
    "ExtraInfoStore",
    "DependencyRecord",
    "ManagementRecord",
    "PluginRecord",
    "License",
    "SourceResource",
    "Artifact",
    "Configuration",
    "DependencyArtifact",
    "DependencyDescriptor",
    "ExcludeRule",
    "ModuleDescriptor",
    "OverrideMediator",
    "PomDependencyDescriptor",
    "PomModuleDescriptor",
]
