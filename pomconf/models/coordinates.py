"""
Module coordinate value types for pomconf.

This module defines the hashable identity keys used throughout the
descriptor model: a version-less module id, a full module coordinate and
the classifier-scoped coordinate used by dependency management.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pomconf.constants import WILDCARD


@dataclass(frozen=True)
class ModuleId:
    """A module identity without version.

    Also used as an exclusion pattern, where ``*`` in both fields means
    "every module".

    Attributes:
        organisation: Maven groupId.
        name: Maven artifactId.
    """

    organisation: str
    name: str

    def is_wildcard(self) -> bool:
        """Return True if this pattern excludes every module."""
        return self.organisation == WILDCARD and self.name == WILDCARD

    def __str__(self) -> str:
        return f"{self.organisation}#{self.name}"


@dataclass(frozen=True)
class ModuleCoordinate:
    """Group, artifact and version of a module.

    The version may be ``None`` when it could not be determined.
    """

    group: str
    artifact: str
    version: Optional[str] = None

    @property
    def module_id(self) -> ModuleId:
        return ModuleId(self.group, self.artifact)

    def with_version(self, version: Optional[str]) -> "ModuleCoordinate":
        """Return a copy of this coordinate with another version."""
        return ModuleCoordinate(self.group, self.artifact, version)

    def __str__(self) -> str:
        return f"{self.group}#{self.artifact};{self.version or ''}"


@dataclass(frozen=True)
class ClassifiedCoordinate:
    """Group, artifact and classifier; the key of a dependency-management entry.

    Management is scoped by classifier rather than by version, so the same
    module may carry one entry per classifier. ``None`` stands for "no
    classifier".
    """

    group: str
    artifact: str
    classifier: Optional[str] = None

    @property
    def module_id(self) -> ModuleId:
        return ModuleId(self.group, self.artifact)

    def __str__(self) -> str:
        base = f"{self.group}:{self.artifact}"
        return f"{base}:{self.classifier}" if self.classifier else base
