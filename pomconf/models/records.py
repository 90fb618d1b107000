"""
Input record types for pomconf.

Pure data structures handed to the builder by a POM parser. Each record
mirrors one POM element: a ``<dependency>``, a ``<dependencyManagement>``
entry, a ``<plugin>`` or a ``<license>``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from pomconf.models.coordinates import ClassifiedCoordinate, ModuleId


@dataclass(frozen=True)
class DependencyRecord:
    """A ``<dependency>`` element.

    Attributes:
        group_id: Maven groupId.
        artifact_id: Maven artifactId.
        version: Declared version, or ``None``/empty when managed.
        scope: Declared scope, or ``None``/empty when managed or defaulted.
        classifier: Optional classifier (e.g. ``sources``, ``tests``).
        type: Optional type (e.g. ``test-jar``, ``war``); ``None`` means jar.
        optional: Whether the dependency is marked ``<optional>true</optional>``.
        excluded_modules: Ordered exclusion patterns, stored as a tuple.
    """

    group_id: str
    artifact_id: str
    version: Optional[str] = None
    scope: Optional[str] = None
    classifier: Optional[str] = None
    type: Optional[str] = None
    optional: bool = False
    excluded_modules: Tuple[ModuleId, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "excluded_modules", tuple(self.excluded_modules))

    @property
    def classified_coordinate(self) -> ClassifiedCoordinate:
        return ClassifiedCoordinate(self.group_id, self.artifact_id, self.classifier)


@dataclass(frozen=True)
class ManagementRecord:
    """A ``<dependencyManagement>`` entry.

    Supplies the version, scope and exclusions of a dependency declaration
    that omits them, and drives version mediation of transitive
    dependencies.

    Attributes:
        group_id: Maven groupId.
        artifact_id: Maven artifactId.
        version: Managed version.
        scope: Managed scope, if any.
        classifier: Classifier the entry applies to, if any.
        excluded_modules: Ordered exclusion patterns, stored as a tuple.
    """

    group_id: str
    artifact_id: str
    version: Optional[str] = None
    scope: Optional[str] = None
    classifier: Optional[str] = None
    excluded_modules: Tuple[ModuleId, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "excluded_modules", tuple(self.excluded_modules))

    @property
    def classified_coordinate(self) -> ClassifiedCoordinate:
        return ClassifiedCoordinate(self.group_id, self.artifact_id, self.classifier)

    def to_json(self) -> dict:
        """Return a JSON-serializable representation."""
        return {
            "group_id": self.group_id,
            "artifact_id": self.artifact_id,
            "classifier": self.classifier,
            "version": self.version,
            "scope": self.scope,
            "exclusions": [
                [excluded.organisation, excluded.name]
                for excluded in self.excluded_modules
            ],
        }


@dataclass(frozen=True)
class PluginRecord:
    """A ``<plugin>`` element reduced to its coordinates."""

    group_id: str
    artifact_id: str
    version: Optional[str] = None

    def to_json(self) -> dict:
        return {
            "group_id": self.group_id,
            "artifact_id": self.artifact_id,
            "version": self.version,
        }


@dataclass(frozen=True)
class License:
    """A ``<license>`` element."""

    name: str
    url: Optional[str] = None


@dataclass(frozen=True)
class SourceResource:
    """The document a descriptor is built from.

    Attributes:
        name: Resource name, typically a path or URL.
        last_modified: Last modification time; stamps the descriptor's
            resolved publication date.
    """

    name: str
    last_modified: Optional[datetime] = None
