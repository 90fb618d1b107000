"""
Module descriptor data model for pomconf.

This module defines the configuration-based descriptor that the builder
produces: configurations, module artifacts, dependency descriptors with
their configuration mappings, dependency artifacts and exclude rules,
version mediators, and the extra-info store.

A descriptor is mutable while it is being built and becomes read-only once
:meth:`ModuleDescriptor.freeze` is called. Any later mutation raises
:class:`~pomconf.exceptions.DescriptorFrozenError`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pomconf.constants import CLASSIFIER_ATTRIBUTE, WILDCARD
from pomconf.exceptions import DescriptorFrozenError
from pomconf.models.extra_info import ExtraInfoStore
from pomconf.models.records import DependencyRecord, License, ManagementRecord, SourceResource
from pomconf.models.coordinates import ClassifiedCoordinate, ModuleCoordinate, ModuleId

#: Matcher name for exact pattern matching.
EXACT_MATCHER = "exact"


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Configuration:
    """A named, inheritable partition of a module's dependency graph.

    Attributes:
        name: Configuration name.
        description: Human-readable description.
        extends: Names of configurations this one inherits from.
        visibility: ``public`` or ``private``.
        transitive: Whether dependencies of this configuration are transitive.
    """

    name: str
    description: str = ""
    extends: Tuple[str, ...] = ()
    visibility: str = "public"
    transitive: bool = True

    def to_json(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "extends": list(self.extends),
            "visibility": self.visibility,
            "transitive": self.transitive,
            "description": self.description,
        }


class _FrozenAfterBuild:
    """Dataclass mixin whose instances become read-only once frozen."""

    _frozen = False

    def __setattr__(self, name: str, value: Any) -> None:
        if self._frozen:
            raise DescriptorFrozenError(
                f"Cannot set {name!r} on {type(self).__name__} after build"
            )
        super().__setattr__(name, value)

    def freeze(self) -> None:
        object.__setattr__(self, "_frozen", True)


@dataclass
class Artifact(_FrozenAfterBuild):
    """An artifact published by the described module itself."""

    module_revision_id: ModuleCoordinate
    name: str
    type: str
    ext: str
    extra_attributes: Mapping[str, str] = field(default_factory=dict)
    publication_date: Optional[datetime] = None
    _configurations: List[str] = field(default_factory=list, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.extra_attributes = MappingProxyType(dict(self.extra_attributes))

    @property
    def classifier(self) -> Optional[str]:
        return self.extra_attributes.get(CLASSIFIER_ATTRIBUTE)

    @property
    def configurations(self) -> List[str]:
        return list(self._configurations)

    def add_configuration(self, conf: str) -> None:
        if self._frozen:
            raise DescriptorFrozenError(f"Cannot add configurations to {self.name!r} after build")
        if conf not in self._configurations:
            self._configurations.append(conf)

    def to_json(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "ext": self.ext,
            "classifier": self.classifier,
            "configurations": self.configurations,
        }


@dataclass
class DependencyArtifact(_FrozenAfterBuild):
    """An artifact a dependency is expected to publish."""

    name: str
    type: str
    ext: str
    url: Optional[str] = None
    extra_attributes: Mapping[str, str] = field(default_factory=dict)
    _configurations: List[str] = field(default_factory=list, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.extra_attributes = MappingProxyType(dict(self.extra_attributes))

    @property
    def classifier(self) -> Optional[str]:
        return self.extra_attributes.get(CLASSIFIER_ATTRIBUTE)

    @property
    def configurations(self) -> List[str]:
        return list(self._configurations)

    def add_configuration(self, conf: str) -> None:
        if self._frozen:
            raise DescriptorFrozenError(f"Cannot add configurations to {self.name!r} after build")
        if conf not in self._configurations:
            self._configurations.append(conf)

    def to_json(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "ext": self.ext,
            "classifier": self.classifier,
            "configurations": self.configurations,
        }


@dataclass(frozen=True)
class ExcludeRule:
    """Excludes matching artifacts from a dependency's transitive closure.

    The rule matches any artifact name, type and extension of the modules
    selected by ``module_id``.
    """

    module_id: ModuleId
    artifact: str = WILDCARD
    type: str = WILDCARD
    ext: str = WILDCARD
    matcher: str = EXACT_MATCHER

    def matches(self, module_id: ModuleId) -> bool:
        """Return True if the rule excludes ``module_id``."""
        return all(
            pattern == WILDCARD or pattern == value
            for pattern, value in (
                (self.module_id.organisation, module_id.organisation),
                (self.module_id.name, module_id.name),
            )
        )

    def to_json(self) -> Dict[str, Any]:
        return {
            "organisation": self.module_id.organisation,
            "module": self.module_id.name,
            "artifact": self.artifact,
            "type": self.type,
            "ext": self.ext,
            "matcher": self.matcher,
        }


@dataclass(frozen=True)
class OverrideMediator:
    """Forces the version of dependencies on a module.

    Registered for every dependency-management entry so that transitive
    requests for the managed module are mediated to the managed version.
    """

    module_id: ModuleId
    version: Optional[str] = None
    branch: Optional[str] = None
    matcher: str = EXACT_MATCHER

    def applies_to(self, module_id: ModuleId) -> bool:
        return self.module_id == module_id

    def mediate(self, coordinate: ModuleCoordinate) -> ModuleCoordinate:
        """Return ``coordinate`` with the overriding version, if any."""
        if self.version is None:
            return coordinate
        return coordinate.with_version(self.version)


# ---------------------------------------------------------------------------
# Dependency descriptors
# ---------------------------------------------------------------------------


class DependencyDescriptor:
    """One dependency of a module and how its configurations map.

    Args:
        dependency_revision_id: Coordinate of the target module.
        force: Whether the version is forced during conflict resolution.
        changing: Whether the target may change without a version change.
        transitive: Whether the target's own dependencies are followed.
    """

    def __init__(
        self,
        dependency_revision_id: ModuleCoordinate,
        *,
        force: bool = False,
        changing: bool = False,
        transitive: bool = True,
    ) -> None:
        self.dependency_revision_id = dependency_revision_id
        self.force = force
        self.changing = changing
        self.transitive = transitive
        self._confs: Dict[str, List[str]] = {}
        self._artifacts: Dict[str, List[DependencyArtifact]] = {}
        self._exclude_rules: Dict[str, List[ExcludeRule]] = {}
        self._frozen = False

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_frozen", False):
            raise DescriptorFrozenError(
                f"Cannot modify dependency {self.dependency_revision_id} after build"
            )
        super().__setattr__(name, value)

    def _check_mutable(self) -> None:
        if self._frozen:
            raise DescriptorFrozenError(
                f"Cannot modify dependency {self.dependency_revision_id} after build"
            )

    def freeze(self) -> None:
        if self._frozen:
            return
        for artifact in self.all_dependency_artifacts:
            artifact.freeze()
        self._frozen = True

    @property
    def dependency_id(self) -> ModuleId:
        return self.dependency_revision_id.module_id

    # ------------------------------------------------------------------
    # Configuration mapping
    # ------------------------------------------------------------------

    def add_dependency_configuration(self, module_conf: str, dependency_conf: str) -> None:
        """Map ``module_conf`` of the owner onto ``dependency_conf`` of the target.

        Mappings keep insertion order; re-adding an existing pair is a no-op.
        """
        self._check_mutable()
        confs = self._confs.setdefault(module_conf, [])
        if dependency_conf not in confs:
            confs.append(dependency_conf)

    @property
    def module_configurations(self) -> List[str]:
        return list(self._confs)

    def get_dependency_configurations(self, module_conf: str) -> List[str]:
        return list(self._confs.get(module_conf, ()))

    # ------------------------------------------------------------------
    # Artifacts
    # ------------------------------------------------------------------

    def add_dependency_artifact(self, module_conf: str, artifact: DependencyArtifact) -> None:
        self._check_mutable()
        artifact.add_configuration(module_conf)
        artifacts = self._artifacts.setdefault(module_conf, [])
        if not any(existing is artifact for existing in artifacts):
            artifacts.append(artifact)

    def get_dependency_artifacts(self, module_conf: str) -> List[DependencyArtifact]:
        return list(self._artifacts.get(module_conf, ()))

    @property
    def all_dependency_artifacts(self) -> List[DependencyArtifact]:
        """Every dependency artifact once, in first-registration order."""
        seen: List[DependencyArtifact] = []
        for artifacts in self._artifacts.values():
            for artifact in artifacts:
                if not any(artifact is known for known in seen):
                    seen.append(artifact)
        return seen

    # ------------------------------------------------------------------
    # Exclusions
    # ------------------------------------------------------------------

    def add_exclude_rule(self, module_conf: str, rule: ExcludeRule) -> None:
        self._check_mutable()
        rules = self._exclude_rules.setdefault(module_conf, [])
        if rule not in rules:
            rules.append(rule)

    def get_exclude_rules(self, module_conf: str) -> List[ExcludeRule]:
        return list(self._exclude_rules.get(module_conf, ()))

    @property
    def all_exclude_rules(self) -> List[ExcludeRule]:
        rules: List[ExcludeRule] = []
        for conf_rules in self._exclude_rules.values():
            for rule in conf_rules:
                if rule not in rules:
                    rules.append(rule)
        return rules

    def to_json(self) -> Dict[str, Any]:
        return {
            "organisation": self.dependency_revision_id.group,
            "module": self.dependency_revision_id.artifact,
            "revision": self.dependency_revision_id.version,
            "transitive": self.transitive,
            "force": self.force,
            "changing": self.changing,
            "confs": {conf: list(targets) for conf, targets in self._confs.items()},
            "artifacts": [artifact.to_json() for artifact in self.all_dependency_artifacts],
            "excludes": {
                conf: [rule.to_json() for rule in rules]
                for conf, rules in self._exclude_rules.items()
            },
        }

    def __repr__(self) -> str:
        return (
            "DependencyDescriptor("
            f"dependency_revision_id={self.dependency_revision_id!r}, "
            f"transitive={self.transitive!r}, "
            f"confs={self._confs!r}"
            ")"
        )


class PomDependencyDescriptor(DependencyDescriptor):
    """Dependency descriptor that keeps the record it was created from."""

    def __init__(
        self,
        record: DependencyRecord,
        dependency_revision_id: ModuleCoordinate,
        *,
        transitive: bool = True,
    ) -> None:
        super().__init__(dependency_revision_id, force=True, changing=False, transitive=transitive)
        self.record = record


# ---------------------------------------------------------------------------
# Module descriptors
# ---------------------------------------------------------------------------


class ModuleDescriptor:
    """Configuration-based description of one module.

    The generic descriptor only exposes dependency management through its
    flattened :attr:`extra_infos`; see :class:`PomModuleDescriptor` for the
    variant that also keeps structured management records.

    Args:
        resource: Document the descriptor was built from.
    """

    def __init__(self, resource: Optional[SourceResource] = None) -> None:
        self.resource = resource
        self.module_revision_id: Optional[ModuleCoordinate] = None
        self.status: Optional[str] = None
        self.home_page: Optional[str] = None
        self.description: Optional[str] = None
        self.resolved_publication_date: Optional[datetime] = None
        self.mapping_override = False
        self._licenses: List[License] = []
        self._namespaces: Dict[str, str] = {}
        self._configurations: Dict[str, Configuration] = {}
        self._dependencies: List[DependencyDescriptor] = []
        self._artifacts: Dict[str, List[Artifact]] = {}
        self._mediators: List[OverrideMediator] = []
        self.extra_infos = ExtraInfoStore(guard=self._check_mutable)
        self._frozen = False

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_frozen", False):
            raise DescriptorFrozenError(
                f"Cannot set {name!r} on descriptor {self.module_revision_id} after build"
            )
        super().__setattr__(name, value)

    def _check_mutable(self) -> None:
        if self._frozen:
            raise DescriptorFrozenError(
                f"Cannot modify descriptor {self.module_revision_id} after build"
            )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Make this descriptor and its dependencies read-only."""
        if self._frozen:
            return
        for dependency in self._dependencies:
            dependency.freeze()
        for artifact in self.all_artifacts:
            artifact.freeze()
        self._frozen = True

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    def add_license(self, license: License) -> None:
        self._check_mutable()
        self._licenses.append(license)

    @property
    def licenses(self) -> Tuple[License, ...]:
        return tuple(self._licenses)

    def add_extra_attribute_namespace(self, prefix: str, uri: str) -> None:
        self._check_mutable()
        self._namespaces[prefix] = uri

    @property
    def extra_attribute_namespaces(self) -> Mapping[str, str]:
        return MappingProxyType(self._namespaces)

    # ------------------------------------------------------------------
    # Configurations
    # ------------------------------------------------------------------

    def add_configuration(self, configuration: Configuration) -> None:
        self._check_mutable()
        self._configurations[configuration.name] = configuration

    def get_configuration(self, name: str) -> Optional[Configuration]:
        return self._configurations.get(name)

    @property
    def configurations(self) -> List[Configuration]:
        return list(self._configurations.values())

    # ------------------------------------------------------------------
    # Dependencies
    # ------------------------------------------------------------------

    def add_dependency(self, dependency: DependencyDescriptor) -> None:
        self._check_mutable()
        self._dependencies.append(dependency)

    @property
    def dependencies(self) -> List[DependencyDescriptor]:
        return list(self._dependencies)

    # ------------------------------------------------------------------
    # Artifacts
    # ------------------------------------------------------------------

    def add_artifact(self, conf: str, artifact: Artifact) -> None:
        self._check_mutable()
        artifact.add_configuration(conf)
        artifacts = self._artifacts.setdefault(conf, [])
        if not any(existing is artifact for existing in artifacts):
            artifacts.append(artifact)

    def get_artifacts(self, conf: str) -> List[Artifact]:
        return list(self._artifacts.get(conf, ()))

    @property
    def all_artifacts(self) -> List[Artifact]:
        seen: List[Artifact] = []
        for artifacts in self._artifacts.values():
            for artifact in artifacts:
                if not any(artifact is known for known in seen):
                    seen.append(artifact)
        return seen

    # ------------------------------------------------------------------
    # Mediation
    # ------------------------------------------------------------------

    def add_dependency_descriptor_mediator(self, mediator: OverrideMediator) -> None:
        self._check_mutable()
        self._mediators.append(mediator)

    @property
    def mediators(self) -> List[OverrideMediator]:
        return list(self._mediators)

    def mediate(self, coordinate: ModuleCoordinate) -> ModuleCoordinate:
        """Apply every matching mediator to a transitive dependency request.

        Mediators are applied in registration order, so the last matching
        one wins.
        """
        for mediator in self._mediators:
            if mediator.applies_to(coordinate.module_id):
                coordinate = mediator.mediate(coordinate)
        return coordinate

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_json(self) -> Dict[str, Any]:
        """Return a JSON-serializable representation."""
        mrid = self.module_revision_id
        return {
            "module": {
                "organisation": mrid.group if mrid else None,
                "module": mrid.artifact if mrid else None,
                "revision": mrid.version if mrid else None,
            },
            "status": self.status,
            "home_page": self.home_page,
            "description": self.description,
            "publication": (
                self.resolved_publication_date.isoformat()
                if self.resolved_publication_date
                else None
            ),
            "licenses": [{"name": lic.name, "url": lic.url} for lic in self._licenses],
            "configurations": [conf.to_json() for conf in self._configurations.values()],
            "artifacts": [artifact.to_json() for artifact in self.all_artifacts],
            "dependencies": [dd.to_json() for dd in self._dependencies],
            "mediators": [
                {
                    "organisation": mediator.module_id.organisation,
                    "module": mediator.module_id.name,
                    "revision": mediator.version,
                }
                for mediator in self._mediators
            ],
            "extra_infos": self.extra_infos.to_dict(),
        }


class PomModuleDescriptor(ModuleDescriptor):
    """Module descriptor built from a POM.

    Adds structured dependency-management records and an index of
    dependency descriptors by target coordinate, which guarantees a single
    entry per target module.
    """

    def __init__(self, resource: Optional[SourceResource] = None) -> None:
        super().__init__(resource)
        self._dependency_management: Dict[ClassifiedCoordinate, ManagementRecord] = {}
        self._dependencies_by_revision: Dict[ModuleCoordinate, DependencyDescriptor] = {}

    def add_dependency_management(self, record: ManagementRecord) -> None:
        self._check_mutable()
        self._dependency_management[record.classified_coordinate] = record

    @property
    def dependency_management_map(self) -> Mapping[ClassifiedCoordinate, ManagementRecord]:
        return MappingProxyType(self._dependency_management)

    def get_dependency(self, revision_id: ModuleCoordinate) -> Optional[DependencyDescriptor]:
        return self._dependencies_by_revision.get(revision_id)

    def add_dependency(self, dependency: DependencyDescriptor) -> None:
        """Register ``dependency``, replacing any entry for the same target."""
        self._check_mutable()
        revision_id = dependency.dependency_revision_id
        existing = self._dependencies_by_revision.get(revision_id)
        if existing is None:
            self._dependencies.append(dependency)
        elif existing is not dependency:
            index = next(i for i, dd in enumerate(self._dependencies) if dd is existing)
            self._dependencies[index] = dependency
        self._dependencies_by_revision[revision_id] = dependency

    def to_json(self) -> Dict[str, Any]:
        data = super().to_json()
        data["dependency_management"] = [
            record.to_json() for record in self._dependency_management.values()
        ]
        return data
