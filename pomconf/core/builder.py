"""Build configuration-based module descriptors from POM records.

:class:`PomModuleDescriptorBuilder` is fed the records of one parsed POM
in document order and assembles a :class:`PomModuleDescriptor`:

* module coordinates and status, home page, description and licenses;
* the main artifact, derived from the packaging, and optional source and
  javadoc artifacts;
* one dependency descriptor per target module, with its scopes mapped onto
  configurations, its classified artifacts and its exclude rules;
* dependency management, kept both as structured records and flattened
  into extra infos, plus one version mediator per managed module;
* properties and plugins, flattened into extra infos.

Typical usage::

    builder = PomModuleDescriptorBuilder(resource, locator=locator)
    builder.set_module_rev_id("org.example", "app", "1.0")
    builder.add_main_artifact("app", "jar")
    for record in management_records:
        builder.add_dependency_management(record)
    for record in dependency_records:
        builder.add_dependency(record)
    descriptor = builder.build()

A builder serves a single document. After :meth:`build` the descriptor is
frozen and every further mutation raises
:class:`~pomconf.exceptions.DescriptorFrozenError`.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, NamedTuple, Optional

from pomconf.constants import (
    DEFAULT_SCOPE,
    JAR_TYPE,
    JAVADOC_CONFIGURATION,
    MASTER_CONFIGURATION,
    MAVEN_NAMESPACE_PREFIX,
    MAVEN_NAMESPACE_URI,
    OPTIONAL_CONFIGURATION,
    PLUGINS_TAG,
    SOURCES_CONFIGURATION,
    STANDARD_CONFIGURATIONS,
)
from pomconf.core import artifacts
from pomconf.core import extra_info_codec as codec
from pomconf.core.locator import ArtifactLocator
from pomconf.core.management import management_source
from pomconf.core.scope_mapping import apply_scope_mapping, is_mapped_scope
from pomconf.models.coordinates import ModuleCoordinate, ModuleId
from pomconf.models.descriptor import (
    Artifact,
    Configuration,
    DependencyDescriptor,
    ExcludeRule,
    OverrideMediator,
    PomDependencyDescriptor,
    PomModuleDescriptor,
)
from pomconf.models.extra_info import ExtraInfo
from pomconf.models.records import (
    DependencyRecord,
    License,
    ManagementRecord,
    PluginRecord,
    SourceResource,
)
from pomconf.utils.logger import get_logger
from pomconf.utils.version_utils import get_status, is_blank

logger = get_logger("builder")

__all__ = ["MergeResult", "PomModuleDescriptorBuilder"]


class MergeResult(NamedTuple):
    """Outcome of looking up the dependency descriptor for a target.

    Attributes:
        descriptor: The descriptor to augment.
        created: ``True`` if the descriptor is new and still has to be
            registered on the module.
    """

    descriptor: DependencyDescriptor
    created: bool


def _has_wildcard_exclusion(exclusions: Iterable[ModuleId]) -> bool:
    return any(excluded is not None and excluded.is_wildcard() for excluded in exclusions)


class PomModuleDescriptorBuilder:
    """Assemble a :class:`PomModuleDescriptor` from POM records.

    Args:
        resource: Document the records come from. Its last-modified time
            becomes the descriptor's resolved publication date.
        locator: Used to check whether a ``pom`` packaged module still
            publishes a jar. Without one, such modules get no main artifact.
    """

    def __init__(
        self,
        resource: Optional[SourceResource] = None,
        locator: Optional[ArtifactLocator] = None,
    ) -> None:
        self.locator = locator
        self._main_artifact: Optional[Artifact] = None
        self._mrid: Optional[ModuleCoordinate] = None

        md = PomModuleDescriptor(resource)
        md.resolved_publication_date = resource.last_modified if resource else None
        for name, extends, description in STANDARD_CONFIGURATIONS:
            md.add_configuration(Configuration(name, description, extends))
        md.mapping_override = True
        md.add_extra_attribute_namespace(MAVEN_NAMESPACE_PREFIX, MAVEN_NAMESPACE_URI)
        self._md = md

    # ------------------------------------------------------------------
    # Result
    # ------------------------------------------------------------------

    @property
    def module_descriptor(self) -> PomModuleDescriptor:
        """The descriptor under construction."""
        return self._md

    def build(self) -> PomModuleDescriptor:
        """Freeze and return the descriptor."""
        self._md.freeze()
        logger.debug(
            "Built %s with %d dependencies",
            self._md.module_revision_id,
            len(self._md.dependencies),
        )
        return self._md

    # ------------------------------------------------------------------
    # Module metadata
    # ------------------------------------------------------------------

    def set_module_rev_id(self, group_id: str, artifact_id: str, version: Optional[str]) -> None:
        """Set the module coordinates and derive its status from the version."""
        self._mrid = ModuleCoordinate(group_id, artifact_id, version or None)
        self._md.module_revision_id = self._mrid
        self._md.status = get_status(self._mrid.version)

    def set_home_page(self, home_page: Optional[str]) -> None:
        self._md.home_page = home_page

    def set_description(self, description: Optional[str]) -> None:
        self._md.description = description

    def set_licenses(self, licenses: Iterable[License]) -> None:
        for license in licenses:
            self._md.add_license(license)

    def _require_mrid(self) -> ModuleCoordinate:
        if self._mrid is None:
            raise ValueError("Module coordinates must be set before adding artifacts")
        return self._mrid

    # ------------------------------------------------------------------
    # Module artifacts
    # ------------------------------------------------------------------

    def add_main_artifact(self, artifact_id: str, packaging: str) -> None:
        """Add the artifact the module publishes under ``master``.

        A ``pom`` packaged module publishes nothing unless the locator finds
        a jar for it anyway.
        """
        mrid = self._require_mrid()
        ext = artifacts.packaging_extension(packaging)

        if ext is None:
            candidate = artifacts.main_artifact(
                mrid, artifact_id, JAR_TYPE, JAR_TYPE, self._publication_date()
            )
            if self._locate(candidate):
                self._set_main_artifact(candidate)
            return

        self._set_main_artifact(
            artifacts.main_artifact(mrid, artifact_id, packaging, ext, self._publication_date())
        )

    def _set_main_artifact(self, artifact: Artifact) -> None:
        self._main_artifact = artifact
        self._md.add_artifact(MASTER_CONFIGURATION, artifact)

    def _publication_date(self) -> datetime:
        return self._md.resolved_publication_date or datetime.now()

    def _locate(self, artifact: Artifact) -> bool:
        if self.locator is None:
            logger.debug("No locator configured, skipping lookup of %s", artifact.name)
            return False
        try:
            origin = self.locator.locate(artifact)
        except Exception as exc:
            logger.debug("Locator failed for %s: %s", artifact.name, exc)
            return False
        if origin is None:
            logger.debug("No implicit jar found for %s", artifact.module_revision_id)
            return False
        return True

    @property
    def main_artifact(self) -> Optional[Artifact]:
        return self._main_artifact

    def source_artifact(self) -> Artifact:
        return artifacts.source_artifact(self._require_mrid())

    def src_artifact(self) -> Artifact:
        return artifacts.src_artifact(self._require_mrid())

    def javadoc_artifact(self) -> Artifact:
        return artifacts.javadoc_artifact(self._require_mrid())

    def add_source_artifact(self) -> None:
        self._md.add_artifact(SOURCES_CONFIGURATION, self.source_artifact())

    def add_src_artifact(self) -> None:
        self._md.add_artifact(SOURCES_CONFIGURATION, self.src_artifact())

    def add_javadoc_artifact(self) -> None:
        self._md.add_artifact(JAVADOC_CONFIGURATION, self.javadoc_artifact())

    # ------------------------------------------------------------------
    # Dependencies
    # ------------------------------------------------------------------

    def _is_self(self, module_id: ModuleId) -> bool:
        return self._mrid is not None and self._mrid.module_id == module_id

    def add_dependency(self, record: DependencyRecord) -> None:
        """Add a ``<dependency>`` declaration.

        Declarations of the same target module (same group, artifact and
        resolved version) are merged into one dependency descriptor, and the
        artifact set does not depend on declaration order. Dependencies on
        the module itself are dropped.
        """
        source = management_source(self._md)
        classified = record.classified_coordinate

        version = record.version
        if is_blank(version):
            version = source.get_version(classified)
        revision_id = ModuleCoordinate(record.group_id, record.artifact_id, version or None)

        if self._is_self(revision_id.module_id):
            logger.debug("Dropping dependency of %s on itself", self._mrid)
            return

        # An absent or empty <exclusions> inherits the managed ones.
        excluded: List[ModuleId] = list(record.excluded_modules)
        if not excluded:
            excluded = source.get_exclusions(classified)
        transitive = not _has_wildcard_exclusion(excluded)

        merge = self._merge_or_create(record, revision_id, transitive)
        dd = merge.descriptor
        existing_confs = [] if merge.created else dd.module_configurations

        scope = record.scope
        if is_blank(scope):
            scope = source.get_scope(classified)
        if scope is None or not is_mapped_scope(scope):
            scope = DEFAULT_SCOPE

        apply_scope_mapping(dd, scope, record.optional)
        artifact_conf = OPTIONAL_CONFIGURATION if record.optional else scope

        if artifacts.is_non_default_artifact(record.type, record.classifier):
            if not merge.created and not dd.all_dependency_artifacts:
                # The earlier declaration stood for the plain jar.
                default_conf = existing_confs[0] if len(existing_confs) == 1 else artifact_conf
                dd.add_dependency_artifact(
                    default_conf, artifacts.default_dependency_artifact(dd)
                )
            dd.add_dependency_artifact(
                artifact_conf,
                artifacts.classified_dependency_artifact(dd, record.type, record.classifier),
            )
        elif not merge.created:
            dd.add_dependency_artifact(artifact_conf, artifacts.default_dependency_artifact(dd))

        # A non-transitive dependency has nothing left to exclude.
        if transitive:
            for module_id in excluded:
                for conf in dd.module_configurations:
                    dd.add_exclude_rule(conf, ExcludeRule(module_id))

        if merge.created:
            self._md.add_dependency(dd)

    def _merge_or_create(
        self,
        record: DependencyRecord,
        revision_id: ModuleCoordinate,
        transitive: bool,
    ) -> MergeResult:
        existing = self._md.get_dependency(revision_id)
        if existing is not None:
            logger.debug("Merging declaration of %s into existing dependency", revision_id)
            return MergeResult(existing, created=False)
        return MergeResult(
            PomDependencyDescriptor(record, revision_id, transitive=transitive),
            created=True,
        )

    def add_dependency_descriptor(self, descriptor: DependencyDescriptor) -> None:
        """Add a pre-built dependency descriptor, e.g. one inherited from a parent."""
        if self._is_self(descriptor.dependency_id):
            logger.debug("Dropping dependency of %s on itself", self._mrid)
            return
        self._md.add_dependency(descriptor)

    # ------------------------------------------------------------------
    # Dependency management
    # ------------------------------------------------------------------

    def add_dependency_management(self, record: ManagementRecord) -> None:
        """Add a ``<dependencyManagement>`` entry.

        The entry is stored as a record and flattened into extra infos so
        that it can be read back from any descriptor. Transitive requests
        for the managed module are mediated to the managed version.
        """
        self._md.add_dependency_management(record)

        coordinate = record.classified_coordinate
        extra_infos = self._md.extra_infos
        extra_infos.put(codec.version_key(coordinate), record.version)
        if record.scope is not None:
            extra_infos.put(codec.scope_key(coordinate), record.scope)
        for index, module_id in enumerate(record.excluded_modules):
            extra_infos.put(
                codec.exclusion_key(coordinate, index), codec.encode_exclusion(module_id)
            )

        self._md.add_dependency_descriptor_mediator(
            OverrideMediator(coordinate.module_id, version=record.version)
        )

    # ------------------------------------------------------------------
    # Extra infos
    # ------------------------------------------------------------------

    def add_plugin(self, record: PluginRecord) -> None:
        extra_infos = self._md.extra_infos
        extra_infos.put(
            PLUGINS_TAG, codec.append_plugin(extra_infos.get_content(PLUGINS_TAG), record)
        )

    def add_property(self, name: str, value: Optional[str]) -> None:
        """Record a POM property. The first value recorded for a name wins."""
        self._md.extra_infos.add_if_absent(codec.property_key(name), value)

    def add_extra_infos(self, entries: Iterable[ExtraInfo]) -> None:
        """Copy ``entries`` that are not already present, keeping their order."""
        for entry in entries:
            self._md.extra_infos.add_if_absent(entry.name, entry.content)
