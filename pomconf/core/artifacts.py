"""Artifact synthesis for POM modules and their dependencies.

Maps packagings and dependency types onto artifact types and extensions,
and builds the artifacts a POM only implies: the default jar of a
dependency, and the source, src and javadoc artifacts of a module.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, NamedTuple, Optional

from pomconf.constants import (
    CLASSIFIER_ATTRIBUTE,
    JAR_PACKAGINGS,
    JAR_TYPE,
    PACKAGING_EXTENSIONS,
    POM_PACKAGING,
    TEST_JAR_TYPE,
    TESTS_CLASSIFIER,
)
from pomconf.models.coordinates import ModuleCoordinate
from pomconf.models.descriptor import Artifact, DependencyArtifact, DependencyDescriptor

SOURCE_TYPE = "source"
JAVADOC_TYPE = "javadoc"

SOURCES_CLASSIFIER = "sources"
SRC_CLASSIFIER = "src"
JAVADOC_CLASSIFIER = "javadoc"


class ArtifactShape(NamedTuple):
    """Type, extension and extra attributes of a dependency artifact."""

    type: str
    ext: str
    extra_attributes: Dict[str, str]


def packaging_extension(packaging: str) -> Optional[str]:
    """Return the extension of the main artifact for ``packaging``.

    Returns ``None`` for ``pom`` packaging, which publishes no artifact of
    its own.

    Examples:
        >>> packaging_extension("bundle")
        'jar'
        >>> packaging_extension("pear")
        'phar'
        >>> packaging_extension("war")
        'war'
    """
    if packaging == POM_PACKAGING:
        return None
    if packaging in JAR_PACKAGINGS:
        return JAR_TYPE
    return PACKAGING_EXTENSIONS.get(packaging, packaging)


def dependency_artifact_shape(dep_type: Optional[str], classifier: Optional[str]) -> ArtifactShape:
    """Derive the artifact of a dependency declaring a type and/or classifier.

    ``test-jar`` means a jar classified ``tests``; jar-like types are
    published as jars; any other type is its own extension. An explicit
    classifier always wins.
    """
    artifact_type = dep_type or JAR_TYPE
    ext = artifact_type
    extra: Dict[str, str] = {}

    if artifact_type == TEST_JAR_TYPE:
        ext = JAR_TYPE
        extra[CLASSIFIER_ATTRIBUTE] = TESTS_CLASSIFIER
    elif artifact_type in JAR_PACKAGINGS:
        ext = JAR_TYPE

    if classifier is not None:
        extra[CLASSIFIER_ATTRIBUTE] = classifier

    return ArtifactShape(artifact_type, ext, extra)


def is_non_default_artifact(dep_type: Optional[str], classifier: Optional[str]) -> bool:
    """Return True unless the dependency targets the plain jar."""
    return classifier is not None or (dep_type is not None and dep_type != JAR_TYPE)


def default_dependency_artifact(dd: DependencyDescriptor) -> DependencyArtifact:
    """Return the plain jar artifact of ``dd``'s target."""
    return DependencyArtifact(name=dd.dependency_id.name, type=JAR_TYPE, ext=JAR_TYPE)


def classified_dependency_artifact(
    dd: DependencyDescriptor,
    dep_type: Optional[str],
    classifier: Optional[str],
) -> DependencyArtifact:
    shape = dependency_artifact_shape(dep_type, classifier)
    return DependencyArtifact(
        name=dd.dependency_id.name,
        type=shape.type,
        ext=shape.ext,
        extra_attributes=shape.extra_attributes,
    )


def main_artifact(
    mrid: ModuleCoordinate,
    artifact_id: str,
    artifact_type: str,
    ext: str,
    publication_date: Optional[datetime] = None,
) -> Artifact:
    return Artifact(
        module_revision_id=mrid,
        name=artifact_id,
        type=artifact_type,
        ext=ext,
        publication_date=publication_date,
    )


def _classified_module_artifact(
    mrid: ModuleCoordinate, artifact_type: str, classifier: str
) -> Artifact:
    return Artifact(
        module_revision_id=mrid,
        name=mrid.artifact,
        type=artifact_type,
        ext=JAR_TYPE,
        extra_attributes={CLASSIFIER_ATTRIBUTE: classifier},
    )


def source_artifact(mrid: ModuleCoordinate) -> Artifact:
    return _classified_module_artifact(mrid, SOURCE_TYPE, SOURCES_CLASSIFIER)


def src_artifact(mrid: ModuleCoordinate) -> Artifact:
    return _classified_module_artifact(mrid, SOURCE_TYPE, SRC_CLASSIFIER)


def javadoc_artifact(mrid: ModuleCoordinate) -> Artifact:
    return _classified_module_artifact(mrid, JAVADOC_TYPE, JAVADOC_CLASSIFIER)
