"""Read-side access to dependency management, properties and plugins.

Dependency management lives in two places: the structured map of a
:class:`~pomconf.models.descriptor.PomModuleDescriptor`, and the flattened
extra infos that every descriptor carries (and that survive when a
descriptor is written out and read back as a generic one).

:class:`ManagementSource` is the single read capability over both. Use
:func:`management_source` to get the variant matching a descriptor:

* :class:`StructuredManagementSource` reads the structured map and falls
  back to the extra infos for entries only present there, e.g. entries
  inherited from a parent descriptor.
* :class:`ExtraInfoManagementSource` decodes the extra infos.

Malformed extra-info entries are logged and skipped; they never abort a
read.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from pomconf.constants import PLUGINS_TAG
from pomconf.exceptions import ExtraInfoDecodeError
from pomconf.core import extra_info_codec as codec
from pomconf.utils.logger import get_logger
from pomconf.models.extra_info import ExtraInfo, ExtraInfoStore
from pomconf.models.records import ManagementRecord, PluginRecord
from pomconf.models.coordinates import ClassifiedCoordinate, ModuleId
from pomconf.models.descriptor import ModuleDescriptor, PomModuleDescriptor

logger = get_logger("management")

__all__ = [
    "ManagementSource",
    "StructuredManagementSource",
    "ExtraInfoManagementSource",
    "management_source",
    "get_dependency_managements",
    "get_dependency_management_map",
    "get_plugins",
    "extract_pom_properties",
]


class ManagementSource:
    """Read access to the dependency management of one descriptor."""

    def get_record(self, coordinate: ClassifiedCoordinate) -> Optional[ManagementRecord]:
        raise NotImplementedError

    def records(self) -> List[ManagementRecord]:
        """Return every management record, one per classified coordinate."""
        raise NotImplementedError

    def get_version(self, coordinate: ClassifiedCoordinate) -> Optional[str]:
        record = self.get_record(coordinate)
        return record.version if record is not None else None

    def get_scope(self, coordinate: ClassifiedCoordinate) -> Optional[str]:
        record = self.get_record(coordinate)
        return record.scope if record is not None else None

    def get_exclusions(self, coordinate: ClassifiedCoordinate) -> List[ModuleId]:
        record = self.get_record(coordinate)
        return list(record.excluded_modules) if record is not None else []

    def version_map(self) -> Dict[ClassifiedCoordinate, Optional[str]]:
        return {record.classified_coordinate: record.version for record in self.records()}


class ExtraInfoManagementSource(ManagementSource):
    """Dependency management decoded from flattened extra infos."""

    def __init__(self, extra_infos: Iterable[ExtraInfo]) -> None:
        self._store = (
            extra_infos if isinstance(extra_infos, ExtraInfoStore) else ExtraInfoStore(extra_infos)
        )

    def _decoded_keys(self) -> Iterable[codec.ManagementKey]:
        for entry in self._store.with_prefix(codec.MANAGEMENT_PREFIX):
            try:
                yield codec.decode_management_key(entry.name)
            except ExtraInfoDecodeError as exc:
                logger.warning("Skipping dependency management extra info: %s", exc)

    def _exclusions(self, coordinate: ClassifiedCoordinate) -> List[ModuleId]:
        exclusions: List[ModuleId] = []
        for entry in self._store.with_prefix(codec.exclusion_prefix(coordinate)):
            try:
                exclusions.append(codec.decode_exclusion(entry.content, key=entry.name))
            except ExtraInfoDecodeError as exc:
                logger.error("Skipping dependency management exclusion: %s", exc)
        return exclusions

    def _has_entries(self, coordinate: ClassifiedCoordinate) -> bool:
        return bool(self._store.with_prefix(codec.management_key_prefix(coordinate)))

    def get_record(self, coordinate: ClassifiedCoordinate) -> Optional[ManagementRecord]:
        if not self._has_entries(coordinate):
            return None
        return ManagementRecord(
            group_id=coordinate.group,
            artifact_id=coordinate.artifact,
            classifier=coordinate.classifier,
            version=self.get_version(coordinate),
            scope=self.get_scope(coordinate),
            excluded_modules=self._exclusions(coordinate),
        )

    def get_version(self, coordinate: ClassifiedCoordinate) -> Optional[str]:
        return self._store.get_content(codec.version_key(coordinate))

    def get_scope(self, coordinate: ClassifiedCoordinate) -> Optional[str]:
        return self._store.get_content(codec.scope_key(coordinate))

    def get_exclusions(self, coordinate: ClassifiedCoordinate) -> List[ModuleId]:
        return self._exclusions(coordinate)

    def records(self) -> List[ManagementRecord]:
        coordinates: List[ClassifiedCoordinate] = []
        for key in self._decoded_keys():
            if key.coordinate not in coordinates:
                coordinates.append(key.coordinate)
        records = []
        for coordinate in coordinates:
            record = self.get_record(coordinate)
            if record is not None:
                records.append(record)
        return records

    def version_map(self) -> Dict[ClassifiedCoordinate, Optional[str]]:
        versions: Dict[ClassifiedCoordinate, Optional[str]] = {}
        for entry in self._store.with_prefix(codec.MANAGEMENT_PREFIX):
            try:
                key = codec.decode_management_key(entry.name)
            except ExtraInfoDecodeError as exc:
                logger.warning("Skipping dependency management extra info: %s", exc)
                continue
            if key.is_version:
                versions[key.coordinate] = entry.content
        return versions


class StructuredManagementSource(ManagementSource):
    """Dependency management read from a :class:`PomModuleDescriptor` map.

    Point lookups for coordinates missing from the map fall back to the
    descriptor's extra infos.
    """

    def __init__(self, descriptor: PomModuleDescriptor) -> None:
        self._descriptor = descriptor
        self._fallback = ExtraInfoManagementSource(descriptor.extra_infos)

    def get_record(self, coordinate: ClassifiedCoordinate) -> Optional[ManagementRecord]:
        record = self._descriptor.dependency_management_map.get(coordinate)
        if record is not None:
            return record
        return self._fallback.get_record(coordinate)

    def records(self) -> List[ManagementRecord]:
        return list(self._descriptor.dependency_management_map.values())


def management_source(descriptor: ModuleDescriptor) -> ManagementSource:
    """Return the management reader suited to ``descriptor``."""
    if isinstance(descriptor, PomModuleDescriptor):
        return StructuredManagementSource(descriptor)
    return ExtraInfoManagementSource(descriptor.extra_infos)


# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------


def get_dependency_managements(descriptor: ModuleDescriptor) -> List[ManagementRecord]:
    """Return the dependency-management records of ``descriptor``."""
    return management_source(descriptor).records()


def get_dependency_management_map(
    descriptor: ModuleDescriptor,
) -> Dict[ClassifiedCoordinate, Optional[str]]:
    """Return managed versions keyed by classified coordinate."""
    return management_source(descriptor).version_map()


def get_plugins(descriptor: ModuleDescriptor) -> List[PluginRecord]:
    """Return the plugins recorded on ``descriptor``, in declaration order."""
    plugins: List[PluginRecord] = []
    for item in codec.split_plugins(descriptor.extra_infos.get_content(PLUGINS_TAG)):
        try:
            plugins.append(codec.decode_plugin(item))
        except ExtraInfoDecodeError as exc:
            logger.warning("Skipping plugin extra info: %s", exc)
    return plugins


def extract_pom_properties(extra_infos: Iterable[ExtraInfo]) -> Dict[str, Optional[str]]:
    """Return the POM properties stored in ``extra_infos`` by name."""
    properties: Dict[str, Optional[str]] = {}
    for entry in extra_infos:
        if codec.is_property_key(entry.name):
            properties[codec.decode_property_key(entry.name)] = entry.content
    return properties
