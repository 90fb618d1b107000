"""Flat key encoding for data stored in extra infos.

Dependency management, properties and plugins have no first-class slot in
a configuration-based descriptor, so they are written to the extra-info
store under structured names:

* management: ``m:dependency.management__<group>__<artifact>__<classifier>__<field>``
  where ``<field>`` is ``version``, ``scope`` or ``exclusion_<n>``; the
  content of an exclusion entry is ``<group>__<artifact>``. A missing
  classifier is written as ``null``.
* properties: ``m:properties__<name>``.
* plugins: one ``m:maven.plugins`` entry holding
  ``<group>__<artifact>__<version>`` items separated by ``|``.

Values containing the ``__`` delimiter are not escaped. Such keys decode
to the wrong number of parts and are rejected with
:class:`~pomconf.exceptions.ExtraInfoDecodeError`; callers skip them.
"""

from __future__ import annotations

from typing import List, NamedTuple, Optional

from pomconf.constants import (
    DEPENDENCY_MANAGEMENT_KEY_PARTS,
    DEPENDENCY_MANAGEMENT_TAG,
    EXTRA_INFO_DELIMITER,
    NULL_TOKEN,
    PLUGIN_SEPARATOR,
    PROPERTIES_TAG,
)
from pomconf.exceptions import ExtraInfoDecodeError
from pomconf.models.records import PluginRecord
from pomconf.models.coordinates import ClassifiedCoordinate, ModuleId

VERSION_FIELD = "version"
SCOPE_FIELD = "scope"
EXCLUSION_FIELD_PREFIX = "exclusion_"

#: Prefix shared by every dependency-management key.
MANAGEMENT_PREFIX = DEPENDENCY_MANAGEMENT_TAG + EXTRA_INFO_DELIMITER

#: Prefix shared by every property key.
PROPERTY_PREFIX = PROPERTIES_TAG + EXTRA_INFO_DELIMITER


class ManagementKey(NamedTuple):
    """A decoded dependency-management key."""

    coordinate: ClassifiedCoordinate
    field: str

    @property
    def is_version(self) -> bool:
        return self.field == VERSION_FIELD

    @property
    def is_scope(self) -> bool:
        return self.field == SCOPE_FIELD

    @property
    def is_exclusion(self) -> bool:
        return self.field.startswith(EXCLUSION_FIELD_PREFIX)


# ---------------------------------------------------------------------------
# Dependency management
# ---------------------------------------------------------------------------


def _encode_classifier(classifier: Optional[str]) -> str:
    return NULL_TOKEN if classifier is None else classifier


def _decode_classifier(token: str) -> Optional[str]:
    return None if token == NULL_TOKEN else token


def management_key_prefix(coordinate: ClassifiedCoordinate) -> str:
    """Return the key prefix shared by all fields of ``coordinate``."""
    return EXTRA_INFO_DELIMITER.join(
        (
            DEPENDENCY_MANAGEMENT_TAG,
            coordinate.group,
            coordinate.artifact,
            _encode_classifier(coordinate.classifier),
        )
    ) + EXTRA_INFO_DELIMITER


def management_key(coordinate: ClassifiedCoordinate, field: str) -> str:
    return management_key_prefix(coordinate) + field


def version_key(coordinate: ClassifiedCoordinate) -> str:
    return management_key(coordinate, VERSION_FIELD)


def scope_key(coordinate: ClassifiedCoordinate) -> str:
    return management_key(coordinate, SCOPE_FIELD)


def exclusion_prefix(coordinate: ClassifiedCoordinate) -> str:
    return management_key(coordinate, EXCLUSION_FIELD_PREFIX)


def exclusion_key(coordinate: ClassifiedCoordinate, index: int) -> str:
    return exclusion_prefix(coordinate) + str(index)


def is_management_key(key: str) -> bool:
    return key.startswith(MANAGEMENT_PREFIX)


def decode_management_key(key: str) -> ManagementKey:
    """Split a dependency-management key into coordinate and field.

    Raises:
        ExtraInfoDecodeError: The key is not a management key or does not
            have exactly five parts.
    """
    parts = key.split(EXTRA_INFO_DELIMITER)
    if len(parts) != DEPENDENCY_MANAGEMENT_KEY_PARTS or parts[0] != DEPENDENCY_MANAGEMENT_TAG:
        raise ExtraInfoDecodeError(
            "Dependency management key doesn't match expected pattern "
            f"(expected {DEPENDENCY_MANAGEMENT_KEY_PARTS} parts, got {len(parts)})",
            key=key,
        )
    _, group, artifact, classifier, field = parts
    return ManagementKey(
        ClassifiedCoordinate(group, artifact, _decode_classifier(classifier)),
        field,
    )


def encode_exclusion(module_id: ModuleId) -> str:
    return module_id.organisation + EXTRA_INFO_DELIMITER + module_id.name


def decode_exclusion(content: Optional[str], *, key: Optional[str] = None) -> ModuleId:
    """Decode the content of an exclusion entry.

    Raises:
        ExtraInfoDecodeError: The content does not have exactly two parts.
    """
    parts = (content or "").split(EXTRA_INFO_DELIMITER)
    if content is None or len(parts) != 2:
        raise ExtraInfoDecodeError(
            "Dependency management exclusion had the wrong number of parts "
            f"(should have 2, got {len(parts)})",
            key=key,
            content=content,
        )
    return ModuleId(parts[0], parts[1])


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


def property_key(name: str) -> str:
    return PROPERTY_PREFIX + name


def is_property_key(key: str) -> bool:
    return key.startswith(PROPERTY_PREFIX)


def decode_property_key(key: str) -> str:
    """Return the property name encoded in ``key``.

    Raises:
        ExtraInfoDecodeError: ``key`` is not a property key.
    """
    if not is_property_key(key):
        raise ExtraInfoDecodeError("Not a property key", key=key)
    return key[len(PROPERTY_PREFIX):]


# ---------------------------------------------------------------------------
# Plugins
# ---------------------------------------------------------------------------


def encode_plugin(plugin: PluginRecord) -> str:
    return EXTRA_INFO_DELIMITER.join(
        (plugin.group_id, plugin.artifact_id, plugin.version or NULL_TOKEN)
    )


def append_plugin(existing: Optional[str], plugin: PluginRecord) -> str:
    """Append ``plugin`` to the encoded plugin list ``existing``."""
    encoded = encode_plugin(plugin)
    if existing is None:
        return encoded
    return existing + PLUGIN_SEPARATOR + encoded


def decode_plugin(item: str) -> PluginRecord:
    """Decode one item of the plugin list.

    Raises:
        ExtraInfoDecodeError: The item does not have exactly three parts.
    """
    parts = item.split(EXTRA_INFO_DELIMITER)
    if len(parts) != 3:
        raise ExtraInfoDecodeError(
            f"Plugin entry had the wrong number of parts (should have 3, got {len(parts)})",
            content=item,
        )
    group_id, artifact_id, version = parts
    return PluginRecord(group_id, artifact_id, None if version == NULL_TOKEN else version)


def split_plugins(content: Optional[str]) -> List[str]:
    if not content:
        return []
    return content.split(PLUGIN_SEPARATOR)
