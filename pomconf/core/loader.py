"""Load POM record documents and build descriptors from them.

A record document is the JSON rendering of a parsed POM. XML parsing and
parent resolution happen upstream; the document carries their result::

    {
      "module": {
        "group_id": "org.example", "artifact_id": "app", "version": "1.0",
        "packaging": "jar", "home_page": "https://example.org",
        "description": "Example application"
      },
      "licenses": [{"name": "Apache-2.0", "url": "https://..."}],
      "properties": {"java.version": "17"},
      "inherited_extra_infos": {"m:properties__encoding": "UTF-8"},
      "dependency_management": [
        {"group_id": "org.slf4j", "artifact_id": "slf4j-api", "version": "2.0.9",
         "scope": "runtime", "exclusions": ["org.example:legacy"]}
      ],
      "dependencies": [
        {"group_id": "org.slf4j", "artifact_id": "slf4j-api"},
        {"group_id": "org.example", "artifact_id": "util", "version": "1.0",
         "type": "test-jar", "scope": "test", "optional": false}
      ],
      "plugins": [{"group_id": "org.apache.maven.plugins",
                   "artifact_id": "maven-compiler-plugin", "version": "3.11.0"}],
      "artifacts": {"sources": true, "src": false, "javadoc": true}
    }

Only ``module.group_id`` and ``module.artifact_id`` are required.
Exclusions may be written ``"group:artifact"`` or ``["group", "artifact"]``.

Records are applied in the order a POM parser emits them: module metadata,
main artifact, properties, dependency management, inherited extra infos,
dependencies, plugins and finally the attached artifacts.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from pomconf.core.builder import PomModuleDescriptorBuilder
from pomconf.core.locator import ArtifactLocator
from pomconf.exceptions import ParseError
from pomconf.models.coordinates import ModuleId
from pomconf.models.descriptor import PomModuleDescriptor
from pomconf.models.extra_info import ExtraInfo
from pomconf.models.records import (
    DependencyRecord,
    License,
    ManagementRecord,
    PluginRecord,
    SourceResource,
)
from pomconf.utils.filesystem import last_modified, read_json_document
from pomconf.utils.logger import get_logger

logger = get_logger("loader")

DEFAULT_PACKAGING = "jar"


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------


class _Fields:
    """Typed access to one JSON object, reporting errors with their path."""

    def __init__(self, data: Any, path: str, file_path: Optional[str]) -> None:
        if not isinstance(data, dict):
            raise ParseError(
                f"Expected an object, got {type(data).__name__}",
                file_path=file_path,
                field=path,
            )
        self.data: Dict[str, Any] = data
        self.path = path
        self.file_path = file_path

    def _error(self, key: str, message: str) -> ParseError:
        return ParseError(message, file_path=self.file_path, field=f"{self.path}.{key}")

    def required_str(self, key: str) -> str:
        value = self.data.get(key)
        if not isinstance(value, str) or not value:
            raise self._error(key, "Missing or empty required string")
        return value

    def optional_str(self, key: str) -> Optional[str]:
        value = self.data.get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise self._error(key, f"Expected a string, got {type(value).__name__}")
        return value

    def optional_bool(self, key: str, default: bool = False) -> bool:
        value = self.data.get(key, default)
        if not isinstance(value, bool):
            raise self._error(key, f"Expected a boolean, got {type(value).__name__}")
        return value

    def exclusions(self, key: str = "exclusions") -> List[ModuleId]:
        value = self.data.get(key) or []
        if not isinstance(value, list):
            raise self._error(key, "Expected a list of exclusions")
        return [self._exclusion(item, f"{key}[{index}]") for index, item in enumerate(value)]

    def _exclusion(self, item: Any, key: str) -> ModuleId:
        if isinstance(item, str):
            parts = item.split(":")
        elif isinstance(item, list):
            parts = item
        else:
            raise self._error(key, "Exclusion must be 'group:artifact' or [group, artifact]")
        if len(parts) != 2 or not all(isinstance(part, str) and part for part in parts):
            raise self._error(key, f"Malformed exclusion: {item!r}")
        return ModuleId(parts[0], parts[1])


def _objects(document: Mapping[str, Any], key: str, file_path: Optional[str]) -> List[_Fields]:
    value = document.get(key) or []
    if not isinstance(value, list):
        raise ParseError("Expected a list", file_path=file_path, field=key)
    return [_Fields(item, f"{key}[{index}]", file_path) for index, item in enumerate(value)]


def _string_map(
    document: Mapping[str, Any], key: str, file_path: Optional[str]
) -> Dict[str, Optional[str]]:
    value = document.get(key) or {}
    if not isinstance(value, dict):
        raise ParseError("Expected an object", file_path=file_path, field=key)
    for name, content in value.items():
        if content is not None and not isinstance(content, str):
            raise ParseError(
                f"Expected a string value, got {type(content).__name__}",
                file_path=file_path,
                field=f"{key}.{name}",
            )
    return dict(value)


# ---------------------------------------------------------------------------
# Record conversion
# ---------------------------------------------------------------------------


def _dependency_record(fields: _Fields) -> DependencyRecord:
    return DependencyRecord(
        group_id=fields.required_str("group_id"),
        artifact_id=fields.required_str("artifact_id"),
        version=fields.optional_str("version"),
        scope=fields.optional_str("scope"),
        classifier=fields.optional_str("classifier") or None,
        type=fields.optional_str("type") or None,
        optional=fields.optional_bool("optional"),
        excluded_modules=fields.exclusions(),
    )


def _management_record(fields: _Fields) -> ManagementRecord:
    return ManagementRecord(
        group_id=fields.required_str("group_id"),
        artifact_id=fields.required_str("artifact_id"),
        version=fields.optional_str("version"),
        scope=fields.optional_str("scope"),
        classifier=fields.optional_str("classifier") or None,
        excluded_modules=fields.exclusions(),
    )


def _plugin_record(fields: _Fields) -> PluginRecord:
    return PluginRecord(
        group_id=fields.required_str("group_id"),
        artifact_id=fields.required_str("artifact_id"),
        version=fields.optional_str("version"),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def build_descriptor(
    document: Any,
    *,
    resource: Optional[SourceResource] = None,
    locator: Optional[ArtifactLocator] = None,
) -> PomModuleDescriptor:
    """Drive a :class:`PomModuleDescriptorBuilder` with a decoded record document.

    Args:
        document: Decoded JSON document.
        resource: Resource the document was read from.
        locator: Locator used for ``pom`` packaged modules.

    Returns:
        The frozen descriptor.

    Raises:
        ParseError: The document does not have the expected shape.
    """
    file_path = resource.name if resource else None
    if not isinstance(document, dict):
        raise ParseError("Record document must be a JSON object", file_path=file_path)

    module = _Fields(document.get("module"), "module", file_path)
    group_id = module.required_str("group_id")
    artifact_id = module.required_str("artifact_id")

    builder = PomModuleDescriptorBuilder(resource, locator=locator)
    builder.set_module_rev_id(group_id, artifact_id, module.optional_str("version"))
    builder.set_home_page(module.optional_str("home_page"))
    builder.set_description(module.optional_str("description"))
    builder.set_licenses(
        License(fields.required_str("name"), fields.optional_str("url"))
        for fields in _objects(document, "licenses", file_path)
    )
    builder.add_main_artifact(artifact_id, module.optional_str("packaging") or DEFAULT_PACKAGING)

    for name, value in _string_map(document, "properties", file_path).items():
        builder.add_property(name, value)
    for fields in _objects(document, "dependency_management", file_path):
        builder.add_dependency_management(_management_record(fields))
    builder.add_extra_infos(
        ExtraInfo(name, content)
        for name, content in _string_map(document, "inherited_extra_infos", file_path).items()
    )
    for fields in _objects(document, "dependencies", file_path):
        builder.add_dependency(_dependency_record(fields))
    for fields in _objects(document, "plugins", file_path):
        builder.add_plugin(_plugin_record(fields))

    attached = _Fields(document.get("artifacts") or {}, "artifacts", file_path)
    if attached.optional_bool("sources"):
        builder.add_source_artifact()
    if attached.optional_bool("src"):
        builder.add_src_artifact()
    if attached.optional_bool("javadoc"):
        builder.add_javadoc_artifact()

    return builder.build()


def load_descriptor(
    file_path: Union[str, Path],
    *,
    locator: Optional[ArtifactLocator] = None,
) -> PomModuleDescriptor:
    """Read a record document from ``file_path`` and build its descriptor.

    Raises:
        FileOperationError: The file cannot be read.
        ParseError: The file is not a valid record document.
    """
    document = read_json_document(file_path)
    mtime = last_modified(file_path)
    resource = SourceResource(
        name=str(file_path),
        last_modified=datetime.fromtimestamp(mtime) if mtime is not None else None,
    )
    logger.debug("Building descriptor from %s", file_path)
    return build_descriptor(document, resource=resource, locator=locator)


def load_extra_infos(file_path: Union[str, Path]) -> List[ExtraInfo]:
    """Read a flat ``{name: content}`` extra-info document.

    Raises:
        FileOperationError: The file cannot be read.
        ParseError: The document is not an object of string values.
    """
    document = read_json_document(file_path)
    if not isinstance(document, dict):
        raise ParseError("Extra-info document must be a JSON object", file_path=str(file_path))
    entries = _string_map({"extra_infos": document}, "extra_infos", str(file_path))
    return [ExtraInfo(name, content) for name, content in entries.items()]
