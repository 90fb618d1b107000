from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict
from unittest.mock import MagicMock

import pytest

from pomconf.core.loader import build_descriptor, load_descriptor, load_extra_infos
from pomconf.core.locator import ArtifactOrigin
from pomconf.exceptions import FileOperationError, ParseError
from pomconf.models import ModuleCoordinate, ModuleId, SourceResource


@pytest.fixture
def document() -> Dict[str, Any]:
    return {
        "module": {
            "group_id": "org.example",
            "artifact_id": "app",
            "version": "1.0-SNAPSHOT",
            "home_page": "https://example.org",
            "description": "Example application",
        },
        "licenses": [{"name": "Apache-2.0", "url": "https://www.apache.org/licenses/"}],
        "properties": {"java.version": "17"},
        "inherited_extra_infos": {
            "m:properties__java.version": "11",
            "m:properties__encoding": "UTF-8",
        },
        "dependency_management": [
            {
                "group_id": "org.slf4j",
                "artifact_id": "slf4j-api",
                "version": "2.0.9",
                "scope": "runtime",
                "exclusions": ["org.example:legacy"],
            }
        ],
        "dependencies": [
            {"group_id": "org.slf4j", "artifact_id": "slf4j-api"},
            {
                "group_id": "org.example",
                "artifact_id": "util",
                "version": "1.0",
                "type": "test-jar",
                "scope": "test",
            },
        ],
        "plugins": [
            {
                "group_id": "org.apache.maven.plugins",
                "artifact_id": "maven-compiler-plugin",
                "version": "3.11.0",
            }
        ],
        "artifacts": {"sources": True, "javadoc": True},
    }


@pytest.mark.unit
class TestBuildDescriptor:
    """Tests for build_descriptor."""

    def test_module_metadata(self, document: Dict[str, Any]) -> None:
        md = build_descriptor(document)

        assert md.module_revision_id == ModuleCoordinate("org.example", "app", "1.0-SNAPSHOT")
        assert md.status == "integration"
        assert md.home_page == "https://example.org"
        assert md.description == "Example application"
        assert md.licenses[0].name == "Apache-2.0"
        assert md.frozen is True

    def test_main_and_attached_artifacts(self, document: Dict[str, Any]) -> None:
        md = build_descriptor(document)

        assert [a.ext for a in md.get_artifacts("master")] == ["jar"]
        assert [a.classifier for a in md.get_artifacts("sources")] == ["sources"]
        assert [a.classifier for a in md.get_artifacts("javadoc")] == ["javadoc"]

    def test_dependencies_use_management(self, document: Dict[str, Any]) -> None:
        md = build_descriptor(document)

        slf4j, util = md.dependencies
        assert slf4j.dependency_revision_id.version == "2.0.9"
        assert slf4j.module_configurations == ["runtime"]
        assert [r.module_id for r in slf4j.all_exclude_rules] == [ModuleId("org.example", "legacy")]
        assert util.module_configurations == ["test"]
        assert util.all_dependency_artifacts[0].classifier == "tests"

    def test_own_properties_win_over_inherited(self, document: Dict[str, Any]) -> None:
        md = build_descriptor(document)

        assert md.extra_infos.get_content("m:properties__java.version") == "17"
        assert md.extra_infos.get_content("m:properties__encoding") == "UTF-8"

    def test_plugins_recorded(self, document: Dict[str, Any]) -> None:
        md = build_descriptor(document)

        assert md.extra_infos.get_content("m:maven.plugins") == (
            "org.apache.maven.plugins__maven-compiler-plugin__3.11.0"
        )

    def test_minimal_document(self) -> None:
        md = build_descriptor({"module": {"group_id": "g", "artifact_id": "a"}})

        assert md.module_revision_id == ModuleCoordinate("g", "a", None)
        assert md.dependencies == []
        assert [a.type for a in md.all_artifacts] == ["jar"]

    def test_pom_packaging_probes_locator(self) -> None:
        locator = MagicMock()
        locator.locate.return_value = ArtifactOrigin("https://repo/a.jar")

        md = build_descriptor(
            {"module": {"group_id": "g", "artifact_id": "a", "version": "1", "packaging": "pom"}},
            locator=locator,
        )

        assert [a.type for a in md.get_artifacts("master")] == ["jar"]

    def test_resource_stamps_descriptor(self) -> None:
        resource = SourceResource("a.json")

        md = build_descriptor({"module": {"group_id": "g", "artifact_id": "a"}}, resource=resource)

        assert md.resource is resource

    @pytest.mark.parametrize(
        "document,field",
        [
            ({"module": {"artifact_id": "a"}}, "module.group_id"),
            ({"module": {"group_id": "g", "artifact_id": ""}}, "module.artifact_id"),
            ({"module": {"group_id": "g", "artifact_id": "a", "version": 1}}, "module.version"),
            (
                {"module": {"group_id": "g", "artifact_id": "a"}, "dependencies": {"x": 1}},
                "dependencies",
            ),
            (
                {
                    "module": {"group_id": "g", "artifact_id": "a"},
                    "dependencies": [{"group_id": "x", "artifact_id": "y", "optional": "yes"}],
                },
                "dependencies[0].optional",
            ),
            (
                {
                    "module": {"group_id": "g", "artifact_id": "a"},
                    "dependencies": [
                        {"group_id": "x", "artifact_id": "y", "exclusions": ["bad"]}
                    ],
                },
                "dependencies[0].exclusions[0]",
            ),
            (
                {"module": {"group_id": "g", "artifact_id": "a"}, "properties": {"k": 1}},
                "properties.k",
            ),
        ],
        ids=[
            "missing-group",
            "empty-artifact",
            "non-string-version",
            "dependencies-not-list",
            "non-bool-optional",
            "bad-exclusion",
            "non-string-property",
        ],
    )
    def test_invalid_documents(self, document: Dict[str, Any], field: str) -> None:
        with pytest.raises(ParseError) as exc_info:
            build_descriptor(document)

        assert exc_info.value.field == field

    def test_document_not_an_object(self) -> None:
        with pytest.raises(ParseError):
            build_descriptor([])

    def test_blank_classifier_and_type_mean_absent(self) -> None:
        md = build_descriptor(
            {
                "module": {"group_id": "g", "artifact_id": "a"},
                "dependency_management": [
                    {"group_id": "x", "artifact_id": "y", "version": "2.0", "classifier": ""}
                ],
                "dependencies": [
                    {"group_id": "x", "artifact_id": "y", "classifier": "", "type": ""}
                ],
            }
        )

        (dd,) = md.dependencies
        assert dd.dependency_revision_id.version == "2.0"
        assert dd.all_dependency_artifacts == []
        assert [c.classifier for c in md.dependency_management_map] == [None]

    def test_exclusion_as_pair(self) -> None:
        md = build_descriptor(
            {
                "module": {"group_id": "g", "artifact_id": "a"},
                "dependencies": [
                    {"group_id": "x", "artifact_id": "y", "version": "1", "exclusions": [["p", "q"]]}
                ],
            }
        )

        assert md.dependencies[0].all_exclude_rules[0].module_id == ModuleId("p", "q")


@pytest.mark.unit
class TestLoadFromFiles:
    """Tests for load_descriptor and load_extra_infos."""

    def test_load_descriptor(self, tmp_path: Path, document: Dict[str, Any]) -> None:
        path = tmp_path / "app.json"
        path.write_text(json.dumps(document), encoding="utf-8")

        md = load_descriptor(path)

        assert md.resource.name == str(path)
        assert md.resolved_publication_date is not None
        (main,) = md.get_artifacts("master")
        assert main.publication_date == md.resolved_publication_date

    def test_load_descriptor_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileOperationError):
            load_descriptor(tmp_path / "missing.json")

    def test_load_descriptor_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ParseError):
            load_descriptor(path)

    def test_load_extra_infos(self, tmp_path: Path) -> None:
        path = tmp_path / "extras.json"
        path.write_text(
            json.dumps({"m:properties__a": "1", "m:maven.plugins": "g__a__1"}),
            encoding="utf-8",
        )

        entries = load_extra_infos(path)

        assert [(e.name, e.content) for e in entries] == [
            ("m:properties__a", "1"),
            ("m:maven.plugins", "g__a__1"),
        ]

    def test_load_extra_infos_not_object(self, tmp_path: Path) -> None:
        path = tmp_path / "extras.json"
        path.write_text("[]", encoding="utf-8")

        with pytest.raises(ParseError):
            load_extra_infos(path)
