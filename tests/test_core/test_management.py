from __future__ import annotations

from unittest.mock import patch

import pytest

from pomconf.core.builder import PomModuleDescriptorBuilder
from pomconf.core.management import (
    ExtraInfoManagementSource,
    StructuredManagementSource,
    extract_pom_properties,
    get_dependency_management_map,
    get_dependency_managements,
    get_plugins,
    management_source,
)
from pomconf.models import (
    ClassifiedCoordinate,
    ExtraInfo,
    ManagementRecord,
    ModuleDescriptor,
    ModuleId,
    PomModuleDescriptor,
)


def _generic(entries: dict) -> ModuleDescriptor:
    md = ModuleDescriptor()
    for name, content in entries.items():
        md.extra_infos.add_if_absent(name, content)
    return md


@pytest.fixture
def flat_entries() -> dict:
    return {
        "m:dependency.management__org.dep__lib__null__version": "1.0",
        "m:dependency.management__org.dep__lib__null__scope": "test",
        "m:dependency.management__org.dep__lib__null__exclusion_0": "x__y",
        "m:dependency.management__org.dep__lib__null__exclusion_1": "p__q",
        "m:dependency.management__org.dep__lib__jdk8__version": "1.1",
        "m:properties__java.version": "17",
        "unrelated": "value",
    }


@pytest.mark.unit
class TestManagementSourceSelection:
    """Tests for management_source dispatch."""

    def test_pom_descriptor_uses_structured_source(self) -> None:
        assert isinstance(management_source(PomModuleDescriptor()), StructuredManagementSource)

    def test_generic_descriptor_uses_extra_infos(self) -> None:
        assert isinstance(management_source(ModuleDescriptor()), ExtraInfoManagementSource)


@pytest.mark.unit
class TestExtraInfoManagementSource:
    """Tests for decoding management from extra infos."""

    def test_one_record_per_coordinate(self, flat_entries: dict) -> None:
        records = get_dependency_managements(_generic(flat_entries))

        assert [r.classified_coordinate for r in records] == [
            ClassifiedCoordinate("org.dep", "lib", None),
            ClassifiedCoordinate("org.dep", "lib", "jdk8"),
        ]

    def test_record_fields(self, flat_entries: dict) -> None:
        record = get_dependency_managements(_generic(flat_entries))[0]

        assert record.version == "1.0"
        assert record.scope == "test"
        assert record.excluded_modules == (ModuleId("x", "y"), ModuleId("p", "q"))

    def test_version_map(self, flat_entries: dict) -> None:
        versions = get_dependency_management_map(_generic(flat_entries))

        assert versions == {
            ClassifiedCoordinate("org.dep", "lib", None): "1.0",
            ClassifiedCoordinate("org.dep", "lib", "jdk8"): "1.1",
        }

    def test_version_map_ignores_other_fields(self) -> None:
        md = _generic({"m:dependency.management__g__a__null__scope": "runtime"})

        assert get_dependency_management_map(md) == {}

    def test_point_lookups(self, flat_entries: dict) -> None:
        source = ExtraInfoManagementSource(_generic(flat_entries).extra_infos)
        coordinate = ClassifiedCoordinate("org.dep", "lib")

        assert source.get_version(coordinate) == "1.0"
        assert source.get_scope(coordinate) == "test"
        assert source.get_exclusions(coordinate) == [ModuleId("x", "y"), ModuleId("p", "q")]

    def test_missing_coordinate(self, flat_entries: dict) -> None:
        source = ExtraInfoManagementSource(_generic(flat_entries).extra_infos)
        missing = ClassifiedCoordinate("org.other", "lib")

        assert source.get_record(missing) is None
        assert source.get_version(missing) is None
        assert source.get_exclusions(missing) == []

    def test_accepts_plain_entries(self) -> None:
        source = ExtraInfoManagementSource(
            [ExtraInfo("m:dependency.management__g__a__null__version", "2.0")]
        )

        assert source.get_version(ClassifiedCoordinate("g", "a")) == "2.0"

    def test_malformed_key_skipped(self) -> None:
        md = _generic(
            {
                "m:dependency.management__g__a__version": "1.0",
                "m:dependency.management__g__b__null__version": "2.0",
            }
        )

        with patch("pomconf.core.management.logger") as mock_logger:
            records = get_dependency_managements(md)

        assert [r.artifact_id for r in records] == ["b"]
        mock_logger.warning.assert_called()

    def test_malformed_exclusion_skipped(self) -> None:
        md = _generic(
            {
                "m:dependency.management__g__a__null__version": "1.0",
                "m:dependency.management__g__a__null__exclusion_0": "broken",
                "m:dependency.management__g__a__null__exclusion_1": "x__y",
            }
        )

        with patch("pomconf.core.management.logger") as mock_logger:
            (record,) = get_dependency_managements(md)

        assert record.excluded_modules == (ModuleId("x", "y"),)
        mock_logger.error.assert_called_once()


@pytest.mark.unit
class TestStructuredManagementSource:
    """Tests for reading management from the structured map."""

    def test_reads_structured_records(self) -> None:
        md = PomModuleDescriptor()
        record = ManagementRecord("g", "a", "1.0", scope="runtime")
        md.add_dependency_management(record)

        assert get_dependency_managements(md) == [record]
        assert management_source(md).get_scope(ClassifiedCoordinate("g", "a")) == "runtime"

    def test_falls_back_to_extra_infos(self) -> None:
        """Test point lookups find entries that only exist as extra infos."""
        md = PomModuleDescriptor()
        md.extra_infos.put("m:dependency.management__g__a__null__version", "3.0")

        source = management_source(md)

        assert source.get_version(ClassifiedCoordinate("g", "a")) == "3.0"
        assert source.records() == []

    def test_structured_and_flat_agree(self) -> None:
        builder = PomModuleDescriptorBuilder()
        builder.set_module_rev_id("org.example", "app", "1.0")
        builder.add_dependency_management(
            ManagementRecord("g", "a", "1.0", scope="test", excluded_modules=[ModuleId("x", "y")])
        )
        md = builder.build()
        generic = _generic(md.extra_infos.to_dict())

        structured = get_dependency_managements(md)
        flat = get_dependency_managements(generic)

        assert [r.to_json() for r in structured] == [r.to_json() for r in flat]
        assert get_dependency_management_map(md) == get_dependency_management_map(generic)


@pytest.mark.unit
class TestPluginsAndProperties:
    """Tests for get_plugins and extract_pom_properties."""

    def test_get_plugins(self) -> None:
        md = _generic({"m:maven.plugins": "g__a__1.0|g__b__null"})

        plugins = get_plugins(md)

        assert [(p.artifact_id, p.version) for p in plugins] == [("a", "1.0"), ("b", None)]

    def test_no_plugins(self) -> None:
        assert get_plugins(ModuleDescriptor()) == []

    def test_malformed_plugin_skipped(self) -> None:
        md = _generic({"m:maven.plugins": "broken|g__a__1.0"})

        with patch("pomconf.core.management.logger"):
            plugins = get_plugins(md)

        assert [p.artifact_id for p in plugins] == ["a"]

    def test_extract_properties(self, flat_entries: dict) -> None:
        properties = extract_pom_properties(_generic(flat_entries).extra_infos)

        assert properties == {"java.version": "17"}
