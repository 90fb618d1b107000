from __future__ import annotations

import json
from pathlib import Path

import pytest

from pomconf.exceptions import FileOperationError, ParseError
from pomconf.utils.filesystem import last_modified, read_json_document, safe_read_file


@pytest.mark.unit
class TestSafeReadFile:
    """Tests for safe_read_file."""

    def test_reads_text(self, tmp_path: Path) -> None:
        path = tmp_path / "a.json"
        path.write_text("{}", encoding="utf-8")

        assert safe_read_file(path) == "{}"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileOperationError) as exc_info:
            safe_read_file(tmp_path / "missing.json")

        assert "File not found" in str(exc_info.value)

    def test_directory_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(FileOperationError) as exc_info:
            safe_read_file(tmp_path)

        assert "Not a file" in str(exc_info.value)

    def test_size_limit(self, tmp_path: Path) -> None:
        path = tmp_path / "big.json"
        path.write_text("x" * 100, encoding="utf-8")

        with pytest.raises(FileOperationError) as exc_info:
            safe_read_file(path, max_size=10)

        assert "File too large" in str(exc_info.value)

    def test_size_limit_disabled(self, tmp_path: Path) -> None:
        path = tmp_path / "big.json"
        path.write_text("x" * 100, encoding="utf-8")

        assert len(safe_read_file(path, max_size=None)) == 100

    def test_decode_error_wrapped(self, tmp_path: Path) -> None:
        path = tmp_path / "latin.json"
        path.write_bytes(b"\xff\xfe\xfa")

        with pytest.raises(FileOperationError):
            safe_read_file(path)


@pytest.mark.unit
class TestReadJsonDocument:
    """Tests for read_json_document."""

    def test_decodes(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.json"
        path.write_text(json.dumps({"module": {"group_id": "g"}}), encoding="utf-8")

        assert read_json_document(path) == {"module": {"group_id": "g"}}

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.json"
        path.write_text('{"module": ', encoding="utf-8")

        with pytest.raises(ParseError) as exc_info:
            read_json_document(path)

        assert exc_info.value.file_path == str(path)
        assert "Invalid JSON" in str(exc_info.value)


@pytest.mark.unit
class TestLastModified:
    """Tests for last_modified."""

    def test_existing_file(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.json"
        path.write_text("{}", encoding="utf-8")

        assert last_modified(path) == path.stat().st_mtime

    def test_missing_file(self, tmp_path: Path) -> None:
        assert last_modified(tmp_path / "missing.json") is None
