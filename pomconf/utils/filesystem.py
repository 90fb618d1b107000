"""
Filesystem utilities for pomconf.

Safe helpers for reading the record documents fed to the CLI. All
filesystem errors are normalized to ``FileOperationError``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional, Union

from pomconf.utils.logger import get_logger
from pomconf.exceptions import FileOperationError, ParseError
from pomconf.constants import MAX_FILE_SIZE


logger = get_logger("filesystem")

PathLike = Union[str, Path]


def _validated_file(path: Path, *, must_exist: bool = True) -> Path:
    """Validate and resolve a file path."""
    if must_exist:
        if not path.exists():
            raise FileOperationError(
                f"File not found: {path}",
                file_path=str(path),
                operation="read",
            )
        if not path.is_file():
            raise FileOperationError(
                f"Not a file: {path}",
                file_path=str(path),
                operation="read",
            )
    return path.resolve()


def safe_read_file(
    file_path: PathLike,
    *,
    max_size: Optional[int] = MAX_FILE_SIZE,
    encoding: str = "utf-8",
) -> str:
    """Safely read a text file with optional size limits.

    Args:
        file_path: Path to the file.
        max_size: Maximum allowed file size in bytes (None disables limit).
        encoding: Text encoding.

    Returns:
        File contents as a string.
    """
    path = _validated_file(Path(file_path))
    size = path.stat().st_size

    if max_size is not None and size > max_size:
        raise FileOperationError(
            f"File too large: {size} bytes (max {max_size})",
            file_path=str(path),
            operation="read",
        )

    try:
        return path.read_text(encoding=encoding)
    except Exception as exc:
        raise FileOperationError(
            f"Failed to read file: {exc}",
            file_path=str(path),
            operation="read",
            original_error=exc,
        ) from exc


def read_json_document(file_path: PathLike) -> Any:
    """Read and decode a JSON document.

    Raises:
        FileOperationError: The file cannot be read.
        ParseError: The content is not valid JSON.
    """
    text = safe_read_file(file_path)
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParseError(
            f"Invalid JSON at line {exc.lineno}, column {exc.colno}: {exc.msg}",
            file_path=str(file_path),
        ) from exc


def last_modified(file_path: PathLike) -> Optional[float]:
    """Return the modification timestamp of ``file_path``, if it exists."""
    try:
        return Path(file_path).stat().st_mtime
    except OSError as exc:
        logger.debug("Cannot stat %s: %s", file_path, exc)
        return None
