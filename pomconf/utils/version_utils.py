"""
Version helpers for pomconf.

Maven versions are opaque strings here; the only classification made is
whether a version denotes a pre-release build.
"""

from __future__ import annotations

from typing import Optional

from pomconf.constants import SNAPSHOT_SUFFIX, STATUS_INTEGRATION, STATUS_RELEASE


def is_snapshot(version: Optional[str]) -> bool:
    """Return True if ``version`` is a snapshot build."""
    return version is not None and version.endswith(SNAPSHOT_SUFFIX)


def get_status(version: Optional[str]) -> str:
    """Return the publication status of a module at ``version``.

    Modules without a version are treated as in-progress builds.

    Examples:
        >>> get_status("1.0")
        'release'
        >>> get_status("1.0-SNAPSHOT")
        'integration'
        >>> get_status(None)
        'integration'
    """
    if version is None or is_snapshot(version):
        return STATUS_INTEGRATION
    return STATUS_RELEASE


def is_blank(value: Optional[str]) -> bool:
    """Return True for ``None`` and the empty string."""
    return value is None or value == ""
