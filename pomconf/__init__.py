"""
pomconf: POM dependency declarations as configuration-based descriptors

pomconf turns the structured records produced by a POM parser
(coordinates, scopes, classifiers, exclusions, dependency management,
plugins and properties) into a module descriptor built around named,
inheritable configurations.

Features include:
    • Maven scope to configuration mapping (with optional dependencies)
    • Deduplicated dependency descriptors with classifier artifacts
    • Dependency-management defaults and version mediation rules
    • Lossless round-trip of management data through extra infos
    • Packaging to extension mapping and synthetic source/javadoc artifacts
"""

from __future__ import annotations

from pomconf.__version__ import __version__

# ---------------------------------------------------------------------------
# Package Metadata
# ---------------------------------------------------------------------------

__author__ = "pomconf Contributors"
__license__ = "Apache-2.0"
__description__ = "POM dependency declarations mapped onto configuration-based descriptors."

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

from pomconf.core.builder import PomModuleDescriptorBuilder  # noqa: E402
from pomconf.models.descriptor import ModuleDescriptor, PomModuleDescriptor  # noqa: E402

__all__ = [
    "__version__",
    "PomModuleDescriptorBuilder",
    "ModuleDescriptor",
    "PomModuleDescriptor",
]
