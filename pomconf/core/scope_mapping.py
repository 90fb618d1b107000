"""
Maven scope to configuration mapping.

Each Maven scope translates into a fixed set of configuration mapping
rules on a dependency descriptor. A rule ``(owner, source)`` means that the
owner module's ``owner`` configuration pulls in the dependency's
``source`` configuration together with everything it extends, written
``"source(*)"``.

Optional dependencies land in the ``optional`` configuration instead.
The ``test`` and ``system`` scopes ignore the optional flag.

The table is built once at import time and is read-only.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Final, Mapping, Optional, Tuple

from pomconf.constants import OPTIONAL_CONFIGURATION
from pomconf.exceptions import ScopeMappingError
from pomconf.models.descriptor import DependencyDescriptor

__all__ = [
    "ConfMapper",
    "SCOPE_MAPPINGS",
    "apply_scope_mapping",
    "dependency_conf",
    "is_mapped_scope",
]

#: A rule as ``(owner configuration, dependency configuration)``.
Rule = Tuple[str, str]


def dependency_conf(conf: str) -> str:
    """Return the dependency-side form of ``conf`` with its fallback."""
    return f"{conf}(*)"


@dataclass(frozen=True)
class ConfMapper:
    """Mapping rules of one scope.

    Attributes:
        rules: Rules applied to a regular dependency.
        optional_rules: Rules applied to an optional dependency; ``None``
            when the scope ignores the optional flag.
    """

    rules: Tuple[Rule, ...]
    optional_rules: Optional[Tuple[Rule, ...]] = None

    def rules_for(self, optional: bool) -> Tuple[Rule, ...]:
        if optional and self.optional_rules is not None:
            return self.optional_rules
        return self.rules

    def add_mapping_confs(self, dd: DependencyDescriptor, optional: bool) -> None:
        for owner, source in self.rules_for(optional):
            dd.add_dependency_configuration(owner, dependency_conf(source))


def _rules(owner: str, *sources: str) -> Tuple[Rule, ...]:
    return tuple((owner, source) for source in sources)


SCOPE_MAPPINGS: Final[Mapping[str, ConfMapper]] = MappingProxyType(
    {
        "compile": ConfMapper(
            rules=_rules("compile", "compile", "master") + _rules("runtime", "runtime"),
            optional_rules=_rules(OPTIONAL_CONFIGURATION, "compile", "master"),
        ),
        "provided": ConfMapper(
            rules=_rules("provided", "compile", "provided", "runtime", "master"),
            optional_rules=_rules(
                OPTIONAL_CONFIGURATION, "compile", "provided", "runtime", "master"
            ),
        ),
        "runtime": ConfMapper(
            rules=_rules("runtime", "compile", "runtime", "master"),
            optional_rules=_rules(OPTIONAL_CONFIGURATION, "compile", "provided", "master"),
        ),
        "test": ConfMapper(rules=_rules("test", "runtime", "master")),
        "system": ConfMapper(rules=_rules("system", "master")),
    }
)


def is_mapped_scope(scope: Optional[str]) -> bool:
    """Return True if ``scope`` has mapping rules."""
    return scope in SCOPE_MAPPINGS


def apply_scope_mapping(dd: DependencyDescriptor, scope: str, optional: bool) -> None:
    """Add the mapping rules of ``scope`` to ``dd``.

    Raises:
        ScopeMappingError: ``scope`` was not normalized to a mapped scope.
    """
    mapper = SCOPE_MAPPINGS.get(scope)
    if mapper is None:
        raise ScopeMappingError(scope)
    mapper.add_mapping_confs(dd, optional)
