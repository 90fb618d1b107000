"""
Extra-info store for pomconf.

An ordered, name-unique store of ``(name, content)`` pairs. It is the
generic slot where a descriptor keeps data the configuration model has no
field for: dependency management, properties and plugins.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Iterator, List, Optional


@dataclass(frozen=True)
class ExtraInfo:
    """A single named extra-info entry."""

    name: str
    content: Optional[str] = None


class ExtraInfoStore:
    """Insertion-ordered extra infos with unique names.

    Two write modes are offered: :meth:`put` overwrites an existing entry
    or appends a new one, :meth:`add_if_absent` only appends and leaves
    existing entries untouched. Overwriting keeps the entry's position.

    Args:
        entries: Initial entries, added in insert-once mode.
        guard: Callable invoked before each mutation; used by descriptors
            to reject writes once frozen.

    Example:
        >>> store = ExtraInfoStore()
        >>> store.put("m:properties__java.version", "17")
        >>> store.add_if_absent("m:properties__java.version", "21")
        False
        >>> store.get_content("m:properties__java.version")
        '17'
    """

    def __init__(
        self,
        entries: Optional[Iterable[ExtraInfo]] = None,
        *,
        guard: Optional[Callable[[], None]] = None,
    ) -> None:
        self._entries: Dict[str, ExtraInfo] = {}
        self._guard = guard
        for entry in entries or ():
            self.add_if_absent(entry.name, entry.content)

    def _check_writable(self) -> None:
        if self._guard is not None:
            self._guard()

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def put(self, name: str, content: Optional[str]) -> None:
        """Overwrite the entry called ``name``, or append it."""
        self._check_writable()
        # reassigning an existing key keeps its position
        self._entries[name] = ExtraInfo(name, content)

    def add_if_absent(self, name: str, content: Optional[str]) -> bool:
        """Append an entry unless one with the same name exists.

        Returns:
            ``True`` if the entry was added.
        """
        self._check_writable()
        if name in self._entries:
            return False
        self._entries[name] = ExtraInfo(name, content)
        return True

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, name: str) -> Optional[ExtraInfo]:
        return self._entries.get(name)

    def get_content(self, name: str) -> Optional[str]:
        entry = self._entries.get(name)
        return entry.content if entry is not None else None

    def with_prefix(self, prefix: str) -> List[ExtraInfo]:
        """Return entries whose name starts with ``prefix``, in order."""
        return [entry for entry in self._entries.values() if entry.name.startswith(prefix)]

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {entry.name: entry.content for entry in self._entries.values()}

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[ExtraInfo]:
        return iter(list(self._entries.values()))

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ExtraInfoStore({list(self._entries.values())!r})"
