# ==============================================
# HeaderMap
# ==============================================
#
# PURPOSE:
#   Ordered string -> string map used for HTTP headers, WARC
#   record headers and document metadata.
#
# RULES:
# ------
#   1. Lookup is case-insensitive ("content-type" finds "Content-Type")
#   2. Keys are stored verbatim, with the casing of the first occurrence
#   3. Duplicate names: the LAST value wins for lookup
#   4. Every occurrence is kept in order and available via get_all()
#   5. Iteration order = order in which each name was first seen
#
# ==============================================

from collections.abc import Mapping
from typing import Iterable, Iterator, List, Optional, Tuple


class HeaderMap(Mapping):
    """
    Ordered header map with case-insensitive lookup.

    Behaves like a read-only dict for callers (``len``, ``in``,
    ``items()``, ``==`` against plain dicts). Values are added
    with ``add()`` while a header block is being parsed. After
    ``freeze()`` every mutation raises TypeError.
    """

    def __init__(self, pairs: Optional[Iterable[Tuple[str, str]]] = None):
        self._latest = {}     # lowercased name -> (stored name, last value)
        self._occurrences: List[Tuple[str, str]] = []
        self._frozen = False
        if pairs is not None:
            if isinstance(pairs, Mapping):
                pairs = pairs.items()
            for name, value in pairs:
                self.add(name, value)

    def add(self, name: str, value: str) -> None:
        """
        Append one header occurrence.

        Args:
            name: Header name, stored verbatim on first occurrence
            value: Header value
        """
        self._check_mutable()
        key = name.lower()
        stored_name = self._latest[key][0] if key in self._latest else name
        self._latest[key] = (stored_name, value)
        self._occurrences.append((name, value))

    def replace(self, name: str, value: str) -> None:
        """
        Drop every case-variant of ``name`` and store ``value`` under
        exactly ``name``, at the end of the map.
        """
        self._check_mutable()
        key = name.lower()
        self._latest.pop(key, None)
        self._occurrences = [pair for pair in self._occurrences if pair[0].lower() != key]
        self.add(name, value)

    def freeze(self) -> "HeaderMap":
        """Make the map read-only and return it."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_mutable(self) -> None:
        if self._frozen:
            raise TypeError("HeaderMap is read-only")

    def get_all(self, name: str) -> List[str]:
        """Return every value recorded for ``name``, in arrival order."""
        key = name.lower()
        return [value for header, value in self._occurrences if header.lower() == key]

    def occurrences(self) -> List[Tuple[str, str]]:
        """Return all (name, value) pairs exactly as they were added."""
        return list(self._occurrences)

    def copy(self) -> "HeaderMap":
        return HeaderMap(self._occurrences)

    def __getitem__(self, name: str) -> str:
        if not isinstance(name, str):
            raise KeyError(name)
        return self._latest[name.lower()][1]

    def __contains__(self, name) -> bool:
        return isinstance(name, str) and name.lower() in self._latest

    def __iter__(self) -> Iterator[str]:
        return (stored_name for stored_name, _ in self._latest.values())

    def __len__(self) -> int:
        return len(self._latest)

    def __repr__(self) -> str:
        return f"HeaderMap({dict(self.items())!r})"
