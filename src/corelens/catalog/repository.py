"""Standards catalog repository — read-only lookups over catalog entries."""

from typing import Iterable, Optional

from corelens.catalog.entries import CatalogEntry, EntryKind
from corelens.catalog.standards import DEFAULT_ENTRIES
from corelens.corpus.base import Module


class StandardsCatalog:
    """Immutable collection of standard alternatives.

    Constructed explicitly and passed to the matcher and generator, so tests
    can hand in a fixture catalog instead of the default SAP data.
    """

    def __init__(self, entries: Iterable[CatalogEntry]):
        self._entries: tuple[CatalogEntry, ...] = tuple(entries)
        self._by_id = {entry.id: entry for entry in self._entries}
        if len(self._by_id) != len(self._entries):
            raise ValueError("Catalog entry ids must be unique")

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def get_all(self) -> list[CatalogEntry]:
        return list(self._entries)

    def get_by_module(self, module: "str | Module") -> list[CatalogEntry]:
        """Entries for the module plus every cross-module entry.

        An unknown module is a miss like any other and yields an empty list.
        """
        try:
            module = Module.parse(module)
        except ValueError:
            return []
        return [
            entry for entry in self._entries
            if entry.module is module or entry.is_cross_module
        ]

    def get_by_kind(self, kind: "str | EntryKind") -> list[CatalogEntry]:
        kind = EntryKind(kind)
        return [entry for entry in self._entries if entry.kind is kind]

    def get_by_id(self, entry_id: str) -> Optional[CatalogEntry]:
        return self._by_id.get(entry_id)

    def compliant(self) -> list[CatalogEntry]:
        """Entries flagged as Clean Core compliant."""
        return [entry for entry in self._entries if entry.clean_core_compliant]

    def search(self, keyword: str) -> list[CatalogEntry]:
        """
        Case-insensitive substring search over name, description and use cases.

        Args:
            keyword: Text to look for

        Returns:
            Matching entries in catalog order (empty list when none match)
        """
        needle = keyword.lower().strip()
        if not needle:
            return []
        return [
            entry for entry in self._entries
            if needle in entry.name.lower()
            or needle in entry.description.lower()
            or any(needle in use_case.lower() for use_case in entry.use_cases)
        ]


def default_catalog() -> StandardsCatalog:
    """Build a catalog over the bundled SAP standards data."""
    return StandardsCatalog(DEFAULT_ENTRIES)
