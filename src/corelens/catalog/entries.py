"""Catalog entry model."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from corelens.corpus.base import Module


class EntryKind(str, Enum):
    """What sort of standard alternative an entry describes."""

    INTERFACE = "Interface"      # BAPIs and released APIs
    TRANSACTION = "Transaction"  # Standard transactions
    PATTERN = "Pattern"          # Standard design patterns / frameworks


@dataclass(frozen=True)
class CatalogEntry:
    """A documented standard alternative that could replace custom code."""

    id: str
    kind: EntryKind
    name: str
    module: Module
    description: str
    use_cases: tuple[str, ...] = ()
    related_resources: tuple[str, ...] = ()
    clean_core_compliant: bool = True
    doc_url: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "kind", EntryKind(self.kind))
        object.__setattr__(self, "module", Module.parse(self.module))

    @property
    def is_cross_module(self) -> bool:
        return self.module is Module.CROSS

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "name": self.name,
            "module": self.module.value,
            "description": self.description,
            "use_cases": list(self.use_cases),
            "related_resources": list(self.related_resources),
            "clean_core_compliant": self.clean_core_compliant,
            "doc_url": self.doc_url,
        }
