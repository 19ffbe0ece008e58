"""Catalog Module — Standard alternatives that can replace custom code.

Usage:
    from corelens.catalog import default_catalog

    catalog = default_catalog()
    catalog.get_by_module("SD")     # SD entries + cross-module entries
    catalog.search("pricing")       # name / description / use-case match
"""

from corelens.catalog.entries import CatalogEntry, EntryKind
from corelens.catalog.guides import (
    ImplementationGuide,
    ImplementationStep,
    format_guide_as_markdown,
    get_implementation_guide,
)
from corelens.catalog.repository import StandardsCatalog, default_catalog

__all__ = [
    "CatalogEntry",
    "EntryKind",
    "ImplementationGuide",
    "ImplementationStep",
    "StandardsCatalog",
    "default_catalog",
    "format_guide_as_markdown",
    "get_implementation_guide",
]
