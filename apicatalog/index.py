"""Read-only lookup structures built once from a validated dataset.

``build_index`` is a pure function: no I/O, no logging.  Diagnostics (such
as a declared ``count`` that disagrees with the entry array) are returned
next to the index for the caller to surface.

Alias collisions are first-writer-wins: when two entries normalize to the
same alias key, the one earlier in the dataset keeps it.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from apicatalog.errors import CountMismatchWarning
from apicatalog.extractors.slugs import normalize_key
from apicatalog.items import ApiEntry, Dataset


def category_key(entry: ApiEntry) -> str:
    """Return the normalized category key an entry is grouped under."""
    return normalize_key(entry.category_id or entry.category)


@dataclass(frozen=True)
class Category:
    """A category and its entries, in dataset order."""

    id: str
    title: str
    entries: tuple[ApiEntry, ...]

    @property
    def entry_count(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class CatalogIndex:
    dataset: Dataset
    by_slug: Mapping[str, ApiEntry]
    by_alias: Mapping[str, ApiEntry]
    categories: Mapping[str, Category]

    @property
    def entries(self) -> tuple[ApiEntry, ...]:
        return self.dataset.apis

    @property
    def category_list(self) -> tuple[Category, ...]:
        return tuple(self.categories.values())


@dataclass(frozen=True)
class IndexBuildResult:
    index: CatalogIndex
    diagnostics: tuple[CountMismatchWarning, ...] = ()


def build_index(dataset: Dataset) -> IndexBuildResult:
    """Build the slug, alias and category maps for *dataset*."""
    diagnostics: list[CountMismatchWarning] = []
    if dataset.count != len(dataset.apis):
        diagnostics.append(CountMismatchWarning(declared=dataset.count, actual=len(dataset.apis)))

    by_slug: dict[str, ApiEntry] = {}
    by_alias: dict[str, ApiEntry] = {}
    grouped: dict[str, tuple[str, list[ApiEntry]]] = {}

    for entry in dataset.apis:
        slug_key = normalize_key(entry.slug)
        by_slug.setdefault(slug_key, entry)

        for alias in (slug_key, normalize_key(entry.anchor_id), normalize_key(entry.title)):
            if alias:
                by_alias.setdefault(alias, entry)

        key = category_key(entry)
        if key not in grouped:
            grouped[key] = (entry.category, [])
        grouped[key][1].append(entry)

    categories = {
        key: Category(id=key, title=title, entries=tuple(members))
        for key, (title, members) in grouped.items()
    }

    index = CatalogIndex(
        dataset=dataset,
        by_slug=MappingProxyType(by_slug),
        by_alias=MappingProxyType(by_alias),
        categories=MappingProxyType(categories),
    )
    return IndexBuildResult(index=index, diagnostics=tuple(diagnostics))
