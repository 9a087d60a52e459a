"""apicatalog.query - identifier resolution and keyword search.

Every function here is pure and synchronous over a :class:`CatalogIndex`;
"not found" is ``None`` (or an empty list), never an exception.

Basic usage::

    from apicatalog.builder import load_dataset
    from apicatalog.index import build_index
    from apicatalog.query import resolve, search

    index = build_index(load_dataset("data/apis.json")).index
    entry = resolve(index, "cache")
    hits  = search(index, "quiz attempt", category_id="core-apis", limit=5)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from apicatalog import settings
from apicatalog.extractors.slugs import normalize_key
from apicatalog.index import category_key

if TYPE_CHECKING:
    from apicatalog.index import CatalogIndex, Category
    from apicatalog.items import ApiEntry


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------

def resolve(index: CatalogIndex, identifier: str | None) -> ApiEntry | None:
    """Return the entry named by *identifier*, or None.

    An exact alias (slug, anchor id or title) wins; otherwise the first
    entry in dataset order whose slug, title or anchor id contains the
    identifier.
    """
    key = normalize_key(identifier)
    if not key:
        return None

    exact = index.by_alias.get(key)
    if exact is not None:
        return exact

    for entry in index.entries:
        if (
            key in entry.slug.lower()
            or key in entry.title.lower()
            or key in entry.anchor_id.lower()
        ):
            return entry
    return None


# ---------------------------------------------------------------------------
# Search engine
# ---------------------------------------------------------------------------

def clamp_limit(limit: int | None) -> int:
    """Bound *limit* to ``1..MAX_SEARCH_LIMIT`` (None means the default)."""
    if limit is None:
        return settings.DEFAULT_SEARCH_LIMIT
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise TypeError(f"limit must be an integer, got {type(limit).__name__}")
    return max(1, min(limit, settings.MAX_SEARCH_LIMIT))


def haystack(entry: ApiEntry) -> str:
    """Return the lowercase searchable text of *entry*."""
    parts = [entry.slug, entry.title, entry.category, entry.summary]
    parts.append(" ".join(f"{ref.title} {ref.url}" for ref in entry.references))
    return " ".join(parts).lower()


def search(
    index: CatalogIndex,
    query: str | None = "",
    category_id: str | None = None,
    limit: int | None = settings.DEFAULT_SEARCH_LIMIT,
) -> list[ApiEntry]:
    """Return entries matching every term of *query*, in dataset order.

    Args:
        index:       The catalog index.
        query:       Whitespace-separated terms, all of which must occur as
                     substrings of the entry's haystack.  Empty matches all.
        category_id: Optional category key; entries from other categories
                     are excluded.
        limit:       Maximum results, clamped to ``1..MAX_SEARCH_LIMIT``.
    """
    max_results = clamp_limit(limit)
    terms = normalize_key(query).split()
    wanted_category = normalize_key(category_id)

    results: list[ApiEntry] = []
    for entry in index.entries:
        if wanted_category and category_key(entry) != wanted_category:
            continue
        if terms:
            text = haystack(entry)
            if not all(term in text for term in terms):
                continue
        results.append(entry)
        if len(results) >= max_results:
            break
    return results


# ---------------------------------------------------------------------------
# Categories and completion
# ---------------------------------------------------------------------------

def get_category(index: CatalogIndex, category_id: str | None) -> Category | None:
    return index.categories.get(normalize_key(category_id))


def complete_slugs(
    index: CatalogIndex,
    prefix: str | None = "",
    limit: int = settings.SLUG_COMPLETION_LIMIT,
) -> list[str]:
    """Slugs starting with *prefix* (all slugs when empty), in dataset order."""
    key = normalize_key(prefix)
    return [e.slug for e in index.entries if not key or e.slug.startswith(key)][:limit]


def complete_category_ids(
    index: CatalogIndex,
    prefix: str | None = "",
    limit: int = settings.CATEGORY_COMPLETION_LIMIT,
) -> list[str]:
    key = normalize_key(prefix)
    return [c.id for c in index.category_list if not key or c.id.startswith(key)][:limit]
