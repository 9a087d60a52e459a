"""apicatalog.catalog - High-level ApiCatalog class.

The query surface handed to transports (CLI, stdio/HTTP servers).  Built
once per process from a validated dataset and read-only afterwards, so a
single instance can serve any number of concurrent readers.

Usage::

    from apicatalog import ApiCatalog

    catalog = ApiCatalog.from_file("data/apis.json")
    entry = catalog.lookup("cache")
    if entry is None:
        ...  # transport decides how to present "not found"
    print(catalog.payload(entry))

    for hit in catalog.search("quiz attempt", limit=5):
        print(hit.slug)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from apicatalog import settings
from apicatalog.builder import load_dataset
from apicatalog.index import build_index
from apicatalog.query import (
    complete_category_ids,
    complete_slugs,
    get_category,
    resolve,
    search,
)

if TYPE_CHECKING:
    from apicatalog.errors import CountMismatchWarning
    from apicatalog.index import CatalogIndex, Category
    from apicatalog.items import ApiEntry, Dataset

logger = logging.getLogger(__name__)


class ApiCatalog:
    """Lookup, search and category browsing over one dataset.

    Args:
        dataset: A validated :class:`~apicatalog.items.Dataset`.  Diagnostics
                 found while indexing (count mismatch) are logged as
                 warnings and kept on :attr:`diagnostics`.
    """

    def __init__(self, dataset: Dataset) -> None:
        result = build_index(dataset)
        self._index = result.index
        self.diagnostics: tuple[CountMismatchWarning, ...] = result.diagnostics
        for diagnostic in self.diagnostics:
            logger.warning("%s", diagnostic.message)
        logger.info(
            "Indexed %d API entries in %d categories from %s",
            len(self._index.entries), len(self._index.categories), dataset.source,
        )

    @classmethod
    def from_file(cls, path: Path | str = settings.DATA_FILE) -> ApiCatalog:
        """Load, validate and index the dataset at *path*.

        Raises:
            :class:`~apicatalog.errors.DatasetValidationError`: if the file is
                missing, malformed or fails the schema.
        """
        return cls(load_dataset(path))

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def index(self) -> CatalogIndex:
        return self._index

    @property
    def dataset(self) -> Dataset:
        return self._index.dataset

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def lookup(self, identifier: str) -> ApiEntry | None:
        return resolve(self._index, identifier)

    def search(
        self,
        query: str | None = "",
        category_id: str | None = None,
        limit: int | None = None,
    ) -> list[ApiEntry]:
        return search(self._index, query, category_id=category_id, limit=limit)

    def list_categories(self) -> list[dict[str, Any]]:
        """Return ``{id, title, entryCount}`` for every category, first-seen order."""
        return [
            {"id": c.id, "title": c.title, "entryCount": c.entry_count}
            for c in self._index.category_list
        ]

    def get_category(self, category_id: str) -> Category | None:
        return get_category(self._index, category_id)

    def complete_slugs(self, prefix: str = "") -> list[str]:
        return complete_slugs(self._index, prefix)

    def complete_category_ids(self, prefix: str = "") -> list[str]:
        return complete_category_ids(self._index, prefix)

    # ------------------------------------------------------------------
    # Boundary payloads
    # ------------------------------------------------------------------

    def payload(self, entry: ApiEntry) -> dict[str, Any]:
        """Entry fields (camelCase) plus the dataset's provenance."""
        data = entry.to_dict()
        data["source"] = self.dataset.source
        data["generatedAt"] = self.dataset.generated_at
        return data

    def category_payload(self, category: Category) -> dict[str, Any]:
        return {
            "id": category.id,
            "title": category.title,
            "entryCount": category.entry_count,
            "entries": [self.payload(e) for e in category.entries],
            "source": self.dataset.source,
            "generatedAt": self.dataset.generated_at,
        }

    def overview(self) -> dict[str, Any]:
        """Catalogue summary: provenance plus each category's slugs."""
        return {
            "source": self.dataset.source,
            "generatedAt": self.dataset.generated_at,
            "totalApis": len(self._index.entries),
            "categories": [
                {
                    "id": c.id,
                    "title": c.title,
                    "entryCount": c.entry_count,
                    "slugs": [e.slug for e in c.entries],
                }
                for c in self._index.category_list
            ],
        }
