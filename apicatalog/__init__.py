"""apicatalog - turn an API documentation page into a searchable catalog.

Build a dataset from a saved page::

    from apicatalog import build_catalog, write_dataset

    html = open("apis.html", encoding="utf-8").read()
    dataset = build_catalog(html, source="https://moodledev.io/docs/4.5/apis")
    write_dataset(dataset, "data/apis.json")

Query it::

    from apicatalog import ApiCatalog

    catalog = ApiCatalog.from_file("data/apis.json")
    entry = catalog.lookup("cache")
    hits = catalog.search("cache", category_id="core-apis")
"""

from apicatalog.builder import build_catalog, build_dataset, load_dataset, parse_dataset, write_dataset
from apicatalog.catalog import ApiCatalog
from apicatalog.errors import (
    CatalogError,
    CountMismatchWarning,
    DatasetValidationError,
    StructuralExtractionError,
)
from apicatalog.index import CatalogIndex, Category, build_index
from apicatalog.items import ApiEntry, Dataset, Reference
from apicatalog.query import resolve, search

__version__ = "0.1.0"
__all__ = [
    "ApiCatalog",
    "ApiEntry",
    "CatalogError",
    "CatalogIndex",
    "Category",
    "CountMismatchWarning",
    "Dataset",
    "DatasetValidationError",
    "Reference",
    "StructuralExtractionError",
    "build_catalog",
    "build_dataset",
    "build_index",
    "load_dataset",
    "parse_dataset",
    "resolve",
    "search",
    "write_dataset",
]
