"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"

SOURCE_URL = "https://moodledev.io/docs/4.5/apis"
GENERATED_AT = "2024-11-05T10:15:30.000Z"


def _read_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


@pytest.fixture
def page_html() -> str:
    return _read_fixture("apis_page.html")


@pytest.fixture
def dataset(page_html):
    from apicatalog.builder import build_catalog

    return build_catalog(page_html, SOURCE_URL, generated_at=GENERATED_AT)


@pytest.fixture
def index(dataset):
    from apicatalog.index import build_index

    return build_index(dataset).index


@pytest.fixture
def catalog(dataset):
    from apicatalog.catalog import ApiCatalog

    return ApiCatalog(dataset)


@pytest.fixture
def dataset_file(dataset, tmp_path) -> Path:
    from apicatalog.builder import write_dataset

    return write_dataset(dataset, tmp_path / "data" / "apis.json")


def make_entry(title: str, slug: str, **overrides) -> dict:
    """Return a JSON-form API entry with sensible defaults."""
    entry = {
        "title": title,
        "slug": slug,
        "anchorId": slug,
        "category": "Core APIs",
        "categoryId": "core-apis",
        "summary": "",
        "references": [],
    }
    entry.update(overrides)
    return entry


def make_dataset(apis: list[dict], **overrides) -> dict:
    """Return a JSON-form dataset wrapping *apis*."""
    data = {
        "source": SOURCE_URL,
        "generatedAt": GENERATED_AT,
        "count": len(apis),
        "apis": apis,
    }
    data.update(overrides)
    return data
