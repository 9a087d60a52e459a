"""Tests for apicatalog.index - read-only lookup structures."""

from __future__ import annotations

import pytest
from conftest import make_dataset, make_entry

from apicatalog.builder import parse_dataset
from apicatalog.errors import CountMismatchWarning
from apicatalog.index import build_index, category_key


class TestBuildIndex:
    def test_no_diagnostics_for_consistent_dataset(self, dataset):
        assert build_index(dataset).diagnostics == ()

    def test_by_slug(self, index):
        assert index.by_slug["cache-2"].title == "Activity cache"

    def test_aliases_cover_slug_anchor_and_title(self, index):
        entry = index.by_slug["access"]
        assert index.by_alias["access"] is entry
        assert index.by_alias["access-api-access"] is entry
        assert index.by_alias["access api (access)"] is entry

    def test_categories_in_first_seen_order(self, index):
        assert list(index.categories) == ["general-apis", "activity-module-apis"]

    def test_category_entries_in_dataset_order(self, index):
        general = index.categories["general-apis"]
        assert general.title == "General APIs"
        assert [e.slug for e in general.entries] == ["access", "ddl", "string-api", "cache"]
        assert general.entry_count == 4

    def test_maps_are_read_only(self, index):
        with pytest.raises(TypeError):
            index.by_alias["new"] = index.entries[0]
        with pytest.raises(TypeError):
            index.categories["new"] = index.category_list[0]

    def test_pure(self, dataset):
        assert build_index(dataset) == build_index(dataset)


class TestCountMismatch:
    def test_mismatch_reported_not_raised(self):
        data = make_dataset([make_entry("Lock API", "lock")], count=5)
        result = build_index(parse_dataset(data))
        assert result.diagnostics == (CountMismatchWarning(declared=5, actual=1),)
        assert len(result.index.entries) == 1

    def test_message(self):
        warning = CountMismatchWarning(declared=5, actual=1)
        assert warning.message == "Dataset count mismatch: expected 5, actual 1"


class TestAliasCollisions:
    def test_first_writer_wins_on_identical_titles(self):
        data = make_dataset([
            make_entry("Cache API", "cache"),
            make_entry("Cache API", "cache-2"),
        ])
        index = build_index(parse_dataset(data)).index
        assert index.by_alias["cache api"].slug == "cache"

    def test_later_slug_does_not_steal_earlier_title(self):
        data = make_dataset([
            make_entry("Lock", "locking", anchorId="lock-api"),
            make_entry("Lock helpers", "lock"),
        ])
        index = build_index(parse_dataset(data)).index
        assert index.by_alias["lock"].slug == "locking"
        assert index.by_slug["lock"].title == "Lock helpers"


class TestCategoryKey:
    def test_uses_category_id(self):
        entry = parse_dataset(make_dataset([make_entry("Lock", "lock", categoryId="Core-APIs")])).apis[0]
        assert category_key(entry) == "core-apis"

    def test_falls_back_to_category_title(self):
        entry = parse_dataset(
            make_dataset([make_entry("Lock", "lock", categoryId="", category="Core APIs")]),
        ).apis[0]
        assert category_key(entry) == "core apis"
