"""Unit tests for text normalization and slug assignment."""

from __future__ import annotations

import pytest

from apicatalog.errors import StructuralExtractionError
from apicatalog.extractors.slugs import (
    SlugAssigner,
    derive_base_slug,
    normalize_key,
    normalize_text,
    resolve_link_url,
    slugify,
)


class TestNormalizeText:
    def test_collapses_whitespace(self):
        assert normalize_text("  Cache \n\t store  API ") == "Cache store API"

    def test_strips_zero_width(self):
        assert normalize_text("Cache\u200b API\ufeff") == "Cache API"

    def test_strips_control_characters(self):
        assert normalize_text("Cache\x00 API\x07") == "Cache API"

    def test_none_is_empty(self):
        assert normalize_text(None) == ""

    def test_key_is_lowercase(self):
        assert normalize_key("  Access API  ") == "access api"


class TestSlugify:
    def test_basic(self):
        assert slugify("Cache store API") == "cache-store-api"

    def test_punctuation_runs_become_one_dash(self):
        assert slugify("Data -- definition (DDL)!") == "data-definition-ddl"

    def test_trims_dashes(self):
        assert slugify("--Access--") == "access"

    def test_zero_width_does_not_split_words(self):
        assert slugify("ca\u200bche") == "cache"

    def test_punctuation_only_is_empty(self):
        assert slugify("???") == ""


class TestDeriveBaseSlug:
    def test_parenthesized_short_form(self):
        assert derive_base_slug("Access API (access)", "access-api-access") == "access"

    def test_short_form_followed_by_dash_text(self):
        assert derive_base_slug("Cache store API (cache) - overview", "cachingapi-cache-api") == "cache"

    def test_parentheses_mid_title_are_ignored(self):
        # "(x)" not followed by a dash or end of string
        assert derive_base_slug("Foo (bar) baz", "foo-bar-baz") == "baz"

    def test_anchor_last_segment(self):
        assert derive_base_slug("Cache store", "general-apis-cache") == "cache"

    def test_anchor_ending_in_api_uses_whole_anchor(self):
        assert derive_base_slug("String API", "string-api") == "string-api"

    def test_anchor_with_empty_segments(self):
        assert derive_base_slug("Events", "core--events-") == "events"

    def test_falls_back_to_title(self):
        assert derive_base_slug("Lock API", "") == "lock-api"

    def test_empty_short_form_falls_through(self):
        assert derive_base_slug("Weird (!!)", "weird-heading") == "heading"

    def test_unparseable_heading_raises(self):
        with pytest.raises(StructuralExtractionError):
            derive_base_slug("???", "---")


class TestSlugAssigner:
    def test_first_occurrence_keeps_bare_slug(self):
        assigner = SlugAssigner()
        assert assigner.assign("Cache store", "a-cache") == "cache"

    def test_repeats_get_numbered_suffixes(self):
        assigner = SlugAssigner()
        slugs = [assigner.assign("Cache", f"x{i}-cache") for i in range(3)]
        assert slugs == ["cache", "cache-2", "cache-3"]

    def test_suffixed_candidate_already_taken(self):
        assigner = SlugAssigner()
        slugs = [
            assigner.assign("Cache two (cache-2)", "x"),
            assigner.assign("Cache (cache)", "y"),
            assigner.assign("Cache again (cache)", "z"),
        ]
        assert slugs == ["cache-2", "cache", "cache-3"]
        assert len(set(slugs)) == len(slugs)

    def test_deterministic_across_builds(self):
        headings = [("Cache", "a-cache"), ("Cache", "b-cache"), ("Lock API", "lock-api")]
        first = SlugAssigner()
        second = SlugAssigner()
        assert [first.assign(*h) for h in headings] == [second.assign(*h) for h in headings]


class TestLinks:
    def test_relative_link_resolved(self):
        url = resolve_link_url("/docs/4.5/apis/core/dml", "https://moodledev.io/docs/4.5/apis")
        assert url == "https://moodledev.io/docs/4.5/apis/core/dml"

    def test_fragment_link_resolved_against_page(self):
        url = resolve_link_url("#cache", "https://moodledev.io/docs/4.5/apis")
        assert url == "https://moodledev.io/docs/4.5/apis#cache"

    def test_mailto_skipped(self):
        assert resolve_link_url("mailto:dev@example.org", "https://moodledev.io/") is None

    def test_relative_without_base_skipped(self):
        assert resolve_link_url("/docs", "") is None

    def test_empty_href(self):
        assert resolve_link_url("  ", "https://moodledev.io/") is None
