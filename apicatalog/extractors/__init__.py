"""Extraction sub-package: deterministic page → raw API record conversion."""

from .blocks import Block, Link, html_to_blocks
from .sections import RawRecord, dedupe_links, extract_records
from .slugs import SlugAssigner, derive_base_slug, normalize_key, normalize_text, slugify

__all__ = [
    "Block",
    "Link",
    "RawRecord",
    "SlugAssigner",
    "dedupe_links",
    "derive_base_slug",
    "extract_records",
    "html_to_blocks",
    "normalize_key",
    "normalize_text",
    "slugify",
]
