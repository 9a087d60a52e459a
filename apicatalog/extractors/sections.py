"""Group a flat block list into raw API records.

Pure function, no parsing and no I/O.  A level-2 heading opens a category,
a level-3 heading opens an API entry, and the entry collects text and links
until the next heading of level 3 or above.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from apicatalog import settings
from apicatalog.errors import StructuralExtractionError
from apicatalog.extractors.slugs import slugify

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from apicatalog.extractors.blocks import Block, Link

_TEXT_KINDS = frozenset({"paragraph", "quote"})
_DEFAULT_CATEGORY_KEY = "category"


@dataclass(frozen=True)
class RawRecord:
    """One API heading with its category context, summary text and links."""

    title: str
    anchor_id: str
    category: str
    category_id: str
    summary: str = ""
    references: tuple[Link, ...] = field(default_factory=tuple)


def dedupe_links(links: Iterable[Link]) -> tuple[Link, ...]:
    """Drop links whose URL was already seen, keeping first-seen order."""
    seen: set[str] = set()
    unique: list[Link] = []
    for link in links:
        if link.url in seen:
            continue
        seen.add(link.url)
        unique.append(link)
    return tuple(unique)


@dataclass
class _OpenEntry:
    title: str
    anchor_id: str
    category: str
    category_id: str
    parts: list[str] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)

    def close(self) -> RawRecord:
        return RawRecord(
            title=self.title,
            anchor_id=self.anchor_id,
            category=self.category,
            category_id=self.category_id,
            summary=" ".join(self.parts),
            references=dedupe_links(self.links),
        )


def extract_records(blocks: Sequence[Block]) -> list[RawRecord]:
    """Return one :class:`RawRecord` per entry heading in *blocks*.

    Raises:
        StructuralExtractionError: if an entry heading appears before any
            category heading, or if no entry heading is found at all.
    """
    records: list[RawRecord] = []
    category: str | None = None
    category_id = ""
    current: _OpenEntry | None = None

    for block in blocks:
        if block.kind == "heading" and block.level <= settings.ENTRY_HEADING_LEVEL:
            if current is not None:
                records.append(current.close())
                current = None

            if block.level == settings.CATEGORY_HEADING_LEVEL:
                category = block.text
                category_id = block.anchor or slugify(block.text) or _DEFAULT_CATEGORY_KEY
            elif block.level == settings.ENTRY_HEADING_LEVEL:
                if category is None:
                    raise StructuralExtractionError(
                        f"API heading {block.text!r} appears before any category heading",
                    )
                current = _OpenEntry(
                    title=block.text,
                    anchor_id=block.anchor or slugify(block.text),
                    category=category,
                    category_id=category_id,
                )
            continue

        if current is None:
            continue

        if block.kind in _TEXT_KINDS and block.text:
            current.parts.append(block.text)
        elif block.kind == "list":
            current.parts.extend(block.items)
        current.links.extend(block.links)

    if current is not None:
        records.append(current.close())

    if not records:
        raise StructuralExtractionError("No API headings were found on the page")
    return records
