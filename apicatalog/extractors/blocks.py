"""Convert a documentation page into a flat list of typed content blocks.

Block kinds: heading | paragraph | list | quote | generic

Only the direct children of the root container are turned into blocks; the
page is flat (Docusaurus renders every section heading and its body as
siblings), so nesting carries no section information.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, NamedTuple

from bs4 import BeautifulSoup, Tag

from apicatalog import settings
from apicatalog.errors import StructuralExtractionError
from apicatalog.extractors.slugs import normalize_text, resolve_link_url

logger = logging.getLogger(__name__)

BlockKind = Literal["heading", "paragraph", "list", "quote", "generic"]

# Heading tags → level number
_HEADING_LEVELS: dict[str, int] = {f"h{i}": i for i in range(1, 7)}

# Tags whose whole text is one summary piece
_PARAGRAPH_TAGS = frozenset({"p", "div"})
_LIST_TAGS = frozenset({"ul", "ol"})
_QUOTE_TAGS = frozenset({"blockquote"})


class Link(NamedTuple):
    """An outbound hyperlink found inside a block (URL already absolute)."""

    text: str
    url: str


@dataclass(frozen=True)
class Block:
    """One block-level element of the page body."""

    kind: BlockKind
    text: str = ""
    level: int = 0                # headings only
    anchor: str = ""              # headings only: the id attribute
    items: tuple[str, ...] = ()   # lists only: text of every <li>
    links: tuple[Link, ...] = ()


def _extract_links(el: Tag, base_url: str) -> tuple[Link, ...]:
    links: list[Link] = []
    for a in el.find_all("a", href=True):
        if not isinstance(a, Tag):
            continue
        href = str(a.get("href") or "")
        url = resolve_link_url(href, base_url)
        if url is None:
            logger.debug("Skipping non-absolute link %r", href)
            continue
        links.append(Link(text=normalize_text(a.get_text()) or url, url=url))
    return tuple(links)


def _element_to_block(el: Tag, base_url: str) -> Block:
    tag_name = (el.name or "").lower()
    links = _extract_links(el, base_url)

    if tag_name in _HEADING_LEVELS:
        return Block(
            kind="heading",
            text=normalize_text(el.get_text()),
            level=_HEADING_LEVELS[tag_name],
            anchor=str(el.get("id") or "").strip(),
            links=links,
        )

    if tag_name in _PARAGRAPH_TAGS:
        return Block(kind="paragraph", text=normalize_text(el.get_text()), links=links)

    if tag_name in _QUOTE_TAGS:
        return Block(kind="quote", text=normalize_text(el.get_text()), links=links)

    if tag_name in _LIST_TAGS:
        # Every descendant <li>, nested lists included
        items = tuple(normalize_text(li.get_text()) for li in el.find_all("li"))
        return Block(kind="list", items=tuple(i for i in items if i), links=links)

    return Block(kind="generic", text=normalize_text(el.get_text()), links=links)


def html_to_blocks(
    html: str | bytes,
    base_url: str = "",
    root_selector: str = settings.ROOT_SELECTOR,
) -> list[Block]:
    """Parse *html* and return the blocks under the root container, in order.

    Bytes are decoded by BeautifulSoup's encoding detection.  Links are
    resolved against *base_url*; anything that does not resolve
    to an absolute http(s) URL is dropped.

    Raises:
        StructuralExtractionError: if *root_selector* matches nothing.
    """
    soup = BeautifulSoup(html or "", "lxml")
    root = soup.select_one(root_selector)
    if root is None:
        raise StructuralExtractionError(
            f"Failed to locate API content: no element matches {root_selector!r}",
        )

    blocks = [
        _element_to_block(child, base_url)
        for child in root.children
        if isinstance(child, Tag)
    ]
    logger.debug("Read %d blocks from %s", len(blocks), root_selector)
    return blocks
