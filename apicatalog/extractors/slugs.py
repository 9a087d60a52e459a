"""Text normalization, lookup keys, link resolution and slug assignment."""

from __future__ import annotations

import re
from urllib.parse import urljoin, urlparse

from apicatalog.errors import StructuralExtractionError

# Zero-width space/joiners, BOM, and C0/C1 control characters other than
# whitespace (whitespace is collapsed separately)
_INVISIBLE_RE = re.compile(
    "[\u200b-\u200d\ufeff\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]",
)
_WHITESPACE_RE = re.compile(r"\s+")

# Characters allowed in slugs
_SLUG_UNSAFE_RE = re.compile(r"[^a-z0-9]+")
_LEADING_TRAILING_DASH_RE = re.compile(r"^-+|-+$")

# "Cache store API (cache)" / "Cache store API (cache) - overview"
_SHORT_FORM_RE = re.compile(r"\(([^)]+)\)\s*(?:-|$)")

_ANCHOR_API_TOKEN = "api"

_LINK_SCHEMES: frozenset[str] = frozenset({"http", "https"})


def normalize_text(value: str | None) -> str:
    """Strip invisible characters, collapse whitespace runs and trim."""
    if not value:
        return ""
    value = _INVISIBLE_RE.sub("", value)
    return _WHITESPACE_RE.sub(" ", value).strip()


def normalize_key(value: str | None) -> str:
    """Return the lookup key form of *value* (alias keys, identifiers, queries)."""
    return normalize_text(value).lower()


def slugify(value: str | None) -> str:
    """Convert *value* into a URL-safe slug.

    Example:
        "Cache store API" → cache-store-api
    """
    slug = _SLUG_UNSAFE_RE.sub("-", normalize_key(value))
    return _LEADING_TRAILING_DASH_RE.sub("", slug)


def resolve_link_url(href: str | None, base_url: str = "") -> str | None:
    """Resolve *href* against *base_url*; return None unless absolute http(s)."""
    href = (href or "").strip()
    if not href:
        return None
    try:
        resolved = urljoin(base_url, href) if base_url else href
        parsed = urlparse(resolved)
    except ValueError:
        return None
    if parsed.scheme.lower() not in _LINK_SCHEMES or not parsed.netloc:
        return None
    return resolved


# ---------------------------------------------------------------------------
# Slug derivation
# ---------------------------------------------------------------------------

def _slug_from_title(title: str) -> str:
    match = _SHORT_FORM_RE.search(title)
    return slugify(match.group(1)) if match else ""


def _slug_from_anchor(anchor_id: str) -> str:
    parts = [part for part in anchor_id.split("-") if part]
    if not parts:
        return ""
    if parts[-1] == _ANCHOR_API_TOKEN:
        return slugify(anchor_id)
    return slugify(parts[-1])


def derive_base_slug(title: str, anchor_id: str) -> str:
    """Return the base slug for one heading, before collision handling.

    Priority: parenthesized short form near the end of the title, then the
    anchor's last segment (the whole anchor when that segment is ``api``),
    then the full title.  An empty result from one rule falls through to
    the next.

    Raises:
        StructuralExtractionError: if every rule yields an empty slug.
    """
    slug = _slug_from_title(title) or _slug_from_anchor(anchor_id) or slugify(title)
    if not slug:
        raise StructuralExtractionError(
            f"Unable to determine slug for API heading: {title!r} (anchor {anchor_id!r})",
        )
    return slug


class SlugAssigner:
    """Assign unique slugs in a single forward pass over one build.

    The first occurrence of a base slug keeps it bare; the Nth becomes
    ``<slug>-N``.  When that candidate is already taken the counter keeps
    climbing until a free slug is found.
    """

    def __init__(self) -> None:
        self._counts: dict[str, int] = {}
        self._taken: set[str] = set()

    def assign(self, title: str, anchor_id: str) -> str:
        base = derive_base_slug(title, anchor_id)
        count = self._counts.get(base, 0) + 1
        candidate = base if count == 1 else f"{base}-{count}"
        while candidate in self._taken:
            count += 1
            candidate = f"{base}-{count}"
        self._counts[base] = count
        self._taken.add(candidate)
        return candidate
