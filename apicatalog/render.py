"""Markdown renderings of catalog payloads for front-ends (CLI, servers)."""

from __future__ import annotations

from typing import Any

_NO_SUMMARY = "No summary text was found on the documentation page."
_NO_REFERENCES = "No direct documentation links were captured for this entry."


def format_references(references: list[dict[str, Any]]) -> str:
    if not references:
        return _NO_REFERENCES
    return "\n".join(f"- {ref['title']} - {ref['url']}" for ref in references)


def format_api_markdown(payload: dict[str, Any]) -> str:
    """Render an entry payload (see :meth:`ApiCatalog.payload`) as Markdown."""
    lines: list[str] = []

    lines.append(f"# {payload['title']}")
    lines.append("")
    lines.append(f"Slug: {payload['slug']}")
    lines.append(f"Category: {payload['category']}")
    lines.append(f"Documentation anchor: {payload['anchorId']}")
    lines.append("")
    lines.append("## Summary")
    lines.append(payload.get("summary") or _NO_SUMMARY)
    lines.append("")
    lines.append("## Primary references")
    lines.append(format_references(payload.get("references") or []))
    lines.append("")
    lines.append(f"Source catalogue: {payload['source']}")
    lines.append(f"Dataset generated: {payload['generatedAt']}")

    return "\n".join(lines)


def _reference_label(count: int) -> str:
    return "1 reference link" if count == 1 else f"{count} reference links"


def format_search_results(results: list[dict[str, Any]]) -> str:
    """Numbered one-line-per-hit listing of search result payloads."""
    if not results:
        return "No APIs matched the requested filters."
    return "\n".join(
        f"{i}. {r['title']} ({r['slug']}) - {_reference_label(len(r.get('references') or []))}"
        for i, r in enumerate(results, 1)
    )
