"""Catalog builder: page → records → slugs → validated :class:`Dataset`.

Also owns the dataset's JSON boundary (write, read, validate).
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from apicatalog import settings
from apicatalog.errors import DatasetValidationError
from apicatalog.extractors.blocks import html_to_blocks
from apicatalog.extractors.sections import extract_records
from apicatalog.extractors.slugs import SlugAssigner
from apicatalog.items import ApiEntry, Dataset, Reference

if TYPE_CHECKING:
    from collections.abc import Sequence

    from apicatalog.extractors.sections import RawRecord

logger = logging.getLogger(__name__)


def _utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""
    now = datetime.now(UTC)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _format_errors(exc: ValidationError) -> list[str]:
    problems: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()))
        problems.append(f"{loc or '<root>'}: {err.get('msg', 'invalid')}")
    return problems


# ---------------------------------------------------------------------------
# Build
# ---------------------------------------------------------------------------

def build_entries(records: Sequence[RawRecord]) -> list[ApiEntry]:
    """Assign slugs to *records* in order and convert them to :class:`ApiEntry`."""
    assigner = SlugAssigner()
    entries: list[ApiEntry] = []
    for record in records:
        entries.append(
            ApiEntry(
                title=record.title,
                slug=assigner.assign(record.title, record.anchor_id),
                anchor_id=record.anchor_id,
                category=record.category,
                category_id=record.category_id,
                summary=record.summary,
                references=tuple(
                    Reference(title=link.text, url=link.url) for link in record.references
                ),
            ),
        )
    return entries


def build_dataset(
    records: Sequence[RawRecord],
    source: str,
    generated_at: str | None = None,
) -> Dataset:
    """Assemble *records* into a :class:`Dataset` stamped with the build time.

    Raises:
        StructuralExtractionError: if a record has no derivable slug.
        DatasetValidationError: if an assembled entry fails the schema.
    """
    try:
        entries = build_entries(records)
        return Dataset(
            source=source,
            generated_at=generated_at or _utc_timestamp(),
            count=len(entries),
            apis=tuple(entries),
        )
    except ValidationError as exc:
        raise DatasetValidationError(
            "Built catalog failed validation", problems=_format_errors(exc),
        ) from exc


def build_catalog(
    html: str | bytes,
    source: str = settings.SOURCE_URL,
    *,
    root_selector: str = settings.ROOT_SELECTOR,
    generated_at: str | None = None,
) -> Dataset:
    """Run the whole pipeline over a documentation page.

    Args:
        html:          Raw HTML of the page, as text or undecoded bytes.
        source:        URL the page was fetched from; recorded as provenance
                       and used to resolve relative links.
        root_selector: CSS selector of the element whose children hold the
                       category/API headings.
        generated_at:  Override the build timestamp (mainly for tests).

    Returns:
        Validated :class:`~apicatalog.items.Dataset`.

    Raises:
        :class:`~apicatalog.errors.StructuralExtractionError`: when the page
            does not have the expected structure.  Nothing partial is returned.
    """
    blocks = html_to_blocks(html, base_url=source, root_selector=root_selector)
    records = extract_records(blocks)
    dataset = build_dataset(records, source, generated_at=generated_at)
    logger.info("Built %d API entries from %s", dataset.count, source)
    return dataset


# ---------------------------------------------------------------------------
# JSON boundary
# ---------------------------------------------------------------------------

def dataset_to_json(dataset: Dataset) -> str:
    return json.dumps(dataset.to_dict(), indent=2, ensure_ascii=False)


def write_dataset(dataset: Dataset, path: Path | str) -> Path:
    """Write *dataset* to *path* as pretty-printed UTF-8 JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dataset_to_json(dataset), encoding="utf-8")
    logger.info("Wrote %d API entries to %s", dataset.count, path)
    return path


def parse_dataset(data: Any, path: Path | str | None = None) -> Dataset:
    """Validate already-decoded JSON *data* into a :class:`Dataset`.

    Raises:
        DatasetValidationError: on any schema violation.
    """
    try:
        return Dataset.model_validate(data)
    except ValidationError as exc:
        where = f" in {path}" if path else ""
        raise DatasetValidationError(
            f"Invalid API dataset{where}", path=path, problems=_format_errors(exc),
        ) from exc


def load_dataset(path: Path | str = settings.DATA_FILE) -> Dataset:
    """Read and validate the dataset file at *path*.

    Raises:
        DatasetValidationError: if the file is unreadable, is not JSON, or
            does not match the schema.
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DatasetValidationError(
            f"Could not read API dataset {path}: {exc}", path=path,
        ) from exc
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise DatasetValidationError(
            f"API dataset {path} is not valid JSON: {exc}", path=path,
        ) from exc
    return parse_dataset(data, path=path)
