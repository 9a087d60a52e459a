"""Exceptions and diagnostics raised or returned by the catalog pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


class CatalogError(RuntimeError):
    """Base class for fatal catalog build/load failures."""


class StructuralExtractionError(CatalogError):
    """Raised when the documentation page does not have the expected shape.

    Covers a missing root container, an API heading with no enclosing
    category, a page with no API headings, and headings for which no slug
    can be derived.  The whole build is aborted; no partial catalog is
    written.
    """


class DatasetValidationError(CatalogError):
    """Raised when a dataset file or payload fails schema validation.

    Attributes:
        path     -- file the dataset was read from (None for in-memory data)
        problems -- one human-readable line per failing field
    """

    def __init__(
        self,
        message: str,
        path: Path | str | None = None,
        problems: list[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.problems = problems or []

    def __str__(self) -> str:
        base = super().__str__()
        if not self.problems:
            return base
        return base + "\n" + "\n".join(f"  - {p}" for p in self.problems)


@dataclass(frozen=True)
class CountMismatchWarning:
    """Declared ``count`` disagrees with the number of entries in ``apis``.

    Non-fatal: the array length is the ground truth.
    """

    declared: int
    actual: int
    message: str = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "message",
            f"Dataset count mismatch: expected {self.declared}, actual {self.actual}",
        )
