"""Pydantic schema for the API catalog dataset."""

from __future__ import annotations

from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

# ---------------------------------------------------------------------------
# Shared config: camelCase on the wire, snake_case in Python, immutable
# ---------------------------------------------------------------------------

_MODEL_CONFIG = ConfigDict(frozen=True, populate_by_name=True)


def is_absolute_url(url: str) -> bool:
    """Return True if *url* has both a scheme and a network location."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc)


def _check_absolute_url(v: str) -> str:
    if not is_absolute_url(v):
        raise ValueError(f"not an absolute URL: {v!r}")
    return v


class Reference(BaseModel):
    """An outbound documentation link attached to an API entry."""

    model_config = _MODEL_CONFIG

    title: StrictStr
    url: StrictStr

    @field_validator("url")
    @classmethod
    def check_url(cls, v: str) -> str:
        return _check_absolute_url(v)


class ApiEntry(BaseModel):
    """One documented API grouped under a category."""

    model_config = _MODEL_CONFIG

    title: StrictStr
    slug: StrictStr = Field(min_length=1)
    anchor_id: StrictStr = Field(alias="anchorId")
    category: StrictStr
    category_id: StrictStr = Field(alias="categoryId")
    summary: StrictStr
    references: tuple[Reference, ...]

    def to_dict(self) -> dict:
        """Return the JSON form (camelCase keys)."""
        return self.model_dump(mode="json", by_alias=True)


class Dataset(BaseModel):
    """The versioned catalog produced by one build run."""

    model_config = _MODEL_CONFIG

    source: StrictStr
    generated_at: StrictStr = Field(alias="generatedAt")
    count: int = Field(ge=0, strict=True)
    apis: tuple[ApiEntry, ...]

    @field_validator("source")
    @classmethod
    def check_source(cls, v: str) -> str:
        return _check_absolute_url(v)

    def to_dict(self) -> dict:
        """Return the JSON form (camelCase keys)."""
        return self.model_dump(mode="json", by_alias=True)
