"""Entry schemas."""

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from prooflog.models.enums import EntryType, Visibility

MAX_TAGS = 25


def normalize_tags(value: Any) -> list[str]:
    """Accept a list or a comma-separated string; trim, drop empties, cap the count.

    >>> normalize_tags("a, b ,,c")
    ['a', 'b', 'c']
    """
    if value is None:
        return []
    if isinstance(value, str):
        parts = value.split(",")
    elif isinstance(value, list | tuple):
        parts = value
    else:
        return []
    tags = [str(part).strip() for part in parts if part is not None]
    return [tag for tag in tags if tag][:MAX_TAGS]


class EntryFields(BaseModel):
    """Fields supplied on create and (full) update."""

    model_config = ConfigDict(str_strip_whitespace=True)

    type: EntryType
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=20000)
    date: dt.date
    tags: list[str] = Field(default_factory=list)
    visibility: Visibility = Visibility.PRIVATE

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, value: Any) -> list[str]:
        return normalize_tags(value)

    @field_validator("visibility", mode="before")
    @classmethod
    def _coerce_visibility(cls, value: Any) -> Visibility:
        return Visibility.coerce(value)


class ProofResponse(BaseModel):
    """Proof record embedded in an entry."""

    key: str
    original_name: str
    content_type: str
    size: int = 0
    uploaded_at: dt.datetime | None = None


class EntryResponse(BaseModel):
    """Entry as seen by its owner."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    owner_id: str
    type: EntryType
    title: str
    description: str
    tags: list[str]
    visibility: Visibility
    date: str
    proofs: list[ProofResponse] = []
    created_at: dt.datetime
    updated_at: dt.datetime


class EntryEnvelope(BaseModel):
    entry: EntryResponse


class EntryListResponse(BaseModel):
    entries: list[EntryResponse]


class ProofAttachedResponse(BaseModel):
    message: str
    entry: EntryResponse
