"""Public profile schemas.

Nothing here carries an account id, owner id or email.
"""

import datetime as dt

from pydantic import BaseModel, ConfigDict

from prooflog.models.enums import EntryType


class PublicUser(BaseModel):
    handle: str


class PublicEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    type: EntryType
    title: str
    description: str
    tags: list[str]
    date: str
    created_at: dt.datetime
    updated_at: dt.datetime


class PublicProfileResponse(BaseModel):
    user: PublicUser
    entries: list[PublicEntryResponse]


class ProofLink(BaseModel):
    """Short-lived download link for one attached proof."""

    key: str
    url: str
    original_name: str
    content_type: str
    size: int
    uploaded_at: dt.datetime | None = None


class PublicEntryDetailResponse(BaseModel):
    entry: PublicEntryResponse
    proof_urls: list[ProofLink]
