"""Proof upload schemas."""

from pydantic import BaseModel, Field


class UploadRequest(BaseModel):
    """Request for a presigned upload URL.

    ``content_type`` and ``size`` are as declared by the client; the uploaded
    bytes are never inspected.
    """

    entry_id: str = Field(..., min_length=1)
    file_name: str = Field(..., min_length=1, max_length=255)
    content_type: str = Field(..., min_length=1, max_length=255)
    size: int = Field(..., gt=0)


class UploadGrantResponse(BaseModel):
    upload_url: str
    key: str
    expires_in: int


class ProofAttach(BaseModel):
    """Metadata for an object already uploaded through a grant."""

    key: str = Field(..., min_length=1, max_length=1024)
    original_name: str = Field(..., min_length=1, max_length=255)
    content_type: str = Field(..., min_length=1, max_length=255)
    size: int = Field(0, ge=0)
