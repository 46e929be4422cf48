"""Pydantic schemas for API requests and responses."""

from prooflog.schemas.auth import AccountLogin, AccountRegister, AccountResponse, AuthResponse
from prooflog.schemas.entry import EntryFields, EntryResponse, ProofResponse, normalize_tags
from prooflog.schemas.proof import ProofAttach, UploadGrantResponse, UploadRequest
from prooflog.schemas.public import (
    ProofLink,
    PublicEntryDetailResponse,
    PublicEntryResponse,
    PublicProfileResponse,
)

__all__ = [
    "AccountRegister",
    "AccountLogin",
    "AccountResponse",
    "AuthResponse",
    "EntryFields",
    "EntryResponse",
    "ProofResponse",
    "normalize_tags",
    "UploadRequest",
    "UploadGrantResponse",
    "ProofAttach",
    "ProofLink",
    "PublicEntryResponse",
    "PublicProfileResponse",
    "PublicEntryDetailResponse",
]
