"""Public profile API endpoints (no authentication)."""

from typing import Annotated

from fastapi import APIRouter, Depends

from prooflog.api.dependencies import get_entry_service, get_proof_service
from prooflog.schemas.public import (
    PublicEntryDetailResponse,
    PublicEntryResponse,
    PublicProfileResponse,
    PublicUser,
)
from prooflog.services.entries import EntryService
from prooflog.services.proofs import ProofService

router = APIRouter(prefix="/api/v1/public", tags=["public"])


@router.get("/{handle}", response_model=PublicProfileResponse)
def get_public_profile(
    handle: str,
    service: Annotated[EntryService, Depends(get_entry_service)],
):
    """Get the public entries of a handle."""
    account, entries = service.list_public(handle)
    return PublicProfileResponse(
        user=PublicUser(handle=account.handle),
        entries=[PublicEntryResponse.model_validate(e) for e in entries],
    )


@router.get("/{handle}/entries/{entry_id}", response_model=PublicEntryDetailResponse)
def get_public_entry(
    handle: str,
    entry_id: str,
    entries: Annotated[EntryService, Depends(get_entry_service)],
    proofs: Annotated[ProofService, Depends(get_proof_service)],
):
    """Get one public entry with short-lived download links for its proofs."""
    entry = entries.get_public(handle, entry_id)
    return PublicEntryDetailResponse(
        entry=PublicEntryResponse.model_validate(entry),
        proof_urls=proofs.presign_public_proofs(entry),
    )
