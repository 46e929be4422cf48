"""Entry API endpoints (owner-only)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from prooflog.api.dependencies import get_current_user, get_entry_service, get_proof_service
from prooflog.models.account import Account
from prooflog.models.enums import EntryType
from prooflog.schemas.auth import MessageResponse
from prooflog.schemas.entry import (
    EntryEnvelope,
    EntryFields,
    EntryListResponse,
    EntryResponse,
    ProofAttachedResponse,
)
from prooflog.schemas.proof import ProofAttach
from prooflog.services.entries import EntryService
from prooflog.services.proofs import ProofService

router = APIRouter(prefix="/api/v1/entries", tags=["entries"])


@router.get("", response_model=EntryListResponse)
def list_entries(
    current_user: Annotated[Account, Depends(get_current_user)],
    service: Annotated[EntryService, Depends(get_entry_service)],
    q: Annotated[str | None, Query(max_length=200)] = None,
    entry_type: Annotated[EntryType | None, Query(alias="type")] = None,
):
    """Get the current user's entries, newest first."""
    entries = service.list_owned(current_user.id, query=q, entry_type=entry_type)
    return EntryListResponse(entries=[EntryResponse.model_validate(e) for e in entries])


@router.post("", response_model=EntryEnvelope, status_code=status.HTTP_201_CREATED)
def create_entry(
    entry_data: EntryFields,
    current_user: Annotated[Account, Depends(get_current_user)],
    service: Annotated[EntryService, Depends(get_entry_service)],
):
    """Create a new entry."""
    entry = service.create(current_user.id, entry_data)
    return EntryEnvelope(entry=EntryResponse.model_validate(entry))


@router.get("/{entry_id}", response_model=EntryEnvelope)
def get_entry(
    entry_id: str,
    current_user: Annotated[Account, Depends(get_current_user)],
    service: Annotated[EntryService, Depends(get_entry_service)],
):
    """Get one of the current user's entries."""
    entry = service.get_owned(current_user.id, entry_id)
    return EntryEnvelope(entry=EntryResponse.model_validate(entry))


@router.put("/{entry_id}", response_model=EntryEnvelope)
def update_entry(
    entry_id: str,
    entry_data: EntryFields,
    current_user: Annotated[Account, Depends(get_current_user)],
    service: Annotated[EntryService, Depends(get_entry_service)],
):
    """Replace the fields of one of the current user's entries."""
    entry = service.update_owned(current_user.id, entry_id, entry_data)
    return EntryEnvelope(entry=EntryResponse.model_validate(entry))


@router.delete("/{entry_id}", response_model=MessageResponse)
def delete_entry(
    entry_id: str,
    current_user: Annotated[Account, Depends(get_current_user)],
    service: Annotated[EntryService, Depends(get_entry_service)],
):
    """Delete one of the current user's entries."""
    service.delete_owned(current_user.id, entry_id)
    return MessageResponse(message="Entry deleted")


@router.post("/{entry_id}/proofs", response_model=ProofAttachedResponse)
def attach_proof(
    entry_id: str,
    attachment: ProofAttach,
    current_user: Annotated[Account, Depends(get_current_user)],
    service: Annotated[ProofService, Depends(get_proof_service)],
):
    """Attach an uploaded proof to one of the current user's entries."""
    entry = service.attach(current_user.id, entry_id, attachment)
    return ProofAttachedResponse(
        message="Proof attached successfully",
        entry=EntryResponse.model_validate(entry),
    )
