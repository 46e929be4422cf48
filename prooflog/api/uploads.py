"""Upload grant API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from prooflog.api.dependencies import get_current_user, get_proof_service
from prooflog.models.account import Account
from prooflog.schemas.proof import UploadGrantResponse, UploadRequest
from prooflog.services.proofs import ProofService

router = APIRouter(prefix="/api/v1/uploads", tags=["uploads"])


@router.post("/presign", response_model=UploadGrantResponse)
def presign_upload(
    upload: UploadRequest,
    current_user: Annotated[Account, Depends(get_current_user)],
    service: Annotated[ProofService, Depends(get_proof_service)],
):
    """Get a short-lived URL to upload a proof file directly to storage.

    The client PUTs the bytes to ``upload_url`` and then attaches ``key`` with
    ``POST /api/v1/entries/{id}/proofs``.
    """
    grant = service.request_upload(
        current_user.id,
        upload.entry_id,
        upload.file_name,
        upload.content_type,
        upload.size,
    )
    return UploadGrantResponse(
        upload_url=grant.upload_url, key=grant.key, expires_in=grant.expires_in
    )
