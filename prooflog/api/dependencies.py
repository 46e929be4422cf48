"""FastAPI dependencies for authentication, database and storage."""

import logging
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import APIKeyCookie
from sqlalchemy.orm import Session

from prooflog.config import Settings
from prooflog.database import get_db
from prooflog.models.account import Account
from prooflog.services.auth import get_account, verify_session
from prooflog.services.entries import EntryService
from prooflog.services.errors import InvalidSession, NotAuthenticated
from prooflog.services.proofs import ProofService
from prooflog.services.storage import ProofStorage

logger = logging.getLogger(__name__)


def build_session_cookie(settings: Settings) -> APIKeyCookie:
    """Cookie scheme carrying the session token."""
    return APIKeyCookie(name=settings.session_cookie_name, auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Get the settings the running application was built with."""
    return request.app.state.settings


async def get_session_token(request: Request) -> str | None:
    """Read the session token from the application's cookie."""
    return await request.app.state.session_cookie(request)


def get_current_user(
    token: Annotated[str | None, Depends(get_session_token)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    db: Annotated[Session, Depends(get_db)],
) -> Account:
    """Resolve the caller's account from the session cookie.

    Every failure (no cookie, bad token, expired, account gone) raises the same
    ``NotAuthenticated`` so callers cannot tell which one happened.
    """
    if not token:
        raise NotAuthenticated()

    try:
        account_id = verify_session(token, settings)
    except InvalidSession:
        raise NotAuthenticated() from None

    account = get_account(db, account_id)
    if account is None:
        logger.warning(f"Session presented for missing account {account_id}")
        raise NotAuthenticated()

    return account


def get_storage(request: Request) -> ProofStorage:
    """Get the process-wide proof storage."""
    return request.app.state.storage


def get_entry_service(
    db: Annotated[Session, Depends(get_db)],
) -> EntryService:
    """Get entry service with dependencies."""
    return EntryService(db)


def get_proof_service(
    db: Annotated[Session, Depends(get_db)],
    storage: Annotated[ProofStorage, Depends(get_storage)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> ProofService:
    """Get proof service with dependencies."""
    return ProofService(db, storage, settings)
