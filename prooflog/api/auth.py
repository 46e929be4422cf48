"""Authentication API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from prooflog.api.dependencies import get_app_settings, get_current_user
from prooflog.config import Settings
from prooflog.database import get_db
from prooflog.models.account import Account
from prooflog.schemas.auth import (
    AccountLogin,
    AccountRegister,
    AccountResponse,
    AuthResponse,
    HandleResponse,
    MessageResponse,
)
from prooflog.services.auth import authenticate_account, issue_session, register_account
from prooflog.services.errors import NotAuthenticated

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_max_age_seconds,
        path="/",
        httponly=True,
        samesite="strict",
        secure=not settings.is_development,
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value="",
        max_age=0,
        path="/",
        httponly=True,
        samesite="strict",
        secure=not settings.is_development,
    )


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_409_CONFLICT: {
            "description": (
                "The email is already registered, or its local-part is already the "
                "handle of another account (e.g. sak2@y.com after sak2@x.com)"
            )
        }
    },
)
def register(
    account_data: AccountRegister,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
):
    """Register a new account and start a session.

    Returns 409 "User already exists" for a registered email and 409 "Handle
    already taken" when another account already owns the email's local-part.
    """
    account = register_account(db, account_data.email, account_data.password)
    set_session_cookie(response, issue_session(account.id, settings), settings)

    return AuthResponse(
        message="User registered successfully",
        user=AccountResponse.model_validate(account),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: AccountLogin,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
):
    """Login with email and password."""
    account = authenticate_account(db, credentials.email, credentials.password)

    if not account:
        logger.info("Failed login attempt")
        raise NotAuthenticated("Invalid credentials")

    set_session_cookie(response, issue_session(account.id, settings), settings)

    return AuthResponse(
        message="Login successful",
        user=AccountResponse.model_validate(account),
    )


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    settings: Annotated[Settings, Depends(get_app_settings)],
):
    """Logout by expiring the session cookie."""
    clear_session_cookie(response, settings)
    return MessageResponse(message="Logged out")


@router.get("/me", response_model=AccountResponse)
def get_me(
    current_user: Annotated[Account, Depends(get_current_user)],
):
    """Get current account information."""
    return current_user


@router.get("/handle", response_model=HandleResponse)
def get_handle(
    current_user: Annotated[Account, Depends(get_current_user)],
):
    """Get the public handle of the current account."""
    return HandleResponse(handle=current_user.handle)
