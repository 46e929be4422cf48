"""Authentication schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class AccountRegister(BaseModel):
    """Account registration request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=6, max_length=128)


class AccountLogin(BaseModel):
    """Account login request."""

    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class AccountResponse(BaseModel):
    """Account information response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    handle: str


class AuthResponse(BaseModel):
    """Authentication response. The session itself travels in the cookie."""

    message: str
    user: AccountResponse


class HandleResponse(BaseModel):
    handle: str


class MessageResponse(BaseModel):
    message: str
