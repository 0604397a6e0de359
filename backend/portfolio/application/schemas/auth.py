"""Pydantic DTOs for sign-in / sign-up."""

from datetime import datetime

from pydantic import BaseModel, Field


class CredentialsRequest(BaseModel):
    """E-mail and password, used by both sign-in and sign-up."""

    email: str = Field(..., min_length=3, max_length=255, examples=["admin@example.com"])
    password: str = Field(..., min_length=6, max_length=255)


class UserResponse(BaseModel):
    id: str
    email: str
    confirmed: bool

    model_config = {"from_attributes": True}


class SessionResponse(BaseModel):
    """Returned on sign-in; ``access_token`` goes into the Authorization header."""

    access_token: str
    token_type: str = "bearer"
    refresh_token: str | None = None
    expires_at: datetime | None = None
    user: UserResponse


class SignUpResponse(BaseModel):
    user: UserResponse
    message: str = "Please check your email to confirm your account."
