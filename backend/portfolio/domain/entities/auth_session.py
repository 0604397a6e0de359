"""Domain entities for the external auth collaborator."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class AuthUser:
    """A user account as reported by the auth provider."""

    id: str
    email: str
    confirmed: bool = True


@dataclass
class AuthSession:
    """An authenticated session; its token gates the admin API."""

    access_token: str
    user: AuthUser
    refresh_token: str | None = None
    expires_at: datetime | None = None
