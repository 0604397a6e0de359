"""Abstract auth provider interface — the backend's hosted auth module.

Token formats and session lifetimes belong to the provider; the application
only passes access tokens through.
"""

from abc import ABC, abstractmethod

from portfolio.domain.entities import AuthSession, AuthUser


class AuthProvider(ABC):
    """Port — defines what the application needs from the auth module."""

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> AuthSession:
        """Password sign-in.

        Raises:
            AuthError: If the credentials are rejected.
        """
        ...

    @abstractmethod
    async def sign_up(self, email: str, password: str, redirect_to: str) -> AuthUser:
        """Register a new account; confirmation mail points at ``redirect_to``."""
        ...

    @abstractmethod
    async def get_session(self, access_token: str) -> AuthSession | None:
        """Resolve a token into a session, or None when it is not valid."""
        ...

    @abstractmethod
    async def sign_out(self, access_token: str) -> None:
        """Revoke the session behind ``access_token``."""
        ...
