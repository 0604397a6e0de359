"""In-memory auth provider for local development and tests."""

import logging
import secrets
import uuid

from portfolio.application.interfaces import AuthProvider
from portfolio.domain.entities import AuthSession, AuthUser
from portfolio.domain.exceptions import AuthError

logger = logging.getLogger(__name__)


class InMemoryAuthProvider(AuthProvider):
    """Password accounts and bearer tokens kept in process memory.

    Accounts are confirmed immediately; ``redirect_to`` is only logged.
    """

    def __init__(self):
        self._accounts: dict[str, tuple[str, AuthUser]] = {}
        self._sessions: dict[str, AuthSession] = {}

    async def sign_in(self, email: str, password: str) -> AuthSession:
        account = self._accounts.get(email.lower())
        if account is None or not secrets.compare_digest(account[0], password):
            raise AuthError("Invalid login credentials")
        session = AuthSession(
            access_token=secrets.token_urlsafe(32),
            refresh_token=secrets.token_urlsafe(32),
            user=account[1],
        )
        self._sessions[session.access_token] = session
        return session

    async def sign_up(self, email: str, password: str, redirect_to: str) -> AuthUser:
        key = email.lower()
        if key in self._accounts:
            raise AuthError("User already registered", status_code=400)
        user = AuthUser(id=str(uuid.uuid4()), email=email, confirmed=True)
        self._accounts[key] = (password, user)
        logger.info("Registered %s (confirmation redirect %s)", email, redirect_to)
        return user

    async def get_session(self, access_token: str) -> AuthSession | None:
        return self._sessions.get(access_token)

    async def sign_out(self, access_token: str) -> None:
        self._sessions.pop(access_token, None)
