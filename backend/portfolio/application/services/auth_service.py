import logging

from portfolio.application.interfaces import AuthProvider, TableGateway
from portfolio.domain.entities import AuthSession, AuthUser
from portfolio.domain.exceptions import AuthError
from portfolio.infrastructure.logging.activity_logger import ActivityLogger, ActivityStage

logger = logging.getLogger(__name__)
alog = ActivityLogger(__name__)

PROFILES_TABLE = "profiles"
ADMIN_ROLE = "admin"


class AuthService:
    """Sign-in/sign-up use cases on top of the hosted auth module."""

    def __init__(self, provider: AuthProvider, gateway: TableGateway, redirect_to: str):
        self._provider = provider
        self._gateway = gateway
        self._redirect_to = redirect_to

    async def sign_in(self, email: str, password: str) -> AuthSession:
        alog.step_start(ActivityStage.AUTH, "Signing in", email=email)
        session = await self._provider.sign_in(email, password)
        alog.step_complete(ActivityStage.AUTH, "Signed in", user=session.user.id)
        return session

    async def sign_up(self, email: str, password: str) -> AuthUser:
        """Register an account and give it an admin profile.

        A failing profile insert is logged but does not undo the sign-up.
        """
        alog.step_start(ActivityStage.AUTH, "Signing up", email=email)
        user = await self._provider.sign_up(email, password, self._redirect_to)

        profile = {
            "user_id": user.id,
            "username": email.split("@")[0],
            "role": ADMIN_ROLE,
        }
        result = await self._gateway.insert(PROFILES_TABLE, profile)
        if not result.ok:
            logger.error("Profile creation error for %s: %s", user.id, result.error)
        alog.step_complete(ActivityStage.AUTH, "Signed up", user=user.id)
        return user

    async def get_session(self, access_token: str | None) -> AuthSession | None:
        if not access_token:
            return None
        return await self._provider.get_session(access_token)

    async def require_session(self, access_token: str | None) -> AuthSession:
        """Resolve a token or raise ``AuthError``."""
        session = await self.get_session(access_token)
        if session is None:
            raise AuthError("Not authenticated")
        return session

    async def sign_out(self, access_token: str) -> None:
        await self._provider.sign_out(access_token)
        logger.info("Signed out")
