"""Sign-in / sign-up endpoints delegating to the hosted auth module."""

from fastapi import APIRouter, Depends, HTTPException, status

from portfolio.application.schemas import (
    CredentialsRequest,
    SessionResponse,
    SignUpResponse,
    UserResponse,
)
from portfolio.application.services import AdminSessionRegistry, AuthService
from portfolio.domain.entities import AuthSession
from portfolio.domain.exceptions import AuthError
from portfolio.infrastructure.dependencies import (
    get_admin_registry,
    get_auth_service,
    require_session,
)

router = APIRouter(prefix="/auth", tags=["Auth"])


def _session_response(session: AuthSession) -> SessionResponse:
    return SessionResponse(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        expires_at=session.expires_at,
        user=UserResponse.model_validate(session.user),
    )


@router.post("/sign-in", response_model=SessionResponse)
async def sign_in(
    data: CredentialsRequest,
    service: AuthService = Depends(get_auth_service),
) -> SessionResponse:
    """Exchange e-mail and password for a bearer token."""
    try:
        session = await service.sign_in(data.email, data.password)
    except AuthError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return _session_response(session)


@router.post("/sign-up", response_model=SignUpResponse, status_code=status.HTTP_201_CREATED)
async def sign_up(
    data: CredentialsRequest,
    service: AuthService = Depends(get_auth_service),
) -> SignUpResponse:
    """Register an admin account; a confirmation mail may follow."""
    try:
        user = await service.sign_up(data.email, data.password)
    except AuthError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return SignUpResponse(user=UserResponse.model_validate(user))


@router.get("/session", response_model=SessionResponse)
async def current_session(session: AuthSession = Depends(require_session)) -> SessionResponse:
    return _session_response(session)


@router.post("/sign-out", status_code=status.HTTP_204_NO_CONTENT)
async def sign_out(
    session: AuthSession = Depends(require_session),
    service: AuthService = Depends(get_auth_service),
    registry: AdminSessionRegistry = Depends(get_admin_registry),
) -> None:
    """Revoke the token and drop the user's dashboard state."""
    await service.sign_out(session.access_token)
    registry.discard(session.user.id)
