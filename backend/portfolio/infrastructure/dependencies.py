"""FastAPI dependency injection — wires infrastructure to application layer."""

import logging
from functools import lru_cache

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from portfolio.config import get_settings
from portfolio.application.interfaces import AuthProvider, ObjectStore, TableGateway
from portfolio.application.services import (
    AdminDashboard,
    AdminSessionRegistry,
    AuthService,
    EntityCatalog,
    PublicSiteService,
    get_entity_catalog,
)
from portfolio.domain.entities import AuthSession
from portfolio.domain.exceptions import AuthError
from portfolio.infrastructure.database import SQLAlchemyTableGateway, get_session_factory
from portfolio.infrastructure.memory import InMemoryAuthProvider, InMemoryTableGateway
from portfolio.infrastructure.notifications.notification_log import NotificationLog, StaticConfirmer
from portfolio.infrastructure.storage.local_object_store import LocalObjectStore
from portfolio.infrastructure.supabase import (
    SupabaseAuthClient,
    SupabaseObjectStore,
    SupabaseTableGateway,
)

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


@lru_cache
def get_catalog() -> EntityCatalog:
    """Entity descriptors, from settings or the bundled catalog."""
    return get_entity_catalog(get_settings().entity_catalog_file or None)


@lru_cache
def get_table_gateway() -> TableGateway:
    """Process-wide gateway acting with anonymous rights."""
    settings = get_settings()
    if settings.gateway_backend == "memory":
        logger.warning("Using the in-memory table gateway; content is lost on restart")
        return InMemoryTableGateway()
    if settings.gateway_backend == "database":
        return SQLAlchemyTableGateway(get_session_factory())
    return SupabaseTableGateway(
        base_url=settings.supabase_url,
        anon_key=settings.supabase_anon_key,
        timeout=settings.supabase_timeout,
    )


@lru_cache
def get_object_store() -> ObjectStore:
    settings = get_settings()
    if settings.storage_backend == "local":
        return LocalObjectStore(settings.upload_dir, public_base_url=settings.public_storage_url)
    return SupabaseObjectStore(
        base_url=settings.supabase_url,
        anon_key=settings.supabase_anon_key,
        timeout=settings.supabase_timeout,
    )


@lru_cache
def get_auth_provider() -> AuthProvider:
    settings = get_settings()
    if settings.gateway_backend == "supabase":
        return SupabaseAuthClient(
            base_url=settings.supabase_url,
            anon_key=settings.supabase_anon_key,
            timeout=settings.supabase_timeout,
        )
    return InMemoryAuthProvider()


def build_dashboard(session: AuthSession) -> AdminDashboard:
    """New dashboard whose remote calls act as the signed-in user."""
    settings = get_settings()
    gateway = get_table_gateway()
    object_store = get_object_store()
    if isinstance(gateway, SupabaseTableGateway):
        gateway = gateway.with_token(session.access_token)
    if isinstance(object_store, SupabaseObjectStore):
        object_store = object_store.with_token(session.access_token)

    return AdminDashboard(
        catalog=get_catalog(),
        gateway=gateway,
        notifier=NotificationLog(max_size=settings.notification_history_size),
        # Deletes over HTTP pass their own confirmer built from the request
        confirmer=StaticConfirmer(False),
        object_store=object_store,
    )


@lru_cache
def get_admin_registry() -> AdminSessionRegistry:
    return AdminSessionRegistry(build_dashboard)


def get_auth_service(
    provider: AuthProvider = Depends(get_auth_provider),
    gateway: TableGateway = Depends(get_table_gateway),
) -> AuthService:
    return AuthService(provider, gateway, redirect_to=get_settings().auth_redirect_url)


def get_public_site_service(
    gateway: TableGateway = Depends(get_table_gateway),
) -> PublicSiteService:
    return PublicSiteService(gateway)


async def require_session(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    auth: AuthService = Depends(get_auth_service),
) -> AuthSession:
    """Gate for every admin endpoint. Raises 401 without a valid bearer token."""
    token = credentials.credentials if credentials else None
    try:
        return await auth.require_session(token)
    except AuthError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )


async def get_dashboard(
    session: AuthSession = Depends(require_session),
    registry: AdminSessionRegistry = Depends(get_admin_registry),
) -> AdminDashboard:
    """The signed-in user's dashboard, mounted on first use."""
    return await registry.get(session)
