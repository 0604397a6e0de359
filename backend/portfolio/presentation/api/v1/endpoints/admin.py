"""Admin endpoints — drive the signed-in user's entity form controllers.

Form state lives server-side per user, so a client opens a form, edits the
draft, uploads images and submits in separate requests. Action responses
carry the notifications the action raised.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, UploadFile, status

from portfolio.application.schemas import (
    ActionResponse,
    DashboardResponse,
    DashboardStatsResponse,
    DescriptorResponse,
    DraftUpdate,
    EntityListResponse,
    FailedUploadSchema,
    FormStateResponse,
    MessagesResponse,
    NotificationSchema,
    ReadFlagRequest,
    ReplyRequest,
    SearchUpdate,
    UploadResponse,
)
from portfolio.application.services import AdminDashboard, EntityFormController
from portfolio.domain.entities import LocalFile, Notification
from portfolio.domain.exceptions import (
    EntityNotFoundError,
    InvalidStateError,
    UnknownEntityTypeError,
    UnknownFieldError,
)
from portfolio.infrastructure.dependencies import get_dashboard
from portfolio.infrastructure.notifications.notification_log import StaticConfirmer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])


# ── Helpers ─────────────────────────────────────────────────────────


def _controller(dashboard: AdminDashboard, entity: str) -> EntityFormController:
    try:
        return dashboard.controller(entity)
    except UnknownEntityTypeError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


def _schemas(raised: list[Notification]) -> list[NotificationSchema]:
    return [NotificationSchema.from_entity(n) for n in raised]


def _http_error(e: Exception) -> HTTPException:
    if isinstance(e, EntityNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if isinstance(e, UnknownFieldError):
        return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


def _dashboard_response(dashboard: AdminDashboard) -> DashboardResponse:
    return DashboardResponse(
        search=dashboard.search,
        stats=DashboardStatsResponse.model_validate(dashboard.stats),
        entities=list(dashboard.controllers),
    )


def _list_response(controller: EntityFormController, search: str) -> EntityListResponse:
    items = controller.filtered(search)
    error = controller.cache.last_error
    return EntityListResponse(
        entity=controller.descriptor.name,
        search=search,
        items=items,
        total=len(items),
        last_error=error.message if error else None,
    )


# ── Dashboard ───────────────────────────────────────────────────────


@router.get("", response_model=DashboardResponse)
async def dashboard_summary(dashboard: AdminDashboard = Depends(get_dashboard)) -> DashboardResponse:
    return _dashboard_response(dashboard)


@router.put("/search", response_model=DashboardResponse)
async def set_search(
    data: SearchUpdate,
    dashboard: AdminDashboard = Depends(get_dashboard),
) -> DashboardResponse:
    """Set the search string shared by every admin list."""
    dashboard.search = data.search
    return _dashboard_response(dashboard)


@router.get("/stats", response_model=DashboardStatsResponse)
async def stats(
    refresh: bool = Query(False, description="Recount before answering"),
    dashboard: AdminDashboard = Depends(get_dashboard),
) -> DashboardStatsResponse:
    if refresh:
        await dashboard.refresh_stats()
    return DashboardStatsResponse.model_validate(dashboard.stats)


@router.get("/notifications", response_model=list[NotificationSchema])
async def notifications(dashboard: AdminDashboard = Depends(get_dashboard)) -> list[NotificationSchema]:
    return _schemas(dashboard.notifier.history())


@router.get("/entities", response_model=list[DescriptorResponse])
async def list_entity_types(dashboard: AdminDashboard = Depends(get_dashboard)) -> list[DescriptorResponse]:
    return [
        DescriptorResponse.from_descriptor(c.descriptor, c.accepts_uploads)
        for c in dashboard.controllers.values()
    ]


# ── Entity lists ────────────────────────────────────────────────────


@router.get("/entities/{entity}", response_model=EntityListResponse)
async def list_entities(
    entity: str,
    search: str | None = Query(None, description="Overrides the dashboard search string"),
    dashboard: AdminDashboard = Depends(get_dashboard),
) -> EntityListResponse:
    controller = _controller(dashboard, entity)
    return _list_response(controller, dashboard.search if search is None else search)


@router.post("/entities/{entity}/refresh", response_model=EntityListResponse)
async def refresh_entities(
    entity: str,
    dashboard: AdminDashboard = Depends(get_dashboard),
) -> EntityListResponse:
    """Retry the list fetch after a failure."""
    controller = _controller(dashboard, entity)
    await controller.mount()
    return _list_response(controller, dashboard.search)


@router.delete("/entities/{entity}/items/{entity_id}", response_model=ActionResponse)
async def delete_entity(
    entity: str,
    entity_id: str,
    confirm: bool = Query(False, description="Answer to the delete confirmation prompt"),
    dashboard: AdminDashboard = Depends(get_dashboard),
) -> ActionResponse:
    """Delete one record. Nothing is deleted unless ``confirm=true``."""
    controller = _controller(dashboard, entity)
    with dashboard.notifier.capture() as raised:
        ok = await controller.delete(entity_id, confirmer=StaticConfirmer(confirm))
    return ActionResponse(
        ok=ok,
        form=FormStateResponse.from_controller(controller),
        notifications=_schemas(raised),
    )


# ── Form ────────────────────────────────────────────────────────────


@router.get("/entities/{entity}/form", response_model=FormStateResponse)
async def form_state(entity: str, dashboard: AdminDashboard = Depends(get_dashboard)) -> FormStateResponse:
    return FormStateResponse.from_controller(_controller(dashboard, entity))


@router.post("/entities/{entity}/form", response_model=FormStateResponse)
async def open_create_form(entity: str, dashboard: AdminDashboard = Depends(get_dashboard)) -> FormStateResponse:
    """Open an empty form for a new record."""
    controller = _controller(dashboard, entity)
    try:
        controller.open_create()
    except InvalidStateError as e:
        raise _http_error(e)
    return FormStateResponse.from_controller(controller)


@router.post("/entities/{entity}/form/edit/{entity_id}", response_model=FormStateResponse)
async def open_edit_form(
    entity: str,
    entity_id: str,
    dashboard: AdminDashboard = Depends(get_dashboard),
) -> FormStateResponse:
    """Open the form seeded from an existing record."""
    controller = _controller(dashboard, entity)
    try:
        controller.open_edit(entity_id)
    except (EntityNotFoundError, InvalidStateError) as e:
        raise _http_error(e)
    return FormStateResponse.from_controller(controller)


@router.patch("/entities/{entity}/form", response_model=FormStateResponse)
async def update_draft(
    entity: str,
    data: DraftUpdate,
    dashboard: AdminDashboard = Depends(get_dashboard),
) -> FormStateResponse:
    controller = _controller(dashboard, entity)
    try:
        controller.update_draft(**data.values)
    except (UnknownFieldError, InvalidStateError) as e:
        raise _http_error(e)
    return FormStateResponse.from_controller(controller)


@router.delete("/entities/{entity}/form", response_model=FormStateResponse)
async def cancel_form(entity: str, dashboard: AdminDashboard = Depends(get_dashboard)) -> FormStateResponse:
    controller = _controller(dashboard, entity)
    controller.cancel()
    return FormStateResponse.from_controller(controller)


@router.post("/entities/{entity}/form/submit", response_model=ActionResponse)
async def submit_form(entity: str, dashboard: AdminDashboard = Depends(get_dashboard)) -> ActionResponse:
    """Insert or update from the draft. Failures keep the form open."""
    controller = _controller(dashboard, entity)
    try:
        with dashboard.notifier.capture() as raised:
            ok = await controller.submit()
    except InvalidStateError as e:
        raise _http_error(e)
    return ActionResponse(
        ok=ok,
        form=FormStateResponse.from_controller(controller),
        notifications=_schemas(raised),
    )


@router.post("/entities/{entity}/form/assets", response_model=UploadResponse)
async def upload_assets(
    entity: str,
    files: list[UploadFile],
    dashboard: AdminDashboard = Depends(get_dashboard),
) -> UploadResponse:
    """Upload images and attach their URLs to the open draft."""
    controller = _controller(dashboard, entity)
    if not files:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No files provided")

    selected = [
        LocalFile(
            filename=f.filename or "upload",
            content=await f.read(),
            content_type=f.content_type or "application/octet-stream",
        )
        for f in files
    ]
    try:
        with dashboard.notifier.capture() as raised:
            batch = await controller.upload_assets(selected)
    except InvalidStateError as e:
        raise _http_error(e)
    return UploadResponse(
        urls=batch.urls,
        failures=[FailedUploadSchema.model_validate(f) for f in batch.failures],
        form=FormStateResponse.from_controller(controller),
        notifications=_schemas(raised),
    )


@router.delete("/entities/{entity}/form/assets", response_model=FormStateResponse)
async def remove_asset(
    entity: str,
    url: str = Query(..., description="Image URL to detach from the draft"),
    dashboard: AdminDashboard = Depends(get_dashboard),
) -> FormStateResponse:
    """Detach an image from the draft; the stored file is kept."""
    controller = _controller(dashboard, entity)
    try:
        removed = controller.remove_asset(url)
    except InvalidStateError as e:
        raise _http_error(e)
    if not removed:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Image is not attached to the draft")
    return FormStateResponse.from_controller(controller)


# ── Contact inbox ───────────────────────────────────────────────────


@router.get("/messages", response_model=MessagesResponse)
async def messages(
    search: str | None = Query(None),
    dashboard: AdminDashboard = Depends(get_dashboard),
) -> MessagesResponse:
    inbox = dashboard.messages()
    term = dashboard.search if search is None else search
    return MessagesResponse(search=term, unread=inbox.unread(term), read=inbox.read(term))


@router.put("/messages/{message_id}/read", response_model=ActionResponse)
async def set_message_read(
    message_id: str,
    data: ReadFlagRequest,
    dashboard: AdminDashboard = Depends(get_dashboard),
) -> ActionResponse:
    inbox = dashboard.messages()
    with dashboard.notifier.capture() as raised:
        ok = await inbox.set_read(message_id, data.read)
    return ActionResponse(
        ok=ok,
        form=FormStateResponse.from_controller(inbox),
        notifications=_schemas(raised),
    )


@router.post("/messages/{message_id}/reply", response_model=ActionResponse)
async def reply_to_message(
    message_id: str,
    data: ReplyRequest,
    dashboard: AdminDashboard = Depends(get_dashboard),
) -> ActionResponse:
    """Record a reply: the message is marked read. No mail is sent."""
    inbox = dashboard.messages()
    if not data.text.strip():
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="Reply text is empty")
    try:
        with dashboard.notifier.capture() as raised:
            ok = await inbox.send_reply(message_id, data.text)
    except EntityNotFoundError as e:
        raise _http_error(e)
    return ActionResponse(
        ok=ok,
        form=FormStateResponse.from_controller(inbox),
        notifications=_schemas(raised),
    )
