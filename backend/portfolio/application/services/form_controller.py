"""Entity form controller — generic create/edit/delete workflow for one table.

One controller instance drives one admin form. It owns the form's explicit
state, the draft being edited, the entity list cache and (for entities with
images) the asset upload pipeline. Every remote failure is caught here and
turned into exactly one notification; the form stays open with the draft
intact so no input is lost.
"""

import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from portfolio.application.interfaces import Confirmer, Notifier, ObjectStore, TableGateway
from portfolio.application.services.asset_upload_pipeline import AssetUploadPipeline
from portfolio.application.services.entity_list_cache import EntityListCache
from portfolio.application.services.payload_transform import build_write_payload, missing_required
from portfolio.application.services.search_filter import filter_entities
from portfolio.domain.entities import (
    Closed,
    Creating,
    Draft,
    EntityDescriptor,
    Editing,
    FormState,
    GatewayResult,
    LocalFile,
    Severity,
    Submitting,
    UploadBatch,
)
from portfolio.domain.exceptions import (
    EntityNotFoundError,
    GatewayError,
    InvalidFieldValueError,
    InvalidStateError,
)
from portfolio.infrastructure.logging.activity_logger import ActivityLogger, ActivityStage

logger = logging.getLogger(__name__)
alog = ActivityLogger(__name__)

MutationCallback = Callable[[], Awaitable[None]]


class EntityFormController:
    """Drives one admin form against one remote table."""

    def __init__(
        self,
        descriptor: EntityDescriptor,
        gateway: TableGateway,
        notifier: Notifier,
        confirmer: Confirmer,
        object_store: ObjectStore | None = None,
        on_mutation: MutationCallback | None = None,
    ):
        self._descriptor = descriptor
        self._gateway = gateway
        self._notifier = notifier
        self._confirmer = confirmer
        self._on_mutation = on_mutation
        self.cache = EntityListCache(descriptor, gateway)

        self._uploader: AssetUploadPipeline | None = None
        if descriptor.assets is not None and object_store is not None:
            self._uploader = AssetUploadPipeline(
                object_store, descriptor.assets.bucket, descriptor.assets.path_prefix
            )

        self._state: FormState = Closed()
        self._draft: Draft | None = None
        self._uploading = False

    # ── Read-only views ─────────────────────────────────────────────

    @property
    def descriptor(self) -> EntityDescriptor:
        return self._descriptor

    @property
    def state(self) -> FormState:
        return self._state

    @property
    def draft(self) -> Draft | None:
        return self._draft

    @property
    def uploading(self) -> bool:
        return self._uploading

    @property
    def items(self) -> tuple[dict[str, Any], ...]:
        return self.cache.items

    @property
    def accepts_uploads(self) -> bool:
        return self._uploader is not None

    def filtered(self, search: str | None = "") -> list[dict[str, Any]]:
        """Cached rows matching ``search`` over the descriptor's search fields."""
        return filter_entities(self.cache.items, search, self._descriptor.search_fields)

    # ── Lifecycle ───────────────────────────────────────────────────

    async def mount(self) -> bool:
        """Initial fetch of the list."""
        return await self._refresh_list()

    def open_create(self) -> None:
        self._ensure_not_submitting("open a form")
        self._state = Creating()
        self._draft = Draft.empty(self._descriptor)

    def open_edit(self, entity_id: str) -> None:
        """Open the form seeded from the cached entity with ``entity_id``.

        Raises:
            EntityNotFoundError: If the entity is not in the cache.
        """
        self._ensure_not_submitting("open a form")
        entity = self.cache.get(entity_id)
        if entity is None:
            raise EntityNotFoundError(self._descriptor.name, entity_id)
        self._state = Editing(str(entity["id"]))
        self._draft = Draft.seeded(self._descriptor, entity)

    def cancel(self) -> None:
        """Close the form and drop the draft.

        An in-flight submit is not aborted; its result just no longer
        changes the form.
        """
        self._state = Closed()
        self._draft = None

    def set_field(self, name: str, value: Any) -> None:
        self._require_draft("edit the draft").set(name, value)

    def update_draft(self, **values: Any) -> None:
        self._require_draft("edit the draft").update(values)

    # ── Submit / delete ─────────────────────────────────────────────

    async def submit(self) -> bool:
        """Write the draft as one insert or update.

        Returns:
            True when the write succeeded and the form closed.
        """
        origin = self._state
        if isinstance(origin, Submitting):
            logger.warning("Ignoring submit for %s: a submit is already in flight", self._descriptor.name)
            return False
        if isinstance(origin, Closed):
            raise InvalidStateError("submit", origin.name)
        if self._uploading:
            self._notify_error("Please wait for the image upload to finish")
            return False

        draft = self._draft
        missing = missing_required(draft)
        if missing:
            self._notify_error(f"Please fill in: {', '.join(missing)}")
            return False

        try:
            payload = build_write_payload(draft)
        except InvalidFieldValueError as exc:
            logger.info("Rejected %s draft: %s", self._descriptor.name, exc)
            self._notify_error(str(exc))
            return False

        submitting = Submitting(origin)
        self._state = submitting
        table = self._descriptor.table
        label = self._descriptor.label

        try:
            if isinstance(origin, Editing):
                alog.step_start(ActivityStage.SUBMIT, f"Updating {label.lower()}", id=origin.entity_id)
                result = await self._call("update", self._gateway.update(table, payload, origin.entity_id))
            else:
                alog.step_start(ActivityStage.SUBMIT, f"Creating {label.lower()}")
                result = await self._call("insert", self._gateway.insert(table, payload))
        except BaseException:
            # Cancelled mid-write: reopen the form with the draft intact
            if self._state is submitting:
                self._state = origin
            raise

        if self._state is not submitting:
            # Form was closed or reopened while the write was in flight
            logger.info("%s form changed during submit; result not applied to the form", self._descriptor.name)
            if result.ok:
                await self._after_mutation()
            return result.ok

        if not result.ok:
            alog.step_error(ActivityStage.SUBMIT, f"Failed to save {label.lower()}", error=result.error)
            self._state = origin
            self._notify_error(f"Failed to save {label.lower()}")
            return False

        self._state = Closed()
        self._draft = None
        verb = "updated" if isinstance(origin, Editing) else "created"
        alog.step_complete(ActivityStage.SUBMIT, f"{label} {verb}")
        await self._after_mutation()
        self._notify_success(f"{label} {verb} successfully")
        return True

    async def delete(self, entity_id: str, confirmer: Confirmer | None = None) -> bool:
        """Delete one entity after an explicit confirmation.

        ``confirmer`` overrides the controller's own for this call.
        """
        confirmer = confirmer or self._confirmer
        if not await confirmer.confirm(self._descriptor.delete_prompt):
            logger.info("Delete of %s %s not confirmed", self._descriptor.name, entity_id)
            return False

        label = self._descriptor.label
        alog.step_start(ActivityStage.DELETE, f"Deleting {label.lower()}", id=entity_id)
        result = await self._call("delete", self._gateway.delete(self._descriptor.table, str(entity_id)))
        if not result.ok:
            alog.step_error(ActivityStage.DELETE, f"Failed to delete {label.lower()}", error=result.error)
            self._notify_error(f"Failed to delete {label.lower()}")
            return False

        alog.step_complete(ActivityStage.DELETE, f"{label} deleted", id=entity_id)
        await self._after_mutation()
        self._notify_success(f"{label} deleted successfully")
        return True

    # ── Assets ──────────────────────────────────────────────────────

    async def upload_assets(self, files: Sequence[LocalFile]) -> UploadBatch:
        """Upload files and attach their URLs to the open draft.

        Successful URLs are kept even when other files fail.
        """
        if self._uploader is None:
            raise InvalidStateError("upload images", f"not accepting images for {self._descriptor.name}")
        draft = self._require_draft("upload images")
        rule = self._descriptor.assets

        self._uploading = True
        try:
            batch = await self._uploader.upload(files)
        finally:
            self._uploading = False

        if self._draft is not draft:
            logger.warning("%s form changed during upload; %d URL(s) dropped", self._descriptor.name, batch.uploaded)
            if batch.urls:
                self._notify_error(f"{batch.uploaded} image(s) uploaded after the form changed and were not attached")
            return batch

        if batch.urls:
            if rule.list_field:
                draft.append_images(rule.list_field, batch.urls)
            else:
                draft.set(rule.primary_field, batch.urls[-1])
            self._notify_success(f"{batch.uploaded} image(s) uploaded successfully")
        if batch.failures:
            names = ", ".join(f.filename for f in batch.failures)
            self._notify_error(f"Failed to upload {names}")
        return batch

    def remove_asset(self, url: str) -> bool:
        """Detach ``url`` from the draft. The stored object is left alone."""
        draft = self._require_draft("remove an image")
        rule = self._descriptor.assets
        if rule is None:
            return False
        if rule.list_field:
            return draft.remove_image(rule.list_field, url)
        if draft.get(rule.primary_field) == url:
            draft.set(rule.primary_field, "")
            return True
        return False

    # ── Internals ───────────────────────────────────────────────────

    async def _refresh_list(self) -> bool:
        if await self.cache.refresh():
            return True
        self._notify_error(f"Failed to fetch {self._descriptor.plural}")
        return False

    async def _after_mutation(self) -> None:
        await self._refresh_list()
        if self._on_mutation is not None:
            await self._on_mutation()

    async def _call(self, operation: str, pending: Awaitable[GatewayResult]) -> GatewayResult:
        """Await a gateway call, folding anything it raises into a failed result."""
        try:
            return await pending
        except GatewayError as exc:
            return GatewayResult(error=exc)
        except Exception as exc:
            logger.exception("%s %s raised instead of returning an error", operation, self._descriptor.table)
            return GatewayResult.failure(operation, self._descriptor.table, f"{type(exc).__name__}: {exc}")

    def _require_draft(self, operation: str) -> Draft:
        if self._draft is None or isinstance(self._state, Submitting):
            raise InvalidStateError(operation, self._state.name)
        return self._draft

    def _ensure_not_submitting(self, operation: str) -> None:
        if isinstance(self._state, Submitting):
            raise InvalidStateError(operation, self._state.name)

    def _notify_success(self, description: str) -> None:
        self._notifier.notify("Success", description, Severity.SUCCESS)

    def _notify_error(self, description: str) -> None:
        self._notifier.notify("Error", description, Severity.ERROR)


class ContactMessagesController(EntityFormController):
    """Inbox variant: messages are only read, flagged and deleted."""

    async def set_read(self, entity_id: str, read: bool) -> bool:
        status = "read" if read else "unread"
        result = await self._call(
            "update", self._gateway.update(self._descriptor.table, {"read": read}, str(entity_id))
        )
        if not result.ok:
            alog.step_error(ActivityStage.SUBMIT, f"Failed to mark message {entity_id} as {status}", error=result.error)
            self._notify_error(f"Failed to mark message as {status}")
            return False

        await self._after_mutation()
        self._notify_success(f"Message marked as {status}")
        return True

    async def send_reply(self, entity_id: str, text: str) -> bool:
        """Record a reply to a message.

        No mail is sent; the message is marked read and the admin is told
        the reply went to the sender's address.
        """
        if not text or not text.strip():
            return False
        message = self.cache.get(entity_id)
        if message is None:
            raise EntityNotFoundError(self._descriptor.name, entity_id)

        if not await self.set_read(entity_id, True):
            return False
        self._notifier.notify("Reply Sent", f"Reply sent to {message.get('email', '')}", Severity.SUCCESS)
        return True

    def unread(self, search: str | None = "") -> list[dict[str, Any]]:
        return [m for m in self.filtered(search) if not m.get("read")]

    def read(self, search: str | None = "") -> list[dict[str, Any]]:
        return [m for m in self.filtered(search) if m.get("read")]

    @staticmethod
    def reply_template(message: dict[str, Any]) -> str:
        """Greeting a reply box is pre-filled with."""
        return f"Hi {message.get('name', '')},\n\nThank you for your message. "
