"""Pydantic DTOs for the admin dashboard endpoints."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from portfolio.application.services.form_controller import EntityFormController
from portfolio.domain.entities import EntityDescriptor, Notification, Severity


class FieldSchema(BaseModel):
    name: str
    kind: str
    required: bool
    nullable: bool
    default: Any = None


class DescriptorResponse(BaseModel):
    """What a client needs to render one admin form."""

    name: str
    label: str
    plural: str
    fields: list[FieldSchema]
    search_fields: list[str]
    accepts_uploads: bool
    delete_prompt: str

    @classmethod
    def from_descriptor(cls, descriptor: EntityDescriptor, accepts_uploads: bool) -> "DescriptorResponse":
        return cls(
            name=descriptor.name,
            label=descriptor.label,
            plural=descriptor.plural,
            fields=[
                FieldSchema(
                    name=f.name,
                    kind=f.kind.value,
                    required=f.required,
                    nullable=f.nullable,
                    default=f.default,
                )
                for f in descriptor.fields
            ],
            search_fields=list(descriptor.search_fields),
            accepts_uploads=accepts_uploads,
            delete_prompt=descriptor.delete_prompt,
        )


class FormStateResponse(BaseModel):
    """Current state of one admin form."""

    entity: str
    state: str = Field(..., examples=["closed", "creating", "editing", "submitting"])
    entity_id: str | None = None
    draft: dict[str, Any] | None = None
    uploading: bool = False

    @classmethod
    def from_controller(cls, controller: EntityFormController) -> "FormStateResponse":
        state = controller.state
        draft = controller.draft
        return cls(
            entity=controller.descriptor.name,
            state=state.name,
            entity_id=getattr(state, "entity_id", None),
            draft=draft.as_dict() if draft is not None else None,
            uploading=controller.uploading,
        )


class EntityListResponse(BaseModel):
    entity: str
    search: str
    items: list[dict[str, Any]]
    total: int
    last_error: str | None = None


class DraftUpdate(BaseModel):
    """Field values to merge into the open draft."""

    values: dict[str, Any] = Field(..., examples=[{"title": "Hello", "tags": "react, design"}])


class NotificationSchema(BaseModel):
    title: str
    description: str
    severity: Severity
    created_at: datetime

    model_config = {"from_attributes": True}

    @classmethod
    def from_entity(cls, notification: Notification) -> "NotificationSchema":
        return cls.model_validate(notification)


class ActionResponse(BaseModel):
    """Outcome of a submit/delete/flag action plus the toasts it raised."""

    ok: bool
    form: FormStateResponse
    notifications: list[NotificationSchema] = []


class FailedUploadSchema(BaseModel):
    filename: str
    reason: str

    model_config = {"from_attributes": True}


class UploadResponse(BaseModel):
    urls: list[str]
    failures: list[FailedUploadSchema]
    form: FormStateResponse
    notifications: list[NotificationSchema] = []


class ReadFlagRequest(BaseModel):
    read: bool


class ReplyRequest(BaseModel):
    text: str = Field(..., max_length=10_000)


class DashboardStatsResponse(BaseModel):
    blogs: int
    works: int
    skills: int
    brands: int
    messages: int
    unread: int

    model_config = {"from_attributes": True}


class DashboardResponse(BaseModel):
    search: str
    stats: DashboardStatsResponse
    entities: list[str]


class SearchUpdate(BaseModel):
    search: str = Field("", max_length=255)


class MessagesResponse(BaseModel):
    """Inbox split into unread and read, after search filtering."""

    search: str
    unread: list[dict[str, Any]]
    read: list[dict[str, Any]]
