from .admin import (
    ActionResponse,
    DashboardResponse,
    DashboardStatsResponse,
    DescriptorResponse,
    DraftUpdate,
    EntityListResponse,
    FailedUploadSchema,
    FieldSchema,
    FormStateResponse,
    MessagesResponse,
    NotificationSchema,
    ReadFlagRequest,
    ReplyRequest,
    SearchUpdate,
    UploadResponse,
)
from .auth import CredentialsRequest, SessionResponse, SignUpResponse, UserResponse
from .site import (
    AboutResponse,
    ContactSubmissionCreate,
    FilteredListResponse,
    HomeResponse,
    ProjectResponse,
)

__all__ = [
    "ActionResponse",
    "DashboardResponse",
    "DashboardStatsResponse",
    "DescriptorResponse",
    "DraftUpdate",
    "EntityListResponse",
    "FailedUploadSchema",
    "FieldSchema",
    "FormStateResponse",
    "MessagesResponse",
    "NotificationSchema",
    "ReadFlagRequest",
    "ReplyRequest",
    "SearchUpdate",
    "UploadResponse",
    "CredentialsRequest",
    "SessionResponse",
    "SignUpResponse",
    "UserResponse",
    "AboutResponse",
    "ContactSubmissionCreate",
    "FilteredListResponse",
    "HomeResponse",
    "ProjectResponse",
]
