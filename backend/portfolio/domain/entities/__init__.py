from .asset import FailedUpload, LocalFile, UploadBatch
from .auth_session import AuthSession, AuthUser
from .dashboard_stats import DashboardStats
from .draft import Draft
from .entity_descriptor import (
    AssetRule,
    EntityDescriptor,
    FieldKind,
    FieldSpec,
    OrderClause,
    PublishRule,
)
from .form_state import Closed, Creating, Editing, FormState, Submitting
from .gateway_result import GatewayResult
from .notification import Notification, Severity

__all__ = [
    "FailedUpload",
    "LocalFile",
    "UploadBatch",
    "AuthSession",
    "AuthUser",
    "DashboardStats",
    "Draft",
    "AssetRule",
    "EntityDescriptor",
    "FieldKind",
    "FieldSpec",
    "OrderClause",
    "PublishRule",
    "Closed",
    "Creating",
    "Editing",
    "FormState",
    "Submitting",
    "GatewayResult",
    "Notification",
    "Severity",
]
