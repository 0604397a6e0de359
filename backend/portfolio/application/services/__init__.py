from .admin_dashboard import AdminDashboard, AdminSessionRegistry
from .asset_upload_pipeline import AssetUploadPipeline
from .auth_service import AuthService
from .entity_catalog import EntityCatalog, get_entity_catalog, load_entity_catalog
from .entity_list_cache import EntityListCache
from .form_controller import ContactMessagesController, EntityFormController
from .public_site_service import PublicSiteService

__all__ = [
    "AdminDashboard",
    "AdminSessionRegistry",
    "AssetUploadPipeline",
    "AuthService",
    "EntityCatalog",
    "get_entity_catalog",
    "load_entity_catalog",
    "EntityListCache",
    "ContactMessagesController",
    "EntityFormController",
    "PublicSiteService",
]
