from .auth_client import SupabaseAuthClient
from .rest_gateway import SupabaseTableGateway
from .storage_client import SupabaseObjectStore

__all__ = [
    "SupabaseAuthClient",
    "SupabaseTableGateway",
    "SupabaseObjectStore",
]
