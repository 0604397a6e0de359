from .auth_provider import AuthProvider
from .notifier import Confirmer, Notifier
from .object_store import ObjectStore
from .table_gateway import TableGateway

__all__ = [
    "AuthProvider",
    "Confirmer",
    "Notifier",
    "ObjectStore",
    "TableGateway",
]
