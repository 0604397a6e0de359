from .auth_provider import InMemoryAuthProvider
from .table_gateway import InMemoryTableGateway

__all__ = [
    "InMemoryAuthProvider",
    "InMemoryTableGateway",
]
