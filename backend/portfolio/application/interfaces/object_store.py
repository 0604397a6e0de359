"""Abstract object store interface (port) for uploaded images."""

from abc import ABC, abstractmethod

from portfolio.domain.entities import GatewayResult


class ObjectStore(ABC):
    """Port for public-bucket file storage."""

    @abstractmethod
    async def upload(
        self,
        bucket: str,
        path: str,
        content: bytes,
        content_type: str = "application/octet-stream",
    ) -> GatewayResult:
        """Store ``content`` at ``path`` inside ``bucket``."""
        ...

    @abstractmethod
    def get_public_url(self, bucket: str, path: str) -> str:
        """Derive the public URL of a stored object. No I/O."""
        ...
