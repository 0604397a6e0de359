"""Local filesystem object store for uploaded images.

Storage layout:
    <upload_dir>/<bucket>/<path>      e.g. uploads/brand-logos/works/3f2a….png

Files are served back by the API's static mount under ``public_base_url``.
"""

import logging
import re
from pathlib import Path

from portfolio.application.interfaces import ObjectStore
from portfolio.domain.entities import GatewayResult

logger = logging.getLogger(__name__)

_SAFE_SEGMENT = re.compile(r"^[\w\-.]+$")


class LocalObjectStore(ObjectStore):
    """Infrastructure adapter for local file storage."""

    def __init__(self, upload_dir: str, public_base_url: str = "/storage"):
        self._upload_dir = Path(upload_dir)
        self._upload_dir.mkdir(parents=True, exist_ok=True)
        self._public_base_url = public_base_url.rstrip("/")

    async def upload(
        self, bucket: str, path: str, content: bytes, content_type: str = "application/octet-stream"
    ) -> GatewayResult:
        target = f"{bucket}/{path}"
        try:
            dest_path = self._resolve(bucket, path)
        except ValueError as exc:
            return GatewayResult.failure("upload", target, str(exc), 400)
        if dest_path.exists():
            return GatewayResult.failure("upload", target, "The resource already exists", 409)

        try:
            dest_path.parent.mkdir(parents=True, exist_ok=True)
            dest_path.write_bytes(content)
        except OSError as exc:
            logger.error("Could not store %s: %s", target, exc)
            return GatewayResult.failure("upload", target, str(exc))

        logger.info("Stored file: %s (%d bytes, %s)", dest_path, len(content), content_type)
        return GatewayResult(data={"path": path})

    def get_public_url(self, bucket: str, path: str) -> str:
        return f"{self._public_base_url}/{bucket}/{path}"

    def _resolve(self, bucket: str, path: str) -> Path:
        """Map bucket/path onto disk, refusing anything that escapes the bucket."""
        segments = [bucket, *path.split("/")]
        for segment in segments:
            if not _SAFE_SEGMENT.match(segment) or segment in (".", ".."):
                raise ValueError(f"Invalid storage path segment '{segment}'")
        return self._upload_dir.joinpath(*segments)
