"""Asset upload pipeline — pushes selected image files to object storage.

Each file is uploaded under a fresh random name so concurrent uploads never
collide; the original extension is kept so the storage backend can serve
the right content type. A failing file never aborts the rest of the batch.
"""

import asyncio
import logging
import uuid
from collections.abc import Sequence

from portfolio.application.interfaces import ObjectStore
from portfolio.domain.entities import FailedUpload, LocalFile, UploadBatch
from portfolio.infrastructure.logging.activity_logger import ActivityLogger, ActivityStage

logger = logging.getLogger(__name__)
alog = ActivityLogger(__name__)


class AssetUploadPipeline:
    """Uploads files into ``<bucket>/<path_prefix>/`` and resolves public URLs."""

    def __init__(self, object_store: ObjectStore, bucket: str, path_prefix: str):
        self._store = object_store
        self._bucket = bucket
        self._prefix = path_prefix.strip("/")

    def storage_path(self, file: LocalFile) -> str:
        """``works/3f2a…9c.png`` style path for one upload."""
        name = uuid.uuid4().hex
        if file.extension:
            name = f"{name}.{file.extension}"
        return f"{self._prefix}/{name}" if self._prefix else name

    async def upload(self, files: Sequence[LocalFile]) -> UploadBatch:
        """Upload every file concurrently.

        Returns:
            UploadBatch with the public URLs of successful uploads in
            selection order, plus one entry per failed file.
        """
        batch = UploadBatch()
        if not files:
            return batch

        alog.step_start(ActivityStage.UPLOAD, f"Uploading {len(files)} file(s)", bucket=self._bucket)
        outcomes = await asyncio.gather(*(self._upload_one(f) for f in files))

        for file, (url, reason) in zip(files, outcomes):
            if url is not None:
                batch.urls.append(url)
            else:
                batch.failures.append(FailedUpload(filename=file.filename, reason=reason or "upload failed"))

        alog.stats(uploaded=batch.uploaded, failed=batch.failed)
        return batch

    async def _upload_one(self, file: LocalFile) -> tuple[str | None, str | None]:
        path = self.storage_path(file)
        try:
            result = await self._store.upload(self._bucket, path, file.content, file.content_type)
        except Exception as exc:
            # Adapters report errors as values; anything raised is still contained to this file
            alog.step_error(ActivityStage.UPLOAD, f"Upload of {file.filename} raised", error=exc)
            return None, str(exc)

        if not result.ok:
            alog.step_error(ActivityStage.UPLOAD, f"Upload of {file.filename} failed", error=result.error)
            return None, result.error.message

        url = self._store.get_public_url(self._bucket, path)
        alog.detail(f"{file.filename} → {path}")
        return url, None
