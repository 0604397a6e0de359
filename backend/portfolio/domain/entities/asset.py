"""Domain entities for image uploads."""

from dataclasses import dataclass, field


@dataclass
class LocalFile:
    """A file selected by the admin, not yet uploaded."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"

    @property
    def extension(self) -> str:
        """Text after the last dot, or empty when the name has none."""
        stem, dot, ext = self.filename.rpartition(".")
        return ext if dot and stem and ext else ""


@dataclass
class FailedUpload:
    filename: str
    reason: str


@dataclass
class UploadBatch:
    """Outcome of one upload invocation, in the order files were selected."""

    urls: list[str] = field(default_factory=list)
    failures: list[FailedUpload] = field(default_factory=list)

    @property
    def uploaded(self) -> int:
        return len(self.urls)

    @property
    def failed(self) -> int:
        return len(self.failures)
