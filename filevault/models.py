from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class FileMetadata:
    id: str
    name: str
    mime_type: str
    size: int
    content_hash: str
    uploaded_at: datetime


@dataclass(frozen=True)
class StoredFile:
    id: str
    name: str
    mime_type: str
    size: int
    content_hash: str
    uploaded_at: datetime
    content: bytes

    def __post_init__(self):
        if len(self.content) != self.size:
            raise ValueError(f"size {self.size} does not match content length {len(self.content)}")

    def metadata(self) -> FileMetadata:
        return FileMetadata(
            id=self.id,
            name=self.name,
            mime_type=self.mime_type,
            size=self.size,
            content_hash=self.content_hash,
            uploaded_at=self.uploaded_at,
        )

    def __repr__(self):
        return f"<StoredFile(id={self.id}, name='{self.name}', hash='{self.content_hash}')>"
