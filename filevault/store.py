import hashlib
import threading
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional

from filevault.exceptions import DuplicateContent, FileNotFound, PayloadTooLarge
from filevault.logging_config import get_logger
from filevault.models import FileMetadata, StoredFile

logger = get_logger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"

def content_digest(content: bytes) -> str:
    """Hex SHA-256 of the content, used only to spot byte-identical uploads."""
    return hashlib.sha256(content).hexdigest()


class FileStore:
    """In-memory registry of stored files keyed by id.

    Content hashes are unique across the registry. Every mutation runs its
    lookup and its write under one lock, so two requests carrying the same
    bytes can never both be stored.
    """

    def __init__(self, max_size_bytes: int = 10 * 1024 * 1024):
        self.max_size_bytes = max_size_bytes
        self._files: Dict[str, StoredFile] = {}
        self._ids_by_hash: Dict[str, str] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._files)

    def _check_size(self, content: bytes):
        if len(content) > self.max_size_bytes:
            logger.info(f"Rejecting {len(content)} byte payload, limit is {self.max_size_bytes}")
            raise PayloadTooLarge(len(content), self.max_size_bytes)

    def _build_record(self, file_id: str, name: str, mime_type: Optional[str], content: bytes, content_hash: str) -> StoredFile:
        return StoredFile(
            id=file_id,
            name=name,
            mime_type=mime_type or DEFAULT_MIME_TYPE,
            size=len(content),
            content_hash=content_hash,
            uploaded_at=datetime.now(timezone.utc),
            content=content,
        )

    def insert(self, name: str, mime_type: Optional[str], content: bytes) -> FileMetadata:
        content = bytes(content)
        self._check_size(content)
        content_hash = content_digest(content)
        logger.debug(f"Calculated hash for '{name}': {content_hash}")

        with self._lock:
            existing_id = self._ids_by_hash.get(content_hash)
            if existing_id is not None:
                existing = self._files[existing_id]
                logger.info(f"File with hash {content_hash} (original: '{existing.name}') already exists as {existing.id}.")
                raise DuplicateContent(existing.metadata())

            file_id = str(uuid.uuid4())
            record = self._build_record(file_id, name, mime_type, content, content_hash)
            self._files[file_id] = record
            self._ids_by_hash[content_hash] = file_id

        logger.info(f"Stored '{record.name}' (ID: {record.id}, {record.size} bytes).")
        return record.metadata()

    def list(self) -> List[FileMetadata]:
        with self._lock:
            records = list(self._files.values())
        return [record.metadata() for record in records]

    def get(self, file_id: str) -> StoredFile:
        with self._lock:
            record = self._files.get(file_id)
        if record is None:
            raise FileNotFound(file_id)
        return record

    def get_metadata(self, file_id: str) -> FileMetadata:
        return self.get(file_id).metadata()

    def delete(self, file_id: str) -> None:
        with self._lock:
            record = self._files.pop(file_id, None)
            if record is None:
                raise FileNotFound(file_id)
            del self._ids_by_hash[record.content_hash]
        logger.info(f"Deleted '{record.name}' (ID: {file_id}).")

    def replace(self, file_id: str, name: str, mime_type: Optional[str], content: bytes) -> FileMetadata:
        """Swap the content of an existing file, keeping its id.

        Fails with FileNotFound when the id is unknown and with
        DuplicateContent when another file already holds the new content.
        """
        content = bytes(content)
        self._check_size(content)
        content_hash = content_digest(content)

        with self._lock:
            current = self._files.get(file_id)
            if current is None:
                raise FileNotFound(file_id)

            owner_id = self._ids_by_hash.get(content_hash)
            if owner_id is not None and owner_id != file_id:
                raise DuplicateContent(self._files[owner_id].metadata())

            record = self._build_record(file_id, name, mime_type, content, content_hash)
            del self._ids_by_hash[current.content_hash]
            self._files[file_id] = record
            self._ids_by_hash[content_hash] = file_id

        logger.info(f"Replaced content of {file_id}: '{current.name}' -> '{record.name}' (hash {content_hash}).")
        return record.metadata()
