"""Errors raised by the file store and mapped to HTTP responses in main."""

from filevault.models import FileMetadata


class FileVaultError(Exception):
    """Base class for all FileVault errors."""
    status_code = 500


class BadRequest(FileVaultError):
    """Raised when an upload request carries no file part."""
    status_code = 400


class PayloadTooLarge(FileVaultError):
    """Raised when uploaded content exceeds the configured size limit."""
    status_code = 400

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"File too large. Maximum size is {format_size_limit(limit)}.")


class DuplicateContent(FileVaultError):
    """Raised when content with the same hash is already stored."""
    status_code = 409

    def __init__(self, existing: FileMetadata):
        self.existing = existing
        super().__init__("Duplicate file detected")


class FileNotFound(FileVaultError):
    """Raised when no stored file has the requested id."""
    status_code = 404

    def __init__(self, file_id: str):
        self.file_id = file_id
        super().__init__("File not found")


def format_size_limit(limit: int) -> str:
    mib = 1024 * 1024
    if limit >= mib and limit % mib == 0:
        return f"{limit // mib}MB"
    return f"{limit} bytes"
