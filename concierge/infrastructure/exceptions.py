"""Infrastructure exceptions for database and storage operations.

Errors extend ConciergeException so presentation can map them to HTTP
responses consistently.
"""

from concierge.domain.exceptions import ConciergeException


class DatabaseError(ConciergeException):
    """The document store rejected or failed a request."""

    def __init__(self, operation: str, status_code: int, reason: str) -> None:
        super().__init__(
            f"Document store {operation} failed ({status_code})",
            "DATABASE_ERROR",
            {"operation": operation, "status_code": status_code, "reason": reason},
        )


class StorageException(ConciergeException):
    """Base exception for object storage operations."""


class StorageListError(StorageException):
    """Listing objects under a prefix failed."""

    def __init__(self, prefix: str, reason: str) -> None:
        super().__init__(
            f"Failed to list storage prefix: {prefix}",
            "STORAGE_ERROR",
            {"prefix": prefix, "reason": reason},
        )


class StorageLookupError(StorageException):
    """Checking whether an object exists failed for a reason other than 404."""

    def __init__(self, file_path: str, reason: str) -> None:
        super().__init__(
            f"Failed to look up file: {file_path}",
            "STORAGE_ERROR",
            {"file_path": file_path, "reason": reason},
        )
