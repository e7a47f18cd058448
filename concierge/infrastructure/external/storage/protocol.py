"""Storage service protocol (DIP). Implementations: FirebaseStorageService, MemoryStorageService."""

from typing import Protocol


class StorageProtocol(Protocol):
    """Protocol for the photo bucket (read-only: listing and existence checks)."""

    @property
    def bucket(self) -> str:
        """Bucket name used in public download URLs."""
        ...

    async def list_files(self, prefix: str) -> list[str]:
        """Return full object paths under prefix, recursively."""
        ...

    async def exists(self, path: str) -> bool:
        """Return True if an object exists at path."""
        ...

    async def aclose(self) -> None:
        """Release network resources."""
        ...
