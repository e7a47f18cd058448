"""Object storage interface (port) used by photo reconciliation."""

from typing import Protocol


class IStorageService(Protocol):
    """Read-only view of the photo bucket."""

    @property
    def bucket(self) -> str:
        """Bucket name, used to build public download URLs."""

    async def list_files(self, prefix: str) -> list[str]:
        """Return full object paths under prefix (recursive)."""

    async def exists(self, path: str) -> bool:
        """Return True when an object exists at path."""
