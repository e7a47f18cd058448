"""Storage service factory: creates Firebase or in-memory backend from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from concierge.infrastructure.external.storage.protocol import StorageProtocol

if TYPE_CHECKING:
    from concierge.core.config import Settings


class StorageFactory:
    """Factory for storage service instances based on configuration."""

    @staticmethod
    def create_storage_service(settings: "Settings | None" = None) -> StorageProtocol:
        """Create storage service from settings.

        Args:
            settings: Application settings; if None, uses get_settings().

        Returns:
            FirebaseStorageService or MemoryStorageService.

        Raises:
            ValueError: Unknown backend or missing required config.
        """
        from concierge.core.config import get_settings

        s = settings or get_settings()
        backend = s.storage_backend.lower()

        if backend == "memory":
            from concierge.infrastructure.external.storage.memory_storage import (
                MemoryStorageService,
            )

            return MemoryStorageService(bucket=s.firebase_storage_bucket or "memory-bucket")
        if backend == "firebase":
            from concierge.infrastructure.external.storage.firebase_storage import (
                FirebaseStorageService,
            )
            from concierge.infrastructure.firebase.client import load_service_account_info

            if not s.firebase_storage_bucket:
                raise ValueError("FIREBASE_STORAGE_BUCKET required for firebase backend")
            key_dict = load_service_account_info()
            if not key_dict:
                raise ValueError("Service account credentials required for firebase storage")
            return FirebaseStorageService.from_service_account(s.firebase_storage_bucket, key_dict)
        raise ValueError(
            f"Unknown storage backend: {backend}. Supported: 'firebase', 'memory'"
        )
