"""Storage: Firebase Storage (Cloud Storage JSON API) and in-memory backends.

Factory creates backend from concierge.core.config. Implementations are loaded
lazily inside StorageFactory.create_storage_service(). Only listing and
existence checks are needed: photo reconciliation relocates references, it
never moves objects.
"""

from concierge.infrastructure.external.storage.factory import StorageFactory
from concierge.infrastructure.external.storage.protocol import StorageProtocol

__all__ = [
    "StorageFactory",
    "StorageProtocol",
]
