"""Directory use cases: clients, properties, providers, collaborators and the catalog."""

from concierge.application.use_cases.directory.catalog_operations import CatalogService
from concierge.application.use_cases.directory.client_operations import ClientService
from concierge.application.use_cases.directory.collaborator_operations import (
    CollaboratorService,
)
from concierge.application.use_cases.directory.directory_operations import DirectoryService

__all__ = [
    "CatalogService",
    "ClientService",
    "CollaboratorService",
    "DirectoryService",
]
