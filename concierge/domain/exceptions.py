"""Domain exceptions for the Concierge application.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class ConciergeException(Exception):
    """Base exception for all Concierge application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON error responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(ConciergeException):
    """Raised when input validation fails (e.g. invalid amount or missing date)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthorizationException(ConciergeException):
    """Raised when the caller may not act on a resource (e.g. another company's booking)."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource type (e.g. 'reservation', 'offer').
            action: Optional action that was attempted (e.g. 'delete', 'modify').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action:
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class CompanyNotFoundException(ConciergeException):
    """Raised when a requested company (tenant) is not found."""

    def __init__(self, company_id: str) -> None:
        """Initialize with the missing company identifier.

        Args:
            company_id: The company ID that was not found.
        """
        super().__init__(
            f"Company not found: {company_id}",
            "COMPANY_NOT_FOUND",
            {"company_id": company_id},
        )


class ResourceNotFoundException(ConciergeException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'reservation', 'client').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class NoBookingForClientException(ConciergeException):
    """Raised when a client-level mutation needs a booking but the client has none."""

    def __init__(self, client_id: str) -> None:
        super().__init__(
            f"No booking found for client {client_id}",
            "NO_BOOKING_FOR_CLIENT",
            {"client_id": client_id},
        )


class ServiceNotFoundInBookingException(ConciergeException):
    """Raised when a service to delete cannot be matched inside its booking."""

    def __init__(self, booking_id: str, service_ref: str) -> None:
        super().__init__(
            "Service not found in booking",
            "SERVICE_NOT_FOUND_IN_BOOKING",
            {"booking_id": booking_id, "service": service_ref},
        )


class OfferAlreadyBookedException(ConciergeException):
    """Raised when converting an offer that has already been converted to a reservation."""

    def __init__(self, offer_id: str) -> None:
        super().__init__(
            "This offer has already been converted to a reservation.",
            "OFFER_ALREADY_BOOKED",
            {"offer_id": offer_id},
        )


class DocumentExistsException(ConciergeException):
    """Raised when creating a document whose id is already taken."""

    def __init__(self, collection: str, document_id: str) -> None:
        super().__init__(
            f"Document already exists: {collection}/{document_id}",
            "DOCUMENT_EXISTS",
            {"collection": collection, "document_id": document_id},
        )


class BackendNotConfiguredException(ConciergeException):
    """Raised when an operation needs a backend (database, storage) that is not initialized."""

    def __init__(self, backend: str) -> None:
        super().__init__(
            message=f"{backend} is not configured.",
            error_code="SERVICE_UNAVAILABLE",
            details={"backend": backend},
        )
