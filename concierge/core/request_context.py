"""Request-scoped context (company ID, request ID).

Middleware sets these from headers so that log records and services deeper
in the call stack can read them without threading them through every
signature.
"""

from contextvars import ContextVar

# Current company ID for the request (set by middleware).
current_company_id: ContextVar[str | None] = ContextVar(
    "current_company_id", default=None
)
# Current request ID (set by RequestIDMiddleware).
current_request_id: ContextVar[str | None] = ContextVar(
    "current_request_id", default=None
)


def set_company_id(company_id: str | None) -> None:
    """Set the current company ID for this context (e.g. request)."""
    current_company_id.set(company_id)


def get_company_id() -> str | None:
    """Return the current company ID if set."""
    return current_company_id.get()


def set_request_id(request_id: str | None) -> None:
    current_request_id.set(request_id)


def get_request_id() -> str | None:
    return current_request_id.get()
