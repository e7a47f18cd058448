"""Company context middleware.

Puts the company header into the request context so log records carry it
from the first line of a request. Only well-formed IDs are recorded; the
route dependency still validates that the company exists.
"""

from typing import Callable

from concierge.core.company_validation import is_valid_company_id_format
from concierge.core.request_context import set_company_id
from concierge.middleware.request_id import get_header


def CompanyContextMiddleware(app: Callable, header_name: str = "X-Company-ID") -> Callable:
    """Set company context from the company header before the route runs. Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        company_id = get_header(scope, header_name)
        set_company_id(company_id if is_valid_company_id_format(company_id) else None)
        try:
            await app(scope, receive, send)
        finally:
            set_company_id(None)

    return asgi_app
