"""HTTP middleware: timeout, request ID, company context.

Applied in main app; order matters (first added = outermost).
Import and use from concierge.main.
"""

from concierge.middleware.company_context import CompanyContextMiddleware
from concierge.middleware.request_id import RequestIDMiddleware
from concierge.middleware.timeout import TimeoutMiddleware

__all__ = [
    "CompanyContextMiddleware",
    "RequestIDMiddleware",
    "TimeoutMiddleware",
]
