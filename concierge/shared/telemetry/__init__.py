"""Shared telemetry: logging setup."""

from concierge.shared.telemetry.logging import (
    RequestContextFilter,
    get_logger,
    setup_logging,
)

__all__ = [
    "RequestContextFilter",
    "setup_logging",
    "get_logger",
]
