"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from concierge.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from concierge.api.v1.dependencies import (
    get_boat_service,
    get_car_service,
    get_chef_service,
    get_security_service,
    get_villa_service,
)
from concierge.api.v1.endpoints import (
    bookings,
    catalog,
    clients,
    collaborators,
    companies,
    dashboard,
    finance,
    health,
    maintenance,
    offers,
    reservations,
)
from concierge.api.v1.endpoints.directory import build_directory_router

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(companies.router, prefix="/companies", tags=["companies"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(clients.router, prefix="/clients", tags=["clients"])
api_router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
api_router.include_router(reservations.router, prefix="/reservations", tags=["reservations"])
api_router.include_router(offers.router, prefix="/offers", tags=["offers"])
api_router.include_router(catalog.router, prefix="/catalog", tags=["catalog"])
api_router.include_router(
    collaborators.router, prefix="/collaborators", tags=["collaborators"]
)
api_router.include_router(finance.router, prefix="/finance", tags=["finance"])
api_router.include_router(maintenance.router, prefix="/maintenance", tags=["maintenance"])

for resource, get_service in (
    ("villas", get_villa_service),
    ("boats", get_boat_service),
    ("cars", get_car_service),
    ("chefs", get_chef_service),
    ("security", get_security_service),
):
    api_router.include_router(
        build_directory_router(resource, get_service),
        prefix=f"/{resource}",
        tags=[resource],
    )
