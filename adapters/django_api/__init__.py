"""
PMS Django HTTP adapter.
Thin framework glue over the engine services.
"""

from adapters.django_api.wiring import RequestServices, build_services, get_store

__all__ = [
    "RequestServices",
    "build_services",
    "get_store",
]
