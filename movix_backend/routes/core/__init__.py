"""
Core utilities for route handlers.
"""
from .response import _error_response, _json_response, status_for_code
from .services import APP_KEY_SERVICES, _require_services

__all__ = [
    "APP_KEY_SERVICES",
    "_error_response",
    "_json_response",
    "_require_services",
    "status_for_code",
]
