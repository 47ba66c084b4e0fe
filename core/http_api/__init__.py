"""
PMS HTTP API - Public API
=========================
"""

from core.http_api.contracts import HttpApiErrorBody, HttpApiResponse
from core.http_api.errors import (
    BAD_REQUEST,
    OPERATION_FAILED,
    error_response,
    map_rejection_reason,
    outcome_response,
    rejection_response,
    success_response,
)

__all__ = [
    "HttpApiErrorBody",
    "HttpApiResponse",
    "BAD_REQUEST",
    "OPERATION_FAILED",
    "error_response",
    "success_response",
    "map_rejection_reason",
    "rejection_response",
    "outcome_response",
]
