"""
pokedex_service_libs.error_handling.error_codes - Centralized error code definitions.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"
    PARSING_ERROR = "PARSING_ERROR"  # Upstream payload did not match the expected shape
    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"
    CATALOG_REFRESH_ERROR = "CATALOG_REFRESH_ERROR"  # Index rebuild failed upstream


# Error codes that represent a failure of the upstream catalog service
UPSTREAM_ERROR_CODES = frozenset(
    {
        ErrorCode.EXTERNAL_SERVICE_ERROR,
        ErrorCode.PARSING_ERROR,
        ErrorCode.CATALOG_REFRESH_ERROR,
    }
)
