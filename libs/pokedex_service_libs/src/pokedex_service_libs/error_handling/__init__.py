"""Structured error handling for the Pokedex services."""

from pokedex_service_libs.error_handling.error_codes import UPSTREAM_ERROR_CODES, ErrorCode
from pokedex_service_libs.error_handling.error_detail import ErrorDetail
from pokedex_service_libs.error_handling.factories import (
    raise_authentication_error,
    raise_catalog_refresh_error,
    raise_external_service_error,
    raise_parsing_error,
    raise_resource_not_found,
)
from pokedex_service_libs.error_handling.service_error import ServiceError

__all__ = [
    "UPSTREAM_ERROR_CODES",
    "ErrorCode",
    "ErrorDetail",
    "ServiceError",
    "raise_authentication_error",
    "raise_catalog_refresh_error",
    "raise_external_service_error",
    "raise_parsing_error",
    "raise_resource_not_found",
]
