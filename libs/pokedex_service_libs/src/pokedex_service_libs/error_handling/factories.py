"""
Factory functions that build and raise ServiceError instances.

Each factory pins the ErrorCode for one failure kind so call sites only
describe where the failure happened and why. Extra keyword arguments are
stored in ``ErrorDetail.details``.
"""

from __future__ import annotations

from typing import Any, NoReturn
from uuid import UUID

from pokedex_service_libs.error_handling.error_codes import ErrorCode
from pokedex_service_libs.error_handling.error_detail import ErrorDetail
from pokedex_service_libs.error_handling.service_error import ServiceError


def _raise(
    error_code: ErrorCode,
    *,
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID,
    details: dict[str, Any],
) -> NoReturn:
    raise ServiceError(
        ErrorDetail(
            error_code=error_code,
            message=message,
            correlation_id=correlation_id,
            service=service,
            operation=operation,
            details=details,
        )
    )


def raise_authentication_error(
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID,
    **details: Any,
) -> NoReturn:
    """Raise for missing, malformed, expired or tampered credentials."""
    _raise(
        ErrorCode.AUTHENTICATION_ERROR,
        service=service,
        operation=operation,
        message=message,
        correlation_id=correlation_id,
        details=details,
    )


def raise_resource_not_found(
    service: str,
    operation: str,
    resource_type: str,
    resource_id: str,
    correlation_id: UUID,
    message: str | None = None,
    **details: Any,
) -> NoReturn:
    """Raise when the requested resource does not exist upstream.

    ``message`` replaces the default "<type> with ID '<id>' not found" text.
    """
    _raise(
        ErrorCode.RESOURCE_NOT_FOUND,
        service=service,
        operation=operation,
        message=message or f"{resource_type} with ID '{resource_id}' not found",
        correlation_id=correlation_id,
        details={"resource_type": resource_type, "resource_id": resource_id, **details},
    )


def raise_external_service_error(
    service: str,
    operation: str,
    external_service: str,
    message: str,
    correlation_id: UUID,
    **details: Any,
) -> NoReturn:
    """Raise for transport failures and non-success responses from a dependency."""
    _raise(
        ErrorCode.EXTERNAL_SERVICE_ERROR,
        service=service,
        operation=operation,
        message=message,
        correlation_id=correlation_id,
        details={"external_service": external_service, **details},
    )


def raise_parsing_error(
    service: str,
    operation: str,
    parse_target: str,
    message: str,
    correlation_id: UUID,
    **details: Any,
) -> NoReturn:
    """Raise when a dependency answered with a payload of the wrong shape."""
    _raise(
        ErrorCode.PARSING_ERROR,
        service=service,
        operation=operation,
        message=message,
        correlation_id=correlation_id,
        details={"parse_target": parse_target, **details},
    )


def raise_catalog_refresh_error(
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID,
    **details: Any,
) -> NoReturn:
    """Raise when rebuilding the cached catalog index failed."""
    _raise(
        ErrorCode.CATALOG_REFRESH_ERROR,
        service=service,
        operation=operation,
        message=message,
        correlation_id=correlation_id,
        details=details,
    )
