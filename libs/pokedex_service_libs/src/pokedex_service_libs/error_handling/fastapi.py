"""FastAPI integration: render ServiceError and validation failures as JSON errors."""

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from pokedex_service_libs.error_handling.error_codes import UPSTREAM_ERROR_CODES, ErrorCode
from pokedex_service_libs.error_handling.service_error import ServiceError
from pokedex_service_libs.logging_utils import create_service_logger

logger = create_service_logger("error_handling.fastapi")

ERROR_CODE_TO_STATUS: dict[ErrorCode, int] = {
    ErrorCode.AUTHENTICATION_ERROR: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.RESOURCE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.UNKNOWN_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    # Upstream failures are never blamed on the client
    **{code: status.HTTP_500_INTERNAL_SERVER_ERROR for code in UPSTREAM_ERROR_CODES},
}


def status_code_for(error: ServiceError) -> int:
    """Map a ServiceError to its HTTP status code."""
    return ERROR_CODE_TO_STATUS.get(
        error.error_detail.error_code, status.HTTP_500_INTERNAL_SERVER_ERROR
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register JSON error handlers on a FastAPI app.

    Every error body has the shape ``{"error": <message>}``; the message is the
    ErrorDetail message, which routes keep free of upstream internals.
    """

    @app.exception_handler(ServiceError)
    async def handle_service_error(request: Request, exc: ServiceError) -> JSONResponse:
        status_code = status_code_for(exc)
        log = logger.warning if status_code < 500 else logger.error
        log(
            f"Request failed: {exc}",
            extra={
                "path": request.url.path,
                "method": request.method,
                "status_code": status_code,
                "error_code": exc.error_code,
                "operation": exc.operation,
                "correlation_id": exc.correlation_id,
            },
        )
        return JSONResponse(status_code=status_code, content={"error": exc.error_detail.message})

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.warning(
            "Request validation failed",
            extra={
                "path": request.url.path,
                "method": request.method,
                "fields": [".".join(str(loc) for loc in err["loc"]) for err in exc.errors()],
            },
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request parameters"},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            f"Unhandled exception: {exc}",
            exc_info=True,
            extra={"path": request.url.path, "method": request.method},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )
