"""Core exception type for all expected service failures."""

from __future__ import annotations

from pokedex_service_libs.error_handling.error_detail import ErrorDetail


class ServiceError(Exception):
    """Exception wrapping a structured ErrorDetail.

    One exception type is used for every failure kind; callers distinguish
    kinds by ``error_code`` rather than by subclass.
    """

    def __init__(self, error_detail: ErrorDetail) -> None:
        super().__init__(error_detail.message)
        self.error_detail = error_detail

    @property
    def error_code(self) -> str:
        return self.error_detail.error_code.value

    @property
    def correlation_id(self) -> str:
        return str(self.error_detail.correlation_id)

    @property
    def service(self) -> str:
        return self.error_detail.service

    @property
    def operation(self) -> str:
        return self.error_detail.operation

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.error_detail.message}"

    def __repr__(self) -> str:
        return (
            f"ServiceError(code={self.error_code}, "
            f"message={self.error_detail.message!r}, "
            f"service={self.service}, "
            f"operation={self.operation}, "
            f"correlation_id={self.correlation_id})"
        )
