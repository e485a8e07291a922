"""JWT session token service."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import NoReturn
from uuid import UUID

import jwt
from pokedex_service_libs.error_handling import raise_authentication_error
from pokedex_service_libs.logging_utils import create_service_logger

logger = create_service_logger("pokedex_bff.token_service")

SERVICE = "pokedex_bff_service"
DEFAULT_TOKEN_TTL = timedelta(hours=24)


class JWTTokenService:
    """Issues HMAC-signed JWTs carrying ``sub``, ``iat`` and ``exp``.

    Expiry is checked against the injected clock rather than PyJWT's own
    wall-clock check, so a token is valid exactly while ``now <= exp``.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        default_ttl: timedelta = DEFAULT_TOKEN_TTL,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._default_ttl = default_ttl
        self._clock = clock

    def issue(self, subject: str, ttl: timedelta | None = None) -> str:
        # Negative ttl is allowed and yields an already-expired token
        now = self._clock()
        expires_at = now + (self._default_ttl if ttl is None else ttl)
        payload = {
            "sub": subject,
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def validate(self, token: str, correlation_id: UUID) -> str:
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": ["sub", "exp"],
                },
            )
        except jwt.PyJWTError as e:
            self._reject(f"Token rejected: {type(e).__name__}", correlation_id)

        subject = payload.get("sub")
        expires_at = payload.get("exp")
        if not isinstance(subject, str) or not isinstance(expires_at, int | float):
            self._reject("Token rejected: malformed claims", correlation_id)
        if self._clock().timestamp() > expires_at:
            self._reject("Token rejected: expired", correlation_id)
        return subject

    def _reject(self, reason: str, correlation_id: UUID) -> NoReturn:
        logger.debug(reason, extra={"correlation_id": str(correlation_id)})
        raise_authentication_error(
            service=SERVICE,
            operation="validate_token",
            message="Unauthorized",
            correlation_id=correlation_id,
            reason=reason,
        )
