"""Login route: exchanges the fixed credential pair for a session token."""

from __future__ import annotations

import secrets
from uuid import UUID

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, Request
from pokedex_service_libs.error_handling import raise_authentication_error
from pokedex_service_libs.logging_utils import create_service_logger
from pydantic import ValidationError

from services.pokedex_bff_service.config import PokedexBFFSettings
from services.pokedex_bff_service.dto.auth_v1 import (
    LoginRequestV1,
    LoginResponseV1,
    LoginUserV1,
)
from services.pokedex_bff_service.protocols import TokenServiceProtocol

router = APIRouter()
logger = create_service_logger("pokedex_bff.auth_routes")

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"


def credentials_match(config: PokedexBFFSettings, username: str, password: str) -> bool:
    # Both comparisons always run so timing does not reveal which field was wrong
    username_ok = secrets.compare_digest(username.encode(), config.LOGIN_USERNAME.encode())
    password_ok = secrets.compare_digest(
        password.encode(), config.LOGIN_PASSWORD.get_secret_value().encode()
    )
    return username_ok and password_ok


async def read_login_credentials(request: Request) -> LoginRequestV1:
    """Parse the login body; a body that is absent or malformed counts as no credentials."""
    body = await request.body()
    if not body:
        return LoginRequestV1()
    try:
        return LoginRequestV1.model_validate_json(body)
    except ValidationError:
        return LoginRequestV1()


@router.post("/login", response_model=LoginResponseV1)
@inject
async def login(
    config: FromDishka[PokedexBFFSettings],
    token_service: FromDishka[TokenServiceProtocol],
    correlation_id: FromDishka[UUID],
    credentials: LoginRequestV1 = Depends(read_login_credentials),
) -> LoginResponseV1:
    """Issue a session token for the configured username and password."""
    if not credentials.username or not credentials.password or not credentials_match(
        config, credentials.username, credentials.password
    ):
        logger.info(
            "Login rejected",
            extra={"username": credentials.username, "correlation_id": str(correlation_id)},
        )
        raise_authentication_error(
            service="pokedex_bff_service",
            operation="login",
            message=INVALID_CREDENTIALS_MESSAGE,
            correlation_id=correlation_id,
            reason="invalid_credentials",
        )

    token = token_service.issue(credentials.username)
    logger.info(
        "Login succeeded",
        extra={"username": credentials.username, "correlation_id": str(correlation_id)},
    )
    return LoginResponseV1(token=token, user=LoginUserV1(username=credentials.username))
