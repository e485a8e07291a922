"""Dependency Injection providers for Pokedex BFF Service.

Provides Dishka DI container setup with APP-scoped infrastructure
and REQUEST-scoped context providers.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from datetime import timedelta
from typing import NewType
from uuid import UUID, uuid4

import httpx
from dishka import AsyncContainer, Provider, Scope, provide
from fastapi import Request
from pokedex_service_libs.error_handling import raise_authentication_error
from pokedex_service_libs.logging_utils import create_service_logger

from services.pokedex_bff_service.clients.pokeapi_client import PokeAPIClientImpl
from services.pokedex_bff_service.config import PokedexBFFSettings, settings
from services.pokedex_bff_service.implementations.catalog_cache_impl import CatalogCacheImpl
from services.pokedex_bff_service.implementations.detail_enrichment_impl import (
    PokemonDetailServiceImpl,
)
from services.pokedex_bff_service.implementations.token_service_impl import JWTTokenService
from services.pokedex_bff_service.protocols import (
    CatalogCacheProtocol,
    PokeAPIClientProtocol,
    PokemonDetailServiceProtocol,
    TokenServiceProtocol,
)

# Subject of a validated session token; distinct from plain str in the container
AuthenticatedSubject = NewType("AuthenticatedSubject", str)

BEARER_PREFIX = "bearer "

logger = create_service_logger("pokedex_bff.di")


class PokedexBFFProvider(Provider):
    """Infrastructure provider for Pokedex BFF Service.

    Provides APP-scoped dependencies: config, HTTP client, upstream client,
    the process-wide catalog cache and the token and detail services.
    """

    scope = Scope.APP

    @provide
    def get_config(self) -> PokedexBFFSettings:
        """Provide settings singleton."""
        return settings

    @provide(scope=Scope.APP)
    async def get_http_client(
        self, config: PokedexBFFSettings
    ) -> AsyncIterator[httpx.AsyncClient]:
        """Provide shared HTTP client with connection pooling."""
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(
                config.HTTP_CLIENT_TIMEOUT_SECONDS,
                connect=config.HTTP_CLIENT_CONNECT_TIMEOUT_SECONDS,
            )
        ) as client:
            yield client

    @provide(scope=Scope.APP)
    def provide_pokeapi_client(
        self, http_client: httpx.AsyncClient, config: PokedexBFFSettings
    ) -> PokeAPIClientProtocol:
        """Provide PokeAPI client singleton."""
        return PokeAPIClientImpl(http_client, base_url=config.POKEAPI_BASE_URL)

    @provide(scope=Scope.APP)
    def provide_catalog_cache(self, pokeapi_client: PokeAPIClientProtocol) -> CatalogCacheProtocol:
        """Provide the single catalog cache shared by all requests."""
        return CatalogCacheImpl(pokeapi_client)

    @provide(scope=Scope.APP)
    def provide_token_service(self, config: PokedexBFFSettings) -> TokenServiceProtocol:
        """Provide JWT token service singleton."""
        return JWTTokenService(
            secret_key=config.JWT_SECRET_KEY.get_secret_value(),
            algorithm=config.JWT_ALGORITHM,
            default_ttl=timedelta(seconds=config.JWT_ACCESS_TOKEN_EXPIRES_SECONDS),
        )

    @provide(scope=Scope.APP)
    def provide_detail_service(
        self, pokeapi_client: PokeAPIClientProtocol
    ) -> PokemonDetailServiceProtocol:
        """Provide detail enrichment service singleton."""
        return PokemonDetailServiceImpl(pokeapi_client)


def extract_token(authorization: str | None) -> str | None:
    """Return the token from an Authorization header value.

    Both ``Bearer <token>`` and a bare ``<token>`` are accepted.
    """
    if not authorization:
        return None
    value = authorization.strip()
    if value[: len(BEARER_PREFIX)].lower() == BEARER_PREFIX:
        value = value[len(BEARER_PREFIX) :].strip()
    return value or None


class RequestContextProvider(Provider):
    """Request-scoped provider for correlation and auth context.

    Reads correlation_id from request state (set by CorrelationIDMiddleware)
    and the session token from the Authorization header. The FastAPI Request
    itself comes from FastapiProvider.
    """

    @provide(scope=Scope.REQUEST)
    def provide_correlation_id(self, request: Request) -> UUID:
        """Provide correlation ID from request state."""
        return getattr(request.state, "correlation_id", uuid4())

    @provide(scope=Scope.REQUEST)
    def provide_authenticated_subject(
        self,
        request: Request,
        token_service: TokenServiceProtocol,
        correlation_id: UUID,
    ) -> AuthenticatedSubject:
        """Validate the session token and provide its subject.

        A missing header and an invalid token are indistinguishable to the caller.
        """
        token = extract_token(request.headers.get("Authorization"))
        if token is None:
            logger.info(
                "Rejected request without session token",
                extra={"path": request.url.path, "correlation_id": str(correlation_id)},
            )
            raise_authentication_error(
                service="pokedex_bff_service",
                operation="authenticate_request",
                message="Unauthorized",
                correlation_id=correlation_id,
                reason="missing_authorization_header",
            )
        return AuthenticatedSubject(token_service.validate(token, correlation_id))


async def require_session(request: Request) -> AuthenticatedSubject:
    """Router-level dependency that authenticates before any parameter is checked.

    FastAPI solves router dependencies ahead of query and path validation, so a
    request without a valid token gets 401 even when its parameters are bad too.
    The subject is cached in the request container for the route to reuse.
    """
    container: AsyncContainer = request.state.dishka_container
    return await container.get(AuthenticatedSubject)
