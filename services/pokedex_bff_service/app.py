"""Pokedex BFF Service - token-gated list and detail API over PokeAPI.

Serves a cached, searchable catalog index and per-Pokemon detail pages
assembled from the upstream catalog.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dishka import make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pokedex_service_libs.error_handling.fastapi import (
    register_error_handlers as register_fastapi_error_handlers,
)
from pokedex_service_libs.logging_utils import configure_service_logging, create_service_logger

from services.pokedex_bff_service.api.auth_routes import router as auth_router
from services.pokedex_bff_service.api.health_routes import router as health_router
from services.pokedex_bff_service.api.pokemon_routes import router as pokemon_router
from services.pokedex_bff_service.config import settings
from services.pokedex_bff_service.di import PokedexBFFProvider, RequestContextProvider
from services.pokedex_bff_service.middleware import (
    CorrelationIDMiddleware,
    RequestLoggingMiddleware,
)

configure_service_logging(
    settings.SERVICE_NAME,
    environment=settings.ENVIRONMENT.value,
    log_level=settings.LOG_LEVEL,
)
logger = create_service_logger("pokedex_bff_service")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle."""
    logger.info("Starting Pokedex BFF Service...")

    yield

    # Closes the shared HTTP client
    logger.info("Shutting down Pokedex BFF Service...")
    await app.state.di_container.close()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.SERVICE_NAME,
        version="0.1.0",
        description="Pokedex BFF Service - Pokemon list and detail API",
        docs_url="/docs" if settings.is_development() else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.is_development() else None,
        lifespan=lifespan,
    )

    register_fastapi_error_handlers(app)

    # Added first so it runs inside CorrelationIDMiddleware and sees the correlation ID
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationIDMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )

    app.include_router(health_router)
    app.include_router(auth_router, tags=["Auth"])
    app.include_router(pokemon_router, tags=["Pokemon"])

    container = make_async_container(
        PokedexBFFProvider(),
        RequestContextProvider(),
        FastapiProvider(),
    )
    setup_dishka(container, app)
    app.state.di_container = container

    logger.info(
        "Pokedex BFF Service configured",
        extra={
            "environment": settings.ENVIRONMENT.value,
            "pokeapi_base_url": settings.POKEAPI_BASE_URL,
        },
    )
    return app


# Create application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "services.pokedex_bff_service.app:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development(),
        log_level=settings.LOG_LEVEL.lower(),
    )
