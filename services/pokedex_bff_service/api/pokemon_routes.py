"""Pokedex BFF API routes for the list and detail screens.

Every route here requires a valid session token. Upstream and cache failures
are reported to the client with fixed messages only.
"""

from __future__ import annotations

from uuid import UUID

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, Query
from pokedex_service_libs.error_handling import (
    ErrorCode,
    ServiceError,
    raise_external_service_error,
    raise_resource_not_found,
)
from pokedex_service_libs.logging_utils import create_service_logger

from services.pokedex_bff_service.config import settings
from services.pokedex_bff_service.di import AuthenticatedSubject, require_session
from services.pokedex_bff_service.domain.catalog import CatalogQuery, SortKey
from services.pokedex_bff_service.domain.query_engine import run_query
from services.pokedex_bff_service.dto.pokemon_v1 import PokemonDetailV1, PokemonListPageV1
from services.pokedex_bff_service.protocols import (
    CatalogCacheProtocol,
    PokemonDetailServiceProtocol,
)

router = APIRouter(dependencies=[Depends(require_session)])
logger = create_service_logger("pokedex_bff.pokemon_routes")

SERVICE = "pokedex_bff_service"
LIST_FAILURE_MESSAGE = "Failed to fetch pokemons"
DETAIL_NOT_FOUND_MESSAGE = "Pokemon not found"
DETAIL_FAILURE_MESSAGE = "Failed to fetch pokemon"


def parse_pokemon_id(raw: str) -> int | None:
    """Return the id as a positive int, or None when it cannot name a Pokemon."""
    if not (raw.isascii() and raw.isdigit()):
        return None
    value = int(raw)
    return value if value >= 1 else None


@router.get("/pokemons", response_model=PokemonListPageV1)
@inject
async def list_pokemons(
    catalog_cache: FromDishka[CatalogCacheProtocol],
    subject: FromDishka[AuthenticatedSubject],
    correlation_id: FromDishka[UUID],
    offset: int = Query(0, ge=0, description="Number of Pokemon to skip"),
    limit: int = Query(
        settings.DEFAULT_PAGE_LIMIT, ge=1, description="Maximum number of Pokemon to return"
    ),
    search: str | None = Query(None, description="Name or number substring"),
    sort: str | None = Query(None, description="'name' or 'number' (default)"),
) -> PokemonListPageV1:
    """Search, sort and paginate the cached catalog index."""
    query = CatalogQuery(
        offset=offset,
        limit=limit,
        search_term=search,
        sort_key=SortKey.parse(sort),
    )

    try:
        snapshot = await catalog_cache.get_current(correlation_id)
    except ServiceError as e:
        logger.error(
            "Catalog unavailable for listing",
            extra={
                "error_code": e.error_code,
                "subject": subject,
                "correlation_id": str(correlation_id),
            },
        )
        raise_external_service_error(
            service=SERVICE,
            operation="list_pokemons",
            external_service="pokeapi",
            message=LIST_FAILURE_MESSAGE,
            correlation_id=correlation_id,
            cause_error_code=e.error_code,
        )

    result = run_query(snapshot, query)
    logger.info(
        f"Listed {len(result.page)} of {result.total_matched} Pokemon",
        extra={
            "offset": offset,
            "limit": limit,
            "search": search,
            "sort": query.sort_key.value,
            "subject": subject,
            "correlation_id": str(correlation_id),
        },
    )
    return PokemonListPageV1.from_result(result)


@router.get("/pokemons/{pokemon_id}", response_model=PokemonDetailV1)
@inject
async def get_pokemon(
    detail_service: FromDishka[PokemonDetailServiceProtocol],
    subject: FromDishka[AuthenticatedSubject],
    correlation_id: FromDishka[UUID],
    pokemon_id: str,
) -> PokemonDetailV1:
    """Fetch and assemble one Pokemon's full detail, straight from upstream.

    An id that is not a positive integer cannot exist upstream and is reported
    as not found.
    """
    parsed_id = parse_pokemon_id(pokemon_id)
    if parsed_id is None:
        raise_resource_not_found(
            service=SERVICE,
            operation="get_pokemon",
            resource_type="Pokemon",
            resource_id=pokemon_id,
            correlation_id=correlation_id,
            message=DETAIL_NOT_FOUND_MESSAGE,
        )
    return await _fetch_detail(detail_service, parsed_id, subject, correlation_id)


async def _fetch_detail(
    detail_service: PokemonDetailServiceProtocol,
    pokemon_id: int,
    subject: AuthenticatedSubject,
    correlation_id: UUID,
) -> PokemonDetailV1:
    try:
        record = await detail_service.get_detail(pokemon_id, correlation_id)
    except ServiceError as e:
        if e.error_detail.error_code == ErrorCode.RESOURCE_NOT_FOUND:
            raise_resource_not_found(
                service=SERVICE,
                operation="get_pokemon",
                resource_type="Pokemon",
                resource_id=str(pokemon_id),
                correlation_id=correlation_id,
                message=DETAIL_NOT_FOUND_MESSAGE,
            )
        logger.error(
            "Pokemon detail unavailable",
            extra={
                "pokemon_id": pokemon_id,
                "error_code": e.error_code,
                "subject": subject,
                "correlation_id": str(correlation_id),
            },
        )
        raise_external_service_error(
            service=SERVICE,
            operation="get_pokemon",
            external_service="pokeapi",
            message=DETAIL_FAILURE_MESSAGE,
            correlation_id=correlation_id,
            cause_error_code=e.error_code,
        )

    return PokemonDetailV1.from_record(record)
