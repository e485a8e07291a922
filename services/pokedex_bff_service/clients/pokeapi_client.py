"""PokeAPI (upstream catalog) HTTP client."""

from __future__ import annotations

from typing import Any, TypeVar
from uuid import UUID

import httpx
from pokedex_service_libs.error_handling import (
    raise_external_service_error,
    raise_parsing_error,
    raise_resource_not_found,
)
from pokedex_service_libs.logging_utils import create_service_logger
from pydantic import BaseModel, ValidationError

from services.pokedex_bff_service.config import settings
from services.pokedex_bff_service.dto.pokeapi_v1 import (
    NamedResourceV1,
    PokemonDetailResponseV1,
    PokemonListResponseV1,
    PokemonSpeciesResponseV1,
)

logger = create_service_logger("pokedex_bff.pokeapi_client")

SERVICE = "pokedex_bff_service"
EXTERNAL_SERVICE = "pokeapi"

# Upstream has no server-side paging we rely on; one request returns everything
FULL_LISTING_LIMIT = 100000

# Image policy for index entries. Alternate forms (id >= 10000) have no front
# sprite, so they point at the official artwork instead.
ALTERNATE_FORM_ID_THRESHOLD = 10000
FRONT_SPRITE_URL_TEMPLATE = (
    "https://raw.githubusercontent.com/PokeAPI/sprites/master/sprites/pokemon/{id}.png"
)
OFFICIAL_ARTWORK_URL_TEMPLATE = (
    "https://raw.githubusercontent.com/PokeAPI/sprites/master/sprites/pokemon/"
    "other/official-artwork/{id}.png"
)

ModelT = TypeVar("ModelT", bound=BaseModel)


def extract_pokemon_id(resource_url: str) -> int:
    """Return the trailing numeric path segment of a resource URL.

    ``https://pokeapi.co/api/v2/pokemon/10001/`` -> ``10001``

    Raises:
        ValueError: If the last non-empty segment is not a number
    """
    segments = [segment for segment in resource_url.split("/") if segment]
    if not segments or not segments[-1].isdigit():
        raise ValueError(f"No numeric id at the end of resource URL: {resource_url!r}")
    return int(segments[-1])


def build_index_image_url(pokemon_id: int) -> str:
    """Derive the listing image URL from the id alone (no network call)."""
    if pokemon_id < ALTERNATE_FORM_ID_THRESHOLD:
        return FRONT_SPRITE_URL_TEMPLATE.format(id=pokemon_id)
    return OFFICIAL_ARTWORK_URL_TEMPLATE.format(id=pokemon_id)


class PokeAPIClientImpl:
    """HTTP client for the public PokeAPI catalog."""

    def __init__(self, http_client: httpx.AsyncClient, base_url: str | None = None) -> None:
        """Initialize with shared HTTP client.

        Args:
            http_client: Shared httpx AsyncClient instance
            base_url: Catalog base URL (defaults to POKEAPI_BASE_URL setting)
        """
        self._client = http_client
        self._base_url = (base_url or settings.POKEAPI_BASE_URL).rstrip("/")

    async def fetch_index_page(self, correlation_id: UUID) -> list[NamedResourceV1]:
        """Fetch the full listing of ``{name, url}`` pairs."""
        url = f"{self._base_url}/pokemon"
        response = await self._get(
            url,
            operation="fetch_index_page",
            correlation_id=correlation_id,
            params={"limit": FULL_LISTING_LIMIT},
        )
        self._ensure_success(response, "fetch_index_page", correlation_id)
        listing = self._parse(response, PokemonListResponseV1, "fetch_index_page", correlation_id)

        logger.info(
            "Fetched catalog listing from PokeAPI",
            extra={
                "result_count": len(listing.results),
                "correlation_id": str(correlation_id),
            },
        )
        return listing.results

    async def fetch_detail(self, pokemon_id: int, correlation_id: UUID) -> PokemonDetailResponseV1:
        """Fetch the raw detail payload for one Pokemon."""
        url = f"{self._base_url}/pokemon/{pokemon_id}"
        response = await self._get(url, operation="fetch_detail", correlation_id=correlation_id)
        if response.status_code == httpx.codes.NOT_FOUND:
            logger.info(
                "Pokemon not found upstream",
                extra={"pokemon_id": pokemon_id, "correlation_id": str(correlation_id)},
            )
            raise_resource_not_found(
                service=SERVICE,
                operation="fetch_detail",
                resource_type="Pokemon",
                resource_id=str(pokemon_id),
                correlation_id=correlation_id,
            )
        self._ensure_success(response, "fetch_detail", correlation_id)
        return self._parse(response, PokemonDetailResponseV1, "fetch_detail", correlation_id)

    async def fetch_description(
        self, pokemon_id: int, correlation_id: UUID
    ) -> PokemonSpeciesResponseV1:
        """Fetch the raw species payload holding flavor text entries."""
        url = f"{self._base_url}/pokemon-species/{pokemon_id}"
        response = await self._get(
            url, operation="fetch_description", correlation_id=correlation_id
        )
        self._ensure_success(response, "fetch_description", correlation_id)
        return self._parse(response, PokemonSpeciesResponseV1, "fetch_description", correlation_id)

    async def _get(
        self,
        url: str,
        *,
        operation: str,
        correlation_id: UUID,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        logger.debug(
            "Requesting PokeAPI",
            extra={"url": url, "operation": operation, "correlation_id": str(correlation_id)},
        )
        try:
            return await self._client.get(url, params=params)
        except httpx.HTTPError as e:
            logger.error(
                "PokeAPI transport error",
                extra={
                    "url": url,
                    "operation": operation,
                    "error": str(e),
                    "error_type": type(e).__name__,
                    "correlation_id": str(correlation_id),
                },
            )
            raise_external_service_error(
                service=SERVICE,
                operation=operation,
                external_service=EXTERNAL_SERVICE,
                message=f"PokeAPI request failed: {type(e).__name__}",
                correlation_id=correlation_id,
                url=url,
            )

    def _ensure_success(
        self, response: httpx.Response, operation: str, correlation_id: UUID
    ) -> None:
        if response.is_success:
            return
        logger.error(
            "PokeAPI returned non-success status",
            extra={
                "url": str(response.request.url),
                "operation": operation,
                "status_code": response.status_code,
                "correlation_id": str(correlation_id),
            },
        )
        raise_external_service_error(
            service=SERVICE,
            operation=operation,
            external_service=EXTERNAL_SERVICE,
            message=f"PokeAPI responded with status {response.status_code}",
            correlation_id=correlation_id,
            status_code=response.status_code,
        )

    def _parse(
        self,
        response: httpx.Response,
        model: type[ModelT],
        operation: str,
        correlation_id: UUID,
    ) -> ModelT:
        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(
                "Unexpected PokeAPI payload shape",
                extra={
                    "operation": operation,
                    "model": model.__name__,
                    "error": str(e),
                    "correlation_id": str(correlation_id),
                },
            )
            raise_parsing_error(
                service=SERVICE,
                operation=operation,
                parse_target=model.__name__,
                message=f"Could not parse PokeAPI response as {model.__name__}",
                correlation_id=correlation_id,
            )
