"""Protocol definitions for Pokedex BFF Service.

Defines interfaces for the upstream client and core services used in
dependency injection.
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING, Protocol
from uuid import UUID

if TYPE_CHECKING:
    from services.pokedex_bff_service.domain.catalog import CatalogCacheInfo, CatalogSnapshot
    from services.pokedex_bff_service.domain.detail import DetailRecord
    from services.pokedex_bff_service.dto.pokeapi_v1 import (
        NamedResourceV1,
        PokemonDetailResponseV1,
        PokemonSpeciesResponseV1,
    )


class PokeAPIClientProtocol(Protocol):
    """Protocol for the upstream catalog HTTP client. Pure I/O and shape extraction."""

    async def fetch_index_page(self, correlation_id: UUID) -> list[NamedResourceV1]:
        """Fetch the whole catalog listing in one call.

        Raises:
            ServiceError: EXTERNAL_SERVICE_ERROR on transport failure or non-2xx,
                PARSING_ERROR on an unexpected payload shape
        """
        ...

    async def fetch_detail(self, pokemon_id: int, correlation_id: UUID) -> PokemonDetailResponseV1:
        """Fetch the raw per-Pokemon payload.

        Raises:
            ServiceError: RESOURCE_NOT_FOUND on upstream 404, EXTERNAL_SERVICE_ERROR
                or PARSING_ERROR otherwise
        """
        ...

    async def fetch_description(
        self, pokemon_id: int, correlation_id: UUID
    ) -> PokemonSpeciesResponseV1:
        """Fetch the raw species payload; an empty entry list is a valid result.

        Raises:
            ServiceError: EXTERNAL_SERVICE_ERROR or PARSING_ERROR
        """
        ...


class CatalogCacheProtocol(Protocol):
    """Process-wide, time-bounded cache of the catalog index."""

    async def get_current(self, correlation_id: UUID) -> CatalogSnapshot:
        """Return the current snapshot, refreshing it first if empty or expired.

        Raises:
            ServiceError: CATALOG_REFRESH_ERROR when a required refresh fails
        """
        ...

    async def force_refresh(self, correlation_id: UUID) -> CatalogSnapshot:
        """Rebuild the snapshot regardless of its age (joins an in-flight refresh)."""
        ...

    def info(self) -> CatalogCacheInfo:
        """Describe the cache slot without triggering a refresh."""
        ...


class TokenServiceProtocol(Protocol):
    """Issues and validates signed, expiring session tokens."""

    def issue(self, subject: str, ttl: timedelta | None = None) -> str:
        """Create a token for ``subject`` expiring ``ttl`` from now (default 24 h)."""
        ...

    def validate(self, token: str, correlation_id: UUID) -> str:
        """Return the token subject.

        Raises:
            ServiceError: AUTHENTICATION_ERROR for any invalid, expired or tampered token
        """
        ...


class PokemonDetailServiceProtocol(Protocol):
    """Assembles full-detail records from upstream payloads on demand."""

    async def get_detail(self, pokemon_id: int, correlation_id: UUID) -> DetailRecord:
        """Build the detail record for one Pokemon.

        Raises:
            ServiceError: RESOURCE_NOT_FOUND, EXTERNAL_SERVICE_ERROR or PARSING_ERROR
        """
        ...
