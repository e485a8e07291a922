"""Assemble full-detail records from PokeAPI detail and species payloads."""

from __future__ import annotations

import re
from uuid import UUID

from pokedex_service_libs.error_handling import ServiceError
from pokedex_service_libs.logging_utils import create_service_logger

from services.pokedex_bff_service.domain.detail import DetailRecord, PokemonStats
from services.pokedex_bff_service.dto.pokeapi_v1 import (
    PokemonDetailResponseV1,
    PokemonSpeciesResponseV1,
    PokemonStatV1,
    SpritesV1,
)
from services.pokedex_bff_service.protocols import PokeAPIClientProtocol

logger = create_service_logger("pokedex_bff.detail_enrichment")

DESCRIPTION_LANGUAGE = "en"
MAX_MOVES = 2

# Upstream stat name -> key in the fixed stats shape
STAT_NAME_TO_KEY = {
    "hp": "hp",
    "attack": "atk",
    "defense": "def",
    "special-attack": "satk",
    "special-defense": "sdef",
    "speed": "spd",
}

_LINE_BREAKS = re.compile(r"[\n\f\r]")
_WHITESPACE_RUN = re.compile(r"\s+")


def select_image_url(sprites: SpritesV1) -> str:
    """Official artwork if present, else the default front sprite, else empty."""
    artwork = sprites.other.official_artwork if sprites.other else None
    if artwork is not None and artwork.front_default:
        return artwork.front_default
    return sprites.front_default or ""


def map_stats(stats: list[PokemonStatV1]) -> PokemonStats:
    values = {
        STAT_NAME_TO_KEY[s.stat.name]: s.base_stat
        for s in stats
        if s.stat.name in STAT_NAME_TO_KEY
    }
    return PokemonStats.model_validate(values)


def clean_flavor_text(text: str) -> str:
    return _WHITESPACE_RUN.sub(" ", _LINE_BREAKS.sub(" ", text)).strip()


def extract_description(species: PokemonSpeciesResponseV1) -> str:
    for entry in species.flavor_text_entries:
        if entry.language.name == DESCRIPTION_LANGUAGE:
            return clean_flavor_text(entry.flavor_text)
    return ""


def build_detail_record(detail: PokemonDetailResponseV1, description: str) -> DetailRecord:
    types = [t.type.name for t in sorted(detail.types, key=lambda t: t.slot)]
    return DetailRecord(
        id=detail.id,
        name=detail.name,
        number=detail.id,
        image_url=select_image_url(detail.sprites),
        types=tuple(types),
        weight_kg=detail.weight / 10,
        height_m=detail.height / 10,
        abilities=tuple(a.ability.name for a in detail.abilities),
        moves=tuple(m.move.name for m in detail.moves[:MAX_MOVES]),
        stats=map_stats(detail.stats),
        description=description,
    )


class PokemonDetailServiceImpl:
    """Fetches detail on every call; nothing here is cached."""

    def __init__(self, pokeapi_client: PokeAPIClientProtocol) -> None:
        self._client = pokeapi_client

    async def get_detail(self, pokemon_id: int, correlation_id: UUID) -> DetailRecord:
        detail = await self._client.fetch_detail(pokemon_id, correlation_id)
        description = await self._fetch_description(pokemon_id, correlation_id)
        return build_detail_record(detail, description)

    async def _fetch_description(self, pokemon_id: int, correlation_id: UUID) -> str:
        """Description is optional: any upstream failure yields an empty string."""
        try:
            species = await self._client.fetch_description(pokemon_id, correlation_id)
        except ServiceError as e:
            logger.warning(
                "Description unavailable, continuing without it",
                extra={
                    "pokemon_id": pokemon_id,
                    "error_code": e.error_code,
                    "correlation_id": str(correlation_id),
                },
            )
            return ""
        return extract_description(species)
