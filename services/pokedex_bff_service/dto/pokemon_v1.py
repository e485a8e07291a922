"""Pokedex BFF v1 DTOs.

Screen-specific view models for the list and detail pages. Field names are the
frontend contract (``pokemons``, ``count``, ``has_more``, ``image``).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from services.pokedex_bff_service.domain.catalog import IndexEntry, QueryResult
from services.pokedex_bff_service.domain.detail import DetailRecord


class PokemonSummaryV1(BaseModel):
    """Single card in the Pokemon list."""

    id: int
    name: str
    number: int
    image: str

    @classmethod
    def from_entry(cls, entry: IndexEntry) -> PokemonSummaryV1:
        return cls(id=entry.id, name=entry.name, number=entry.number, image=entry.image_url)


class PokemonListPageV1(BaseModel):
    """List view: one page of the searched and sorted catalog."""

    pokemons: list[PokemonSummaryV1] = Field(default_factory=list)
    count: int = Field(default=0, description="Total Pokemon matching the search")
    offset: int = Field(default=0, description="Number of Pokemon skipped")
    limit: int = Field(default=50, description="Page size requested")
    has_more: bool = Field(default=False, description="Whether another page follows")

    @classmethod
    def from_result(cls, result: QueryResult) -> PokemonListPageV1:
        return cls(
            pokemons=[PokemonSummaryV1.from_entry(e) for e in result.page],
            count=result.total_matched,
            offset=result.offset,
            limit=result.limit,
            has_more=result.has_more,
        )


class PokemonStatsV1(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    hp: int = 0
    atk: int = 0
    def_: int = Field(default=0, alias="def")
    satk: int = 0
    sdef: int = 0
    spd: int = 0


class PokemonDetailV1(PokemonSummaryV1):
    """Detail view. Weight in kg, height in m."""

    types: list[str] = Field(default_factory=list)
    weight: float
    height: float
    abilities: list[str] = Field(default_factory=list)
    moves: list[str] = Field(default_factory=list)
    stats: PokemonStatsV1 = Field(default_factory=PokemonStatsV1)
    description: str = ""

    @classmethod
    def from_record(cls, record: DetailRecord) -> PokemonDetailV1:
        return cls(
            id=record.id,
            name=record.name,
            number=record.number,
            image=record.image_url,
            types=list(record.types),
            weight=record.weight_kg,
            height=record.height_m,
            abilities=list(record.abilities),
            moves=list(record.moves),
            stats=PokemonStatsV1.model_validate(record.stats.model_dump(by_alias=True)),
            description=record.description,
        )
