"""Upstream PokeAPI response models.

Internal models for deserializing catalog responses at the client boundary.
Only the fields this service reads are declared; everything else is ignored.
A payload missing a declared field fails validation instead of surfacing
later as a missing key.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class NamedResourceV1(BaseModel):
    """``{name, url}`` reference used throughout PokeAPI."""

    name: str
    url: str = ""


class PokemonListResponseV1(BaseModel):
    """GET /pokemon?limit=N"""

    count: int = 0
    results: list[NamedResourceV1]


class OfficialArtworkV1(BaseModel):
    front_default: str | None = None


class OtherSpritesV1(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    official_artwork: OfficialArtworkV1 | None = Field(default=None, alias="official-artwork")


class SpritesV1(BaseModel):
    front_default: str | None = None
    other: OtherSpritesV1 | None = None


class PokemonTypeSlotV1(BaseModel):
    slot: int
    type: NamedResourceV1


class PokemonAbilitySlotV1(BaseModel):
    ability: NamedResourceV1


class PokemonMoveV1(BaseModel):
    move: NamedResourceV1


class PokemonStatV1(BaseModel):
    base_stat: int
    stat: NamedResourceV1


class PokemonDetailResponseV1(BaseModel):
    """GET /pokemon/{id}. Weight is in hectograms, height in decimetres."""

    id: int
    name: str
    weight: int
    height: int
    sprites: SpritesV1 = Field(default_factory=SpritesV1)
    types: list[PokemonTypeSlotV1]
    abilities: list[PokemonAbilitySlotV1]
    moves: list[PokemonMoveV1]
    stats: list[PokemonStatV1]


class FlavorTextEntryV1(BaseModel):
    flavor_text: str
    language: NamedResourceV1


class PokemonSpeciesResponseV1(BaseModel):
    """GET /pokemon-species/{id}"""

    flavor_text_entries: list[FlavorTextEntryV1] = Field(default_factory=list)
