"""Full-detail record assembled per request from upstream payloads. Never cached."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class PokemonStats(BaseModel):
    """Base stats in a fixed shape; stats missing upstream stay 0."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    hp: int = 0
    atk: int = 0
    def_: int = Field(default=0, alias="def")
    satk: int = 0
    sdef: int = 0
    spd: int = 0


class DetailRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    number: int
    image_url: str
    types: tuple[str, ...]
    weight_kg: float
    height_m: float
    abilities: tuple[str, ...]
    moves: tuple[str, ...] = Field(max_length=2)
    stats: PokemonStats
    description: str = ""
