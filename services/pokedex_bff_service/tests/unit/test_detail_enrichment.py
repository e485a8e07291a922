"""Unit tests for detail enrichment: image fallback, stats, types, moves and description."""

from __future__ import annotations

from typing import Any
from uuid import UUID, uuid4

import pytest
from pokedex_service_libs.error_handling import ErrorCode, ErrorDetail, ServiceError

from services.pokedex_bff_service.dto.pokeapi_v1 import (
    PokemonDetailResponseV1,
    PokemonSpeciesResponseV1,
)
from services.pokedex_bff_service.implementations.detail_enrichment_impl import (
    PokemonDetailServiceImpl,
    clean_flavor_text,
)

CORRELATION_ID = uuid4()
ARTWORK_URL = "https://img.test/official-artwork/6.png"
FRONT_URL = "https://img.test/front/6.png"


def _named(name: str) -> dict[str, str]:
    return {"name": name, "url": f"https://pokeapi.co/api/v2/x/{name}/"}


def detail_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": 6,
        "name": "charizard",
        "weight": 905,
        "height": 17,
        "sprites": {
            "front_default": FRONT_URL,
            "other": {"official-artwork": {"front_default": ARTWORK_URL}},
        },
        # Array order differs from slot order
        "types": [
            {"slot": 2, "type": _named("flying")},
            {"slot": 1, "type": _named("fire")},
        ],
        "abilities": [{"ability": _named("blaze")}, {"ability": _named("solar-power")}],
        "moves": [
            {"move": _named("mega-punch")},
            {"move": _named("fire-punch")},
            {"move": _named("thunder-punch")},
        ],
        "stats": [
            {"base_stat": 100, "stat": _named("speed")},
            {"base_stat": 78, "stat": _named("hp")},
            {"base_stat": 84, "stat": _named("attack")},
            {"base_stat": 78, "stat": _named("defense")},
            {"base_stat": 109, "stat": _named("special-attack")},
            {"base_stat": 85, "stat": _named("special-defense")},
            {"base_stat": 1, "stat": _named("accuracy")},
        ],
    }
    payload.update(overrides)
    return payload


def species_payload(entries: list[tuple[str, str]]) -> dict[str, Any]:
    return {
        "flavor_text_entries": [
            {"flavor_text": text, "language": _named(language)} for text, language in entries
        ]
    }


def _error(code: ErrorCode) -> ServiceError:
    return ServiceError(
        ErrorDetail(
            error_code=code,
            message="upstream failure",
            correlation_id=CORRELATION_ID,
            service="pokedex_bff_service",
            operation="test",
        )
    )


class FakePokeAPIClient:
    def __init__(
        self,
        detail: dict[str, Any] | ServiceError,
        species: dict[str, Any] | ServiceError,
    ) -> None:
        self.detail = detail
        self.species = species
        self.description_calls = 0

    async def fetch_detail(self, pokemon_id: int, correlation_id: UUID) -> PokemonDetailResponseV1:
        if isinstance(self.detail, ServiceError):
            raise self.detail
        return PokemonDetailResponseV1.model_validate(self.detail)

    async def fetch_description(
        self, pokemon_id: int, correlation_id: UUID
    ) -> PokemonSpeciesResponseV1:
        self.description_calls += 1
        if isinstance(self.species, ServiceError):
            raise self.species
        return PokemonSpeciesResponseV1.model_validate(self.species)


async def _get_detail(client: FakePokeAPIClient, pokemon_id: int = 6):
    return await PokemonDetailServiceImpl(client).get_detail(pokemon_id, CORRELATION_ID)


@pytest.mark.asyncio
async def test_full_record_assembly() -> None:
    client = FakePokeAPIClient(
        detail_payload(),
        species_payload([("Spits fire that\nis hot enough\fto melt boulders.", "en")]),
    )

    record = await _get_detail(client)

    assert record.id == 6
    assert record.number == 6
    assert record.name == "charizard"
    assert record.image_url == ARTWORK_URL
    assert record.types == ("fire", "flying")
    assert record.abilities == ("blaze", "solar-power")
    assert record.moves == ("mega-punch", "fire-punch")
    assert record.weight_kg == pytest.approx(90.5)
    assert record.height_m == pytest.approx(1.7)
    assert record.description == "Spits fire that is hot enough to melt boulders."


@pytest.mark.asyncio
async def test_stats_map_known_names_and_ignore_others() -> None:
    client = FakePokeAPIClient(detail_payload(), species_payload([]))

    record = await _get_detail(client)

    assert record.stats.model_dump(by_alias=True) == {
        "hp": 78,
        "atk": 84,
        "def": 78,
        "satk": 109,
        "sdef": 85,
        "spd": 100,
    }


@pytest.mark.asyncio
async def test_missing_stats_default_to_zero() -> None:
    client = FakePokeAPIClient(
        detail_payload(stats=[{"base_stat": 45, "stat": _named("hp")}]),
        species_payload([]),
    )

    record = await _get_detail(client)

    assert record.stats.hp == 45
    assert record.stats.def_ == 0
    assert record.stats.spd == 0


@pytest.mark.asyncio
async def test_image_falls_back_to_front_sprite_without_artwork() -> None:
    sprites = {"front_default": FRONT_URL, "other": {"official-artwork": {"front_default": None}}}
    client = FakePokeAPIClient(detail_payload(sprites=sprites), species_payload([]))

    record = await _get_detail(client)

    assert record.image_url == FRONT_URL


@pytest.mark.asyncio
async def test_image_is_empty_when_no_sprites() -> None:
    sprites = {"front_default": None, "other": None}
    client = FakePokeAPIClient(detail_payload(sprites=sprites), species_payload([]))

    record = await _get_detail(client)

    assert record.image_url == ""


@pytest.mark.asyncio
async def test_fewer_than_two_moves_are_kept_as_is() -> None:
    client = FakePokeAPIClient(
        detail_payload(moves=[{"move": _named("splash")}]),
        species_payload([]),
    )

    record = await _get_detail(client)

    assert record.moves == ("splash",)


@pytest.mark.asyncio
async def test_description_uses_first_english_entry() -> None:
    client = FakePokeAPIClient(
        detail_payload(),
        species_payload(
            [
                ("Feuer speiend.", "de"),
                ("First english\r\nentry.", "en"),
                ("Second english entry.", "en"),
            ]
        ),
    )

    record = await _get_detail(client)

    assert record.description == "First english entry."


@pytest.mark.asyncio
async def test_description_empty_without_english_entry() -> None:
    client = FakePokeAPIClient(detail_payload(), species_payload([("ひのこ", "ja")]))

    record = await _get_detail(client)

    assert record.description == ""


@pytest.mark.asyncio
@pytest.mark.parametrize("code", [ErrorCode.EXTERNAL_SERVICE_ERROR, ErrorCode.PARSING_ERROR])
async def test_description_failure_is_not_fatal(code: ErrorCode) -> None:
    client = FakePokeAPIClient(detail_payload(), _error(code))

    record = await _get_detail(client)

    assert record.description == ""
    assert record.name == "charizard"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "code", [ErrorCode.RESOURCE_NOT_FOUND, ErrorCode.EXTERNAL_SERVICE_ERROR]
)
async def test_detail_failure_propagates_without_description_call(code: ErrorCode) -> None:
    client = FakePokeAPIClient(_error(code), species_payload([]))

    with pytest.raises(ServiceError) as exc_info:
        await _get_detail(client)

    assert exc_info.value.error_detail.error_code == code
    assert client.description_calls == 0


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("When several of\nthese POKéMON\fgather,", "When several of these POKéMON gather,"),
        ("  padded\r\n\n text  ", "padded text"),
        ("tab\tand   spaces", "tab and spaces"),
        ("", ""),
    ],
)
def test_clean_flavor_text(raw: str, expected: str) -> None:
    assert clean_flavor_text(raw) == expected
