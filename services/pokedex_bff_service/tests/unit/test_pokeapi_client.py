"""Unit tests for PokeAPI client."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any
from uuid import uuid4

import httpx
import pytest
from pokedex_service_libs.error_handling import ErrorCode, ServiceError
from respx import MockRouter

from services.pokedex_bff_service.clients.pokeapi_client import (
    PokeAPIClientImpl,
    build_index_image_url,
    extract_pokemon_id,
)
from services.pokedex_bff_service.tests.test_provider import TEST_POKEAPI_BASE_URL

CORRELATION_ID = uuid4()


def detail_payload(pokemon_id: int = 25) -> dict[str, Any]:
    return {
        "id": pokemon_id,
        "name": "pikachu",
        "weight": 60,
        "height": 4,
        "sprites": {"front_default": "https://img.test/25.png", "other": None},
        "types": [{"slot": 1, "type": {"name": "electric", "url": ""}}],
        "abilities": [{"ability": {"name": "static", "url": ""}}],
        "moves": [{"move": {"name": "mega-punch", "url": ""}}],
        "stats": [{"base_stat": 35, "stat": {"name": "hp", "url": ""}}],
    }


@pytest.fixture
async def pokeapi_client() -> AsyncIterator[PokeAPIClientImpl]:
    """Create PokeAPI client with real httpx client for respx mocking."""
    async with httpx.AsyncClient() as http_client:
        yield PokeAPIClientImpl(http_client, base_url=TEST_POKEAPI_BASE_URL + "/")


class TestExtractPokemonId:
    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://pokeapi.co/api/v2/pokemon/25/", 25),
            ("https://pokeapi.co/api/v2/pokemon/25", 25),
            ("https://pokeapi.co/api/v2/pokemon/10094//", 10094),
        ],
    )
    def test_trailing_numeric_segment(self, url: str, expected: int) -> None:
        assert extract_pokemon_id(url) == expected

    @pytest.mark.parametrize("url", ["", "/", "https://pokeapi.co/api/v2/pokemon/pikachu/"])
    def test_rejects_urls_without_numeric_id(self, url: str) -> None:
        with pytest.raises(ValueError):
            extract_pokemon_id(url)


class TestBuildIndexImageUrl:
    def test_regular_ids_use_front_sprite(self) -> None:
        assert build_index_image_url(9999) == (
            "https://raw.githubusercontent.com/PokeAPI/sprites/master/sprites/pokemon/9999.png"
        )

    def test_alternate_forms_use_official_artwork(self) -> None:
        assert build_index_image_url(10000) == (
            "https://raw.githubusercontent.com/PokeAPI/sprites/master/sprites/pokemon/"
            "other/official-artwork/10000.png"
        )


@pytest.mark.asyncio
async def test_fetch_index_page_requests_full_listing(
    pokeapi_client: PokeAPIClientImpl, respx_mock: MockRouter
) -> None:
    route = respx_mock.get(f"{TEST_POKEAPI_BASE_URL}/pokemon?limit=100000").mock(
        return_value=httpx.Response(
            200,
            json={
                "count": 2,
                "next": None,
                "results": [
                    {"name": "bulbasaur", "url": "https://pokeapi.co/api/v2/pokemon/1/"},
                    {"name": "ivysaur", "url": "https://pokeapi.co/api/v2/pokemon/2/"},
                ],
            },
        )
    )

    results = await pokeapi_client.fetch_index_page(CORRELATION_ID)

    assert route.call_count == 1
    assert [r.name for r in results] == ["bulbasaur", "ivysaur"]
    assert results[1].url == "https://pokeapi.co/api/v2/pokemon/2/"


@pytest.mark.asyncio
async def test_fetch_index_page_non_success_is_external_error(
    pokeapi_client: PokeAPIClientImpl, respx_mock: MockRouter
) -> None:
    respx_mock.get(f"{TEST_POKEAPI_BASE_URL}/pokemon?limit=100000").mock(
        return_value=httpx.Response(503, text="Service Unavailable")
    )

    with pytest.raises(ServiceError) as exc_info:
        await pokeapi_client.fetch_index_page(CORRELATION_ID)

    assert exc_info.value.error_detail.error_code == ErrorCode.EXTERNAL_SERVICE_ERROR
    assert exc_info.value.error_detail.details["status_code"] == 503


@pytest.mark.asyncio
async def test_fetch_index_page_transport_error_is_external_error(
    pokeapi_client: PokeAPIClientImpl, respx_mock: MockRouter
) -> None:
    respx_mock.get(f"{TEST_POKEAPI_BASE_URL}/pokemon?limit=100000").mock(
        side_effect=httpx.ConnectError("Connection refused")
    )

    with pytest.raises(ServiceError) as exc_info:
        await pokeapi_client.fetch_index_page(CORRELATION_ID)

    assert exc_info.value.error_detail.error_code == ErrorCode.EXTERNAL_SERVICE_ERROR


@pytest.mark.asyncio
async def test_fetch_index_page_wrong_shape_is_parsing_error(
    pokeapi_client: PokeAPIClientImpl, respx_mock: MockRouter
) -> None:
    respx_mock.get(f"{TEST_POKEAPI_BASE_URL}/pokemon?limit=100000").mock(
        return_value=httpx.Response(200, json={"count": 1, "items": []})
    )

    with pytest.raises(ServiceError) as exc_info:
        await pokeapi_client.fetch_index_page(CORRELATION_ID)

    assert exc_info.value.error_detail.error_code == ErrorCode.PARSING_ERROR


@pytest.mark.asyncio
async def test_fetch_detail_success(
    pokeapi_client: PokeAPIClientImpl, respx_mock: MockRouter
) -> None:
    respx_mock.get(f"{TEST_POKEAPI_BASE_URL}/pokemon/25").mock(
        return_value=httpx.Response(200, json=detail_payload())
    )

    detail = await pokeapi_client.fetch_detail(25, CORRELATION_ID)

    assert detail.id == 25
    assert detail.sprites.front_default == "https://img.test/25.png"
    assert detail.types[0].type.name == "electric"


@pytest.mark.asyncio
async def test_fetch_detail_404_is_not_found(
    pokeapi_client: PokeAPIClientImpl, respx_mock: MockRouter
) -> None:
    respx_mock.get(f"{TEST_POKEAPI_BASE_URL}/pokemon/99999").mock(
        return_value=httpx.Response(404, text="Not Found")
    )

    with pytest.raises(ServiceError) as exc_info:
        await pokeapi_client.fetch_detail(99999, CORRELATION_ID)

    assert exc_info.value.error_detail.error_code == ErrorCode.RESOURCE_NOT_FOUND
    assert exc_info.value.error_detail.details["resource_id"] == "99999"


@pytest.mark.asyncio
async def test_fetch_detail_500_is_external_error(
    pokeapi_client: PokeAPIClientImpl, respx_mock: MockRouter
) -> None:
    respx_mock.get(f"{TEST_POKEAPI_BASE_URL}/pokemon/25").mock(
        return_value=httpx.Response(500, text="Internal Server Error")
    )

    with pytest.raises(ServiceError) as exc_info:
        await pokeapi_client.fetch_detail(25, CORRELATION_ID)

    assert exc_info.value.error_detail.error_code == ErrorCode.EXTERNAL_SERVICE_ERROR


@pytest.mark.asyncio
async def test_fetch_detail_invalid_json_is_parsing_error(
    pokeapi_client: PokeAPIClientImpl, respx_mock: MockRouter
) -> None:
    respx_mock.get(f"{TEST_POKEAPI_BASE_URL}/pokemon/25").mock(
        return_value=httpx.Response(200, text="<html>maintenance</html>")
    )

    with pytest.raises(ServiceError) as exc_info:
        await pokeapi_client.fetch_detail(25, CORRELATION_ID)

    assert exc_info.value.error_detail.error_code == ErrorCode.PARSING_ERROR


@pytest.mark.asyncio
async def test_fetch_description_empty_entries_is_valid(
    pokeapi_client: PokeAPIClientImpl, respx_mock: MockRouter
) -> None:
    respx_mock.get(f"{TEST_POKEAPI_BASE_URL}/pokemon-species/10094").mock(
        return_value=httpx.Response(200, json={"flavor_text_entries": []})
    )

    species = await pokeapi_client.fetch_description(10094, CORRELATION_ID)

    assert species.flavor_text_entries == []
