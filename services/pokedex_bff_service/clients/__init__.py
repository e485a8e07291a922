"""Pokedex BFF Service clients module.

Contains the HTTP client for the upstream PokeAPI catalog.
"""

from services.pokedex_bff_service.clients.pokeapi_client import PokeAPIClientImpl

__all__ = ["PokeAPIClientImpl"]
