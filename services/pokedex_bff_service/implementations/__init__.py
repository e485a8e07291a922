"""Pokedex BFF Service implementations of the protocols in ``protocols.py``."""

from services.pokedex_bff_service.implementations.catalog_cache_impl import CatalogCacheImpl
from services.pokedex_bff_service.implementations.detail_enrichment_impl import (
    PokemonDetailServiceImpl,
)
from services.pokedex_bff_service.implementations.token_service_impl import JWTTokenService

__all__ = ["CatalogCacheImpl", "JWTTokenService", "PokemonDetailServiceImpl"]
