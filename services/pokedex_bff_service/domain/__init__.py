"""Pokedex BFF domain: catalog index, query engine and detail records."""

from services.pokedex_bff_service.domain.catalog import (
    CATALOG_TTL,
    CacheStatus,
    CatalogCacheInfo,
    CatalogQuery,
    CatalogSnapshot,
    IndexEntry,
    QueryResult,
    SortKey,
)
from services.pokedex_bff_service.domain.detail import DetailRecord, PokemonStats
from services.pokedex_bff_service.domain.query_engine import run_query

__all__ = [
    "CATALOG_TTL",
    "CacheStatus",
    "CatalogCacheInfo",
    "CatalogQuery",
    "CatalogSnapshot",
    "DetailRecord",
    "IndexEntry",
    "PokemonStats",
    "QueryResult",
    "SortKey",
    "run_query",
]
