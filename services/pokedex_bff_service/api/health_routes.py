"""Health route for Pokedex BFF Service."""

from __future__ import annotations

from typing import Any

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter

from services.pokedex_bff_service.domain.catalog import CacheStatus
from services.pokedex_bff_service.protocols import CatalogCacheProtocol

router = APIRouter()


@router.get("/healthz", tags=["Health"])
@inject
async def health_check(catalog_cache: FromDishka[CatalogCacheProtocol]) -> dict[str, Any]:
    """Report service status and catalog cache state. Never triggers a refresh."""
    cache_info = catalog_cache.info()

    # An empty or stale cache is refilled by the next listing request
    overall_status = "healthy" if cache_info.status is CacheStatus.FRESH else "degraded"

    return {
        "service": "pokedex_bff_service",
        "status": overall_status,
        "message": f"Pokedex BFF Service is {overall_status}",
        "version": "0.1.0",
        "dependencies": {
            "catalog_cache": {
                "status": cache_info.status.value,
                "entry_count": cache_info.entry_count,
                "fetched_at": cache_info.fetched_at.isoformat() if cache_info.fetched_at else None,
                "expires_at": cache_info.expires_at.isoformat() if cache_info.expires_at else None,
                "refresh_in_flight": cache_info.refresh_in_flight,
            }
        },
    }
