"""Process-wide catalog index cache with lazy, single-flight refresh."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable
from datetime import UTC, datetime
from uuid import UUID

from pokedex_service_libs.error_handling import ServiceError, raise_catalog_refresh_error
from pokedex_service_libs.logging_utils import create_service_logger
from pydantic import ValidationError

from services.pokedex_bff_service.clients.pokeapi_client import (
    build_index_image_url,
    extract_pokemon_id,
)
from services.pokedex_bff_service.domain.catalog import (
    CacheStatus,
    CatalogCacheInfo,
    CatalogSnapshot,
    IndexEntry,
)
from services.pokedex_bff_service.protocols import PokeAPIClientProtocol

logger = create_service_logger("pokedex_bff.catalog_cache")

SERVICE = "pokedex_bff_service"


def utc_now() -> datetime:
    return datetime.now(UTC)


class CatalogCacheImpl:
    """Holds the current catalog snapshot and rebuilds it when it expires.

    Readers of a fresh snapshot never wait. When the slot is empty or stale,
    the first reader starts a refresh task and every other reader arriving
    before it finishes awaits that same task, so one expiry crossing costs
    exactly one upstream listing call. A failed refresh leaves the previous
    snapshot in place and raises to everyone awaiting it.
    """

    def __init__(
        self,
        pokeapi_client: PokeAPIClientProtocol,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._client = pokeapi_client
        self._clock = clock
        self._snapshot: CatalogSnapshot | None = None
        self._refresh_task: asyncio.Task[CatalogSnapshot] | None = None
        self._lock = asyncio.Lock()

    async def get_current(self, correlation_id: UUID) -> CatalogSnapshot:
        snapshot = self._snapshot
        if snapshot is not None and snapshot.is_fresh(self._clock()):
            return snapshot

        async with self._lock:
            # A refresh may have completed while we waited for the lock
            snapshot = self._snapshot
            if snapshot is not None and snapshot.is_fresh(self._clock()):
                return snapshot
            task = self._ensure_refresh_task(correlation_id)

        return await asyncio.shield(task)

    async def force_refresh(self, correlation_id: UUID) -> CatalogSnapshot:
        async with self._lock:
            task = self._ensure_refresh_task(correlation_id)
        return await asyncio.shield(task)

    def info(self) -> CatalogCacheInfo:
        snapshot = self._snapshot
        refreshing = self._refresh_task is not None
        if snapshot is None:
            return CatalogCacheInfo(status=CacheStatus.EMPTY, refresh_in_flight=refreshing)
        status = CacheStatus.FRESH if snapshot.is_fresh(self._clock()) else CacheStatus.STALE
        return CatalogCacheInfo(
            status=status,
            entry_count=len(snapshot),
            fetched_at=snapshot.fetched_at,
            expires_at=snapshot.expires_at,
            refresh_in_flight=refreshing,
        )

    def _ensure_refresh_task(self, correlation_id: UUID) -> asyncio.Task[CatalogSnapshot]:
        """Return the in-flight refresh, starting one if none is running. Caller holds the lock."""
        if self._refresh_task is None:
            logger.info(
                "Starting catalog refresh",
                extra={
                    "had_snapshot": self._snapshot is not None,
                    "correlation_id": str(correlation_id),
                },
            )
            self._refresh_task = asyncio.create_task(self._refresh(correlation_id))
        else:
            logger.debug(
                "Joining in-flight catalog refresh",
                extra={"correlation_id": str(correlation_id)},
            )
        return self._refresh_task

    async def _refresh(self, correlation_id: UUID) -> CatalogSnapshot:
        started = time.perf_counter()
        try:
            snapshot = await self._build_snapshot(correlation_id)
            self._snapshot = snapshot
            logger.info(
                "Catalog refreshed",
                extra={
                    "entry_count": len(snapshot),
                    "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                    "expires_at": snapshot.expires_at.isoformat(),
                    "correlation_id": str(correlation_id),
                },
            )
            return snapshot
        finally:
            self._refresh_task = None

    async def _build_snapshot(self, correlation_id: UUID) -> CatalogSnapshot:
        try:
            resources = await self._client.fetch_index_page(correlation_id)
        except ServiceError as e:
            logger.error(
                "Catalog refresh failed: upstream listing unavailable",
                extra={
                    "error_code": e.error_code,
                    "stale_snapshot_kept": self._snapshot is not None,
                    "correlation_id": str(correlation_id),
                },
            )
            raise_catalog_refresh_error(
                service=SERVICE,
                operation="refresh_catalog",
                message="Failed to refresh catalog index",
                correlation_id=correlation_id,
                cause_error_code=e.error_code,
            )

        fetched_at = self._clock()
        entries: list[IndexEntry] = []
        for resource in resources:
            try:
                pokemon_id = extract_pokemon_id(resource.url)
                entries.append(
                    IndexEntry(
                        id=pokemon_id,
                        name=resource.name,
                        number=pokemon_id,
                        image_url=build_index_image_url(pokemon_id),
                    )
                )
            except (ValueError, ValidationError) as e:
                logger.error(
                    f"Catalog refresh failed: bad listing entry {resource.name!r}",
                    extra={
                        "url": resource.url,
                        "error": str(e),
                        "correlation_id": str(correlation_id),
                    },
                )
                raise_catalog_refresh_error(
                    service=SERVICE,
                    operation="refresh_catalog",
                    message="Failed to refresh catalog index",
                    correlation_id=correlation_id,
                    bad_entry=resource.name,
                )

        return CatalogSnapshot(entries=tuple(entries), fetched_at=fetched_at)
