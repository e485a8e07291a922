"""Catalog index domain models.

The catalog index is a snapshot of the full upstream listing. Snapshots are
immutable once built; the cache replaces them wholesale on refresh.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# Snapshots are considered stale one hour after they were fetched
CATALOG_TTL = timedelta(hours=1)


class IndexEntry(BaseModel):
    """One Pokemon in the catalog index."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=1)
    name: str
    number: int
    image_url: str


class CatalogSnapshot(BaseModel):
    """Entries in upstream listing order plus the time they were fetched."""

    model_config = ConfigDict(frozen=True)

    entries: tuple[IndexEntry, ...]
    fetched_at: datetime

    @property
    def expires_at(self) -> datetime:
        return self.fetched_at + CATALOG_TTL

    def is_fresh(self, now: datetime) -> bool:
        return now < self.expires_at

    def __len__(self) -> int:
        return len(self.entries)


class SortKey(str, Enum):
    NUMBER = "number"
    NAME = "name"

    @classmethod
    def parse(cls, value: str | None) -> SortKey:
        """Anything other than "name" sorts by number."""
        return cls.NAME if value == cls.NAME.value else cls.NUMBER


class CatalogQuery(BaseModel):
    """Search, sort and pagination parameters for one listing request.

    ``offset >= 0`` is enforced here; ``limit`` may be 0 (empty page). The HTTP
    boundary additionally rejects ``limit < 1``.
    """

    model_config = ConfigDict(frozen=True)

    offset: int = Field(default=0, ge=0)
    limit: int = Field(default=50, ge=0)
    search_term: str | None = None
    sort_key: SortKey = SortKey.NUMBER


class QueryResult(BaseModel):
    """One page of the filtered and sorted index."""

    model_config = ConfigDict(frozen=True)

    page: tuple[IndexEntry, ...]
    total_matched: int
    offset: int
    limit: int
    has_more: bool


class CacheStatus(str, Enum):
    EMPTY = "empty"
    FRESH = "fresh"
    STALE = "stale"


class CatalogCacheInfo(BaseModel):
    """Read-only view of the cache slot, for health reporting."""

    status: CacheStatus
    entry_count: int = 0
    fetched_at: datetime | None = None
    expires_at: datetime | None = None
    refresh_in_flight: bool = False
