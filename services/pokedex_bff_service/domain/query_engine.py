"""Search, sort and paginate a catalog snapshot.

Pure functions: no I/O, no shared state. The same snapshot and query always
produce the same result.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from operator import attrgetter

from services.pokedex_bff_service.domain.catalog import (
    CatalogQuery,
    CatalogSnapshot,
    IndexEntry,
    QueryResult,
    SortKey,
)


def matches_search(entry: IndexEntry, term: str) -> bool:
    """Case-insensitive name containment, or substring match on the decimal number.

    ``term`` is already trimmed and lowercased. The number match is a substring
    test, so "25" also matches 125 and 250.
    """
    return term in entry.name.lower() or term in str(entry.number)


def filter_entries(entries: Iterable[IndexEntry], search_term: str | None) -> list[IndexEntry]:
    if search_term is None:
        return list(entries)
    normalized = search_term.strip().lower()
    if not normalized:
        return list(entries)
    return [e for e in entries if matches_search(e, normalized)]


def sort_entries(entries: Sequence[IndexEntry], sort_key: SortKey) -> list[IndexEntry]:
    """Stable sort by raw name or by ascending number."""
    if sort_key is SortKey.NAME:
        return sorted(entries, key=attrgetter("name"))
    return sorted(entries, key=attrgetter("number"))


def run_query(snapshot: CatalogSnapshot, query: CatalogQuery) -> QueryResult:
    """Filter, then sort, then slice ``[offset, offset + limit)``."""
    matched = sort_entries(filter_entries(snapshot.entries, query.search_term), query.sort_key)
    total = len(matched)
    end = query.offset + query.limit
    return QueryResult(
        page=tuple(matched[query.offset : end]),
        total_matched=total,
        offset=query.offset,
        limit=query.limit,
        has_more=end < total,
    )
