"""Query sources for a station's on-demand catalog."""
from typing import Any, Dict, List, Optional, Protocol, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import Station, StationMedia
from ..shared.logging import get_logger
from .media_service import MediaService, on_demand_membership
from .search_index import MeilisearchService
from .station_service import StationService

logger = get_logger(__name__)

SORT_COLUMNS = {
    "name": StationMedia.title,
    "title": StationMedia.title,
    "artist": StationMedia.artist,
    "album": StationMedia.album,
    "genre": StationMedia.genre,
}


def normalize_sort_direction(sort_order: Optional[str]) -> str:
    """Map a sortOrder value to "asc" or "desc"; anything but "desc" is ascending."""
    return "desc" if (sort_order or "asc").strip().lower() == "desc" else "asc"


class CatalogQuerySource(Protocol):
    """An ordered source of on-demand media that can be read page by page."""

    backend: str

    async def get_page(self, page: int, per_page: Optional[int]) -> Tuple[List[StationMedia], int]:
        """Return (media for the page, total matching count)."""
        ...


class SearchSource:
    """On-demand media from the search index, hydrated from the database."""

    backend = "search"

    def __init__(
        self,
        db: AsyncSession,
        search_service: MeilisearchService,
        station: Station,
        search_phrase: str,
        sort_field: str,
        sort_direction: str,
    ):
        self.media_service = MediaService(db)

        params: Dict[str, Any] = {}
        if sort_field:
            params["sort"] = [f"{sort_field}:{sort_direction}"]

        index = search_service.get_index(station.media_storage_location_id)
        self.paginator = index.get_on_demand_search_paginator(station, search_phrase, params)

    async def get_page(self, page: int, per_page: Optional[int]) -> Tuple[List[StationMedia], int]:
        hits, total = await self.paginator.get_page(page, per_page)
        media_ids = [int(hit["id"]) for hit in hits]
        return await self.media_service.get_media_by_ids(media_ids), total


class RelationalSource:
    """On-demand media read straight from the database."""

    backend = "database"

    def __init__(
        self,
        db: AsyncSession,
        station: Station,
        search_phrase: str,
        sort_field: str,
        sort_direction: str,
    ):
        self.db = db
        self.station = station
        self.search_phrase = search_phrase
        self.sort_field = sort_field
        self.sort_direction = sort_direction

    def build_query(self, playlist_ids: List[int]):
        """Select eligible media, filtered by the search phrase and sorted."""
        query = select(StationMedia).where(
            StationMedia.storage_location_id == self.station.media_storage_location_id,
            StationMedia.id.in_(on_demand_membership(playlist_ids)),
        )

        if self.search_phrase:
            pattern = f"%{self.search_phrase}%"
            query = query.where(
                StationMedia.title.like(pattern)
                | StationMedia.artist.like(pattern)
                | StationMedia.album.like(pattern)
            )

        column = SORT_COLUMNS.get(self.sort_field)
        if column is not None:
            query = query.order_by(column.desc() if self.sort_direction == "desc" else column.asc())
            if self.sort_field not in ("name", "title"):
                query = query.order_by(StationMedia.title.asc())
        else:
            if self.sort_field:
                logger.info("ondemand_sort_field_ignored", sort_field=self.sort_field)
            query = query.order_by(StationMedia.artist.asc(), StationMedia.title.asc())

        return query.order_by(StationMedia.id.asc())

    async def get_page(self, page: int, per_page: Optional[int]) -> Tuple[List[StationMedia], int]:
        playlist_ids = await StationService(self.db).get_on_demand_playlist_ids(self.station)
        if not playlist_ids:
            return [], 0

        query = self.build_query(playlist_ids)

        count_query = select(func.count()).select_from(query.order_by(None).subquery())
        total = (await self.db.execute(count_query)).scalar_one()

        if per_page is not None:
            query = query.offset((page - 1) * per_page).limit(per_page)

        result = await self.db.execute(query)
        return list(result.scalars().all()), total


def build_query_source(
    db: AsyncSession,
    search_service: MeilisearchService,
    station: Station,
    search_phrase: str,
    sort_field: str,
    sort_order: Optional[str],
) -> CatalogQuerySource:
    """Pick the search index when available, the database otherwise."""
    sort_direction = normalize_sort_direction(sort_order)

    if search_service.is_supported():
        return SearchSource(db, search_service, station, search_phrase, sort_field, sort_direction)
    return RelationalSource(db, station, search_phrase, sort_field, sort_direction)
