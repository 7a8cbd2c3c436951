"""On-demand catalog API endpoints."""
import os
import time
from typing import List, Union

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import FileResponse
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from ..metrics import (
    ondemand_downloads_total,
    ondemand_list_duration_seconds,
    ondemand_list_requests_total,
    ondemand_list_results_total,
)
from ..models import Station, StationMedia, StorageLocation
from ..paginator import Page, Paginator
from ..services.media_service import MediaService
from ..services.ondemand_source import build_query_source
from ..services.search_index import MeilisearchService, get_search_service
from ..services.song_api_generator import SongApiGenerator, SongResponse
from ..services.station_service import StationService
from ..shared.db import get_db
from ..shared.exceptions import ForbiddenError, NotFoundError
from ..shared.logging import get_logger
from ..shared.settings import app_settings
from ..urls import absolute_url

logger = get_logger(__name__)

router = APIRouter(prefix="/stations", tags=["ondemand"])

ON_DEMAND_DISABLED_MESSAGE = "This station does not support on-demand streaming."
DOWNLOAD_ROUTE = "api:stations:ondemand:download"


class StationOnDemandRow(BaseModel):
    """On-demand catalog row."""

    track_id: str = Field(..., description="Stable media identifier")
    download_url: str = Field(..., description="URL of the on-demand download endpoint")
    media: SongResponse

    def resolve_urls(self, base_url: str) -> None:
        """Make relative URLs absolute against ``base_url``."""
        self.download_url = absolute_url(base_url, self.download_url)
        self.media.resolve_urls(base_url)


async def get_on_demand_station(station_id: str, db: AsyncSession) -> Station:
    """Resolve the station and verify it supports on-demand streaming."""
    station = await StationService(db).get_station(station_id)
    if not station:
        raise NotFoundError(
            message=f"Station {station_id} not found",
            details={"station_id": station_id},
        )

    if not station.enable_on_demand:
        logger.warning("ondemand_disabled", station_id=station.id)
        raise ForbiddenError(message=ON_DEMAND_DISABLED_MESSAGE)

    return station


@router.get(
    "/{station_id}/ondemand",
    name="api:stations:ondemand:list",
    response_model=Union[Page[StationOnDemandRow], List[StationOnDemandRow]],
)
async def list_on_demand(
    station_id: str,
    request: Request,
    search_phrase: str = Query("", alias="searchPhrase", description="Free-text filter"),
    sort: str = Query("", description="Sort field: name, title, artist, album or genre"),
    sort_order: str = Query("asc", alias="sortOrder", description="asc or desc"),
    page: int = Query(1, ge=1, description="Page number"),
    per_page: int = Query(
        app_settings.default_per_page, description="Rows per page; below 1 disables pagination"
    ),
    db: AsyncSession = Depends(get_db),
    search_service: MeilisearchService = Depends(get_search_service),
) -> Union[Page[StationOnDemandRow], List[StationOnDemandRow]]:
    """
    List a station's on-demand media.

    Uses the search index when one is configured, the database otherwise.
    """
    start_time = time.time()

    station = await get_on_demand_station(station_id, db)

    search_phrase = search_phrase.strip()
    sort_field = sort.strip()

    source = build_query_source(db, search_service, station, search_phrase, sort_field, sort_order)

    logger.info(
        "listing_ondemand",
        station_id=station.id,
        backend=source.backend,
        search_phrase=search_phrase,
        sort=sort_field,
        sort_order=sort_order,
        page=page,
        per_page=per_page,
    )

    song_api_generator = SongApiGenerator(app_settings)
    base_url = app_settings.base_url or str(request.base_url)

    def postprocess(media: StationMedia) -> StationOnDemandRow:
        row = StationOnDemandRow(
            track_id=media.unique_id,
            media=song_api_generator(media, station),
            download_url=str(
                request.app.url_path_for(
                    DOWNLOAD_ROUTE,
                    station_id=str(station.id),
                    media_id=media.unique_id,
                )
            ),
        )
        row.resolve_urls(base_url)
        return row

    paginator = Paginator.from_request(page=page, per_page=per_page)
    result = await paginator.paginate(source, request, postprocess, base_url=base_url)

    row_count = len(result) if isinstance(result, list) else len(result.rows)
    duration = time.time() - start_time
    ondemand_list_requests_total.labels(backend=source.backend).inc()
    ondemand_list_results_total.labels(backend=source.backend).inc(row_count)
    ondemand_list_duration_seconds.labels(backend=source.backend).observe(duration)

    logger.info(
        "ondemand_listed",
        station_id=station.id,
        backend=source.backend,
        rows=row_count,
        duration_seconds=duration,
    )
    return result


@router.get("/{station_id}/ondemand/download/{media_id}", name=DOWNLOAD_ROUTE)
async def download_on_demand(
    station_id: str,
    media_id: str,
    db: AsyncSession = Depends(get_db),
) -> FileResponse:
    """Download an on-demand media file."""
    logger.info("downloading_ondemand", station_id=station_id, media_id=media_id)

    try:
        station = await get_on_demand_station(station_id, db)
    except ForbiddenError:
        ondemand_downloads_total.labels(status="forbidden").inc()
        raise

    playlist_ids = await StationService(db).get_on_demand_playlist_ids(station)
    media = await MediaService(db).get_on_demand_media(
        station.media_storage_location_id, media_id, playlist_ids
    )
    if not media:
        ondemand_downloads_total.labels(status="not_found").inc()
        raise NotFoundError(
            message=f"Media {media_id} not found",
            details={"station_id": station_id, "media_id": media_id},
        )

    storage_location = await db.get(StorageLocation, station.media_storage_location_id)
    file_path = os.path.join(storage_location.path, media.path)
    if not os.path.isfile(file_path):
        logger.warning("ondemand_file_missing", media_id=media.id, file_path=file_path)
        ondemand_downloads_total.labels(status="not_found").inc()
        raise NotFoundError(
            message=f"Media file for {media_id} not found",
            details={"station_id": station_id, "media_id": media_id},
        )

    ondemand_downloads_total.labels(status="served").inc()
    logger.info("ondemand_download_served", station_id=station.id, media_id=media.id)
    return FileResponse(file_path, filename=os.path.basename(media.path))
