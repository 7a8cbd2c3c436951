"""Station service for resolving stations and their on-demand playlists."""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List, Optional
from ..models import Station, StationPlaylist
from ..shared.logging import get_logger

logger = get_logger(__name__)

# Largest value a signed 64-bit INTEGER column can hold
MAX_STATION_ID = 2 ** 63 - 1


class StationService:
    """Service for reading stations."""
    
    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db
    
    async def get_station(self, identifier: str) -> Optional[Station]:
        """Get a station by numeric ID or short name."""
        if identifier.isdecimal():
            station_id = int(identifier)
            if station_id > MAX_STATION_ID:
                logger.warning("station_not_found", identifier=identifier)
                return None
            query = select(Station).where(Station.id == station_id)
        else:
            query = select(Station).where(Station.short_name == identifier)
        
        result = await self.db.execute(query)
        station = result.scalar_one_or_none()
        
        if station:
            logger.info("retrieved_station", station_id=station.id, short_name=station.short_name)
        else:
            logger.warning("station_not_found", identifier=identifier)
        
        return station
    
    async def get_on_demand_playlist_ids(self, station: Station) -> List[int]:
        """Get IDs of the station's enabled playlists that are included in on-demand."""
        query = select(StationPlaylist.id).where(
            StationPlaylist.station_id == station.id,
            StationPlaylist.is_enabled.is_(True),
            StationPlaylist.include_in_on_demand.is_(True),
        )
        
        result = await self.db.execute(query)
        playlist_ids = list(result.scalars().all())
        
        logger.info("retrieved_on_demand_playlists", station_id=station.id, count=len(playlist_ids))
        return playlist_ids
