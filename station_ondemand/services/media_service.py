"""Media service for catalog lookups."""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List, Optional, Sequence
from ..models import StationMedia, StationPlaylistMedia
from ..shared.logging import get_logger

logger = get_logger(__name__)


def on_demand_membership(playlist_ids: Sequence[int]):
    """Subquery of media IDs that belong to any of the given playlists."""
    return select(StationPlaylistMedia.media_id).where(
        StationPlaylistMedia.playlist_id.in_(playlist_ids)
    )


class MediaService:
    """Service for reading station media."""
    
    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db
    
    async def get_media_by_ids(self, media_ids: Sequence[int]) -> List[StationMedia]:
        """
        Get media rows for the given IDs in the same order as the IDs.
        
        A bulk ``IN`` lookup returns rows in whatever order the store picks, so
        the input order is re-imposed here. IDs with no matching row are skipped.
        """
        if not media_ids:
            return []
        
        query = select(StationMedia).where(StationMedia.id.in_(media_ids))
        result = await self.db.execute(query)
        by_id = {media.id: media for media in result.scalars().all()}
        
        ordered = [by_id[media_id] for media_id in media_ids if media_id in by_id]
        
        if len(ordered) != len(media_ids):
            logger.warning(
                "media_hydration_missing_rows",
                requested=len(media_ids),
                found=len(ordered),
            )
        
        return ordered
    
    async def get_on_demand_media(
        self,
        storage_location_id: int,
        unique_id: str,
        playlist_ids: Sequence[int],
    ) -> Optional[StationMedia]:
        """Get a media item by unique ID if it is reachable through the given playlists."""
        if not playlist_ids:
            return None
        
        query = select(StationMedia).where(
            StationMedia.storage_location_id == storage_location_id,
            StationMedia.unique_id == unique_id,
            StationMedia.id.in_(on_demand_membership(playlist_ids)),
        )
        
        result = await self.db.execute(query)
        media = result.scalars().first()
        
        if media:
            logger.info("retrieved_on_demand_media", media_id=media.id, unique_id=unique_id)
        else:
            logger.warning("on_demand_media_not_found", unique_id=unique_id)
        
        return media
