"""Services for the on-demand catalog."""
from .station_service import StationService
from .media_service import MediaService
from .search_index import MeilisearchService, get_search_service
from .ondemand_source import CatalogQuerySource, RelationalSource, SearchSource, build_query_source
from .song_api_generator import SongApiGenerator, SongResponse

__all__ = [
    "StationService",
    "MediaService",
    "MeilisearchService",
    "get_search_service",
    "CatalogQuerySource",
    "RelationalSource",
    "SearchSource",
    "build_query_source",
    "SongApiGenerator",
    "SongResponse",
]
