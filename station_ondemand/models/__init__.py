"""Models for the on-demand catalog service."""
from .base import Base
from .storage_location import StorageLocation
from .station import Station
from .station_media import StationMedia
from .station_playlist import StationPlaylist
from .station_playlist_media import StationPlaylistMedia

__all__ = ["Base", "StorageLocation", "Station", "StationMedia", "StationPlaylist", "StationPlaylistMedia"]
