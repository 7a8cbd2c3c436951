"""Song metadata generator for API responses."""
import hashlib
from typing import Dict, Optional
from pydantic import BaseModel, Field
from ..models import Station, StationMedia
from ..shared.settings import AppSettings, app_settings
from ..urls import absolute_url


class SongResponse(BaseModel):
    """Song metadata embedded in on-demand rows."""

    id: str = Field(..., description="Song hash derived from artist and title")
    text: str = Field(..., description="Display text, \"artist - title\"")
    artist: Optional[str] = None
    title: Optional[str] = None
    album: Optional[str] = None
    genre: Optional[str] = None
    isrc: Optional[str] = None
    lyrics: Optional[str] = None
    art: str = Field(..., description="Album art URL")
    custom_fields: Dict[str, str] = Field(default_factory=dict)

    def resolve_urls(self, base_url: str) -> None:
        self.art = absolute_url(base_url, self.art)


def song_hash(text: str) -> str:
    """Stable song ID from display text, case and whitespace insensitive."""
    normalized = " ".join(text.lower().split())
    return hashlib.md5(normalized.encode("utf-8")).hexdigest()


class SongApiGenerator:
    """Build the metadata object for a media item."""

    def __init__(self, settings: AppSettings = app_settings):
        self.settings = settings

    def __call__(self, song: StationMedia, station: Station) -> SongResponse:
        text = song.text
        return SongResponse(
            id=song_hash(text),
            text=text,
            artist=song.artist,
            title=song.title,
            album=song.album,
            genre=song.genre,
            isrc=song.isrc,
            lyrics=song.lyrics,
            art=self.settings.default_album_art_url,
        )
