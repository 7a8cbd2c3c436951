"""StationPlaylistMedia junction model."""
from sqlalchemy import Column, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship

from .base import Base, IdMixin


class StationPlaylistMedia(Base, IdMixin):
    """Junction model linking playlists to media."""

    __tablename__ = "station_playlist_media"

    playlist_id = Column(Integer, ForeignKey("station_playlists.id", ondelete="CASCADE"), nullable=False, index=True)
    media_id = Column(Integer, ForeignKey("station_media.id", ondelete="CASCADE"), nullable=False, index=True)

    # Unique constraint to prevent duplicate playlist-media pairs
    __table_args__ = (
        UniqueConstraint('playlist_id', 'media_id', name='uq_playlist_media'),
    )

    # Relationships
    playlist = relationship("StationPlaylist", back_populates="media_items")
    media = relationship("StationMedia", back_populates="playlists")

    def __repr__(self) -> str:
        return f"<StationPlaylistMedia(id={self.id}, playlist_id={self.playlist_id}, media_id={self.media_id})>"
