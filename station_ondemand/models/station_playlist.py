"""StationPlaylist model."""
from sqlalchemy import Boolean, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from .base import Base, IdMixin, TimestampMixin


class StationPlaylist(Base, IdMixin, TimestampMixin):
    """A station playlist; only enabled, on-demand-flagged playlists expose media on demand."""

    __tablename__ = "station_playlists"

    station_id = Column(Integer, ForeignKey("stations.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    is_enabled = Column(Boolean, nullable=False, default=True)
    include_in_on_demand = Column(Boolean, nullable=False, default=False)

    # Relationships
    station = relationship("Station", back_populates="playlists")
    media_items = relationship("StationPlaylistMedia", back_populates="playlist", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return (
            f"<StationPlaylist(id={self.id}, name='{self.name}', is_enabled={self.is_enabled}, "
            f"include_in_on_demand={self.include_in_on_demand})>"
        )
