"""StationMedia model."""
from sqlalchemy import Column, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from .base import Base, IdMixin, TimestampMixin


class StationMedia(Base, IdMixin, TimestampMixin):
    """A media file in a storage location's catalog."""

    __tablename__ = "station_media"

    unique_id = Column(String(25), nullable=False, index=True)
    storage_location_id = Column(
        Integer, ForeignKey("storage_locations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    path = Column(String(500), nullable=False)  # Relative to the storage location path

    title = Column(String(303), nullable=True, index=True)
    artist = Column(String(303), nullable=True, index=True)
    album = Column(String(200), nullable=True)
    genre = Column(String(30), nullable=True)
    isrc = Column(String(15), nullable=True)
    lyrics = Column(Text, nullable=True)

    __table_args__ = (
        UniqueConstraint('storage_location_id', 'path', name='uq_station_media_location_path'),
    )

    # Relationships
    storage_location = relationship("StorageLocation", back_populates="media")
    playlists = relationship("StationPlaylistMedia", back_populates="media", cascade="all, delete-orphan")

    @property
    def text(self) -> str:
        """Display text in the "artist - title" form."""
        if self.artist:
            return f"{self.artist} - {self.title or ''}"
        return self.title or ""

    def __repr__(self) -> str:
        return f"<StationMedia(id={self.id}, unique_id='{self.unique_id}', title='{self.title}')>"
