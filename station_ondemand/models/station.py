"""Station model."""
from sqlalchemy import Boolean, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from .base import Base, IdMixin, TimestampMixin


class Station(Base, IdMixin, TimestampMixin):
    """A broadcasting station with its media storage location."""

    __tablename__ = "stations"

    name = Column(String(255), nullable=False)
    short_name = Column(String(100), nullable=False, unique=True, index=True)
    enable_on_demand = Column(Boolean, nullable=False, default=False)
    media_storage_location_id = Column(
        Integer, ForeignKey("storage_locations.id", ondelete="RESTRICT"), nullable=False, index=True
    )

    # Relationships
    media_storage_location = relationship("StorageLocation")
    playlists = relationship("StationPlaylist", back_populates="station", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<Station(id={self.id}, short_name='{self.short_name}', enable_on_demand={self.enable_on_demand})>"
