"""StorageLocation model."""
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from .base import Base, IdMixin, TimestampMixin


class StorageLocation(Base, IdMixin, TimestampMixin):
    """A namespace holding media files, shared by the stations that point at it."""

    __tablename__ = "storage_locations"

    adapter = Column(String(50), nullable=False, default="local")
    path = Column(String(1024), nullable=False)

    # Relationships
    media = relationship("StationMedia", back_populates="storage_location", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<StorageLocation(id={self.id}, adapter='{self.adapter}', path='{self.path}')>"
