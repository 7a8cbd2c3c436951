"""Pytest configuration and fixtures."""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import NullPool

from station_ondemand.main import app
from station_ondemand.models import (
    Base,
    Station,
    StationMedia,
    StationPlaylist,
    StationPlaylistMedia,
    StorageLocation,
)
from station_ondemand.services.search_index import MeilisearchService, get_search_service
from station_ondemand.shared.db import get_db
from station_ondemand.shared.settings import AppSettings


class FakeSearchPaginator:
    def __init__(self, index, phrase, params):
        self.index = index
        self.phrase = phrase
        self.params = params

    async def get_page(self, page, per_page):
        self.index.pages_requested.append((page, per_page))
        return [{"id": media_id} for media_id in self.index.hit_ids], self.index.total


class FakeSearchIndex:
    def __init__(self, hit_ids, total=None):
        self.hit_ids = hit_ids
        self.total = len(hit_ids) if total is None else total
        self.calls = []
        self.pages_requested = []

    def get_on_demand_search_paginator(self, station, phrase, params):
        self.calls.append({"station_id": station.id, "phrase": phrase, "params": params})
        return FakeSearchPaginator(self, phrase, params)


class FakeSearchService:
    """Search service that always reports support and returns fixed hits."""

    def __init__(self, hit_ids, total=None):
        self.index = FakeSearchIndex(hit_ids, total)
        self.storage_location_ids = []

    def is_supported(self):
        return True

    def get_index(self, storage_location_id):
        self.storage_location_ids.append(storage_location_id)
        return self.index


@pytest.fixture
def media_dir(tmp_path):
    path = tmp_path / "media"
    path.mkdir()
    (path / "a.mp3").write_bytes(b"ID3-song-a")
    return path


@pytest.fixture
def db_path(tmp_path, media_dir):
    """Create and seed a temporary SQLite database."""
    path = tmp_path / "ondemand.db"
    engine = create_engine(f"sqlite:///{path}")
    Base.metadata.create_all(engine)

    with Session(engine) as session:
        session.add_all([
            StorageLocation(id=1, adapter="local", path=str(media_dir)),
            StorageLocation(id=2, adapter="local", path=str(media_dir)),
        ])
        session.flush()

        session.add_all([
            Station(id=1, name="Radio One", short_name="radio_one", enable_on_demand=True,
                    media_storage_location_id=1),
            Station(id=2, name="Closed FM", short_name="closed_fm", enable_on_demand=False,
                    media_storage_location_id=2),
        ])
        session.flush()

        session.add_all([
            StationPlaylist(id=1, station_id=1, name="On Demand", is_enabled=True, include_in_on_demand=True),
            StationPlaylist(id=2, station_id=1, name="Disabled", is_enabled=False, include_in_on_demand=True),
            StationPlaylist(id=3, station_id=1, name="Rotation", is_enabled=True, include_in_on_demand=False),
            StationPlaylist(id=4, station_id=2, name="Closed", is_enabled=True, include_in_on_demand=True),
            StationPlaylist(id=5, station_id=1, name="Requests", is_enabled=True, include_in_on_demand=True),
        ])
        session.flush()

        session.add_all([
            StationMedia(id=1, unique_id="uid1", storage_location_id=1, path="a.mp3",
                         title="Song A", artist="Beta", album="First", genre="Rock"),
            StationMedia(id=2, unique_id="uid2", storage_location_id=1, path="b.mp3",
                         title="Song B", artist="Alpha", album="Second", genre="Pop"),
            StationMedia(id=3, unique_id="uid3", storage_location_id=1, path="c.mp3",
                         title="Another", artist="Alpha", album="Second", genre="Pop"),
            StationMedia(id=4, unique_id="uid4", storage_location_id=1, path="d.mp3",
                         title="Hidden Disabled", artist="Aardvark", album="Nope", genre="Jazz"),
            StationMedia(id=5, unique_id="uid5", storage_location_id=1, path="e.mp3",
                         title="Hidden Rotation", artist="Aardvark", album="Nope", genre="Jazz"),
            StationMedia(id=6, unique_id="uid6", storage_location_id=2, path="f.mp3",
                         title="Elsewhere", artist="Aardvark", album="Nope", genre="Jazz"),
            StationMedia(id=7, unique_id="uid7", storage_location_id=1, path="g.mp3",
                         title="Zed", artist="Gamma", album="Search Album", genre="Ambient"),
        ])
        session.flush()

        session.add_all([
            StationPlaylistMedia(playlist_id=1, media_id=1),
            StationPlaylistMedia(playlist_id=1, media_id=2),
            StationPlaylistMedia(playlist_id=1, media_id=3),
            StationPlaylistMedia(playlist_id=3, media_id=3),
            StationPlaylistMedia(playlist_id=2, media_id=4),
            StationPlaylistMedia(playlist_id=3, media_id=5),
            StationPlaylistMedia(playlist_id=1, media_id=6),
            StationPlaylistMedia(playlist_id=1, media_id=7),
            StationPlaylistMedia(playlist_id=5, media_id=1),
            StationPlaylistMedia(playlist_id=5, media_id=3),
        ])
        session.commit()

    engine.dispose()
    return path


@pytest.fixture
def client(db_path):
    """Test client reading the seeded database, with the search index disabled."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_search_service] = lambda: MeilisearchService(
        AppSettings(meilisearch_url=None)
    )

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def search_service():
    return FakeSearchService([7, 2, 99, 3], total=40)


@pytest.fixture
def search_client(client, search_service):
    """Test client whose listing goes through a fake search index."""
    app.dependency_overrides[get_search_service] = lambda: search_service
    return client
