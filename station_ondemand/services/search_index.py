"""Meilisearch-backed search over a storage location's media catalog."""
from functools import lru_cache
from typing import Any, Dict, List, Optional, Tuple

import meilisearch
from fastapi.concurrency import run_in_threadpool

from ..models import Station
from ..shared.logging import get_logger
from ..shared.settings import AppSettings, app_settings

logger = get_logger(__name__)


class OnDemandSearchPaginator:
    """Ordered, paginated source of search hits for one station's on-demand catalog.

    Hits only carry the media ``id``; callers hydrate them from the database.
    """

    def __init__(
        self,
        index: "meilisearch.index.Index",
        phrase: str,
        search_params: Dict[str, Any],
        max_hits: int,
    ):
        self.index = index
        self.phrase = phrase
        self.search_params = search_params
        self.max_hits = max_hits

    async def get_page(self, page: int, per_page: Optional[int]) -> Tuple[List[Dict[str, Any]], int]:
        """
        Run the search for one page.

        Args:
            page: 1-based page number
            per_page: Hits per page, or None to fetch the whole result set

        Returns:
            Tuple of (hits in index order, total hit count)
        """
        params = dict(self.search_params)
        if per_page is None:
            params["limit"] = self.max_hits
            params["offset"] = 0
        else:
            params["page"] = page
            params["hitsPerPage"] = per_page

        response = await run_in_threadpool(self.index.search, self.phrase, params)

        hits = list(response.get("hits", []))
        total = response.get("totalHits", response.get("estimatedTotalHits", len(hits)))

        logger.info(
            "search_index_page_fetched",
            index=self.index.uid,
            phrase=self.phrase,
            page=page,
            per_page=per_page,
            hits=len(hits),
            total=total,
        )
        return hits, total


class MediaSearchIndex:
    """Search index for a single storage location."""

    def __init__(self, index: "meilisearch.index.Index", max_hits: int):
        self.index = index
        self.max_hits = max_hits

    @staticmethod
    def on_demand_filter(station: Station) -> str:
        return f"station_{station.id}_on_demand = true"

    def get_on_demand_search_paginator(
        self,
        station: Station,
        phrase: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> OnDemandSearchPaginator:
        """Build a paginator over the station's on-demand media matching ``phrase``."""
        search_params: Dict[str, Any] = {
            "filter": [self.on_demand_filter(station)],
            "attributesToRetrieve": ["id"],
        }
        search_params.update(params or {})

        return OnDemandSearchPaginator(self.index, phrase, search_params, self.max_hits)


class MeilisearchService:
    """Entry point to the optional Meilisearch backend."""

    def __init__(self, settings: AppSettings):
        self.settings = settings
        self._client: Optional[meilisearch.Client] = None
        if settings.search_configured:
            self._client = meilisearch.Client(settings.meilisearch_url, settings.meilisearch_api_key)

    def is_supported(self) -> bool:
        """Whether on-demand listing should go through the search index."""
        return self._client is not None and self.settings.search_enabled

    def index_uid(self, storage_location_id: int) -> str:
        return f"{self.settings.meilisearch_index_prefix}_{storage_location_id}"

    def get_index(self, storage_location_id: int) -> MediaSearchIndex:
        """Get the search index for a storage location."""
        if self._client is None:
            raise RuntimeError("Meilisearch is not configured")

        index = self._client.index(self.index_uid(storage_location_id))
        return MediaSearchIndex(index, self.settings.search_max_hits)


@lru_cache
def get_search_service() -> MeilisearchService:
    """Get the process-wide search service (FastAPI dependency)."""
    return MeilisearchService(app_settings)
