"""Paginator shared by listing endpoints."""
import math
from typing import Callable, Generic, List, Optional, TypeVar, Union

from fastapi import Request
from pydantic import BaseModel, ConfigDict, Field

from .services.ondemand_source import CatalogQuerySource
from .shared.logging import get_logger
from .urls import absolute_url

logger = get_logger(__name__)

T = TypeVar("T")


class PageLinks(BaseModel):
    """Navigation links for a page."""

    model_config = ConfigDict(populate_by_name=True)

    first: str
    previous: Optional[str] = None
    next: Optional[str] = None
    last: str
    self_: str = Field(..., alias="self")


class Page(BaseModel, Generic[T]):
    """A page of rows plus pagination metadata."""

    model_config = ConfigDict(populate_by_name=True)

    page: int
    per_page: int
    total: int
    total_pages: int
    links: PageLinks
    rows: List[T]


class Paginator:
    """Turns a query source into a page of postprocessed rows.

    A ``per_page`` below 1 disables pagination; the full result set is then
    returned as a bare list.
    """

    def __init__(self, page: int = 1, per_page: int = 25):
        self.current_page = max(page, 1)
        self.per_page = per_page

    @classmethod
    def from_request(cls, page: int, per_page: int) -> "Paginator":
        return cls(page=page, per_page=per_page)

    @property
    def is_disabled(self) -> bool:
        return self.per_page < 1

    def _links(self, request: Request, total_pages: int, base_url: Optional[str]) -> PageLinks:
        request_base = str(request.base_url)

        def url_for_page(page: int) -> str:
            url = str(request.url.include_query_params(page=page))
            if base_url and url.startswith(request_base):
                url = absolute_url(base_url, url[len(request_base):])
            return url

        return PageLinks(
            first=url_for_page(1),
            previous=url_for_page(self.current_page - 1) if self.current_page > 1 else None,
            next=url_for_page(self.current_page + 1) if self.current_page < total_pages else None,
            last=url_for_page(total_pages),
            self_=url_for_page(self.current_page),
        )

    async def paginate(
        self,
        source: CatalogQuerySource,
        request: Request,
        postprocessor: Callable[[object], T],
        base_url: Optional[str] = None,
    ) -> Union[Page[T], List[T]]:
        per_page = None if self.is_disabled else self.per_page
        items, total = await source.get_page(self.current_page, per_page)

        rows = [postprocessor(item) for item in items]

        if per_page is None:
            logger.info("pagination_disabled", total=total, rows=len(rows))
            return rows

        total_pages = max(1, math.ceil(total / per_page))
        return Page(
            page=self.current_page,
            per_page=per_page,
            total=total,
            total_pages=total_pages,
            links=self._links(request, total_pages, base_url),
            rows=rows,
        )
