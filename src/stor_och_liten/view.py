from __future__ import annotations

import logging
import math

from stor_och_liten.config import Settings, settings as default_settings
from stor_och_liten.google_search import Searcher, SearchRequestError, start_offset
from stor_och_liten.models import ResultItem

logger = logging.getLogger(__name__)


def too_short_message(min_length: int) -> str:
    return f"Must type more than {min_length} characters"


TOO_SHORT_MESSAGE = too_short_message(default_settings.min_query_length)


def last_page(total_results: int, per_page: int = 10) -> int:
    return math.ceil(total_results / per_page)


class SearchView:
    """State of the search page: query, page, current results and error.

    Results and the error message are replaced only by a fetch. A failed
    fetch keeps the previous results on screen next to the error.
    """

    def __init__(self, searcher: Searcher, settings: Settings | None = None) -> None:
        self._searcher = searcher
        self._settings = settings or default_settings
        self.query = ""
        self.page = 1
        self.items: list[ResultItem] | None = None
        self.total_results = 0
        self.error = ""
        self._scroll_requested = False

    @property
    def per_page(self) -> int:
        return self._settings.results_per_page

    @property
    def last_page(self) -> int:
        return last_page(self.total_results, self.per_page)

    @property
    def has_previous(self) -> bool:
        return self.page != 1

    @property
    def has_next(self) -> bool:
        return self.page * self.per_page < self.total_results

    @property
    def page_label(self) -> str:
        return f"Sida {self.page} av {self.last_page}"

    @property
    def show_pagination(self) -> bool:
        return self.items is not None

    def set_query(self, query: str) -> None:
        self.query = query

    def consume_scroll(self) -> bool:
        requested = self._scroll_requested
        self._scroll_requested = False
        return requested

    async def _fetch(self, page: int) -> bool:
        try:
            result = await self._searcher.search(self.query, start_offset(page, self.per_page))
        except SearchRequestError as exc:
            self.error = str(exc)
            return False
        except Exception as exc:
            logger.exception("Unexpected error during search")
            self.error = str(exc)
            return False

        self.items = list(result.items)
        self.total_results = result.total_results
        self.error = ""
        return True

    async def submit_search(self, query: str | None = None) -> None:
        if query is not None:
            self.set_query(query)
        if len(self.query.strip()) <= self._settings.min_query_length:
            self.error = too_short_message(self._settings.min_query_length)
            return

        if await self._fetch(1):
            self.page = 1

    async def change_page(self, new_page: int) -> None:
        self.page = max(new_page, 1)
        self._scroll_requested = True
        # Refetch threshold is 3, not the submit threshold of 2, and is
        # checked against the untrimmed query.
        if len(self.query) > self._settings.auto_refetch_min_length:
            await self._fetch(self.page)

    async def next_page(self) -> None:
        if self.has_next:
            await self.change_page(self.page + 1)

    async def previous_page(self) -> None:
        if self.has_previous:
            await self.change_page(max(self.page - 1, 1))
