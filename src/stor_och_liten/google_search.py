from __future__ import annotations

import logging
from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from stor_och_liten.config import Settings, settings as default_settings
from stor_och_liten.models import ResultItem, ResultPage

logger = logging.getLogger(__name__)


class SearchRequestError(Exception):
    pass


class Searcher(Protocol):
    async def search(self, query: str, start: int) -> ResultPage: ...


def start_offset(page: int, per_page: int = 10) -> int:
    return (page - 1) * per_page + 1


def _first_src(pagemap: dict[str, Any], key: str) -> str | None:
    entries = pagemap.get(key)
    if not isinstance(entries, list) or not entries:
        return None
    first = entries[0]
    if not isinstance(first, dict):
        return None
    return first.get("src") or None


def _pick_image(pagemap: dict[str, Any] | None) -> str | None:
    """cse_image wins over cse_thumbnail; None means the placeholder is shown."""
    if not pagemap:
        return None
    return _first_src(pagemap, "cse_image") or _first_src(pagemap, "cse_thumbnail")


def _map_item(raw: dict[str, Any]) -> ResultItem:
    return ResultItem(
        title=raw.get("title", ""),
        link=raw.get("link", ""),
        snippet=raw.get("snippet", ""),
        image_url=_pick_image(raw.get("pagemap")),
        display_link=raw.get("displayLink"),
    )


def _api_error_message(resp: httpx.Response) -> str | None:
    """Google reports quota and key problems as {"error": {"message": ...}}."""
    try:
        body = resp.json()
    except ValueError:
        return None
    if not isinstance(body, dict) or not isinstance(body.get("error"), dict):
        return None
    return body["error"].get("message")


def parse_response(data: Any) -> ResultPage:
    if not isinstance(data, dict):
        raise SearchRequestError("Malformed search response")

    if "error" in data:
        error = data.get("error")
        if isinstance(error, dict) and error.get("message"):
            raise SearchRequestError(str(error["message"]))
        raise SearchRequestError(f"Unknown API error: {error}")

    items = data.get("items")
    if not items:
        raise SearchRequestError("No search results")

    try:
        total = int(data["searchInformation"]["totalResults"])
    except (KeyError, TypeError, ValueError) as exc:
        raise SearchRequestError(f"Malformed search response: {exc}") from exc

    if not isinstance(items, list):
        raise SearchRequestError("Malformed search response: items is not a list")
    try:
        mapped = [_map_item(item) for item in items]
    except (ValidationError, AttributeError, TypeError) as exc:
        logger.warning("Malformed search item: %s", exc)
        raise SearchRequestError("Malformed search response: invalid result item") from exc

    return ResultPage(items=mapped, total_results=total)


class GoogleSearchClient:
    def __init__(
        self,
        client: httpx.AsyncClient,
        settings: Settings | None = None,
    ) -> None:
        self._client = client
        self._settings = settings or default_settings

    def check_config(self) -> bool:
        if not self._settings.google_api_key or not self._settings.google_cx:
            logger.warning("Google search is missing SOL_GOOGLE_API_KEY or SOL_GOOGLE_CX")
            return False
        return True

    def build_params(self, query: str, start: int) -> dict[str, str | int]:
        return {
            "q": query,
            "key": self._settings.google_api_key,
            "cx": self._settings.google_cx,
            "siteSearch": self._settings.site_search,
            "start": start,
        }

    async def search(self, query: str, start: int) -> ResultPage:
        s = self._settings
        try:
            resp = await self._client.get(
                s.search_endpoint,
                params=self.build_params(query, start),
                timeout=s.request_timeout,
            )
            if not resp.is_success:
                message = _api_error_message(resp)
                if message:
                    raise SearchRequestError(message)
                resp.raise_for_status()
            data = resp.json()
        except SearchRequestError:
            raise
        except httpx.HTTPError as exc:
            raise SearchRequestError(str(exc)) from exc
        except ValueError as exc:
            raise SearchRequestError(f"Malformed search response: {exc}") from exc

        logger.debug("Search response for %r: %s", query, data)
        page = parse_response(data)
        logger.info("Found %d results (of %d) for query: %s", len(page.items), page.total_results, query)
        return page
