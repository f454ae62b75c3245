import pytest

from stor_och_liten.config import Settings
from stor_och_liten.models import ResultPage

SAMPLE_API_RESPONSE = {
    "kind": "customsearch#search",
    "searchInformation": {"totalResults": "23"},
    "items": [
        {
            "title": "LEGO City Brandstation",
            "link": "https://www.storochliten.se/lego-city-brandstation",
            "displayLink": "www.storochliten.se",
            "snippet": "Rädda dagen med brandkåren.",
            "pagemap": {
                "cse_image": [{"src": "https://img.example/brand-large.jpg"}],
                "cse_thumbnail": [{"src": "https://img.example/brand-thumb.jpg", "width": "100", "height": "100"}],
            },
        },
        {
            "title": "LEGO Duplo Tåg",
            "link": "https://www.storochliten.se/lego-duplo-tag",
            "snippet": "Tuff tuff.",
            "pagemap": {
                "cse_thumbnail": [{"src": "https://img.example/tag-thumb.jpg"}],
            },
        },
        {
            "title": "LEGO Technic Bil",
            "link": "https://www.storochliten.se/lego-technic-bil",
            "snippet": "Bygg en bil.",
            "pagemap": {},
        },
    ],
}


class StubSearcher:
    """Records every call; replies with queued pages or raises queued errors."""

    def __init__(self, *replies):
        self.calls: list[tuple[str, int]] = []
        self._replies = list(replies)

    def queue(self, *replies):
        self._replies.extend(replies)

    async def search(self, query: str, start: int) -> ResultPage:
        self.calls.append((query, start))
        reply = self._replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        google_api_key="test-key",
        google_cx="test-cx",
        request_timeout=1.0,
    )


@pytest.fixture
def sample_api_response() -> dict:
    return SAMPLE_API_RESPONSE


@pytest.fixture
def stub_searcher() -> StubSearcher:
    return StubSearcher()

