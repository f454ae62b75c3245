from io import StringIO
from unittest.mock import patch

from stor_och_liten.cli import _handle, _print_view
from stor_och_liten.google_search import SearchRequestError
from stor_och_liten.models import PLACEHOLDER_IMAGE_URL, ResultItem, ResultPage
from stor_och_liten.view import SearchView


def _page(total: int) -> ResultPage:
    return ResultPage(
        items=[
            ResultItem(title="Set A", link="https://x/1", snippet="A test snippet"),
            ResultItem(title="Set B", link="https://x/2", snippet="", image_url="https://img/b.jpg"),
        ],
        total_results=total,
    )


def _output(view: SearchView) -> str:
    with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
        _print_view(view, PLACEHOLDER_IMAGE_URL)
        return mock_stdout.getvalue()


class TestHandle:
    async def test_text_submits_search(self, stub_searcher, test_settings):
        stub_searcher.queue(_page(2))
        view = SearchView(stub_searcher, settings=test_settings)
        await _handle(view, "lego city")
        assert stub_searcher.calls == [("lego city", 1)]

    async def test_next_and_previous(self, stub_searcher, test_settings):
        stub_searcher.queue(_page(30), _page(30), _page(30))
        view = SearchView(stub_searcher, settings=test_settings)
        await _handle(view, "lego")

        await _handle(view, "n")
        assert view.page == 2
        await _handle(view, "Föregående")
        assert view.page == 1
        assert [start for _, start in stub_searcher.calls] == [1, 11, 1]


class TestPrintView:
    async def test_output_format(self, stub_searcher, test_settings):
        stub_searcher.queue(_page(2))
        view = SearchView(stub_searcher, settings=test_settings)
        await view.submit_search("lego")

        output = _output(view)

        assert "Set A" in output
        assert "A test snippet" in output
        assert "Till produkten -> https://x/1" in output
        assert f"Bild: {PLACEHOLDER_IMAGE_URL}" in output
        assert "Bild: https://img/b.jpg" in output
        assert " Föregående   Sida 1 av 1   Nästa " in output

    async def test_error_is_printed_with_stale_results(self, stub_searcher, test_settings):
        stub_searcher.queue(_page(20), SearchRequestError("Network Error"))
        view = SearchView(stub_searcher, settings=test_settings)
        await view.submit_search("lego")
        await view.submit_search("duplo")

        output = _output(view)

        assert "Error: Network Error" in output
        assert "Set A" in output
        assert "[Nästa]" in output

    def test_nothing_before_first_search(self, stub_searcher, test_settings):
        view = SearchView(stub_searcher, settings=test_settings)
        assert _output(view) == ""
