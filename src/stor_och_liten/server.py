from __future__ import annotations

import logging
import uuid
from collections import OrderedDict
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

import httpx
import uvicorn
from fastapi import FastAPI, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from stor_och_liten.config import settings
from stor_och_liten.google_search import GoogleSearchClient, SearchRequestError, start_offset
from stor_och_liten.models import ErrorResponse, HealthResponse, SearchResponse
from stor_och_liten.view import SearchView, last_page, too_short_message

logger = logging.getLogger(__name__)

SESSION_COOKIE = "sol_session"

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    async with httpx.AsyncClient() as client:
        searcher = GoogleSearchClient(client)
        searcher.check_config()
        app.state.searcher = searcher
        app.state.views = OrderedDict()
        yield
    logger.info("Search client closed")


app = FastAPI(title="Lego från Stor&Liten", lifespan=lifespan)


def _session_view(request: Request) -> tuple[str, SearchView]:
    views: OrderedDict[str, SearchView] = app.state.views
    session_id = request.cookies.get(SESSION_COOKIE)
    if session_id is not None and session_id in views:
        views.move_to_end(session_id)
        return session_id, views[session_id]

    session_id = uuid.uuid4().hex
    views[session_id] = SearchView(app.state.searcher)
    logger.debug("New search session %s", session_id)
    # least recently used sessions go first
    while len(views) > settings.max_sessions:
        evicted, _ = views.popitem(last=False)
        logger.debug("Evicted search session %s", evicted)
    return session_id, views[session_id]


def _with_session(response: Response, session_id: str) -> Response:
    response.set_cookie(SESSION_COOKIE, session_id, httponly=True, samesite="lax")
    return response


@app.get("/", response_class=HTMLResponse)
async def index(request: Request) -> Response:
    session_id, view = _session_view(request)
    response = templates.TemplateResponse(
        request,
        "search.html",
        {"view": view, "placeholder": settings.placeholder_image},
    )
    return _with_session(response, session_id)


@app.get("/search")
async def submit_search(request: Request, q: str = Query(default="")) -> Response:
    session_id, view = _session_view(request)
    await view.submit_search(q)
    return _with_session(RedirectResponse("/", status_code=303), session_id)


@app.get("/page")
async def change_page(request: Request, page: int = Query(...)) -> Response:
    session_id, view = _session_view(request)
    await view.change_page(page)
    target = "/#top" if view.consume_scroll() else "/"
    return _with_session(RedirectResponse(target, status_code=303), session_id)


@app.get(
    "/api/search",
    response_model=SearchResponse,
    responses={422: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def api_search(
    query: str = Query(..., min_length=1),
    page: int = Query(default=1, ge=1),
) -> SearchResponse | JSONResponse:
    if len(query.strip()) <= settings.min_query_length:
        return JSONResponse(status_code=422, content={"detail": too_short_message(settings.min_query_length)})

    start = start_offset(page, settings.results_per_page)
    try:
        result = await app.state.searcher.search(query, start)
    except SearchRequestError as exc:
        return JSONResponse(status_code=502, content={"detail": str(exc)})
    except Exception as exc:
        logger.exception("Unexpected error during search")
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    return SearchResponse(
        query=query,
        page=page,
        start=start,
        last_page=last_page(result.total_results, settings.results_per_page),
        total_results=result.total_results,
        results=result.items,
    )


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        configured=bool(settings.google_api_key and settings.google_cx),
    )


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run(app, host=settings.host, port=settings.port)
