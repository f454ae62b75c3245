from __future__ import annotations

import argparse
import asyncio
import logging
import sys

import httpx

from stor_och_liten.config import Settings
from stor_och_liten.google_search import GoogleSearchClient
from stor_och_liten.view import SearchView

NEXT_COMMANDS = ("n", "nästa")
PREVIOUS_COMMANDS = ("p", "föregående")
EXIT_COMMANDS = ("exit", "quit", "q")


def _print_view(view: SearchView, placeholder: str) -> None:
    if view.consume_scroll():
        print("\n" + "=" * 40)
    if view.error:
        print(f"\nError: {view.error}")
    if view.items is None:
        return

    print()
    for item in view.items:
        print(f"  {item.title}")
        print(f"     {item.snippet}")
        print(f"     Till produkten -> {item.link}")
        print(f"     Bild: {item.image_src(placeholder)}")
        print()

    prev_mark = "[Föregående]" if view.has_previous else " Föregående "
    next_mark = "[Nästa]" if view.has_next else " Nästa "
    print(f"{prev_mark}  {view.page_label}  {next_mark}")


async def _handle(view: SearchView, raw: str) -> None:
    command = raw.lower()
    if command in NEXT_COMMANDS:
        await view.next_page()
    elif command in PREVIOUS_COMMANDS:
        await view.previous_page()
    else:
        await view.submit_search(raw)


async def _run(settings: Settings) -> None:
    async with httpx.AsyncClient() as client:
        searcher = GoogleSearchClient(client, settings=settings)
        searcher.check_config()
        view = SearchView(searcher, settings=settings)

        print("Lego från Stor&Liten - type 'help' for usage, 'quit' to exit")
        while True:
            try:
                raw = input("sök> ").strip()
            except EOFError:
                break

            if not raw:
                continue
            if raw in EXIT_COMMANDS:
                break
            if raw == "help":
                print("Usage: <query> to search, n/nästa for next page, p/föregående for previous page")
                print("Commands: help, exit/quit/q")
                continue

            await _handle(view, raw)
            _print_view(view, settings.placeholder_image)


def main() -> None:
    parser = argparse.ArgumentParser(description="Stor&Liten LEGO search CLI")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log search requests and responses",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        asyncio.run(_run(Settings()))
    except KeyboardInterrupt:
        print("\nHej då!")
        sys.exit(0)
