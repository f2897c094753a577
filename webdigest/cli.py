"""Command-line entry point: ``webdigest scrape|search|ask``.

Examples::

    webdigest scrape https://example.com https://example.org -c 2
    webdigest search "python asyncio" -m 5
    webdigest ask "Summarise the difference between HTTP/1.1 and HTTP/2"

Results are written to stdout as JSON; logs go to stderr.
"""

import argparse
import asyncio
import json
import sys
from typing import List, Optional, Sequence

from pydantic import BaseModel

from webdigest.logging_config import setup_logging
from webdigest.models.request import DEFAULT_MAX_CONCURRENT, ScrapeOptions
from webdigest.models.search import SearchOptions
from webdigest.services.llm import DEFAULT_MODEL, query_llm
from webdigest.services.scraper import scrape_urls
from webdigest.services.search import search


def _dump(records: List[BaseModel]) -> str:
    return json.dumps(
        [r.model_dump(exclude_none=True) for r in records], indent=2, ensure_ascii=False
    )


async def _run_scrape(args: argparse.Namespace) -> None:
    results = await scrape_urls(args.urls, ScrapeOptions(max_concurrent=args.concurrent))
    print(_dump(results))


async def _run_search(args: argparse.Namespace) -> None:
    options = SearchOptions(max_results=args.max_results, timeout_ms=args.timeout)
    results = await search(args.query, options)
    print(_dump(results))


async def _run_ask(args: argparse.Namespace) -> None:
    response = await query_llm(args.prompt, args.model)
    if response.error:
        raise RuntimeError(response.error)
    print(response.content)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="webdigest",
        description="Web scraping, search, and LLM tools.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    scrape = subparsers.add_parser("scrape", help="Scrape content from the given URLs")
    scrape.add_argument("urls", nargs="+", help="URLs to scrape (space-separated)")
    scrape.add_argument(
        "-c",
        "--concurrent",
        type=int,
        default=DEFAULT_MAX_CONCURRENT,
        help="Maximum concurrent scraping operations (default: %(default)s)",
    )
    scrape.set_defaults(handler=_run_scrape, error_prefix="Error during scraping")

    search_cmd = subparsers.add_parser("search", help="Search using DuckDuckGo")
    search_cmd.add_argument("query", help="Search query")
    search_cmd.add_argument(
        "-m", "--max-results", type=int, default=10, help="Maximum number of results"
    )
    search_cmd.add_argument(
        "-t", "--timeout", type=int, default=10_000, help="Timeout in milliseconds"
    )
    search_cmd.set_defaults(handler=_run_search, error_prefix="Error during search")

    ask = subparsers.add_parser("ask", help="Query the LLM API")
    ask.add_argument("prompt", help="The prompt to send to the LLM")
    ask.add_argument("-m", "--model", default=DEFAULT_MODEL, help="Model to use")
    ask.set_defaults(handler=_run_ask, error_prefix="Error querying LLM")

    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    setup_logging()
    try:
        asyncio.run(args.handler(args))
    except Exception as exc:
        print(f"{args.error_prefix}: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
