"""Look up catalog entries from the command line."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Sequence

from mediacatalog.core.config import settings
from mediacatalog.ingestion import close_providers, get_provider
from mediacatalog.ingestion.errors import ProviderError
from mediacatalog.models.media import MediaLot, MediaSource

LOG_FORMAT = "%(asctime)s %(name)s [%(levelname)s] %(message)s"

logger = logging.getLogger("mediacatalog.scripts.lookup")


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(level=level or settings.log_level, format=LOG_FORMAT, force=True)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Query the MAL catalog providers")
    lots = [lot.value for lot in MediaLot]
    subparsers = parser.add_subparsers(dest="command", required=True)

    search = subparsers.add_parser("search", help="Search a catalog")
    search.add_argument("lot", choices=lots)
    search.add_argument("query")
    search.add_argument("--page", type=int, default=None)
    search.add_argument("--adult", action="store_true", help="Include adult content")

    details = subparsers.add_parser("details", help="Fetch a single catalog entry")
    details.add_argument("lot", choices=lots)
    details.add_argument("identifier")
    return parser


async def _run(args: argparse.Namespace) -> str:
    provider = get_provider(MediaSource.MAL, MediaLot(args.lot))
    try:
        if args.command == "search":
            result = await provider.search(args.query, page=args.page, show_adult_content=args.adult)
        else:
            result = await provider.fetch_details(args.identifier)
    finally:
        await close_providers()
    return result.model_dump_json(indent=2)


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging()
    try:
        output = asyncio.run(_run(args))
    except ProviderError as exc:
        logger.error("Lookup failed: %s", exc)
        print(str(exc), file=sys.stderr)
        return 1
    print(output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
