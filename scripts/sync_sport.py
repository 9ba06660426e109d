#!/usr/bin/env python3
"""
Run a one-off calendar sync for one sport.

Fetches fixtures (or race-weekend sessions), participants and standings
from the upstream provider and upserts them into the database.

Usage:
    python -m scripts.sync_sport football
    python -m scripts.sync_sport basketball --season 2025-2026
    python -m scripts.sync_sport f1 --season 2026 --verbose
"""

from __future__ import annotations

import argparse
import asyncio
import logging

from app.database import AsyncSessionLocal
from app.services.sports import SPORT_KEYS
from app.services.sync import SyncOrchestrator

LOGGER = logging.getLogger("sync_sport")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sync one sport's calendar and standings")
    parser.add_argument("sport", choices=SPORT_KEYS, help="Sport to sync")
    parser.add_argument(
        "--season",
        default=None,
        help="Season label, e.g. 2025-2026 or 2026 (default: current season)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> int:
    try:
        async with AsyncSessionLocal() as db:
            summary = await SyncOrchestrator(db).sync(args.sport, args.season)
    except Exception as exc:
        LOGGER.error("Sync of %s failed: %s", args.sport, exc)
        LOGGER.debug("Traceback", exc_info=True)
        return 1

    for key, value in summary.items():
        LOGGER.info("  %s: %s", key, value)
    return 0


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )
    raise SystemExit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
