#!/usr/bin/env python3
"""Watch a live vehicle feed from the terminal.

Polls the feed on the configured period, keeps an in-memory map in
sync and prints the route summary after every successful cycle.

Usage
-----
Set the feed URL and run::

    export MUNI_BASE_URL="https://feed.example.com"
    python scripts/watch_feed.py

Options::

    --base-url URL       Feed base URL (overrides MUNI_BASE_URL)
    --interval SECONDS   Poll period (default: MUNI_POLL_INTERVAL or 30)
    --routes 5,38R,N     Only show these routes
    --duration SECONDS   Stop after this long (0 = run until Ctrl+C)
    --legend             Print the occupancy legend first
    --verbose, -v        Enable debug logs
"""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pymuni import FeedView, InMemorySurface, MuniClient, MuniConfig, MuniConfigError, PollScheduler  # noqa: E402
from pymuni.presentation import TextPresenter, format_legend  # noqa: E402
from pymuni.state.filter import ApplyFilterText, FilterState, reduce_filter  # noqa: E402

_LOG = logging.getLogger("watch_feed")


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print live route summaries from a vehicle feed.")
    parser.add_argument("--base-url", help="Feed base URL.")
    parser.add_argument("--interval", type=float, help="Poll period in seconds.")
    parser.add_argument("--routes", default="", help="Comma-separated route ids to show.")
    parser.add_argument(
        "--duration",
        type=float,
        default=0,
        help="Maximum runtime in seconds (0 = run until Ctrl+C).",
    )
    parser.add_argument("--legend", action="store_true", help="Print the occupancy legend first.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logs.")
    return parser.parse_args()


def _build_config(args: argparse.Namespace) -> MuniConfig:
    overrides: dict[str, Any] = {}
    if args.base_url:
        overrides["base_url"] = args.base_url
    if args.interval is not None:
        overrides["poll_interval"] = args.interval
    return MuniConfig.from_env(**overrides)


async def _watch(config: MuniConfig, args: argparse.Namespace) -> None:
    surface = InMemorySurface()
    async with MuniClient(config) as client:
        initial_filter = reduce_filter(FilterState(), ApplyFilterText(args.routes))
        view = FeedView(client, surface, presenter=TextPresenter(), filter_state=initial_filter)

        async with PollScheduler(view.tick, interval=config.poll_interval):
            if args.duration > 0:
                await asyncio.sleep(args.duration)
            else:
                await asyncio.Event().wait()

        view.close()
    _LOG.info("Stopped; %d markers added, %d removed", surface.added, surface.removed)


def _main() -> int:
    args = _parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = _build_config(args)
    except MuniConfigError as exc:
        print(f"[watch] {exc}", file=sys.stderr)
        return 2

    if args.legend:
        print(format_legend())
        print()

    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(_watch(config, args))
    return 0


if __name__ == "__main__":
    raise SystemExit(_main())
