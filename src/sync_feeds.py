from __future__ import annotations

import argparse
import logging

from src.adapters.config import FeedRuntimeConfig
from src.adapters.feeds.http_feed_downloader import HttpFeedDownloader


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Download static GTFS feeds.")
    parser.add_argument(
        "agencies",
        nargs="*",
        help="Agencies to refresh (default: TRANSIT_AGENCIES or all).",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    cfg = FeedRuntimeConfig.from_env()
    registry = cfg.agencies()
    names = args.agencies or list(registry)
    unknown = [n for n in names if n not in registry]
    if unknown:
        parser.error(f"unknown agencies: {', '.join(unknown)}")

    downloader = HttpFeedDownloader(
        base_path=cfg.data_dir, timeout_s=cfg.download_timeout_s
    )
    failures = 0
    for name in names:
        agency = registry[name]
        if agency.feed_url and not downloader.download(agency):
            failures += 1
    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
