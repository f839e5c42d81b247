from __future__ import annotations

import csv
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from src.app.ports.output import IFeedRepository
from src.domain.algorithms.records import TABLES, build_feed
from src.domain.models.feed import Feed

logger = logging.getLogger(__name__)


def read_table(path: Path) -> list[dict[str, str]]:
    """Rows of a GTFS .txt file keyed by (stripped) header name."""

    # utf-8-sig: several Spanish operators publish files with a BOM.
    with path.open("r", encoding="utf-8-sig", newline="") as fp:
        reader = csv.DictReader(fp)
        if reader.fieldnames is None:
            return []
        reader.fieldnames = [name.strip() for name in reader.fieldnames]
        return list(reader)


@dataclass(slots=True)
class LocalFeedRepository(IFeedRepository):
    """Loads agency feeds from ``<base>/<agency>/*.txt``.

    Env vars:
      - GTFS_DATA_DIR: root directory (default data/gtfs)

    A missing or unreadable table is logged and treated as empty, so one bad
    file never blocks the rest of the feed.
    """

    base_path: str | Path | None = None

    def _base(self) -> Path:
        value = self.base_path or os.getenv("GTFS_DATA_DIR") or "data/gtfs"
        return Path(value)

    def load_feed(self, agency: str) -> Feed:
        agency_dir = self._base() / agency
        tables: dict[str, list[dict[str, str]]] = {}
        for table in TABLES:
            path = agency_dir / f"{table}.txt"
            if not path.exists():
                logger.warning("%s: %s not found", agency, path)
                continue
            try:
                tables[table] = read_table(path)
            except (OSError, UnicodeDecodeError, csv.Error) as exc:
                logger.warning("%s: could not read %s: %s", agency, path, exc)

        feed = build_feed(agency, tables)
        logger.info("Loaded %s feed: %d rows", agency, feed.row_count)
        return feed
