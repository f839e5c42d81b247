from __future__ import annotations

import io
import logging
import os
import shutil
import tempfile
import zipfile
from dataclasses import dataclass
from pathlib import Path

import httpx

from src.app.ports.output import IFeedDownloader
from src.domain.models.agency import AgencyConfig

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class HttpFeedDownloader(IFeedDownloader):
    """Downloads an agency's GTFS ZIP and unpacks it into ``<base>/<agency>``.

    Env vars:
      - GTFS_DATA_DIR: root directory (default data/gtfs)
      - GTFS_DOWNLOAD_TIMEOUT_S: request timeout (default 60)

    The new files are extracted next to the old ones and swapped in only after
    every member was read, so a failed download leaves the old feed in place.
    """

    base_path: str | Path | None = None
    timeout_s: float | None = None
    transport: httpx.BaseTransport | None = None

    def _base(self) -> Path:
        value = self.base_path or os.getenv("GTFS_DATA_DIR") or "data/gtfs"
        return Path(value)

    def _timeout(self) -> float:
        if self.timeout_s is not None:
            return self.timeout_s
        return float(os.getenv("GTFS_DOWNLOAD_TIMEOUT_S") or 60.0)

    def _fetch(self, url: str) -> bytes:
        with httpx.Client(
            timeout=self._timeout(), follow_redirects=True, transport=self.transport
        ) as client:
            resp = client.get(url)
            resp.raise_for_status()
            return resp.content

    def download(self, agency: AgencyConfig) -> bool:
        if not agency.feed_url:
            logger.info("%s has no feed URL configured; skipping", agency.name)
            return False

        dest = self._base() / agency.name
        logger.info("Downloading %s feed from %s", agency.name, agency.feed_url)
        try:
            payload = self._fetch(agency.feed_url)
            with zipfile.ZipFile(io.BytesIO(payload)) as archive:
                _replace_dir(archive, dest)
        except (httpx.HTTPError, zipfile.BadZipFile, OSError) as exc:
            logger.error("Could not update %s feed: %s", agency.name, exc)
            return False

        logger.info("%s feed updated in %s", agency.name, dest)
        return True


def _replace_dir(archive: zipfile.ZipFile, dest: Path) -> None:
    """Extract next to ``dest`` and swap it in only once every member was read."""

    dest.parent.mkdir(parents=True, exist_ok=True)
    staging = Path(tempfile.mkdtemp(prefix=f".{dest.name}-", dir=dest.parent))
    try:
        _extract_flat(archive, staging)
        if dest.exists():
            retired = Path(tempfile.mkdtemp(prefix=f".{dest.name}-old-", dir=dest.parent))
            os.replace(dest, retired / dest.name)
            os.replace(staging, dest)
            shutil.rmtree(retired, ignore_errors=True)
        else:
            os.replace(staging, dest)
    finally:
        if staging.exists():
            shutil.rmtree(staging, ignore_errors=True)


def _extract_flat(archive: zipfile.ZipFile, dest: Path) -> None:
    # Some publishers nest the .txt files in a folder; keep only the file names.
    for info in archive.infolist():
        if info.is_dir():
            continue
        name = Path(info.filename).name
        if not name or name.startswith("."):
            continue
        with archive.open(info) as src, (dest / name).open("wb") as out:
            shutil.copyfileobj(src, out)
