from __future__ import annotations

import io
import zipfile
from pathlib import Path

import httpx

from src.adapters.feeds.http_feed_downloader import HttpFeedDownloader
from src.domain.models.agency import AgencyConfig

AGENCY = AgencyConfig(
    name="metrovalencia",
    title="Metrovalencia",
    feed_url="http://example.test/google_transit.zip",
)


def _zip_bytes(files: dict[str, str]) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as archive:
        for name, content in files.items():
            archive.writestr(name, content)
    return buf.getvalue()


def _downloader(tmp_path: Path, handler) -> HttpFeedDownloader:
    return HttpFeedDownloader(
        base_path=tmp_path, timeout_s=5.0, transport=httpx.MockTransport(handler)
    )


def test_download_replaces_agency_directory(tmp_path: Path) -> None:
    stale = tmp_path / "metrovalencia" / "old.txt"
    stale.parent.mkdir(parents=True)
    stale.write_text("stale", encoding="utf-8")

    payload = _zip_bytes(
        {"gtfs/stops.txt": "stop_id\n1\n", "routes.txt": "route_id\n1\n"}
    )

    def handler(request: httpx.Request) -> httpx.Response:
        assert str(request.url) == AGENCY.feed_url
        return httpx.Response(200, content=payload)

    assert _downloader(tmp_path, handler).download(AGENCY) is True

    dest = tmp_path / "metrovalencia"
    assert sorted(p.name for p in dest.iterdir()) == ["routes.txt", "stops.txt"]
    assert (dest / "stops.txt").read_text(encoding="utf-8") == "stop_id\n1\n"


def test_failed_download_keeps_previous_files(tmp_path: Path) -> None:
    existing = tmp_path / "metrovalencia" / "stops.txt"
    existing.parent.mkdir(parents=True)
    existing.write_text("stop_id\n1\n", encoding="utf-8")

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    assert _downloader(tmp_path, handler).download(AGENCY) is False
    assert existing.read_text(encoding="utf-8") == "stop_id\n1\n"


def test_corrupt_archive_is_reported(tmp_path: Path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>not a zip</html>")

    assert _downloader(tmp_path, handler).download(AGENCY) is False
    assert not (tmp_path / "metrovalencia").exists()


def test_agency_without_url_is_skipped(tmp_path: Path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    agency = AgencyConfig(name="tramalc", title="TRAM d'Alacant")

    assert _downloader(tmp_path, handler).download(agency) is False


def test_archive_failing_crc_keeps_previous_files(tmp_path: Path) -> None:
    existing = tmp_path / "metrovalencia" / "stops.txt"
    existing.parent.mkdir(parents=True)
    existing.write_text("stop_id\nold\n", encoding="utf-8")

    good = _zip_bytes({"routes.txt": "route_id\n1\n", "stops.txt": "stop_id\nAAA\n"})
    # Stored members keep their bytes verbatim; changing one breaks its CRC.
    corrupt = good.replace(b"stop_id\nAAA\n", b"stop_id\nBBB\n")
    assert corrupt != good

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=corrupt)

    assert _downloader(tmp_path, handler).download(AGENCY) is False
    assert existing.read_text(encoding="utf-8") == "stop_id\nold\n"
    assert [p.name for p in tmp_path.iterdir()] == ["metrovalencia"]
    assert [p.name for p in existing.parent.iterdir()] == ["stops.txt"]
