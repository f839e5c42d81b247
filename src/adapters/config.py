from __future__ import annotations

import os
from dataclasses import dataclass

from src.domain.models.agency import AgencyConfig
from src.domain.models.policy import FilterPolicy

AGENCIES: dict[str, AgencyConfig] = {
    "metrovalencia": AgencyConfig(
        name="metrovalencia",
        title="Metrovalencia",
        feed_url="http://www.metrovalencia.es/google_transit_feed/google_transit.zip",
    ),
    "tramcastellon": AgencyConfig(
        name="tramcastellon",
        title="TRAM de Castelló",
        feed_url="https://gvinterbus.gva.es/estatico/gtfs.zip",
        # The regional interurban feed also carries buses; keep the TRAM operators.
        policy=FilterPolicy.from_mapping(agency_ids=("5999", "510703")),
        default_color="28a745",
    ),
    "almassora": AgencyConfig(name="almassora", title="Almassora"),
    "tramalc": AgencyConfig(name="tramalc", title="TRAM d'Alacant"),
}


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    return float(raw)


@dataclass(frozen=True, slots=True)
class FeedRuntimeConfig:
    data_dir: str
    agency_names: tuple[str, ...]
    download_timeout_s: float
    timezone: str

    @staticmethod
    def from_env() -> "FeedRuntimeConfig":
        """Read settings from the environment.

        Env vars:
          - GTFS_DATA_DIR: directory with one sub-directory per agency (default data/gtfs)
          - TRANSIT_AGENCIES: comma separated agency names (default: all known)
          - GTFS_DOWNLOAD_TIMEOUT_S: per-feed download timeout (default 60)
          - TRANSIT_TIMEZONE: zone used for "now" (default Europe/Madrid)
        """

        raw_agencies = os.getenv("TRANSIT_AGENCIES") or ""
        names = tuple(a.strip() for a in raw_agencies.split(",") if a.strip())

        return FeedRuntimeConfig(
            data_dir=(os.getenv("GTFS_DATA_DIR") or "").strip() or "data/gtfs",
            agency_names=names or tuple(AGENCIES),
            download_timeout_s=_env_float("GTFS_DOWNLOAD_TIMEOUT_S", 60.0),
            timezone=(os.getenv("TRANSIT_TIMEZONE") or "").strip() or "Europe/Madrid",
        )

    def agencies(self) -> dict[str, AgencyConfig]:
        """Registry entries for the enabled agencies; unknown names raise ValueError."""

        unknown = [n for n in self.agency_names if n not in AGENCIES]
        if unknown:
            raise ValueError(f"Unknown agencies in TRANSIT_AGENCIES: {', '.join(unknown)}")
        return {n: AGENCIES[n] for n in self.agency_names}
