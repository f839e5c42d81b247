from __future__ import annotations

from datetime import datetime

SECONDS_PER_DAY = 24 * 3600
MINUTES_PER_DAY = 24 * 60


def parse_clock_time(raw: str | None) -> int | None:
    """Parse a GTFS "HH:MM:SS" time into seconds on a single 24h clock face.

    GTFS writes post-midnight calls of a service day as 24:xx:xx, 25:xx:xx...;
    those are folded back so 25:10:00 becomes 01:10:00. Returns None for
    anything that is not a well formed time.
    """

    parts = (raw or "").strip().split(":")
    if len(parts) != 3:
        return None
    if not all(p.isascii() and p.isdigit() for p in parts):
        return None
    hh, mm, ss = (int(p) for p in parts)
    if mm > 59 or ss > 59:
        return None
    return ((hh % 24) * 3600 + mm * 60 + ss) % SECONDS_PER_DAY


def seconds_of_day(moment: datetime) -> float:
    """Wall-clock seconds since midnight of ``moment``, sub-second part included."""

    return (
        moment.hour * 3600
        + moment.minute * 60
        + moment.second
        + moment.microsecond / 1_000_000
    )
