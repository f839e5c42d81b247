from __future__ import annotations

import logging
import math
from typing import Callable, Iterable, Mapping, TypeVar

from src.domain.models.feed import (
    Feed,
    Route,
    ShapePoint,
    Stop,
    StopTime,
    Trip,
)
from src.domain.models.geo import GeoPoint

logger = logging.getLogger(__name__)

Row = Mapping[str, str | None]
T = TypeVar("T")

TABLES = ("routes", "trips", "stops", "stop_times", "shapes")


def clean_field(raw: str | None) -> str:
    """Strip whitespace and stray double quotes left by naive CSV exports."""

    if raw is None:
        return ""
    return raw.replace('"', "").strip()


def _optional(row: Row, key: str) -> str | None:
    return clean_field(row.get(key)) or None


def parse_coordinate(raw: str | None) -> float | None:
    value = "".join(clean_field(raw).split())
    if not value:
        return None
    try:
        out = float(value)
    except ValueError:
        return None
    if not math.isfinite(out):
        return None
    return out


def _parse_int(raw: str | None) -> int | None:
    value = clean_field(raw)
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        try:
            # Some exporters write sequences as "3.0".
            as_float = float(value)
        except ValueError:
            return None
        if not as_float.is_integer():
            return None
        return int(as_float)


def _parse_location(lat_raw: str | None, lon_raw: str | None) -> GeoPoint | None:
    lat = parse_coordinate(lat_raw)
    lon = parse_coordinate(lon_raw)
    if lat is None or lon is None:
        return None
    try:
        return GeoPoint(lat=lat, lon=lon)
    except ValueError:
        return None


def parse_stop(row: Row) -> Stop | None:
    stop_id = clean_field(row.get("stop_id"))
    if not stop_id:
        return None
    location = _parse_location(row.get("stop_lat"), row.get("stop_lon"))
    if location is None:
        return None
    name = clean_field(row.get("stop_name")) or stop_id
    return Stop(stop_id=stop_id, name=name, location=location)


def parse_route(row: Row) -> Route | None:
    route_id = clean_field(row.get("route_id"))
    if not route_id:
        return None
    color = clean_field(row.get("route_color")).lstrip("#") or None
    return Route(
        route_id=route_id,
        short_name=_optional(row, "route_short_name"),
        long_name=_optional(row, "route_long_name"),
        color=color,
        agency_id=_optional(row, "agency_id"),
    )


def parse_trip(row: Row) -> Trip | None:
    trip_id = clean_field(row.get("trip_id"))
    route_id = clean_field(row.get("route_id"))
    if not trip_id or not route_id:
        return None
    direction = _parse_int(row.get("direction_id"))
    return Trip(
        trip_id=trip_id,
        route_id=route_id,
        shape_id=_optional(row, "shape_id"),
        direction_id=direction if direction in (0, 1) else None,
    )


def parse_stop_time(row: Row) -> StopTime | None:
    trip_id = clean_field(row.get("trip_id"))
    stop_id = clean_field(row.get("stop_id"))
    if not trip_id or not stop_id:
        return None
    seq = _parse_int(row.get("stop_sequence"))
    return StopTime(
        trip_id=trip_id,
        stop_id=stop_id,
        arrival_time=clean_field(row.get("arrival_time")),
        departure_time=clean_field(row.get("departure_time")),
        stop_sequence=seq if seq is not None else 0,
    )


def parse_shape_point(row: Row) -> ShapePoint | None:
    shape_id = clean_field(row.get("shape_id"))
    if not shape_id:
        return None
    seq = _parse_int(row.get("shape_pt_sequence"))
    if seq is None:
        return None
    location = _parse_location(row.get("shape_pt_lat"), row.get("shape_pt_lon"))
    if location is None:
        return None
    return ShapePoint(shape_id=shape_id, sequence=seq, location=location)


def _parse_table(
    name: str, rows: Iterable[Row], parser: Callable[[Row], T | None]
) -> tuple[T, ...]:
    out: list[T] = []
    dropped = 0
    for row in rows:
        record = parser(row)
        if record is None:
            dropped += 1
            continue
        out.append(record)
    if dropped:
        logger.debug("Dropped %d malformed rows from %s", dropped, name)
    return tuple(out)


def build_feed(agency: str, tables: Mapping[str, Iterable[Row]]) -> Feed:
    """Build a typed Feed from field-named rows keyed by table name.

    Tables missing from ``tables`` become empty. Malformed rows are dropped.
    """

    return Feed(
        agency=agency,
        routes=_parse_table("routes", tables.get("routes", ()), parse_route),
        trips=_parse_table("trips", tables.get("trips", ()), parse_trip),
        stops=_parse_table("stops", tables.get("stops", ()), parse_stop),
        stop_times=_parse_table(
            "stop_times", tables.get("stop_times", ()), parse_stop_time
        ),
        shapes=_parse_table("shapes", tables.get("shapes", ()), parse_shape_point),
    )
