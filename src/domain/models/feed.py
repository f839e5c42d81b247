from __future__ import annotations

from dataclasses import dataclass

from .geo import GeoPoint

DEFAULT_ROUTE_COLOR = "000000"


@dataclass(frozen=True, slots=True)
class Stop:
    stop_id: str
    name: str
    location: GeoPoint


@dataclass(frozen=True, slots=True)
class Route:
    """Subset of GTFS routes.txt used for display."""

    route_id: str
    short_name: str | None = None
    long_name: str | None = None
    color: str | None = None  # hex without '#', per GTFS
    agency_id: str | None = None

    @property
    def display_name(self) -> str:
        return self.short_name or self.long_name or self.route_id

    @property
    def color_or_default(self) -> str:
        return self.color or DEFAULT_ROUTE_COLOR


@dataclass(frozen=True, slots=True)
class Trip:
    trip_id: str
    route_id: str
    shape_id: str | None = None
    direction_id: int | None = None


@dataclass(frozen=True, slots=True)
class StopTime:
    """A scheduled call of one trip at one stop.

    Times are kept as the raw "HH:MM:SS" strings from the feed; they are
    validated when the index is built.
    """

    trip_id: str
    stop_id: str
    arrival_time: str
    departure_time: str
    stop_sequence: int


@dataclass(frozen=True, slots=True)
class ShapePoint:
    shape_id: str
    sequence: int
    location: GeoPoint


@dataclass(frozen=True, slots=True)
class Feed:
    """One agency's static schedule tables, as parsed records."""

    agency: str
    routes: tuple[Route, ...] = ()
    trips: tuple[Trip, ...] = ()
    stops: tuple[Stop, ...] = ()
    stop_times: tuple[StopTime, ...] = ()
    shapes: tuple[ShapePoint, ...] = ()

    @classmethod
    def empty(cls, agency: str) -> "Feed":
        return cls(agency=agency)

    @property
    def row_count(self) -> int:
        return (
            len(self.routes)
            + len(self.trips)
            + len(self.stops)
            + len(self.stop_times)
            + len(self.shapes)
        )
