from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .geo import GeoPoint


class BoardStatus(str, Enum):
    OK = "ok"
    NO_SERVICE = "no-service"


class DepartureTier(str, Enum):
    SOON = "soon"
    SCHEDULED = "scheduled"


@dataclass(frozen=True, slots=True)
class IndexedDeparture:
    """A stop_time pre-joined with its trip's route."""

    route_short_name: str
    route_long_name: str
    departure_time: str
    departure_s: int  # seconds from midnight, folded onto one clock face


@dataclass(frozen=True, slots=True)
class DepartureItem:
    line: str
    name: str
    minutes_until: float
    is_imminent: bool
    label: str
    tier: DepartureTier
    departure_time: str


@dataclass(frozen=True, slots=True)
class DepartureBoard:
    status: BoardStatus
    items: tuple[DepartureItem, ...] = field(default_factory=tuple)

    @classmethod
    def no_service(cls) -> "DepartureBoard":
        return cls(status=BoardStatus.NO_SERVICE)

    @property
    def has_service(self) -> bool:
        return self.status is BoardStatus.OK


@dataclass(frozen=True, slots=True)
class RouteShape:
    route_id: str
    route_name: str
    color: str  # '#RRGGBB'
    shape_id: str
    points: tuple[GeoPoint, ...]


@dataclass(frozen=True, slots=True)
class RouteStopEntry:
    stop_id: str
    stop_name: str
    arrival_time: str
    stop_sequence: int
