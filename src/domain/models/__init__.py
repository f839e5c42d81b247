from .agency import AgencyConfig
from .departures import (
    BoardStatus,
    DepartureBoard,
    DepartureItem,
    DepartureTier,
    IndexedDeparture,
    RouteShape,
    RouteStopEntry,
)
from .feed import Feed, Route, ShapePoint, Stop, StopTime, Trip
from .geo import GeoPoint
from .policy import FilterPolicy

__all__ = [
    "AgencyConfig",
    "BoardStatus",
    "DepartureBoard",
    "DepartureItem",
    "DepartureTier",
    "Feed",
    "FilterPolicy",
    "GeoPoint",
    "IndexedDeparture",
    "Route",
    "RouteShape",
    "RouteStopEntry",
    "ShapePoint",
    "Stop",
    "StopTime",
    "Trip",
]
