from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from src.domain.algorithms.clock import parse_clock_time
from src.domain.models.departures import IndexedDeparture
from src.domain.models.feed import Route, StopTime, Trip

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FeedIndex:
    """Lookup structures built once per load.

    Treat as read-only; a changed feed gets a freshly built index.
    """

    route_by_id: dict[str, Route] = field(default_factory=dict)
    trips_by_route: dict[str, tuple[Trip, ...]] = field(default_factory=dict)
    departures_by_stop: dict[str, tuple[IndexedDeparture, ...]] = field(
        default_factory=dict
    )
    stop_times_by_trip: dict[str, tuple[StopTime, ...]] = field(default_factory=dict)

    def departures_at(self, stop_id: str) -> tuple[IndexedDeparture, ...]:
        return self.departures_by_stop.get(stop_id, ())

    def trips_for(self, route_id: str) -> tuple[Trip, ...]:
        return self.trips_by_route.get(route_id, ())


def build_index(
    routes: Iterable[Route], trips: Iterable[Trip], stop_times: Iterable[StopTime]
) -> FeedIndex:
    """Join stop_times -> trips -> routes into per-stop departure lists.

    Stop times whose trip or route cannot be resolved, or whose departure time
    is malformed, are left out.
    """

    route_by_id: dict[str, Route] = {}
    for route in routes:
        route_by_id[route.route_id] = route

    trip_by_id: dict[str, Trip] = {}
    trips_by_route: dict[str, list[Trip]] = {}
    for trip in trips:
        trip_by_id[trip.trip_id] = trip
        trips_by_route.setdefault(trip.route_id, []).append(trip)

    departures: dict[str, list[IndexedDeparture]] = {}
    by_trip: dict[str, list[StopTime]] = {}
    dangling = 0
    malformed = 0
    for st in stop_times:
        trip = trip_by_id.get(st.trip_id)
        route = route_by_id.get(trip.route_id) if trip is not None else None
        if trip is None or route is None:
            dangling += 1
            continue

        by_trip.setdefault(st.trip_id, []).append(st)

        dep_s = parse_clock_time(st.departure_time)
        if dep_s is None:
            malformed += 1
            continue

        departures.setdefault(st.stop_id, []).append(
            IndexedDeparture(
                route_short_name=route.short_name or "",
                route_long_name=route.long_name or "",
                departure_time=st.departure_time,
                departure_s=dep_s,
            )
        )

    if dangling or malformed:
        logger.debug(
            "Skipped %d dangling and %d malformed stop_times", dangling, malformed
        )

    return FeedIndex(
        route_by_id=route_by_id,
        trips_by_route={k: tuple(v) for k, v in trips_by_route.items()},
        departures_by_stop={k: tuple(v) for k, v in departures.items()},
        stop_times_by_trip={
            k: tuple(sorted(v, key=lambda st: st.stop_sequence))
            for k, v in by_trip.items()
        },
    )
