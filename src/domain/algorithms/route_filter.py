from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from src.domain.models.feed import Feed, Route, Stop, StopTime, Trip
from src.domain.models.policy import FilterPolicy


@dataclass(frozen=True, slots=True)
class FilteredFeed:
    """A feed restricted to the routes an agency policy lets through.

    ``stops`` and ``shapes`` are the source tables unchanged; use
    :func:`visible_stops` to get the stops to display.
    """

    feed: Feed
    policy: FilterPolicy
    routes: tuple[Route, ...]
    trips: tuple[Trip, ...]
    stop_times: tuple[StopTime, ...]


def _matches(route: Route, policy: FilterPolicy) -> bool:
    if policy.agency_ids is not None and route.agency_id not in policy.agency_ids:
        return False
    if policy.route_ids is not None and route.route_id not in policy.route_ids:
        return False
    if (
        policy.route_short_names is not None
        and route.short_name not in policy.route_short_names
    ):
        return False
    return True


def apply_policy(routes: Iterable[Route], policy: FilterPolicy) -> tuple[Route, ...]:
    """Routes allowed by ``policy``, in input order.

    An allow-list that matches nothing gives an empty tuple.
    """

    if not policy.is_active:
        return tuple(routes)
    return tuple(r for r in routes if _matches(r, policy))


def filter_trips(trips: Iterable[Trip], routes: Iterable[Route]) -> tuple[Trip, ...]:
    route_ids = {r.route_id for r in routes}
    return tuple(t for t in trips if t.route_id in route_ids)


def filter_stop_times(
    stop_times: Iterable[StopTime], trips: Iterable[Trip]
) -> tuple[StopTime, ...]:
    trip_ids = {t.trip_id for t in trips}
    return tuple(st for st in stop_times if st.trip_id in trip_ids)


def filter_feed(feed: Feed, policy: FilterPolicy) -> FilteredFeed:
    if not policy.is_active:
        return FilteredFeed(
            feed=feed,
            policy=policy,
            routes=feed.routes,
            trips=feed.trips,
            stop_times=feed.stop_times,
        )

    routes = apply_policy(feed.routes, policy)
    trips = filter_trips(feed.trips, routes)
    stop_times = filter_stop_times(feed.stop_times, trips)
    return FilteredFeed(
        feed=feed,
        policy=policy,
        routes=routes,
        trips=trips,
        stop_times=stop_times,
    )


def visible_stops(filtered: FilteredFeed) -> tuple[Stop, ...]:
    """Stops to show on the map.

    With an active policy, stops no remaining stop_time calls at are hidden.
    Without one, every stop is shown even if it has no schedule data.
    """

    if not filtered.policy.is_active:
        return filtered.feed.stops

    served = {st.stop_id for st in filtered.stop_times}
    return tuple(s for s in filtered.feed.stops if s.stop_id in served)
