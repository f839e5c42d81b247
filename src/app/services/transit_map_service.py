from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Mapping
from zoneinfo import ZoneInfo

from src.app.ports.output import IFeedRepository
from src.domain.algorithms.departures import query_departures
from src.domain.algorithms.indexer import FeedIndex, build_index
from src.domain.algorithms.route_filter import FilteredFeed, filter_feed, visible_stops
from src.domain.algorithms.shapes import assemble_route_shapes
from src.domain.exceptions import FeedNotLoaded, UnknownAgency
from src.domain.models.agency import AgencyConfig
from src.domain.models.departures import DepartureBoard, RouteShape, RouteStopEntry
from src.domain.models.feed import Feed, Route, Stop

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FeedSnapshot:
    """Everything derived from one agency feed load. Never mutated."""

    config: AgencyConfig
    feed: Feed
    filtered: FilteredFeed
    index: FeedIndex
    stops: tuple[Stop, ...]
    stop_by_id: dict[str, Stop]
    route_shapes: tuple[RouteShape, ...]
    direction_shapes: tuple[RouteShape, ...]

    @classmethod
    def build(cls, config: AgencyConfig, feed: Feed) -> "FeedSnapshot":
        filtered = filter_feed(feed, config.policy)
        index = build_index(filtered.routes, filtered.trips, filtered.stop_times)
        shapes = {
            per_direction: assemble_route_shapes(
                filtered.routes,
                filtered.trips,
                feed.shapes,
                per_direction=per_direction,
                default_color=config.default_color,
            )
            for per_direction in (False, True)
        }
        return cls(
            config=config,
            feed=feed,
            filtered=filtered,
            index=index,
            stops=visible_stops(filtered),
            stop_by_id={s.stop_id: s for s in feed.stops},
            route_shapes=shapes[False],
            direction_shapes=shapes[True],
        )


@dataclass(slots=True)
class TransitMapService:
    """Use cases behind the departures map.

    Holds one snapshot per agency. ``reload`` builds every new snapshot first
    and then replaces the whole mapping in one assignment, so readers see
    either the old data or the new data, never a mix.
    """

    feed_repository: IFeedRepository
    agencies_config: Mapping[str, AgencyConfig]
    timezone: str = "Europe/Madrid"
    _snapshots: dict[str, FeedSnapshot] = field(default_factory=dict, init=False)

    def agencies(self) -> tuple[str, ...]:
        return tuple(self.agencies_config)

    def is_loaded(self, agency: str) -> bool:
        return agency in self._snapshots

    def reload(self, agencies: Iterable[str] | None = None) -> None:
        names = tuple(agencies) if agencies is not None else self.agencies()
        fresh = dict(self._snapshots)
        for name in names:
            config = self._config(name)
            try:
                feed = self.feed_repository.load_feed(name)
                fresh[name] = FeedSnapshot.build(config, feed)
            except Exception:
                logger.exception("Could not load feed for %s; using an empty feed", name)
                fresh[name] = FeedSnapshot.build(config, Feed.empty(name))
            logger.info(
                "Indexed %s: %d routes, %d stops with departures",
                name,
                len(fresh[name].filtered.routes),
                len(fresh[name].index.departures_by_stop),
            )
        self._snapshots = fresh

    def snapshot(self, agency: str) -> FeedSnapshot:
        self._config(agency)
        snap = self._snapshots.get(agency)
        if snap is None:
            raise FeedNotLoaded(f"Feed for {agency!r} has not been loaded")
        return snap

    def query_departures(
        self, agency: str, stop_id: str, now: datetime | None = None
    ) -> DepartureBoard:
        snap = self.snapshot(agency)
        return query_departures(snap.index, stop_id, now or self._now())

    def stop(self, agency: str, stop_id: str) -> Stop | None:
        return self.snapshot(agency).stop_by_id.get(stop_id)

    def visible_stops(self, agency: str) -> tuple[Stop, ...]:
        return self.snapshot(agency).stops

    def filtered_routes_for_display(self, agency: str) -> tuple[Route, ...]:
        return self.snapshot(agency).filtered.routes

    def shapes_for_display(
        self, agency: str, *, per_direction: bool = False
    ) -> tuple[RouteShape, ...]:
        snap = self.snapshot(agency)
        return snap.direction_shapes if per_direction else snap.route_shapes

    def route_stop_list(self, agency: str, route_id: str) -> tuple[RouteStopEntry, ...]:
        """Stops of the route's first trip, in calling order."""

        snap = self.snapshot(agency)
        trips = snap.index.trips_for(route_id)
        if not trips:
            return ()

        out: list[RouteStopEntry] = []
        for st in snap.index.stop_times_by_trip.get(trips[0].trip_id, ()):
            stop = snap.stop_by_id.get(st.stop_id)
            if stop is None:
                continue
            out.append(
                RouteStopEntry(
                    stop_id=stop.stop_id,
                    stop_name=stop.name,
                    arrival_time=st.arrival_time,
                    stop_sequence=st.stop_sequence,
                )
            )
        return tuple(out)

    def _config(self, agency: str) -> AgencyConfig:
        config = self.agencies_config.get(agency)
        if config is None:
            raise UnknownAgency(f"Unknown agency: {agency!r}")
        return config

    def _now(self) -> datetime:
        return datetime.now(ZoneInfo(self.timezone))
