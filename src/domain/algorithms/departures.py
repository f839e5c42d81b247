from __future__ import annotations

import math
from datetime import datetime

from src.domain.algorithms.clock import MINUTES_PER_DAY, seconds_of_day
from src.domain.algorithms.indexer import FeedIndex
from src.domain.models.departures import (
    BoardStatus,
    DepartureBoard,
    DepartureItem,
    DepartureTier,
    IndexedDeparture,
)

MAX_ITEMS = 5
SOON_ITEMS = 2
IMMINENT_MINUTES = 1.0


def minutes_until(departure_s: int, now: datetime) -> float:
    """Minutes from ``now`` to the next daily occurrence of ``departure_s``.

    A time already gone today counts as tomorrow's, so the result is in
    [0, 1440).
    """

    diff = (departure_s - seconds_of_day(now)) / 60.0
    if diff < 0:
        diff += MINUTES_PER_DAY
    return diff


def round_minutes(value: float) -> int:
    # Half up, so 1.5 min reads "en 2 min".
    return int(math.floor(value + 0.5))


def minutes_label(value: float) -> str:
    return f"en {round_minutes(value)} min"


def _classify(
    position: int, entry: IndexedDeparture, wait_min: float
) -> DepartureItem:
    if position < SOON_ITEMS:
        return DepartureItem(
            line=entry.route_short_name,
            name=entry.route_long_name,
            minutes_until=wait_min,
            is_imminent=wait_min <= IMMINENT_MINUTES,
            label=minutes_label(wait_min),
            tier=DepartureTier.SOON,
            departure_time=entry.departure_time,
        )
    return DepartureItem(
        line=entry.route_short_name,
        name=entry.route_long_name,
        minutes_until=wait_min,
        is_imminent=False,
        label=entry.departure_time,
        tier=DepartureTier.SCHEDULED,
        departure_time=entry.departure_time,
    )


def query_departures(index: FeedIndex, stop_id: str, now: datetime) -> DepartureBoard:
    """Next departures at ``stop_id``, soonest first, capped at five.

    The first two are labelled relative to ``now`` ("en N min"), the rest with
    their scheduled time. A stop without departures gives a no-service board.
    """

    entries = index.departures_at(stop_id)
    if not entries:
        return DepartureBoard.no_service()

    ranked = sorted(
        ((minutes_until(e.departure_s, now), e) for e in entries),
        key=lambda pair: pair[0],
    )
    upcoming = [(m, e) for m, e in ranked if m >= 0]
    if not upcoming:
        return DepartureBoard.no_service()

    items = tuple(
        _classify(i, entry, wait_min)
        for i, (wait_min, entry) in enumerate(upcoming[:MAX_ITEMS])
    )
    return DepartureBoard(status=BoardStatus.OK, items=items)
