from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.domain.algorithms.departures import (
    MAX_ITEMS,
    minutes_label,
    minutes_until,
    query_departures,
)
from src.domain.algorithms.indexer import FeedIndex, build_index
from src.domain.models.departures import BoardStatus, DepartureTier
from src.domain.models.feed import Route, StopTime, Trip

NOW = datetime(2026, 1, 8, 8, 0, 0)


def _index(*deps: tuple[str, str]) -> FeedIndex:
    """Index for stop "S" with one trip per (route short name, departure)."""

    names = sorted({line for line, _ in deps})
    routes = tuple(
        Route(route_id=line, short_name=line, long_name=f"Línea {line}")
        for line in names
    )
    trips = tuple(
        Trip(trip_id=f"t{i}", route_id=line) for i, (line, _) in enumerate(deps)
    )
    stop_times = tuple(
        StopTime(
            trip_id=f"t{i}",
            stop_id="S",
            arrival_time=dep,
            departure_time=dep,
            stop_sequence=1,
        )
        for i, (_, dep) in enumerate(deps)
    )
    return build_index(routes, trips, stop_times)


def test_past_departure_wraps_to_tomorrow() -> None:
    board = query_departures(_index(("1", "07:59:00"), ("1", "08:05:00")), "S", NOW)

    assert board.status is BoardStatus.OK
    assert [i.departure_time for i in board.items] == ["08:05:00", "07:59:00"]
    assert board.items[0].minutes_until == pytest.approx(5.0)
    assert board.items[1].minutes_until == pytest.approx(1439.0)


def test_three_tier_classification() -> None:
    board = query_departures(
        _index(("1", "09:00:00"), ("2", "08:02:00"), ("1", "08:01:00")), "S", NOW
    )

    first, second, third = board.items
    assert first.is_imminent is True
    assert first.label == "en 1 min"
    assert first.tier is DepartureTier.SOON
    assert first.line == "1"
    assert first.name == "Línea 1"

    assert second.is_imminent is False
    assert second.label == "en 2 min"
    assert second.tier is DepartureTier.SOON

    assert third.is_imminent is False
    assert third.label == "09:00:00"
    assert third.tier is DepartureTier.SCHEDULED


def test_scheduled_tier_is_never_imminent() -> None:
    board = query_departures(
        _index(("1", "08:00:10"), ("1", "08:00:20"), ("1", "08:00:30")), "S", NOW
    )

    assert [i.is_imminent for i in board.items] == [True, True, False]
    assert board.items[2].label == "08:00:30"


def test_results_are_sorted_bounded_and_capped() -> None:
    deps = [
        ("1", "23:59:59"),
        ("1", "00:00:00"),
        ("2", "12:30:00"),
        ("2", "07:00:00"),
        ("3", "08:00:00"),
        ("3", "08:30:00"),
        ("1", "10:15:00"),
    ]
    board = query_departures(_index(*deps), "S", NOW)

    waits = [i.minutes_until for i in board.items]
    assert len(board.items) == MAX_ITEMS
    assert waits == sorted(waits)
    assert all(0 <= w < 1440 for w in waits)
    assert [i.departure_time for i in board.items] == [
        "08:00:00",
        "08:30:00",
        "10:15:00",
        "12:30:00",
        "23:59:59",
    ]


def test_equal_times_keep_feed_order() -> None:
    board = query_departures(
        _index(("B", "08:10:00"), ("A", "08:10:00"), ("C", "08:10:00")), "S", NOW
    )

    assert [i.line for i in board.items] == ["B", "A", "C"]


def test_subsecond_now_stays_within_one_day() -> None:
    now = datetime(2026, 1, 8, 8, 0, 0, 500_000)

    board = query_departures(_index(("1", "08:00:00")), "S", now)

    wait = board.items[0].minutes_until
    assert 1439.0 < wait < 1440.0
    assert board.items[0].is_imminent is False


def test_post_midnight_gtfs_time_is_folded_onto_the_clock() -> None:
    now = datetime(2026, 1, 9, 1, 0, 0)

    board = query_departures(_index(("1", "25:10:00")), "S", now)

    assert board.items[0].minutes_until == pytest.approx(10.0)
    assert board.items[0].label == "en 10 min"
    assert board.items[0].departure_time == "25:10:00"


def test_aware_now_uses_its_wall_clock() -> None:
    now = datetime(2026, 1, 8, 8, 0, 0, tzinfo=timezone.utc)

    assert minutes_until(8 * 3600 + 300, now) == pytest.approx(5.0)


def test_unknown_stop_is_no_service() -> None:
    board = query_departures(_index(("1", "08:05:00")), "OTHER", NOW)

    assert board.status is BoardStatus.NO_SERVICE
    assert board.items == ()
    assert board.has_service is False


def test_empty_index_is_no_service() -> None:
    assert query_departures(FeedIndex(), "S", NOW).status is BoardStatus.NO_SERVICE


@pytest.mark.parametrize(
    ("minutes", "label"),
    [(0.2, "en 0 min"), (1.0, "en 1 min"), (1.5, "en 2 min"), (2.49, "en 2 min")],
)
def test_minutes_label_rounds_half_up(minutes: float, label: str) -> None:
    assert minutes_label(minutes) == label
