from __future__ import annotations

import pytest

from src.domain.models.feed import Feed, Route, ShapePoint, Stop, StopTime, Trip
from src.domain.models.geo import GeoPoint


def stop_time(trip_id: str, stop_id: str, dep: str, seq: int = 1) -> StopTime:
    return StopTime(
        trip_id=trip_id,
        stop_id=stop_id,
        arrival_time=dep,
        departure_time=dep,
        stop_sequence=seq,
    )


@pytest.fixture
def castellon_feed() -> Feed:
    """Regional feed mixing the TRAM (agency 5999) with an interurban bus (1234)."""

    return Feed(
        agency="tramcastellon",
        routes=(
            Route(
                route_id="T1",
                short_name="T1",
                long_name="Castelló - Grau",
                agency_id="5999",
            ),
            Route(
                route_id="B7",
                short_name="7",
                long_name="Castelló - Benicàssim",
                color="0055AA",
                agency_id="1234",
            ),
        ),
        trips=(
            Trip(trip_id="T1-a", route_id="T1", shape_id="S-T1", direction_id=0),
            Trip(trip_id="B7-a", route_id="B7", shape_id="S-B7", direction_id=0),
        ),
        stops=(
            Stop(
                stop_id="UJI",
                name="Universitat",
                location=GeoPoint(lat=39.9931, lon=-0.0686),
            ),
            Stop(
                stop_id="GRAU",
                name="Grau",
                location=GeoPoint(lat=39.9743, lon=0.0142),
            ),
            Stop(
                stop_id="BENI",
                name="Benicàssim",
                location=GeoPoint(lat=40.0553, lon=0.0652),
            ),
        ),
        stop_times=(
            stop_time("T1-a", "UJI", "08:01:00", 1),
            stop_time("T1-a", "GRAU", "08:20:00", 2),
            stop_time("B7-a", "UJI", "08:03:00", 1),
            stop_time("B7-a", "BENI", "08:40:00", 2),
        ),
        shapes=(
            ShapePoint(shape_id="S-T1", sequence=2, location=GeoPoint(39.9743, 0.0142)),
            ShapePoint(shape_id="S-T1", sequence=1, location=GeoPoint(39.9931, -0.0686)),
            ShapePoint(shape_id="S-B7", sequence=1, location=GeoPoint(39.9931, -0.0686)),
            ShapePoint(shape_id="S-B7", sequence=2, location=GeoPoint(40.0553, 0.0652)),
        ),
    )
