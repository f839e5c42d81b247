from __future__ import annotations

from typing import Iterable

from src.domain.models.departures import RouteShape
from src.domain.models.feed import Route, ShapePoint, Trip
from src.domain.models.geo import GeoPoint


def group_shapes(points: Iterable[ShapePoint]) -> dict[str, tuple[GeoPoint, ...]]:
    """Polyline per shape_id, ordered by shape_pt_sequence."""

    tmp: dict[str, list[ShapePoint]] = {}
    for p in points:
        tmp.setdefault(p.shape_id, []).append(p)
    return {
        shape_id: tuple(p.location for p in sorted(pts, key=lambda p: p.sequence))
        for shape_id, pts in tmp.items()
    }


def route_color(route: Route, default_color: str | None = None) -> str:
    """Display color as '#RRGGBB'; black unless the route or agency sets one."""

    if route.color:
        return f"#{route.color.upper()}"
    if default_color:
        return f"#{default_color.lstrip('#').upper()}"
    return f"#{route.color_or_default}"


def assemble_route_shapes(
    routes: Iterable[Route],
    trips: Iterable[Trip],
    shape_points: Iterable[ShapePoint],
    *,
    per_direction: bool = False,
    default_color: str | None = None,
) -> tuple[RouteShape, ...]:
    """One polyline per route, from its first trip that has geometry.

    With ``per_direction`` every distinct shape the route's trips use is
    emitted once instead. Routes without usable geometry are skipped.
    """

    shapes_by_id = group_shapes(shape_points)

    shape_ids_by_route: dict[str, list[str]] = {}
    for trip in trips:
        if not trip.shape_id or not shapes_by_id.get(trip.shape_id):
            continue
        ids = shape_ids_by_route.setdefault(trip.route_id, [])
        if trip.shape_id not in ids:
            ids.append(trip.shape_id)

    out: list[RouteShape] = []
    for route in routes:
        shape_ids = shape_ids_by_route.get(route.route_id)
        if not shape_ids:
            continue
        color = route_color(route, default_color)
        for shape_id in shape_ids if per_direction else shape_ids[:1]:
            out.append(
                RouteShape(
                    route_id=route.route_id,
                    route_name=route.display_name,
                    color=color,
                    shape_id=shape_id,
                    points=shapes_by_id[shape_id],
                )
            )
    return tuple(out)
