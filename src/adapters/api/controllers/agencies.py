from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query

from src.adapters.api.dependencies import get_transit_map_service
from src.adapters.api.schemas.transit import (
    AgencySchema,
    DepartureBoardSchema,
    DepartureSchema,
    GeoPointSchema,
    RouteShapeSchema,
    RouteStopSchema,
    StopSchema,
    TransitRouteSchema,
)
from src.app.services.transit_map_service import TransitMapService
from src.domain.algorithms.shapes import route_color
from src.domain.exceptions import FeedNotLoaded, TransitError, UnknownAgency

router = APIRouter(prefix="/agencies", tags=["agencies"])


def _http_error(exc: TransitError) -> HTTPException:
    if isinstance(exc, UnknownAgency):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, FeedNotLoaded):
        return HTTPException(status_code=503, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))


@router.get("", response_model=list[AgencySchema])
def list_agencies(
    service: TransitMapService = Depends(get_transit_map_service),
) -> list[AgencySchema]:
    return [
        AgencySchema(
            name=name,
            title=service.agencies_config[name].title,
            loaded=service.is_loaded(name),
        )
        for name in service.agencies()
    ]


@router.get("/{agency}/stops", response_model=list[StopSchema])
def list_stops(
    agency: str,
    service: TransitMapService = Depends(get_transit_map_service),
) -> list[StopSchema]:
    try:
        stops = service.visible_stops(agency)
    except TransitError as exc:
        raise _http_error(exc) from exc

    return [
        StopSchema(
            stop_id=s.stop_id,
            name=s.name,
            location=GeoPointSchema(lat=s.location.lat, lon=s.location.lon),
        )
        for s in stops
    ]


@router.get(
    "/{agency}/stops/{stop_id}/departures", response_model=DepartureBoardSchema
)
def get_departures(
    agency: str,
    stop_id: str,
    at: datetime | None = Query(default=None),
    service: TransitMapService = Depends(get_transit_map_service),
) -> DepartureBoardSchema:
    try:
        board = service.query_departures(agency, stop_id, now=at)
        stop = service.stop(agency, stop_id)
    except TransitError as exc:
        raise _http_error(exc) from exc

    return DepartureBoardSchema(
        status=board.status.value,
        stop_id=stop_id,
        stop_name=stop.name if stop else None,
        items=[
            DepartureSchema(
                line=item.line,
                name=item.name,
                minutes_until=item.minutes_until,
                is_imminent=item.is_imminent,
                label=item.label,
                tier=item.tier.value,
                departure_time=item.departure_time,
            )
            for item in board.items
        ],
    )


@router.get("/{agency}/routes", response_model=list[TransitRouteSchema])
def list_routes(
    agency: str,
    service: TransitMapService = Depends(get_transit_map_service),
) -> list[TransitRouteSchema]:
    try:
        routes = service.filtered_routes_for_display(agency)
        default_color = service.agencies_config[agency].default_color
    except TransitError as exc:
        raise _http_error(exc) from exc

    return [
        TransitRouteSchema(
            route_id=r.route_id,
            short_name=r.short_name,
            long_name=r.long_name,
            color=route_color(r, default_color),
            agency_id=r.agency_id,
        )
        for r in routes
    ]


@router.get("/{agency}/routes/{route_id}/stops", response_model=list[RouteStopSchema])
def list_route_stops(
    agency: str,
    route_id: str,
    service: TransitMapService = Depends(get_transit_map_service),
) -> list[RouteStopSchema]:
    try:
        entries = service.route_stop_list(agency, route_id)
    except TransitError as exc:
        raise _http_error(exc) from exc

    return [
        RouteStopSchema(
            stop_id=e.stop_id,
            name=e.stop_name,
            arrival_time=e.arrival_time,
            stop_sequence=e.stop_sequence,
        )
        for e in entries
    ]


@router.get("/{agency}/shapes", response_model=list[RouteShapeSchema])
def list_shapes(
    agency: str,
    per_direction: bool = Query(default=False),
    service: TransitMapService = Depends(get_transit_map_service),
) -> list[RouteShapeSchema]:
    try:
        shapes = service.shapes_for_display(agency, per_direction=per_direction)
    except TransitError as exc:
        raise _http_error(exc) from exc

    return [
        RouteShapeSchema(
            route_id=s.route_id,
            route_name=s.route_name,
            color=s.color,
            shape_id=s.shape_id,
            points=[GeoPointSchema(lat=p.lat, lon=p.lon) for p in s.points],
        )
        for s in shapes
    ]
