from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class GeoPointSchema(BaseModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lon: float = Field(..., ge=-180.0, le=180.0)


class AgencySchema(BaseModel):
    name: str
    title: str
    loaded: bool


class StopSchema(BaseModel):
    stop_id: str
    name: str
    location: GeoPointSchema


class TransitRouteSchema(BaseModel):
    route_id: str
    short_name: str | None = None
    long_name: str | None = None
    color: str
    agency_id: str | None = None


class RouteStopSchema(BaseModel):
    stop_id: str
    name: str
    arrival_time: str
    stop_sequence: int


class RouteShapeSchema(BaseModel):
    route_id: str
    route_name: str
    color: str
    shape_id: str
    points: list[GeoPointSchema]


class DepartureSchema(BaseModel):
    line: str
    name: str
    minutes_until: float
    is_imminent: bool
    label: str
    tier: Literal["soon", "scheduled"]
    departure_time: str


class DepartureBoardSchema(BaseModel):
    status: Literal["ok", "no-service"]
    stop_id: str
    stop_name: str | None = None
    items: list[DepartureSchema] = []
