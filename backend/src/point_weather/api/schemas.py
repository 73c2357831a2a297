"""Pydantic request/response models for the API."""

from __future__ import annotations

import datetime as dt

from pydantic import Field

from point_weather.compute.markers import MarkerWeather
from point_weather.compute.resolver import Resolution
from point_weather.models import (
    CamelModel,
    ClimatologySummary,
    ExactWeatherRecord,
    GeoPoint,
    RangeSeriesPoint,
)


class PointIn(CamelModel):
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)

    def to_point(self) -> GeoPoint:
        return GeoPoint(lat=self.lat, lng=self.lng)


class PointsUpdate(CamelModel):
    points: list[PointIn]


class SettingsUpdate(CamelModel):
    range_start: dt.date | None = None
    range_end: dt.date | None = None
    specific_date: dt.date | None = None
    specific_hour: int | None = Field(default=None, ge=0, le=23)


class ResolveResponse(CamelModel):
    is_future: bool
    result: ExactWeatherRecord | ClimatologySummary | None = None

    @classmethod
    def from_resolution(cls, resolution: Resolution) -> ResolveResponse:
        return cls(is_future=resolution.is_future, result=resolution.result)


class MarkerResponse(CamelModel):
    index: int
    lat: float
    lng: float
    range_start: dt.date | None = None
    range_end: dt.date | None = None
    specific_date: dt.date | None = None
    specific_hour: int | None = None
    place_name: str | None = None
    range_series: list[RangeSeriesPoint] = Field(default_factory=list)
    specific: ResolveResponse | None = None

    @classmethod
    def from_marker(cls, index: int, marker: MarkerWeather) -> MarkerResponse:
        s = marker.settings
        return cls(
            index=index,
            lat=s.point.lat,
            lng=s.point.lng,
            range_start=s.range_start,
            range_end=s.range_end,
            specific_date=s.specific_date,
            specific_hour=s.specific_hour,
            place_name=marker.place_name,
            range_series=marker.range_series,
            specific=ResolveResponse.from_resolution(marker.specific) if marker.specific else None,
        )
