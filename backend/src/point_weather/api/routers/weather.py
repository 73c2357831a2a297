"""Single-point weather endpoints: date/hour resolution and daily ranges."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from point_weather.api.deps import get_weather_source
from point_weather.api.schemas import ResolveResponse
from point_weather.compute.range_series import build_range_series
from point_weather.compute.resolver import resolve_weather
from point_weather.ingest.sources import WeatherSource
from point_weather.models import GeoPoint, RangeSeriesPoint

router = APIRouter()


@router.get("/resolve", response_model=ResolveResponse)
def get_resolved_weather(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    date: date = Query(...),
    hour: int = Query(..., ge=0, le=23),
    source: WeatherSource = Depends(get_weather_source),
) -> ResolveResponse:
    """Exact observation for past dates, climatology estimate for future ones.

    A null ``result`` means no data could be obtained.
    """
    resolution = resolve_weather(source, GeoPoint(lat=lat, lng=lng), date, hour)
    return ResolveResponse.from_resolution(resolution)


@router.get("/range", response_model=list[RangeSeriesPoint])
def get_range_series(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    start: date = Query(...),
    end: date = Query(...),
    source: WeatherSource = Depends(get_weather_source),
) -> list[RangeSeriesPoint]:
    """Daily series for charting; empty when the provider has nothing."""
    if start > end:
        raise HTTPException(422, "start must not be after end")
    return build_range_series(source, GeoPoint(lat=lat, lng=lng), start, end)
