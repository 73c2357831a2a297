"""Marker endpoints: drawn points, per-marker settings, and their weather."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
import duckdb

from point_weather.api.deps import get_db, get_geocoder, get_weather_source
from point_weather.api.schemas import MarkerResponse, PointsUpdate, SettingsUpdate
from point_weather.compute.markers import MarkerWeather, query_marker, query_markers
from point_weather.compute.reconcile import reconcile_markers, update_settings
from point_weather.db.stores import DuckDBPointStore, DuckDBSettingsStore
from point_weather.ingest.sources import Geocoder, WeatherSource
from point_weather.models import MarkerSettings

logger = logging.getLogger(__name__)
router = APIRouter()


def _load_reconciled(db: duckdb.DuckDBPyConnection) -> list[MarkerSettings]:
    """Reconcile stored settings against stored points and write back the result."""
    points = DuckDBPointStore(db).load()
    settings_store = DuckDBSettingsStore(db)
    reconciled = reconcile_markers(points, settings_store.load())
    settings_store.save(reconciled)
    return reconciled


@router.get("", response_model=list[MarkerResponse])
def get_markers(
    fetch: bool = Query(True, description="Fetch place names and weather for each marker"),
    db: duckdb.DuckDBPyConnection = Depends(get_db),
    source: WeatherSource = Depends(get_weather_source),
    geocoder: Geocoder = Depends(get_geocoder),
) -> list[MarkerResponse]:
    """All markers in drawing order, with weather refreshed on every load."""
    markers = _load_reconciled(db)
    if fetch:
        results = query_markers(markers, source, geocoder)
    else:
        results = [MarkerWeather(settings=s) for s in markers]
    return [MarkerResponse.from_marker(i, m) for i, m in enumerate(results)]


@router.put("/points", response_model=list[MarkerResponse])
def put_points(
    body: PointsUpdate,
    db: duckdb.DuckDBPyConnection = Depends(get_db),
) -> list[MarkerResponse]:
    """Replace the drawn point set; settings of removed points are dropped."""
    DuckDBPointStore(db).save([p.to_point() for p in body.points])
    markers = _load_reconciled(db)
    return [MarkerResponse.from_marker(i, MarkerWeather(settings=s)) for i, s in enumerate(markers)]


@router.put("/{index}/settings", response_model=MarkerResponse)
def put_marker_settings(
    index: int,
    body: SettingsUpdate,
    db: duckdb.DuckDBPyConnection = Depends(get_db),
    source: WeatherSource = Depends(get_weather_source),
    geocoder: Geocoder = Depends(get_geocoder),
) -> MarkerResponse:
    """Update one marker's query fields, persist, and return its fresh weather."""
    markers = _load_reconciled(db)
    if not 0 <= index < len(markers):
        raise HTTPException(404, f"Marker {index} not found")

    changes = body.model_dump(exclude_unset=True)
    updated = update_settings(markers, index, **changes)
    DuckDBSettingsStore(db).save(updated)

    result = query_marker(updated[index], source, geocoder)
    return MarkerResponse.from_marker(index, result)
