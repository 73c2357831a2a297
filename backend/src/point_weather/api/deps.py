"""FastAPI dependency injection."""

from __future__ import annotations

from typing import Generator

from fastapi import Request
import duckdb

from point_weather.ingest.sources import Geocoder, WeatherSource


def get_db(request: Request) -> Generator[duckdb.DuckDBPyConnection, None, None]:
    """Provide a per-request DuckDB cursor (thread-safe)."""
    cursor = request.app.state.db.cursor()
    try:
        yield cursor
    finally:
        cursor.close()


def get_weather_source(request: Request) -> WeatherSource:
    return request.app.state.weather_source


def get_geocoder(request: Request) -> Geocoder:
    return request.app.state.geocoder
