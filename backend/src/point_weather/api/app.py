"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import requests

from point_weather import __version__
from point_weather.db.connection import get_connection
from point_weather.db.schema import create_all_tables
from point_weather.ingest.sources import NominatimGeocoder, OpenDataWeatherSource


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open DuckDB and the shared HTTP session on startup, close both on shutdown."""
    conn = get_connection()
    create_all_tables(conn)
    session = requests.Session()
    app.state.db = conn
    app.state.session = session
    app.state.weather_source = OpenDataWeatherSource(session)
    app.state.geocoder = NominatimGeocoder(session)
    yield
    session.close()
    conn.close()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Point Weather API",
        version=__version__,
        description="Exact and climatology weather for a point, date and hour",
        lifespan=lifespan,
    )

    # CORS for frontend dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:5173", "http://127.0.0.1:5173"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from point_weather.api.routers import export, markers, weather

    app.include_router(weather.router, prefix="/weather", tags=["weather"])
    app.include_router(markers.router, prefix="/markers", tags=["markers"])
    app.include_router(export.router, prefix="/export", tags=["export"])

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app
