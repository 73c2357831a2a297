"""Collaborator contracts the engine depends on, and their HTTP-backed defaults.

Engine code only talks to a ``WeatherSource`` and a ``Geocoder``; tests swap in
fakes with the same methods.
"""

from __future__ import annotations

from datetime import date
from typing import Protocol

import pandas as pd
import requests

from point_weather.ingest.nasa_power import fetch_power_daily
from point_weather.ingest.nominatim import reverse_lookup
from point_weather.ingest.open_meteo import archive_url, fetch_hourly_archive


class WeatherSource(Protocol):
    def exact_point(self, lat: float, lng: float, day: date) -> pd.DataFrame:
        """Hourly rows for one UTC calendar day; empty when unavailable."""
        ...

    def range_point(self, lat: float, lng: float, start: date, end: date) -> pd.DataFrame:
        """Daily rows keyed by YYYYMMDD; empty when unavailable."""
        ...

    def provenance(self, lat: float, lng: float, day: date) -> dict[str, str]:
        ...


class Geocoder(Protocol):
    def reverse_lookup(self, lat: float, lng: float) -> str | None:
        ...


class OpenDataWeatherSource:
    """Open-Meteo archive for hourly lookups, NASA POWER for daily ranges."""

    def __init__(self, session: requests.Session | None = None) -> None:
        self.session = session

    def exact_point(self, lat: float, lng: float, day: date) -> pd.DataFrame:
        return fetch_hourly_archive(lat, lng, day, session=self.session)

    def range_point(self, lat: float, lng: float, start: date, end: date) -> pd.DataFrame:
        return fetch_power_daily(lat, lng, start, end, session=self.session)

    def provenance(self, lat: float, lng: float, day: date) -> dict[str, str]:
        return {"open_meteo_archive": archive_url(lat, lng, day)}


class NominatimGeocoder:
    def __init__(self, session: requests.Session | None = None) -> None:
        self.session = session

    def reverse_lookup(self, lat: float, lng: float) -> str | None:
        return reverse_lookup(lat, lng, session=self.session)
