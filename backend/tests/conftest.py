"""Shared test fixtures."""

from datetime import date, timedelta
import threading

import pandas as pd
import pytest

from point_weather.db.connection import get_memory_connection
from point_weather.db.schema import create_all_tables
from point_weather.ingest.open_meteo import HOURLY_COLUMNS
from point_weather.models import GeoPoint


def make_hourly(day: date, **values) -> pd.DataFrame:
    """24 hourly UTC rows for ``day``. Keyword args set a constant or per-hour list per column."""
    times = pd.date_range(pd.Timestamp(day, tz="UTC"), periods=24, freq="h")
    frame = {"time": times}
    defaults = {
        "temperature": 20.0,
        "humidity": 60.0,
        "precipitation": 0.0,
        "wind_speed": 3.0,
        "apparent_temperature": 19.0,
        "snowfall": 0.0,
        "weather_code": 0,
    }
    defaults.update(values)
    for column in HOURLY_COLUMNS[1:]:
        value = defaults[column]
        frame[column] = value if isinstance(value, list) else [value] * 24
    return pd.DataFrame(frame, columns=HOURLY_COLUMNS)


def make_power_daily(start: date, temperatures: list, **columns) -> pd.DataFrame:
    """NASA POWER style frame indexed by YYYYMMDD."""
    keys = [(start + timedelta(days=i)).strftime("%Y%m%d") for i in range(len(temperatures))]
    data = {"T2M": temperatures}
    for name in ["RH2M", "PRECTOTCORR", "WS10M", "ALLSKY_SFC_SW_DWN"]:
        data[name] = columns.get(name, [1.0] * len(temperatures))
    return pd.DataFrame(data, index=keys)


class FakeWeatherSource:
    """In-memory WeatherSource.

    ``hourly`` maps a date to a DataFrame; dates in ``failing`` raise; any other
    date returns an empty frame.
    """

    def __init__(self, hourly=None, failing=(), daily=None, range_error=None):
        self.hourly = dict(hourly or {})
        self.failing = set(failing)
        self.daily = daily
        self.range_error = range_error
        self.exact_calls: list[date] = []
        self.range_calls: list[tuple[date, date]] = []
        self._lock = threading.Lock()

    def exact_point(self, lat, lng, day):
        with self._lock:
            self.exact_calls.append(day)
        if day in self.failing:
            raise ConnectionError(f"provider down for {day}")
        return self.hourly.get(day, pd.DataFrame(columns=HOURLY_COLUMNS))

    def range_point(self, lat, lng, start, end):
        with self._lock:
            self.range_calls.append((start, end))
        if self.range_error is not None:
            raise self.range_error
        if self.daily is None:
            return pd.DataFrame()
        return self.daily

    def provenance(self, lat, lng, day):
        return {"fake_archive": f"fake://{lat},{lng}/{day.isoformat()}"}


class FakeGeocoder:
    def __init__(self, names=None, failing=()):
        self.names = dict(names or {})
        self.failing = set(failing)

    def reverse_lookup(self, lat, lng):
        if (lat, lng) in self.failing:
            raise ConnectionError("geocoder down")
        return self.names.get((lat, lng))


@pytest.fixture
def db():
    """In-memory DuckDB with all tables created."""
    conn = get_memory_connection()
    create_all_tables(conn)
    yield conn
    conn.close()


@pytest.fixture
def nyc() -> GeoPoint:
    return GeoPoint(lat=40.0, lng=-74.0)


@pytest.fixture
def ten_years_source() -> FakeWeatherSource:
    """Ten June 2 samples (2015-2024) with a simple year-dependent pattern."""
    hourly = {}
    for i, year in enumerate(range(2015, 2025)):
        hourly[date(year, 6, 2)] = make_hourly(
            date(year, 6, 2),
            temperature=15.0 + i,
            precipitation=1.0 if year % 2 == 0 else 0.0,
            weather_code=61 if year % 2 == 0 else 0,
        )
    return FakeWeatherSource(hourly=hourly)
