"""Open-Meteo archive fetcher — hourly observations for one calendar day.

Used both for exact lookups of past dates and for the per-year samples behind
a climatology estimate. Free API, no key required. All timestamps are UTC.
"""

from __future__ import annotations

from datetime import date
import logging

import pandas as pd
import requests

from point_weather.config import (
    OPEN_METEO_ARCHIVE_URL,
    OPEN_METEO_HOURLY_VARIABLES,
    REQUEST_TIMEOUT_S,
    USER_AGENT,
)
from point_weather.models import WeatherSample, normalize_value

logger = logging.getLogger(__name__)

HOURLY_COLUMNS = [
    "time",
    "temperature",
    "humidity",
    "precipitation",
    "wind_speed",
    "apparent_temperature",
    "snowfall",
    "weather_code",
]

# Open-Meteo hourly variable -> DataFrame column
_COLUMN_MAP = {
    "temperature_2m": "temperature",
    "relative_humidity_2m": "humidity",
    "precipitation": "precipitation",
    "wind_speed_10m": "wind_speed",
    "apparent_temperature": "apparent_temperature",
    "snowfall": "snowfall",
    "weathercode": "weather_code",
}


def archive_params(lat: float, lng: float, day: date) -> dict:
    return {
        "latitude": lat,
        "longitude": lng,
        "hourly": ",".join(OPEN_METEO_HOURLY_VARIABLES),
        "wind_speed_unit": "ms",
        "start_date": day.isoformat(),
        "end_date": day.isoformat(),
        "timezone": "UTC",
    }


def archive_url(lat: float, lng: float, day: date) -> str:
    """Fully encoded archive URL, kept as provenance on exact records."""
    prepared = requests.Request(
        "GET", OPEN_METEO_ARCHIVE_URL, params=archive_params(lat, lng, day),
    ).prepare()
    return prepared.url


def fetch_hourly_archive(
    lat: float,
    lng: float,
    day: date,
    session: requests.Session | None = None,
) -> pd.DataFrame:
    """Fetch one day of hourly observations from the Open-Meteo archive.

    Args:
        lat: Point latitude.
        lng: Point longitude.
        day: Calendar day (UTC).
        session: Optional shared requests session.

    Returns:
        DataFrame with columns: time (UTC timestamps), temperature, humidity,
        precipitation, wind_speed, apparent_temperature, snowfall, weather_code.
        Empty DataFrame on failure.
    """
    http = session or requests
    logger.debug("Fetching Open-Meteo archive: lat=%.4f lng=%.4f day=%s", lat, lng, day)

    try:
        resp = http.get(
            OPEN_METEO_ARCHIVE_URL,
            params=archive_params(lat, lng, day),
            headers={"User-Agent": USER_AGENT},
            timeout=REQUEST_TIMEOUT_S,
        )
        resp.raise_for_status()
        data = resp.json()
    except Exception:
        logger.exception("Failed to fetch Open-Meteo archive for %s", day)
        return _empty_df()

    hourly = data.get("hourly") if isinstance(data, dict) else None
    if not hourly or not isinstance(hourly.get("time"), list) or not hourly["time"]:
        logger.warning("No hourly data in Open-Meteo response for %s", day)
        return _empty_df()

    n_rows = len(hourly["time"])
    frame = {"time": pd.to_datetime(hourly["time"], utc=True)}
    for variable, column in _COLUMN_MAP.items():
        values = hourly.get(variable)
        if not isinstance(values, list) or len(values) != n_rows:
            values = [None] * n_rows
        frame[column] = values

    result = pd.DataFrame(frame, columns=HOURLY_COLUMNS)
    logger.debug("Fetched %d hourly rows for %s", len(result), day)
    return result


def sample_at_hour(hourly: pd.DataFrame, hour: int) -> WeatherSample | None:
    """Pick the row whose UTC hour equals ``hour``.

    Returns None when the series is empty or the hour is absent. Sentinel
    values are normalized to None.
    """
    if hourly.empty:
        return None

    times = pd.to_datetime(hourly["time"], utc=True)
    matches = hourly.loc[times.dt.hour == hour]
    if matches.empty:
        return None

    row = matches.iloc[0]
    code = normalize_value(row.get("weather_code"))
    return WeatherSample(
        temperature=normalize_value(row.get("temperature")),
        humidity=normalize_value(row.get("humidity")),
        precipitation=normalize_value(row.get("precipitation")),
        wind_speed=normalize_value(row.get("wind_speed")),
        apparent_temperature=normalize_value(row.get("apparent_temperature")),
        snowfall=normalize_value(row.get("snowfall")),
        weather_code=int(code) if code is not None else None,
    )


def _empty_df() -> pd.DataFrame:
    return pd.DataFrame(columns=HOURLY_COLUMNS)
