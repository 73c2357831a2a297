"""Daily time series between two dates, for charting."""

from __future__ import annotations

from datetime import date
import logging
import math

import pandas as pd

from point_weather.ingest.sources import WeatherSource
from point_weather.models import GeoPoint, RangeSeriesPoint, normalize_value

logger = logging.getLogger(__name__)

# NASA POWER parameter -> RangeSeriesPoint field
_PARAMETER_FIELDS = {
    "T2M": "temperature",
    "RH2M": "humidity",
    "PRECTOTCORR": "precipitation",
    "WS10M": "wind_speed",
    "ALLSKY_SFC_SW_DWN": "solar_radiation",
}


def build_range_series(
    source: WeatherSource,
    point: GeoPoint,
    start: date | None,
    end: date | None,
) -> list[RangeSeriesPoint]:
    """One point per day present in the provider response, ordered by date.

    Returns an empty list when either bound is missing (without calling the
    source), when start > end, or when the source fails.
    """
    if not start or not end:
        return []
    if start > end:
        logger.warning("Range start %s is after end %s", start, end)
        return []

    try:
        daily = source.range_point(point.lat, point.lng, start, end)
    except Exception:
        logger.exception("Range fetch failed for %s to %s", start, end)
        return []

    if daily is None or daily.empty:
        return []

    return [_to_point(str(key), row) for key, row in daily.sort_index().iterrows()]


def format_date_key(key: str) -> str:
    """YYYYMMDD -> MM/DD/YYYY."""
    return f"{key[4:6]}/{key[6:8]}/{key[0:4]}"


def heat_index(temperature_c: float | None, humidity_pct: float | None) -> float | None:
    """NWS heat index (Rothfusz regression with Steadman's low-range formula), in °C."""
    if temperature_c is None or humidity_pct is None:
        return None

    t = temperature_c * 9.0 / 5.0 + 32.0
    rh = humidity_pct
    simple = 0.5 * (t + 61.0 + (t - 68.0) * 1.2 + rh * 0.094)
    if (simple + t) / 2.0 < 80.0:
        hi = simple
    else:
        hi = (
            -42.379 + 2.04901523 * t + 10.14333127 * rh
            - 0.22475541 * t * rh - 0.00683783 * t * t
            - 0.05481717 * rh * rh + 0.00122874 * t * t * rh
            + 0.00085282 * t * rh * rh - 0.00000199 * t * t * rh * rh
        )
        if rh < 13 and 80.0 <= t <= 112.0:
            hi -= ((13 - rh) / 4.0) * math.sqrt((17 - abs(t - 95.0)) / 17.0)
        elif rh > 85 and 80.0 <= t <= 87.0:
            hi += ((rh - 85) / 10.0) * ((87 - t) / 5.0)

    return round((hi - 32.0) * 5.0 / 9.0, 2)


def _to_point(key: str, row: pd.Series) -> RangeSeriesPoint:
    values = {
        field: normalize_value(row.get(parameter))
        for parameter, field in _PARAMETER_FIELDS.items()
    }
    return RangeSeriesPoint(
        date=format_date_key(key),
        heat_index=heat_index(values["temperature"], values["humidity"]),
        **values,
    )
