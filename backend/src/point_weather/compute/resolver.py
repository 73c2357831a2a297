"""Temporal resolution: exact lookup for observed dates, climatology for future ones."""

from __future__ import annotations

from dataclasses import astuple, dataclass
from datetime import date, datetime, time, timezone
import logging

from point_weather.compute.climatology import compute_climatology, weather_label
from point_weather.config import CLIMATOLOGY_YEARS
from point_weather.ingest.open_meteo import sample_at_hour
from point_weather.ingest.sources import WeatherSource
from point_weather.models import ExactWeatherRecord, GeoPoint, WeatherResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolution:
    """Outcome of one (point, date, hour) query.

    ``result`` is None when no data could be obtained; callers render that as
    "insufficient data", never as zeros.
    """

    is_future: bool
    result: WeatherResult | None


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(instant: datetime) -> datetime:
    """Treat naive datetimes as UTC; convert aware ones to UTC."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def is_future_date(target: date, now: datetime | None = None) -> bool:
    """True when midnight UTC of ``target`` lies after ``now``. Today is not future."""
    now = as_utc(now) if now is not None else utc_now()
    start_of_day = datetime.combine(target, time(0, 0), tzinfo=timezone.utc)
    return start_of_day > now


def exact_lookup(
    source: WeatherSource,
    point: GeoPoint,
    target: date,
    hour: int,
) -> ExactWeatherRecord | None:
    """Observed weather at ``hour`` UTC on ``target``, or None."""
    try:
        hourly = source.exact_point(point.lat, point.lng, target)
        sample = sample_at_hour(hourly, hour)
    except Exception:
        logger.exception("Exact lookup failed for %s", target)
        return None

    if sample is None:
        logger.info("No %02d:00 UTC observation for %.4f,%.4f on %s", hour, point.lat, point.lng, target)
        return None

    if all(value is None for value in astuple(sample)):
        logger.info("Only null values at %02d:00 UTC for %.4f,%.4f on %s", hour, point.lat, point.lng, target)
        return None

    return ExactWeatherRecord(
        t2m=sample.temperature,
        rh2m=sample.humidity,
        prectot=sample.precipitation,
        ws10m=sample.wind_speed,
        apparent_temperature=sample.apparent_temperature,
        snowfall=sample.snowfall,
        weather_code=sample.weather_code,
        weather=weather_label(sample.weather_code),
        source=source.provenance(point.lat, point.lng, target),
    )


def resolve_weather(
    source: WeatherSource,
    point: GeoPoint,
    target: date,
    hour: int,
    now: datetime | None = None,
    years: int = CLIMATOLOGY_YEARS,
) -> Resolution:
    """Classify ``target`` and dispatch to exactly one branch."""
    if not 0 <= hour <= 23:
        raise ValueError(f"hour must be within 0..23, got {hour}")

    now = as_utc(now) if now is not None else utc_now()
    if is_future_date(target, now):
        try:
            summary = compute_climatology(
                source, point, target, hour, years=years, current_year=now.year,
            )
        except Exception:
            logger.exception("Climatology failed for %s", target)
            summary = None
        return Resolution(is_future=True, result=summary)

    return Resolution(is_future=False, result=exact_lookup(source, point, target, hour))
