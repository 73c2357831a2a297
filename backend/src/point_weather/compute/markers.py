"""Per-marker weather queries, fanned out across a thread pool.

Each marker gets its own job (place name, range series, specific date/hour).
A failing job only blanks that marker; the rest complete normally. Results are
returned in marker order regardless of completion order.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
import logging
from typing import Sequence

from point_weather.compute.range_series import build_range_series
from point_weather.compute.resolver import Resolution, resolve_weather, utc_now
from point_weather.config import MAX_WORKERS
from point_weather.ingest.sources import Geocoder, WeatherSource
from point_weather.models import MarkerSettings, RangeSeriesPoint

logger = logging.getLogger(__name__)


@dataclass
class MarkerWeather:
    settings: MarkerSettings
    place_name: str | None = None
    range_series: list[RangeSeriesPoint] = field(default_factory=list)
    specific: Resolution | None = None


def query_markers(
    markers: Sequence[MarkerSettings],
    source: WeatherSource,
    geocoder: Geocoder,
    now: datetime | None = None,
    max_workers: int = MAX_WORKERS,
) -> list[MarkerWeather]:
    """Query every marker concurrently; join all before returning."""
    if not markers:
        return []

    now = now or utc_now()
    with ThreadPoolExecutor(max_workers=min(max_workers, len(markers))) as pool:
        futures = [
            pool.submit(query_marker, settings, source, geocoder, now)
            for settings in markers
        ]

    results = []
    for settings, future in zip(markers, futures):
        try:
            results.append(future.result())
        except Exception:
            logger.exception("Marker query failed for %s", settings.point)
            results.append(MarkerWeather(settings=settings))
    return results


def query_marker(
    settings: MarkerSettings,
    source: WeatherSource,
    geocoder: Geocoder,
    now: datetime | None = None,
) -> MarkerWeather:
    point = settings.point
    result = MarkerWeather(settings=settings)

    try:
        result.place_name = geocoder.reverse_lookup(point.lat, point.lng)
    except Exception:
        logger.exception("Reverse lookup failed for %s", point)

    if settings.range_start and settings.range_end:
        result.range_series = build_range_series(
            source, point, settings.range_start, settings.range_end,
        )

    if settings.specific_date is not None and settings.specific_hour is not None:
        try:
            result.specific = resolve_weather(
                source, point, settings.specific_date, settings.specific_hour, now=now,
            )
        except Exception:
            logger.exception("Resolution failed for %s", point)

    return result
