"""Historical sample collection — one observation per prior year.

For a target month/day/hour, queries the same calendar day in each of the
``years`` years before the reference year and keeps the row at the target
UTC hour. A failing year contributes nothing; the others still count.
"""

from __future__ import annotations

from calendar import isleap
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
import logging

from point_weather.config import CLIMATOLOGY_YEARS, MAX_WORKERS
from point_weather.ingest.open_meteo import sample_at_hour
from point_weather.ingest.sources import WeatherSource
from point_weather.models import GeoPoint, WeatherSample

logger = logging.getLogger(__name__)


@dataclass
class CollectedSamples:
    samples: list[WeatherSample] = field(default_factory=list)
    years: list[int] = field(default_factory=list)
    failed_years: list[int] = field(default_factory=list)

    @property
    def years_queried(self) -> int:
        """Number of years that produced a sample."""
        return len(self.years)


def historical_date(year: int, month: int, day: int) -> date:
    """Same calendar day in ``year``; Feb 29 clamps to Feb 28 in non-leap years."""
    if month == 2 and day == 29 and not isleap(year):
        return date(year, 2, 28)
    return date(year, month, day)


def collect_samples(
    source: WeatherSource,
    point: GeoPoint,
    month: int,
    day: int,
    hour: int,
    years: int = CLIMATOLOGY_YEARS,
    current_year: int | None = None,
    max_workers: int = MAX_WORKERS,
) -> CollectedSamples:
    """Gather up to ``years`` samples, newest year first.

    All per-year fetches are joined before returning.
    """
    if current_year is None:
        current_year = datetime.now(timezone.utc).year

    target_years = [current_year - offset for offset in range(1, years + 1)]
    if not target_years:
        return CollectedSamples()

    with ThreadPoolExecutor(max_workers=min(max_workers, len(target_years))) as pool:
        outcomes = list(pool.map(
            lambda y: _sample_for_year(source, point, y, month, day, hour),
            target_years,
        ))

    result = CollectedSamples()
    for year, sample in zip(target_years, outcomes):
        if sample is None:
            result.failed_years.append(year)
        else:
            result.samples.append(sample)
            result.years.append(year)

    logger.info(
        "Collected %d/%d yearly samples for %.4f,%.4f %02d-%02d %02d:00",
        result.years_queried, len(target_years), point.lat, point.lng, month, day, hour,
    )
    return result


def _sample_for_year(
    source: WeatherSource,
    point: GeoPoint,
    year: int,
    month: int,
    day: int,
    hour: int,
) -> WeatherSample | None:
    target = historical_date(year, month, day)
    try:
        hourly = source.exact_point(point.lat, point.lng, target)
        sample = sample_at_hour(hourly, hour)
    except Exception:
        logger.exception("Sample fetch failed for %s", target)
        return None

    if sample is None:
        logger.warning("No %02d:00 UTC sample for %s", hour, target)
    return sample
