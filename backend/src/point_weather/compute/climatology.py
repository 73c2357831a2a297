"""Climatology estimate for a future date/hour.

Reduces one-sample-per-year collections into per-variable statistics,
precipitation/snowfall occurrence probabilities and weather-condition
frequencies. Each variable drops its own missing values, so a gap in one
series never shrinks another series' sample count.
"""

from __future__ import annotations

from datetime import date
import logging

from point_weather.compute.samples import CollectedSamples, collect_samples
from point_weather.compute.statistics import (
    categorical_counts,
    categorical_probabilities,
    mean,
    occurrence_probability,
    percentile,
    std_dev,
)
from point_weather.config import (
    CLIMATOLOGY_YEARS,
    CONTINUOUS_VARIABLES,
    OCCURRENCE_VARIABLES,
    WEATHER_CODE_LABELS,
)
from point_weather.ingest.sources import WeatherSource
from point_weather.models import (
    ClimatologySummary,
    GeoPoint,
    OccurrenceStats,
    VariableStats,
    WeatherConditionStats,
    WeatherSample,
    camel_alias,
)

logger = logging.getLogger(__name__)


def weather_label(code: int | None) -> str:
    if code is None:
        return "Unknown"
    return WEATHER_CODE_LABELS.get(code, "Unknown")


def compute_climatology(
    source: WeatherSource,
    point: GeoPoint,
    target: date,
    hour: int,
    years: int = CLIMATOLOGY_YEARS,
    current_year: int | None = None,
) -> ClimatologySummary:
    """Collect prior-year samples for ``target``'s month/day at ``hour`` and summarize them."""
    collected = collect_samples(
        source, point, target.month, target.day, hour,
        years=years, current_year=current_year,
    )
    return summarize_samples(collected)


def summarize_samples(collected: CollectedSamples) -> ClimatologySummary:
    """Reduce collected samples to a ClimatologySummary."""
    series = _variable_series(collected.samples)
    codes = [s.weather_code for s in collected.samples if s.weather_code is not None]

    continuous_counts = [len(series[attr]) for attr in CONTINUOUS_VARIABLES.values()]
    continuous_counts += [len(series[attr]) for attr in OCCURRENCE_VARIABLES.values()]
    total_samples = len(codes) or max(continuous_counts, default=0)

    blocks: dict = {}
    for key, attr in CONTINUOUS_VARIABLES.items():
        blocks[key] = VariableStats(**_describe(series[attr]))
    for key, attr in OCCURRENCE_VARIABLES.items():
        values = series[attr]
        blocks[key] = OccurrenceStats(
            **_describe(values),
            occurrence_probability=occurrence_probability(values, total_samples),
        )

    # Codes missing from the lookup table keep their numeric code as label
    labels = [WEATHER_CODE_LABELS.get(code, str(code)) for code in codes]
    weather = WeatherConditionStats(
        probabilities=categorical_probabilities(labels),
        counts=categorical_counts(labels),
        sample_count=len(codes),
    )

    if total_samples == 0:
        logger.warning("Climatology has no usable samples (%d years failed)", len(collected.failed_years))

    return ClimatologySummary(
        **blocks,
        weather=weather,
        total_samples=total_samples,
        years_queried=collected.years_queried,
        samples=_raw_samples(series, codes),
    )


def _variable_series(samples: list[WeatherSample]) -> dict[str, list[float]]:
    series: dict[str, list[float]] = {}
    for attr in list(CONTINUOUS_VARIABLES.values()) + list(OCCURRENCE_VARIABLES.values()):
        series[attr] = [
            value for value in (getattr(s, attr) for s in samples)
            if value is not None
        ]
    return series


def _describe(values: list[float]) -> dict:
    return {
        "mean": mean(values),
        "std_dev": std_dev(values),
        "quartile25": percentile(values, 0.25),
        "quartile75": percentile(values, 0.75),
        "min": min(values) if values else None,
        "max": max(values) if values else None,
        "sample_count": len(values),
    }


def _raw_samples(series: dict[str, list[float]], codes: list[int]) -> dict[str, list]:
    variables = {**CONTINUOUS_VARIABLES, **OCCURRENCE_VARIABLES}
    raw = {camel_alias(key): list(series[attr]) for key, attr in variables.items()}
    raw["weatherCodes"] = list(codes)
    return raw
