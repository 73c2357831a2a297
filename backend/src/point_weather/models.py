"""Domain records shared by the engine, the API and the export serializer.

Value objects (points, settings, samples) are frozen dataclasses. Result records
that leave the engine are pydantic models serialized with camelCase aliases.
"""

from __future__ import annotations

from dataclasses import dataclass
import datetime as dt
import math
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from point_weather.config import SENTINEL_VALUE


def normalize_value(value: Any) -> float | None:
    """Map provider "no data" markers (the -999 sentinel, NaN, None) to None."""
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or number == SENTINEL_VALUE:
        return None
    return number


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lng: float


@dataclass(frozen=True)
class MarkerSettings:
    """Per-marker query inputs. Never carries fetched weather data."""

    point: GeoPoint
    range_start: dt.date | None = None
    range_end: dt.date | None = None
    specific_date: dt.date | None = None
    specific_hour: int | None = None


@dataclass(frozen=True)
class WeatherSample:
    temperature: float | None = None
    humidity: float | None = None
    precipitation: float | None = None
    wind_speed: float | None = None
    apparent_temperature: float | None = None
    snowfall: float | None = None
    weather_code: int | None = None


def camel_alias(name: str) -> str:
    """snake_case -> camelCase. Names without an underscore (t2m, ws10m) pass through."""
    if "_" not in name:
        return name
    return to_camel(name)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=camel_alias, populate_by_name=True)

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class ExactWeatherRecord(CamelModel):
    type: Literal["historical"] = "historical"
    t2m: float | None = None
    rh2m: float | None = None
    prectot: float | None = None
    ws10m: float | None = None
    apparent_temperature: float | None = None
    snowfall: float | None = None
    weather_code: int | None = None
    weather: str = "Unknown"
    source: dict[str, str] = Field(default_factory=dict)


class VariableStats(CamelModel):
    mean: float | None = None
    std_dev: float | None = None
    quartile25: float | None = None
    quartile75: float | None = None
    min: float | None = None
    max: float | None = None
    sample_count: int = 0


class OccurrenceStats(VariableStats):
    occurrence_probability: float = 0.0


class WeatherConditionStats(CamelModel):
    probabilities: dict[str, float] = Field(default_factory=dict)
    counts: dict[str, int] = Field(default_factory=dict)
    sample_count: int = 0


class ClimatologySummary(CamelModel):
    type: Literal["climatology"] = "climatology"
    t2m: VariableStats
    rh2m: VariableStats
    prectot: OccurrenceStats
    ws10m: VariableStats
    apparent_temperature: VariableStats
    snowfall: OccurrenceStats
    weather: WeatherConditionStats
    total_samples: int = 0
    years_queried: int = 0
    samples: dict[str, list[float | int]] = Field(default_factory=dict)
    source_note: str = "Open-Meteo archive, one request per historical year"


WeatherResult = ExactWeatherRecord | ClimatologySummary


class RangeSeriesPoint(CamelModel):
    date: str
    temperature: float | None = None
    humidity: float | None = None
    precipitation: float | None = None
    wind_speed: float | None = None
    solar_radiation: float | None = None
    heat_index: float | None = None


class ExportRequest(CamelModel):
    lat: float
    lng: float
    date: dt.date
    hour: int
    is_future: bool = False


class ExportMetadata(CamelModel):
    units: dict[str, str] = Field(default_factory=dict)
    sources: dict[str, str] = Field(default_factory=dict)


class ExportDocument(CamelModel):
    generated_at: dt.datetime
    request: ExportRequest
    place_name: str | None = None
    result: WeatherResult | None = None
    metadata: ExportMetadata = Field(default_factory=ExportMetadata)
