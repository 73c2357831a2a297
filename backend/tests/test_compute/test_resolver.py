"""Tests for temporal resolution."""

from datetime import date, datetime, timedelta, timezone

import pytest

from conftest import FakeWeatherSource, make_hourly

from point_weather.compute.resolver import exact_lookup, is_future_date, resolve_weather
from point_weather.models import ClimatologySummary, ExactWeatherRecord, GeoPoint

NOW = datetime(2025, 6, 1, 0, 0, tzinfo=timezone.utc)
POINT = GeoPoint(lat=40.0, lng=-74.0)


class TestIsFutureDate:
    def test_tomorrow_is_future(self):
        assert is_future_date(date(2025, 6, 2), NOW) is True

    def test_today_is_not_future(self):
        assert is_future_date(date(2025, 6, 1), NOW) is False

    def test_last_year_is_not_future(self):
        assert is_future_date(date(2024, 6, 1), NOW) is False

    def test_today_later_in_the_day_is_not_future(self):
        assert is_future_date(date(2025, 6, 1), NOW + timedelta(hours=23)) is False

    def test_naive_now_is_treated_as_utc(self):
        assert is_future_date(date(2025, 6, 2), datetime(2025, 6, 1, 12, 0)) is True

    def test_aware_non_utc_now_is_converted(self):
        # 2025-06-01 20:00 at UTC-5 is 2025-06-02 01:00 UTC
        eastern = timezone(timedelta(hours=-5))
        assert is_future_date(date(2025, 6, 2), datetime(2025, 6, 1, 20, 0, tzinfo=eastern)) is False


class TestExactBranch:
    def test_past_date_returns_exact_record(self):
        day = date(2024, 6, 1)
        source = FakeWeatherSource(hourly={
            day: make_hourly(day, temperature=[float(h) for h in range(24)], weather_code=3),
        })

        resolution = resolve_weather(source, POINT, day, 14, now=NOW)

        assert resolution.is_future is False
        assert isinstance(resolution.result, ExactWeatherRecord)
        assert resolution.result.type == "historical"
        assert resolution.result.t2m == 14.0
        assert resolution.result.weather == "Overcast"
        assert resolution.result.source == {"fake_archive": "fake://40.0,-74.0/2024-06-01"}
        assert source.exact_calls == [day]

    def test_today_uses_exact_branch(self):
        day = date(2025, 6, 1)
        source = FakeWeatherSource(hourly={day: make_hourly(day)})

        resolution = resolve_weather(source, POINT, day, 0, now=NOW)

        assert resolution.is_future is False
        assert isinstance(resolution.result, ExactWeatherRecord)

    def test_provider_failure_yields_none(self):
        day = date(2024, 6, 1)
        source = FakeWeatherSource(failing={day})

        resolution = resolve_weather(source, POINT, day, 12, now=NOW)

        assert resolution.is_future is False
        assert resolution.result is None

    def test_missing_hour_yields_none(self):
        day = date(2024, 6, 1)
        source = FakeWeatherSource(hourly={day: make_hourly(day).iloc[:10]})

        assert exact_lookup(source, POINT, day, 12) is None

    def test_all_null_row_yields_none(self):
        day = date(2024, 6, 1)
        nulls = {column: None for column in (
            "temperature", "humidity", "precipitation", "wind_speed",
            "apparent_temperature", "snowfall", "weather_code",
        )}
        source = FakeWeatherSource(hourly={day: make_hourly(day, **nulls)})

        resolution = resolve_weather(source, POINT, day, 12, now=NOW)

        assert resolution.is_future is False
        assert resolution.result is None

    def test_partially_null_row_is_kept(self):
        day = date(2024, 6, 1)
        source = FakeWeatherSource(hourly={day: make_hourly(day, temperature=None, humidity=-999)})

        record = exact_lookup(source, POINT, day, 12)

        assert record.t2m is None
        assert record.rh2m is None
        assert record.ws10m == 3.0

    def test_sentinel_code_maps_to_unknown(self):
        day = date(2024, 6, 1)
        source = FakeWeatherSource(hourly={day: make_hourly(day, weather_code=-999)})

        record = exact_lookup(source, POINT, day, 12)

        assert record.weather_code is None
        assert record.weather == "Unknown"


class TestClimatologyBranch:
    def test_future_date_returns_climatology(self, ten_years_source):
        resolution = resolve_weather(ten_years_source, POINT, date(2025, 6, 2), 12, now=NOW)

        assert resolution.is_future is True
        assert isinstance(resolution.result, ClimatologySummary)
        assert resolution.result.years_queried == 10
        # Only prior years are queried, never the requested date itself
        assert date(2025, 6, 2) not in ten_years_source.exact_calls

    def test_one_year_ahead_end_to_end(self, ten_years_source):
        now = datetime(2025, 6, 2, 9, 30, tzinfo=timezone.utc)
        resolution = resolve_weather(ten_years_source, POINT, date(2026, 6, 2), 12, now=now)

        payload = resolution.result.to_dict()
        assert payload["type"] == "climatology"
        assert 0 <= payload["t2m"]["sampleCount"] <= 10
        assert 0.0 <= payload["prectot"]["occurrenceProbability"] <= 1.0
        assert 0.0 <= payload["snowfall"]["occurrenceProbability"] <= 1.0

    def test_all_years_failing_still_returns_summary(self):
        resolution = resolve_weather(FakeWeatherSource(), POINT, date(2025, 7, 1), 12, now=NOW)

        assert resolution.is_future is True
        assert resolution.result.total_samples == 0
        assert resolution.result.t2m.mean is None


def test_rejects_invalid_hour():
    with pytest.raises(ValueError):
        resolve_weather(FakeWeatherSource(), POINT, date(2024, 1, 1), 24, now=NOW)
