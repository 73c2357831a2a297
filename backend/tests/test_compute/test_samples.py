"""Tests for historical sample collection."""

from datetime import date

from conftest import FakeWeatherSource, make_hourly

from point_weather.compute.samples import collect_samples, historical_date
from point_weather.models import GeoPoint

POINT = GeoPoint(lat=40.0, lng=-74.0)


class TestHistoricalDate:
    def test_regular_day(self):
        assert historical_date(2019, 6, 2) == date(2019, 6, 2)

    def test_leap_day_in_leap_year(self):
        assert historical_date(2020, 2, 29) == date(2020, 2, 29)

    def test_leap_day_clamps_in_non_leap_year(self):
        assert historical_date(2021, 2, 29) == date(2021, 2, 28)


def test_queries_each_prior_year_once(ten_years_source):
    result = collect_samples(ten_years_source, POINT, 6, 2, 12, years=10, current_year=2025)

    assert sorted(ten_years_source.exact_calls) == [date(y, 6, 2) for y in range(2015, 2025)]
    assert result.years_queried == 10
    assert result.years == list(range(2024, 2014, -1))
    assert result.failed_years == []


def test_picks_target_utc_hour():
    day = date(2024, 6, 2)
    temps = [float(h) for h in range(24)]
    source = FakeWeatherSource(hourly={day: make_hourly(day, temperature=temps)})

    result = collect_samples(source, POINT, 6, 2, 15, years=1, current_year=2025)

    assert result.samples[0].temperature == 15.0


def test_failed_years_are_skipped_not_fatal(ten_years_source):
    ten_years_source.failing = {date(2016, 6, 2), date(2019, 6, 2), date(2023, 6, 2)}

    result = collect_samples(ten_years_source, POINT, 6, 2, 12, years=10, current_year=2025)

    assert result.years_queried == 7
    assert sorted(result.failed_years) == [2016, 2019, 2023]
    assert len(ten_years_source.exact_calls) == 10


def test_missing_hour_counts_as_failure():
    day = date(2024, 6, 2)
    partial = make_hourly(day).iloc[:6]  # only 00:00-05:00
    source = FakeWeatherSource(hourly={day: partial})

    result = collect_samples(source, POINT, 6, 2, 12, years=1, current_year=2025)

    assert result.samples == []
    assert result.failed_years == [2024]


def test_empty_provider_response_counts_as_failure():
    source = FakeWeatherSource()

    result = collect_samples(source, POINT, 1, 15, 0, years=3, current_year=2025)

    assert result.years_queried == 0
    assert result.failed_years == [2024, 2023, 2022]


def test_sentinel_values_become_none():
    day = date(2024, 6, 2)
    source = FakeWeatherSource(hourly={day: make_hourly(day, humidity=-999, temperature=-998.9)})

    result = collect_samples(source, POINT, 6, 2, 12, years=1, current_year=2025)

    assert result.samples[0].humidity is None
    assert result.samples[0].temperature == -998.9


def test_leap_day_target_uses_feb_28_in_common_years():
    source = FakeWeatherSource()

    collect_samples(source, POINT, 2, 29, 12, years=4, current_year=2025)

    assert sorted(source.exact_calls) == [
        date(2021, 2, 28), date(2022, 2, 28), date(2023, 2, 28), date(2024, 2, 29),
    ]
