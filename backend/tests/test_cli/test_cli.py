"""Tests for the command-line entry point."""

from datetime import date
import json
from unittest.mock import patch

from conftest import FakeGeocoder, FakeWeatherSource, make_hourly, make_power_daily

from point_weather.cli import main

PAST_DAY = date(2024, 6, 1)


def _source():
    return FakeWeatherSource(
        hourly={PAST_DAY: make_hourly(PAST_DAY, temperature=11.0)},
        daily=make_power_daily(date(2024, 1, 1), [1.0, 2.0]),
    )


def test_no_command_prints_help(capsys):
    assert main([]) == 1
    assert "usage" in capsys.readouterr().out


@patch("point_weather.ingest.sources.OpenDataWeatherSource")
def test_resolve(mock_source, capsys):
    mock_source.return_value = _source()

    code = main(["resolve", "--lat", "40", "--lng", "-74", "--date", "2024-06-01", "--hour", "3"])

    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["isFuture"] is False
    assert data["result"]["t2m"] == 11.0


def test_resolve_bad_date(capsys):
    code = main(["resolve", "--lat", "40", "--lng", "-74", "--date", "June 1", "--hour", "3"])

    assert code == 2
    assert "Invalid date" in capsys.readouterr().err


def test_resolve_bad_hour(capsys):
    code = main(["resolve", "--lat", "40", "--lng", "-74", "--date", "2024-06-01", "--hour", "25"])

    assert code == 2


@patch("point_weather.ingest.sources.OpenDataWeatherSource")
def test_range(mock_source, capsys):
    mock_source.return_value = _source()

    code = main([
        "range", "--lat", "40", "--lng", "-74",
        "--start-date", "2024-01-01", "--end-date", "2024-01-02",
    ])

    assert code == 0
    assert len(json.loads(capsys.readouterr().out)) == 2


def test_range_reversed(capsys):
    code = main([
        "range", "--lat", "40", "--lng", "-74",
        "--start-date", "2024-02-01", "--end-date", "2024-01-01",
    ])

    assert code == 2


@patch("point_weather.ingest.sources.NominatimGeocoder")
@patch("point_weather.ingest.sources.OpenDataWeatherSource")
def test_export_writes_file(mock_source, mock_geocoder, tmp_path, capsys):
    mock_source.return_value = _source()
    mock_geocoder.return_value = FakeGeocoder(names={(40.0, -74.0): "Trenton"})

    code = main([
        "export", "--lat", "40", "--lng", "-74", "--date", "2024-06-01", "--hour", "3",
        "--format", "csv", "--output-dir", str(tmp_path),
    ])

    assert code == 0
    path = tmp_path / "Trenton_2024-06-01_3.csv"
    assert capsys.readouterr().out.strip() == str(path)
    assert path.read_text(encoding="utf-8").startswith("key,value\n")


def test_export_invalid_hour(tmp_path, capsys):
    code = main([
        "export", "--lat", "40", "--lng", "-74", "--date", "2024-06-01", "--hour", "x",
        "--output-dir", str(tmp_path),
    ])

    assert code == 2
    assert list(tmp_path.iterdir()) == []
