"""Tests for Nominatim reverse geocoding."""

from unittest.mock import patch, MagicMock

from point_weather.ingest.nominatim import reverse_lookup, reverse_url


def _mock_response(payload):
    mock_resp = MagicMock()
    mock_resp.json.return_value = payload
    mock_resp.raise_for_status.return_value = None
    return mock_resp


@patch("point_weather.ingest.nominatim.requests.get")
def test_returns_display_name(mock_get):
    mock_get.return_value = _mock_response({"display_name": "Central Park, New York"})

    assert reverse_lookup(40.78, -73.97) == "Central Park, New York"
    params = mock_get.call_args.kwargs["params"]
    assert params["lat"] == 40.78
    assert params["lon"] == -73.97
    assert params["format"] == "json"


@patch("point_weather.ingest.nominatim.requests.get")
def test_missing_display_name(mock_get):
    mock_get.return_value = _mock_response({"error": "Unable to geocode"})

    assert reverse_lookup(0.0, 0.0) is None


@patch("point_weather.ingest.nominatim.requests.get")
def test_network_error_returns_none(mock_get):
    mock_get.side_effect = ConnectionError("Network unreachable")

    assert reverse_lookup(40.78, -73.97) is None


@patch("point_weather.ingest.nominatim.requests.get")
def test_non_json_body_returns_none(mock_get):
    mock_resp = MagicMock()
    mock_resp.json.side_effect = ValueError("not json")
    mock_get.return_value = mock_resp

    assert reverse_lookup(40.78, -73.97) is None


def test_reverse_url():
    url = reverse_url(40.78, -73.97)

    assert url.startswith("https://nominatim.openstreetmap.org/reverse?")
    assert "lat=40.78" in url
    assert "lon=-73.97" in url
