"""Best-effort reverse geocoding through Nominatim."""

from __future__ import annotations

import logging

import requests

from point_weather.config import NOMINATIM_REVERSE_URL, REQUEST_TIMEOUT_S, USER_AGENT

logger = logging.getLogger(__name__)


def reverse_params(lat: float, lng: float) -> dict:
    return {"lat": lat, "lon": lng, "format": "json", "accept-language": "en"}


def reverse_url(lat: float, lng: float) -> str:
    prepared = requests.Request("GET", NOMINATIM_REVERSE_URL, params=reverse_params(lat, lng)).prepare()
    return prepared.url


def reverse_lookup(
    lat: float,
    lng: float,
    session: requests.Session | None = None,
) -> str | None:
    """Return the display name for a point, or None. Never raises."""
    http = session or requests
    try:
        resp = http.get(
            NOMINATIM_REVERSE_URL,
            params=reverse_params(lat, lng),
            headers={"User-Agent": USER_AGENT},
            timeout=REQUEST_TIMEOUT_S,
        )
        resp.raise_for_status()
        data = resp.json()
    except Exception:
        logger.exception("Nominatim reverse lookup failed for %.4f,%.4f", lat, lng)
        return None

    name = data.get("display_name") if isinstance(data, dict) else None
    if not name:
        logger.warning("No display_name for %.4f,%.4f", lat, lng)
        return None
    return str(name)
