"""NASA POWER daily point fetcher — one row per calendar day for range charts."""

from __future__ import annotations

from datetime import date
import logging

import pandas as pd
import requests

from point_weather.config import (
    NASA_POWER_COMMUNITY,
    NASA_POWER_DAILY_URL,
    NASA_POWER_PARAMETERS,
    REQUEST_TIMEOUT_S,
    USER_AGENT,
)

logger = logging.getLogger(__name__)


def fetch_power_daily(
    lat: float,
    lng: float,
    start_date: date,
    end_date: date,
    session: requests.Session | None = None,
) -> pd.DataFrame:
    """Fetch daily point data from NASA POWER.

    Args:
        lat: Point latitude.
        lng: Point longitude.
        start_date: Inclusive start date.
        end_date: Inclusive end date.
        session: Optional shared requests session.

    Returns:
        DataFrame indexed by the provider's 8-digit date code (YYYYMMDD) with
        one column per POWER parameter, values as returned (sentinels intact).
        Empty DataFrame on failure.
    """
    params = {
        "parameters": ",".join(NASA_POWER_PARAMETERS),
        "community": NASA_POWER_COMMUNITY,
        "longitude": lng,
        "latitude": lat,
        "start": start_date.strftime("%Y%m%d"),
        "end": end_date.strftime("%Y%m%d"),
        "format": "JSON",
    }

    logger.info("Fetching NASA POWER: lat=%.4f lng=%.4f %s to %s", lat, lng, start_date, end_date)

    http = session or requests
    try:
        resp = http.get(
            NASA_POWER_DAILY_URL,
            params=params,
            headers={"User-Agent": USER_AGENT},
            timeout=REQUEST_TIMEOUT_S,
        )
        resp.raise_for_status()
        data = resp.json()
    except Exception:
        logger.exception("Failed to fetch NASA POWER data")
        return _empty_df()

    parameter = (data.get("properties") or {}).get("parameter") if isinstance(data, dict) else None
    if not parameter or not parameter.get("T2M"):
        logger.warning("No daily parameters in NASA POWER response")
        return _empty_df()

    result = pd.DataFrame({
        name: pd.Series(parameter.get(name) or {}, dtype="float64")
        for name in NASA_POWER_PARAMETERS
    })
    result.index = result.index.astype(str)
    result = result.sort_index()

    logger.info("Fetched %d NASA POWER days", len(result))
    return result


def _empty_df() -> pd.DataFrame:
    return pd.DataFrame(columns=NASA_POWER_PARAMETERS, index=pd.Index([], dtype=str))
