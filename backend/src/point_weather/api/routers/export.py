"""Export endpoints — one file download per request.

Missing or malformed parameters redirect to the markers view instead of
producing a broken file.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import RedirectResponse, Response

from point_weather.api.deps import get_geocoder, get_weather_source
from point_weather.config import EXPORT_FALLBACK_PATH
from point_weather.export import (
    InvalidExportRequest,
    build_export_document,
    export_filename,
    parse_export_request,
    to_csv,
    to_json,
)
from point_weather.ingest.sources import Geocoder, WeatherSource

logger = logging.getLogger(__name__)
router = APIRouter()

_FORMATS = {
    "json": ("application/json", to_json),
    "csv": ("text/csv; charset=utf-8", to_csv),
}


@router.get("/{fmt}")
def export_weather(
    fmt: str,
    lat: str | None = Query(None),
    lng: str | None = Query(None),
    date: str | None = Query(None),
    hour: str | None = Query(None),
    source: WeatherSource = Depends(get_weather_source),
    geocoder: Geocoder = Depends(get_geocoder),
) -> Response:
    if fmt not in _FORMATS:
        logger.warning("Unsupported export format %r", fmt)
        return RedirectResponse(EXPORT_FALLBACK_PATH, status_code=303)

    try:
        point, target, target_hour = parse_export_request(lat, lng, date, hour)
    except InvalidExportRequest as exc:
        logger.warning("Invalid export request: %s", exc)
        return RedirectResponse(EXPORT_FALLBACK_PATH, status_code=303)

    document = build_export_document(source, geocoder, point, target, target_hour)
    media_type, render = _FORMATS[fmt]
    filename = export_filename(document, fmt)
    return Response(
        content=render(document),
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
