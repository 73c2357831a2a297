"""Export documents: one resolved query packaged for download as JSON or CSV.

The CSV form is a deterministic flattening of the JSON document into
``key,value`` rows, where nested keys are joined with ``.`` and sequence
positions are written as ``[i]``.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime
import json
import logging
import re
from typing import Any

from point_weather.compute.resolver import resolve_weather, utc_now
from point_weather.config import FILENAME_MAX_LEN, OPEN_METEO_DOCS_URL, UNITS
from point_weather.ingest.nominatim import reverse_url
from point_weather.ingest.open_meteo import archive_url
from point_weather.ingest.sources import Geocoder, WeatherSource
from point_weather.models import ExportDocument, ExportMetadata, ExportRequest, GeoPoint

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")
_UNSAFE_RE = re.compile(r"[^A-Za-z0-9_.\-]")


class InvalidExportRequest(ValueError):
    """Export parameters missing or malformed."""


def parse_export_request(
    lat: str | float | None,
    lng: str | float | None,
    day: str | date | None,
    hour: str | int | None,
) -> tuple[GeoPoint, date, int]:
    """Validate raw query parameters. Raises InvalidExportRequest."""
    missing = [
        name for name, value in (("lat", lat), ("lng", lng), ("date", day), ("hour", hour))
        if value is None or value == ""
    ]
    if missing:
        raise InvalidExportRequest(f"missing parameters: {', '.join(missing)}")

    try:
        point = GeoPoint(lat=float(lat), lng=float(lng))
        target = day if isinstance(day, date) else date.fromisoformat(str(day))
        target_hour = int(hour)
    except (TypeError, ValueError) as exc:
        raise InvalidExportRequest(str(exc)) from exc

    if not -90.0 <= point.lat <= 90.0 or not -180.0 <= point.lng <= 180.0:
        raise InvalidExportRequest(f"coordinates out of range: {point.lat},{point.lng}")
    if not 0 <= target_hour <= 23:
        raise InvalidExportRequest(f"hour must be within 0..23, got {target_hour}")
    return point, target, target_hour


def build_export_document(
    source: WeatherSource,
    geocoder: Geocoder,
    point: GeoPoint,
    target: date,
    hour: int,
    now: datetime | None = None,
) -> ExportDocument:
    """Resolve one query and wrap it with request echo, place name and metadata."""
    now = now or utc_now()
    place_name = geocoder.reverse_lookup(point.lat, point.lng)
    resolution = resolve_weather(source, point, target, hour, now=now)
    logger.info(
        "Export document for %.4f,%.4f %s %02d:00 UTC (future=%s, result=%s)",
        point.lat, point.lng, target, hour, resolution.is_future,
        "none" if resolution.result is None else resolution.result.type,
    )

    return ExportDocument(
        generated_at=now,
        request=ExportRequest(
            lat=point.lat, lng=point.lng, date=target, hour=hour,
            is_future=resolution.is_future,
        ),
        place_name=place_name,
        result=resolution.result,
        metadata=ExportMetadata(
            units=dict(UNITS),
            sources={
                "nominatim_reverse_geocoding": reverse_url(point.lat, point.lng),
                "open_meteo_archive_docs": OPEN_METEO_DOCS_URL,
                "open_meteo_archive_endpoint": archive_url(point.lat, point.lng, target),
            },
        ),
    )


def to_json(document: ExportDocument) -> str:
    return json.dumps(document.to_dict(), indent=2, ensure_ascii=False)


def flatten(obj: Any, prefix: str = "") -> list[tuple[str, Any]]:
    """Flatten nested mappings/sequences into ordered (path, scalar) pairs.

    {"a": 1, "b": [2, 3]} -> [("a", 1), ("b[0]", 2), ("b[1]", 3)]
    """
    if isinstance(obj, Mapping):
        rows: list[tuple[str, Any]] = []
        for key, value in obj.items():
            rows.extend(flatten(value, f"{prefix}.{key}" if prefix else str(key)))
        return rows

    if isinstance(obj, (list, tuple)):
        rows = []
        for i, item in enumerate(obj):
            rows.extend(flatten(item, f"{prefix}[{i}]"))
        return rows

    return [(prefix or "value", obj)]


def csv_escape(value: Any) -> str:
    if value is None:
        return '""'
    if isinstance(value, bool):
        text = "true" if value else "false"
    else:
        text = str(value)
    return '"' + text.replace('"', '""') + '"'


def to_csv(document: ExportDocument | Mapping) -> str:
    payload = document.to_dict() if isinstance(document, ExportDocument) else document
    lines = ["key,value"]
    lines.extend(f"{key},{csv_escape(value)}" for key, value in flatten(payload))
    return "\n".join(lines)


def safe_filename(name: str | None) -> str:
    cleaned = _WHITESPACE_RE.sub("_", name or "location")
    cleaned = _UNSAFE_RE.sub("", cleaned)
    return cleaned[:FILENAME_MAX_LEN]


def export_filename(document: ExportDocument, extension: str) -> str:
    """``<place or lat_lng>_<date>_<hour>.<ext>``, sanitized."""
    req = document.request
    base = document.place_name or f"{req.lat}_{req.lng}"
    return f"{safe_filename(f'{base}_{req.date.isoformat()}_{req.hour}')}.{extension}"
