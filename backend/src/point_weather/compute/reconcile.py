"""Marker/settings reconciliation.

Drawn marker points and per-marker query settings are persisted separately and
may disagree (a point deleted while its settings survived, a new point without
settings). Reconciliation keys settings by exact coordinate equality, keeps the
current point order, gives new points blank settings and drops orphans.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Sequence

from point_weather.models import GeoPoint, MarkerSettings

_EDITABLE_FIELDS = {"range_start", "range_end", "specific_date", "specific_hour"}


def reconcile_markers(
    points: Sequence[GeoPoint],
    persisted: Iterable[MarkerSettings],
) -> list[MarkerSettings]:
    """Settings for each current point, in point order."""
    by_point: dict[GeoPoint, MarkerSettings] = {}
    for settings in persisted:
        # First persisted record wins on duplicate coordinates
        by_point.setdefault(settings.point, settings)

    reconciled = []
    for point in points:
        existing = by_point.get(point)
        if existing is None:
            reconciled.append(MarkerSettings(point=point))
        else:
            reconciled.append(MarkerSettings(
                point=point,
                range_start=existing.range_start,
                range_end=existing.range_end,
                specific_date=existing.specific_date,
                specific_hour=existing.specific_hour,
            ))
    return reconciled


def update_settings(
    markers: Sequence[MarkerSettings],
    index: int,
    **changes,
) -> list[MarkerSettings]:
    """Return a new list with one marker's query fields replaced."""
    if not 0 <= index < len(markers):
        raise IndexError(f"marker index {index} out of range")
    unknown = set(changes) - _EDITABLE_FIELDS
    if unknown:
        raise ValueError(f"not editable: {', '.join(sorted(unknown))}")
    if changes.get("specific_hour") is not None:
        validate_hour(changes["specific_hour"])

    updated = list(markers)
    updated[index] = replace(markers[index], **changes)
    return updated


def validate_hour(hour: int) -> int:
    if not 0 <= int(hour) <= 23:
        raise ValueError(f"hour must be within 0..23, got {hour}")
    return int(hour)
