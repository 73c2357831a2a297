"""Typed query functions for the persisted marker state."""

from __future__ import annotations

from typing import Sequence

import duckdb

from point_weather.models import GeoPoint, MarkerSettings


# ---------------------------------------------------------------------------
# drawn_point
# ---------------------------------------------------------------------------

def replace_drawn_points(conn: duckdb.DuckDBPyConnection, points: Sequence[GeoPoint]) -> int:
    """Overwrite the drawn point set. Returns count of rows written."""
    conn.begin()
    try:
        conn.execute("DELETE FROM drawn_point")
        if points:
            conn.executemany(
                "INSERT INTO drawn_point (position, lat, lng) VALUES (?, ?, ?)",
                [[i, p.lat, p.lng] for i, p in enumerate(points)],
            )
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    return len(points)


def get_drawn_points(conn: duckdb.DuckDBPyConnection) -> list[GeoPoint]:
    rows = conn.execute("SELECT lat, lng FROM drawn_point ORDER BY position").fetchall()
    return [GeoPoint(lat=lat, lng=lng) for lat, lng in rows]


# ---------------------------------------------------------------------------
# marker_settings
# ---------------------------------------------------------------------------

def replace_marker_settings(
    conn: duckdb.DuckDBPyConnection,
    settings: Sequence[MarkerSettings],
) -> int:
    """Overwrite all marker settings. Only query fields are stored."""
    conn.begin()
    try:
        conn.execute("DELETE FROM marker_settings")
        if settings:
            conn.executemany("""
                INSERT INTO marker_settings (
                    position, lat, lng, range_start, range_end, specific_date, specific_hour
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
            """, [
                [
                    i, s.point.lat, s.point.lng,
                    s.range_start, s.range_end, s.specific_date, s.specific_hour,
                ]
                for i, s in enumerate(settings)
            ])
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    return len(settings)


def get_marker_settings(conn: duckdb.DuckDBPyConnection) -> list[MarkerSettings]:
    rows = conn.execute("""
        SELECT lat, lng, range_start, range_end, specific_date, specific_hour
        FROM marker_settings
        ORDER BY position
    """).fetchall()
    return [
        MarkerSettings(
            point=GeoPoint(lat=lat, lng=lng),
            range_start=range_start,
            range_end=range_end,
            specific_date=specific_date,
            specific_hour=specific_hour,
        )
        for lat, lng, range_start, range_end, specific_date, specific_hour in rows
    ]
