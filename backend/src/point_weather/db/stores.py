"""Load/save stores over the DuckDB tables, one per persisted artifact."""

from __future__ import annotations

import logging
from typing import Sequence

import duckdb

from point_weather.db.queries import (
    get_drawn_points,
    get_marker_settings,
    replace_drawn_points,
    replace_marker_settings,
)
from point_weather.models import GeoPoint, MarkerSettings

logger = logging.getLogger(__name__)


class DuckDBPointStore:
    def __init__(self, conn: duckdb.DuckDBPyConnection) -> None:
        self.conn = conn

    def load(self) -> list[GeoPoint]:
        return get_drawn_points(self.conn)

    def save(self, points: Sequence[GeoPoint]) -> None:
        count = replace_drawn_points(self.conn, points)
        logger.info("Saved %d drawn points", count)


class DuckDBSettingsStore:
    def __init__(self, conn: duckdb.DuckDBPyConnection) -> None:
        self.conn = conn

    def load(self) -> list[MarkerSettings]:
        return get_marker_settings(self.conn)

    def save(self, settings: Sequence[MarkerSettings]) -> None:
        count = replace_marker_settings(self.conn, settings)
        logger.info("Saved settings for %d markers", count)
