"""DuckDB connections for the persisted marker state."""

import duckdb
from pathlib import Path

from point_weather.config import DB_PATH


def get_connection(db_path: Path | str = DB_PATH) -> duckdb.DuckDBPyConnection:
    """Open the marker database file, creating its directory on first use."""
    path = Path(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return duckdb.connect(str(path))


def get_memory_connection() -> duckdb.DuckDBPyConnection:
    """Throwaway database used by the test fixtures."""
    return duckdb.connect(":memory:")
