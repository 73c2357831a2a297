"""DDL for the persisted marker state.

Drawn points and marker settings live in separate tables with no foreign key
between them; they are written independently and reconciled on load.
"""

import duckdb


def create_all_tables(conn: duckdb.DuckDBPyConnection) -> None:
    """Create all tables if they don't already exist."""

    conn.execute("""
        CREATE TABLE IF NOT EXISTS drawn_point (
            position    INTEGER PRIMARY KEY,
            lat         DOUBLE NOT NULL,
            lng         DOUBLE NOT NULL,
            saved_at    TIMESTAMP DEFAULT current_timestamp
        )
    """)

    conn.execute("""
        CREATE TABLE IF NOT EXISTS marker_settings (
            position      INTEGER PRIMARY KEY,
            lat           DOUBLE NOT NULL,
            lng           DOUBLE NOT NULL,
            range_start   DATE,
            range_end     DATE,
            specific_date DATE,
            specific_hour INTEGER CHECK (specific_hour BETWEEN 0 AND 23),
            saved_at      TIMESTAMP DEFAULT current_timestamp
        )
    """)
