"""
main.py
-------
Entry point for the social backend data layer.

Responsibilities:
    - Initialize the database connection pool.
    - Create the schema (tables, constraints, indexes) if missing.
    - Report how many rows each table holds.

The HTTP layer imports the repositories directly and opens one
``unit_of_work()`` per request; this script only prepares the database.
"""

from db.connection import close_pool, init_pool, unit_of_work
from db.init_db import create_tables
from utils.logger import get_logger

logger = get_logger(__name__)

TABLES = ("users", "posts", "likes", "comments", "follows")


def table_counts(conn) -> dict[str, int]:
    """Return the row count of every table."""
    counts = {}
    with conn.cursor() as cur:
        for table in TABLES:
            cur.execute(f"SELECT COUNT(*) FROM {table};")
            counts[table] = cur.fetchone()[0]
    return counts


def main() -> None:
    init_pool()
    try:
        create_tables()
        with unit_of_work() as conn:
            for table, total in table_counts(conn).items():
                logger.info(f"{table}: {total} row(s)")
    finally:
        close_pool()


if __name__ == "__main__":
    main()
