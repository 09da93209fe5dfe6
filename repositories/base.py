"""
repositories/base.py
--------------------
Shared plumbing for the repositories: the injected connection and the
existence lookups every entity needs before it writes.
"""

from typing import Optional

from db.connection import dict_cursor
from errors import NotFoundError


class Repository:
    """Base class holding the request's database connection."""

    def __init__(self, conn):
        """
        Args:
            conn: An open psycopg2 connection, normally from ``unit_of_work()``.
                The repository never commits; the owner of the connection does.
        """
        self.conn = conn

    def _fetch_one(self, sql: str, params: tuple | list = ()) -> Optional[dict]:
        with dict_cursor(self.conn) as cur:
            cur.execute(sql, params)
            row = cur.fetchone()
            return dict(row) if row else None

    def _fetch_all(self, sql: str, params: tuple | list = ()) -> list[dict]:
        with dict_cursor(self.conn) as cur:
            cur.execute(sql, params)
            return [dict(r) for r in cur.fetchall()]

    def _user_id(self, username: str) -> int:
        """Resolve a username to its id, or raise NotFoundError."""
        row = self._fetch_one("SELECT id FROM users WHERE username = %s;", (username,))
        if row is None:
            raise NotFoundError(f"No record of user: {username}")
        return row["id"]

    def _post_exists(self, post_id: int) -> bool:
        return self._fetch_one("SELECT id FROM posts WHERE id = %s;", (post_id,)) is not None
