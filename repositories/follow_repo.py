"""
repositories/follow_repo.py
----------------------------
Data access layer for the follow graph.
Edges are directed: ``user_following_id`` follows ``user_followed_id``.
"""

from psycopg2 import errors as pg_errors

from db.connection import dict_cursor, savepoint
from errors import ConflictError, NotFoundError
from models.follow import Follow, FollowSummary
from repositories.base import Repository
from utils.logger import get_logger

logger = get_logger(__name__)


class FollowRepository(Repository):
    """Repository for follow edges between users."""

    def follow(self, username: str, followed_id: int) -> Follow:
        """
        Make ``username`` follow the user with id ``followed_id``.

        Checks, in order: follower exists, followed user exists, not a
        self-follow, not already following.

        Raises:
            NotFoundError: Either user is unknown.
            ConflictError: Self-follow, or the edge already exists.
        """
        follower_id = self._user_id(username)

        if self._fetch_one("SELECT id FROM users WHERE id = %s;", (followed_id,)) is None:
            raise NotFoundError(f"No record of user: {followed_id}")

        if followed_id == follower_id:
            raise ConflictError("You can not follow yourself.")

        existing = self._fetch_one(
            """
            SELECT user_following_id FROM follows
            WHERE user_following_id = %s AND user_followed_id = %s;
            """,
            (follower_id, followed_id),
        )
        if existing:
            logger.warning(f"{username} already follows user {followed_id}")
            raise ConflictError(f"You already follow user with id: {followed_id}")

        try:
            with savepoint(self.conn), dict_cursor(self.conn) as cur:
                cur.execute(
                    """
                    INSERT INTO follows (user_following_id, user_followed_id)
                    VALUES (%s, %s)
                    RETURNING user_following_id AS following_id,
                              user_followed_id AS followed_id;
                    """,
                    (follower_id, followed_id),
                )
                row = cur.fetchone()
        except pg_errors.UniqueViolation:
            raise ConflictError(f"You already follow user with id: {followed_id}")
        except pg_errors.CheckViolation:
            raise ConflictError("You can not follow yourself.")
        except pg_errors.ForeignKeyViolation:
            raise NotFoundError(f"No record of user: {followed_id}")

        logger.info(f"{username} now follows user {followed_id}")
        return Follow(**row)

    def unfollow(self, username: str, followed_id: int) -> None:
        """
        Remove the edge ``username`` -> ``followed_id``.

        Raises:
            NotFoundError: Unknown follower, or no such edge.
        """
        follower_id = self._user_id(username)
        with self.conn.cursor() as cur:
            cur.execute(
                """
                DELETE FROM follows
                WHERE user_following_id = %s AND user_followed_id = %s;
                """,
                (follower_id, followed_id),
            )
            deleted = cur.rowcount > 0

        if not deleted:
            raise NotFoundError(
                f"No record of {username} following user with id: {followed_id}"
            )
        logger.info(f"{username} unfollowed user {followed_id}")

    def following(self, username: str) -> list[FollowSummary]:
        """Users that ``username`` follows. Order is unspecified."""
        user_id = self._user_id(username)
        rows = self._fetch_all(
            """
            SELECT u.id AS user_id, u.username, u.first_name, u.last_name,
                   u.profile_image
            FROM follows AS f
            JOIN users AS u ON u.id = f.user_followed_id
            WHERE f.user_following_id = %s;
            """,
            (user_id,),
        )
        return [FollowSummary(**r) for r in rows]

    def followers(self, username: str) -> list[FollowSummary]:
        """Users following ``username``. Order is unspecified."""
        user_id = self._user_id(username)
        rows = self._fetch_all(
            """
            SELECT u.id AS user_id, u.username, u.first_name, u.last_name,
                   u.profile_image
            FROM follows AS f
            JOIN users AS u ON u.id = f.user_following_id
            WHERE f.user_followed_id = %s;
            """,
            (user_id,),
        )
        return [FollowSummary(**r) for r in rows]
