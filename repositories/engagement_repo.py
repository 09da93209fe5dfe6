"""
repositories/engagement_repo.py
--------------------------------
Data access layer for likes and comments on posts.
"""

from psycopg2 import errors as pg_errors

from db.connection import dict_cursor, savepoint
from errors import ConflictError, NotFoundError
from models.engagement import Comment, Like, LikedPost
from repositories.base import Repository
from utils.logger import get_logger

logger = get_logger(__name__)


class EngagementRepository(Repository):
    """Attaches and detaches likes and comments."""

    # ── LIKES ─────────────────────────────────────────────

    def add_like(self, username: str, post_id: int) -> Like:
        """
        Like a post.

        Checks run in order and stop at the first failure: the user
        exists, the post exists, the pair is not already liked. The
        unique (user_id, post_id) constraint backs the last check when
        two requests race.

        Raises:
            NotFoundError: Unknown user or post.
            ConflictError: The user already likes this post.
        """
        user_id = self._user_id(username)
        if not self._post_exists(post_id):
            raise NotFoundError(f"No record of post with id: {post_id}")

        already = self._fetch_one(
            "SELECT user_id FROM likes WHERE user_id = %s AND post_id = %s;",
            (user_id, post_id),
        )
        if already:
            logger.warning(f"{username} already likes post #{post_id}")
            raise ConflictError("You already liked this post.")

        try:
            with savepoint(self.conn), dict_cursor(self.conn) as cur:
                cur.execute(
                    """
                    INSERT INTO likes (user_id, post_id)
                    VALUES (%s, %s)
                    RETURNING user_id, post_id;
                    """,
                    (user_id, post_id),
                )
                row = cur.fetchone()
        except pg_errors.UniqueViolation:
            logger.warning(f"Concurrent duplicate like by {username} on post #{post_id}")
            raise ConflictError("You already liked this post.")
        except pg_errors.ForeignKeyViolation:
            raise NotFoundError(f"No record of post with id: {post_id}")

        logger.info(f"{username} liked post #{post_id}")
        return Like(**row)

    def remove_like(self, username: str, post_id: int) -> None:
        """
        Unlike a post. Removing a like that does not exist is not an error.

        Raises:
            NotFoundError: Unknown user.
        """
        user_id = self._user_id(username)
        with self.conn.cursor() as cur:
            cur.execute(
                "DELETE FROM likes WHERE user_id = %s AND post_id = %s;",
                (user_id, post_id),
            )
            if cur.rowcount:
                logger.info(f"{username} unliked post #{post_id}")

    def get_user_likes(self, username: str) -> list[LikedPost]:
        """
        Return the posts a user liked.

        Raises:
            NotFoundError: Unknown user.
        """
        user_id = self._user_id(username)
        rows = self._fetch_all(
            """
            SELECT p.id AS post_id, p.image_file
            FROM likes AS l
            JOIN posts AS p ON p.id = l.post_id
            WHERE l.user_id = %s
            ORDER BY p.date_posted DESC, p.id DESC;
            """,
            (user_id,),
        )
        return [LikedPost(**r) for r in rows]

    # ── COMMENTS ──────────────────────────────────────────

    def add_comment(self, username: str, post_id: int, comment: str) -> Comment:
        """
        Comment on a post.

        Returns:
            The created Comment, including its server timestamp.

        Raises:
            NotFoundError: Unknown user or post.
        """
        user_id = self._user_id(username)
        if not self._post_exists(post_id):
            raise NotFoundError(f"No record of post with id: {post_id}")

        try:
            with savepoint(self.conn), dict_cursor(self.conn) as cur:
                cur.execute(
                    """
                    INSERT INTO comments (user_id, post_id, comment)
                    VALUES (%s, %s, %s)
                    RETURNING id, comment, user_id, post_id, date_posted;
                    """,
                    (user_id, post_id, comment),
                )
                row = cur.fetchone()
        except pg_errors.ForeignKeyViolation:
            # post deleted between the check and the insert
            raise NotFoundError(f"No record of post with id: {post_id}")

        logger.info(f"{username} commented on post #{post_id} (comment #{row['id']})")
        return Comment(**row)

    def remove_comment(self, post_id: int, comment_id: int) -> None:
        """Delete a comment matched by post and comment id. No match is not an error."""
        with self.conn.cursor() as cur:
            cur.execute(
                "DELETE FROM comments WHERE post_id = %s AND id = %s;",
                (post_id, comment_id),
            )
            if cur.rowcount:
                logger.info(f"Deleted comment #{comment_id} from post #{post_id}")
