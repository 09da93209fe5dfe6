"""
repositories/post_repo.py
--------------------------
Data access layer for posts.
All SQL queries related to the `posts` table live here.
"""

from typing import Optional

from db.connection import dict_cursor
from errors import NotFoundError
from models.post import (
    LikeSummary,
    Post,
    PostAuthor,
    PostComment,
    PostDetail,
    PostLike,
    PostWithAuthor,
)
from repositories.base import Repository
from utils.logger import get_logger

logger = get_logger(__name__)


class PostRepository(Repository):
    """Repository for CRUD operations on the posts table."""

    # ── CREATE ────────────────────────────────────────────

    def create(self, image_file: str, caption: Optional[str], username: str) -> Post:
        """
        Insert a new post owned by ``username``.

        Returns:
            The created Post, with its id and server-assigned date_posted.

        Raises:
            NotFoundError: If the owner does not exist.
        """
        user_id = self._user_id(username)
        sql = """
            INSERT INTO posts (image_file, caption, user_id)
            VALUES (%s, %s, %s)
            RETURNING id, image_file, caption, date_posted, user_id;
        """
        try:
            with dict_cursor(self.conn) as cur:
                cur.execute(sql, (image_file, caption, user_id))
                row = cur.fetchone()
        except Exception as e:
            logger.error(f"Failed to create post for {username}: {e}")
            raise

        logger.info(f"Added post #{row['id']} for user {username}")
        return Post(**row)

    # ── READ ──────────────────────────────────────────────

    def find_all(self) -> list[PostWithAuthor]:
        """Return all posts, newest first, with author username and avatar."""
        rows = self._fetch_all(
            """
            SELECT p.id, p.image_file, p.caption, p.date_posted, p.user_id,
                   u.username, u.profile_image
            FROM posts AS p
            JOIN users AS u ON u.id = p.user_id
            ORDER BY p.date_posted DESC, p.id DESC;
            """
        )
        return [PostWithAuthor(**r) for r in rows]

    def get(self, post_id: int) -> PostDetail:
        """
        Fetch one post with its author, likes and comments.

        Raises:
            NotFoundError: If the post does not exist.
        """
        post = self._fetch_one(
            """
            SELECT p.id, p.image_file, p.caption, p.date_posted,
                   u.id AS author_id, u.username, u.profile_image
            FROM posts AS p
            JOIN users AS u ON u.id = p.user_id
            WHERE p.id = %s;
            """,
            (post_id,),
        )
        if post is None:
            raise NotFoundError(f"No post with id: {post_id}")

        likes = self._fetch_all(
            """
            SELECT l.user_id, u.username
            FROM likes AS l
            JOIN users AS u ON u.id = l.user_id
            WHERE l.post_id = %s
            ORDER BY u.username;
            """,
            (post_id,),
        )
        comments = self._fetch_all(
            """
            SELECT c.id AS comment_id, c.comment, u.username
            FROM comments AS c
            JOIN users AS u ON u.id = c.user_id
            WHERE c.post_id = %s
            ORDER BY c.date_posted, c.id;
            """,
            (post_id,),
        )

        return PostDetail(
            id=post["id"],
            image_file=post["image_file"],
            caption=post["caption"],
            date_posted=post["date_posted"],
            user=PostAuthor(
                id=post["author_id"],
                username=post["username"],
                profile_image=post["profile_image"],
            ),
            likes=[PostLike(**r) for r in likes],
            comments=[PostComment(**r) for r in comments],
        )

    def get_likes(self, post_id: int) -> list[LikeSummary]:
        """
        Return the users who liked a post.

        An unknown post id gives an empty list rather than an error.
        """
        rows = self._fetch_all(
            """
            SELECT l.user_id, u.username, u.profile_image
            FROM likes AS l
            JOIN users AS u ON u.id = l.user_id
            WHERE l.post_id = %s
            ORDER BY u.username;
            """,
            (post_id,),
        )
        return [LikeSummary(**r) for r in rows]

    # ── DELETE ────────────────────────────────────────────

    def remove(self, post_id: int) -> None:
        """
        Delete a post; its likes and comments go with it.

        Raises:
            NotFoundError: If the post does not exist.
        """
        row = self._fetch_one("DELETE FROM posts WHERE id = %s RETURNING id;", (post_id,))
        if row is None:
            raise NotFoundError(f"No post with id: {post_id}")
        logger.info(f"Deleted post #{post_id}")
