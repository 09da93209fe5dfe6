"""
repositories/user_repo.py
--------------------------
Data access layer for user records.
Owns the password-hash lifecycle: plaintext comes in, only bcrypt
digests are stored, and no digest ever leaves this module.

The repository performs no authorization. Callers must already have
checked that the requester may act on ``username`` (and may grant admin
rights, if ``is_admin`` is among the update fields).
"""

from functools import lru_cache
from typing import Any, Mapping, Optional

from psycopg2 import errors as pg_errors

from db.connection import dict_cursor, savepoint
from db.partial_update import sql_for_partial_update
from errors import AuthError, ConflictError, NotFoundError, ValidationError
from models.user import UserComment, UserDetail, UserPost, UserProfile, UserSummary
from repositories.base import Repository
from security.passwords import hash_password, verify_password
from utils.logger import get_logger

logger = get_logger(__name__)

_PROFILE_COLUMNS = """
    username, first_name, last_name, email, profile_image, bio,
    last_modified, is_admin
"""

# JSON spellings accepted by ``update``; snake_case names pass through.
_USER_FIELD_COLUMNS = {
    "firstName": "first_name",
    "lastName": "last_name",
    "profileImage": "profile_image",
    "isAdmin": "is_admin",
}
_UPDATABLE_COLUMNS = frozenset(
    {"first_name", "last_name", "password", "email", "profile_image", "bio", "is_admin"}
)


@lru_cache(maxsize=1)
def _dummy_digest() -> str:
    """Digest checked in place of a real one when the username is unknown."""
    return hash_password("not-a-real-account")


class UserRepository(Repository):
    """Repository for CRUD and authentication on the users table."""

    # ── AUTH ──────────────────────────────────────────────

    def authenticate(self, username: str, password: str) -> UserProfile:
        """
        Check a username/password pair.

        Returns:
            The user's profile, without the password digest.

        Raises:
            AuthError: Unknown username or wrong password (same message).
        """
        row = self._fetch_one(
            f"SELECT password, {_PROFILE_COLUMNS} FROM users WHERE username = %s;",
            (username,),
        )
        if row is None:
            # same bcrypt cost as a wrong password
            verify_password(password, _dummy_digest())
        elif verify_password(password, row.pop("password")):
            return UserProfile(**row)

        logger.warning(f"Failed login for username {username!r}")
        raise AuthError("Invalid username/password")

    # ── CREATE ────────────────────────────────────────────

    def register(
        self,
        username: str,
        password: str,
        first_name: str,
        last_name: str,
        email: str,
        profile_image: Optional[str] = None,
        bio: Optional[str] = None,
        is_admin: bool = False,
    ) -> UserProfile:
        """
        Create a user with a hashed password.

        Raises:
            ConflictError: If the username is taken. Nothing is written.
        """
        if self._fetch_one("SELECT username FROM users WHERE username = %s;", (username,)):
            raise ConflictError(f"Duplicate username: {username}")

        sql = f"""
            INSERT INTO users
                (username, password, first_name, last_name, email,
                 profile_image, bio, is_admin)
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
            RETURNING {_PROFILE_COLUMNS};
        """
        params = (
            username, hash_password(password), first_name, last_name, email,
            profile_image, bio, is_admin,
        )
        try:
            with savepoint(self.conn), dict_cursor(self.conn) as cur:
                cur.execute(sql, params)
                row = cur.fetchone()
        except pg_errors.UniqueViolation:
            raise ConflictError(f"Duplicate username: {username}")
        except Exception as e:
            logger.error(f"Failed to register user {username}: {e}")
            raise

        logger.info(f"Registered user {username}")
        return UserProfile(**row)

    # ── READ ──────────────────────────────────────────────

    def get_id(self, username: str) -> int:
        """
        Resolve a username to its surrogate id.

        Raises:
            NotFoundError: If no such user exists.
        """
        return self._user_id(username)

    def find_all(self) -> list[UserSummary]:
        """Return every user, ordered by username."""
        rows = self._fetch_all(
            """
            SELECT id, username, first_name, last_name, email, profile_image,
                   last_modified, is_admin
            FROM users
            ORDER BY username;
            """
        )
        return [UserSummary(**r) for r in rows]

    def get(self, username: str) -> UserDetail:
        """
        Build the full profile of a user.

        Posts come newest first. Likes, following and followers are lists
        of ids; comments are (post_id, comment_id, comment) records.

        Raises:
            NotFoundError: If no such user exists.
        """
        row = self._fetch_one(
            f"SELECT id, {_PROFILE_COLUMNS} FROM users WHERE username = %s;",
            (username,),
        )
        if row is None:
            raise NotFoundError(f"No user: {username}")
        user_id = row["id"]

        posts = self._fetch_all(
            """
            SELECT id, image_file, caption, date_posted
            FROM posts
            WHERE user_id = %s
            ORDER BY date_posted DESC, id DESC;
            """,
            (user_id,),
        )
        likes = self._fetch_all(
            "SELECT post_id FROM likes WHERE user_id = %s ORDER BY post_id;",
            (user_id,),
        )
        comments = self._fetch_all(
            """
            SELECT post_id, id AS comment_id, comment
            FROM comments
            WHERE user_id = %s
            ORDER BY id;
            """,
            (user_id,),
        )
        following = self._fetch_all(
            "SELECT user_followed_id AS id FROM follows WHERE user_following_id = %s;",
            (user_id,),
        )
        followers = self._fetch_all(
            "SELECT user_following_id AS id FROM follows WHERE user_followed_id = %s;",
            (user_id,),
        )

        return UserDetail(
            **row,
            posts=[UserPost(**p) for p in posts],
            likes=[r["post_id"] for r in likes],
            comments=[UserComment(**c) for c in comments],
            following=[r["id"] for r in following],
            followers=[r["id"] for r in followers],
        )

    # ── UPDATE ────────────────────────────────────────────

    def update(self, username: str, fields: Mapping[str, Any]) -> UserDetail:
        """
        Partially update a user; only the given fields change.

        Args:
            username: Whose record to change.
            fields: Any subset of first_name, last_name, password, email,
                profile_image, bio, is_admin (camelCase spellings accepted).
                A new password is hashed before it is stored.

        Raises:
            ValidationError: No fields, or a field that cannot be updated.
            NotFoundError: If no such user exists.
        """
        data = dict(fields)
        unknown = [
            name for name in data
            if _USER_FIELD_COLUMNS.get(name, name) not in _UPDATABLE_COLUMNS
        ]
        if unknown:
            raise ValidationError(f"Cannot update field(s): {', '.join(sorted(unknown))}")

        if "password" in data:
            data["password"] = hash_password(data["password"])

        upd = sql_for_partial_update(data, _USER_FIELD_COLUMNS)
        sql = f"UPDATE users SET {upd.set_clause} WHERE username = %s RETURNING id;"
        try:
            row = self._fetch_one(sql, [*upd.values, username])
        except Exception as e:
            logger.error(f"Failed to update user {username}: {e}")
            raise

        if row is None:
            raise NotFoundError(f"No user: {username}")

        logger.info(f"Updated user {username}: {', '.join(data)}")
        return self.get(username)

    # ── DELETE ────────────────────────────────────────────

    def remove(self, username: str) -> None:
        """
        Delete a user. Posts, likes, comments and follow edges go with it.

        Raises:
            NotFoundError: If no such user exists.
        """
        row = self._fetch_one(
            "DELETE FROM users WHERE username = %s RETURNING username;", (username,)
        )
        if row is None:
            raise NotFoundError(f"No user: {username}")
        logger.info(f"Deleted user {username}")
