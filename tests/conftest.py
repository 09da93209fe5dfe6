# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Iterator
from types import SimpleNamespace

import pytest

os.environ.setdefault("APP_ENV", "test")

import psycopg2  # noqa: E402

from config import TEST_DATABASE_URL  # noqa: E402
from db.init_db import apply_schema  # noqa: E402
from repositories import (  # noqa: E402
    EngagementRepository,
    FollowRepository,
    PostRepository,
    UserRepository,
)
from security.passwords import hash_password  # noqa: E402

USER_IDS = (1000, 1001, 1002)


def pytest_collection_modifyitems(config, items):
    if TEST_DATABASE_URL:
        return
    skip_db = pytest.mark.skip(reason="TEST_DATABASE_URL is not set")
    for item in items:
        if item.get_closest_marker("db"):
            item.add_marker(skip_db)


@pytest.fixture(scope="session")
def password_hashes() -> list[str]:
    return [hash_password(f"password{i}") for i in (1, 2, 3)]


@pytest.fixture(scope="session")
def db_connection() -> Iterator:
    conn = psycopg2.connect(TEST_DATABASE_URL)
    try:
        yield conn
    finally:
        conn.close()


def _seed(conn, password_hashes: list[str]) -> list[int]:
    with conn.cursor() as cur:
        for table in ("follows", "comments", "likes", "posts", "users"):
            cur.execute(f"DELETE FROM {table};")

        for i, (user_id, digest) in enumerate(zip(USER_IDS, password_hashes), start=1):
            cur.execute(
                """
                INSERT INTO users (id, username, password, first_name, last_name,
                                   email, profile_image, bio, is_admin)
                VALUES (%s, %s, %s, %s, %s, %s, 'img.png', 'Test Bio', FALSE);
                """,
                (user_id, f"testuser{i}", digest, f"firstname{i}", f"lastname{i}",
                 f"tester{i}@test.com"),
            )

        post_ids = []
        for user_id in USER_IDS:
            cur.execute(
                "INSERT INTO posts (image_file, caption, user_id) "
                "VALUES ('img.jpg', 'test!', %s) RETURNING id;",
                (user_id,),
            )
            post_ids.append(cur.fetchone()[0])

        cur.execute(
            "INSERT INTO likes (user_id, post_id) VALUES (1000, %s), (1000, %s), (1001, %s);",
            post_ids,
        )
        cur.execute(
            """
            INSERT INTO follows (user_following_id, user_followed_id)
            VALUES (1000, 1001), (1000, 1002), (1001, 1000), (1002, 1000), (1002, 1001);
            """
        )
        cur.execute(
            """
            INSERT INTO comments (id, user_id, post_id, comment)
            VALUES (500, 1000, %s, 'awesome picture!'),
                   (501, 1001, %s, 'looking great'),
                   (502, 1002, %s, 'congrats dan!');
            """,
            post_ids,
        )
    return post_ids


@pytest.fixture()
def db(db_connection, password_hashes) -> Iterator[SimpleNamespace]:
    """
    A seeded database inside one transaction, rolled back after the test.

    Seed: testuser1..3 (ids 1000..1002, passwords password1..3), one post
    each, likes 1000->p0, 1000->p1, 1001->p2, five follow edges and one
    comment per post.
    """
    conn = db_connection
    apply_schema(conn)
    post_ids = _seed(conn, password_hashes)
    try:
        yield SimpleNamespace(conn=conn, post_ids=post_ids)
    finally:
        conn.rollback()


@pytest.fixture()
def users(db) -> UserRepository:
    return UserRepository(db.conn)


@pytest.fixture()
def posts(db) -> PostRepository:
    return PostRepository(db.conn)


@pytest.fixture()
def engagement(db) -> EngagementRepository:
    return EngagementRepository(db.conn)


@pytest.fixture()
def follows(db) -> FollowRepository:
    return FollowRepository(db.conn)


@pytest.fixture()
def scalar(db):
    """Run a query on the test connection and return the first column of the first row."""

    def _scalar(sql: str, params: tuple = ()):
        with db.conn.cursor() as cur:
            cur.execute(sql, params)
            return cur.fetchone()[0]

    return _scalar
