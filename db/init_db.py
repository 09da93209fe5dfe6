"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db

Pair uniqueness and the no-self-follow rule live in the schema itself,
so they hold even when two requests race past the repository checks.
"""

from db.connection import get_connection, release_connection
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Users table: accounts and profile data
CREATE TABLE IF NOT EXISTS users (
    id              SERIAL PRIMARY KEY,
    username        VARCHAR(25) UNIQUE NOT NULL,
    password        TEXT NOT NULL,
    first_name      TEXT NOT NULL,
    last_name       TEXT NOT NULL,
    email           TEXT NOT NULL CHECK (position('@' IN email) > 1),
    profile_image   TEXT,
    bio             TEXT,
    last_modified   TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    is_admin        BOOLEAN NOT NULL DEFAULT FALSE
);

-- Posts table: one image and caption per post
CREATE TABLE IF NOT EXISTS posts (
    id              SERIAL PRIMARY KEY,
    image_file      TEXT NOT NULL,
    caption         TEXT,
    date_posted     TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    user_id         INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE
);

-- Likes table: at most one like per (user, post)
CREATE TABLE IF NOT EXISTS likes (
    user_id         INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    post_id         INTEGER NOT NULL REFERENCES posts(id) ON DELETE CASCADE,
    UNIQUE(user_id, post_id)
);

-- Comments table
CREATE TABLE IF NOT EXISTS comments (
    id              SERIAL PRIMARY KEY,
    user_id         INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    post_id         INTEGER NOT NULL REFERENCES posts(id) ON DELETE CASCADE,
    comment         TEXT NOT NULL,
    date_posted     TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

-- Follows table: directed edge, never to oneself
CREATE TABLE IF NOT EXISTS follows (
    user_following_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    user_followed_id  INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    UNIQUE(user_following_id, user_followed_id),
    CHECK (user_following_id <> user_followed_id)
);

-- Indexes for faster queries
CREATE INDEX IF NOT EXISTS idx_posts_user_date ON posts(user_id, date_posted DESC);
CREATE INDEX IF NOT EXISTS idx_likes_post ON likes(post_id);
CREATE INDEX IF NOT EXISTS idx_comments_post ON comments(post_id);
CREATE INDEX IF NOT EXISTS idx_follows_followed ON follows(user_followed_id);
"""


def apply_schema(conn) -> None:
    """Execute the schema SQL on an open connection without committing."""
    with conn.cursor() as cur:
        cur.execute(SCHEMA_SQL)


def create_tables() -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    conn = get_connection()
    try:
        apply_schema(conn)
        conn.commit()
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        conn.rollback()
        logger.error(f"Failed to initialize schema: {e}")
        raise
    finally:
        release_connection(conn)


if __name__ == "__main__":
    from db.connection import init_pool
    init_pool()
    create_tables()
    print("Database schema created successfully.")
