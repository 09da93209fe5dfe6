"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os
from dotenv import load_dotenv

load_dotenv()


# ── Environment ───────────────────────────────────────────
APP_ENV: str = os.getenv("APP_ENV", "development")
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# ── PostgreSQL ────────────────────────────────────────────
DB_HOST: str = os.getenv("DB_HOST", "localhost")
DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
DB_NAME: str = os.getenv("DB_NAME", "social")
DB_USER: str = os.getenv("DB_USER", "social_user")
DB_PASS: str = os.getenv("DB_PASS", "")

DATABASE_URL: str = os.getenv(
    "DATABASE_URL",
    f"postgresql://{DB_USER}:{DB_PASS}@{DB_HOST}:{DB_PORT}/{DB_NAME}",
)
TEST_DATABASE_URL: str = os.getenv("TEST_DATABASE_URL", "")

DB_POOL_MIN: int = int(os.getenv("DB_POOL_MIN", "1"))
DB_POOL_MAX: int = int(os.getenv("DB_POOL_MAX", "5"))

# ── Security ──────────────────────────────────────────────
# bcrypt needs at least 4 rounds; keep test runs fast.
BCRYPT_WORK_FACTOR: int = int(
    os.getenv("BCRYPT_WORK_FACTOR", "4" if APP_ENV == "test" else "12")
)


def get_database_uri() -> str:
    """Return the database URL for the current environment."""
    if APP_ENV == "test" and TEST_DATABASE_URL:
        return TEST_DATABASE_URL
    return DATABASE_URL
