"""
models/follow.py
----------------
Directed follow edges between users.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Follow:
    """``following_id`` follows ``followed_id``. The two are never equal."""
    following_id: int
    followed_id: int


@dataclass
class FollowSummary:
    """A user on the other end of a follow edge."""
    user_id: int
    username: str
    first_name: str
    last_name: str
    profile_image: Optional[str] = None
