"""
models/user.py
--------------
Domain models for user accounts.
None of them carries the password digest.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class UserProfile:
    """
    A user's own profile, as returned by login, registration and update.

    Attributes:
        username: Unique, immutable handle.
        first_name: Given name.
        last_name: Family name.
        email: Contact address.
        profile_image: Optional avatar URL.
        bio: Optional free text.
        last_modified: Timestamp of the last profile change.
        is_admin: Whether the user has admin rights.
    """
    username: str
    first_name: str
    last_name: str
    email: str
    profile_image: Optional[str] = None
    bio: Optional[str] = None
    last_modified: Optional[datetime] = None
    is_admin: bool = False


@dataclass
class UserSummary:
    """One row of the user directory."""
    id: int
    username: str
    first_name: str
    last_name: str
    email: str
    profile_image: Optional[str] = None
    last_modified: Optional[datetime] = None
    is_admin: bool = False


@dataclass
class UserPost:
    """A post listed on its author's profile."""
    id: int
    image_file: str
    caption: Optional[str]
    date_posted: datetime


@dataclass
class UserComment:
    """A comment the user wrote, with the post it belongs to."""
    post_id: int
    comment_id: int
    comment: str


@dataclass
class UserDetail:
    """
    Composite profile view.

    Attributes:
        posts: The user's own posts, newest first.
        likes: Ids of posts the user liked.
        comments: Comments the user wrote.
        following: Ids of users this user follows.
        followers: Ids of users following this user.
    """
    id: int
    username: str
    first_name: str
    last_name: str
    email: str
    profile_image: Optional[str] = None
    bio: Optional[str] = None
    last_modified: Optional[datetime] = None
    is_admin: bool = False
    posts: list[UserPost] = field(default_factory=list)
    likes: list[int] = field(default_factory=list)
    comments: list[UserComment] = field(default_factory=list)
    following: list[int] = field(default_factory=list)
    followers: list[int] = field(default_factory=list)
