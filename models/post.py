"""
models/post.py
--------------
Domain models for posts and the views built around them.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class Post:
    """
    A single post.

    Attributes:
        id: Database primary key.
        image_file: URL or path of the posted image.
        caption: Optional caption text.
        date_posted: Server-assigned creation time.
        user_id: Id of the owner.
    """
    id: int
    image_file: str
    caption: Optional[str]
    date_posted: datetime
    user_id: int


@dataclass
class PostWithAuthor(Post):
    """A feed row: the post plus its author's username and avatar."""
    username: Optional[str] = None
    profile_image: Optional[str] = None


@dataclass
class PostAuthor:
    id: int
    username: str
    profile_image: Optional[str] = None


@dataclass
class PostLike:
    user_id: int
    username: str


@dataclass
class PostComment:
    comment_id: int
    comment: str
    username: str


@dataclass
class LikeSummary:
    """A user who liked a post."""
    user_id: int
    username: str
    profile_image: Optional[str] = None


@dataclass
class PostDetail:
    """A post with its author, likes and comments."""
    id: int
    image_file: str
    caption: Optional[str]
    date_posted: datetime
    user: PostAuthor
    likes: list[PostLike] = field(default_factory=list)
    comments: list[PostComment] = field(default_factory=list)
