"""
models/engagement.py
--------------------
Likes and comments attached to posts.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Like:
    """A (user, post) like edge."""
    user_id: int
    post_id: int


@dataclass
class LikedPost:
    """A post as shown in a user's list of likes."""
    post_id: int
    image_file: str


@dataclass
class Comment:
    """
    A comment on a post.

    Attributes:
        id: Database primary key.
        comment: The comment text.
        user_id: Id of the author.
        post_id: Id of the post commented on.
        date_posted: Server-assigned creation time.
    """
    id: int
    comment: str
    user_id: int
    post_id: int
    date_posted: datetime

    def __str__(self) -> str:
        return f"#{self.id} on post {self.post_id}: {self.comment}"
