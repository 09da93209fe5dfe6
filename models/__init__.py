"""
models/ - Domain Records
=========================
Plain dataclasses returned by the repositories.
Field names match the column aliases used in the repository SQL, so a
dict row maps straight onto a record with ``Model(**row)``.
"""

from models.follow import Follow, FollowSummary
from models.engagement import Comment, Like, LikedPost
from models.post import (
    LikeSummary,
    Post,
    PostAuthor,
    PostComment,
    PostDetail,
    PostLike,
    PostWithAuthor,
)
from models.user import UserComment, UserDetail, UserPost, UserProfile, UserSummary

__all__ = [
    "Comment",
    "Follow",
    "FollowSummary",
    "Like",
    "LikeSummary",
    "LikedPost",
    "Post",
    "PostAuthor",
    "PostComment",
    "PostDetail",
    "PostLike",
    "PostWithAuthor",
    "UserComment",
    "UserDetail",
    "UserPost",
    "UserProfile",
    "UserSummary",
]
