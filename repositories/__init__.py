"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates all SQL queries for a specific domain entity.
Repositories are constructed with the request's connection, never commit
on their own, and raise typed errors from ``errors`` on the first failing
precondition.
"""

from repositories.engagement_repo import EngagementRepository
from repositories.follow_repo import FollowRepository
from repositories.post_repo import PostRepository
from repositories.user_repo import UserRepository

__all__ = [
    "EngagementRepository",
    "FollowRepository",
    "PostRepository",
    "UserRepository",
]
