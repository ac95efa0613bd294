"""
Pydantic schema package
"""

from .achievement import AchievementCreate, AchievementResponse, LikeResponse
from .comment import CommentCreate, CommentResponse

__all__ = [
    "AchievementCreate",
    "AchievementResponse",
    "LikeResponse",
    "CommentCreate",
    "CommentResponse",
]
