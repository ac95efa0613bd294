"""
Model package
"""

from .achievement import Achievement
from .comment import Comment

__all__ = [
    "Achievement",
    "Comment",
]
