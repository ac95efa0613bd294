"""
Comment services
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from typing import List
import logging

from achievement_wall.core.database import is_storable_id
from achievement_wall.core.exceptions import NotFoundError, StorageFault
from achievement_wall.models.achievement import Achievement
from achievement_wall.models.comment import Comment
from achievement_wall.schemas.comment import CommentCreate

logger = logging.getLogger(__name__)


async def create_comment(
    db: AsyncSession,
    achievement_id: int,
    comment_data: CommentCreate
) -> Comment:
    """Attach a comment to an existing achievement."""
    if not is_storable_id(achievement_id):
        raise NotFoundError("Achievement not found")
    try:
        # 1. The achievement has to exist; orphan comments are never written
        achievement = await db.get(Achievement, achievement_id)
        if not achievement:
            raise NotFoundError("Achievement not found")

        # 2. Insert the comment
        comment = Comment(
            achievement_id=achievement_id,
            content=comment_data.content
        )
        db.add(comment)
        await db.commit()
        await db.refresh(comment)
        return comment
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to add comment to achievement {achievement_id}: {e}")
        raise StorageFault("Failed to add comment") from e


async def list_comments(db: AsyncSession, achievement_id: int) -> List[Comment]:
    """Comments of one achievement, newest first"""
    if not is_storable_id(achievement_id):
        return []
    try:
        result = await db.execute(
            select(Comment)
            .where(Comment.achievement_id == achievement_id)
            .order_by(Comment.created_at.desc(), Comment.id.desc())
        )
        return list(result.scalars().all())
    except SQLAlchemyError as e:
        logger.error(f"Failed to list comments of achievement {achievement_id}: {e}")
        raise StorageFault("Failed to fetch comments") from e
