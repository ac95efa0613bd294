"""
Achievement services
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from typing import List, Optional
import logging

from achievement_wall.core.database import is_storable_id
from achievement_wall.core.exceptions import NotFoundError, StorageFault
from achievement_wall.models.achievement import Achievement
from achievement_wall.schemas.achievement import AchievementCreate

logger = logging.getLogger(__name__)


async def create_achievement(
    db: AsyncSession,
    achievement_data: AchievementCreate,
    image_url: str = ""
) -> Achievement:
    """Insert an achievement. id and created_at come from the store, likes starts at 0."""
    achievement = Achievement(
        title=achievement_data.title,
        description=achievement_data.description,
        image_url=image_url or "",
        likes=0,
    )
    try:
        db.add(achievement)
        await db.commit()
        await db.refresh(achievement)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to create achievement: {e}")
        raise StorageFault("Failed to add achievement") from e
    logger.info(f"Achievement created: id={achievement.id}")
    return achievement


async def list_achievements(db: AsyncSession) -> List[Achievement]:
    """All achievements, newest first"""
    try:
        result = await db.execute(
            select(Achievement)
            .order_by(Achievement.created_at.desc(), Achievement.id.desc())
        )
        return list(result.scalars().all())
    except SQLAlchemyError as e:
        logger.error(f"Failed to list achievements: {e}")
        raise StorageFault("Failed to fetch achievements") from e


async def get_achievement(db: AsyncSession, achievement_id: int) -> Optional[Achievement]:
    if not is_storable_id(achievement_id):
        return None
    try:
        return await db.get(Achievement, achievement_id)
    except SQLAlchemyError as e:
        logger.error(f"Failed to load achievement {achievement_id}: {e}")
        raise StorageFault("Failed to fetch achievement") from e


async def like_achievement(db: AsyncSession, achievement_id: int) -> int:
    """Add one like and return the count after the increment.

    The increment runs as a single UPDATE and the count is read back before
    the commit, so the write lock held by the transaction keeps concurrent
    likes from overwriting each other.
    """
    if not is_storable_id(achievement_id):
        raise NotFoundError("Achievement not found")
    try:
        result = await db.execute(
            update(Achievement)
            .where(Achievement.id == achievement_id)
            .values(likes=Achievement.likes + 1)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            await db.rollback()
            raise NotFoundError("Achievement not found")

        likes = (await db.execute(
            select(Achievement.likes).where(Achievement.id == achievement_id)
        )).scalar_one()
        await db.commit()
        return likes
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to like achievement {achievement_id}: {e}")
        raise StorageFault("Failed to like achievement") from e
