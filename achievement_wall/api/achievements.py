"""
Achievement API router
"""

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import logging

from achievement_wall.core.exceptions import NotFoundError, StorageFault, ValidationError
from achievement_wall.dependencies import get_db, get_storage
from achievement_wall.schemas.achievement import AchievementCreate, AchievementResponse, LikeResponse
from achievement_wall.schemas.comment import CommentCreate, CommentResponse
from achievement_wall.services import achievement_service, comment_service
from achievement_wall.services.storage import LocalStorage, has_file

logger = logging.getLogger(__name__)

router = APIRouter()


def achievement_form(
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
) -> AchievementCreate:
    """Multipart fields -> AchievementCreate, with the validator message kept."""
    try:
        return AchievementCreate(title=title, description=description)
    except PydanticValidationError as e:
        error = e.errors()[0]
        message = (error.get("ctx") or {}).get("error") or error.get("msg")
        raise ValidationError(str(message)) from e


def checked_image(
    image: Optional[UploadFile] = File(None),
    storage: LocalStorage = Depends(get_storage),
) -> Optional[UploadFile]:
    """Size gate that runs before the create handler touches disk or database."""
    if not has_file(image):
        return None
    storage.check_size(image)
    return image


@router.post("", response_model=AchievementResponse, status_code=status.HTTP_201_CREATED)
async def create_achievement_endpoint(
    image: Optional[UploadFile] = Depends(checked_image),
    achievement_data: AchievementCreate = Depends(achievement_form),
    storage: LocalStorage = Depends(get_storage),
    db: AsyncSession = Depends(get_db),
):
    """Create an achievement with an optional image"""
    image_url = ""
    if image is not None:
        image_url = await storage.save_upload(image)

    try:
        achievement = await achievement_service.create_achievement(db, achievement_data, image_url)
    except StorageFault:
        if image_url:
            storage.delete_url(image_url)
        raise
    return achievement


@router.get("", response_model=List[AchievementResponse])
async def list_achievements_endpoint(db: AsyncSession = Depends(get_db)):
    """All achievements, newest first"""
    return await achievement_service.list_achievements(db)


@router.get("/{achievement_id}", response_model=AchievementResponse)
async def get_achievement_endpoint(achievement_id: int, db: AsyncSession = Depends(get_db)):
    achievement = await achievement_service.get_achievement(db, achievement_id)
    if not achievement:
        raise NotFoundError("Achievement not found")
    return achievement


@router.post("/{achievement_id}/like", response_model=LikeResponse)
async def like_achievement_endpoint(achievement_id: int, db: AsyncSession = Depends(get_db)):
    """Add one like. Every call counts, there is no per-user dedup."""
    likes = await achievement_service.like_achievement(db, achievement_id)
    return LikeResponse(likes=likes)


@router.post("/{achievement_id}/comment", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def create_comment_endpoint(
    achievement_id: int,
    comment_data: CommentCreate,
    db: AsyncSession = Depends(get_db),
):
    """Comment on an achievement"""
    return await comment_service.create_comment(db, achievement_id, comment_data)


@router.get("/{achievement_id}/comments", response_model=List[CommentResponse])
async def list_comments_endpoint(achievement_id: int, db: AsyncSession = Depends(get_db)):
    """Comments of an achievement, newest first. No comments gives an empty list."""
    return await comment_service.list_comments(db, achievement_id)
