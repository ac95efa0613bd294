"""
Achievement Pydantic schemas
"""

from pydantic import BaseModel, ConfigDict, field_validator
from datetime import datetime
from typing import Optional


class AchievementCreate(BaseModel):
    """Achievement creation schema (multipart form fields)"""
    title: str
    description: Optional[str] = None

    @field_validator('title', mode='before')
    @classmethod
    def title_not_blank(cls, v):
        text = str(v or '').strip()
        if not text:
            raise ValueError('Title is required')
        return text


class AchievementResponse(BaseModel):
    """Achievement response schema"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    image_url: str = ""
    likes: int = 0
    created_at: datetime


class LikeResponse(BaseModel):
    likes: int
