"""
Comment Pydantic schemas
"""

from pydantic import BaseModel, Field, ConfigDict, field_validator
from datetime import datetime


def _clean_comment(value) -> str:
    text = str(value if value is not None else '').strip()
    if not text:
        raise ValueError('Comment content is required')
    return text


class CommentCreate(BaseModel):
    """Comment creation schema"""
    # A missing field runs through the same check as an empty one
    content: str = Field(default='', validate_default=True)

    @field_validator('content', mode='before')
    @classmethod
    def content_not_blank(cls, v):
        return _clean_comment(v)


class CommentResponse(BaseModel):
    """Comment response schema"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    achievement_id: int
    content: str
    created_at: datetime
