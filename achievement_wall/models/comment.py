"""
Comment model
"""

from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from achievement_wall.core.database import Base
from achievement_wall.core.timeutil import local_now


class Comment(Base):
    """Comment attached to one achievement"""
    __tablename__ = "comments"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    achievement_id = Column(Integer, ForeignKey("achievements.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, default=local_now)

    achievement = relationship("Achievement", back_populates="comments")

    def __repr__(self):
        return f"<Comment(id={self.id}, achievement_id={self.achievement_id})>"
