"""
Achievement model
"""

from sqlalchemy import Column, String, Text, Integer, DateTime
from sqlalchemy.orm import relationship

from achievement_wall.core.database import Base
from achievement_wall.core.timeutil import local_now


class Achievement(Base):
    """Achievement model"""
    __tablename__ = "achievements"
    # AUTOINCREMENT keeps ids from ever being reused
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    title = Column(Text, nullable=False)
    description = Column(Text)
    image_url = Column(String(512), nullable=False, default="")
    likes = Column(Integer, nullable=False, default=0, server_default="0")
    created_at = Column(DateTime, nullable=False, default=local_now, index=True)

    comments = relationship("Comment", back_populates="achievement")

    def __repr__(self):
        return f"<Achievement(id={self.id}, title={self.title}, likes={self.likes})>"
