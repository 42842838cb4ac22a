"""
Video Model
A video file stored under MEDIA_ROOT.

Used as a project's presentation video or as a category's background video.
"""

from sqlalchemy import Column, String

from app.models.base import BaseModel


class Video(BaseModel):
    __tablename__ = "videos"

    # Absolute path of the stored file
    file_path = Column(String(500), nullable=False)
    mime_type = Column(String(100), nullable=True)

    def __repr__(self):
        return f"<Video(id={self.id}, file_path='{self.file_path}')>"
