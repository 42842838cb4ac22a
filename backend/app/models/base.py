"""
Base Model Class

Every table gets a UUID primary key and creation/update timestamps from
BaseModel. Timestamps are set by the database (server_default) so rows
inserted outside the ORM get them too.
"""

import uuid

from sqlalchemy import Column, DateTime, Uuid, func

from app.db.base import Base


class BaseModel(Base):
    """
    Abstract parent of User, Category, Project, Video, Image and ErrorLog.

    Columns:
        id: UUID v4 generated on insert (native UUID on PostgreSQL,
            CHAR(32) on SQLite)
        created_at: Insert time, used to sort project listings
        updated_at: Refreshed by the ORM on every UPDATE
    """

    __abstract__ = True

    id = Column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        nullable=False
    )

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )

    def __repr__(self):
        return f"<{self.__class__.__name__}(id={self.id})>"
