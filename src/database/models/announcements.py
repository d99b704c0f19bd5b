from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from database.models.base import Base, IdMixin, TimestampMixin, utc_now


class AnnouncementModel(IdMixin, TimestampMixin, Base):
    """Model representing announcements shown on the cinema front page.

    ``index_position`` orders the announcements and is assigned on creation
    as one past the current maximum.
    """
    __tablename__ = "announcements"
    __label__ = "Announcement"

    title: Mapped[str] = mapped_column(String(250), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    image: Mapped[str] = mapped_column(
        String(255), nullable=False, default="no-photo.png"
    )
    index_position: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, index=True
    )
    started_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )
    ended_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    def __repr__(self) -> str:
        return (
            f"<AnnouncementModel(id={self.id}, title={self.title}, "
            f"index_position={self.index_position})>"
        )
