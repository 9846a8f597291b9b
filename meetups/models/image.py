"""
Meetups Backend: Image Model
===============================

What:  ORM model for the `images` table.
Who:   Rows are produced by the image-upload service; a meetup references
       at most one image as its cover, and only images owned by the
       meetup's organizer are ever attached.
"""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from meetups.database import Base


class Image(Base):
    """An uploaded picture owned by a user."""

    __tablename__ = "images"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    # Public URL (or storage-relative path) handed out as the meetup cover
    url: Mapped[str] = mapped_column(String(1024), nullable=False)

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Image(id={self.id}, user_id={self.user_id})>"
