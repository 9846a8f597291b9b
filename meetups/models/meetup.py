"""
Meetups Backend: Meetup Model
================================

What:  ORM model for the `meetups` table and the `participation` join table.
How:   Inherits from the shared declarative `Base`; Alembic reads it for
       migrations.

Relationship map:
    Meetup ──organizer──▶ User           (many-to-one, required)
    Meetup ──image──────▶ Image | None   (many-to-one, unique FK)
    Meetup ◀─agenda─────▶ AgendaItem[]   (one-to-many, owned, ordered)
    Meetup ◀─participants─▶ User{}       (many-to-many via `participation`)

Loading strategy:
    `organizer` and `image` are small and needed by every response, so
    they are always loaded with a follow-up SELECT ... IN. `agenda` and
    `participants` are only loaded when a service asks for them with
    `selectinload()`; async sessions cannot lazy-load on attribute access.
"""

from datetime import datetime
from typing import List, Optional, Set

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from meetups.database import Base
from meetups.models.agenda_item import AgendaItem
from meetups.models.image import Image
from meetups.models.user import User


# ── Participation ─────────────────────────────────────────────────────────
# A row means "user attends meetup"; nothing else is stored. The composite
# primary key makes attending twice impossible at the database level.
participation = Table(
    "participation",
    Base.metadata,
    Column(
        "user_id",
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "meetup_id",
        ForeignKey("meetups.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
)


class Meetup(Base):
    """
    A meetup event.

    Lifecycle:
        1. Created by its organizer together with its agenda
        2. Updated by replacing scalar fields, the image and the whole agenda
        3. Users attend / leave (rows in `participation`)
        4. Deleted together with agenda, participation rows and image
    """

    __tablename__ = "meetups"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # unique: an image can be the cover of at most one meetup at a time
    image_id: Mapped[int | None] = mapped_column(
        ForeignKey("images.id", ondelete="SET NULL"),
        nullable=True,
        unique=True,
    )

    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )

    organizer_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )

    place: Mapped[str] = mapped_column(String(255), nullable=False)

    # ── Relationships ─────────────────────────────────────────────────────
    organizer: Mapped[User] = relationship(lazy="selectin")

    image: Mapped[Optional[Image]] = relationship(lazy="selectin")

    agenda: Mapped[List[AgendaItem]] = relationship(
        cascade="all, delete-orphan",
        order_by=AgendaItem.id,
        passive_deletes=True,
    )

    participants: Mapped[Set[User]] = relationship(
        secondary=participation,
        collection_class=set,
    )

    @property
    def cover(self) -> Optional[str]:
        """URL of the cover image, if one is attached."""
        return self.image.url if self.image is not None else None

    def __repr__(self) -> str:
        return (
            f"<Meetup(id={self.id}, title='{self.title}', "
            f"organizer_id={self.organizer_id})>"
        )
