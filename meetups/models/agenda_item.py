"""
Meetups Backend: Agenda Item Model
=====================================

What:  ORM model for the `agenda_items` table plus the enums shared with
       the schemas.
Why:   An agenda item has no life of its own: it is created with its
       meetup, replaced wholesale when the meetup is updated and deleted
       with it (`delete-orphan` on `Meetup.agenda`, `ON DELETE CASCADE`
       on the foreign key).

Times are stored as zero-padded "HH:MM" strings. The meetup carries the
calendar date; agenda slots only carry the wall-clock time within it, and
lexicographic order of "HH:MM" equals chronological order.
"""

import enum

from sqlalchemy import Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from meetups.database import Base


class AgendaItemType(str, enum.Enum):
    """Kind of slot in a meetup programme."""

    REGISTRATION = "registration"
    OPENING = "opening"
    TALK = "talk"
    BREAK = "break"
    COFFEE = "coffee"
    LUNCH = "lunch"
    CLOSING = "closing"
    AFTERPARTY = "afterparty"
    OTHER = "other"


class Language(str, enum.Enum):
    """Language a talk is given in."""

    RU = "RU"
    EN = "EN"


def _enum_values(enum_cls):
    # Persist the lowercase values, not the member names
    return [member.value for member in enum_cls]


class AgendaItem(Base):
    """A scheduled slot (talk, break, ...) within one meetup."""

    __tablename__ = "agenda_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    meetup_id: Mapped[int] = mapped_column(
        ForeignKey("meetups.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    starts_at: Mapped[str] = mapped_column(String(5), nullable=False)
    ends_at: Mapped[str] = mapped_column(String(5), nullable=False)

    type: Mapped[AgendaItemType] = mapped_column(
        Enum(
            AgendaItemType,
            name="agenda_item_type",
            native_enum=False,
            length=20,
            values_callable=_enum_values,
        ),
        nullable=False,
    )

    title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    speaker: Mapped[str | None] = mapped_column(String(255), nullable=True)

    language: Mapped[Language | None] = mapped_column(
        Enum(
            Language,
            name="agenda_item_language",
            native_enum=False,
            length=2,
            values_callable=_enum_values,
        ),
        nullable=True,
    )

    def __repr__(self) -> str:
        return (
            f"<AgendaItem(id={self.id}, meetup_id={self.meetup_id}, "
            f"type='{self.type}', starts_at='{self.starts_at}')>"
        )
