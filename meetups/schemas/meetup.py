"""
Meetups Backend: Pydantic Request/Response Schemas
=====================================================

What:  Pydantic models defining the contract between the service layer and
       whoever calls it (an HTTP layer, scripts, tests).
Why:   Callers hand in already-validated input and get back plain,
       serializable views; ORM objects never leave the service.

Design Decision:
    Schemas are separate from SQLAlchemy models because the views differ
    from the tables: `organizer` is the organizer's full name, `cover` is
    the image URL, `date` is epoch milliseconds, and `organizing` /
    `attending` depend on who is asking.
"""

import re
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from meetups.models.agenda_item import AgendaItem, AgendaItemType, Language
from meetups.models.meetup import Meetup

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def to_epoch_millis(value: datetime) -> int:
    """Milliseconds since the Unix epoch; naive datetimes are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp() * 1000)


# ══════════════════════════════════════════════════════════════════════════
# Input Models
# ══════════════════════════════════════════════════════════════════════════


class AgendaItemCreate(BaseModel):
    """One agenda slot as supplied when creating or updating a meetup."""

    starts_at: str = Field(description="Start time, 24h 'HH:MM'")
    ends_at: str = Field(description="End time, 24h 'HH:MM'")
    type: AgendaItemType = Field(description="Kind of slot")
    title: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = Field(default=None)
    speaker: Optional[str] = Field(default=None, max_length=255)
    language: Optional[Language] = Field(default=None)

    @field_validator("starts_at", "ends_at")
    @classmethod
    def validate_time(cls, v: str) -> str:
        """Accepts zero-padded 24h times only, so string order is time order."""
        if not _TIME_RE.match(v):
            raise ValueError(f"Invalid time '{v}'. Expected HH:MM (24h)")
        return v

    @model_validator(mode="after")
    def validate_order(self) -> "AgendaItemCreate":
        if self.ends_at < self.starts_at:
            raise ValueError("ends_at must not be earlier than starts_at")
        return self


class MeetupCreate(BaseModel):
    """
    Payload for creating a meetup and, unchanged, for updating one.

    An update is a full replacement: the agenda given here replaces the
    stored agenda, and leaving `image_id` out removes the current cover.
    """

    title: str = Field(min_length=1, max_length=255)
    description: str = Field(default="")
    place: str = Field(min_length=1, max_length=255)
    date: datetime = Field(description="When the meetup takes place")
    image_id: Optional[int] = Field(
        default=None,
        description="Cover image; must belong to the organizer",
    )
    agenda: List[AgendaItemCreate] = Field(default_factory=list)

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v: datetime) -> datetime:
        """Stores dates in UTC; SQLite keeps the wall-clock time and drops the offset."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class AgendaItemResponse(BaseModel):
    """A stored agenda slot."""

    id: int
    starts_at: str
    ends_at: str
    type: AgendaItemType
    title: Optional[str] = None
    description: Optional[str] = None
    speaker: Optional[str] = None
    language: Optional[Language] = None

    model_config = {"from_attributes": True}

    @classmethod
    def from_item(cls, item: AgendaItem) -> "AgendaItemResponse":
        return cls.model_validate(item)


class MeetupResponse(BaseModel):
    """
    A meetup as seen by a particular viewer.

    `organizing` and `attending` are None when nobody is asking (anonymous
    listing) and booleans when a user was supplied.
    """

    id: int
    title: str
    description: str
    cover: Optional[str] = Field(default=None, description="Cover image URL")
    date: int = Field(description="Epoch milliseconds")
    organizer: str = Field(description="Organizer's full name")
    place: str
    organizing: Optional[bool] = None
    attending: Optional[bool] = None

    @classmethod
    def from_meetup(
        cls,
        meetup: Meetup,
        organizing: Optional[bool] = None,
        attending: Optional[bool] = None,
    ) -> "MeetupResponse":
        return cls(**_meetup_fields(meetup, organizing, attending))


class MeetupWithAgendaResponse(MeetupResponse):
    """Detail view: the meetup plus its full agenda, in insertion order."""

    agenda: List[AgendaItemResponse] = Field(default_factory=list)

    @classmethod
    def from_meetup(
        cls,
        meetup: Meetup,
        organizing: Optional[bool] = None,
        attending: Optional[bool] = None,
    ) -> "MeetupWithAgendaResponse":
        return cls(
            **_meetup_fields(meetup, organizing, attending),
            agenda=[AgendaItemResponse.from_item(item) for item in meetup.agenda],
        )


def _meetup_fields(
    meetup: Meetup,
    organizing: Optional[bool],
    attending: Optional[bool],
) -> dict:
    return {
        "id": meetup.id,
        "title": meetup.title,
        "description": meetup.description,
        "cover": meetup.cover,
        "date": to_epoch_millis(meetup.date),
        "organizer": meetup.organizer.fullname,
        "place": meetup.place,
        "organizing": organizing,
        "attending": attending,
    }
