"""Request and response schemas."""

from meetups.schemas.meetup import (
    AgendaItemCreate,
    AgendaItemResponse,
    MeetupCreate,
    MeetupResponse,
    MeetupWithAgendaResponse,
)

__all__ = [
    "AgendaItemCreate",
    "AgendaItemResponse",
    "MeetupCreate",
    "MeetupResponse",
    "MeetupWithAgendaResponse",
]
