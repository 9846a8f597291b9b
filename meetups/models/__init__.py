"""
ORM models.

Importing this package registers every table with `Base.metadata`, which
is what Alembic and `create_all()` rely on.
"""

from meetups.models.agenda_item import AgendaItem, AgendaItemType, Language
from meetups.models.image import Image
from meetups.models.meetup import Meetup, participation
from meetups.models.user import User

__all__ = [
    "AgendaItem",
    "AgendaItemType",
    "Image",
    "Language",
    "Meetup",
    "User",
    "participation",
]
