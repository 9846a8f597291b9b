"""
Meetups Backend: Meetup Service (Business Logic)
===================================================

What:  All meetup operations: listing, detail, create, update, delete,
       attend and leave.
Why:   Keeps relationship bookkeeping and viewer-specific view assembly in
       one place, independent of any transport.
How:   Each method receives the caller's `AsyncSession`, works through the
       ORM, flushes, and returns response schemas. Committing is left to
       the caller's session scope.

Viewer flags:
    organizing  organizer_id == user.id
    attending   a `participation` row (user_id, meetup_id) exists

    find_all() computes both inside the listing query (one labelled
    comparison and one correlated EXISTS per row), so a listing is one
    round trip regardless of the number of meetups. find_by_id() already
    has the organizer and participants loaded and checks them in Python.

Error Handling Strategy:
    Only NotFoundError is raised here, for a missing meetup or an unknown
    user; users are looked up by id and never created. SQLAlchemy errors
    propagate to the caller as they are; the session scope rolls the
    transaction back.
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from meetups.exceptions import NotFoundError
from meetups.models.agenda_item import AgendaItem
from meetups.models.image import Image
from meetups.models.meetup import Meetup, participation
from meetups.models.user import User
from meetups.schemas.meetup import (
    AgendaItemCreate,
    MeetupCreate,
    MeetupResponse,
    MeetupWithAgendaResponse,
)

logger = logging.getLogger(__name__)


class MeetupService:
    """
    Business logic layer for meetup operations.

    Stateless: every method takes the session it should work in, so a
    single instance is shared by all callers.
    """

    # ── Reads ────────────────────────────────────────────────────────────

    async def find_all(
        self,
        db: AsyncSession,
        user: Optional[User] = None,
    ) -> List[MeetupResponse]:
        """
        List every meetup, annotated for `user` when one is given.

        Query plan (with a user):
            SELECT meetups.*,
                   meetups.organizer_id = :uid AS organizing,
                   EXISTS (SELECT participation.user_id FROM participation
                           WHERE participation.user_id = :uid
                             AND participation.meetup_id = meetups.id) AS attending
            FROM meetups ORDER BY meetups.id
        """
        if user is None:
            result = await db.execute(select(Meetup).order_by(Meetup.id))
            return [MeetupResponse.from_meetup(m) for m in result.scalars().all()]

        attending = (
            select(participation.c.user_id)
            .where(
                participation.c.user_id == user.id,
                participation.c.meetup_id == Meetup.id,
            )
            .exists()
        )
        stmt = select(
            Meetup,
            (Meetup.organizer_id == user.id).label("organizing"),
            attending.label("attending"),
        ).order_by(Meetup.id)

        result = await db.execute(stmt)
        return [
            MeetupResponse.from_meetup(
                meetup,
                organizing=bool(is_organizing),
                attending=bool(is_attending),
            )
            for meetup, is_organizing, is_attending in result.all()
        ]

    async def find_by_id(
        self,
        db: AsyncSession,
        meetup_id: int,
        user: Optional[User] = None,
    ) -> MeetupWithAgendaResponse:
        """
        Fetch one meetup with its full agenda.

        Raises:
            NotFoundError: no meetup with this id
        """
        meetup = await self._get_meetup(
            db,
            meetup_id,
            selectinload(Meetup.agenda),
            selectinload(Meetup.participants),
        )

        organizing = attending = None
        if user is not None:
            organizing = meetup.organizer_id == user.id
            attending = user.id in {p.id for p in meetup.participants}

        return MeetupWithAgendaResponse.from_meetup(
            meetup, organizing=organizing, attending=attending
        )

    # ── Writes ───────────────────────────────────────────────────────────

    async def create_meetup(
        self,
        db: AsyncSession,
        data: MeetupCreate,
        organizer: User,
    ) -> MeetupWithAgendaResponse:
        """
        Create a meetup with its agenda, organized by `organizer`.

        The cover is attached only if `data.image_id` names an image the
        organizer owns; any other id leaves the meetup without a cover.

        Raises:
            NotFoundError: the organizer is not a known user
        """
        organizer = await self._get_user(db, organizer)

        meetup = Meetup(
            title=data.title,
            description=data.description,
            place=data.place,
            date=data.date,
        )
        meetup.organizer = organizer
        meetup.agenda = self._build_agenda(data.agenda)
        meetup.image = await self._find_owned_image(db, data.image_id, organizer)

        db.add(meetup)
        await db.flush()
        logger.info(
            "Meetup %s created by user %s (%d agenda items)",
            meetup.id, organizer.id, len(meetup.agenda),
        )

        return MeetupWithAgendaResponse.from_meetup(meetup)

    async def update_meetup(
        self,
        db: AsyncSession,
        meetup_id: int,
        data: MeetupCreate,
        organizer: User,
    ) -> MeetupWithAgendaResponse:
        """
        Overwrite a meetup with `data`.

        The agenda is replaced wholesale: existing rows are deleted and the
        items from `data` inserted, so every agenda item gets a new id.
        Without `data.image_id` the current cover image record is deleted.
        The organizer never changes.

        Raises:
            NotFoundError: no meetup with this id, or the user is unknown
        """
        meetup = await self._get_meetup(db, meetup_id, selectinload(Meetup.agenda))
        organizer = await self._get_user(db, organizer)

        meetup.title = data.title
        meetup.description = data.description
        meetup.place = data.place
        meetup.date = data.date

        if data.image_id is not None:
            meetup.image = await self._find_owned_image(db, data.image_id, organizer)
        elif meetup.image is not None:
            await db.delete(meetup.image)
            meetup.image = None

        # delete-orphan removes the previous rows on flush
        meetup.agenda = self._build_agenda(data.agenda)

        await db.flush()
        logger.info("Meetup %s updated (%d agenda items)", meetup.id, len(meetup.agenda))

        return MeetupWithAgendaResponse.from_meetup(meetup)

    async def delete_meetup(self, db: AsyncSession, meetup_id: int) -> None:
        """
        Delete a meetup with its agenda, participation rows and cover image.

        Deleting a meetup that does not exist is a no-op.
        """
        result = await db.execute(
            select(Meetup)
            .where(Meetup.id == meetup_id)
            .options(
                selectinload(Meetup.agenda),
                selectinload(Meetup.participants),
            )
        )
        meetup = result.scalar_one_or_none()
        if meetup is None:
            logger.debug("Delete of missing meetup %s ignored", meetup_id)
            return

        image = meetup.image
        await db.delete(meetup)
        if image is not None:
            await db.delete(image)
        await db.flush()
        logger.info("Meetup %s deleted", meetup_id)

    async def attend_meetup(self, db: AsyncSession, meetup_id: int, user: User) -> None:
        """
        Record that `user` attends the meetup. Attending twice is a no-op.

        Raises:
            NotFoundError: no meetup with this id, or the user is unknown
        """
        meetup = await self._get_meetup(db, meetup_id, selectinload(Meetup.participants))
        user = await self._get_user(db, user)

        if user in meetup.participants:
            return
        meetup.participants.add(user)
        await db.flush()
        logger.info("User %s attends meetup %s", user.id, meetup_id)

    async def leave_meetup(self, db: AsyncSession, meetup_id: int, user: User) -> None:
        """
        Remove `user` from the meetup's participants, if present.

        Raises:
            NotFoundError: no meetup with this id, or the user is unknown
        """
        meetup = await self._get_meetup(db, meetup_id, selectinload(Meetup.participants))
        user = await self._get_user(db, user)

        if user not in meetup.participants:
            return
        meetup.participants.discard(user)
        await db.flush()
        logger.info("User %s left meetup %s", user.id, meetup_id)

    # ── Helpers ──────────────────────────────────────────────────────────

    async def _get_meetup(self, db: AsyncSession, meetup_id: int, *options) -> Meetup:
        result = await db.execute(
            select(Meetup).where(Meetup.id == meetup_id).options(*options)
        )
        meetup = result.scalar_one_or_none()
        if meetup is None:
            logger.warning("Meetup %s not found", meetup_id)
            raise NotFoundError(resource="meetup", resource_id=meetup_id)
        return meetup

    async def _get_user(self, db: AsyncSession, user: User) -> User:
        """The persistent row for `user`; callers may pass detached instances."""
        found = await db.get(User, user.id)
        if found is None:
            logger.warning("User %s not found", user.id)
            raise NotFoundError(resource="user", resource_id=user.id)
        return found

    async def _find_owned_image(
        self,
        db: AsyncSession,
        image_id: Optional[int],
        owner: User,
    ) -> Optional[Image]:
        if image_id is None:
            return None
        result = await db.execute(
            select(Image).where(Image.id == image_id, Image.user_id == owner.id)
        )
        image = result.scalar_one_or_none()
        if image is None:
            logger.warning(
                "Image %s is not owned by user %s; meetup left without cover",
                image_id, owner.id,
            )
        return image

    @staticmethod
    def _build_agenda(items: List[AgendaItemCreate]) -> List[AgendaItem]:
        return [AgendaItem(**item.model_dump()) for item in items]


# ── Singleton Instance ────────────────────────────────────────────────────
meetup_service = MeetupService()
