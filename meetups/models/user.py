"""
Meetups Backend: User Model
==============================

What:  ORM model for the `users` table.
Who:   Rows are provisioned by the auth layer; services only reference them
       as organizers, participants and image owners.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from meetups.database import Base


class User(Base):
    """An account that can organize meetups, attend them and own images."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    # Shown as the organizer name in meetup responses
    fullname: Mapped[str] = mapped_column(String(255), nullable=False)

    email: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        unique=True,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, fullname='{self.fullname}')>"
