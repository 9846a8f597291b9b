"""Create users, images, meetups, agenda_items and participation tables

Revision ID: 001
Revises: None
Create Date: 2026-10-17 00:00:00.000000+00:00

Creates the full meetup schema. Table order follows the foreign keys:
users → images → meetups → agenda_items / participation.

Rollback: downgrade() drops every table (destructive).
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

AGENDA_ITEM_TYPES = (
    "registration",
    "opening",
    "talk",
    "break",
    "coffee",
    "lunch",
    "closing",
    "afterparty",
    "other",
)


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("fullname", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    op.create_table(
        "images",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("url", sa.String(1024), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_images"),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"],
            name="fk_images_user_id_users",
            ondelete="CASCADE",
        ),
    )
    op.create_index("ix_images_user_id", "images", ["user_id"])

    op.create_table(
        "meetups",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("image_id", sa.Integer(), nullable=True),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("organizer_id", sa.Integer(), nullable=False),
        sa.Column("place", sa.String(255), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_meetups"),
        sa.UniqueConstraint("image_id", name="uq_meetups_image_id"),
        sa.ForeignKeyConstraint(
            ["image_id"], ["images.id"],
            name="fk_meetups_image_id_images",
            ondelete="SET NULL",
        ),
        sa.ForeignKeyConstraint(
            ["organizer_id"], ["users.id"],
            name="fk_meetups_organizer_id_users",
        ),
    )
    op.create_index("ix_meetups_date", "meetups", ["date"])
    op.create_index("ix_meetups_organizer_id", "meetups", ["organizer_id"])

    op.create_table(
        "agenda_items",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("meetup_id", sa.Integer(), nullable=False),
        sa.Column("starts_at", sa.String(5), nullable=False),
        sa.Column("ends_at", sa.String(5), nullable=False),
        sa.Column(
            "type",
            sa.Enum(
                *AGENDA_ITEM_TYPES,
                name="agenda_item_type",
                native_enum=False,
                length=20,
            ),
            nullable=False,
        ),
        sa.Column("title", sa.String(255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("speaker", sa.String(255), nullable=True),
        sa.Column(
            "language",
            sa.Enum("RU", "EN", name="agenda_item_language", native_enum=False, length=2),
            nullable=True,
        ),
        sa.PrimaryKeyConstraint("id", name="pk_agenda_items"),
        sa.ForeignKeyConstraint(
            ["meetup_id"], ["meetups.id"],
            name="fk_agenda_items_meetup_id_meetups",
            ondelete="CASCADE",
        ),
    )
    op.create_index("ix_agenda_items_meetup_id", "agenda_items", ["meetup_id"])

    op.create_table(
        "participation",
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("meetup_id", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("user_id", "meetup_id", name="pk_participation"),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"],
            name="fk_participation_user_id_users",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["meetup_id"], ["meetups.id"],
            name="fk_participation_meetup_id_meetups",
            ondelete="CASCADE",
        ),
    )
    op.create_index("ix_participation_meetup_id", "participation", ["meetup_id"])


def downgrade() -> None:
    op.drop_index("ix_participation_meetup_id", table_name="participation")
    op.drop_table("participation")
    op.drop_index("ix_agenda_items_meetup_id", table_name="agenda_items")
    op.drop_table("agenda_items")
    op.drop_index("ix_meetups_organizer_id", table_name="meetups")
    op.drop_index("ix_meetups_date", table_name="meetups")
    op.drop_table("meetups")
    op.drop_index("ix_images_user_id", table_name="images")
    op.drop_table("images")
    op.drop_table("users")
