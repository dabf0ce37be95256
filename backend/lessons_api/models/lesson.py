"""Lesson ORM — content items plus their like/favorite email sets.

Invariants:
    - creator_email immutable after insert (no update path writes it)
    - (lesson_id, account_email) is the primary key of both set tables: duplicates impossible
    - Deleting a lesson removes its like/favorite rows (ORM cascade + ON DELETE CASCADE)

Design Decisions:
    - Set tables over a JSON array column: add-to-set becomes INSERT ... ON CONFLICT DO NOTHING,
      safe under concurrent duplicate calls without read-modify-write
    - likes/favorites exposed as email-list properties so records read like documents
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from lessons_api.db.base import Base


class Lesson(Base):
    """Lesson aggregate — owns its like and favorite rows."""
    __tablename__ = "lessons"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    creator_email: Mapped[str] = mapped_column(
        String(320), nullable=False, index=True,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    category: Mapped[str | None] = mapped_column(
        String(80), nullable=True, index=True,
    )
    emotional_tone: Mapped[str | None] = mapped_column(String(80), nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    access_level: Mapped[str] = mapped_column(
        String(20), nullable=False, default="public",
    )
    visibility: Mapped[str] = mapped_column(
        String(20), nullable=False, default="public", index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    like_entries: Mapped[list["LessonLike"]] = relationship(
        "LessonLike", back_populates="lesson",
        cascade="all, delete-orphan", lazy="selectin",
    )
    favorite_entries: Mapped[list["LessonFavorite"]] = relationship(
        "LessonFavorite", back_populates="lesson",
        cascade="all, delete-orphan", lazy="selectin",
    )

    @property
    def likes(self) -> list[str]:
        return [entry.account_email for entry in self.like_entries]

    @property
    def favorites(self) -> list[str]:
        return [entry.account_email for entry in self.favorite_entries]


class LessonLike(Base):
    """One account's like on one lesson."""
    __tablename__ = "lesson_likes"

    lesson_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("lessons.id", ondelete="CASCADE"),
        primary_key=True,
    )
    account_email: Mapped[str] = mapped_column(String(320), primary_key=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    lesson: Mapped["Lesson"] = relationship(
        "Lesson", back_populates="like_entries",
    )


class LessonFavorite(Base):
    """One account's favorite (save) on one lesson."""
    __tablename__ = "lesson_favorites"

    lesson_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("lessons.id", ondelete="CASCADE"),
        primary_key=True,
    )
    account_email: Mapped[str] = mapped_column(String(320), primary_key=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    lesson: Mapped["Lesson"] = relationship(
        "Lesson", back_populates="favorite_entries",
    )
