"""Lesson Schemas — authoring payloads and lesson views.

Invariants:
    - LessonCreate/LessonUpdate expose content fields only: creatorEmail, likes, favorites
      and createdAt can never be set by a client
    - LessonUpdate is partial: only fields present in the body are applied
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from lessons_api.core.domain_types import AccessLevel, Visibility
from lessons_api.schemas.base import CamelModel


class LessonCreate(CamelModel):
    """Lesson authoring payload."""
    title: str = Field(min_length=1, max_length=200)
    description: str = Field("", max_length=20_000)
    category: str | None = Field(None, max_length=80)
    emotional_tone: str | None = Field(None, max_length=80)
    image_url: str | None = Field(None, max_length=2048)
    access_level: AccessLevel = AccessLevel.PUBLIC
    visibility: Visibility = Visibility.PUBLIC

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title cannot be empty or whitespace")
        return v


class LessonUpdate(CamelModel):
    """Partial lesson edit."""
    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=20_000)
    category: str | None = Field(None, max_length=80)
    emotional_tone: str | None = Field(None, max_length=80)
    image_url: str | None = Field(None, max_length=2048)
    access_level: AccessLevel | None = None
    visibility: Visibility | None = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("title cannot be empty or whitespace")
        return v


class LessonResponse(CamelModel):
    id: UUID
    creator_email: str
    title: str
    description: str
    category: str | None = None
    emotional_tone: str | None = None
    image_url: str | None = None
    access_level: AccessLevel
    visibility: Visibility
    likes: list[str]
    favorites: list[str]
    created_at: datetime
