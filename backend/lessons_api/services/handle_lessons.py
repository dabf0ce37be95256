"""Lesson Read/Create Handlers — list_public, list_all, get_lesson, create_lesson.

Invariants:
    - list_public only ever returns visibility=public lessons
    - get_lesson enforces the premium gate; public lessons need no identity
    - create_lesson enforces the premium-authoring gate and server-assigns ownership fields

Design Decisions:
    - Caller account loaded only when a premium decision needs it (one round trip saved
      on the common public path)
"""

import logging
from dataclasses import replace
from datetime import datetime, timezone

from lessons_api.core.access_policy import (
    check_lesson_visible, check_premium_authoring,
)
from lessons_api.core.build_records import build_lesson_record
from lessons_api.core.domain_types import (
    AccessLevel, CallerIdentity, LessonId, LessonQuery,
)
from lessons_api.core.errors import ResourceNotFoundError
from lessons_api.core.repository_protocols import Store

logger = logging.getLogger(__name__)


class LessonHandlers:
    """Lesson listing, detail and authoring."""

    def __init__(self, store: Store):
        self.store = store

    async def list_public(self, query: LessonQuery) -> list[dict]:
        return await self.store.lessons.find(replace(query, public_only=True))

    async def list_all(self, query: LessonQuery) -> list[dict]:
        """Admin listing — ignores visibility."""
        return await self.store.lessons.find(replace(query, public_only=False))

    async def get_lesson(
        self, lesson_id: LessonId, caller: CallerIdentity | None,
    ) -> dict:
        lesson = await self.store.lessons.get_by_id(lesson_id)
        if lesson is None:
            raise ResourceNotFoundError("Lesson", str(lesson_id))
        account = None
        if (
            lesson["access_level"] == AccessLevel.PREMIUM.value
            and caller is not None
        ):
            account = await self.store.accounts.get_by_email(caller.email)
        check_lesson_visible(lesson, caller, account)
        return lesson

    async def create_lesson(self, caller: CallerIdentity, content: dict) -> dict:
        access_level = AccessLevel(content.get("access_level") or AccessLevel.PUBLIC)
        if access_level == AccessLevel.PREMIUM:
            account = await self.store.accounts.get_by_email(caller.email)
            check_premium_authoring(access_level, caller, account)

        record = build_lesson_record(caller, content, datetime.now(timezone.utc))
        lesson = await self.store.lessons.insert(record)
        logger.info(
            "Lesson created",
            extra={"caller_email": caller.email, "lesson_id": str(lesson["id"])},
        )
        return lesson
