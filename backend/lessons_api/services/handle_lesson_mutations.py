"""Lesson Mutation Handlers — update_lesson, delete_lesson, add_like, add_favorite.

Invariants:
    - update/delete: lesson must exist (404) and caller must be creator or admin (403)
    - A lesson that disappears between the policy read and the write surfaces as 404
    - Likes/favorites are add-only and duplicate-free; repeat calls are no-ops

Design Decisions:
    - The premium-authoring gate is NOT re-applied on update (existing contract)
    - Admin role only loaded when the caller is not the creator
"""

import logging

from lessons_api.core.access_policy import (
    check_lesson_ownership, is_lesson_owner,
)
from lessons_api.core.build_records import build_lesson_patch
from lessons_api.core.domain_types import (
    CallerIdentity, LessonId, SetField,
)
from lessons_api.core.errors import ResourceNotFoundError
from lessons_api.core.repository_protocols import Store

logger = logging.getLogger(__name__)


class LessonMutationHandlers:
    """Creator/admin edits plus like/favorite set inserts."""

    def __init__(self, store: Store):
        self.store = store

    async def update_lesson(
        self, lesson_id: LessonId, caller: CallerIdentity, patch: dict,
    ) -> dict:
        lesson = await self._load_owned(lesson_id, caller)
        fields = build_lesson_patch(patch)
        if not fields:
            return lesson
        updated = await self.store.lessons.update(lesson_id, fields)
        if updated is None:
            raise ResourceNotFoundError("Lesson", str(lesson_id))
        logger.info(
            "Lesson updated",
            extra={"caller_email": caller.email, "lesson_id": str(lesson_id)},
        )
        return updated

    async def delete_lesson(
        self, lesson_id: LessonId, caller: CallerIdentity,
    ) -> None:
        await self._load_owned(lesson_id, caller)
        deleted = await self.store.lessons.delete(lesson_id)
        if not deleted:
            raise ResourceNotFoundError("Lesson", str(lesson_id))
        logger.info(
            "Lesson deleted",
            extra={"caller_email": caller.email, "lesson_id": str(lesson_id)},
        )

    async def add_like(self, lesson_id: LessonId, caller: CallerIdentity) -> None:
        await self._add_to_set(lesson_id, SetField.LIKES, caller)

    async def add_favorite(self, lesson_id: LessonId, caller: CallerIdentity) -> None:
        await self._add_to_set(lesson_id, SetField.FAVORITES, caller)

    async def _add_to_set(
        self, lesson_id: LessonId, set_field: SetField, caller: CallerIdentity,
    ) -> None:
        added = await self.store.lessons.add_to_set(
            lesson_id, set_field, caller.email,
        )
        if not added:
            raise ResourceNotFoundError("Lesson", str(lesson_id))

    async def _load_owned(
        self, lesson_id: LessonId, caller: CallerIdentity,
    ) -> dict:
        lesson = await self.store.lessons.get_by_id(lesson_id)
        if lesson is None:
            raise ResourceNotFoundError("Lesson", str(lesson_id))
        account = None
        if not is_lesson_owner(lesson, caller.email):
            account = await self.store.accounts.get_by_email(caller.email)
        check_lesson_ownership(lesson, caller, account)
        return lesson
