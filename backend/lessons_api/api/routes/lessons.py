"""Lesson Routes — public listing, detail, authoring, edits, likes and favorites.

Invariants:
    - GET /lessons is unauthenticated and only ever lists visibility=public
    - GET /lessons/{id} accepts an optional bearer credential for premium access
    - Every mutation requires a verified caller; ownership decided in services
    - Bodies pass through LessonCreate/LessonUpdate: privileged fields never reach services

Design Decisions:
    - PUT kept alongside PATCH: both apply the same partial merge (existing clients use PUT)
    - sortBy parsed leniently: unknown values fall back to store order instead of 400
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from lessons_api.api.dependencies import (
    get_caller, get_optional_caller, get_store,
)
from lessons_api.core.domain_types import (
    CallerIdentity, LessonId, LessonQuery, LessonSort,
)
from lessons_api.core.repository_protocols import Store
from lessons_api.schemas.base import MessageResponse
from lessons_api.schemas.lesson import LessonCreate, LessonResponse, LessonUpdate
from lessons_api.services.handle_lesson_mutations import LessonMutationHandlers
from lessons_api.services.handle_lessons import LessonHandlers

router = APIRouter(prefix="/api/v1/lessons", tags=["lessons"])


def lesson_query(
    category: str | None = Query(None, max_length=80),
    emotional_tone: str | None = Query(None, alias="emotionalTone", max_length=80),
    keyword: str | None = Query(None, max_length=200),
    sort_by: str | None = Query(None, alias="sortBy"),
) -> LessonQuery:
    """Listing filters shared with the admin listing."""
    return LessonQuery(
        category=category or None,
        emotional_tone=emotional_tone or None,
        keyword=keyword or None,
        sort=LessonSort.parse(sort_by),
    )


@router.get("", response_model=list[LessonResponse])
async def list_public_lessons(
    query: LessonQuery = Depends(lesson_query),
    store: Store = Depends(get_store),
):
    return await LessonHandlers(store).list_public(query)


@router.get("/{lesson_id}", response_model=LessonResponse)
async def get_lesson(
    lesson_id: UUID,
    caller: CallerIdentity | None = Depends(get_optional_caller),
    store: Store = Depends(get_store),
):
    return await LessonHandlers(store).get_lesson(LessonId(lesson_id), caller)


@router.post(
    "", response_model=LessonResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_lesson(
    body: LessonCreate,
    caller: CallerIdentity = Depends(get_caller),
    store: Store = Depends(get_store),
):
    return await LessonHandlers(store).create_lesson(caller, body.model_dump())


@router.patch("/{lesson_id}", response_model=LessonResponse)
@router.put("/{lesson_id}", response_model=LessonResponse)
async def update_lesson(
    lesson_id: UUID,
    body: LessonUpdate,
    caller: CallerIdentity = Depends(get_caller),
    store: Store = Depends(get_store),
):
    """Partial merge of the supplied content fields."""
    return await LessonMutationHandlers(store).update_lesson(
        LessonId(lesson_id), caller, body.model_dump(exclude_unset=True),
    )


@router.delete("/{lesson_id}", response_model=MessageResponse)
async def delete_lesson(
    lesson_id: UUID,
    caller: CallerIdentity = Depends(get_caller),
    store: Store = Depends(get_store),
):
    await LessonMutationHandlers(store).delete_lesson(LessonId(lesson_id), caller)
    return MessageResponse(message="Lesson deleted")


@router.post("/{lesson_id}/like", response_model=MessageResponse)
async def like_lesson(
    lesson_id: UUID,
    caller: CallerIdentity = Depends(get_caller),
    store: Store = Depends(get_store),
):
    await LessonMutationHandlers(store).add_like(LessonId(lesson_id), caller)
    return MessageResponse(message="Liked")


@router.post("/{lesson_id}/favorite", response_model=MessageResponse)
async def favorite_lesson(
    lesson_id: UUID,
    caller: CallerIdentity = Depends(get_caller),
    store: Store = Depends(get_store),
):
    await LessonMutationHandlers(store).add_favorite(LessonId(lesson_id), caller)
    return MessageResponse(message="Favorited")
