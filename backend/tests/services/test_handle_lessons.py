"""Lesson Handlers — public listing, detail premium gate, authoring gate.

Invariants:
    - list_public never returns private lessons, even when filters match
    - get_lesson: premium lessons only for creator or premium account
    - create_lesson server-assigns creator, likes, favorites, created_at
"""

from uuid import uuid4

import pytest

from lessons_api.core.domain_types import AccessLevel, LessonQuery, LessonSort
from lessons_api.core.errors import PremiumRequiredError, ResourceNotFoundError
from lessons_api.services.handle_lessons import LessonHandlers
from tests.services.fake_store import caller, seed_account, seed_lesson


def _titles(lessons):
    return [lesson["title"] for lesson in lessons]


# ─── list_public ─────────────────────────────────────────────────

async def test_list_public_hides_private_lessons(store):
    seed_lesson(store, "ana@lessons.io", title="Open")
    seed_lesson(store, "ana@lessons.io", title="Secret", visibility="private")
    lessons = await LessonHandlers(store).list_public(LessonQuery())
    assert _titles(lessons) == ["Open"]


async def test_list_public_ignores_public_only_false(store):
    seed_lesson(store, "ana@lessons.io", title="Secret", visibility="private")
    lessons = await LessonHandlers(store).list_public(LessonQuery(public_only=False))
    assert lessons == []


async def test_list_public_includes_premium_lessons(store):
    """Premium gating applies to detail reads, not to the listing."""
    seed_lesson(store, "ana@lessons.io", title="Gold", access_level="premium")
    lessons = await LessonHandlers(store).list_public(LessonQuery())
    assert _titles(lessons) == ["Gold"]


async def test_list_public_filters_combine(store):
    seed_lesson(store, "a@lessons.io", title="Letting go", category="growth",
                emotional_tone="calm")
    seed_lesson(store, "a@lessons.io", title="Letting in", category="growth",
                emotional_tone="sad")
    seed_lesson(store, "a@lessons.io", title="Letting go again", category="career",
                emotional_tone="calm")
    lessons = await LessonHandlers(store).list_public(
        LessonQuery(category="growth", emotional_tone="calm", keyword="LETTING"),
    )
    assert _titles(lessons) == ["Letting go"]


async def test_list_public_newest_first(store):
    seed_lesson(store, "a@lessons.io", title="old", minutes=0)
    seed_lesson(store, "a@lessons.io", title="new", minutes=10)
    seed_lesson(store, "a@lessons.io", title="mid", minutes=5)
    lessons = await LessonHandlers(store).list_public(
        LessonQuery(sort=LessonSort.NEWEST),
    )
    assert _titles(lessons) == ["new", "mid", "old"]


async def test_list_public_most_saved_first(store):
    seed_lesson(store, "a@lessons.io", title="one", favorites=["x@l.io"])
    seed_lesson(store, "a@lessons.io", title="three",
                favorites=["x@l.io", "y@l.io", "z@l.io"])
    seed_lesson(store, "a@lessons.io", title="none")
    lessons = await LessonHandlers(store).list_public(
        LessonQuery(sort=LessonSort.MOST_SAVED),
    )
    assert _titles(lessons) == ["three", "one", "none"]


# ─── list_all ────────────────────────────────────────────────────

async def test_list_all_includes_private_lessons(store):
    seed_lesson(store, "ana@lessons.io", title="Open")
    seed_lesson(store, "ana@lessons.io", title="Secret", visibility="private")
    lessons = await LessonHandlers(store).list_all(LessonQuery())
    assert sorted(_titles(lessons)) == ["Open", "Secret"]


# ─── get_lesson ──────────────────────────────────────────────────

async def test_get_public_lesson_anonymously(store):
    lesson = seed_lesson(store, "ana@lessons.io", title="Open")
    found = await LessonHandlers(store).get_lesson(lesson["id"], None)
    assert found["title"] == "Open"


async def test_get_unknown_lesson_is_404(store):
    with pytest.raises(ResourceNotFoundError):
        await LessonHandlers(store).get_lesson(uuid4(), None)


async def test_get_premium_lesson_anonymously_is_denied(store):
    lesson = seed_lesson(store, "ana@lessons.io", access_level="premium")
    with pytest.raises(PremiumRequiredError):
        await LessonHandlers(store).get_lesson(lesson["id"], None)


async def test_get_premium_lesson_as_free_user_is_denied(store):
    seed_account(store, "bo@lessons.io")
    lesson = seed_lesson(store, "ana@lessons.io", access_level="premium")
    with pytest.raises(PremiumRequiredError):
        await LessonHandlers(store).get_lesson(lesson["id"], caller("bo@lessons.io"))


async def test_get_premium_lesson_as_premium_user(store):
    seed_account(store, "bo@lessons.io", is_premium=True)
    lesson = seed_lesson(store, "ana@lessons.io", access_level="premium")
    found = await LessonHandlers(store).get_lesson(
        lesson["id"], caller("bo@lessons.io"),
    )
    assert found["id"] == lesson["id"]


async def test_get_premium_lesson_as_its_creator(store):
    seed_account(store, "ana@lessons.io")
    lesson = seed_lesson(store, "ana@lessons.io", access_level="premium")
    found = await LessonHandlers(store).get_lesson(
        lesson["id"], caller("ana@lessons.io"),
    )
    assert found["creator_email"] == "ana@lessons.io"


async def test_get_private_lesson_by_id_is_allowed(store):
    """Visibility only governs the listing; detail reads are gated by access level."""
    lesson = seed_lesson(store, "ana@lessons.io", visibility="private")
    found = await LessonHandlers(store).get_lesson(lesson["id"], None)
    assert found["visibility"] == "private"


# ─── create_lesson ───────────────────────────────────────────────

async def test_create_lesson_assigns_server_fields(store):
    lesson = await LessonHandlers(store).create_lesson(
        caller("ana@lessons.io"),
        {"title": "Patience", "creator_email": "mallory@lessons.io",
         "likes": ["mallory@lessons.io"]},
    )
    assert lesson["creator_email"] == "ana@lessons.io"
    assert lesson["likes"] == []
    assert lesson["favorites"] == []
    assert lesson["access_level"] == "public"
    assert lesson["id"] in store.lessons.rows


async def test_create_premium_lesson_requires_premium_account(store):
    seed_account(store, "bo@lessons.io")
    with pytest.raises(PremiumRequiredError):
        await LessonHandlers(store).create_lesson(
            caller("bo@lessons.io"),
            {"title": "Gold", "access_level": AccessLevel.PREMIUM},
        )
    assert store.lessons.rows == {}


async def test_create_premium_lesson_without_account_is_denied(store):
    with pytest.raises(PremiumRequiredError):
        await LessonHandlers(store).create_lesson(
            caller("ghost@lessons.io"),
            {"title": "Gold", "access_level": AccessLevel.PREMIUM},
        )


async def test_create_premium_lesson_as_premium_account(store):
    seed_account(store, "bo@lessons.io", is_premium=True)
    lesson = await LessonHandlers(store).create_lesson(
        caller("bo@lessons.io"),
        {"title": "Gold", "access_level": AccessLevel.PREMIUM},
    )
    assert lesson["access_level"] == "premium"
