"""SQLAlchemy Repositories — the Store implementation behind the boundary Protocols.

Invariants:
    - Every write commits immediately: one durable mutation per operation, no cross-call transaction
    - Records returned as plain dicts (same shape the in-memory test store produces)
    - insert_if_absent / add_to_set use INSERT ... ON CONFLICT DO NOTHING: concurrent
      duplicates collapse at the store
    - get_by_id always re-reads (populate_existing): writes issued as Core statements
      are visible to the same session

Design Decisions:
    - Dialect-specific insert picked at runtime (PostgreSQL in production, SQLite in tests);
      both support ON CONFLICT DO NOTHING and RETURNING
    - "Most saved" sorts on an explicit favorites COUNT subquery, never on a dotted field name
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import delete, func, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from lessons_api.core.domain_types import (
    Email, LessonId, LessonQuery, LessonSort, SetField, Visibility,
)
from lessons_api.core.repository_protocols import Store
from lessons_api.models.account import Account
from lessons_api.models.lesson import Lesson, LessonFavorite, LessonLike
from lessons_api.models.report import Report

logger = logging.getLogger(__name__)

_SET_MODELS = {
    SetField.LIKES: LessonLike,
    SetField.FAVORITES: LessonFavorite,
}


def _dialect_insert(db: AsyncSession):
    """Return the dialect's insert() so on_conflict_do_nothing is available."""
    if db.get_bind().dialect.name == "postgresql":
        return postgresql.insert
    return sqlite.insert


def account_to_dict(account: Account) -> dict:
    return {
        "email": account.email,
        "name": account.name,
        "photo_url": account.photo_url,
        "role": account.role,
        "is_premium": account.is_premium,
        "created_at": account.created_at,
    }


def lesson_to_dict(lesson: Lesson) -> dict:
    return {
        "id": lesson.id,
        "creator_email": lesson.creator_email,
        "title": lesson.title,
        "description": lesson.description,
        "category": lesson.category,
        "emotional_tone": lesson.emotional_tone,
        "image_url": lesson.image_url,
        "access_level": lesson.access_level,
        "visibility": lesson.visibility,
        "likes": lesson.likes,
        "favorites": lesson.favorites,
        "created_at": lesson.created_at,
    }


def report_to_dict(report: Report) -> dict:
    return {
        "id": report.id,
        "email": report.email,
        "lesson_id": report.lesson_id,
        "reason": report.reason,
        "details": report.details,
        "created_at": report.created_at,
    }


class SqlAccountRepository:
    """accounts table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_email(self, email: Email) -> dict | None:
        result = await self.db.execute(
            select(Account).where(Account.email == email),
        )
        account = result.scalar_one_or_none()
        return account_to_dict(account) if account else None

    async def insert_if_absent(self, account: dict) -> bool:
        insert = _dialect_insert(self.db)
        stmt = (
            insert(Account)
            .values(**account)
            .on_conflict_do_nothing(index_elements=["email"])
            .returning(Account.id)
        )
        result = await self.db.execute(stmt)
        inserted = result.scalar_one_or_none() is not None
        await self.db.commit()
        return inserted

    async def list_all(self) -> list[dict]:
        result = await self.db.execute(
            select(Account).order_by(Account.created_at),
        )
        return [account_to_dict(a) for a in result.scalars().all()]

    async def set_premium(self, email: Email) -> bool:
        result = await self.db.execute(
            update(Account)
            .where(Account.email == email)
            .values(is_premium=True),
        )
        await self.db.commit()
        return result.rowcount > 0

    async def count(self) -> int:
        return await self.db.scalar(select(func.count()).select_from(Account))


class SqlLessonRepository:
    """lessons table plus its like/favorite set tables."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, lesson_id: LessonId) -> dict | None:
        result = await self.db.execute(
            select(Lesson)
            .where(Lesson.id == lesson_id)
            .execution_options(populate_existing=True),
        )
        lesson = result.scalar_one_or_none()
        return lesson_to_dict(lesson) if lesson else None

    async def find(self, query: LessonQuery) -> list[dict]:
        stmt = select(Lesson)
        if query.public_only:
            stmt = stmt.where(Lesson.visibility == Visibility.PUBLIC.value)
        if query.category:
            stmt = stmt.where(Lesson.category == query.category)
        if query.emotional_tone:
            stmt = stmt.where(Lesson.emotional_tone == query.emotional_tone)
        if query.keyword:
            stmt = stmt.where(
                Lesson.title.icontains(query.keyword, autoescape=True),
            )

        if query.sort == LessonSort.NEWEST:
            stmt = stmt.order_by(Lesson.created_at.desc())
        elif query.sort == LessonSort.MOST_SAVED:
            saves = (
                select(
                    LessonFavorite.lesson_id,
                    func.count().label("save_count"),
                )
                .group_by(LessonFavorite.lesson_id)
                .subquery()
            )
            stmt = stmt.outerjoin(saves, saves.c.lesson_id == Lesson.id).order_by(
                func.coalesce(saves.c.save_count, 0).desc(),
                Lesson.created_at.desc(),
            )

        result = await self.db.execute(stmt)
        return [lesson_to_dict(lesson) for lesson in result.scalars().all()]

    async def insert(self, lesson: dict) -> dict:
        columns = {
            k: v for k, v in lesson.items() if k not in ("likes", "favorites")
        }
        row = Lesson(**columns, like_entries=[], favorite_entries=[])
        self.db.add(row)
        await self.db.commit()
        return lesson_to_dict(row)

    async def update(self, lesson_id: LessonId, fields: dict) -> dict | None:
        result = await self.db.execute(
            update(Lesson).where(Lesson.id == lesson_id).values(**fields),
        )
        await self.db.commit()
        if result.rowcount == 0:
            return None
        return await self.get_by_id(lesson_id)

    async def delete(self, lesson_id: LessonId) -> bool:
        await self.db.execute(
            delete(LessonLike).where(LessonLike.lesson_id == lesson_id),
        )
        await self.db.execute(
            delete(LessonFavorite).where(LessonFavorite.lesson_id == lesson_id),
        )
        result = await self.db.execute(
            delete(Lesson).where(Lesson.id == lesson_id),
        )
        await self.db.commit()
        return result.rowcount > 0

    async def add_to_set(
        self, lesson_id: LessonId, set_field: SetField, email: Email,
    ) -> bool:
        """Insert email into the lesson's set. False only if the lesson is gone."""
        exists = await self.db.scalar(
            select(Lesson.id).where(Lesson.id == lesson_id),
        )
        if exists is None:
            return False
        insert = _dialect_insert(self.db)
        stmt = (
            insert(_SET_MODELS[set_field])
            .values(
                lesson_id=lesson_id,
                account_email=email,
                created_at=datetime.now(timezone.utc),
            )
            .on_conflict_do_nothing(index_elements=["lesson_id", "account_email"])
        )
        try:
            await self.db.execute(stmt)
            await self.db.commit()
        except IntegrityError:
            # FK violation: lesson deleted between the existence check and the insert
            await self.db.rollback()
            logger.warning(
                f"Lesson vanished during {set_field.value} insert",
                extra={"lesson_id": str(lesson_id)},
            )
            return False
        return True

    async def count(self) -> int:
        return await self.db.scalar(select(func.count()).select_from(Lesson))


class SqlReportRepository:
    """reports table (append-only)."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert(self, report: dict) -> dict:
        row = Report(**report)
        self.db.add(row)
        await self.db.commit()
        return report_to_dict(row)

    async def list_all(self) -> list[dict]:
        result = await self.db.execute(
            select(Report).order_by(Report.created_at.desc()),
        )
        return [report_to_dict(r) for r in result.scalars().all()]

    async def count(self) -> int:
        return await self.db.scalar(select(func.count()).select_from(Report))


def build_store(db: AsyncSession) -> Store:
    """Bundle the three repositories over one request-scoped session."""
    return Store(
        accounts=SqlAccountRepository(db),
        lessons=SqlLessonRepository(db),
        reports=SqlReportRepository(db),
    )
