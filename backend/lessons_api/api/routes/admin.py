"""Admin Routes — account, lesson and report listings plus aggregate stats.

Invariants:
    - Every route depends on require_admin (identity first, then role=admin)
    - Admin lesson listing ignores visibility but honors the public filters
"""

from fastapi import APIRouter, Depends

from lessons_api.api.dependencies import get_store, require_admin
from lessons_api.api.routes.lessons import lesson_query
from lessons_api.core.domain_types import LessonQuery
from lessons_api.core.repository_protocols import Store
from lessons_api.schemas.account import AccountResponse
from lessons_api.schemas.billing import StatsResponse
from lessons_api.schemas.lesson import LessonResponse
from lessons_api.schemas.report import ReportResponse
from lessons_api.services.handle_admin import AdminHandlers
from lessons_api.services.handle_lessons import LessonHandlers

router = APIRouter(
    prefix="/api/v1/admin", tags=["admin"],
    dependencies=[Depends(require_admin)],
)


@router.get("/users", response_model=list[AccountResponse])
async def list_accounts(store: Store = Depends(get_store)):
    return await AdminHandlers(store).list_accounts()


@router.get("/lessons", response_model=list[LessonResponse])
async def list_all_lessons(
    query: LessonQuery = Depends(lesson_query),
    store: Store = Depends(get_store),
):
    return await LessonHandlers(store).list_all(query)


@router.get("/reports", response_model=list[ReportResponse])
async def list_reports(store: Store = Depends(get_store)):
    return await AdminHandlers(store).list_reports()


@router.get("/stats", response_model=StatsResponse)
async def get_stats(store: Store = Depends(get_store)):
    return await AdminHandlers(store).get_stats()
