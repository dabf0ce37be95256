"""Report Routes — abuse report submission.

Invariants:
    - Reporter identity comes from the bearer credential, never from the body
"""

from fastapi import APIRouter, Depends, status

from lessons_api.api.dependencies import get_caller, get_store
from lessons_api.core.domain_types import CallerIdentity
from lessons_api.core.repository_protocols import Store
from lessons_api.schemas.base import MessageResponse
from lessons_api.schemas.report import ReportCreate
from lessons_api.services.handle_reports import ReportHandlers

router = APIRouter(prefix="/api/v1/reports", tags=["reports"])


@router.post(
    "", response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_report(
    body: ReportCreate,
    caller: CallerIdentity = Depends(get_caller),
    store: Store = Depends(get_store),
):
    await ReportHandlers(store).submit_report(caller, body.model_dump())
    return MessageResponse(message="Report submitted")
